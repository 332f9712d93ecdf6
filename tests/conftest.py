"""
Pytest configuration and shared fixtures for the mask tool tests.

This module provides shared test fixtures and configuration
used across multiple test modules.
"""

import pytest
from PIL import Image

from PT_Libs.MaskLib.mask_models import Mask, MaskSet
from PT_Libs.MaskLib.color_range import ChannelRange, ColorRange


@pytest.fixture
def temp_mask_dir(tmp_path):
    """
    Provide a temporary directory for mask and image files.

    Args:
        tmp_path: Pytest's built-in temporary directory fixture

    Returns:
        Path object pointing to a temporary directory
    """
    return tmp_path


@pytest.fixture
def split_image():
    """
    Provide a 100x100 RGBA image: red left half, blue right half.

    Returns:
        PIL Image in RGBA mode
    """
    image = Image.new("RGBA", (100, 100), (0, 0, 255, 255))
    image.paste((255, 0, 0, 255), (0, 0, 50, 100))
    return image


@pytest.fixture
def red_mask_set():
    """
    Provide a MaskSet whose only positive mask matches pure red.

    Returns:
        MaskSet with one positive mask picked from (255, 0, 0)
    """
    mask_set = MaskSet()
    mask_set.add_color((255, 0, 0))
    return mask_set


@pytest.fixture
def gray_veto_mask_set():
    """
    Provide a full-range positive mask with a [100, 150] gray negative mask.

    Returns:
        MaskSet of two masks
    """
    gray = ChannelRange(100, 150)
    return MaskSet([
        Mask(id=1, name="Everything"),
        Mask(id=2, name="Gray", type="negative", range=ColorRange(gray, gray, gray)),
    ])
