"""
Combination rule for positive and negative masks.

A pixel is included when at least one positive mask contains it and no
negative mask does. Positives are checked first; a pixel no positive mask
claims is excluded without looking at the negatives.

Functions:
    evaluate: Decide one pixel
    evaluate_array: Decide every pixel of an (H, W, 3+) array at once
"""

from typing import Any, Sequence

import numpy as np

from PT_Libs.MaskLib.color_range import ColorRange, contains
from PT_Libs.MaskLib.mask_models import MaskSet


def evaluate(pixel: Sequence[int], mask_set: MaskSet) -> bool:
    """
    Decide whether a pixel belongs to the combined mask.

    Args:
        pixel: RGB or RGBA color; alpha is ignored
        mask_set: Masks to combine

    Returns:
        True if a positive mask contains the pixel and no negative mask does
    """
    if not any(contains(pixel, mask.range) for mask in mask_set.positives()):
        return False

    for mask in mask_set.negatives():
        if contains(pixel, mask.range):
            return False

    return True


def _in_range(rgb: Any, color_range: ColorRange) -> Any:
    r = rgb[..., 0]
    g = rgb[..., 1]
    b = rgb[..., 2]
    return (
        (r >= color_range.r.min) & (r <= color_range.r.max)
        & (g >= color_range.g.min) & (g <= color_range.g.max)
        & (b >= color_range.b.min) & (b <= color_range.b.max)
    )


def evaluate_array(pixels: Any, mask_set: MaskSet) -> Any:
    """
    Vectorized form of evaluate().

    Args:
        pixels: uint8 array shaped (..., C) with C >= 3; channels after the
            third are ignored
        mask_set: Masks to combine

    Returns:
        Boolean array with the leading shape of pixels
    """
    rgb = np.asarray(pixels)
    if rgb.ndim < 1 or rgb.shape[-1] < 3:
        raise ValueError(f"Expected pixels shaped (..., 3) or (..., 4), got {rgb.shape}")

    included = np.zeros(rgb.shape[:-1], dtype=bool)
    for mask in mask_set.positives():
        included |= _in_range(rgb, mask.range)

    if not included.any():
        return included

    for mask in mask_set.negatives():
        included &= ~_in_range(rgb, mask.range)

    return included
