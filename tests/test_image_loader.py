"""
Unit tests for image_loader module.

Tests format detection and image decoding.
"""

from pathlib import Path

import pytest
from PIL import Image

from PT_Libs.exceptions import ImageLoadError, PortfolioToolsError, UnsupportedImageError
from PT_Libs.ImageLib.image_loader import (
    get_supported_image_formats,
    is_large_file,
    is_supported_format,
    load_image,
)


class TestFormats:
    """Tests for supported format helpers."""

    def test_common_formats_supported(self):
        formats = get_supported_image_formats()

        for extension in [".png", ".jpg", ".jpeg", ".bmp", ".webp"]:
            assert extension in formats
        assert formats == sorted(formats)

    def test_extension_check_is_case_insensitive(self):
        assert is_supported_format(Path("photo.JPG"))
        assert not is_supported_format(Path("notes.txt"))
        assert not is_supported_format(Path("no_extension"))

    def test_small_file_is_not_large(self, temp_mask_dir):
        path = temp_mask_dir / "tiny.png"
        Image.new("RGB", (2, 2)).save(path)

        assert not is_large_file(path)
        assert not is_large_file(temp_mask_dir / "missing.png")


class TestLoadImage:
    """Tests for load_image."""

    def test_loads_as_rgba(self, temp_mask_dir):
        path = temp_mask_dir / "sample.png"
        Image.new("RGB", (30, 20), (10, 20, 30)).save(path)

        image = load_image(path)

        assert image.mode == "RGBA"
        assert image.size == (30, 20)
        assert image.getpixel((0, 0)) == (10, 20, 30, 255)

    def test_unsupported_extension(self, temp_mask_dir):
        path = temp_mask_dir / "notes.txt"
        path.write_text("hello")

        with pytest.raises(UnsupportedImageError):
            load_image(path)

    def test_missing_file(self, temp_mask_dir):
        with pytest.raises(ImageLoadError, match="not found"):
            load_image(temp_mask_dir / "missing.png")

    def test_corrupt_file(self, temp_mask_dir):
        path = temp_mask_dir / "broken.png"
        path.write_bytes(b"definitely not a png")

        with pytest.raises(ImageLoadError):
            load_image(path)

    def test_errors_share_base_class(self, temp_mask_dir):
        with pytest.raises(PortfolioToolsError):
            load_image(temp_mask_dir / "image.xyz")
