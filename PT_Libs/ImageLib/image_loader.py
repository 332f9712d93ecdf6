"""
Image loading for the mask tools.

Decodes an image file into an RGBA Pillow image, the pixel buffer every
other part of the tools reads from.

Functions:
    get_supported_image_formats: List supported file extensions
    is_supported_format: Check a path's extension
    load_image: Decode a file into an RGBA image
"""

import logging
from pathlib import Path
from typing import Any, List

from PT_Libs.constants import LARGE_IMAGE_BYTES, SUPPORTED_STANDARD_IMAGES
from PT_Libs.exceptions import ImageLoadError, UnsupportedImageError
from PT_Libs.pillow_compat import Image

logger = logging.getLogger(__name__)


def get_supported_image_formats() -> List[str]:
    """
    Get list of supported standard image formats.

    Returns:
        List of file extensions (e.g., ['.bmp', '.gif', ...])
    """
    return sorted(SUPPORTED_STANDARD_IMAGES)


def is_supported_format(file_path: Path) -> bool:
    return Path(file_path).suffix.lower() in SUPPORTED_STANDARD_IMAGES


def is_large_file(file_path: Path) -> bool:
    try:
        return Path(file_path).stat().st_size > LARGE_IMAGE_BYTES
    except OSError:
        return False


def load_image(file_path: Path) -> Any:
    """
    Load an image file as RGBA.

    Args:
        file_path: Path to the image file

    Returns:
        PIL Image in RGBA mode, fully decoded

    Raises:
        UnsupportedImageError: If the extension is not supported
        ImageLoadError: If the file is missing or cannot be decoded
    """
    file_path = Path(file_path)

    if not is_supported_format(file_path):
        raise UnsupportedImageError(
            f"Unsupported image format: {file_path.suffix or file_path.name}. "
            f"Supported: {', '.join(get_supported_image_formats())}"
        )

    if not file_path.is_file():
        raise ImageLoadError(f"Image file not found: {file_path}")

    try:
        with Image.open(file_path) as opened:
            image = opened.convert("RGBA")
    except (OSError, ValueError, Image.DecompressionBombError) as exc:
        raise ImageLoadError(f"Error loading image {file_path.name}: {exc}") from exc

    logger.info(f"Image loaded: {image.width}x{image.height} from {file_path.name}")
    return image
