"""
ImageLib - Image loading and view transforms

Decoding of image files into RGBA pixel buffers and the zoom/pan transform
used to map canvas clicks back to image coordinates.
"""

from PT_Libs.ImageLib.image_loader import (
    get_supported_image_formats,
    is_supported_format,
    load_image,
)
from PT_Libs.ImageLib.view_transform import ViewTransform, is_inside_image

__all__ = [
    "get_supported_image_formats",
    "is_supported_format",
    "load_image",
    "ViewTransform",
    "is_inside_image",
]
