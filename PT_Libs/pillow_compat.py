"""
Compatibility wrapper that loads the Pillow modules used by the tools.

Pillow provides the `PIL` namespace. This module loads the Pillow-provided
modules via importlib and re-exports the symbols the mask engine needs:
`Image` (decoding, resampling) and `ImageDraw` (error mask labels).
"""
from importlib import import_module
from types import ModuleType
from typing import Optional


def _import(name: str) -> Optional[ModuleType]:
    try:
        return import_module(name)
    except ImportError:
        return None


_pil_image = _import("PIL.Image")
_pil_imagedraw = _import("PIL.ImageDraw")

if _pil_image is None or _pil_imagedraw is None:
    raise ImportError("pillow (PIL) is required: install with 'pip install Pillow'")

Image = _pil_image
ImageDraw = _pil_imagedraw
Resampling = _pil_image.Resampling
