"""
MaskLib - Color-range masks and polygon coverage

This module holds the mask engine: RGB color ranges, positive/negative
masks, the combination rule, live-preview rasterization, polygon coverage
analysis, the mask file format and the color display formats.
"""

from PT_Libs.MaskLib.color_range import (
    Color,
    ColorRange,
    bounding_range,
    contains,
    full_range,
    hex_to_rgb,
    rgb_to_hex,
    tight_range,
)
from PT_Libs.MaskLib.color_formats import HslColor, format_color, rgb_to_hsl
from PT_Libs.MaskLib.mask_models import Mask, MaskSet
from PT_Libs.MaskLib.mask_evaluator import evaluate, evaluate_array
from PT_Libs.MaskLib.mask_rasterizer import MaskRasterizer, RasterizedMask, RasterizerConfig
from PT_Libs.MaskLib.polygon_coverage import CoverageResult, PolygonCoverageAnalyzer
from PT_Libs.MaskLib.mask_io import (
    export_masks_json,
    import_masks_json,
    load_masks_file,
    save_masks_file,
)

__all__ = [
    "Color",
    "ColorRange",
    "bounding_range",
    "contains",
    "full_range",
    "hex_to_rgb",
    "rgb_to_hex",
    "tight_range",
    "HslColor",
    "format_color",
    "rgb_to_hsl",
    "Mask",
    "MaskSet",
    "evaluate",
    "evaluate_array",
    "MaskRasterizer",
    "RasterizedMask",
    "RasterizerConfig",
    "CoverageResult",
    "PolygonCoverageAnalyzer",
    "export_masks_json",
    "import_masks_json",
    "load_masks_file",
    "save_masks_file",
]
