"""
Display formats for a single picked color.

The color picker shows the current color as hex, rgb() or hsl() text. HSL
components are rounded half up to whole degrees and percentages.

Functions:
    rgb_to_hsl: Convert an RGB color to rounded HSL components
    format_color: Render a color in one of the supported formats
"""

import math
from typing import NamedTuple, Sequence

from PT_Libs.constants import COLOR_FORMATS, COLOR_FORMAT_HEX, COLOR_FORMAT_HSL, COLOR_FORMAT_RGB
from PT_Libs.MaskLib.color_range import rgb_to_hex


class HslColor(NamedTuple):
    h: int
    s: int
    l: int


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def rgb_to_hsl(color: Sequence[int]) -> HslColor:
    """
    Convert an RGB color to HSL.

    Args:
        color: RGB (or RGBA) color; alpha is ignored

    Returns:
        HslColor with hue in [0, 360] degrees and saturation and lightness
        in [0, 100] percent
    """
    r, g, b = (channel / 255 for channel in color[:3])
    high = max(r, g, b)
    low = min(r, g, b)
    lightness = (high + low) / 2

    if high == low:
        hue = saturation = 0.0
    else:
        delta = high - low
        saturation = delta / (2 - high - low) if lightness > 0.5 else delta / (high + low)
        if high == r:
            hue = (g - b) / delta + (6 if g < b else 0)
        elif high == g:
            hue = (b - r) / delta + 2
        else:
            hue = (r - g) / delta + 4
        hue /= 6

    return HslColor(
        _round_half_up(hue * 360),
        _round_half_up(saturation * 100),
        _round_half_up(lightness * 100),
    )


def format_color(color: Sequence[int], color_format: str = COLOR_FORMAT_HEX) -> str:
    """
    Render a color as '#rrggbb', 'rgb(r, g, b)' or 'hsl(h, s%, l%)'.

    Raises:
        ValueError: If color_format is not one of COLOR_FORMATS
    """
    if color_format == COLOR_FORMAT_HEX:
        return rgb_to_hex(color)
    if color_format == COLOR_FORMAT_RGB:
        r, g, b = color[:3]
        return f"rgb({r}, {g}, {b})"
    if color_format == COLOR_FORMAT_HSL:
        h, s, l = rgb_to_hsl(color)
        return f"hsl({h}, {s}%, {l}%)"
    raise ValueError(f"Unsupported color format: {color_format}. Supported: {', '.join(COLOR_FORMATS)}")
