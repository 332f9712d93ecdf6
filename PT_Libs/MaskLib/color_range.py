"""
RGB color ranges for the color-range mask tools.

A ColorRange is an axis-aligned box in RGB space made of one closed
[min, max] interval per channel. Masks derive their range from the colors the
user picked and test pixels for membership against it.

Functions:
    full_range: The [0, 255] box that matches every color
    tight_range: Small box around a single color
    bounding_range: Smallest box containing a set of colors
    contains: Membership test for a pixel
    rgb_to_hex: Convert an RGB color to a '#rrggbb' string
    hex_to_rgb: Parse a '#rrggbb' string into an RGB color
"""

import re
from dataclasses import dataclass, replace
from typing import Any, Dict, Iterable, NamedTuple, Sequence

from PT_Libs.constants import (
    BOUND_MAX,
    BOUND_MIN,
    CHANNELS,
    CHANNEL_MAX,
    CHANNEL_MIN,
    DEFAULT_TIGHT_TOLERANCE,
)

HEX_DIGITS_PATTERN = re.compile(r"[0-9a-fA-F]{6}")


class Color(NamedTuple):
    r: int
    g: int
    b: int


def clamp_channel(value: float) -> int:
    return int(max(CHANNEL_MIN, min(CHANNEL_MAX, round(value))))


@dataclass(frozen=True)
class ChannelRange:
    """Closed interval of one color channel."""

    min: int = CHANNEL_MIN
    max: int = CHANNEL_MAX

    def __contains__(self, value: int) -> bool:
        return self.min <= value <= self.max

    def to_dict(self) -> Dict[str, int]:
        return {BOUND_MIN: self.min, BOUND_MAX: self.max}


@dataclass(frozen=True)
class ColorRange:
    """Three independent channel intervals (R, G, B).

    Every constructor in this module keeps ``min <= max`` inside [0, 255]
    for each channel.
    """

    r: ChannelRange = ChannelRange()
    g: ChannelRange = ChannelRange()
    b: ChannelRange = ChannelRange()

    def channel(self, name: str) -> ChannelRange:
        if name not in CHANNELS:
            raise ValueError(f"Unknown channel: {name}")
        return getattr(self, name)

    def is_full(self) -> bool:
        return self == full_range()

    def with_bound(self, channel: str, bound: str, value: float) -> "ColorRange":
        """
        Return a copy with one slider bound moved.

        The value is clamped to [0, 255]. When the new bound would cross the
        opposite one, the opposite bound follows it so the interval stays valid.

        Args:
            channel: 'r', 'g' or 'b'
            bound: 'min' or 'max'
            value: New bound value

        Returns:
            A new ColorRange

        Raises:
            ValueError: If channel or bound is unknown
        """
        current = self.channel(channel)
        clamped = clamp_channel(value)

        if bound == BOUND_MIN:
            updated = ChannelRange(clamped, max(clamped, current.max))
        elif bound == BOUND_MAX:
            updated = ChannelRange(min(clamped, current.min), clamped)
        else:
            raise ValueError(f"Unknown bound: {bound}")

        return replace(self, **{channel: updated})

    def to_dict(self) -> Dict[str, Dict[str, int]]:
        return {name: self.channel(name).to_dict() for name in CHANNELS}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ColorRange":
        """
        Build a range from the ``{r: {min, max}, g: ..., b: ...}`` form.

        Raises:
            ValueError: If a channel is missing, a value is not an integer in
                [0, 255] or a minimum exceeds its maximum
        """
        if not isinstance(data, dict):
            raise ValueError(f"Range must be an object, got {type(data).__name__}")

        channels = {}
        for name in CHANNELS:
            bounds = data.get(name)
            if not isinstance(bounds, dict):
                raise ValueError(f"Range is missing channel '{name}'")

            values = []
            for bound in (BOUND_MIN, BOUND_MAX):
                value = bounds.get(bound)
                if isinstance(value, bool) or not isinstance(value, int):
                    raise ValueError(f"Range {name}.{bound} must be an integer, got {value!r}")
                if not CHANNEL_MIN <= value <= CHANNEL_MAX:
                    raise ValueError(f"Range {name}.{bound} out of bounds: {value}")
                values.append(value)

            low, high = values
            if low > high:
                raise ValueError(f"Range {name} has min {low} greater than max {high}")
            channels[name] = ChannelRange(low, high)

        return cls(**channels)


def full_range() -> ColorRange:
    return ColorRange()


def tight_range(color: Sequence[int], tolerance: int = DEFAULT_TIGHT_TOLERANCE) -> ColorRange:
    """
    Create a small box around a single color.

    Used for the first color of a mask so it matches a neighborhood of the
    picked pixel rather than the exact value.

    Args:
        color: RGB (or RGBA) color; alpha is ignored
        tolerance: Distance added on both sides of each channel

    Returns:
        ColorRange of [c - tolerance, c + tolerance] clamped to [0, 255]
    """
    tolerance = max(0, int(tolerance))
    r, g, b = color[:3]
    return ColorRange(
        r=ChannelRange(clamp_channel(r - tolerance), clamp_channel(r + tolerance)),
        g=ChannelRange(clamp_channel(g - tolerance), clamp_channel(g + tolerance)),
        b=ChannelRange(clamp_channel(b - tolerance), clamp_channel(b + tolerance)),
    )


def bounding_range(colors: Iterable[Sequence[int]]) -> ColorRange:
    """
    Compute the per-channel min/max box over a set of colors.

    Args:
        colors: Non-empty iterable of RGB (or RGBA) colors

    Returns:
        The smallest ColorRange containing every color

    Raises:
        ValueError: If colors is empty
    """
    rgb = [tuple(color[:3]) for color in colors]
    if not rgb:
        raise ValueError("bounding_range requires at least one color")

    reds, greens, blues = zip(*rgb)
    return ColorRange(
        r=ChannelRange(min(reds), max(reds)),
        g=ChannelRange(min(greens), max(greens)),
        b=ChannelRange(min(blues), max(blues)),
    )


def contains(pixel: Sequence[int], color_range: ColorRange) -> bool:
    """Check that all three channels of a pixel fall inside the range."""
    r, g, b = pixel[:3]
    return r in color_range.r and g in color_range.g and b in color_range.b


def rgb_to_hex(color: Sequence[int]) -> str:
    r, g, b = (clamp_channel(value) for value in color[:3])
    return f"#{r:02x}{g:02x}{b:02x}"


def hex_to_rgb(hex_string: str) -> Color:
    """
    Parse a hex color string.

    Args:
        hex_string: '#rrggbb' or 'rrggbb'

    Returns:
        The parsed Color

    Raises:
        ValueError: If the string is not six hex digits
    """
    if not isinstance(hex_string, str):
        raise ValueError(f"Hex color must be a string, got {type(hex_string).__name__}")

    digits = hex_string.strip()
    if digits.startswith("#"):
        digits = digits[1:]
    if not HEX_DIGITS_PATTERN.fullmatch(digits):
        raise ValueError(f"Invalid hex color: {hex_string!r}")

    return Color(int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))
