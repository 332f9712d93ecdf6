"""
Unit tests for color_range module.

Tests range construction, membership and hex conversion.
"""

import pytest

from PT_Libs.MaskLib.color_range import (
    ChannelRange,
    Color,
    ColorRange,
    bounding_range,
    contains,
    full_range,
    hex_to_rgb,
    rgb_to_hex,
    tight_range,
)


class TestTightRange:
    """Tests for tight_range function."""

    def test_pure_red_is_clamped(self):
        """Should clamp the tolerance box to [0, 255]."""
        color_range = tight_range((255, 0, 0))

        assert color_range.r == ChannelRange(250, 255)
        assert color_range.g == ChannelRange(0, 5)
        assert color_range.b == ChannelRange(0, 5)

    def test_mid_color_gets_symmetric_box(self):
        color_range = tight_range((100, 120, 140))

        assert color_range.to_dict() == {
            "r": {"min": 95, "max": 105},
            "g": {"min": 115, "max": 125},
            "b": {"min": 135, "max": 145},
        }

    def test_custom_tolerance(self):
        assert tight_range((10, 10, 10), tolerance=0) == ColorRange(
            ChannelRange(10, 10), ChannelRange(10, 10), ChannelRange(10, 10)
        )

    def test_ignores_alpha(self):
        assert tight_range((255, 0, 0, 17)) == tight_range((255, 0, 0))


class TestBoundingRange:
    """Tests for bounding_range function."""

    def test_per_channel_min_max(self):
        color_range = bounding_range([(10, 200, 30), (50, 100, 30), (20, 150, 90)])

        assert color_range.r == ChannelRange(10, 50)
        assert color_range.g == ChannelRange(100, 200)
        assert color_range.b == ChannelRange(30, 90)

    def test_single_color_is_a_point(self):
        assert bounding_range([(1, 2, 3)]).to_dict()["g"] == {"min": 2, "max": 2}

    def test_empty_raises(self):
        with pytest.raises(ValueError):
            bounding_range([])


class TestContains:
    """Tests for contains function."""

    def test_bounds_are_inclusive(self):
        color_range = tight_range((255, 0, 0))

        assert contains((250, 5, 0), color_range)
        assert contains((255, 3, 2), color_range)

    def test_one_channel_outside_excludes(self):
        assert not contains((255, 10, 2), tight_range((255, 0, 0)))

    def test_full_range_contains_everything(self):
        color_range = full_range()

        assert color_range.is_full()
        for pixel in [(0, 0, 0), (255, 255, 255), (12, 200, 99, 0)]:
            assert contains(pixel, color_range)


class TestWithBound:
    """Tests for ColorRange.with_bound."""

    def test_moves_one_bound(self):
        updated = full_range().with_bound("g", "min", 40)

        assert updated.g == ChannelRange(40, 255)
        assert updated.r == ChannelRange(0, 255)

    def test_crossing_min_pushes_max(self):
        start = ColorRange(r=ChannelRange(10, 20))

        assert start.with_bound("r", "min", 30).r == ChannelRange(30, 30)

    def test_crossing_max_pushes_min(self):
        start = ColorRange(b=ChannelRange(100, 200))

        assert start.with_bound("b", "max", 50).b == ChannelRange(50, 50)

    def test_value_is_clamped(self):
        assert full_range().with_bound("r", "max", 300).r.max == 255
        assert full_range().with_bound("r", "min", -20).r.min == 0

    def test_unknown_channel_or_bound(self):
        with pytest.raises(ValueError):
            full_range().with_bound("a", "min", 0)
        with pytest.raises(ValueError):
            full_range().with_bound("r", "middle", 0)

    def test_original_is_unchanged(self):
        original = full_range()
        original.with_bound("r", "min", 100)

        assert original.is_full()


class TestFromDict:
    """Tests for ColorRange.from_dict."""

    def test_round_trips_to_dict(self):
        color_range = tight_range((30, 60, 90))

        assert ColorRange.from_dict(color_range.to_dict()) == color_range

    @pytest.mark.parametrize(
        "data",
        [
            None,
            [],
            {"r": {"min": 0, "max": 255}, "g": {"min": 0, "max": 255}},
            {"r": {"min": 0, "max": 256}, "g": {"min": 0, "max": 255}, "b": {"min": 0, "max": 255}},
            {"r": {"min": 9, "max": 3}, "g": {"min": 0, "max": 255}, "b": {"min": 0, "max": 255}},
            {"r": {"min": "0", "max": 255}, "g": {"min": 0, "max": 255}, "b": {"min": 0, "max": 255}},
            {"r": {"min": True, "max": 255}, "g": {"min": 0, "max": 255}, "b": {"min": 0, "max": 255}},
        ],
    )
    def test_rejects_malformed_ranges(self, data):
        with pytest.raises(ValueError):
            ColorRange.from_dict(data)


class TestHexConversion:
    """Tests for rgb_to_hex and hex_to_rgb."""

    def test_rgb_to_hex(self):
        assert rgb_to_hex((255, 0, 16)) == "#ff0010"
        assert rgb_to_hex(Color(1, 2, 3)) == "#010203"

    def test_hex_to_rgb(self):
        assert hex_to_rgb("#FF0010") == Color(255, 0, 16)
        assert hex_to_rgb("0a0b0c") == Color(10, 11, 12)

    @pytest.mark.parametrize(
        "value", ["#fff", "#gg0000", "", 123, None, "#-10000", "+f0000", "##ff0000", "#ff 000", "#ff0000\n00"]
    )
    def test_hex_to_rgb_rejects_bad_input(self, value):
        with pytest.raises(ValueError):
            hex_to_rgb(value)
