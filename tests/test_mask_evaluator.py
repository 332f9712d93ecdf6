"""
Tests for the positive/negative mask combination rule.

Tests cover:
- Single positive masks
- Negative vetoes
- Multiple positive masks
- Agreement between the scalar and array forms
"""

import unittest

import numpy as np

from PT_Libs.MaskLib.color_range import ChannelRange, ColorRange
from PT_Libs.MaskLib.mask_evaluator import evaluate, evaluate_array
from PT_Libs.MaskLib.mask_models import Mask, MaskSet


def _gray_range(low, high):
    channel = ChannelRange(low, high)
    return ColorRange(channel, channel, channel)


class TestEvaluate(unittest.TestCase):
    """Test the scalar evaluate function."""

    def test_red_pick_includes_nearby_red(self):
        """Picking pure red should match colors inside the tolerance box."""
        mask_set = MaskSet()
        mask_set.add_color((255, 0, 0))

        self.assertTrue(evaluate((255, 3, 2), mask_set))
        self.assertFalse(evaluate((255, 10, 2), mask_set))

    def test_negative_mask_vetoes(self):
        mask_set = MaskSet([
            Mask(id=1, name="All"),
            Mask(id=2, name="Gray", type="negative", range=_gray_range(100, 150)),
        ])

        self.assertFalse(evaluate((120, 120, 120), mask_set))
        self.assertTrue(evaluate((0, 0, 0), mask_set))

    def test_pixel_outside_all_positives_is_excluded(self):
        mask_set = MaskSet([
            Mask(id=1, name="Dark", range=_gray_range(0, 10)),
            Mask(id=2, name="Gray", type="negative", range=_gray_range(100, 150)),
        ])

        self.assertFalse(evaluate((200, 200, 200), mask_set))

    def test_any_positive_mask_is_enough(self):
        mask_set = MaskSet([
            Mask(id=1, name="Dark", range=_gray_range(0, 10)),
            Mask(id=2, name="Light", range=_gray_range(240, 255)),
        ])

        self.assertTrue(evaluate((5, 5, 5), mask_set))
        self.assertTrue(evaluate((250, 250, 250), mask_set))
        self.assertFalse(evaluate((128, 128, 128), mask_set))

    def test_empty_positive_mask_matches_everything(self):
        self.assertTrue(evaluate((17, 200, 3), MaskSet()))

    def test_alpha_is_ignored(self):
        mask_set = MaskSet()
        mask_set.add_color((255, 0, 0))

        self.assertTrue(evaluate((255, 0, 0, 0), mask_set))


class TestEvaluateArray(unittest.TestCase):
    """Test the vectorized evaluate_array function."""

    def setUp(self):
        self.mask_set = MaskSet([
            Mask(id=1, name="Reds", range=ColorRange(r=ChannelRange(128, 255))),
            Mask(id=2, name="Gray", type="negative", range=_gray_range(140, 160)),
            Mask(id=3, name="Blues", range=ColorRange(b=ChannelRange(200, 255))),
        ])
        rng = np.random.default_rng(1234)
        self.pixels = rng.integers(0, 256, size=(40, 30, 4), dtype=np.uint8)
        self.pixels[0, 0] = (150, 150, 150, 255)

    def test_matches_scalar_form(self):
        result = evaluate_array(self.pixels, self.mask_set)

        self.assertEqual(result.shape, (40, 30))
        self.assertEqual(result.dtype, bool)
        for y in range(self.pixels.shape[0]):
            for x in range(self.pixels.shape[1]):
                self.assertEqual(
                    bool(result[y, x]),
                    evaluate(tuple(int(v) for v in self.pixels[y, x]), self.mask_set),
                )

    def test_negative_veto_in_array(self):
        self.assertFalse(evaluate_array(self.pixels, self.mask_set)[0, 0])

    def test_accepts_rgb_arrays(self):
        rgb = np.array([[[255, 0, 0], [0, 0, 0]]], dtype=np.uint8)

        result = evaluate_array(rgb, self.mask_set)

        self.assertEqual(result.tolist(), [[True, False]])

    def test_rejects_arrays_without_color_channels(self):
        with self.assertRaises(ValueError):
            evaluate_array(np.zeros((4, 4, 2), dtype=np.uint8), self.mask_set)

    def test_no_positive_match_returns_all_false(self):
        dark = np.zeros((5, 5, 3), dtype=np.uint8)

        self.assertFalse(evaluate_array(dark, self.mask_set).any())


if __name__ == "__main__":
    unittest.main()
