"""
Tests for Mask and MaskSet.

Tests cover:
- Color picking and range derivation
- Manual range edits
- Adding, switching and deleting masks
- The permanent first mask
- Cache keys
"""

import pytest

from PT_Libs.exceptions import PermanentMaskError
from PT_Libs.MaskLib.color_range import ChannelRange, Color, bounding_range, full_range, tight_range
from PT_Libs.MaskLib.mask_models import Mask, MaskSet, default_mask_name


class TestMask:
    """Tests for a single Mask."""

    def test_new_mask_matches_everything(self):
        mask = Mask(id=1, name="Positive Mask 1")

        assert mask.colors == []
        assert mask.range.is_full()
        assert mask.is_positive

    def test_rejects_unknown_type(self):
        with pytest.raises(ValueError):
            Mask(id=1, name="Bad", type="neutral")

    def test_first_color_gives_tight_range(self):
        mask = Mask(id=1, name="m")

        assert mask.add_color((255, 0, 0)) is True
        assert mask.range == tight_range((255, 0, 0))

    def test_second_color_gives_bounding_range(self):
        mask = Mask(id=1, name="m")
        mask.add_color((10, 20, 30))
        mask.add_color((40, 10, 35))

        assert mask.range == bounding_range([(10, 20, 30), (40, 10, 35)])

    def test_duplicate_color_is_ignored(self):
        mask = Mask(id=1, name="m")
        mask.add_color((1, 2, 3))
        before = mask.range

        assert mask.add_color((1, 2, 3, 255)) is False
        assert mask.colors == [Color(1, 2, 3)]
        assert mask.range == before

    def test_new_color_discards_manual_edits(self):
        mask = Mask(id=1, name="m")
        mask.add_color((10, 10, 10))
        mask.set_range_bound("r", "max", 200)
        mask.add_color((20, 20, 20))

        assert mask.range.r == ChannelRange(10, 20)

    def test_remove_color_recomputes_range(self):
        mask = Mask(id=1, name="m")
        for color in [(10, 10, 10), (50, 50, 50), (30, 90, 30)]:
            mask.add_color(color)

        assert mask.remove_color((30, 90, 30)) is True
        assert mask.range == bounding_range([(10, 10, 10), (50, 50, 50)])

    def test_removing_last_color_resets_to_full_range(self):
        mask = Mask(id=1, name="m")
        mask.add_color((10, 10, 10))
        mask.remove_color((10, 10, 10))

        assert mask.colors == []
        assert mask.range == full_range()

    def test_remove_missing_color(self):
        assert Mask(id=1, name="m").remove_color((1, 1, 1)) is False


class TestMaskSetConstruction:
    """Tests for MaskSet construction and invariants."""

    def test_default_has_one_positive_mask(self):
        mask_set = MaskSet()

        assert len(mask_set) == 1
        assert mask_set.active_index == 0
        assert mask_set.active_mask.name == "Positive Mask 1"
        assert mask_set.active_mask.id == 1

    def test_first_mask_must_be_positive(self):
        with pytest.raises(ValueError):
            MaskSet([Mask(id=1, name="n", type="negative")])

    def test_ids_must_be_unique(self):
        with pytest.raises(ValueError):
            MaskSet([Mask(id=1, name="a"), Mask(id=1, name="b")])

    def test_default_names(self):
        assert default_mask_name("positive", 3) == "Positive Mask 3"
        assert default_mask_name("negative", 4) == "Negative Mask 4"


class TestMaskSetEditing:
    """Tests for adding, switching and deleting masks."""

    def test_add_mask_becomes_active(self):
        mask_set = MaskSet()
        mask = mask_set.add_mask("negative")

        assert mask.id == 2
        assert mask.name == "Negative Mask 2"
        assert mask_set.active_index == 1
        assert mask_set.is_negative_mode

    def test_add_mask_uses_max_id_plus_one(self):
        mask_set = MaskSet([Mask(id=1, name="a"), Mask(id=7, name="b")])

        assert mask_set.add_mask("positive").id == 8

    def test_add_mask_rejects_unknown_type(self):
        with pytest.raises(ValueError):
            MaskSet().add_mask("other")

    def test_colors_go_to_active_mask(self):
        mask_set = MaskSet()
        mask_set.add_mask("negative")
        mask_set.add_color((9, 9, 9))

        assert mask_set[0].colors == []
        assert mask_set[1].colors == [Color(9, 9, 9)]

    def test_set_range_bound_edits_active_mask(self):
        mask_set = MaskSet()
        mask_set.set_range_bound("b", "min", 77)

        assert mask_set.active_mask.range.b == ChannelRange(77, 255)

    def test_first_mask_cannot_be_deleted(self):
        mask_set = MaskSet()

        with pytest.raises(PermanentMaskError):
            mask_set.delete_mask(0)
        assert len(mask_set) == 1

    def test_delete_out_of_range(self):
        with pytest.raises(IndexError):
            MaskSet().delete_mask(3)

    def test_delete_active_mask_activates_previous(self):
        mask_set = MaskSet()
        mask_set.add_mask("positive")
        mask_set.add_mask("negative")

        removed = mask_set.delete_mask(2)

        assert removed.name == "Negative Mask 3"
        assert mask_set.active_index == 1

    def test_delete_before_active_keeps_active_mask(self):
        mask_set = MaskSet()
        mask_set.add_mask("positive")
        active = mask_set.add_mask("negative")

        mask_set.delete_mask(1)

        assert mask_set.active_mask is active
        assert mask_set.active_index == 1

    def test_delete_after_active_keeps_index(self):
        mask_set = MaskSet()
        mask_set.add_mask("positive")
        mask_set.add_mask("negative")
        mask_set.switch_to(0)

        mask_set.delete_mask(2)

        assert mask_set.active_index == 0

    def test_switch_to_out_of_range(self):
        with pytest.raises(IndexError):
            MaskSet().switch_to(1)

    def test_rename_mask(self):
        mask_set = MaskSet()
        mask_set.rename_mask(0, "  Sky  ")

        assert mask_set[0].name == "Sky"
        with pytest.raises(ValueError):
            mask_set.rename_mask(0, "   ")

    def test_reset_restores_default(self):
        mask_set = MaskSet()
        mask_set.add_color((1, 2, 3))
        mask_set.add_mask("negative")

        mask_set.reset()

        assert len(mask_set) == 1
        assert mask_set.active_index == 0
        assert mask_set.active_mask.colors == []

    def test_positives_and_negatives(self):
        mask_set = MaskSet()
        mask_set.add_mask("negative")
        mask_set.add_mask("positive")

        assert [mask.id for mask in mask_set.positives()] == [1, 3]
        assert [mask.id for mask in mask_set.negatives()] == [2]


class TestCacheKey:
    """Tests for MaskSet.cache_key."""

    def test_changes_with_range(self):
        mask_set = MaskSet()
        before = mask_set.cache_key()
        mask_set.set_range_bound("r", "min", 10)

        assert mask_set.cache_key() != before

    def test_ignores_names_and_ids(self):
        first = MaskSet([Mask(id=1, name="a")])
        second = MaskSet([Mask(id=5, name="b")])

        assert first.cache_key() == second.cache_key()
