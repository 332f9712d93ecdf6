"""
Unit tests for mask_io module.

Tests mask data export, import and validation.
"""

import json

import pytest

from PT_Libs.constants import MASKS_FILE_NAME
from PT_Libs.exceptions import MaskFormatError
from PT_Libs.MaskLib.color_range import ChannelRange, Color
from PT_Libs.MaskLib.mask_io import (
    export_masks_json,
    import_masks_json,
    load_masks_file,
    masks_from_data,
    masks_to_data,
    save_masks_file,
)
from PT_Libs.MaskLib.mask_models import MaskSet


def _mask_entry(**overrides):
    entry = {
        "id": 1,
        "name": "Positive Mask 1",
        "type": "positive",
        "range": {
            "r": {"min": 0, "max": 255},
            "g": {"min": 0, "max": 255},
            "b": {"min": 0, "max": 255},
        },
        "colors": [],
    }
    entry.update(overrides)
    return entry


@pytest.fixture
def edited_mask_set():
    mask_set = MaskSet()
    mask_set.add_color((255, 0, 0))
    mask_set.add_color((200, 20, 10))
    mask_set.add_mask("negative")
    mask_set.add_color((220, 10, 5))
    mask_set.set_range_bound("g", "max", 40)
    return mask_set


class TestExport:
    """Tests for masks_to_data and export_masks_json."""

    def test_data_shape(self, edited_mask_set):
        data = masks_to_data(edited_mask_set)

        assert [entry["id"] for entry in data] == [1, 2]
        assert data[0]["colors"] == ["#ff0000", "#c8140a"]
        assert data[0]["range"]["r"] == {"min": 200, "max": 255}
        assert data[1]["type"] == "negative"
        assert data[1]["range"]["g"] == {"min": 5, "max": 40}

    def test_json_is_indented_array(self, edited_mask_set):
        text = export_masks_json(edited_mask_set)

        assert text.startswith("[\n  {")
        assert json.loads(text) == masks_to_data(edited_mask_set)


class TestImport:
    """Tests for masks_from_data and import_masks_json."""

    def test_round_trip_preserves_masks(self, edited_mask_set):
        restored = import_masks_json(export_masks_json(edited_mask_set))

        assert masks_to_data(restored) == masks_to_data(edited_mask_set)
        assert restored.active_index == 0

    def test_stored_range_wins_over_colors(self):
        entry = _mask_entry(
            colors=["#ff0000"],
            range={"r": {"min": 10, "max": 20}, "g": {"min": 0, "max": 255}, "b": {"min": 0, "max": 255}},
        )

        mask_set = masks_from_data([entry])

        assert mask_set[0].range.r == ChannelRange(10, 20)
        assert mask_set[0].colors == [Color(255, 0, 0)]

    def test_duplicate_colors_are_collapsed(self):
        mask_set = masks_from_data([_mask_entry(colors=["#010203", "#010203"])])

        assert mask_set[0].colors == [Color(1, 2, 3)]

    def test_invalid_json(self):
        with pytest.raises(MaskFormatError, match="Invalid mask data format"):
            import_masks_json("{not json")

    @pytest.mark.parametrize(
        "data",
        [
            {"masks": []},
            [],
            ["mask"],
            [_mask_entry(id="1")],
            [_mask_entry(id=True)],
            [_mask_entry(name=None)],
            [_mask_entry(type="neutral")],
            [_mask_entry(range=None)],
            [_mask_entry(range={"r": {"min": 0, "max": 255}})],
            [_mask_entry(colors="#ff0000")],
            [_mask_entry(colors=["red"])],
            [_mask_entry(colors=["#-10000"])],
            [_mask_entry(colors=["+f0000"])],
            [_mask_entry(colors=["##ff0000"])],
            [_mask_entry(type="negative")],
            [_mask_entry(), _mask_entry(name="Duplicate id")],
        ],
    )
    def test_rejects_wrong_shape(self, data):
        with pytest.raises(MaskFormatError):
            masks_from_data(data)

    def test_format_error_is_value_error(self):
        with pytest.raises(ValueError):
            import_masks_json("42")


class TestFiles:
    """Tests for save_masks_file and load_masks_file."""

    def test_save_and_load(self, temp_mask_dir, edited_mask_set):
        path = save_masks_file(edited_mask_set, temp_mask_dir / MASKS_FILE_NAME)

        assert path.exists()
        assert masks_to_data(load_masks_file(path)) == masks_to_data(edited_mask_set)

    def test_load_binary_file(self, temp_mask_dir):
        path = temp_mask_dir / "masks.json"
        path.write_bytes(b"\xff\xfe\x00\x80\x81")

        with pytest.raises(MaskFormatError):
            load_masks_file(path)

    def test_load_missing_file(self, temp_mask_dir):
        with pytest.raises(OSError):
            load_masks_file(temp_mask_dir / "missing.json")
