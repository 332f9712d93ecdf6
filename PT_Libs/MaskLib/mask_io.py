"""
Mask data export and import.

The mask file is the hand-off between the color range picker (which creates
masks) and the polygon mask analyzer (which consumes them). It is a JSON
array with one object per mask:

    [
      {
        "id": 1,
        "name": "Positive Mask 1",
        "type": "positive",
        "range": {"r": {"min": 250, "max": 255}, "g": {...}, "b": {...}},
        "colors": ["#ff0000"]
      }
    ]

Functions:
    masks_to_data: Convert a MaskSet to the list-of-dicts form
    masks_from_data: Validate list-of-dicts data and build a MaskSet
    export_masks_json: Serialize a MaskSet to a JSON string
    import_masks_json: Parse a JSON string into a MaskSet
    save_masks_file: Write a mask file
    load_masks_file: Read a mask file
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List

from PT_Libs.constants import (
    FIELD_MASK_COLORS,
    FIELD_MASK_ID,
    FIELD_MASK_NAME,
    FIELD_MASK_RANGE,
    FIELD_MASK_TYPE,
    JSON_INDENT,
    MASK_TYPES,
)
from PT_Libs.exceptions import MaskFormatError
from PT_Libs.MaskLib.color_range import ColorRange, hex_to_rgb, rgb_to_hex
from PT_Libs.MaskLib.mask_models import Mask, MaskSet

logger = logging.getLogger(__name__)


def mask_to_dict(mask: Mask) -> Dict[str, Any]:
    return {
        FIELD_MASK_ID: mask.id,
        FIELD_MASK_NAME: mask.name,
        FIELD_MASK_TYPE: mask.type,
        FIELD_MASK_RANGE: mask.range.to_dict(),
        FIELD_MASK_COLORS: [rgb_to_hex(color) for color in mask.colors],
    }


def masks_to_data(mask_set: MaskSet) -> List[Dict[str, Any]]:
    return [mask_to_dict(mask) for mask in mask_set]


def _mask_from_dict(entry: Any, position: int) -> Mask:
    if not isinstance(entry, dict):
        raise MaskFormatError(f"Mask {position} must be an object")

    mask_id = entry.get(FIELD_MASK_ID)
    if isinstance(mask_id, bool) or not isinstance(mask_id, int):
        raise MaskFormatError(f"Mask {position} has an invalid id: {mask_id!r}")

    name = entry.get(FIELD_MASK_NAME)
    if not isinstance(name, str):
        raise MaskFormatError(f"Mask {position} has an invalid name: {name!r}")

    mask_type = entry.get(FIELD_MASK_TYPE)
    if mask_type not in MASK_TYPES:
        raise MaskFormatError(f"Mask {position} has an unsupported type: {mask_type!r}")

    try:
        color_range = ColorRange.from_dict(entry.get(FIELD_MASK_RANGE))
    except ValueError as exc:
        raise MaskFormatError(f"Mask {position}: {exc}") from exc

    raw_colors = entry.get(FIELD_MASK_COLORS)
    if not isinstance(raw_colors, list):
        raise MaskFormatError(f"Mask {position} colors must be a list")

    colors = []
    for raw in raw_colors:
        try:
            color = hex_to_rgb(raw)
        except ValueError as exc:
            raise MaskFormatError(f"Mask {position}: {exc}") from exc
        if color not in colors:
            colors.append(color)

    # the stored range wins over the colors: it may hold manual slider edits
    return Mask(id=mask_id, name=name, type=mask_type, colors=colors, range=color_range)


def masks_from_data(data: Any) -> MaskSet:
    """
    Build a MaskSet from decoded mask file data.

    Args:
        data: List of mask objects in the export format

    Returns:
        A new MaskSet with the first mask active

    Raises:
        MaskFormatError: If data does not match the export format
    """
    if not isinstance(data, list):
        raise MaskFormatError("Mask data must be a JSON array of masks")
    if not data:
        raise MaskFormatError("Mask data contains no masks")

    masks = [_mask_from_dict(entry, position) for position, entry in enumerate(data)]

    try:
        return MaskSet(masks)
    except ValueError as exc:
        raise MaskFormatError(str(exc)) from exc


def export_masks_json(mask_set: MaskSet) -> str:
    return json.dumps(masks_to_data(mask_set), indent=JSON_INDENT)


def import_masks_json(text: str) -> MaskSet:
    """
    Parse mask file text.

    Raises:
        MaskFormatError: If text is not JSON or not in the export format
    """
    try:
        data = json.loads(text)
    except (TypeError, ValueError) as exc:
        raise MaskFormatError(f"Invalid mask data format: {exc}") from exc
    return masks_from_data(data)


def save_masks_file(mask_set: MaskSet, path: Path) -> Path:
    """
    Write the masks to a JSON file.

    Raises:
        OSError: If the file cannot be written
    """
    path = Path(path)
    path.write_text(export_masks_json(mask_set), encoding="utf-8")
    logger.info(f"Saved {len(mask_set)} masks to {path}")
    return path


def load_masks_file(path: Path) -> MaskSet:
    """
    Read masks from a JSON file.

    Raises:
        MaskFormatError: If the file is not valid mask data
        OSError: If the file cannot be read
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise MaskFormatError(f"Mask file is not text: {path.name}") from exc

    mask_set = import_masks_json(text)
    logger.info(f"Loaded {len(mask_set)} masks from {path}")
    return mask_set
