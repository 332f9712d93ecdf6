"""
Mask and MaskSet models for the color-range tools.

A Mask is a named positive or negative RGB box together with the colors that
derived it. A MaskSet is the ordered list of masks the user is editing plus
the index of the active mask, which receives picked colors and slider edits.

Classes:
    Mask: One named color-range mask
    MaskSet: Ordered masks with an active index
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from PT_Libs.constants import (
    DEFAULT_TIGHT_TOLERANCE,
    FIELD_MASK_RANGE,
    FIELD_MASK_TYPE,
    FIRST_MASK_ID,
    MASK_TYPES,
    MASK_TYPE_NEGATIVE,
    MASK_TYPE_POSITIVE,
)
from PT_Libs.exceptions import PermanentMaskError
from PT_Libs.MaskLib.color_range import (
    Color,
    ColorRange,
    bounding_range,
    full_range,
    tight_range,
)


def default_mask_name(mask_type: str, mask_id: int) -> str:
    label = "Positive" if mask_type == MASK_TYPE_POSITIVE else "Negative"
    return f"{label} Mask {mask_id}"


@dataclass
class Mask:
    """One color-range mask.

    Attributes:
        id: Stable identifier, unique inside a MaskSet
        name: Display name
        type: 'positive' (include) or 'negative' (exclude)
        colors: Unique picked colors, in pick order
        range: Range derived from colors, or set manually with the sliders
    """
    id: int
    name: str
    type: str = MASK_TYPE_POSITIVE
    colors: List[Color] = field(default_factory=list)
    range: ColorRange = field(default_factory=full_range)

    def __post_init__(self) -> None:
        if self.type not in MASK_TYPES:
            raise ValueError(f"Unsupported mask type: {self.type}")
        self.colors = [Color(*color[:3]) for color in self.colors]

    @property
    def is_positive(self) -> bool:
        return self.type == MASK_TYPE_POSITIVE

    @property
    def is_negative(self) -> bool:
        return self.type == MASK_TYPE_NEGATIVE

    def add_color(self, color: Sequence[int], tolerance: int = DEFAULT_TIGHT_TOLERANCE) -> bool:
        """
        Add a color and grow the range to cover it.

        The first color gets a tight range around it; later colors reset the
        range to the bounding box of all colors, discarding manual edits.

        Returns:
            False if the color was already in the mask, True otherwise
        """
        new_color = Color(*color[:3])
        if new_color in self.colors:
            return False

        self.colors.append(new_color)
        if len(self.colors) == 1:
            self.range = tight_range(new_color, tolerance)
        else:
            self.range = bounding_range(self.colors)
        return True

    def remove_color(self, color: Sequence[int]) -> bool:
        """
        Remove a color and recompute the range from the remaining ones.

        An emptied mask goes back to the full range.

        Returns:
            False if the color was not in the mask, True otherwise
        """
        target = Color(*color[:3])
        if target not in self.colors:
            return False

        self.colors = [existing for existing in self.colors if existing != target]
        self.range = bounding_range(self.colors) if self.colors else full_range()
        return True

    def set_range_bound(self, channel: str, bound: str, value: float) -> None:
        self.range = self.range.with_bound(channel, bound, value)

    def content_key(self) -> Dict[str, Any]:
        return {FIELD_MASK_TYPE: self.type, FIELD_MASK_RANGE: self.range.to_dict()}


def _default_mask() -> Mask:
    return Mask(id=FIRST_MASK_ID, name=default_mask_name(MASK_TYPE_POSITIVE, FIRST_MASK_ID))


class MaskSet:
    """
    Ordered collection of masks with an active index.

    There is always at least one mask and the first one is positive. The
    first mask cannot be deleted.

    Note:
        An empty mask has the full range, so an empty positive mask claims
        every pixel. Pixels then pass unless a negative mask vetoes them.

    Example:
        >>> masks = MaskSet()
        >>> masks.add_color((255, 0, 0))
        True
        >>> mask = masks.add_mask("negative")
        >>> masks.active_mask.name
        'Negative Mask 2'
    """

    # TODO: confirm whether an empty positive mask should match nothing; that
    # changes Mask.remove_color and _default_mask together.
    def __init__(self, masks: Optional[Sequence[Mask]] = None, active_index: int = 0):
        mask_list = list(masks) if masks else [_default_mask()]
        if not mask_list[0].is_positive:
            raise ValueError("The first mask of a mask set must be positive")

        ids = [mask.id for mask in mask_list]
        if len(set(ids)) != len(ids):
            raise ValueError(f"Mask ids must be unique, got {ids}")

        self._masks: List[Mask] = mask_list
        self._active_index = 0
        self.switch_to(active_index)

    def __len__(self) -> int:
        return len(self._masks)

    def __iter__(self):
        return iter(self._masks)

    def __getitem__(self, index: int) -> Mask:
        return self._masks[index]

    @property
    def masks(self) -> List[Mask]:
        return list(self._masks)

    @property
    def active_index(self) -> int:
        return self._active_index

    @property
    def active_mask(self) -> Mask:
        return self._masks[self._active_index]

    @property
    def is_negative_mode(self) -> bool:
        return self.active_mask.is_negative

    def positives(self) -> List[Mask]:
        return [mask for mask in self._masks if mask.is_positive]

    def negatives(self) -> List[Mask]:
        return [mask for mask in self._masks if mask.is_negative]

    def next_id(self) -> int:
        return max(mask.id for mask in self._masks) + 1

    def add_mask(self, mask_type: str) -> Mask:
        """
        Append an empty mask of the given type and make it active.

        Raises:
            ValueError: If mask_type is not 'positive' or 'negative'
        """
        if mask_type not in MASK_TYPES:
            raise ValueError(f"Unsupported mask type: {mask_type}")

        mask_id = self.next_id()
        mask = Mask(id=mask_id, name=default_mask_name(mask_type, mask_id), type=mask_type)
        self._masks.append(mask)
        self._active_index = len(self._masks) - 1
        return mask

    def delete_mask(self, index: int) -> Mask:
        """
        Delete the mask at index and move the active index if needed.

        Raises:
            PermanentMaskError: If index is 0
            IndexError: If index is out of range
        """
        if index == 0:
            raise PermanentMaskError()
        if not 0 < index < len(self._masks):
            raise IndexError(f"Mask index out of range: {index}")

        removed = self._masks.pop(index)

        # the active mask stays active unless it was the one removed
        if self._active_index == index:
            self._active_index = index - 1
        elif self._active_index > index:
            self._active_index -= 1
        return removed

    def switch_to(self, index: int) -> Mask:
        if not 0 <= index < len(self._masks):
            raise IndexError(f"Mask index out of range: {index}")
        self._active_index = index
        return self._masks[index]

    def rename_mask(self, index: int, name: str) -> None:
        name = str(name).strip()
        if not name:
            raise ValueError("Mask name cannot be empty")
        self._masks[index].name = name

    def add_color(self, color: Sequence[int], tolerance: int = DEFAULT_TIGHT_TOLERANCE) -> bool:
        return self.active_mask.add_color(color, tolerance)

    def remove_color(self, color: Sequence[int]) -> bool:
        return self.active_mask.remove_color(color)

    def set_range_bound(self, channel: str, bound: str, value: float) -> None:
        self.active_mask.set_range_bound(channel, bound, value)

    def reset(self) -> None:
        self._masks = [_default_mask()]
        self._active_index = 0

    def cache_key(self) -> str:
        """Serialize the {type, range} content that decides mask output."""
        return json.dumps([mask.content_key() for mask in self._masks], sort_keys=True)
