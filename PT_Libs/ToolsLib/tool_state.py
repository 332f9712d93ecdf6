"""
Application state of the color picker and the two mask tools.

Each tool keeps everything it edits in one explicit state object: the loaded
image, the view transform, the masks and (for the analyzer) the polygon and
last result. Windows hold a state object and call these methods from their
event handlers; the methods delegate to the pure functions in MaskLib, so the
tools can be driven and tested without a GUI.

Classes:
    ColorPickerState: Single color picker
    ColorRangePickerState: Mask creation tool
    PolygonAnalyzerState: Polygon coverage tool
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional

from PT_Libs.constants import (
    COLOR_FORMAT_HEX,
    COLOR_FORMATS,
    COLOR_PICKER_CANVAS_SIZE,
    DEFAULT_PICKER_COLOR,
)
from PT_Libs.ImageLib.image_loader import load_image
from PT_Libs.ImageLib.view_transform import ViewTransform, is_inside_image
from PT_Libs.MaskLib.color_formats import format_color
from PT_Libs.MaskLib.color_range import Color
from PT_Libs.MaskLib.mask_io import load_masks_file, save_masks_file
from PT_Libs.MaskLib.mask_models import MaskSet
from PT_Libs.MaskLib.mask_rasterizer import MaskRasterizer, RasterizedMask, mask_to_image
from PT_Libs.MaskLib.polygon_coverage import CoverageResult, Point, PolygonCoverageAnalyzer

logger = logging.getLogger(__name__)


def pixel_at(image: Any, x: float, y: float) -> Optional[Color]:
    """RGB color of the image pixel under an image-space point, or None outside."""
    if image is None or not is_inside_image(x, y, image.width, image.height):
        return None
    r, g, b = image.getpixel((int(x), int(y)))[:3]
    return Color(r, g, b)


@dataclass
class ColorPickerState:
    """
    State of the single color picker.

    Holds the current color, the display format and a list of saved colors.
    Picking never touches any mask.
    """

    color: Color = field(default_factory=lambda: Color(*DEFAULT_PICKER_COLOR))
    color_format: str = COLOR_FORMAT_HEX
    saved_colors: List[Color] = field(default_factory=list)
    image: Optional[Any] = None
    view: ViewTransform = field(default_factory=ViewTransform)

    def set_image(self, image: Any) -> None:
        self.image = image if image.mode == "RGBA" else image.convert("RGBA")
        self.view = ViewTransform.fit_to_canvas(
            self.image.width, self.image.height, COLOR_PICKER_CANVAS_SIZE, COLOR_PICKER_CANVAS_SIZE
        )

    def load_image(self, path: Path) -> Any:
        self.set_image(load_image(path))
        return self.image

    def pick_color(self, image_x: float, image_y: float) -> Optional[Color]:
        """Make the pixel under an image-space point the current color."""
        color = pixel_at(self.image, image_x, image_y)
        if color is not None:
            self.color = color
        return color

    def pick_color_at_canvas(self, canvas_x: float, canvas_y: float) -> Optional[Color]:
        return self.pick_color(*self.view.canvas_to_image(canvas_x, canvas_y))

    def set_format(self, color_format: str) -> None:
        if color_format not in COLOR_FORMATS:
            raise ValueError(f"Unsupported color format: {color_format}")
        self.color_format = color_format

    def formatted_color(self, color_format: Optional[str] = None) -> str:
        return format_color(self.color, color_format or self.color_format)

    def save_color(self) -> bool:
        """Save the current color; returns False if it is already saved."""
        if self.color in self.saved_colors:
            return False
        self.saved_colors.append(self.color)
        return True

    def remove_saved_color(self, color: Color) -> bool:
        if color not in self.saved_colors:
            return False
        self.saved_colors.remove(color)
        return True

    def select_saved_color(self, index: int) -> Color:
        self.color = self.saved_colors[index]
        return self.color

    def reset_view(self) -> None:
        self.view = ViewTransform()


@dataclass
class ColorRangePickerState:
    mask_set: MaskSet = field(default_factory=MaskSet)
    image: Optional[Any] = None
    view: ViewTransform = field(default_factory=ViewTransform)
    rasterizer: MaskRasterizer = field(default_factory=MaskRasterizer)

    def set_image(self, image: Any) -> None:
        self.image = image if image.mode == "RGBA" else image.convert("RGBA")
        self.view = ViewTransform.fit_to_canvas(self.image.width, self.image.height)
        self.rasterizer.invalidate()

    def load_image(self, path: Path) -> Any:
        """Load an image file; on error the current image is kept."""
        self.set_image(load_image(path))
        return self.image

    def pick_color(self, image_x: float, image_y: float) -> Optional[Color]:
        """
        Add the color under an image-space point to the active mask.

        Returns:
            The picked color, or None when the point is outside the image or
            the color is already in the mask
        """
        color = pixel_at(self.image, image_x, image_y)
        if color is None or not self.mask_set.add_color(color):
            return None
        logger.debug(f"Added color {color} to {self.mask_set.active_mask.name}")
        return color

    def pick_color_at_canvas(self, canvas_x: float, canvas_y: float) -> Optional[Color]:
        return self.pick_color(*self.view.canvas_to_image(canvas_x, canvas_y))

    def compute_mask(self) -> Optional[RasterizedMask]:
        if self.image is None:
            return None
        return self.rasterizer.rasterize(self.image, self.mask_set)

    def reset_view(self) -> None:
        self.view = ViewTransform()

    def reset_masks(self) -> None:
        self.mask_set.reset()

    def export_masks(self, path: Path) -> Path:
        return save_masks_file(self.mask_set, path)

    def import_masks(self, path: Path) -> MaskSet:
        """Replace the masks with a mask file; on error the masks are kept."""
        self.mask_set = load_masks_file(path)
        return self.mask_set


@dataclass
class PolygonAnalyzerState:
    image: Optional[Any] = None
    mask_set: Optional[MaskSet] = None
    polygon: List[Point] = field(default_factory=list)
    is_drawing: bool = False
    result: Optional[CoverageResult] = None
    view: ViewTransform = field(default_factory=ViewTransform)
    analyzer: PolygonCoverageAnalyzer = field(default_factory=PolygonCoverageAnalyzer)

    @property
    def mask_loaded(self) -> bool:
        return self.mask_set is not None

    def set_image(self, image: Any) -> None:
        self.image = image if image.mode == "RGBA" else image.convert("RGBA")
        self.view = ViewTransform.fit_to_canvas(self.image.width, self.image.height)
        self.reset_polygon()

    def load_image(self, path: Path) -> Any:
        self.set_image(load_image(path))
        return self.image

    def set_masks(self, mask_set: MaskSet) -> None:
        self.mask_set = mask_set
        self.result = None

    def load_masks(self, path: Path) -> MaskSet:
        """Load a mask file; on error the current masks are kept."""
        self.set_masks(load_masks_file(path))
        return self.mask_set

    def add_point(self, image_x: float, image_y: float) -> bool:
        """
        Add a polygon vertex at an image-space point.

        The first click after a completed polygon starts a new one. Points
        outside the image are ignored.

        Returns:
            True if the point was added
        """
        if self.image is None or not is_inside_image(image_x, image_y, self.image.width, self.image.height):
            return False

        point = (float(image_x), float(image_y))
        if not self.is_drawing:
            self.polygon = [point]
            self.is_drawing = True
            self.result = None
        else:
            self.polygon.append(point)
        return True

    def add_point_at_canvas(self, canvas_x: float, canvas_y: float) -> bool:
        return self.add_point(*self.view.canvas_to_image(canvas_x, canvas_y))

    def reset_polygon(self) -> None:
        self.polygon = []
        self.is_drawing = False
        self.result = None

    def reset_view(self) -> None:
        self.view = ViewTransform()

    def analyze(self) -> CoverageResult:
        """
        Run the coverage analysis for the current polygon.

        Raises:
            AnalysisPreconditionError: If the image, masks or polygon are missing
        """
        self.result = self.analyzer.analyze(self.image, self.polygon, self.mask_set)
        return self.result

    def complete_polygon(self) -> CoverageResult:
        """Close the polygon being drawn and analyze it."""
        result = self.analyze()
        self.is_drawing = False
        return result

    def mask_preview(self) -> Optional[Any]:
        if self.image is None or self.mask_set is None:
            return None
        return mask_to_image(self.analyzer.rasterize_mask(self.image, self.mask_set))
