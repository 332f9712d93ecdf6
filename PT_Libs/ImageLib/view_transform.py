"""
Zoom and pan transform shared by the tool canvases.

Canvas coordinates map to image coordinates through
``image = (canvas - pan) / zoom``. Every canvas draws the image, the mask and
the polygon through the same transform so clicks land on the right pixel.
"""

from dataclasses import dataclass, replace
from typing import Tuple

from PT_Libs.constants import (
    DEFAULT_CANVAS_HEIGHT,
    DEFAULT_CANVAS_WIDTH,
    FIT_MARGIN,
    MAX_ZOOM,
    MIN_ZOOM,
    ZOOM_IN_FACTOR,
    ZOOM_OUT_FACTOR,
)


@dataclass(frozen=True)
class ViewTransform:
    zoom: float = 1.0
    pan_x: float = 0.0
    pan_y: float = 0.0

    @classmethod
    def fit_to_canvas(
        cls,
        image_width: int,
        image_height: int,
        canvas_width: int = DEFAULT_CANVAS_WIDTH,
        canvas_height: int = DEFAULT_CANVAS_HEIGHT,
        margin: float = FIT_MARGIN,
    ) -> "ViewTransform":
        """Scale the image to fit the canvas with a margin and centre it."""
        if image_width <= 0 or image_height <= 0:
            return cls()

        zoom = min(canvas_width / image_width, canvas_height / image_height) * margin
        return cls(
            zoom=zoom,
            pan_x=(canvas_width - image_width * zoom) / 2,
            pan_y=(canvas_height - image_height * zoom) / 2,
        )

    def canvas_to_image(self, x: float, y: float) -> Tuple[float, float]:
        return (x - self.pan_x) / self.zoom, (y - self.pan_y) / self.zoom

    def image_to_canvas(self, x: float, y: float) -> Tuple[float, float]:
        return x * self.zoom + self.pan_x, y * self.zoom + self.pan_y

    def panned(self, dx: float, dy: float) -> "ViewTransform":
        return replace(self, pan_x=self.pan_x + dx, pan_y=self.pan_y + dy)

    def zoomed_at(self, canvas_x: float, canvas_y: float, zoom_in: bool) -> "ViewTransform":
        """
        Zoom one wheel step keeping the point under the cursor fixed.

        The zoom level is clamped to [MIN_ZOOM, MAX_ZOOM].
        """
        factor = ZOOM_IN_FACTOR if zoom_in else ZOOM_OUT_FACTOR
        new_zoom = max(MIN_ZOOM, min(MAX_ZOOM, self.zoom * factor))
        ratio = new_zoom / self.zoom
        return ViewTransform(
            zoom=new_zoom,
            pan_x=canvas_x - (canvas_x - self.pan_x) * ratio,
            pan_y=canvas_y - (canvas_y - self.pan_y) * ratio,
        )


def is_inside_image(x: float, y: float, width: int, height: int) -> bool:
    return 0 <= x < width and 0 <= y < height
