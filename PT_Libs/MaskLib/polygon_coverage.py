"""
Polygon coverage analysis.

Measures how much of a user-drawn polygon lies inside the combined color
mask. Both the polygon and the mask are rasterized at the full image
resolution and every pixel is evaluated exactly; unlike the live preview
there is no downsampling or sampling here.

Classes:
    CoverageResult: Pixel counts and coverage percentage
    PolygonCoverageAnalyzer: Rasterizes the inputs and counts the overlap
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence, Tuple

import numpy as np

from PT_Libs.constants import PERCENTAGE_DECIMALS
from PT_Libs.exceptions import AnalysisPreconditionError
from PT_Libs.MaskLib.mask_evaluator import evaluate_array
from PT_Libs.MaskLib.mask_models import MaskSet
from PT_Libs.MaskLib.mask_rasterizer import mask_to_image

logger = logging.getLogger(__name__)

Point = Tuple[float, float]

MIN_POLYGON_POINTS = 3


@dataclass(frozen=True)
class CoverageResult:
    total_polygon_pixels: int
    masked_polygon_pixels: int
    percentage: float

    @property
    def formatted_percentage(self) -> str:
        return f"{self.percentage:.{PERCENTAGE_DECIMALS}f}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalPolygonPixels": self.total_polygon_pixels,
            "maskedPolygonPixels": self.masked_polygon_pixels,
            "percentage": self.formatted_percentage,
        }


def coverage_percentage(masked: int, total: int) -> float:
    if masked <= 0 or total <= 0:
        return 0.0
    return masked / total * 100.0


class PolygonCoverageAnalyzer:
    """
    Computes the share of a polygon covered by a mask.

    The polygon is filled with the even-odd rule, sampling pixel centres, so
    self-intersecting outlines leave their doubly covered regions empty.

    Example:
        >>> analyzer = PolygonCoverageAnalyzer()
        >>> result = analyzer.analyze(image, [(0, 0), (10, 0), (10, 10)], mask_set)
        >>> result.formatted_percentage
        '42.00'
    """

    def rasterize_polygon(self, width: int, height: int, polygon: Sequence[Point]) -> Any:
        """
        Fill a polygon into a boolean buffer of the given size.

        A pixel is inside when its centre (x + 0.5, y + 0.5) is inside the
        polygon under the even-odd rule. Vertices may lie outside the buffer.

        Args:
            width: Buffer width in pixels
            height: Buffer height in pixels
            polygon: Vertices in image coordinates; closed implicitly

        Returns:
            Boolean (height, width) array
        """
        inside = np.zeros((max(0, height), max(0, width)), dtype=bool)
        if len(polygon) < MIN_POLYGON_POINTS or width <= 0 or height <= 0:
            return inside

        vertices = np.asarray(polygon, dtype=np.float64)
        x0, y0 = vertices[:, 0], vertices[:, 1]
        x1, y1 = np.roll(x0, -1), np.roll(y0, -1)

        centers = np.arange(height, dtype=np.float64)[:, None] + 0.5
        # half-open on y so a scanline through a shared vertex counts once
        crosses = ((y0 <= centers) & (centers < y1)) | ((y1 <= centers) & (centers < y0))
        rows, edges = np.nonzero(crosses)
        if rows.size == 0:
            return inside

        cy = centers[rows, 0]
        ex0, ey0, ex1, ey1 = x0[edges], y0[edges], x1[edges], y1[edges]
        cross_x = ex0 + (cy - ey0) * (ex1 - ex0) / (ey1 - ey0)

        # each crossing flips parity for every pixel centre to its right
        columns = np.clip(np.ceil(cross_x - 0.5), 0, width).astype(np.int64)
        toggles = np.zeros((height, width + 1), dtype=np.int32)
        np.add.at(toggles, (rows, columns), 1)

        inside = (np.cumsum(toggles, axis=1)[:, :width] % 2) == 1
        return inside

    def rasterize_mask(self, image: Any, mask_set: MaskSet) -> Any:
        """Evaluate every pixel of the image; returns a boolean (H, W) array."""
        rgba = image if image.mode == "RGBA" else image.convert("RGBA")
        return evaluate_array(np.asarray(rgba), mask_set)

    def polygon_to_image(self, width: int, height: int, polygon: Sequence[Point]) -> Any:
        return mask_to_image(self.rasterize_polygon(width, height, polygon))

    def analyze(self, image: Optional[Any], polygon: Sequence[Point], mask_set: Optional[MaskSet]) -> CoverageResult:
        """
        Count polygon pixels and the polygon pixels that are also masked.

        Args:
            image: Loaded PIL Image
            polygon: At least three vertices in image coordinates
            mask_set: Loaded masks

        Returns:
            A new CoverageResult

        Raises:
            AnalysisPreconditionError: If the image or masks are missing or
                the polygon has fewer than three vertices
            TypeError: If image is not a PIL Image
        """
        if image is None:
            raise AnalysisPreconditionError("Please upload an image before analyzing")
        if mask_set is None or len(mask_set) == 0:
            raise AnalysisPreconditionError("Please upload mask data before analyzing")
        if polygon is None or len(polygon) < MIN_POLYGON_POINTS:
            raise AnalysisPreconditionError(
                f"Please draw a polygon with at least {MIN_POLYGON_POINTS} points"
            )
        if not hasattr(image, "mode") or not hasattr(image, "size"):
            raise TypeError(f"Expected PIL Image, got {type(image)}")

        width, height = image.size
        polygon_pixels = self.rasterize_polygon(width, height, polygon)
        mask_pixels = self.rasterize_mask(image, mask_set)

        total = int(np.count_nonzero(polygon_pixels))
        masked = int(np.count_nonzero(polygon_pixels & mask_pixels))
        result = CoverageResult(
            total_polygon_pixels=total,
            masked_polygon_pixels=masked,
            percentage=coverage_percentage(masked, total),
        )

        logger.info(
            f"Polygon coverage: {masked}/{total} pixels ({result.formatted_percentage}%)"
        )
        return result
