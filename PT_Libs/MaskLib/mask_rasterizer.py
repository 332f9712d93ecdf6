"""
Live-preview mask rasterization.

Turns an image and a MaskSet into a black/white mask image the same size as
the source. Evaluating every pixel of a large photo is too slow for
interactive slider edits, so the rasterizer:

- downsamples the source by a factor chosen from its largest dimension,
- evaluates only every ``sample_rate``-th pixel so roughly
  ``sample_pixel_budget`` pixels are tested whatever the image size,
- fills a small block around each matching sample so sparse sampling does
  not thin the mask out,
- scales the result back up with nearest-neighbour resampling so the output
  stays strictly binary.

Results are memoized on the {type, range} content of the masks. Any failure
while reading pixels produces an error mask instead of an exception.

Example:
    >>> from PIL import Image
    >>> rasterizer = MaskRasterizer()
    >>> result = rasterizer.rasterize(Image.open("photo.jpg"), mask_set)
    >>> result.image.size == Image.open("photo.jpg").size
    True
"""

import logging
import math
import time
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional, Tuple

import numpy as np

from PT_Libs.constants import (
    DOWNSAMPLE_THRESHOLDS,
    ERROR_MASK_BACKGROUND,
    ERROR_MASK_TEXT_COLOR,
    ERROR_MASK_TEXT_POSITION,
    MAX_BLOCK_SIZE,
    MAX_DOWNSAMPLE_FACTOR,
    SAMPLE_PIXEL_BUDGET,
)
from PT_Libs.pillow_compat import Image, ImageDraw, Resampling
from PT_Libs.MaskLib.mask_evaluator import evaluate_array
from PT_Libs.MaskLib.mask_models import MaskSet

logger = logging.getLogger(__name__)


@dataclass
class RasterizerConfig:
    """Performance policy of the live-preview rasterizer.

    Attributes:
        downsample_thresholds: (max dimension upper bound, factor) pairs in
            increasing order; the first bound the image fits under wins
        max_downsample_factor: Factor for images above every threshold
        sample_pixel_budget: Approximate number of pixels evaluated per pass
        max_block_size: Largest block filled around a matching sample
    """
    downsample_thresholds: Tuple[Tuple[int, int], ...] = DOWNSAMPLE_THRESHOLDS
    max_downsample_factor: int = MAX_DOWNSAMPLE_FACTOR
    sample_pixel_budget: int = SAMPLE_PIXEL_BUDGET
    max_block_size: int = MAX_BLOCK_SIZE

    def __post_init__(self) -> None:
        thresholds = tuple((int(bound), int(factor)) for bound, factor in self.downsample_thresholds)
        bounds = [bound for bound, _ in thresholds]
        factors = [factor for _, factor in thresholds] + [int(self.max_downsample_factor)]

        if bounds != sorted(bounds):
            raise ValueError(f"Downsample thresholds must be increasing, got {bounds}")
        if factors != sorted(factors) or factors[0] < 1:
            raise ValueError(f"Downsample factors must be >= 1 and non-decreasing, got {factors}")
        if self.sample_pixel_budget < 1:
            raise ValueError(f"sample_pixel_budget must be positive, got {self.sample_pixel_budget}")
        if self.max_block_size < 1:
            raise ValueError(f"max_block_size must be positive, got {self.max_block_size}")

        self.downsample_thresholds = thresholds

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RasterizerConfig":
        """Create from dictionary, ignoring unknown keys."""
        normalized = {k: v for k, v in data.items() if k in cls.__dataclass_fields__}
        thresholds = normalized.get("downsample_thresholds")
        if isinstance(thresholds, list):
            normalized["downsample_thresholds"] = tuple(tuple(pair) for pair in thresholds)
        return cls(**normalized)


@dataclass
class RasterizedMask:
    """Output of one rasterization.

    Attributes:
        image: RGBA mask at the source resolution; white pixels are included
        downsample_factor: Factor used before evaluation
        sample_rate: Sampling step used inside the downsampled buffer
        process_size: (width, height) of the downsampled buffer
        is_error: True when image is an error placeholder, not a mask
        error_message: What went wrong, when is_error is True
    """
    image: Any
    downsample_factor: int = 1
    sample_rate: int = 1
    process_size: Tuple[int, int] = (0, 0)
    is_error: bool = False
    error_message: Optional[str] = None

    @property
    def size(self) -> Tuple[int, int]:
        return self.image.size


def choose_downsample_factor(width: int, height: int, config: Optional[RasterizerConfig] = None) -> int:
    """Pick the downsample factor for an image from its largest dimension."""
    config = config or RasterizerConfig()
    max_dimension = max(width, height)

    for bound, factor in config.downsample_thresholds:
        if max_dimension <= bound:
            return factor
    return config.max_downsample_factor


def choose_sample_rate(total_pixels: int, pixel_budget: int = SAMPLE_PIXEL_BUDGET) -> int:
    """Smallest step that keeps the evaluated pixel count near the budget."""
    return max(1, math.ceil(math.sqrt(total_pixels / pixel_budget)))


def sample_mask(pixels: Any, mask_set: MaskSet, sample_rate: int, max_block_size: int = MAX_BLOCK_SIZE) -> Any:
    """
    Evaluate a pixel array on a sparse grid and block-fill the matches.

    Args:
        pixels: uint8 array shaped (H, W, C)
        mask_set: Masks to combine
        sample_rate: Grid step in both axes
        max_block_size: Upper bound of the filled block edge

    Returns:
        Boolean (H, W) array
    """
    height, width = pixels.shape[:2]
    sampled = evaluate_array(pixels[::sample_rate, ::sample_rate], mask_set)
    block_size = min(sample_rate, max_block_size)

    mask = np.zeros((height, width), dtype=bool)
    for dy in range(block_size):
        for dx in range(block_size):
            target = mask[dy::sample_rate, dx::sample_rate]
            target |= sampled[:target.shape[0], :target.shape[1]]
    return mask


def mask_to_image(mask: Any, size: Optional[Tuple[int, int]] = None) -> Any:
    """
    Convert a boolean array to an opaque black/white RGBA image.

    Args:
        mask: Boolean (H, W) array
        size: Optional (width, height) to scale to with nearest-neighbour
            resampling

    Returns:
        PIL Image in RGBA mode
    """
    gray = Image.fromarray(np.where(mask, 255, 0).astype(np.uint8))
    if size is not None and gray.size != tuple(size):
        gray = gray.resize(tuple(size), Resampling.NEAREST)
    return gray.convert("RGBA")


def create_error_mask(width: int, height: int, message: str) -> Any:
    """Solid black image with a red error label, used in place of a mask."""
    image = Image.new("RGBA", (max(1, width), max(1, height)), ERROR_MASK_BACKGROUND)
    draw = ImageDraw.Draw(image)
    draw.text(ERROR_MASK_TEXT_POSITION, message, fill=ERROR_MASK_TEXT_COLOR)
    return image


class MaskRasterizer:
    """
    Rasterizes a MaskSet over an image for live preview, with memoization.

    The cache is keyed on the masks only. Call invalidate() when a different
    image is loaded.
    """

    def __init__(self, config: Optional[RasterizerConfig] = None):
        self.config = config or RasterizerConfig()
        self._cache_key: Optional[str] = None
        self._cached: Optional[RasterizedMask] = None

    def invalidate(self) -> None:
        self._cache_key = None
        self._cached = None

    @property
    def has_cached_result(self) -> bool:
        return self._cached is not None

    def rasterize(self, image: Any, mask_set: MaskSet) -> RasterizedMask:
        """
        Build the mask image for the current masks.

        Args:
            image: PIL Image (any mode; converted to RGBA)
            mask_set: Masks to combine

        Returns:
            RasterizedMask; on failure its is_error flag is set and its image
            is an error placeholder at the source size

        Raises:
            TypeError: If image is not a PIL Image
        """
        if not hasattr(image, "mode") or not hasattr(image, "size"):
            raise TypeError(f"Expected PIL Image, got {type(image)}")

        key = mask_set.cache_key()
        if self._cached is not None and key == self._cache_key:
            logger.debug("Mask content unchanged, reusing cached mask")
            return self._cached

        result = self._rasterize(image, mask_set)
        if not result.is_error:
            self._cache_key = key
            self._cached = result
        return result

    def _rasterize(self, image: Any, mask_set: MaskSet) -> RasterizedMask:
        width, height = image.size
        if width <= 0 or height <= 0:
            logger.error(f"Invalid image dimensions for mask: {width}x{height}")
            return RasterizedMask(
                image=create_error_mask(width, height, "Invalid image dimensions"),
                is_error=True,
                error_message="Invalid image dimensions",
            )

        started = time.perf_counter()
        factor = choose_downsample_factor(width, height, self.config)
        process_width = max(1, width // factor)
        process_height = max(1, height // factor)
        logger.debug(
            f"Processing {width}x{height} image at {process_width}x{process_height}, "
            f"downsample factor {factor}"
        )

        try:
            source = image if image.mode == "RGBA" else image.convert("RGBA")
            if (process_width, process_height) != (width, height):
                source = source.resize((process_width, process_height), Resampling.BOX)
            pixels = np.asarray(source)

            sample_rate = choose_sample_rate(process_width * process_height, self.config.sample_pixel_budget)
            logger.debug(f"Using sample rate {sample_rate}")

            mask = sample_mask(pixels, mask_set, sample_rate, self.config.max_block_size)
            mask_image = mask_to_image(mask, (width, height))
        except (OSError, ValueError, MemoryError) as exc:
            logger.exception("Error processing image for mask")
            message = f"Error processing image: {exc}"
            return RasterizedMask(
                image=create_error_mask(width, height, message),
                downsample_factor=factor,
                process_size=(process_width, process_height),
                is_error=True,
                error_message=message,
            )

        elapsed = time.perf_counter() - started
        logger.debug(f"Mask calculation took {elapsed:.3f}s")

        return RasterizedMask(
            image=mask_image,
            downsample_factor=factor,
            sample_rate=sample_rate,
            process_size=(process_width, process_height),
        )
