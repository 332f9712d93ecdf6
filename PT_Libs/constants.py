"""
Constants and configuration values for the portfolio image tools.

This module centralizes all constant values, magic numbers, and
configuration settings used throughout the application.
"""

# Color channel limits
CHANNEL_MIN = 0
CHANNEL_MAX = 255
CHANNELS = ("r", "g", "b")
BOUND_MIN = "min"
BOUND_MAX = "max"

# Tight range created around the first color of a mask
DEFAULT_TIGHT_TOLERANCE = 5

# Mask types
MASK_TYPE_POSITIVE = "positive"
MASK_TYPE_NEGATIVE = "negative"
MASK_TYPES = (MASK_TYPE_POSITIVE, MASK_TYPE_NEGATIVE)
FIRST_MASK_ID = 1

# Live preview rasterization policy: (max dimension upper bound, factor)
DOWNSAMPLE_THRESHOLDS = (
    (1000, 1),
    (2000, 2),
    (3000, 4),
    (4000, 6),
)
MAX_DOWNSAMPLE_FACTOR = 8
SAMPLE_PIXEL_BUDGET = 250000
MAX_BLOCK_SIZE = 4

# Error mask colors (RGBA)
ERROR_MASK_BACKGROUND = (0, 0, 0, 255)
ERROR_MASK_TEXT_COLOR = (255, 0, 0, 255)
ERROR_MASK_TEXT_POSITION = (20, 50)

# Color picker
DEFAULT_PICKER_COLOR = (0x3B, 0x82, 0xF6)
COLOR_FORMAT_HEX = "hex"
COLOR_FORMAT_RGB = "rgb"
COLOR_FORMAT_HSL = "hsl"
COLOR_FORMATS = (COLOR_FORMAT_HEX, COLOR_FORMAT_RGB, COLOR_FORMAT_HSL)
COLOR_PICKER_CANVAS_SIZE = 300

# Coverage display
PERCENTAGE_DECIMALS = 2

# Mask file format
MASKS_FILE_NAME = "color_range_masks.json"
MASKS_FILE_FILTER = "Mask Data (*.json)"
JSON_INDENT = 2
FIELD_MASK_ID = "id"
FIELD_MASK_NAME = "name"
FIELD_MASK_TYPE = "type"
FIELD_MASK_RANGE = "range"
FIELD_MASK_COLORS = "colors"

# Supported image formats
SUPPORTED_STANDARD_IMAGES = {".png", ".jpg", ".jpeg", ".bmp", ".gif", ".tiff", ".webp"}
STANDARD_IMAGE_FILTER = "Images (*.png *.jpg *.jpeg *.bmp *.gif *.tiff *.webp)"
LARGE_IMAGE_BYTES = 5 * 1024 * 1024

# Canvas / view constants
DEFAULT_CANVAS_WIDTH = 800
DEFAULT_CANVAS_HEIGHT = 600
FIT_MARGIN = 0.9
MIN_ZOOM = 0.1
MAX_ZOOM = 10.0
ZOOM_IN_FACTOR = 1.1
ZOOM_OUT_FACTOR = 0.9

# UI constants
DEFAULT_WINDOW_WIDTH = 1400
DEFAULT_WINDOW_HEIGHT = 850
POLYGON_STROKE_COLOR = "#cc0000"
POLYGON_FILL_ALPHA = 50
POLYGON_POINT_RADIUS = 4.0
