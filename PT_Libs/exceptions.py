"""
Exceptions raised by the portfolio image tools.

Invalid input data and precondition violations are reported to the caller
through these types; the GUI turns them into message boxes.
"""


class PortfolioToolsError(Exception):
    """Base class for all errors raised by the tools."""


class MaskFormatError(PortfolioToolsError, ValueError):
    """Mask data could not be parsed or does not match the export format."""


class UnsupportedImageError(PortfolioToolsError, ValueError):
    """The file extension is not a supported image format."""


class ImageLoadError(PortfolioToolsError):
    """A supported image file could not be read or decoded."""


class AnalysisPreconditionError(PortfolioToolsError):
    """Coverage analysis was requested without an image, masks or a polygon."""


class PermanentMaskError(PortfolioToolsError):
    """The first positive mask cannot be deleted."""

    def __init__(self, message: str = "The first positive mask cannot be deleted"):
        super().__init__(message)
