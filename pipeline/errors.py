from __future__ import annotations

from typing import Optional


class SnowMaskError(Exception):
    """Base class for fatal pipeline errors.

    stage: name of the pipeline stage that failed ("open", "load", "write")
    """

    stage = "pipeline"

    def __init__(self, message: str, stage: Optional[str] = None):
        super().__init__(message)
        if stage is not None:
            self.stage = stage


class SourceOpenError(SnowMaskError):
    """Input raster cannot be opened."""

    stage = "open"


class InsufficientBandsError(SnowMaskError):
    """Input raster has fewer bands than the classifier needs."""

    stage = "load"

    def __init__(self, message: str, band_count: int = 0, required: int = 0):
        super().__init__(message)
        self.band_count = band_count
        self.required = required


class BandSizeMismatchError(SnowMaskError):
    """The two input bands do not share the same width/height."""

    stage = "load"


class OutputCreateError(SnowMaskError):
    """Output raster cannot be created or fully written."""

    stage = "write"


class BandReadError(SnowMaskError):
    """A band could not be read from an opened input raster."""

    stage = "load"
