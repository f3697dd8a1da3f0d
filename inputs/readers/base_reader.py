from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Tuple

import numpy as np


@dataclass(frozen=True)
class GeoReference:
    """Georeferencing copied verbatim from the input to the output.

    transform: 6 affine coefficients in GDAL order
               (x_origin, pixel_width, row_rotation, y_origin, column_rotation, pixel_height)
    projection: opaque projection string (WKT), empty if the source has no CRS
    """

    transform: Tuple[float, float, float, float, float, float]
    projection: str = ""


class RasterSource(Protocol):
    """Reader interface. Band indices are 1-based, like rasterio/GDAL."""

    @property
    def band_count(self) -> int:
        ...

    def band_size(self, index: int) -> Tuple[int, int]:
        """Return (width, height) of the band."""
        ...

    def read_band(self, index: int) -> np.ndarray:
        """Return the full band as a (height, width) float32 array."""
        ...

    def geotransform(self) -> Tuple[float, float, float, float, float, float]:
        ...

    def projection(self) -> str:
        ...

    def close(self) -> None:
        ...
