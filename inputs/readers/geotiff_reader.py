from __future__ import annotations

import logging
from typing import Tuple

import numpy as np
import rasterio
from rasterio.errors import RasterioIOError

from pipeline.errors import BandReadError, SourceOpenError

from .base_reader import RasterSource

logger = logging.getLogger(__name__)


class GeoTiffSource(RasterSource):
    """Raster source backed by an open rasterio dataset (GeoTIFF or any GDAL format).
    """

    def __init__(self, dataset):
        self._ds = dataset

    @property
    def path(self) -> str:
        return self._ds.name

    @property
    def band_count(self) -> int:
        return self._ds.count

    def _check_index(self, index: int) -> None:
        # rasterio uses 1-based band indices
        if index < 1 or index > self._ds.count:
            raise IndexError(f"Band {index} out of range 1..{self._ds.count}")

    def band_size(self, index: int) -> Tuple[int, int]:
        self._check_index(index)
        return self._ds.width, self._ds.height

    def read_band(self, index: int) -> np.ndarray:
        self._check_index(index)
        try:
            return self._ds.read(index, out_dtype="float32")
        except RasterioIOError as e:
            raise BandReadError(f"Cannot read band {index} of {self._ds.name}: {e}") from e

    def geotransform(self) -> Tuple[float, float, float, float, float, float]:
        return tuple(float(c) for c in self._ds.transform.to_gdal())

    def projection(self) -> str:
        crs = self._ds.crs
        return crs.to_wkt() if crs else ""

    def close(self) -> None:
        self._ds.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False


def open_source(path: str) -> GeoTiffSource:
    """Open a raster for reading, raising SourceOpenError if rasterio cannot."""
    try:
        ds = rasterio.open(path)
    except RasterioIOError as e:
        raise SourceOpenError(f"Cannot open input file: {path} ({e})") from e
    logger.debug("Opened %s: %d bands, %dx%d", path, ds.count, ds.width, ds.height)
    return GeoTiffSource(ds)
