from __future__ import annotations

import logging
import os
from typing import Sequence

import numpy as np
import rasterio
from rasterio.transform import Affine
from rasterio.crs import CRS
from rasterio.errors import RasterioError

from pipeline.errors import OutputCreateError

logger = logging.getLogger(__name__)


class GeoTiffDataset:
    """Writable rasterio dataset handed out by GeoTiffSink.create()."""

    def __init__(self, dataset, path: str):
        self._ds = dataset
        self.path = path

    def set_geotransform(self, transform: Sequence[float]) -> None:
        self._ds.transform = Affine.from_gdal(*transform)

    def set_projection(self, projection: str) -> None:
        if projection:
            self._ds.crs = CRS.from_wkt(projection)

    def write_band(self, index: int, data: np.ndarray) -> None:
        self._ds.write(data, index)

    def close(self) -> None:
        self._ds.close()

    def discard(self) -> None:
        try:
            if not self._ds.closed:
                self._ds.close()
        finally:
            if os.path.exists(self.path):
                os.remove(self.path)
                logger.warning("Removed incomplete output %s", self.path)


class GeoTiffSink:
    """Creates output rasters through rasterio. Defaults to the GTiff driver.

    Extra keyword arguments are passed to rasterio as creation options,
    e.g. GeoTiffSink(compress="lzw").
    """

    def __init__(self, driver: str = "GTiff", **creation_options):
        self.driver = driver
        self.creation_options = creation_options

    def create(self, path: str, width: int, height: int, band_count: int, dtype: str = "uint8") -> GeoTiffDataset:
        try:
            ds = rasterio.open(
                path,
                "w",
                driver=self.driver,
                width=width,
                height=height,
                count=band_count,
                dtype=dtype,
                **self.creation_options,
            )
        except (RasterioError, OSError, ValueError) as e:
            raise OutputCreateError(f"Cannot create output dataset {path} with driver {self.driver}: {e}") from e
        return GeoTiffDataset(ds, str(path))
