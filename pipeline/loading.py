from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np

from inputs.normalizer import to_float32
from inputs.readers.base_reader import GeoReference, RasterSource
from inputs.validators import validate_band_count, validate_band_sizes
from pipeline.errors import BandSizeMismatchError, InsufficientBandsError

logger = logging.getLogger(__name__)


@dataclass
class LoadedBands:
    green: np.ndarray  # 2D float32, (height, width)
    swir: np.ndarray  # 2D float32, (height, width)
    width: int
    height: int
    geo_ref: GeoReference


def load_bands(source: RasterSource, green_index: int, swir_index: int) -> LoadedBands:
    '''
    read the green and SWIR bands plus the georeferencing of a scene
    Args:
        source: open raster source
        green_index: 1-based green band index
        swir_index: 1-based SWIR band index
    Returns:
        LoadedBands; width/height are taken from the green band
    Raises:
        InsufficientBandsError: the source lacks one of the bands
        BandSizeMismatchError: the SWIR band is not the size of the green band
        BandReadError: a band read fails after the source was opened
    '''
    v = validate_band_count(source, [green_index, swir_index])
    if not v.ok:
        raise InsufficientBandsError("; ".join(v.messages), band_count=source.band_count,
                                     required=max(green_index, swir_index))

    width, height = source.band_size(green_index)
    v = validate_band_sizes(source, green_index, swir_index)
    if not v.ok:
        raise BandSizeMismatchError("; ".join(v.messages))

    green = to_float32(source.read_band(green_index))
    swir = to_float32(source.read_band(swir_index))

    geo_ref = GeoReference(transform=tuple(source.geotransform()), projection=source.projection())
    logger.info("Loaded bands %d (green) and %d (SWIR): %dx%d pixels", green_index, swir_index, width, height)
    return LoadedBands(green=green, swir=swir, width=width, height=height, geo_ref=geo_ref)
