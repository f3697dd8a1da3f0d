from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np

from inputs.readers.base_reader import GeoReference
from models.base_classifier import IndexClassifier
from models.snowmask import ClassificationBuffer
from outputs.writers.base_writer import RasterSink
from pipeline.errors import OutputCreateError
from pipeline.loading import LoadedBands

logger = logging.getLogger(__name__)


@dataclass
class InferenceResult:
    classification: ClassificationBuffer
    output_path: str


def write_classification(sink: RasterSink, width: int, height: int, geo_ref: GeoReference,
                         red: np.ndarray, green: np.ndarray, blue: np.ndarray, path: str) -> None:
    """Persist the classification as a 3-band uint8 raster: 1 = non-snow, 2 = zero, 3 = snow."""
    dst = sink.create(str(path), width, height, 3, "uint8")
    try:
        dst.set_geotransform(geo_ref.transform)
        dst.set_projection(geo_ref.projection)
        # one full-scene write per band
        for index, band in enumerate((red, green, blue), start=1):
            dst.write_band(index, band)
        dst.close()
    except Exception as e:
        try:
            dst.discard()
        except Exception as discard_error:
            logger.warning("Could not discard incomplete output %s: %s", path, discard_error)
        raise OutputCreateError(f"Cannot write output dataset {path}: {e}") from e
    logger.info("Output written: %s (Blue=Snow, Red=Non-snow)", path)


def run_inference(classifier: IndexClassifier, bands: LoadedBands, sink: RasterSink, out_path: str) -> InferenceResult:
    """Classify the loaded bands and write the result with the input georeferencing."""
    classification = classifier.classify(bands.green, bands.swir)
    logger.info("%s snow cover: %.1f%% (%d of %d pixels)", classifier.name,
                100 * classification.snow_fraction, classification.snow_pixels, classification.total_pixels)

    write_classification(
        sink,
        bands.width,
        bands.height,
        bands.geo_ref,
        classification.red,
        classification.green,
        classification.blue,
        out_path,
    )
    return InferenceResult(classification=classification, output_path=str(out_path))
