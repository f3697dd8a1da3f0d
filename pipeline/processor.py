from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Protocol

from inputs.readers.base_reader import RasterSource
from models.base_classifier import IndexClassifier
from models.snowmask import NdsiSnowClassifier
from outputs.writers.base_writer import RasterSink
from pipeline.inference import InferenceResult, run_inference
from pipeline.loading import load_bands

logger = logging.getLogger(__name__)


class RasterProcessor(Protocol):
    """Processor interface: read a scene from a source, write a product to a sink."""

    def process(self, source: RasterSource, sink: RasterSink, out_path: str) -> InferenceResult:
        ...


class SnowDetector:
    """Snow / non-snow mapping of one scene with an index classifier (NDSI by default).

    quicklook_dir: if set, a diagnostic png is written there as <out stem>_quicklook.png
    """

    def __init__(self, classifier: Optional[IndexClassifier] = None, quicklook_dir: Optional[str] = None):
        self.classifier = classifier if classifier is not None else NdsiSnowClassifier()
        self.quicklook_dir = quicklook_dir

    def process(self, source: RasterSource, sink: RasterSink, out_path: str) -> InferenceResult:
        green_index, swir_index = self.classifier.band_indices
        bands = load_bands(source, green_index, swir_index)
        result = run_inference(self.classifier, bands, sink, out_path)

        if self.quicklook_dir is not None:
            from models.quicklook import save_quicklook

            png = str(Path(self.quicklook_dir) / (Path(out_path).stem + "_quicklook.png"))
            try:
                save_quicklook(
                    bands.green,
                    self.classifier.index(bands.green, bands.swir),
                    result.classification,
                    self.classifier.threshold,
                    png,
                    title=Path(out_path).stem,
                )
            except (OSError, ValueError, RuntimeError) as e:
                # the raster is already written; the quicklook is optional
                logger.warning("Quicklook not written (%s): %s", png, e)
            else:
                logger.info("Quicklook written: %s", png)
        return result
