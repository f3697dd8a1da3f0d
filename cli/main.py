from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

logger = logging.getLogger("snowmask")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="NDSI snow / non-snow mapping of a multiband raster")
    p.add_argument("--input", default=None, help="Path to input raster (default: input_sentinel2.tif)")
    p.add_argument("--out", default=None, help="Path to output GeoTIFF (default: snow_only_colored.tif)")
    p.add_argument("--config", default=None, help="Optional YAML config file")
    p.add_argument("--green-band", type=int, default=None, help="1-based green band index (default: 3)")
    p.add_argument("--swir-band", type=int, default=None, help="1-based SWIR band index (default: 11)")
    p.add_argument("--threshold", type=float, default=None, help="NDSI snow threshold (default: 0.4)")
    p.add_argument("--quicklook", action="store_true", default=None, help="Also write a diagnostic png")
    p.add_argument("--log-dir", default=None, help="Directory for snowmask.log")
    return p


def detect_snow(config):
    import rasterio

    from inputs.readers.geotiff_reader import open_source
    from models.snowmask import NdsiSnowClassifier
    from outputs.writers.geotiff_writer import GeoTiffSink
    from pipeline.processor import SnowDetector

    out_path = Path(config.output_path)
    classifier = NdsiSnowClassifier(
        green_band=config.green_band,
        swir_band=config.swir_band,
        threshold=config.threshold,
    )
    quicklook_dir = str(out_path.parent) if config.quicklook else None
    processor = SnowDetector(classifier, quicklook_dir=quicklook_dir)

    logger.info("Input: %s", config.input_path)
    logger.info("Classifier: %r", classifier)

    # one GDAL environment (driver registration) for the whole run
    with rasterio.Env():
        with open_source(config.input_path) as source:
            result = processor.process(source, GeoTiffSink(driver=config.driver), str(out_path))
    return result


def main(argv=None):
    import yaml

    from cli.logging_utils import setup_logger
    from pipeline.config import SnowConfig, load_config
    from pipeline.errors import SnowMaskError

    args = build_parser().parse_args(argv)
    setup_logger(log_dir=args.log_dir)

    try:
        config = load_config(args.config) if args.config else SnowConfig()
        config = config.override(
            input_path=args.input,
            output_path=args.out,
            green_band=args.green_band,
            swir_band=args.swir_band,
            threshold=args.threshold,
            quicklook=args.quicklook,
        )
    except (OSError, ValueError, yaml.YAMLError) as e:
        logger.error("config stage failed: %s", e)
        raise SystemExit(2)

    try:
        result = detect_snow(config)
    except SnowMaskError as e:
        logger.error("%s stage failed: %s", e.stage, e)
        raise SystemExit(2)

    logger.info("Done. Output written to: %s", result.output_path)
    return 0


if __name__ == "__main__":
    main()
