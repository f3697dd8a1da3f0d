"""
Configuration for a snow mask run.

Defaults reproduce the fixed Sentinel-2 setup: green = band 3, SWIR = band 11,
NDSI threshold = 0.4, reading input_sentinel2.tif and writing
snow_only_colored.tif.

Usage:
    from pipeline.config import load_config
    cfg = load_config('snowmask.yml')

Config file (all keys optional):
    bands:
      green: 3
      swir: 11
    threshold: 0.4
    paths:
      input: input_sentinel2.tif
      output: snow_only_colored.tif
    driver: GTiff
    quicklook: false

Relative paths are resolved against the config file's directory.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path

import yaml

from models.snowmask import GREEN_BAND, NDSI_THRESHOLD, SWIR_BAND

DEFAULT_INPUT = "input_sentinel2.tif"
DEFAULT_OUTPUT = "snow_only_colored.tif"


@dataclass(frozen=True)
class SnowConfig:
    green_band: int = GREEN_BAND
    swir_band: int = SWIR_BAND
    threshold: float = NDSI_THRESHOLD
    input_path: str = DEFAULT_INPUT
    output_path: str = DEFAULT_OUTPUT
    driver: str = "GTiff"
    quicklook: bool = False

    def __post_init__(self):
        if self.green_band < 1 or self.swir_band < 1:
            raise ValueError(f"Band indices are 1-based, got green={self.green_band}, swir={self.swir_band}")
        if not -1.0 <= self.threshold <= 1.0:
            raise ValueError(f"NDSI threshold must lie in [-1, 1], got {self.threshold}")

    def override(self, **kwargs) -> "SnowConfig":
        """Return a copy with every non-None keyword applied."""
        return replace(self, **{k: v for k, v in kwargs.items() if v is not None})


def load_config(config_file) -> SnowConfig:
    """
    Load a YAML config file into a SnowConfig.

    Args:
        config_file: path to the YAML file.

    Returns:
        SnowConfig with relative paths resolved against the file's directory.

    Raises:
        FileNotFoundError: if config_file does not exist.
        ValueError: on an invalid band index or threshold, or when the file
                    or its bands/paths sections are not mappings.
    """
    config_path = Path(config_file).resolve()
    with open(config_path) as f:
        cfg = yaml.safe_load(f) or {}

    base = config_path.parent

    def resolve(p):
        path = Path(p)
        return str(path if path.is_absolute() else (base / path).resolve())

    def section(mapping, name):
        if not isinstance(mapping, dict):
            raise ValueError(f"{name} in {config_path} must be a mapping")
        return mapping

    cfg = section(cfg, 'config file')
    bands = section(cfg.get('bands') or {}, "'bands'")
    paths = section(cfg.get('paths') or {}, "'paths'")

    return SnowConfig().override(
        green_band=int(bands['green']) if 'green' in bands else None,
        swir_band=int(bands['swir']) if 'swir' in bands else None,
        threshold=float(cfg['threshold']) if 'threshold' in cfg else None,
        input_path=resolve(paths['input']) if 'input' in paths else None,
        output_path=resolve(paths['output']) if 'output' in paths else None,
        driver=cfg.get('driver'),
        quicklook=bool(cfg['quicklook']) if 'quicklook' in cfg else None,
    )
