from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

import numpy as np

from models.utility import normalized_difference

# Sentinel-2 band order: B3 = green, B11 = SWIR-1
GREEN_BAND = 3
SWIR_BAND = 11
NDSI_THRESHOLD = 0.4

MASK_ON = 255


@dataclass
class ClassificationBuffer:
    """RGB-encoded snow classification, each channel a (H, W) uint8 array.

    red: 255 where non-snow
    green: always 0
    blue: 255 where snow
    """

    red: np.ndarray
    green: np.ndarray
    blue: np.ndarray

    @property
    def snow_mask(self) -> np.ndarray:
        return self.blue == MASK_ON

    @property
    def snow_pixels(self) -> int:
        return int(np.count_nonzero(self.snow_mask))

    @property
    def total_pixels(self) -> int:
        return int(self.blue.size)

    @property
    def snow_fraction(self) -> float:
        if self.total_pixels == 0:
            return 0.0
        return self.snow_pixels / self.total_pixels

    def as_rgb(self) -> np.ndarray:
        """(H, W, 3) view for display."""
        return np.dstack([self.red, self.green, self.blue])


def compute_ndsi(green: np.ndarray, swir: np.ndarray) -> np.ndarray:
    """NDSI = (green - swir) / (green + swir); 0 where both reflectances are 0."""
    return normalized_difference(green, swir)


def encode_classification(snow: np.ndarray) -> ClassificationBuffer:
    snow = np.asarray(snow, dtype=bool)
    red = np.where(snow, 0, MASK_ON).astype(np.uint8)
    blue = np.where(snow, MASK_ON, 0).astype(np.uint8)
    green = np.zeros(snow.shape, dtype=np.uint8)
    return ClassificationBuffer(red=red, green=green, blue=blue)


def classify_snow(green: np.ndarray, swir: np.ndarray, threshold: float = NDSI_THRESHOLD) -> ClassificationBuffer:
    """Snow where NDSI > threshold (strict), non-snow otherwise (including NaN)."""
    green = np.asarray(green)
    swir = np.asarray(swir)
    if green.shape != swir.shape:
        raise ValueError(f"Band shapes differ: green {green.shape} vs swir {swir.shape}")
    ndsi = compute_ndsi(green, swir)
    return encode_classification(ndsi > np.float32(threshold))


class NdsiSnowClassifier:
    """Snow/non-snow classifier on the Normalized Difference Snow Index."""

    name = "NDSI"

    def __init__(self, green_band: int = GREEN_BAND, swir_band: int = SWIR_BAND, threshold: float = NDSI_THRESHOLD):
        self.green_band = green_band
        self.swir_band = swir_band
        self.threshold = threshold

    @property
    def band_indices(self) -> Tuple[int, int]:
        return self.green_band, self.swir_band

    def index(self, first: np.ndarray, second: np.ndarray) -> np.ndarray:
        return compute_ndsi(first, second)

    def classify(self, first: np.ndarray, second: np.ndarray) -> ClassificationBuffer:
        return classify_snow(first, second, self.threshold)

    def __repr__(self):
        return f"NdsiSnowClassifier(green_band={self.green_band}, swir_band={self.swir_band}, threshold={self.threshold})"
