from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, Tuple

import numpy as np

if TYPE_CHECKING:
    from models.snowmask import ClassificationBuffer


class IndexClassifier(Protocol):
    """Two-band index classifier (NDSI today; NDVI/NDWI would plug in the same way).

    band_indices: 1-based (first, second) band indices the index is computed from
    """

    name: str
    threshold: float

    @property
    def band_indices(self) -> Tuple[int, int]:
        ...

    def index(self, first: np.ndarray, second: np.ndarray) -> np.ndarray:
        ...

    def classify(self, first: np.ndarray, second: np.ndarray) -> "ClassificationBuffer":
        ...
