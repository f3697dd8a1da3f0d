from __future__ import annotations

from typing import Protocol, Sequence

import numpy as np


class SinkDataset(Protocol):
    """A created, writable output dataset. Band indices are 1-based."""

    def set_geotransform(self, transform: Sequence[float]) -> None:
        ...

    def set_projection(self, projection: str) -> None:
        ...

    def write_band(self, index: int, data: np.ndarray) -> None:
        ...

    def close(self) -> None:
        ...

    def discard(self) -> None:
        """Close and remove a partially written dataset."""
        ...


class RasterSink(Protocol):
    """Writer interface. Implementations create datasets that SinkDataset writes into."""

    def create(self, path: str, width: int, height: int, band_count: int, dtype: str) -> SinkDataset:
        ...
