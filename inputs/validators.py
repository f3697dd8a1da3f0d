from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

from .readers.base_reader import RasterSource


@dataclass
class ValidationResult:
    ok: bool
    messages: List[str]


def validate_band_count(source: RasterSource, required: Sequence[int]) -> ValidationResult:
    """Validates the raster has every required (1-based) band index."""
    invalid = [i for i in required if i < 1]
    if invalid:
        return ValidationResult(
            ok=False,
            messages=[f"Invalid band index(es): {invalid}; band indices are 1-based"],
        )
    needed = max(required)
    if source.band_count < needed:
        return ValidationResult(
            ok=False,
            messages=[
                f"Insufficient bands: need at least {needed}",
                f"Available bands: {source.band_count}",
            ],
        )
    return ValidationResult(ok=True, messages=[])


def validate_band_sizes(source: RasterSource, reference: int, other: int) -> ValidationResult:
    """Validates two bands share the same (width, height)."""
    ref_size = tuple(source.band_size(reference))
    other_size = tuple(source.band_size(other))
    if ref_size != other_size:
        return ValidationResult(
            ok=False,
            messages=[f"Band size mismatch: {ref_size[0]}x{ref_size[1]} vs {other_size[0]}x{other_size[1]}"],
        )
    return ValidationResult(ok=True, messages=[])
