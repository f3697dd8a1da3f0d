import numpy as np


def to_float32(band: np.ndarray) -> np.ndarray:
    """Band maths expects a 2D, C-ordered float32 array."""
    band = np.asarray(band)
    if band.ndim == 3 and band.shape[0] == 1:
        # (1, H, W) from a single-band rasterio read
        band = band[0]
    if band.ndim != 2:
        raise ValueError(f"Expected a 2D band, got shape {band.shape}")
    if band.dtype == np.float32 and band.flags.c_contiguous:
        return band
    return np.ascontiguousarray(band, dtype=np.float32)
