import numpy as np


def normalized_difference(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """(a - b) / (a + b) in float32; pixels where a + b == 0 are set to 0."""
    a = np.asarray(a, dtype=np.float32)
    b = np.asarray(b, dtype=np.float32)
    out = np.zeros(np.broadcast(a, b).shape, dtype=np.float32)
    with np.errstate(invalid="ignore", over="ignore"):
        total = a + b
        np.divide(a - b, total, out=out, where=total != 0)
    return out
