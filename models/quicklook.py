import os

import numpy as np
import matplotlib.pyplot as plt
from skimage import exposure

from models.snowmask import ClassificationBuffer


def stretch_band(band: np.ndarray) -> np.ndarray:
    """Contrast stretch to [0, 1] using the 2nd/98th percentiles (ignore outliers)."""
    valid = band[np.isfinite(band)]
    if valid.size == 0:
        return np.zeros(band.shape, dtype=np.float32)
    p2, p98 = np.percentile(valid, (2, 98))
    if p98 <= p2:
        return np.zeros(band.shape, dtype=np.float32)
    band = np.nan_to_num(band, nan=p2, posinf=p98, neginf=p2)
    return exposure.rescale_intensity(band, in_range=(p2, p98), out_range=(0.0, 1.0)).astype(np.float32)


def save_quicklook(green: np.ndarray, ndsi: np.ndarray, classification: ClassificationBuffer,
                   threshold: float, out_path: str, title: str = None) -> str:
    '''
    diagnostic figure for one classified scene
    Args:
        green: green band, (H, W)
        ndsi: NDSI image, (H, W)
        classification: RGB snow/non-snow encoding
        threshold: NDSI threshold used for the classification
        out_path: png file path
        title: figure title, defaults to the png basename
    Returns:
        out_path
    '''
    ndsi_valid = ndsi[np.isfinite(ndsi)]

    out_dir = os.path.dirname(out_path)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)

    fig, axes = plt.subplots(nrows=2, ncols=2, figsize=(12, 10))
    try:
        fig.suptitle(title or os.path.basename(out_path).replace('.png', ''))
        axes = axes.flatten()

        axes[0].imshow(stretch_band(green), cmap='gray')
        axes[0].set_title('Green')

        axes[1].imshow(ndsi, cmap='RdBu', vmin=-1, vmax=1)
        axes[1].set_title('NDSI')

        if ndsi_valid.size:
            counts, bin_edges = np.histogram(ndsi_valid, bins=100, range=(-1, 1))
            bin_centers = (bin_edges[:-1] + bin_edges[1:]) / 2
            axes[2].plot(bin_centers, counts, label='NDSI')
        axes[2].axvline(x=threshold, color='r', linestyle='--', linewidth=2, label=f'threshold = {threshold:.3f}')
        axes[2].set_xlabel('Value')
        axes[2].set_ylabel('Pixel Counts')
        axes[2].set_title('NDSI Histogram')
        axes[2].legend()

        axes[3].imshow(classification.as_rgb())
        axes[3].set_title(f'Snow (blue) {100 * classification.snow_fraction:.1f}%')

        fig.savefig(out_path)
    finally:
        plt.close(fig)
    return out_path
