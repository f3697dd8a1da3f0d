from pathlib import Path

import numpy as np
import pytest
import rasterio
from rasterio.crs import CRS
from rasterio.transform import from_origin

SCENE_CRS = CRS.from_epsg(32633)
SCENE_TRANSFORM = from_origin(500000.0, 5200000.0, 20.0, 20.0)


def write_multiband(path, green, swir, count=11, green_band=3, swir_band=11, crs=SCENE_CRS,
                    transform=SCENE_TRANSFORM):
    """Write a float32 GeoTIFF with `count` bands, green/swir at the given 1-based indices."""
    green = np.asarray(green, dtype=np.float32)
    swir = np.asarray(swir, dtype=np.float32)
    height, width = green.shape
    data = np.full((count, height, width), 0.1, dtype=np.float32)
    if green_band <= count:
        data[green_band - 1] = green
    if swir_band <= count:
        data[swir_band - 1] = swir
    with rasterio.open(
        path, "w", driver="GTiff", width=width, height=height, count=count,
        dtype="float32", crs=crs, transform=transform,
    ) as dst:
        dst.write(data)
    return Path(path)


def write_corrupt_multiband(path, count=11, size=64):
    """Write a deflate-tiled GeoTIFF, then overwrite every compressed tile with 0xFF."""
    rng = np.random.default_rng(1)
    data = rng.uniform(0.0, 1.0, size=(count, size, size)).astype(np.float32)
    with rasterio.open(
        path, "w", driver="GTiff", width=size, height=size, count=count, dtype="float32",
        crs=SCENE_CRS, transform=SCENE_TRANSFORM, tiled=True, blockxsize=16, blockysize=16,
        compress="deflate",
    ) as dst:
        dst.write(data)
    with rasterio.open(path) as src:
        blocks = [
            (int(src.get_tag_item(f"BLOCK_OFFSET_{col}_{row}", "TIFF", bidx=1)),
             int(src.get_tag_item(f"BLOCK_SIZE_{col}_{row}", "TIFF", bidx=1)))
            for row in range(size // 16) for col in range(size // 16)
        ]
    path = Path(path)
    raw = bytearray(path.read_bytes())
    for offset, length in blocks:
        raw[offset:offset + length] = b"\xff" * length
    path.write_bytes(bytes(raw))
    return path


@pytest.fixture
def corrupt_scene(tmp_path):
    return write_corrupt_multiband(tmp_path / "corrupt.tif")


@pytest.fixture
def scene_a(tmp_path):
    """2x1 scene: green=[0.5, 0.2], swir=[0.1, 0.3]."""
    return write_multiband(tmp_path / "scene_a.tif", [[0.5, 0.2]], [[0.1, 0.3]])


@pytest.fixture
def ten_band_scene(tmp_path):
    return write_multiband(tmp_path / "ten_bands.tif", [[0.5, 0.2]], [[0.1, 0.3]], count=10)


class FakeSource:
    """In-memory RasterSource; `sizes` overrides per-band (width, height)."""

    def __init__(self, bands, transform=(10.0, 1.0, 0.0, 20.0, 0.0, -1.0), projection="LOCAL_CS[\"test\"]",
                 sizes=None):
        self.bands = {i: np.asarray(b) for i, b in bands.items()}
        self._count = max(self.bands) if self.bands else 0
        self._transform = transform
        self._projection = projection
        self.sizes = sizes or {}
        self.reads = []
        self.closed = False

    @property
    def band_count(self):
        return self._count

    def band_size(self, index):
        if index in self.sizes:
            return self.sizes[index]
        height, width = self.bands[index].shape
        return width, height

    def read_band(self, index):
        self.reads.append(index)
        return self.bands[index]

    def geotransform(self):
        return self._transform

    def projection(self):
        return self._projection

    def close(self):
        self.closed = True


class FakeDataset:
    def __init__(self, fail_on_write=False):
        self.fail_on_write = fail_on_write
        self.transform = None
        self.projection = None
        self.bands = {}
        self.closed = False
        self.discarded = False

    def set_geotransform(self, transform):
        self.transform = tuple(transform)

    def set_projection(self, projection):
        self.projection = projection

    def write_band(self, index, data):
        if self.fail_on_write:
            raise OSError("disk full")
        self.bands[index] = np.array(data)

    def close(self):
        self.closed = True

    def discard(self):
        self.closed = True
        self.discarded = True


class FakeSink:
    def __init__(self, fail_on_write=False):
        self.created = []
        self.dataset = FakeDataset(fail_on_write=fail_on_write)

    def create(self, path, width, height, band_count, dtype):
        self.created.append((path, width, height, band_count, dtype))
        return self.dataset


def bands_with(green, swir, count=11, green_band=3, swir_band=11):
    green = np.asarray(green, dtype=np.float32)
    swir = np.asarray(swir, dtype=np.float32)
    bands = {i: np.full(green.shape, 0.1, dtype=np.float32) for i in range(1, count + 1)}
    bands[green_band] = green
    bands[swir_band] = swir
    return bands


@pytest.fixture
def fake_source():
    return FakeSource


@pytest.fixture
def fake_sink():
    return FakeSink


@pytest.fixture
def make_bands():
    return bands_with
