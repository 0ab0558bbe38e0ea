"""Pytest configuration and fixtures for terrain loader tests."""

import sys
from pathlib import Path

import numpy as np
import pytest

# Add src directory to path for imports
src_path = Path(__file__).parent.parent / 'src'
sys.path.insert(0, str(src_path))


@pytest.fixture
def tile_dir(tmp_path):
    """Folder for synthetic .hgt tiles."""
    path = tmp_path / 'srtm'
    path.mkdir()
    return path


@pytest.fixture
def write_tile(tile_dir):
    """Factory writing a big-endian int16 .hgt tile into tile_dir."""

    def _write(name: str, data) -> Path:
        arr = np.asarray(data, dtype='>i2')
        path = tile_dir / f'{name}.hgt'
        arr.tofile(path)
        return path

    return _write


@pytest.fixture
def make_field():
    """Factory building an ElevationField straight from a 2D array."""
    from domain.models import GeoBoundingBox
    from elevation.field import ElevationField
    from shared.constants import ARC_SECOND_DEG

    def _make(data, valid=None) -> ElevationField:
        arr = np.asarray(data, dtype=np.int32)
        mask = np.ones(arr.shape, dtype=bool) if valid is None else np.asarray(valid, dtype=bool)
        height, width = arr.shape
        bbox = GeoBoundingBox(
            west=28.0,
            east=28.0 + max(width, 1) * ARC_SECOND_DEG,
            south=46.0,
            north=46.0 + max(height, 1) * ARC_SECOND_DEG,
        )
        real = arr[mask]
        return ElevationField(
            bbox=bbox,
            step=ARC_SECOND_DEG,
            data=np.where(mask, arr, 0).astype(np.int32),
            valid=mask,
            min_elevation=int(real.min()) if real.size else 0,
            max_elevation=int(real.max()) if real.size else 0,
            missing_samples=int(np.count_nonzero(~mask)),
        )

    return _make
