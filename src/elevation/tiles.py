"""SRTM tile naming and raw .hgt parsing."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from shared.constants import TILE_EXTENSION

if TYPE_CHECKING:
    from pathlib import Path

_TILE_NAME_RE = re.compile(r'^([NS])(\d{2})([EW])(\d{3})$')


class TileNotFoundError(FileNotFoundError):
    """Raised when the .hgt file backing a tile is absent."""


class TileFormatError(ValueError):
    """Raised when a .hgt file is not a square grid of the expected size."""


@dataclass(frozen=True)
class TileKey:
    """Integer south-west corner of a one-degree tile."""

    lat: int
    lon: int

    @classmethod
    def containing(cls, lat: float, lon: float) -> TileKey:
        return cls(math.floor(lat), math.floor(lon))

    @property
    def name(self) -> str:
        return make_tile_name(self.lat, self.lon)

    def file_name(self) -> str:
        return f'{self.name}{TILE_EXTENSION}'


def make_tile_name(lat: float, lon: float) -> str:
    """Canonical tile name for the tile containing (lat, lon).

    The south-west corner is the floor of both coordinates, so 47.3 maps to
    ``N47`` and -0.5 maps to ``S01``.
    """
    lat_floor = math.floor(lat)
    lon_floor = math.floor(lon)
    lat_prefix = 'N' if lat_floor >= 0 else 'S'
    lon_prefix = 'E' if lon_floor >= 0 else 'W'
    return f'{lat_prefix}{abs(lat_floor):02d}{lon_prefix}{abs(lon_floor):03d}'


def parse_tile_name(name: str) -> tuple[int, int]:
    """Inverse of make_tile_name: ``'S01W001'`` -> ``(-1, -1)``."""
    stem = name.upper()
    if stem.endswith(TILE_EXTENSION.upper()):
        stem = stem[: -len(TILE_EXTENSION)]
    match = _TILE_NAME_RE.match(stem)
    if match is None:
        msg = f'Invalid tile name: {name!r}'
        raise ValueError(msg)
    lat_hemi, lat_abs, lon_hemi, lon_abs = match.groups()
    lat = int(lat_abs) * (1 if lat_hemi == 'N' else -1)
    lon = int(lon_abs) * (1 if lon_hemi == 'E' else -1)
    return lat, lon


def read_hgt(path: Path, expected_samples: int | None = None) -> np.ndarray:
    """Read a headerless .hgt file (big-endian int16, square, row 0 = north).

    Args:
        path: File to read.
        expected_samples: Required side length, or None to accept any square.

    Returns:
        Read-only int16 array of shape (side, side).
    """
    size = path.stat().st_size
    if size % 2:
        msg = f'{path}: odd byte count {size}, not a run of int16 samples'
        raise TileFormatError(msg)
    raw = np.fromfile(path, dtype='>i2')
    side = math.isqrt(raw.size)
    if side == 0 or side * side != raw.size:
        msg = f'{path}: {raw.size} samples do not form a square grid'
        raise TileFormatError(msg)
    if expected_samples is not None and side != expected_samples:
        msg = f'{path}: side {side} differs from expected {expected_samples}'
        raise TileFormatError(msg)
    data = raw.astype(np.int16).reshape((side, side))
    data.setflags(write=False)
    return data
