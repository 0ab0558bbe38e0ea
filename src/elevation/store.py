"""SRTM tile store with lazy loading and point/region queries."""

from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import TYPE_CHECKING

import numpy as np

from elevation.field import ElevationField
from elevation.tiles import (
    TileFormatError,
    TileKey,
    TileNotFoundError,
    make_tile_name,
    read_hgt,
)
from shared.constants import (
    ARC_SECOND_DEG,
    FALLBACK_ELEVATION_M,
    SRTM_NODATA,
    TILE_EXTENSION,
)

if TYPE_CHECKING:
    from domain.models import GeoBoundingBox

logger = logging.getLogger(__name__)

# Decimal digits kept of extent / step before rounding up
_CELL_DIGITS = 9


def _cells(extent: float, step: float) -> int:
    # Round off float noise so 0.1 / 0.01 is 10 cells, not 11
    return math.ceil(round(extent / step, _CELL_DIGITS))


def grid_dimensions(bbox: GeoBoundingBox, step: float) -> tuple[int, int]:
    """(width, height) of the sampling grid covering bbox at step degrees.

    width = ceil((east - west) / step), height = ceil((north - south) / step).
    """
    return _cells(bbox.east - bbox.west, step), _cells(bbox.north - bbox.south, step)


def _nearest_index(offset, side: int):
    """Nearest sample index for a fractional offset in [0, 1] of a tile."""
    idx = np.floor(np.asarray(offset) * (side - 1) + 0.5).astype(np.int64)
    return np.clip(idx, 0, side - 1)


class ElevationTileStore:
    """Loads .hgt tiles from a folder and answers elevation queries.

    Tiles are parsed on first access and kept for the lifetime of the store.
    Arrays handed out are read-only; the store is their only owner.

    Usage:
        store = ElevationTileStore('data/srtm')
        h = store.point_elevation(47.0, 28.8)
        field = store.region_elevation(bbox, downsample=4)
    """

    def __init__(
        self,
        data_dir: str | Path,
        *,
        tile_samples: int | None = None,
    ) -> None:
        """Initialize the store.

        Args:
            data_dir: Folder holding ``<name>.hgt`` files.
            tile_samples: Required tile side, or None to accept any square
                tile (SRTM1 3601, SRTM3 1201).
        """
        self.data_dir = Path(data_dir)
        self.tile_samples = tile_samples
        self._tiles: dict[str, np.ndarray] = {}

    @property
    def cached_tiles(self) -> list[str]:
        return sorted(self._tiles)

    def clear(self) -> None:
        self._tiles.clear()

    def tile_path(self, name: str) -> Path:
        return self.data_dir / f'{name}{TILE_EXTENSION}'

    def load_tile(self, name: str) -> np.ndarray:
        """Load a tile by canonical name, parsing it only once.

        Raises:
            TileNotFoundError: The .hgt file does not exist.
            TileFormatError: The file is not a square grid of the expected side.
        """
        cached = self._tiles.get(name)
        if cached is not None:
            return cached

        path = self.tile_path(name)
        if not path.exists():
            msg = f'SRTM tile not found: {path}'
            raise TileNotFoundError(msg)

        data = read_hgt(path, self.tile_samples)
        self._tiles[name] = data
        logger.info(
            'Loaded tile %s: %dx%d samples', name, data.shape[0], data.shape[1]
        )
        return data

    def required_tiles(self, bbox: GeoBoundingBox) -> list[TileKey]:
        """Tiles sampled inside bbox, north to south then west to east.

        Columns stop short of the east edge, so a tile that only touches it
        is not required.
        """
        lat_range = range(math.floor(bbox.north), math.floor(bbox.south) - 1, -1)
        lon_range = range(math.floor(bbox.west), math.ceil(bbox.east))
        return [TileKey(lat, lon) for lat in lat_range for lon in lon_range]

    def point_elevation(self, lat: float, lon: float) -> int:
        """Elevation (metres) of the sample nearest to (lat, lon).

        Voids read as 0. A missing tile raises TileNotFoundError.
        """
        key = TileKey.containing(lat, lon)
        tile = self.load_tile(make_tile_name(lat, lon))
        side = tile.shape[0]

        # Row 0 is the northern edge, column 0 the western edge
        row = int(_nearest_index(1 - (lat - key.lat), side))
        col = int(_nearest_index(lon - key.lon, side))
        value = int(tile[row, col])
        return FALLBACK_ELEVATION_M if value == SRTM_NODATA else value

    def _load_available(self, bbox: GeoBoundingBox) -> dict[TileKey, np.ndarray]:
        loaded: dict[TileKey, np.ndarray] = {}
        for key in self.required_tiles(bbox):
            try:
                loaded[key] = self.load_tile(key.name)
            except (TileNotFoundError, TileFormatError) as e:
                logger.warning('Could not load tile %s: %s', key.name, e)
        return loaded

    def region_elevation(
        self,
        bbox: GeoBoundingBox,
        downsample: int = 1,
    ) -> ElevationField:
        """Sample bbox on a regular grid of ``downsample`` arc-seconds.

        Walks north to south and west to east. Missing tiles are skipped with
        a warning; their cells fall back to 0 and are counted as missing.
        """
        if downsample < 1:
            msg = 'downsample must be a positive integer'
            raise ValueError(msg)
        step = ARC_SECOND_DEG * downsample
        width, height = grid_dimensions(bbox, step)
        logger.info('Bounding box: %dx%d samples (step %.6f deg)', width, height, step)

        loaded = self._load_available(bbox)

        lats = bbox.north - np.arange(height) * step
        lons = bbox.west + np.arange(width) * step
        row_tiles = np.floor(lats).astype(np.int64)
        col_tiles = np.floor(lons).astype(np.int64)

        data = np.full((height, width), FALLBACK_ELEVATION_M, dtype=np.int32)
        valid = np.zeros((height, width), dtype=bool)
        missing = 0
        nodata = 0

        for tile_lat in np.unique(row_tiles)[::-1]:
            rows = np.nonzero(row_tiles == tile_lat)[0]
            for tile_lon in np.unique(col_tiles):
                cols = np.nonzero(col_tiles == tile_lon)[0]
                tile = loaded.get(TileKey(int(tile_lat), int(tile_lon)))
                if tile is None:
                    missing += rows.size * cols.size
                    continue
                side = tile.shape[0]
                r_idx = _nearest_index(1 - (lats[rows] - tile_lat), side)
                c_idx = _nearest_index(lons[cols] - tile_lon, side)
                block = tile[np.ix_(r_idx, c_idx)].astype(np.int32)
                void = block == SRTM_NODATA
                block[void] = FALLBACK_ELEVATION_M
                data[np.ix_(rows, cols)] = block
                valid[np.ix_(rows, cols)] = ~void
                nodata += int(np.count_nonzero(void))

        if np.any(valid):
            min_elev = int(data[valid].min())
            max_elev = int(data[valid].max())
        else:
            min_elev = max_elev = FALLBACK_ELEVATION_M
            logger.warning('No valid elevation samples inside %s', bbox.describe())

        if missing:
            logger.warning('%d samples fell back to 0 m: tile coverage missing', missing)
        if nodata:
            logger.info('%d void samples replaced with 0 m', nodata)
        logger.info('Elevation range: %dm to %dm', min_elev, max_elev)

        return ElevationField(
            bbox=bbox,
            step=step,
            data=data,
            valid=valid,
            min_elevation=min_elev,
            max_elevation=max_elev,
            missing_samples=missing,
            nodata_samples=nodata,
            point_query=self.point_elevation,
        )
