"""Elevation module - SRTM tile store and elevation fields."""

from .field import ElevationField
from .store import ElevationTileStore, grid_dimensions
from .tiles import (
    TileFormatError,
    TileKey,
    TileNotFoundError,
    make_tile_name,
    parse_tile_name,
    read_hgt,
)

__all__ = [
    'ElevationField',
    'ElevationTileStore',
    'TileFormatError',
    'TileKey',
    'TileNotFoundError',
    'grid_dimensions',
    'make_tile_name',
    'parse_tile_name',
    'read_hgt',
]
