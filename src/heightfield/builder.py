"""
Height field construction.

Maps real elevations (metres) linearly onto discrete block levels.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from elevation.field import ElevationField

logger = logging.getLogger(__name__)


@dataclass
class HeightField:
    """Grid of block levels; row index is z (north to south), column is x."""

    levels: np.ndarray  # (length, width) int32
    elevations: np.ndarray  # (length, width) source metres
    min_level: int
    max_level: int
    base_level: int
    scale: float

    @property
    def width(self) -> int:
        return int(self.levels.shape[1])

    @property
    def length(self) -> int:
        return int(self.levels.shape[0])

    @property
    def is_empty(self) -> bool:
        return self.width == 0 or self.length == 0

    def level(self, x: int, z: int) -> int:
        """Level of a column, base_level outside the grid."""
        if 0 <= z < self.length and 0 <= x < self.width:
            return int(self.levels[z, x])
        return self.base_level


def elevation_to_level(
    elevation,
    min_elevation: float,
    scale: float,
    base_level: int,
):
    """
    Level for an elevation: base + round((elevation - min) / scale).

    Halves round up. Works on scalars and numpy arrays.
    """
    offset = np.floor((np.asarray(elevation, dtype=np.float64) - min_elevation) / scale + 0.5)
    return offset.astype(np.int64) + base_level


def build_height_field(
    field: ElevationField,
    scale: float,
    base_level: int,
) -> HeightField:
    """
    Convert an elevation field into block levels.

    Args:
        field: Sampled elevations.
        scale: Metres per level, must be positive.
        base_level: Level given to the lowest valid elevation and to every
            fallback cell.

    Returns:
        HeightField with min_level = base_level and
        max_level = base_level + ceil((max - min) / scale).
    """
    if not scale > 0:
        msg = f'scale must be positive, got {scale}'
        raise ValueError(msg)

    levels = elevation_to_level(field.data, field.min_elevation, scale, base_level)
    levels = np.where(field.valid, levels, base_level).astype(np.int32)

    elev_range = field.max_elevation - field.min_elevation
    max_level = base_level + math.ceil(elev_range / scale)

    logger.info(
        'Height field: %d x %d columns (%d with elevation data)',
        field.width,
        field.height,
        field.valid_samples,
    )
    logger.info(
        'Elevation range: %dm to %dm (%dm), level range %d to %d (scale %.1f m/level)',
        field.min_elevation,
        field.max_elevation,
        elev_range,
        base_level,
        max_level,
        scale,
    )

    return HeightField(
        levels=levels,
        elevations=field.data,
        min_level=base_level,
        max_level=max_level,
        base_level=base_level,
        scale=float(scale),
    )
