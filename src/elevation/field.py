from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

import numpy as np

from domain.models import GeoBoundingBox
from shared.constants import FALLBACK_ELEVATION_M


@dataclass
class ElevationField:
    """Elevation samples of a bounding box on a regular angular grid.

    Row 0 is the northern edge, column 0 the western edge. Cells that could
    not be sampled (tile missing, void sample) hold FALLBACK_ELEVATION_M and
    are False in ``valid``.
    """

    bbox: GeoBoundingBox
    step: float
    data: np.ndarray  # (height, width) int32, metres
    valid: np.ndarray  # (height, width) bool
    min_elevation: int
    max_elevation: int
    missing_samples: int = 0
    nodata_samples: int = 0
    point_query: Callable[[float, float], int] | None = None

    @property
    def width(self) -> int:
        return int(self.data.shape[1])

    @property
    def height(self) -> int:
        return int(self.data.shape[0])

    @property
    def valid_samples(self) -> int:
        return int(np.count_nonzero(self.valid))

    @property
    def is_degraded(self) -> bool:
        """True when some cells fell back because a tile was missing."""
        return self.missing_samples > 0

    def sample(self, row: int, col: int) -> int:
        """Stored elevation of a cell, or the fallback outside the grid."""
        if 0 <= row < self.height and 0 <= col < self.width:
            return int(self.data[row, col])
        return FALLBACK_ELEVATION_M

    def coordinates(self, row: int, col: int) -> tuple[float, float]:
        """(lat, lon) sampled for a cell."""
        return self.bbox.north - row * self.step, self.bbox.west + col * self.step

    def elevation_at(self, lat: float, lon: float) -> int:
        """Point query through the store the field was extracted from."""
        if self.point_query is None:
            msg = 'ElevationField has no point query bound'
            raise RuntimeError(msg)
        return self.point_query(lat, lon)
