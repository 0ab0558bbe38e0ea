"""
Preview image of a height field.

Levels are normalised to the field's level range and mapped through the
elevation colour ramp with a lookup table.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np
from PIL import Image

from shared.constants import ELEVATION_COLOR_RAMP, PREVIEW_LUT_SIZE

if TYPE_CHECKING:
    from pathlib import Path

    from heightfield.builder import HeightField

logger = logging.getLogger(__name__)


def build_color_lut(
    color_ramp: list[tuple[float, tuple[int, int, int]]],
    lut_size: int = PREVIEW_LUT_SIZE,
) -> np.ndarray:
    """Build a LUT mapping normalised positions in [0, 1] to RGB.

    Channels are interpolated linearly between ramp stops; positions outside
    the ramp take the colour of the nearest stop.
    """
    ramp = sorted(color_ramp, key=lambda stop: stop[0])
    stops = np.array([t for t, _ in ramp], dtype=np.float64)
    colors = np.array([c for _, c in ramp], dtype=np.float64)
    positions = np.linspace(0.0, 1.0, lut_size)
    channels = [np.interp(positions, stops, colors[:, ch]) for ch in range(3)]
    return np.stack(channels, axis=1).astype(np.uint8)


def render_height_preview(height_field: HeightField) -> Image.Image:
    """Colourise levels; one pixel per column, north up."""
    if height_field.is_empty:
        return Image.new('RGB', (1, 1), (128, 128, 128))

    lo = height_field.min_level
    hi = height_field.max_level
    lut = build_color_lut(ELEVATION_COLOR_RAMP, PREVIEW_LUT_SIZE)

    inv_range = (PREVIEW_LUT_SIZE - 1) / (hi - lo) if hi > lo else 0.0
    indices = ((height_field.levels.astype(np.float32) - lo) * inv_range).astype(np.int32)
    indices = np.clip(indices, 0, PREVIEW_LUT_SIZE - 1)

    rgb = lut[indices]
    return Image.fromarray(rgb)


def save_height_preview(height_field: HeightField, path: Path) -> Path:
    img = render_height_preview(height_field)
    path.parent.mkdir(parents=True, exist_ok=True)
    img.save(path)
    logger.info('Wrote preview %s (%dx%d)', path, img.width, img.height)
    return path
