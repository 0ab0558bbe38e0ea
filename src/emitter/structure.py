"""Export of the height field as a block-list structure JSON."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

from shared.constants import (
    DIRT_DEPTH,
    STRUCTURE_FORMAT_VERSION,
    SURFACE_COARSE_DIRT_MAX_M,
    SURFACE_GRASS_MAX_M,
    Block,
)

if TYPE_CHECKING:
    from pathlib import Path

    from heightfield.builder import HeightField

logger = logging.getLogger(__name__)

# Blocks of depth below the surface written per column
COLUMN_DEPTH = DIRT_DEPTH + 1


def surface_block(elevation: float) -> Block:
    """Surface material by real elevation."""
    if elevation < SURFACE_GRASS_MAX_M:
        return Block.GRASS
    if elevation < SURFACE_COARSE_DIRT_MAX_M:
        return Block.COARSE_DIRT
    return Block.STONE


def column_block(elevation: float, surface_y: int, y: int) -> Block:
    if y == surface_y:
        return surface_block(elevation)
    if y >= surface_y - DIRT_DEPTH:
        return Block.DIRT
    return Block.STONE


def build_structure(height_field: HeightField) -> dict:
    """Structure dict: every column from its surface down COLUMN_DEPTH blocks."""
    blocks: list[dict] = []
    for z in range(height_field.length):
        for x in range(height_field.width):
            surface_y = int(height_field.levels[z, x])
            elevation = float(height_field.elevations[z, x])
            for dy in range(COLUMN_DEPTH + 1):
                y = surface_y - dy
                if y < 0:
                    continue
                block = column_block(elevation, surface_y, y)
                blocks.append({'pos': [x, y, z], 'block': block.namespaced()})

    min_y = height_field.min_level
    return {
        'format_version': STRUCTURE_FORMAT_VERSION,
        'size': [
            height_field.width,
            height_field.max_level - min_y + COLUMN_DEPTH + 1,
            height_field.length,
        ],
        'origin': [0, min_y, 0],
        'blocks': blocks,
    }


def export_structure_json(height_field: HeightField, path: Path) -> int:
    """Write the structure JSON; returns the number of blocks."""
    structure = build_structure(height_field)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open('w', encoding='utf-8') as f:
        json.dump(structure, f, indent=2)
    count = len(structure['blocks'])
    logger.info('Wrote structure JSON: %s (%d blocks)', path, count)
    return count
