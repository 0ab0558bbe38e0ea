"""Tests for emitter.structure module."""

import json

import numpy as np

from emitter.structure import (
    COLUMN_DEPTH,
    build_structure,
    column_block,
    export_structure_json,
    surface_block,
)
from heightfield.builder import HeightField
from shared.constants import Block


def _height_field(levels, elevations) -> HeightField:
    arr = np.asarray(levels, dtype=np.int32)
    return HeightField(
        levels=arr,
        elevations=np.asarray(elevations, dtype=np.int32),
        min_level=int(arr.min()),
        max_level=int(arr.max()),
        base_level=int(arr.min()),
        scale=30.0,
    )


class TestSurfaceBlock:
    """Tests for material selection."""

    def test_thresholds(self):
        assert surface_block(0) is Block.GRASS
        assert surface_block(149) is Block.GRASS
        assert surface_block(150) is Block.COARSE_DIRT
        assert surface_block(250) is Block.STONE

    def test_column_layers(self):
        assert column_block(10, 70, 70) is Block.GRASS
        assert column_block(10, 70, 67) is Block.DIRT
        assert column_block(10, 70, 66) is Block.STONE


class TestBuildStructure:
    """Tests for build_structure."""

    def test_layout(self):
        hf = _height_field([[64, 65]], [[0, 200]])
        structure = build_structure(hf)

        assert structure['origin'] == [0, 64, 0]
        assert structure['size'] == [2, 1 + COLUMN_DEPTH + 1, 1]
        assert len(structure['blocks']) == 2 * (COLUMN_DEPTH + 1)
        tops = {tuple(b['pos']): b['block'] for b in structure['blocks']}
        assert tops[(0, 64, 0)] == 'minecraft:grass_block'
        assert tops[(1, 65, 0)] == 'minecraft:coarse_dirt'

    def test_never_below_zero(self):
        hf = _height_field([[2]], [[0]])
        ys = [b['pos'][1] for b in build_structure(hf)['blocks']]
        assert min(ys) == 0

    def test_export(self, tmp_path):
        hf = _height_field([[64]], [[0]])
        path = tmp_path / 'out' / 'structure.json'

        count = export_structure_json(hf, path)

        data = json.loads(path.read_text(encoding='utf-8'))
        assert count == len(data['blocks']) == COLUMN_DEPTH + 1
