"""Tests for heightfield.builder module."""

import logging

import numpy as np
import pytest

from heightfield.builder import HeightField, build_height_field, elevation_to_level


class TestElevationToLevel:
    """Tests for elevation_to_level."""

    def test_base_at_minimum(self):
        assert elevation_to_level(100, 100, 30.0, 64) == 64

    def test_half_rounds_up(self):
        """15 m at 30 m/level is half a level and rounds up."""
        assert elevation_to_level(15, 0, 30.0, 64) == 65
        assert elevation_to_level(14, 0, 30.0, 64) == 64

    def test_array_input(self):
        levels = elevation_to_level(np.array([0, 30, 60, 89]), 0, 30.0, 0)
        assert levels.tolist() == [0, 1, 2, 3]


class TestBuildHeightField:
    """Tests for build_height_field."""

    def test_flat_zero_field(self, make_field):
        """All-zero elevations map every column to the base level."""
        field = make_field(np.zeros((10, 11)))

        hf = build_height_field(field, scale=30, base_level=64)

        assert (hf.width, hf.length) == (11, 10)
        assert np.all(hf.levels == 64)
        assert hf.min_level == hf.max_level == 64

    def test_level_range(self, make_field):
        field = make_field([[100, 130], [175, 400]])

        hf = build_height_field(field, scale=30, base_level=64)

        assert hf.levels.tolist() == [[64, 65], [67, 74]]
        assert hf.min_level == 64
        # ceil(300 / 30)
        assert hf.max_level == 74

    def test_max_level_uses_ceil(self, make_field):
        field = make_field([[0, 31]])
        hf = build_height_field(field, scale=30, base_level=0)
        assert hf.max_level == 2
        assert hf.levels.tolist() == [[0, 1]]

    def test_monotonic(self, make_field):
        """Higher elevation never yields a lower level."""
        rng = np.random.default_rng(3)
        data = rng.integers(-50, 2500, size=(20, 20))
        hf = build_height_field(make_field(data), scale=7.5, base_level=10)

        order = np.argsort(data, axis=None, kind='stable')
        flat_levels = hf.levels.ravel()[order]
        assert np.all(np.diff(flat_levels) >= 0)

    def test_fallback_cells_get_base_level(self, make_field):
        """Missing coverage never goes below the base level."""
        valid = [[True, True], [False, True]]
        field = make_field([[500, 560], [0, 620]], valid=valid)

        hf = build_height_field(field, scale=30, base_level=64)

        assert hf.levels[1, 0] == 64
        assert hf.levels.min() >= hf.min_level
        assert hf.levels.max() <= hf.max_level

    def test_deterministic(self, make_field):
        field = make_field([[1, 2, 3], [40, 50, 60]])
        a = build_height_field(field, scale=10, base_level=5)
        b = build_height_field(field, scale=10, base_level=5)
        assert np.array_equal(a.levels, b.levels)

    @pytest.mark.parametrize('scale', [0, -1.0, float('nan')])
    def test_non_positive_scale_fails(self, make_field, scale):
        with pytest.raises(ValueError):
            build_height_field(make_field([[0]]), scale=scale, base_level=64)

    def test_logs_covered_columns(self, make_field, caplog):
        field = make_field([[10, 20], [30, 40]], valid=[[True, False], [True, True]])
        with caplog.at_level(logging.INFO, logger='heightfield.builder'):
            build_height_field(field, scale=30, base_level=64)
        assert '2 x 2 columns (3 with elevation data)' in caplog.text

    def test_keeps_source_elevations(self, make_field):
        field = make_field([[10, 20]])
        hf = build_height_field(field, scale=30, base_level=64)
        assert hf.elevations.tolist() == [[10, 20]]


class TestHeightField:
    """Tests for HeightField accessors."""

    def test_level_outside_grid(self):
        hf = HeightField(
            levels=np.array([[70]], dtype=np.int32),
            elevations=np.array([[0]]),
            min_level=64,
            max_level=70,
            base_level=64,
            scale=30.0,
        )
        assert hf.level(0, 0) == 70
        assert hf.level(1, 0) == 64
        assert hf.level(0, -1) == 64

    def test_empty(self):
        hf = HeightField(
            levels=np.zeros((0, 0), dtype=np.int32),
            elevations=np.zeros((0, 0)),
            min_level=64,
            max_level=64,
            base_level=64,
            scale=30.0,
        )
        assert hf.is_empty
