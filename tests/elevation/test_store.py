"""Tests for elevation.store module."""

import logging
import math

import numpy as np
import pytest

import elevation.store as store_module
from domain.models import GeoBoundingBox
from elevation.store import ElevationTileStore, grid_dimensions
from elevation.tiles import TileFormatError, TileKey, TileNotFoundError
from shared.constants import ARC_SECOND_DEG, SRTM_NODATA

GECESARS_TILE = [
    [900, 901, 902],
    [800, 801, 802],
    [700, 701, 702],
]


class TestLoadTile:
    """Tests for ElevationTileStore.load_tile."""

    def test_missing_tile_raises(self, tile_dir):
        store = ElevationTileStore(tile_dir)
        with pytest.raises(TileNotFoundError):
            store.load_tile('N46E028')

    def test_missing_tile_is_file_not_found(self, tile_dir):
        """TileNotFoundError is a FileNotFoundError."""
        store = ElevationTileStore(tile_dir)
        with pytest.raises(FileNotFoundError):
            store.load_tile('N46E028')

    def test_loads_and_caches(self, tile_dir, write_tile, monkeypatch):
        """Repeated loads return the cached array without re-reading."""
        write_tile('N46E028', GECESARS_TILE)
        calls = []
        real_read = store_module.read_hgt

        def counting_read(path, expected=None):
            calls.append(path)
            return real_read(path, expected)

        monkeypatch.setattr(store_module, 'read_hgt', counting_read)
        store = ElevationTileStore(tile_dir)

        first = store.load_tile('N46E028')
        second = store.load_tile('N46E028')

        assert first is second
        assert len(calls) == 1
        assert store.cached_tiles == ['N46E028']

    def test_expected_side_enforced(self, tile_dir, write_tile):
        write_tile('N46E028', GECESARS_TILE)
        store = ElevationTileStore(tile_dir, tile_samples=3601)
        with pytest.raises(TileFormatError):
            store.load_tile('N46E028')

    def test_clear_drops_cache(self, tile_dir, write_tile):
        write_tile('N46E028', GECESARS_TILE)
        store = ElevationTileStore(tile_dir)
        store.load_tile('N46E028')
        store.clear()
        assert store.cached_tiles == []


class TestPointElevation:
    """Tests for ElevationTileStore.point_elevation."""

    def test_northwest_corner_sample(self, tile_dir, write_tile):
        """A point near the NW corner reads the first sample."""
        write_tile('N10W001', GECESARS_TILE)
        store = ElevationTileStore(tile_dir)
        assert store.point_elevation(10.999, -0.999) == 900

    def test_nearest_sample(self, tile_dir, write_tile):
        """Offsets round to the nearest sample."""
        write_tile('N10W001', GECESARS_TILE)
        store = ElevationTileStore(tile_dir)
        assert store.point_elevation(10.9, -0.9) == 900
        assert store.point_elevation(10.0, -0.1) == 702
        assert store.point_elevation(10.5, -0.5) == 801

    def test_nodata_reads_zero(self, tile_dir, write_tile):
        """The void sentinel at the NW corner is reported as 0."""
        data = np.array(GECESARS_TILE)
        data[0, 0] = SRTM_NODATA
        write_tile('N10W001', data)
        store = ElevationTileStore(tile_dir)
        assert store.point_elevation(10.999, -0.999) == 0

    def test_negative_elevation_kept(self, tile_dir, write_tile):
        """Real below-sea-level samples are not treated as voids."""
        write_tile('N31E035', [[-400, -400], [-400, -400]])
        store = ElevationTileStore(tile_dir)
        assert store.point_elevation(31.5, 35.5) == -400

    def test_missing_tile_propagates(self, tile_dir):
        store = ElevationTileStore(tile_dir)
        with pytest.raises(TileNotFoundError):
            store.point_elevation(47.0, 28.8)


class TestRequiredTiles:
    """Tests for ElevationTileStore.required_tiles."""

    def test_single_tile(self, tile_dir):
        store = ElevationTileStore(tile_dir)
        bbox = GeoBoundingBox(west=28.1, east=28.9, south=46.1, north=46.9)
        assert store.required_tiles(bbox) == [TileKey(46, 28)]

    def test_whole_degree_east_edge(self, tile_dir):
        store = ElevationTileStore(tile_dir)
        bbox = GeoBoundingBox(west=28.5, east=29.0, south=46.1, north=46.9)
        assert store.required_tiles(bbox) == [TileKey(46, 28)]

    def test_four_tiles_north_first(self, tile_dir):
        store = ElevationTileStore(tile_dir)
        bbox = GeoBoundingBox(west=28.5, east=29.1, south=46.9, north=47.1)
        assert store.required_tiles(bbox) == [
            TileKey(47, 28),
            TileKey(47, 29),
            TileKey(46, 28),
            TileKey(46, 29),
        ]


class TestRegionElevation:
    """Tests for ElevationTileStore.region_elevation."""

    @pytest.mark.parametrize('downsample', [1, 3, 4, 36])
    def test_dimensions(self, tile_dir, write_tile, downsample):
        """width/height equal ceil(extent / step), float noise rounded off."""
        write_tile('N46E028', np.zeros((11, 11)))
        store = ElevationTileStore(tile_dir)
        bbox = GeoBoundingBox(west=28.1, east=28.2, south=46.3, north=46.35)
        step = ARC_SECOND_DEG * downsample

        field = store.region_elevation(bbox, downsample)

        assert field.width == math.ceil(round((bbox.east - bbox.west) / step, 9))
        assert field.height == math.ceil(round((bbox.north - bbox.south) / step, 9))
        assert (field.width, field.height) == grid_dimensions(bbox, step)

    def test_matches_point_queries(self, tile_dir, write_tile):
        """Every region cell equals the point query at its coordinates."""
        rng = np.random.default_rng(7)
        write_tile('N46E028', rng.integers(0, 500, size=(11, 11)))
        store = ElevationTileStore(tile_dir)
        bbox = GeoBoundingBox(west=28.05, east=28.95, south=46.05, north=46.95)

        field = store.region_elevation(bbox, downsample=180)

        for row in range(field.height):
            for col in range(field.width):
                lat, lon = field.coordinates(row, col)
                assert field.data[row, col] == store.point_elevation(lat, lon)
                assert field.elevation_at(lat, lon) == field.data[row, col]

    def test_min_max_of_valid_samples(self, tile_dir, write_tile):
        data = np.full((11, 11), 120)
        data[5, 5] = 480
        data[0, :] = SRTM_NODATA
        write_tile('N46E028', data)
        store = ElevationTileStore(tile_dir)
        bbox = GeoBoundingBox(west=28.0, east=28.99, south=46.01, north=46.999)

        field = store.region_elevation(bbox, downsample=36)

        assert field.min_elevation == 120
        assert field.max_elevation == 480
        assert field.nodata_samples > 0
        assert field.missing_samples == 0
        # Void cells fall back to 0 and are excluded from the range
        assert field.data[0, 0] == 0
        assert not field.valid[0, 0]

    def test_missing_tile_warns_and_falls_back(self, tile_dir, write_tile, caplog):
        """A missing neighbour tile is skipped with a warning."""
        write_tile('N46E028', np.full((11, 11), 250))
        store = ElevationTileStore(tile_dir)
        bbox = GeoBoundingBox(west=28.9, east=29.1, south=46.4, north=46.5)

        with caplog.at_level(logging.WARNING):
            field = store.region_elevation(bbox, downsample=36)

        assert 'N46E029' in caplog.text
        assert field.missing_samples > 0
        assert field.is_degraded
        east_cols = [c for c in range(field.width) if field.coordinates(0, c)[1] >= 29.0]
        assert east_cols
        assert np.all(field.data[:, east_cols] == 0)
        assert not np.any(field.valid[:, east_cols])
        assert field.min_elevation == field.max_elevation == 250

    def test_malformed_tile_warns_and_falls_back(self, tile_dir, caplog):
        """A tile that fails to parse is skipped like a missing one."""
        np.arange(6, dtype='>i2').tofile(tile_dir / 'N46E028.hgt')
        store = ElevationTileStore(tile_dir)
        bbox = GeoBoundingBox(west=28.1, east=28.11, south=46.1, north=46.11)

        with caplog.at_level(logging.WARNING):
            field = store.region_elevation(bbox, downsample=4)

        assert 'Could not load tile N46E028' in caplog.text
        assert field.missing_samples == field.width * field.height
        assert field.valid_samples == 0

    def test_east_edge_on_tile_boundary(self, tile_dir, write_tile):
        """A box ending on a whole degree needs no tile east of it."""
        write_tile('N46E028', np.full((11, 11), 75))
        store = ElevationTileStore(tile_dir)
        bbox = GeoBoundingBox(west=28.9, east=29.0, south=46.4, north=46.5)

        field = store.region_elevation(bbox, downsample=36)

        assert store.required_tiles(bbox) == [TileKey(46, 28)]
        assert (field.width, field.height) == (10, 10)
        assert field.missing_samples == 0
        assert field.valid_samples == 100

    def test_no_tiles_at_all(self, tile_dir, caplog):
        """With no coverage the range collapses to 0 and the run continues."""
        store = ElevationTileStore(tile_dir)
        bbox = GeoBoundingBox(west=28.1, east=28.11, south=46.1, north=46.11)

        with caplog.at_level(logging.WARNING):
            field = store.region_elevation(bbox, downsample=4)

        assert field.min_elevation == field.max_elevation == 0
        assert field.missing_samples == field.width * field.height
        assert 'No valid elevation samples' in caplog.text

    def test_invalid_downsample(self, tile_dir):
        store = ElevationTileStore(tile_dir)
        bbox = GeoBoundingBox(west=28.1, east=28.2, south=46.1, north=46.2)
        with pytest.raises(ValueError):
            store.region_elevation(bbox, downsample=0)

    def test_sample_outside_grid_is_fallback(self, tile_dir, write_tile):
        write_tile('N46E028', np.full((11, 11), 42))
        store = ElevationTileStore(tile_dir)
        bbox = GeoBoundingBox(west=28.1, east=28.2, south=46.1, north=46.2)
        field = store.region_elevation(bbox, downsample=36)
        assert field.sample(0, 0) == 42
        assert field.sample(-1, 0) == 0
        assert field.sample(0, field.width) == 0
