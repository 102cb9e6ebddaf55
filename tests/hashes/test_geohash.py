"""Tests for geohash cell and neighbor enumeration."""

import math

import pytest

from neardupe import MAX_GEOHASH_PRECISION, geohash_neighbors
from neardupe.geohash.geohashencode import valid_coordinates


class TestGeohashNeighbors:
    """Center plus eight neighbors"""

    def test_empire_state_building(self):
        """Center, W, E, S, SW, SE, N, NW, NE"""
        assert geohash_neighbors(40.7484, -73.9857, 6) == [
            "dr5ru6", "dr5ru4", "dr5rud",
            "dr5ru3", "dr5ru1", "dr5ru9",
            "dr5ru7", "dr5ru5", "dr5rue",
        ]

    def test_default_precision(self):
        cells = geohash_neighbors(40.7484, -73.9857)
        assert len(cells) == 9
        assert all(len(c) == 6 for c in cells)

    def test_precision_clamped(self):
        cells = geohash_neighbors(40.7484, -73.9857, 20)
        assert len(cells) == 9
        assert all(len(c) == MAX_GEOHASH_PRECISION for c in cells)

    def test_cells_unique(self):
        cells = geohash_neighbors(51.5007, -0.1246, 7)
        assert len(cells) == len(set(cells)) == 9

    def test_antimeridian_wraps(self):
        cells = geohash_neighbors(0.0, 179.99, 3)
        assert len(cells) == 9
        assert cells[0] != cells[2]

    def test_north_pole_row_skipped(self):
        cells = geohash_neighbors(90.0, 0.0, 1)
        assert len(cells) == 6
        assert all(len(c) == 1 for c in cells)

    def test_deterministic(self):
        assert geohash_neighbors(48.8566, 2.3522, 5) == geohash_neighbors(48.8566, 2.3522, 5)


class TestGeohashGuards:
    """Invalid input gives no cells"""

    @pytest.mark.parametrize("precision", [0, -1, "abc", None])
    def test_bad_precision(self, precision):
        assert geohash_neighbors(40.7484, -73.9857, precision) == []

    @pytest.mark.parametrize("lat,lon", [
        (90.5, 0.0), (-91.0, 0.0), (0.0, 180.5), (0.0, -181.0),
        (math.nan, 0.0), (0.0, math.inf), ("north", 0.0), (None, None),
    ])
    def test_bad_coordinates(self, lat, lon):
        assert geohash_neighbors(lat, lon, 6) == []
        assert not valid_coordinates(lat, lon)

    def test_valid_coordinates(self):
        assert valid_coordinates(0, 0)
        assert valid_coordinates(-90, 180)
        assert valid_coordinates("40.7", "-73.9")
