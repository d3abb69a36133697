"""Tests for geo module."""

import math

import pytest

from railroute.geo.distance import distance, haversine, station_distance
from railroute.network.models import Coordinate

from conftest import make_station

GUANGZHOU_SOUTH = Coordinate(22.9914143, 113.2640375)
WEST_KOWLOON = Coordinate(22.3036814, 114.1649267)


class TestHaversine:
    """Tests for Haversine distance calculation."""

    def test_same_point(self):
        result = haversine(48.8566, 2.3522, 48.8566, 2.3522)
        assert result == pytest.approx(0.0, abs=0.001)

    def test_paris_lyon(self):
        # Paris: 48.8566, 2.3522
        # Lyon: 45.7640, 4.8357
        result = haversine(48.8566, 2.3522, 45.7640, 4.8357)
        assert 380 < result < 420

    def test_one_hundredth_degree_at_equator(self):
        assert haversine(0, 0, 0, 0.01) == pytest.approx(1.1119, abs=0.0001)

    def test_antipodal_points_are_half_circumference(self):
        assert haversine(0, 0, 0, 180) == pytest.approx(math.pi * 6371.0)
        assert haversine(90, 0, -90, 0) == pytest.approx(math.pi * 6371.0)


class TestDistance:
    """Tests for the rounded coordinate distance."""

    def test_same_point_is_zero(self):
        assert distance(GUANGZHOU_SOUTH, GUANGZHOU_SOUTH) == 0

    def test_symmetric(self):
        assert distance(GUANGZHOU_SOUTH, WEST_KOWLOON) == distance(
            WEST_KOWLOON, GUANGZHOU_SOUTH
        )

    def test_guangzhou_hong_kong(self):
        # About 121 km as the crow flies
        assert 115 < distance(GUANGZHOU_SOUTH, WEST_KOWLOON) < 125

    def test_rounded_to_two_decimals(self):
        result = distance(Coordinate(0, 0), Coordinate(0, 0.01))
        assert result == 1.11
        assert round(result, 2) == result

    def test_station_distance_uses_locations(self):
        a = make_station("A", lat=0, lon=0)
        b = make_station("B", lat=0, lon=0.01)
        assert station_distance(a, b) == 1.11
