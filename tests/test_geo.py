"""Tests for haversine distance and geofence helpers."""
import math

import pytest

from attendance.services import geo

POINTS = [
    (0.0, 0.0),
    (0.0002, 0.0002),
    (-23.5505, -46.6333),
    (-22.9068, -43.1729),
    (51.5074, -0.1278),
    (89.9, 179.9),
    (-89.9, -179.9),
]


class TestDistance:

    @pytest.mark.parametrize("a", POINTS)
    @pytest.mark.parametrize("b", POINTS)
    def test_symmetric(self, a, b):
        assert geo.distance_meters(*a, *b) == pytest.approx(geo.distance_meters(*b, *a))

    @pytest.mark.parametrize("p", POINTS)
    def test_zero_for_same_point(self, p):
        assert geo.distance_meters(*p, *p) == 0

    def test_non_negative(self):
        assert geo.distance_meters(10, 10, -10, -10) > 0

    def test_small_offset(self):
        """0.0002 degrees on both axes at the equator is about 31 meters."""
        assert geo.distance_meters(0, 0, 0.0002, 0.0002) == pytest.approx(31.45, abs=0.1)

    def test_known_city_distance(self):
        """São Paulo to Rio de Janeiro is roughly 360 km."""
        d = geo.distance_meters(-23.5505, -46.6333, -22.9068, -43.1729)
        assert 355_000 < d < 365_000

    @pytest.mark.parametrize("bad", [math.nan, math.inf, -math.inf])
    def test_non_finite_rejected(self, bad):
        with pytest.raises(ValueError):
            geo.distance_meters(bad, 0, 0, 0)
        with pytest.raises(ValueError):
            geo.distance_meters(0, 0, 0, bad)

    def test_out_of_range_rejected(self):
        with pytest.raises(ValueError):
            geo.distance_meters(91, 0, 0, 0)
        with pytest.raises(ValueError):
            geo.distance_meters(0, 181, 0, 0)


class TestRadius:

    def test_within(self):
        assert geo.is_within_radius(31.4, 100)

    def test_boundary_is_inside(self):
        assert geo.is_within_radius(100, 100)

    def test_outside(self):
        assert not geo.is_within_radius(100.01, 100)


class TestHelpers:

    def test_valid_coordinates(self):
        assert geo.valid_coordinates(0, 0)
        assert geo.valid_coordinates(-90, 180)
        assert not geo.valid_coordinates(None, 0)
        assert not geo.valid_coordinates(math.nan, 0)
        assert not geo.valid_coordinates(0, -180.5)

    def test_format_distance(self):
        assert geo.format_distance(150) == "150m"
        assert geo.format_distance(31.45) == "31m"
        assert geo.format_distance(1500) == "1.5km"
