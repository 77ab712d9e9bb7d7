"""Unit tests for great-circle distance and interpolation."""
import math

import pytest

from routebrief.exceptions import RouteComputationError
from routebrief.geo import GreatCircleInterpolator, distance, interpolate, interpolate_point
from routebrief.models.coordinate import Coordinate

NYC = Coordinate(40.7128, -74.0060)
LAX = Coordinate(33.9425, -118.4081)
NYC_LAX_MILES = 2451.0
COORD_DELTA = 0.001


class TestDistance:
    """Test cases for haversine distance."""

    def test_known_route(self):
        assert distance(NYC, LAX) == pytest.approx(NYC_LAX_MILES, abs=10.0)

    def test_same_point_is_zero(self):
        for point in (NYC, LAX, Coordinate(0, 0), Coordinate(-90, 180)):
            assert distance(point, point) == 0

    def test_is_symmetric(self):
        assert distance(NYC, LAX) == pytest.approx(distance(LAX, NYC), abs=1e-9)

    def test_is_nonnegative(self):
        assert distance(Coordinate(-45, 170), Coordinate(45, -170)) > 0

    def test_quarter_circumference(self):
        """Equator to pole is a quarter of the great circle."""
        expected = math.pi * 3958.8 / 2
        assert distance(Coordinate(0, 0), Coordinate(90, 0)) == pytest.approx(expected)


class TestInterpolate:
    """Test cases for route interpolation."""

    def test_includes_both_endpoints(self):
        points = interpolate(NYC, LAX, 100)

        assert points[0].latitude == pytest.approx(NYC.latitude, abs=COORD_DELTA)
        assert points[0].longitude == pytest.approx(NYC.longitude, abs=COORD_DELTA)
        assert points[-1].latitude == pytest.approx(LAX.latitude, abs=COORD_DELTA)
        assert points[-1].longitude == pytest.approx(LAX.longitude, abs=COORD_DELTA)

    def test_correct_number_of_points(self):
        interval = 100.0
        expected_points = math.ceil(distance(NYC, LAX) / interval) + 1

        assert len(interpolate(NYC, LAX, interval)) == expected_points

    def test_single_point_when_same_location(self):
        for interval in (0.5, 100, 10000):
            points = interpolate(NYC, NYC, interval)
            assert points == [NYC]

    def test_interval_larger_than_distance(self):
        points = interpolate(NYC, LAX, 10000)

        assert len(points) == 2
        assert points[0].is_close(NYC, COORD_DELTA)
        assert points[-1].is_close(LAX, COORD_DELTA)

    def test_points_evenly_spaced(self):
        interval = 100.0
        points = interpolate(NYC, LAX, interval)

        for a, b in zip(points, points[1:]):
            step = distance(a, b)
            assert step <= interval + 1e-6
            assert step == pytest.approx(interval, abs=5.0)

    def test_points_lie_on_great_circle(self):
        """Intermediate points add no distance over the direct path."""
        points = interpolate(NYC, LAX, 50)
        travelled = sum(distance(a, b) for a, b in zip(points, points[1:]))

        assert travelled == pytest.approx(distance(NYC, LAX), abs=0.5)

    def test_points_satisfy_coordinate_ranges(self):
        start = Coordinate(60.0, 170.0)
        end = Coordinate(55.0, -160.0)
        points = interpolate(start, end, 25)

        for point in points:
            assert -90 <= point.latitude <= 90
            assert -180 <= point.longitude <= 180

    def test_crosses_antimeridian_the_short_way(self):
        start = Coordinate(60.0, 170.0)
        end = Coordinate(55.0, -160.0)
        points = interpolate(start, end, 25)

        # Shortest path stays in the Pacific, never swinging through lon 0
        for point in points:
            assert abs(point.longitude) >= 159.99

    def test_invalid_interval(self):
        with pytest.raises(ValueError):
            interpolate(NYC, LAX, 0)
        with pytest.raises(ValueError):
            interpolate(NYC, LAX, -5)

    @pytest.mark.parametrize("interval", [float('inf'), float('nan')])
    def test_non_finite_interval(self, interval):
        with pytest.raises(ValueError):
            interpolate(NYC, LAX, interval)

    def test_near_antipodal_points_do_not_produce_nan(self):
        """Output may be unstable near antipodes, but must never be silently NaN."""
        for start, end in [
            (Coordinate(0, 0), Coordinate(0, 180)),
            (Coordinate(10, 20), Coordinate(-10, -160)),
            (Coordinate(45, 0), Coordinate(-45, 179.9999)),
        ]:
            try:
                points = interpolate(start, end, 1000)
            except RouteComputationError:
                continue

            for point in points:
                assert not math.isnan(point.latitude)
                assert not math.isnan(point.longitude)


class TestInterpolatePoint:
    """Test cases for single-point slerp."""

    def test_fraction_endpoints(self):
        assert interpolate_point(NYC, LAX, 0).is_close(NYC, COORD_DELTA)
        assert interpolate_point(NYC, LAX, 1).is_close(LAX, COORD_DELTA)

    def test_midpoint_on_equator(self):
        mid = interpolate_point(Coordinate(0, 0), Coordinate(0, 90), 0.5)

        assert mid.latitude == pytest.approx(0, abs=1e-9)
        assert mid.longitude == pytest.approx(45)

    def test_same_point_returns_start(self):
        assert interpolate_point(LAX, LAX, 0.5) is LAX


class TestGreatCircleInterpolator:
    """Test cases for the interpolator wrapper."""

    def test_uses_default_interval(self):
        interpolator = GreatCircleInterpolator(interval_miles=200)
        expected = math.ceil(distance(NYC, LAX) / 200) + 1

        assert len(interpolator.interpolate(NYC, LAX)) == expected

    def test_interval_override(self):
        interpolator = GreatCircleInterpolator(interval_miles=200)

        assert len(interpolator.interpolate(NYC, LAX, 10000)) == 2

    def test_explicit_zero_interval_rejected(self):
        interpolator = GreatCircleInterpolator(interval_miles=200)

        with pytest.raises(ValueError):
            interpolator.interpolate(NYC, LAX, 0)

    def test_distance_delegates(self):
        assert GreatCircleInterpolator().distance(NYC, LAX) == distance(NYC, LAX)

    def test_rejects_non_positive_interval(self):
        with pytest.raises(ValueError):
            GreatCircleInterpolator(interval_miles=0)

    @pytest.mark.parametrize("interval", [float('inf'), float('nan')])
    def test_rejects_non_finite_interval(self, interval):
        with pytest.raises(ValueError):
            GreatCircleInterpolator(interval_miles=interval)


class TestCoordinate:
    """Test cases for Coordinate invariants."""

    @pytest.mark.parametrize("lat,lon", [(91, 0), (-90.1, 0), (0, 180.5), (0, -181)])
    def test_out_of_range_rejected(self, lat, lon):
        with pytest.raises(ValueError):
            Coordinate(lat, lon)

    def test_bounds_accepted(self):
        Coordinate(90, 180)
        Coordinate(-90, -180)
