"""Great-circle distance and route interpolation."""
import logging
import math
from typing import List, Optional

from routebrief.exceptions import RouteComputationError
from routebrief.models.coordinate import Coordinate

logger = logging.getLogger(__name__)

EARTH_RADIUS_MILES = 3958.8


def _central_angle(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Haversine central angle in radians between two points given in radians."""
    h = (
        math.sin((lat2 - lat1) / 2) ** 2
        + math.cos(lat1) * math.cos(lat2) * math.sin((lon2 - lon1) / 2) ** 2
    )
    # Rounding can push h a hair above 1 for antipodal points
    return 2 * math.asin(math.sqrt(min(1.0, h)))


def distance(a: Coordinate, b: Coordinate) -> float:
    """Great-circle distance between two coordinates in statute miles."""
    lat1, lon1, lat2, lon2 = map(math.radians, [a.latitude, a.longitude, b.latitude, b.longitude])
    return EARTH_RADIUS_MILES * _central_angle(lat1, lon1, lat2, lon2)


def interpolate_point(start: Coordinate, end: Coordinate, fraction: float) -> Coordinate:
    """
    Spherical linear interpolation (slerp) between two coordinates.

    Follows the great-circle (shortest) path. fraction 0 is start, 1 is end.
    Near-antipodal endpoints make sin(d) tend to zero and the result unstable.
    """
    φ1, λ1, φ2, λ2 = map(math.radians, [start.latitude, start.longitude, end.latitude, end.longitude])
    d = _central_angle(φ1, λ1, φ2, λ2)

    if d == 0:
        return start

    a = math.sin((1 - fraction) * d) / math.sin(d)
    b = math.sin(fraction * d) / math.sin(d)

    x = a * math.cos(φ1) * math.cos(λ1) + b * math.cos(φ2) * math.cos(λ2)
    y = a * math.cos(φ1) * math.sin(λ1) + b * math.cos(φ2) * math.sin(λ2)
    z = a * math.sin(φ1) + b * math.sin(φ2)

    lat = math.degrees(math.atan2(z, math.sqrt(x * x + y * y)))
    lon = math.degrees(math.atan2(y, x))

    if not (math.isfinite(lat) and math.isfinite(lon)):
        raise RouteComputationError(
            f"Interpolation between {start} and {end} at fraction {fraction} "
            f"produced a non-finite point ({lat}, {lon})"
        )

    return Coordinate(lat, lon)


def interpolate(start: Coordinate, end: Coordinate, interval_miles: float) -> List[Coordinate]:
    """
    Points spaced roughly interval_miles apart along the great circle.

    Both endpoints are included, so the result holds
    ceil(distance / interval_miles) + 1 points, or a single point when
    start and end coincide.
    """
    if not (interval_miles > 0 and math.isfinite(interval_miles)):
        raise ValueError(f"Interval must be positive and finite, currently: {interval_miles}")

    total_distance = distance(start, end)
    num_segments = math.ceil(total_distance / interval_miles)

    if num_segments == 0:
        return [start]

    points = [interpolate_point(start, end, i / num_segments) for i in range(num_segments + 1)]
    logger.debug(
        f"Interpolated {len(points)} point(s) over {total_distance:.1f} mi "
        f"from {start} to {end}"
    )
    return points


class GreatCircleInterpolator:
    """Route generator with a default point spacing."""

    def __init__(self, interval_miles: float = 50.0):
        if not (interval_miles > 0 and math.isfinite(interval_miles)):
            raise ValueError(f"Interval must be positive and finite, currently: {interval_miles}")
        self.interval_miles = interval_miles

    def distance(self, a: Coordinate, b: Coordinate) -> float:
        return distance(a, b)

    def interpolate(self, start: Coordinate, end: Coordinate,
                    interval_miles: Optional[float] = None) -> List[Coordinate]:
        if interval_miles is None:
            interval_miles = self.interval_miles
        return interpolate(start, end, interval_miles)
