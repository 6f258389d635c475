"""Small geographic helpers shared by the route table and fleet generator."""

import math

Coordinate = tuple[float, float]  # (lat, lon)

EARTH_RADIUS_M = 6_371_000


def haversine_m(a: Coordinate, b: Coordinate) -> float:
    """Distance in meters between two (lat, lon) points."""
    lat1, lon1 = a
    lat2, lon2 = b
    dlat = math.radians(lat2 - lat1)
    dlon = math.radians(lon2 - lon1)
    h = (math.sin(dlat / 2) ** 2 +
         math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) *
         math.sin(dlon / 2) ** 2)
    return EARTH_RADIUS_M * 2 * math.asin(math.sqrt(h))


def lerp(a: Coordinate, b: Coordinate, t: float) -> Coordinate:
    """Linear interpolation between two coordinates at fraction t."""
    return (a[0] + (b[0] - a[0]) * t, a[1] + (b[1] - a[1]) * t)
