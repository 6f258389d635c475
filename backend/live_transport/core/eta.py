"""Rough arrival estimates for route-bound vehicles."""

import logging

from live_transport.core.route_table import Route

logger = logging.getLogger(__name__)

# Minimum speed to use for ETA (km/h) - prevents division by zero / extreme ETAs
MIN_SPEED_KMH = 5.0
# Maximum reasonable ETA (seconds)
MAX_ETA_SECONDS = 6 * 3600


def display_speed_kmh(route: Route, speed: float, frame_rate_hz: float) -> float:
    """Convert a per-tick progress increment into km/h on this route.

    Uses the route's mean segment length, so vehicles on the same route with
    the same increment report the same speed.
    """
    meters_per_second = speed * route.mean_segment_length_m * frame_rate_hz
    return meters_per_second * 3.6


def estimate_eta_seconds(route: Route, segment: int, progress: float, speed_kmh: float) -> int | None:
    """Seconds to the end of the route at the given speed, or None if too far out."""
    effective_speed = max(speed_kmh, MIN_SPEED_KMH)
    speed_ms = effective_speed / 3.6  # km/h -> m/s

    eta_s = int(route.remaining_m(segment, progress) / speed_ms)
    if eta_s > MAX_ETA_SECONDS:
        return None
    return eta_s
