"""Tests for speed display and ETA estimation."""

from live_transport.core.categories import Category
from live_transport.core.eta import MIN_SPEED_KMH, display_speed_kmh, estimate_eta_seconds
from live_transport.core.route_table import Route


def make_route() -> Route:
    # Two ~1.11 km segments along the equator
    return Route(id="R", category=Category.BUS, points=[(0.0, 0.0), (0.0, 0.01), (0.0, 0.02)])


def test_display_speed():
    route = make_route()
    # 0.0001 of a ~1112 m segment per frame at 60 fps ≈ 6.67 m/s ≈ 24 km/h
    kmh = display_speed_kmh(route, 0.0001, 60.0)
    assert 23.5 < kmh < 24.5


def test_eta_to_route_end():
    route = make_route()
    # Half a segment plus one full segment ≈ 1668 m at 36 km/h = 10 m/s
    eta = estimate_eta_seconds(route, 0, 0.5, 36.0)
    assert eta is not None
    assert 160 <= eta <= 170


def test_slow_vehicle_uses_minimum_speed():
    route = make_route()
    slow = estimate_eta_seconds(route, 0, 0.0, 0.0)
    floor = estimate_eta_seconds(route, 0, 0.0, MIN_SPEED_KMH)
    assert slow == floor


def test_far_eta_is_dropped():
    long_route = Route(id="L", category=Category.TRAIN, points=[(0.0, 0.0), (0.0, 5.0)])
    assert estimate_eta_seconds(long_route, 0, 0.0, 5.0) is None
