"""Per-tick advancement of route-bound vehicles along their polylines."""

import logging

from live_transport.core.fleet import Vehicle
from live_transport.core.geo import Coordinate, lerp
from live_transport.core.route_table import Route, RouteTable

logger = logging.getLogger(__name__)


def interpolate(route: Route, segment: int, progress: float) -> Coordinate:
    """Position at ``progress`` along segment ``segment`` of ``route``."""
    return lerp(route.points[segment], route.points[segment + 1], progress)


def advance(vehicle: Vehicle, route: Route) -> Coordinate:
    """Move one vehicle forward by its speed and return its new position.

    Past the end of a segment the remainder carries into the next one, and
    the last segment wraps back to the first: every route is a closed loop.
    """
    vehicle.progress += vehicle.speed
    if vehicle.progress >= 1.0:
        vehicle.progress -= 1.0
        vehicle.segment = (vehicle.segment + 1) % route.segment_count
    vehicle.position = interpolate(route, vehicle.segment, vehicle.progress)
    return vehicle.position


class MotionIntegrator:
    """Owns the motion fields of the fleet and advances them once per tick."""

    def __init__(self, routes: RouteTable, vehicles: list[Vehicle]) -> None:
        self._by_id = {v.id: v for v in vehicles}
        # Resolve routes once; a vehicle on a missing route is a programming error.
        self._moving: list[tuple[Vehicle, Route]] = []
        for v in vehicles:
            if not v.route_bound:
                continue
            route = routes.get_route(v.route_id)
            if route is None:
                raise KeyError(f"Vehicle {v.id} references unknown route {v.route_id!r}")
            self._moving.append((v, route))

    def step(self) -> dict[str, Coordinate]:
        """Advance every route-bound vehicle and return all of their new positions."""
        return {v.id: advance(v, route) for v, route in self._moving}

    def place(self, vehicle_id: str, position: Coordinate) -> None:
        """Set the position of a free-roaming vehicle from an external feed."""
        vehicle = self._by_id[vehicle_id]
        if vehicle.route_bound:
            raise ValueError(f"Vehicle {vehicle_id} is route-bound and moved by the integrator")
        vehicle.position = position

    @property
    def moving_count(self) -> int:
        return len(self._moving)
