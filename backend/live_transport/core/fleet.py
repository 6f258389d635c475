"""Vehicle records and the randomized fleet generator."""

import logging
import random
from dataclasses import dataclass

from live_transport.core.categories import Category, style_for
from live_transport.core.errors import InvalidAssignment
from live_transport.core.eta import display_speed_kmh, estimate_eta_seconds
from live_transport.core.geo import Coordinate, lerp
from live_transport.core.route_table import RouteTable
from live_transport.schemas.fleet import BoundingBox, CategoryFleet, FleetConfig
from live_transport.schemas.vehicle import VehicleInfo

logger = logging.getLogger(__name__)


@dataclass
class Vehicle:
    """A simulated vehicle.

    Route-bound vehicles carry ``route_id``/``segment``/``progress``/``speed`` and
    are moved by the motion integrator. Free-roaming vehicles have
    ``route_id=None`` and keep ``position`` until an external feed moves them.
    """

    id: str
    category: Category
    name: str
    color: str
    position: Coordinate
    route_id: str | None = None
    segment: int = 0
    progress: float = 0.0
    speed: float = 0.0
    speed_kmh: float | None = None
    eta_seconds: int | None = None  # set once at generation, never recomputed
    capacity: int | None = None

    @property
    def route_bound(self) -> bool:
        return self.route_id is not None

    def describe(self, following: bool = False) -> VehicleInfo:
        return VehicleInfo(
            id=self.id,
            name=self.name,
            category=self.category.value,
            color=self.color,
            route_id=self.route_id,
            speed_kmh=round(self.speed_kmh, 1) if self.speed_kmh is not None else None,
            eta_seconds=self.eta_seconds,
            capacity=self.capacity,
            following=following,
        )


def validate_assignments(config: FleetConfig, routes: RouteTable) -> None:
    """Raise :class:`InvalidAssignment` if any category cannot be placed.

    Checked for every category before a single vehicle is built, so fleet
    construction is all-or-nothing.
    """
    seen: set[Category] = set()
    for entry in config.categories:
        if entry.category in seen:
            raise InvalidAssignment(entry.category.value, "category configured twice")
        seen.add(entry.category)
        if not style_for(entry.category).route_bound or entry.count == 0:
            continue
        if not entry.route_ids:
            raise InvalidAssignment(entry.category.value, "route-bound category has no eligible routes")
        missing = [rid for rid in entry.route_ids if rid not in routes]
        if missing:
            raise InvalidAssignment(entry.category.value, f"unknown route ids {missing}")


def generate_fleet(
    config: FleetConfig,
    routes: RouteTable,
    rng: random.Random | None = None,
    frame_rate_hz: float = 60.0,
) -> list[Vehicle]:
    """Create the session's fixed-size fleet with randomized placement."""
    validate_assignments(config, routes)
    rng = rng or random.Random()

    vehicles: list[Vehicle] = []
    for entry in config.categories:
        if style_for(entry.category).route_bound:
            vehicles.extend(_route_bound(entry, routes, rng, frame_rate_hz))
        else:
            vehicles.extend(_free_roaming(entry, entry.bounds or config.bounds, rng))

    logger.debug("Generated fleet of %d vehicles", len(vehicles))
    return vehicles


def _route_bound(
    entry: CategoryFleet,
    routes: RouteTable,
    rng: random.Random,
    frame_rate_hz: float,
) -> list[Vehicle]:
    style = style_for(entry.category)
    result = []
    for i in range(entry.count):
        route = routes.get_route(entry.route_ids[i % len(entry.route_ids)])
        segment = rng.randrange(route.segment_count)
        progress = rng.random()
        speed = rng.uniform(entry.speed_min, entry.speed_max)
        speed_kmh = display_speed_kmh(route, speed, frame_rate_hz)
        result.append(Vehicle(
            id=style.vehicle_id(i),
            category=entry.category,
            name=style.vehicle_name(i),
            color=style.color_for(i),
            position=lerp(route.points[segment], route.points[segment + 1], progress),
            route_id=route.id,
            segment=segment,
            progress=progress,
            speed=speed,
            speed_kmh=speed_kmh,
            eta_seconds=estimate_eta_seconds(route, segment, progress, speed_kmh),
            capacity=entry.capacity,
        ))
    return result


def _free_roaming(entry: CategoryFleet, bounds: BoundingBox, rng: random.Random) -> list[Vehicle]:
    style = style_for(entry.category)
    return [
        Vehicle(
            id=style.vehicle_id(i),
            category=entry.category,
            name=style.vehicle_name(i),
            color=style.color_for(i),
            position=(
                rng.uniform(bounds.min_lat, bounds.max_lat),
                rng.uniform(bounds.min_lon, bounds.max_lon),
            ),
            capacity=entry.capacity,
        )
        for i in range(entry.count)
    ]
