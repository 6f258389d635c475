"""Immutable registry of precomputed route polylines."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from functools import cached_property

from shapely.geometry import LineString, MultiLineString

from live_transport.core.categories import Category
from live_transport.core.errors import InvalidRoute
from live_transport.core.geo import Coordinate, haversine_m
from live_transport.schemas.route import RouteDefinition

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Stop:
    name: str
    point_index: int


@dataclass(frozen=True)
class Route:
    """An ordered polyline with display metadata.

    Segment ``i`` runs from ``points[i]`` to ``points[i + 1]``. Segment lengths
    are computed once here so the per-tick path never touches geometry.
    """

    id: str
    category: Category
    points: tuple[Coordinate, ...]
    color: str = "#e11d48"
    origin: str = ""
    destination: str = ""
    stops: tuple[Stop, ...] = ()
    segment_lengths_m: tuple[float, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        points = tuple((float(lat), float(lon)) for lat, lon in self.points)
        if len(points) < 2:
            raise InvalidRoute(self.id, f"needs at least 2 points, got {len(points)}")
        stops = tuple(self.stops)
        last = -1
        for stop in stops:
            if not 0 <= stop.point_index < len(points):
                raise InvalidRoute(self.id, f"stop {stop.name!r} points outside the polyline")
            if stop.point_index <= last:
                raise InvalidRoute(self.id, f"stop {stop.name!r} is out of order")
            last = stop.point_index
        object.__setattr__(self, "points", points)
        object.__setattr__(self, "stops", stops)
        object.__setattr__(self, "segment_lengths_m", tuple(
            haversine_m(points[i], points[i + 1]) for i in range(len(points) - 1)
        ))

    @property
    def segment_count(self) -> int:
        return len(self.points) - 1

    @property
    def length_m(self) -> float:
        return sum(self.segment_lengths_m)

    @property
    def mean_segment_length_m(self) -> float:
        return self.length_m / self.segment_count

    @cached_property
    def line(self) -> LineString:
        # Shapely uses (x, y) = (lon, lat)
        return LineString([(lon, lat) for lat, lon in self.points])

    def remaining_m(self, segment: int, progress: float) -> float:
        """Distance in meters from a position on the route to its last point."""
        current = self.segment_lengths_m[segment] * (1.0 - progress)
        return current + sum(self.segment_lengths_m[segment + 1:])

    def geometry(self) -> list[list[float]]:
        """Route points as [[lat, lon], ...] for API exposure."""
        return [[lat, lon] for lat, lon in self.points]

    @classmethod
    def from_definition(cls, definition: RouteDefinition) -> "Route":
        return cls(
            id=definition.id,
            category=definition.category,
            points=tuple(definition.points),
            color=definition.color,
            origin=definition.origin,
            destination=definition.destination,
            stops=tuple(Stop(name=s.name, point_index=s.point_index) for s in definition.stops),
        )


class RouteTable:
    """Read-only lookup of routes by id.

    Construction either succeeds for every route or raises :class:`InvalidRoute`;
    there is no partially built table.
    """

    def __init__(self, routes: Iterable[Route]) -> None:
        table: dict[str, Route] = {}
        for route in routes:
            if route.id in table:
                raise InvalidRoute(route.id, "duplicate route id")
            table[route.id] = route
        self._routes = table
        logger.debug("Route table built with %d routes", len(table))

    @classmethod
    def from_definitions(cls, definitions: Iterable[RouteDefinition]) -> "RouteTable":
        return cls(Route.from_definition(d) for d in definitions)

    def get_route(self, route_id: str) -> Route | None:
        return self._routes.get(route_id)

    def ids(self) -> list[str]:
        return list(self._routes)

    def routes(self) -> list[Route]:
        return list(self._routes.values())

    def ids_for_category(self, category: Category) -> list[str]:
        return [r.id for r in self._routes.values() if r.category == category]

    def bounds(self) -> tuple[float, float, float, float] | None:
        """(min_lat, min_lon, max_lat, max_lon) covering every route, or None if empty."""
        if not self._routes:
            return None
        min_lon, min_lat, max_lon, max_lat = MultiLineString(
            [r.line for r in self._routes.values()]
        ).bounds
        return (min_lat, min_lon, max_lat, max_lon)

    def __contains__(self, route_id: object) -> bool:
        return route_id in self._routes

    def __len__(self) -> int:
        return len(self._routes)
