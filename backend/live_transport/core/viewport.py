"""Selection, route highlighting and camera follow."""

import logging
from enum import Enum

from live_transport.core.categories import HIDDEN_ROUTE_STYLE, style_for
from live_transport.core.fleet import Vehicle
from live_transport.core.geo import Coordinate
from live_transport.core.map_adapter import MapAdapter
from live_transport.core.route_table import RouteTable
from live_transport.schemas.vehicle import VehicleInfo

logger = logging.getLogger(__name__)


class ViewportState(str, Enum):
    IDLE = "idle"
    SELECTED = "selected"
    FOLLOWING = "following"


class ViewportController:
    """Holds the current selection and keeps the camera on it when following.

    Invariant: ``following`` is only ever True while a vehicle is selected.
    The controller reads vehicles but never changes their motion fields.
    """

    def __init__(
        self,
        adapter: MapAdapter,
        vehicles: list[Vehicle],
        routes: RouteTable,
        follow_zoom: int = 14,
        fly_to_on_select: bool = True,
    ) -> None:
        self._adapter = adapter
        self._vehicles = {v.id: v for v in vehicles}
        self._routes = routes
        self._follow_zoom = follow_zoom
        self._fly_to_on_select = fly_to_on_select
        self._selected: Vehicle | None = None
        self._following = False
        self._highlighted: str | None = None

    @property
    def state(self) -> ViewportState:
        if self._selected is None:
            return ViewportState.IDLE
        return ViewportState.FOLLOWING if self._following else ViewportState.SELECTED

    @property
    def selected_id(self) -> str | None:
        return self._selected.id if self._selected else None

    @property
    def following(self) -> bool:
        return self._following

    def select(self, vehicle_id: str) -> bool:
        """Select a vehicle; returns False if the id is unknown."""
        vehicle = self._vehicles.get(vehicle_id)
        if vehicle is None:
            logger.warning("Selection of unknown vehicle %s ignored", vehicle_id)
            return False

        self._selected = vehicle
        self._following = False
        self._highlight(vehicle.route_id)
        if self._fly_to_on_select:
            self._adapter.fly_to(vehicle.position, self._follow_zoom)
        return True

    def toggle_follow(self) -> bool:
        """Flip follow mode; a no-op without a selection. Returns the new flag."""
        if self._selected is None:
            logger.debug("toggle_follow without a selection ignored")
            return False
        self._following = not self._following
        return self._following

    def clear_selection(self) -> None:
        self._selected = None
        self._following = False
        self._highlight(None)

    def follow(self, positions: dict[str, Coordinate]) -> None:
        """Pan to the followed vehicle's freshly computed position, if any."""
        if not self._following or self._selected is None:
            return
        position = positions.get(self._selected.id)
        if position is not None:
            self._adapter.pan_to(position)

    def selection(self) -> VehicleInfo | None:
        if self._selected is None:
            return None
        return self._selected.describe(following=self._following)

    def replay(self) -> None:
        """Re-issue the highlight of the selected vehicle's route, if any."""
        route = self._routes.get_route(self._highlighted) if self._highlighted else None
        if route is not None:
            self._adapter.set_route_style(route.id, style_for(route.category).route_style)

    def _highlight(self, route_id: str | None) -> None:
        if self._highlighted == route_id:
            return
        if self._highlighted is not None:
            self._adapter.set_route_style(self._highlighted, HIDDEN_ROUTE_STYLE)
            self._highlighted = None
        route = self._routes.get_route(route_id) if route_id else None
        if route is not None:
            self._adapter.set_route_style(route.id, style_for(route.category).route_style)
            self._highlighted = route.id
