"""View-scoped simulation session: one fleet, one map, one render loop."""

import asyncio
import logging
import random

from live_transport.core.catalog import Catalog
from live_transport.core.fleet import Vehicle, generate_fleet
from live_transport.core.geo import Coordinate
from live_transport.core.map_adapter import GuardedMapAdapter, MapAdapter
from live_transport.core.markers import MarkerRegistry
from live_transport.core.motion import MotionIntegrator
from live_transport.core.render_loop import RenderLoop
from live_transport.core.route_table import RouteTable
from live_transport.core.viewport import ViewportController
from live_transport.core.visibility import VisibilityFilter
from live_transport.schemas.fleet import FleetConfig
from live_transport.schemas.vehicle import ClientCommand

logger = logging.getLogger(__name__)


class TransportSession:
    """Owns everything a single map view needs, from mount to teardown.

    Construction generates the fleet and may raise ``InvalidAssignment``; no
    session exists in that case. :meth:`close` stops the render loop and
    disposes the adapter, after which late adapter calls are dropped.
    """

    def __init__(
        self,
        routes: RouteTable,
        fleet_config: FleetConfig,
        adapter: MapAdapter,
        frame_rate_hz: float = 60.0,
        follow_zoom: int = 14,
        fly_to_on_select: bool = True,
        rng: random.Random | None = None,
    ) -> None:
        self.routes = routes
        self.adapter = GuardedMapAdapter(adapter)
        self.vehicles: list[Vehicle] = generate_fleet(
            fleet_config, routes, rng=rng, frame_rate_hz=frame_rate_hz,
        )
        self._by_id = {v.id: v for v in self.vehicles}
        self.integrator = MotionIntegrator(routes, self.vehicles)
        self.markers = MarkerRegistry(self.adapter, self.vehicles)
        self.filter = VisibilityFilter(self.markers, self.vehicles)
        self.viewport = ViewportController(
            self.adapter, self.vehicles, routes,
            follow_zoom=follow_zoom, fly_to_on_select=fly_to_on_select,
        )
        self.render_loop = RenderLoop(
            self.integrator, self.markers, self.viewport, self.adapter,
            frame_interval=1.0 / frame_rate_hz,
        )
        self._opened = False
        self._closed = False

    @classmethod
    def from_catalog(cls, catalog: Catalog, adapter: MapAdapter, settings, rng=None) -> "TransportSession":
        return cls(
            catalog.routes,
            catalog.fleet,
            adapter,
            frame_rate_hz=settings.frame_rate_hz,
            follow_zoom=settings.follow_zoom,
            fly_to_on_select=settings.fly_to_on_select,
            rng=rng,
        )

    @property
    def closed(self) -> bool:
        return self._closed

    def vehicle(self, vehicle_id: str) -> Vehicle | None:
        return self._by_id.get(vehicle_id)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def open(self) -> None:
        """Push the initial markers for every visible vehicle."""
        if self._opened:
            return
        self._opened = True
        self.filter.attach()
        self.adapter.flush()
        logger.debug(
            "Session opened: %d vehicles (%d route-bound)",
            len(self.vehicles), self.integrator.moving_count,
        )

    def start(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self.open()
        self.render_loop.start(loop)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self.render_loop.stop()
        self.adapter.dispose()
        logger.debug("Session closed after %d ticks", self.render_loop.ticks)

    # ------------------------------------------------------------------
    # Map and UI input
    # ------------------------------------------------------------------

    def handle_marker_click(self, vehicle_id: str) -> bool:
        selected = self.viewport.select(vehicle_id)
        self.adapter.flush()
        return selected

    def handle_marker_hover(self, vehicle_id: str, hovered: bool) -> None:
        self.markers.set_hovered(vehicle_id, hovered)
        self.adapter.flush()

    def place_vehicle(self, vehicle_id: str, position: Coordinate) -> bool:
        """Move a free-roaming vehicle to a position reported by an external feed.

        Returns False (with a warning) for unknown or route-bound vehicles.
        """
        if vehicle_id not in self._by_id:
            logger.warning("Position for unknown vehicle %s ignored", vehicle_id)
            return False
        try:
            self.integrator.place(vehicle_id, position)
        except ValueError as e:
            logger.warning("%s", e)
            return False
        self.markers.move(vehicle_id, position)
        self.viewport.follow({vehicle_id: position})
        self.adapter.flush()
        return True

    def resync(self) -> dict:
        """Replay the whole map state through the adapter without flushing.

        Returns the panel state to go with it.
        """
        self.markers.replay()
        self.viewport.replay()
        return self.state()

    def handle_command(self, command: ClientCommand) -> bool:
        """Apply a UI command. Returns True when the selection panel changed."""
        if self._closed:
            return False

        changed = False
        if command.action == "marker_click":
            changed = command.id is not None and self.viewport.select(command.id)
        elif command.action == "marker_hover":
            if command.id is not None:
                self.markers.set_hovered(command.id, command.hovered)
        elif command.action == "set_visible":
            if command.category is not None:
                self.filter.set_visible(command.category, command.visible)
        elif command.action == "toggle_follow":
            changed = self.viewport.selected_id is not None
            self.viewport.toggle_follow()
        elif command.action == "clear_selection":
            changed = self.viewport.selected_id is not None
            self.viewport.clear_selection()
        elif command.action == "place_vehicle":
            if command.id is not None and command.position is not None:
                self.place_vehicle(command.id, command.position)

        self.adapter.flush()
        return changed

    def state(self) -> dict:
        """Filter and selection state for the panels."""
        selection = self.viewport.selection()
        return {
            "filters": self.filter.visibility(),
            "selection": selection.model_dump() if selection else None,
        }
