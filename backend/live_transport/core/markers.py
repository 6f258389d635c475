"""Integration-side bookkeeping of which vehicle markers are on the map."""

import logging

from live_transport.core.categories import MarkerStyle, style_for
from live_transport.core.fleet import Vehicle
from live_transport.core.geo import Coordinate
from live_transport.core.map_adapter import MapAdapter

logger = logging.getLogger(__name__)


class MarkerRegistry:
    """Tracks shown markers and issues add/move/remove calls to the adapter.

    Marker styles are built once per vehicle (normal and hovered) so the
    per-tick path only forwards positions.
    """

    def __init__(self, adapter: MapAdapter, vehicles: list[Vehicle]) -> None:
        self._adapter = adapter
        self._vehicles = {v.id: v for v in vehicles}
        self._styles: dict[str, tuple[MarkerStyle, MarkerStyle]] = {
            v.id: (
                style_for(v.category).marker_style(v.category, v.color),
                style_for(v.category).marker_style(v.category, v.color, hovered=True),
            )
            for v in vehicles
        }
        self._shown: set[str] = set()
        self._hovered: set[str] = set()

    def is_shown(self, vehicle_id: str) -> bool:
        return vehicle_id in self._shown

    @property
    def shown(self) -> frozenset[str]:
        return frozenset(self._shown)

    def style(self, vehicle_id: str) -> MarkerStyle:
        normal, hovered = self._styles[vehicle_id]
        return hovered if vehicle_id in self._hovered else normal

    def show(self, vehicle_id: str) -> None:
        if vehicle_id in self._shown:
            return
        self._shown.add(vehicle_id)
        vehicle = self._vehicles[vehicle_id]
        self._adapter.upsert_marker(vehicle_id, vehicle.position, self.style(vehicle_id))

    def hide(self, vehicle_id: str) -> None:
        if vehicle_id not in self._shown:
            return
        self._shown.discard(vehicle_id)
        self._hovered.discard(vehicle_id)
        self._adapter.remove_marker(vehicle_id)

    def move(self, vehicle_id: str, position: Coordinate) -> None:
        """Forward a new position; hidden markers are skipped."""
        if vehicle_id in self._shown:
            self._adapter.upsert_marker(vehicle_id, position, self.style(vehicle_id))

    def set_hovered(self, vehicle_id: str, hovered: bool) -> None:
        if vehicle_id not in self._vehicles:
            logger.warning("Hover for unknown vehicle %s ignored", vehicle_id)
            return
        if vehicle_id not in self._shown or hovered == (vehicle_id in self._hovered):
            return
        if hovered:
            self._hovered.add(vehicle_id)
        else:
            self._hovered.discard(vehicle_id)
        self.move(vehicle_id, self._vehicles[vehicle_id].position)

    def replay(self) -> None:
        """Re-issue an upsert for every shown marker at its current position."""
        for vehicle_id in sorted(self._shown):
            vehicle = self._vehicles[vehicle_id]
            self._adapter.upsert_marker(vehicle_id, vehicle.position, self.style(vehicle_id))
