"""Boundary between the simulation core and the map widget.

The core only ever talks to a :class:`MapAdapter`. Concrete adapters translate
the calls into whatever the widget understands; the WebSocket one batches them
into frames (see :mod:`live_transport.core.ws_adapter`).
"""

from typing import Any, Protocol

from live_transport.core.categories import MarkerStyle, RouteStyle
from live_transport.core.geo import Coordinate


class MapAdapter(Protocol):
    def upsert_marker(self, vehicle_id: str, position: Coordinate, style: MarkerStyle) -> None: ...

    def remove_marker(self, vehicle_id: str) -> None: ...

    def set_route_style(self, route_id: str, style: RouteStyle) -> None: ...

    def pan_to(self, position: Coordinate) -> None: ...

    def fly_to(self, position: Coordinate, zoom: int) -> None: ...

    def flush(self) -> None: ...


class GuardedMapAdapter:
    """Wraps an adapter so calls after :meth:`dispose` are silently dropped.

    The render loop may race view teardown by one scheduled tick; those late
    calls must not reach a widget that is already gone.
    """

    def __init__(self, inner: MapAdapter) -> None:
        self._inner = inner
        self._disposed = False

    @property
    def disposed(self) -> bool:
        return self._disposed

    def dispose(self) -> None:
        self._disposed = True

    def upsert_marker(self, vehicle_id: str, position: Coordinate, style: MarkerStyle) -> None:
        if not self._disposed:
            self._inner.upsert_marker(vehicle_id, position, style)

    def remove_marker(self, vehicle_id: str) -> None:
        if not self._disposed:
            self._inner.remove_marker(vehicle_id)

    def set_route_style(self, route_id: str, style: RouteStyle) -> None:
        if not self._disposed:
            self._inner.set_route_style(route_id, style)

    def pan_to(self, position: Coordinate) -> None:
        if not self._disposed:
            self._inner.pan_to(position)

    def fly_to(self, position: Coordinate, zoom: int) -> None:
        if not self._disposed:
            self._inner.fly_to(position, zoom)

    def flush(self) -> None:
        if not self._disposed:
            self._inner.flush()


class RecordingMapAdapter:
    """Adapter that records every call; used by tests and diagnostics."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, Any]] = []

    def upsert_marker(self, vehicle_id: str, position: Coordinate, style: MarkerStyle) -> None:
        self.calls.append(("upsert_marker", (vehicle_id, position, style)))

    def remove_marker(self, vehicle_id: str) -> None:
        self.calls.append(("remove_marker", vehicle_id))

    def set_route_style(self, route_id: str, style: RouteStyle) -> None:
        self.calls.append(("set_route_style", (route_id, style)))

    def pan_to(self, position: Coordinate) -> None:
        self.calls.append(("pan_to", position))

    def fly_to(self, position: Coordinate, zoom: int) -> None:
        self.calls.append(("fly_to", (position, zoom)))

    def flush(self) -> None:
        self.calls.append(("flush", None))

    def of(self, name: str) -> list[Any]:
        """Arguments of every recorded call with the given method name."""
        return [args for n, args in self.calls if n == name]

    def clear(self) -> None:
        self.calls.clear()
