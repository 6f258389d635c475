"""MapAdapter that batches widget commands into WebSocket frames."""

import logging
from collections.abc import Callable

import orjson

from live_transport.core.categories import MarkerStyle, RouteStyle
from live_transport.core.geo import Coordinate
from live_transport.core.outbox import Outbox

logger = logging.getLogger(__name__)


class WebSocketMapAdapter:
    """Collects adapter calls and emits them as one ``frame`` message per flush.

    Marker styles (which carry the SVG icon) are only sent when they change for
    a marker; plain position updates go out as ``move`` commands.

    When the outbox overflows, the client has lost commands it will never see
    again. The adapter then forgets what it has sent, asks ``on_overflow`` to
    replay the full map state through it, and sends the result as a single
    ``reset`` frame. ``on_overflow`` returns the panel state (filters and
    selection), which rides along in that frame.
    """

    def __init__(self, outbox: Outbox) -> None:
        self._outbox = outbox
        self._commands: list[dict] = []
        self._sent_styles: dict[str, MarkerStyle] = {}
        self.on_overflow: Callable[[], dict] | None = None

    def upsert_marker(self, vehicle_id: str, position: Coordinate, style: MarkerStyle) -> None:
        if self._sent_styles.get(vehicle_id) == style:
            self._commands.append({"op": "move", "id": vehicle_id, "position": position})
            return
        self._sent_styles[vehicle_id] = style
        self._commands.append({
            "op": "upsert_marker", "id": vehicle_id, "position": position, "style": style,
        })

    def remove_marker(self, vehicle_id: str) -> None:
        self._sent_styles.pop(vehicle_id, None)
        self._commands.append({"op": "remove_marker", "id": vehicle_id})

    def set_route_style(self, route_id: str, style: RouteStyle) -> None:
        self._commands.append({"op": "route_style", "route_id": route_id, "style": style})

    def pan_to(self, position: Coordinate) -> None:
        self._commands.append({"op": "pan_to", "position": position})

    def fly_to(self, position: Coordinate, zoom: int) -> None:
        self._commands.append({"op": "fly_to", "position": position, "zoom": zoom})

    def flush(self) -> None:
        if not self._commands:
            return
        commands, self._commands = self._commands, []
        self.send({"type": "frame", "commands": commands})

    def send(self, message: dict) -> None:
        """Queue a message for the client, resyncing if the queue overflowed."""
        if not self._outbox.put(orjson.dumps(message)):
            self._resync()

    def _resync(self) -> None:
        self._sent_styles.clear()
        self._commands = []
        state = self.on_overflow() if self.on_overflow is not None else {}
        commands, self._commands = self._commands, []
        logger.info("Resyncing map view with %d commands", len(commands))
        # The outbox was emptied by the overflow, so this always fits.
        self._outbox.put(orjson.dumps({"type": "frame", "reset": True, "commands": commands, **state}))
