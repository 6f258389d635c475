"""WebSocket endpoint driving one live map view per connection."""

import asyncio
import contextlib
import logging

import orjson
from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from pydantic import ValidationError

from live_transport.api.routes import route_info
from live_transport.config import settings
from live_transport.core.catalog import Catalog
from live_transport.core.errors import TransportError
from live_transport.core.outbox import Outbox
from live_transport.core.session import TransportSession
from live_transport.core.ws_adapter import WebSocketMapAdapter
from live_transport.schemas.vehicle import ClientCommand

logger = logging.getLogger(__name__)

router = APIRouter()


def build_snapshot(catalog: Catalog, session: TransportSession) -> dict:
    """Initial view: camera, route geometry and panel state."""
    return {
        "type": "snapshot",
        "view": {
            "center": [settings.map_center_lat, settings.map_center_lon],
            "zoom": settings.map_zoom,
            "bounds": catalog.routes.bounds(),
        },
        "routes": [route_info(r).model_dump() for r in catalog.routes.routes()],
        **session.state(),
    }


def apply_message(raw: str | bytes, session: TransportSession, adapter: WebSocketMapAdapter) -> None:
    """Parse and apply one client message, queueing any reply."""
    try:
        command = ClientCommand.model_validate(orjson.loads(raw))
    except (orjson.JSONDecodeError, ValidationError) as e:
        logger.warning("Rejected client message: %s", e)
        adapter.send({"type": "error", "detail": "invalid command"})
        return

    if session.handle_command(command):
        adapter.send({"type": "selection", **session.state()})
    elif command.action == "set_visible":
        adapter.send({"type": "filters", "filters": session.filter.visibility()})


async def _receive(websocket: WebSocket) -> str | bytes:
    """Next text or binary message; raises WebSocketDisconnect on close."""
    message = await websocket.receive()
    if message["type"] == "websocket.disconnect":
        raise WebSocketDisconnect(message.get("code", 1000))
    if message.get("text") is not None:
        return message["text"]
    return message.get("bytes") or b""


async def _pump(websocket: WebSocket, outbox: Outbox) -> None:
    try:
        while True:
            data = await outbox.get()
            await websocket.send_bytes(data)
    except WebSocketDisconnect:
        pass
    except Exception:
        # Client went away mid-send; the receive side handles teardown.
        logger.debug("WebSocket sender stopped", exc_info=True)


@router.websocket("/ws/map")
async def map_ws(websocket: WebSocket) -> None:
    """Stream a live simulated fleet and accept map/panel input."""
    await websocket.accept()

    catalog = getattr(websocket.app.state, "catalog", None)
    if catalog is None:
        await websocket.close(code=1011, reason="Service not ready")
        return

    outbox = Outbox(maxsize=settings.outbox_size)
    adapter = WebSocketMapAdapter(outbox)
    try:
        session = TransportSession.from_catalog(catalog, adapter, settings)
    except TransportError:
        logger.exception("Failed to start map session")
        await websocket.close(code=1011, reason="Invalid transport configuration")
        return
    adapter.on_overflow = session.resync

    sessions: set = websocket.app.state.sessions
    sender: asyncio.Task | None = None
    try:
        sessions.add(session)
        logger.info("Map session opened (%d open)", len(sessions))
        await websocket.send_bytes(orjson.dumps(build_snapshot(catalog, session)))
        session.start()
        sender = asyncio.create_task(_pump(websocket, outbox))

        while True:
            apply_message(await _receive(websocket), session, adapter)
    except WebSocketDisconnect:
        pass
    except Exception:
        logger.exception("WebSocket error")
    finally:
        session.close()
        sessions.discard(session)
        if sender is not None:
            sender.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await sender
        logger.info("Map session closed (%d open)", len(sessions))
