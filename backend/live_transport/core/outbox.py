"""Bounded per-connection queue of serialized messages for the WebSocket sender."""

import asyncio
import logging

logger = logging.getLogger(__name__)


class Outbox:
    """Queue of outbound payloads that never blocks the producer.

    Queued frames carry one-time commands, so a single frame cannot be dropped
    on its own. When the queue is full every pending payload is discarded and
    :meth:`put` returns False; the producer is then expected to follow up with
    a message that carries the full state.
    """

    def __init__(self, maxsize: int = 120) -> None:
        self._queue: asyncio.Queue[bytes] = asyncio.Queue(maxsize=maxsize)
        self.dropped = 0
        self.overflows = 0

    def put(self, payload: bytes) -> bool:
        """Enqueue *payload*. On overflow, discard it and everything pending."""
        try:
            self._queue.put_nowait(payload)
            return True
        except asyncio.QueueFull:
            pass
        discarded = 1
        while self.get_nowait() is not None:
            discarded += 1
        self.dropped += discarded
        self.overflows += 1
        logger.warning("Outbox full, discarded %d pending messages", discarded)
        return False

    async def get(self) -> bytes:
        return await self._queue.get()

    def get_nowait(self) -> bytes | None:
        try:
            return self._queue.get_nowait()
        except asyncio.QueueEmpty:
            return None

    def qsize(self) -> int:
        return self._queue.qsize()
