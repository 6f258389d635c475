"""Frame-driven tick on the asyncio event loop."""

import asyncio
import logging

from live_transport.core.geo import Coordinate
from live_transport.core.map_adapter import MapAdapter
from live_transport.core.markers import MarkerRegistry
from live_transport.core.motion import MotionIntegrator
from live_transport.core.viewport import ViewportController

logger = logging.getLogger(__name__)

# While a tick keeps failing, log the traceback only every this many frames.
FAILURE_LOG_EVERY = 600


class RenderLoop:
    """Runs one simulation tick per frame until stopped.

    The next frame is scheduled only after the current tick has finished, so
    ticks never overlap. :meth:`stop` cancels the pending frame; a callback
    that still fires afterwards returns without touching anything.

    Parameters
    ----------
    integrator:
        Advances vehicle motion.
    markers:
        Forwards positions of shown markers to the adapter.
    viewport:
        Applies camera follow after motion.
    adapter:
        Flushed once at the end of every tick.
    frame_interval:
        Seconds between frames (default 1/60 s).
    """

    def __init__(
        self,
        integrator: MotionIntegrator,
        markers: MarkerRegistry,
        viewport: ViewportController,
        adapter: MapAdapter,
        frame_interval: float = 1.0 / 60.0,
    ) -> None:
        self._integrator = integrator
        self._markers = markers
        self._viewport = viewport
        self._adapter = adapter
        self._interval = frame_interval
        self._loop: asyncio.AbstractEventLoop | None = None
        self._handle: asyncio.TimerHandle | None = None
        self._running = False
        self.ticks = 0
        self.failures = 0
        self._consecutive_failures = 0

    @property
    def running(self) -> bool:
        return self._running

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def start(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        """Schedule the first frame. Must be called from within an event loop."""
        if self._running:
            return
        self._loop = loop or asyncio.get_running_loop()
        self._running = True
        self._schedule()

    def stop(self) -> None:
        """Cancel the pending frame and stop rescheduling."""
        self._running = False
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def tick(self) -> dict[str, Coordinate]:
        """Run one frame synchronously and return the new positions."""
        positions = self._integrator.step()
        for vehicle_id, position in positions.items():
            self._markers.move(vehicle_id, position)
        # Follow runs after every position has advanced.
        self._viewport.follow(positions)
        self._adapter.flush()
        self.ticks += 1
        return positions

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _schedule(self) -> None:
        self._handle = self._loop.call_later(self._interval, self._on_frame)

    def _on_frame(self) -> None:
        self._handle = None
        if not self._running:
            return
        try:
            self.tick()
        except Exception:
            self.failures += 1
            self._consecutive_failures += 1
            if self._consecutive_failures % FAILURE_LOG_EVERY == 1:
                logger.exception(
                    "Render tick failed (%d in a row)", self._consecutive_failures,
                )
        else:
            if self._consecutive_failures:
                logger.info("Render loop recovered after %d failed ticks", self._consecutive_failures)
                self._consecutive_failures = 0
        if self._running:
            self._schedule()
