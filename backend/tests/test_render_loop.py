"""Tests for RenderLoop."""

import asyncio
import logging
from unittest.mock import MagicMock

from live_transport.core.categories import Category
from live_transport.core.fleet import Vehicle
from live_transport.core.map_adapter import RecordingMapAdapter
from live_transport.core.markers import MarkerRegistry
from live_transport.core.motion import MotionIntegrator
from live_transport.core.render_loop import RenderLoop
from live_transport.core.route_table import Route, RouteTable
from live_transport.core.viewport import ViewportController
from live_transport.core.visibility import VisibilityFilter


def make_parts(frame_interval: float = 1.0 / 60.0):
    table = RouteTable([
        Route(id="R1", category=Category.BUS, points=[(0.0, 0.0), (10.0, 0.0), (10.0, 10.0)]),
    ])
    vehicles = [
        Vehicle(id="bus_0", category=Category.BUS, name="Bus 1", color="#3b82f6",
                position=(5.0, 0.0), route_id="R1", segment=0, progress=0.5, speed=0.1),
        Vehicle(id="cab_0", category=Category.CAB, name="Cab #1", color="#facc15",
                position=(3.0, 3.0)),
    ]
    adapter = RecordingMapAdapter()
    markers = MarkerRegistry(adapter, vehicles)
    vf = VisibilityFilter(markers, vehicles)
    vf.attach()
    viewport = ViewportController(adapter, vehicles, table)
    loop = RenderLoop(MotionIntegrator(table, vehicles), markers, viewport, adapter, frame_interval)
    adapter.clear()
    return adapter, vf, viewport, loop, vehicles


def test_tick_moves_visible_markers_and_flushes():
    adapter, _, _, loop, _ = make_parts()

    positions = loop.tick()

    assert list(positions) == ["bus_0"]
    upserts = adapter.of("upsert_marker")
    assert [(vid, pos) for vid, pos, _ in upserts] == [("bus_0", positions["bus_0"])]
    assert adapter.calls[-1] == ("flush", None)
    assert loop.ticks == 1


def test_hidden_vehicles_not_forwarded():
    adapter, vf, _, loop, _ = make_parts()
    vf.set_visible(Category.BUS, False)
    adapter.clear()

    loop.tick()

    assert adapter.of("upsert_marker") == []


def test_follow_targets_post_tick_position():
    adapter, _, viewport, loop, vehicles = make_parts()
    bus = vehicles[0]
    viewport.select("bus_0")
    viewport.toggle_follow()
    before = bus.position
    adapter.clear()

    loop.tick()

    pans = adapter.of("pan_to")
    assert pans == [bus.position]
    assert pans[0] != before
    # Marker update for the tick precedes the camera move
    names = [name for name, _ in adapter.calls]
    assert names.index("upsert_marker") < names.index("pan_to")


def test_no_pan_after_clearing_selection():
    adapter, _, viewport, loop, _ = make_parts()
    viewport.select("bus_0")
    viewport.toggle_follow()
    viewport.clear_selection()
    adapter.clear()

    loop.tick()

    assert adapter.of("pan_to") == []


def test_loop_runs_until_stopped():
    _, _, _, loop, _ = make_parts(frame_interval=0.001)

    async def run():
        loop.start()
        await asyncio.sleep(0.05)
        loop.stop()
        stopped_at = loop.ticks
        await asyncio.sleep(0.02)
        return stopped_at

    stopped_at = asyncio.run(run())
    assert stopped_at > 0
    assert loop.ticks == stopped_at
    assert not loop.running


def test_frame_firing_after_stop_is_dropped():
    adapter, _, _, loop, _ = make_parts()

    async def run():
        loop.start()
        loop.stop()
        loop._on_frame()  # a callback that raced the cancellation

    asyncio.run(run())
    assert loop.ticks == 0
    assert adapter.calls == []


def test_tick_errors_do_not_stop_the_loop():
    integrator = MagicMock()
    integrator.step.side_effect = RuntimeError("boom")
    loop = RenderLoop(integrator, MagicMock(), MagicMock(), MagicMock(), frame_interval=0.001)

    async def run():
        loop.start()
        await asyncio.sleep(0.03)
        running = loop.running
        loop.stop()
        return running

    assert asyncio.run(run()) is True
    assert integrator.step.call_count > 1


def test_repeated_tick_failures_log_once_until_recovery(caplog):
    integrator = MagicMock()
    integrator.step.side_effect = RuntimeError("boom")
    loop = RenderLoop(integrator, MagicMock(), MagicMock(), MagicMock())
    loop.start(MagicMock())  # call_later on a mock loop never fires

    with caplog.at_level(logging.INFO, logger="live_transport.core.render_loop"):
        for _ in range(50):
            loop._on_frame()
        errors = [r for r in caplog.records if r.levelno == logging.ERROR]

        integrator.step.side_effect = None
        integrator.step.return_value = {}
        loop._on_frame()

    assert loop.failures == 50
    assert len(errors) == 1
    assert "recovered after 50 failed ticks" in caplog.text
    assert loop.ticks == 1
