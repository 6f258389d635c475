"""Tests for TransportSession."""

import random

import pytest

from live_transport.core.catalog import load_catalog
from live_transport.core.categories import Category
from live_transport.core.errors import InvalidAssignment
from live_transport.core.map_adapter import RecordingMapAdapter
from live_transport.core.session import TransportSession
from live_transport.schemas.fleet import CategoryFleet, FleetConfig
from live_transport.schemas.vehicle import ClientCommand


def make_session():
    catalog = load_catalog()
    adapter = RecordingMapAdapter()
    session = TransportSession(catalog.routes, catalog.fleet, adapter, rng=random.Random(11))
    return adapter, session


def test_open_shows_whole_fleet():
    adapter, session = make_session()
    session.open()

    shown = {args[0] for args in adapter.of("upsert_marker")}
    assert len(shown) == len(session.vehicles) == 33
    assert adapter.calls[-1] == ("flush", None)


def test_invalid_fleet_prevents_session():
    catalog = load_catalog()
    bad = FleetConfig(
        bounds=catalog.fleet.bounds,
        categories=[CategoryFleet(category=Category.BUS, count=2, route_ids=["BUS_404"])],
    )
    with pytest.raises(InvalidAssignment):
        TransportSession(catalog.routes, bad, RecordingMapAdapter())


def test_click_selects_and_follow_command():
    adapter, session = make_session()
    session.open()

    assert session.handle_marker_click("train_0")
    assert session.handle_command(ClientCommand(action="toggle_follow"))

    state = session.state()
    assert state["selection"]["id"] == "train_0"
    assert state["selection"]["following"] is True

    adapter.clear()
    session.render_loop.tick()
    assert adapter.of("pan_to") == [session.vehicle("train_0").position]


def test_clear_selection_command():
    _, session = make_session()
    session.handle_marker_click("bus_0")
    assert session.handle_command(ClientCommand(action="clear_selection"))
    assert session.state()["selection"] is None
    # Nothing selected: nothing changed
    assert not session.handle_command(ClientCommand(action="clear_selection"))


def test_set_visible_command():
    adapter, session = make_session()
    session.open()
    adapter.clear()

    changed = session.handle_command(ClientCommand(action="set_visible", category="Cab", visible=False))

    assert not changed
    assert len(adapter.of("remove_marker")) == 8
    assert session.state()["filters"]["Cab"] is False


def test_hover_command():
    adapter, session = make_session()
    session.open()
    adapter.clear()

    session.handle_command(ClientCommand(action="marker_hover", id="cab_0", hovered=True))

    (vehicle_id, _, style), = adapter.of("upsert_marker")
    assert vehicle_id == "cab_0"
    assert style.size == 40


def test_close_silences_adapter():
    adapter, session = make_session()
    session.open()
    session.close()
    adapter.clear()

    # A tick that raced teardown must not reach the map.
    session.render_loop.tick()
    session.handle_marker_click("bus_0")

    assert adapter.calls == []
    assert session.closed
    assert not session.render_loop.running


def test_commands_ignored_after_close():
    _, session = make_session()
    session.close()
    assert not session.handle_command(ClientCommand(action="marker_click", id="bus_0"))
    assert session.viewport.selected_id is None


def test_place_vehicle_moves_free_roaming_marker():
    adapter, session = make_session()
    session.open()
    adapter.clear()

    assert session.place_vehicle("cab_0", (23.31, 85.33))

    (vehicle_id, position, _), = adapter.of("upsert_marker")
    assert (vehicle_id, position) == ("cab_0", (23.31, 85.33))
    assert session.vehicle("cab_0").position == (23.31, 85.33)
    assert adapter.calls[-1] == ("flush", None)


def test_place_vehicle_pans_when_following():
    adapter, session = make_session()
    session.handle_marker_click("auto_0")
    session.handle_command(ClientCommand(action="toggle_follow"))
    adapter.clear()

    session.handle_command(ClientCommand(action="place_vehicle", id="auto_0", position=(23.4, 85.4)))

    assert adapter.of("pan_to") == [(23.4, 85.4)]


def test_place_vehicle_ignores_route_bound_and_unknown():
    adapter, session = make_session()
    session.open()
    adapter.clear()
    bus_position = session.vehicle("bus_0").position

    assert not session.place_vehicle("bus_0", (23.31, 85.33))
    assert not session.place_vehicle("ferry_0", (23.31, 85.33))

    assert adapter.of("upsert_marker") == []
    assert session.vehicle("bus_0").position == bus_position
