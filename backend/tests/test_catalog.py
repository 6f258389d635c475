"""Tests for catalog loading."""

import orjson
import pytest
from pydantic import ValidationError

from live_transport.core.catalog import CatalogDocument, build_catalog, load_catalog, read_document
from live_transport.core.errors import InvalidAssignment, InvalidRoute


def make_document() -> dict:
    return {
        "routes": [
            {"id": "BUS_1", "category": "Bus", "points": [[23.35, 85.32], [23.42, 85.34]]},
        ],
        "fleet": {
            "bounds": {"min_lat": 23.2, "max_lat": 23.5, "min_lon": 85.2, "max_lon": 85.5},
            "categories": [
                {"category": "Bus", "count": 2, "route_ids": ["BUS_1"],
                 "speed_min": 0.00001, "speed_max": 0.00002},
                {"category": "Cab", "count": 1},
            ],
        },
    }


def write(tmp_path, document: dict):
    path = tmp_path / "catalog.json"
    path.write_bytes(orjson.dumps(document))
    return path


def test_bundled_catalog():
    catalog = load_catalog()
    assert sorted(catalog.routes.ids()) == ["BUS_1", "BUS_2", "TRAIN_1"]
    counts = {c.category.value: c.count for c in catalog.fleet.categories}
    assert counts == {"Bus": 15, "Train": 2, "Cab": 8, "Auto-rickshaw": 8}
    assert catalog.routes.get_route("TRAIN_1").stops[1].name == "Ranchi Junction"


def test_load_from_path(tmp_path):
    catalog = load_catalog(write(tmp_path, make_document()))
    assert catalog.routes.ids() == ["BUS_1"]
    assert catalog.routes.get_route("BUS_1").segment_count == 1


def test_short_route_rejected(tmp_path):
    document = make_document()
    document["routes"][0]["points"] = [[23.35, 85.32]]
    with pytest.raises(InvalidRoute):
        load_catalog(write(tmp_path, document))


def test_fleet_on_unknown_route_rejected():
    document = make_document()
    document["fleet"]["categories"][0]["route_ids"] = ["BUS_9"]
    with pytest.raises(InvalidAssignment):
        build_catalog(CatalogDocument.model_validate(document))


def test_unknown_category_is_a_validation_error(tmp_path):
    document = make_document()
    document["routes"][0]["category"] = "Ferry"
    with pytest.raises(ValidationError):
        read_document(write(tmp_path, document))
