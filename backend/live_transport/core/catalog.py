"""Loading of the static route and fleet configuration."""

import logging
from dataclasses import dataclass
from importlib import resources
from pathlib import Path

import orjson
from pydantic import BaseModel

from live_transport.core.fleet import validate_assignments
from live_transport.core.route_table import RouteTable
from live_transport.schemas.fleet import FleetConfig
from live_transport.schemas.route import RouteDefinition

logger = logging.getLogger(__name__)

DEFAULT_CATALOG = "transport.json"


class CatalogDocument(BaseModel):
    routes: list[RouteDefinition]
    fleet: FleetConfig


@dataclass(frozen=True)
class Catalog:
    routes: RouteTable
    fleet: FleetConfig


def read_document(path: str | Path | None = None) -> CatalogDocument:
    """Parse a catalog JSON file, or the bundled default when *path* is None."""
    if path is None:
        raw = resources.files("live_transport.data").joinpath(DEFAULT_CATALOG).read_bytes()
    else:
        raw = Path(path).read_bytes()
    return CatalogDocument.model_validate(orjson.loads(raw))


def build_catalog(document: CatalogDocument) -> Catalog:
    """Build the route table and check the fleet can be placed on it.

    Raises InvalidRoute or InvalidAssignment; nothing is returned on failure.
    """
    routes = RouteTable.from_definitions(document.routes)
    validate_assignments(document.fleet, routes)
    return Catalog(routes=routes, fleet=document.fleet)


def load_catalog(path: str | Path | None = None) -> Catalog:
    catalog = build_catalog(read_document(path))
    logger.info(
        "Loaded %d routes, %d fleet categories from %s",
        len(catalog.routes), len(catalog.fleet.categories), path or "bundled catalog",
    )
    return catalog
