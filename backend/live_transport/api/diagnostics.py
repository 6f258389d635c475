"""Diagnostics API for verifying the loaded catalog and running sessions."""

from fastapi import APIRouter, Depends, Request

from live_transport.api.deps import get_catalog
from live_transport.core.catalog import Catalog

router = APIRouter(prefix="/api/diagnostics", tags=["diagnostics"])


@router.get("")
async def get_diagnostics(request: Request, catalog: Catalog = Depends(get_catalog)):
    """Route geometry summary, fleet configuration and open map sessions."""
    route_diags = []
    for route in catalog.routes.routes():
        route_diags.append({
            "route_id": route.id,
            "category": route.category.value,
            "point_count": len(route.points),
            "segment_count": route.segment_count,
            "route_length_m": round(route.length_m, 1),
            "stop_count": len(route.stops),
        })

    sessions = getattr(request.app.state, "sessions", set())
    return {
        "total_routes": len(catalog.routes),
        "bounds": catalog.routes.bounds(),
        "fleet": {
            entry.category.value: entry.count for entry in catalog.fleet.categories
        },
        "open_sessions": len(sessions),
        "session_ticks": sorted(s.render_loop.ticks for s in sessions),
        "routes": sorted(route_diags, key=lambda r: r["route_id"]),
    }
