"""Route REST API endpoints."""

from fastapi import APIRouter, Depends, HTTPException

from live_transport.api.deps import get_catalog
from live_transport.core.catalog import Catalog
from live_transport.core.route_table import Route
from live_transport.schemas.route import RouteDetail, RouteInfo, RouteStopInfo

router = APIRouter(prefix="/api/routes", tags=["routes"])


def route_info(route: Route) -> RouteInfo:
    return RouteInfo(
        id=route.id,
        category=route.category.value,
        color=route.color,
        origin=route.origin,
        destination=route.destination,
        geometry=route.geometry(),
    )


@router.get("", response_model=list[RouteInfo])
async def list_routes(catalog: Catalog = Depends(get_catalog)):
    """Get all routes with geometry."""
    return [route_info(r) for r in sorted(catalog.routes.routes(), key=lambda r: r.id)]


@router.get("/{route_id}", response_model=RouteDetail)
async def get_route(route_id: str, catalog: Catalog = Depends(get_catalog)):
    """Get route detail with stops and geometry."""
    route = catalog.routes.get_route(route_id)
    if route is None:
        raise HTTPException(status_code=404, detail="Route not found")

    stops = []
    for order, stop in enumerate(route.stops):
        lat, lon = route.points[stop.point_index]
        stops.append(RouteStopInfo(name=stop.name, lat=lat, lon=lon, order=order))

    return RouteDetail(
        **route_info(route).model_dump(),
        segment_count=route.segment_count,
        length_m=round(route.length_m, 1),
        stops=stops,
    )
