"""Request dependencies resolving app-scoped state set up in the lifespan."""

from fastapi import HTTPException, Request

from live_transport.core.catalog import Catalog


def get_catalog(request: Request) -> Catalog:
    catalog = getattr(request.app.state, "catalog", None)
    if catalog is None:
        raise HTTPException(status_code=503, detail="Service not ready")
    return catalog
