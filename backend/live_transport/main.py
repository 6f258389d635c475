"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from live_transport.api import categories, diagnostics, routes, ws
from live_transport.config import settings
from live_transport.core.catalog import load_catalog

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown."""
    # A broken route table or fleet config must stop the service here.
    app.state.catalog = load_catalog(settings.catalog_path)
    app.state.sessions = set()
    logger.info("Live Transport started - %.0f fps per map session", settings.frame_rate_hz)

    yield

    # Shutdown
    for session in list(app.state.sessions):
        session.close()
    app.state.sessions.clear()
    logger.info("Live Transport shut down")


app = FastAPI(
    title="Live Transport Map",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(routes.router)
app.include_router(categories.router)
app.include_router(diagnostics.router)
app.include_router(ws.router)


@app.get("/api/health")
async def health():
    return {"status": "ok"}


def run() -> None:
    """Serve the app with uvicorn using the configured host and port."""
    import uvicorn  # only needed when running the server directly

    uvicorn.run(app, host=settings.host, port=settings.port)
