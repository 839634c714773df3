"""FastAPI application entry point for Clinitrack."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

from clinitrack import __version__
from clinitrack.api.middleware import LoggingMiddleware
from clinitrack.api.routes.governance import router as governance_router
from clinitrack.api.routes.health import router as health_router
from clinitrack.api.routes.records import router as records_router
from clinitrack.bootstrap.assessment import initialize_stores
from clinitrack.bootstrap.database import close_database_engine
from clinitrack.bootstrap.logging import configure_structlog

log = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    configure_structlog()
    await initialize_stores()
    log.info("clinitrack_started", version=__version__)
    try:
        yield
    finally:
        await close_database_engine()
        log.info("clinitrack_stopped")


app = FastAPI(
    title="Clinitrack API",
    description="Clinical assessment tracking with audited soft delete",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(LoggingMiddleware)
app.include_router(health_router)
app.include_router(records_router)
app.include_router(governance_router)
