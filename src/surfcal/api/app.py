"""HTTP API for surfcal.

`create_app()` builds the application; `run()` (the `surfcal-api` script)
serves it with uvicorn on `Settings.host`/`Settings.port`.

On startup the app logs in to Surfline with the credentials from the
environment. If that fails the app still starts, `/health` keeps answering
and forecast routes return 503 with the reason.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from surfcal.api.routes import spots, surf
from surfcal.config import ConfigurationError, Settings, get_settings
from surfcal.providers.base import ProviderError
from surfcal.sources import build_calendar_source, connect_forecast_source

logger = logging.getLogger(__name__)


async def _open_sources(app: FastAPI, settings: Settings) -> None:
    app.state.forecast_source = None
    app.state.forecast_error = None
    try:
        app.state.forecast_source = await connect_forecast_source(settings)
    except (ConfigurationError, ProviderError) as e:
        logger.error(f"Forecast source unavailable: {e}")
        app.state.forecast_error = str(e)
    app.state.calendar_source = build_calendar_source(settings)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings = get_settings()
    await _open_sources(app, settings)
    logger.info(f"{settings.app_name} {settings.app_version} ready")
    try:
        yield
    finally:
        if app.state.forecast_source is not None:
            await app.state.forecast_source.close()


def create_app() -> FastAPI:
    settings = get_settings()

    # Interactive docs only in debug mode
    docs = {} if settings.debug else {"docs_url": None, "redoc_url": None, "openapi_url": None}
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Surfable hours for surf spots, checked against your calendar",
        lifespan=lifespan,
        **docs,
    )
    app.include_router(surf.router, prefix="/api/surf", tags=["Surf"])
    app.include_router(spots.router, prefix="/api/spots", tags=["Spots"])

    @app.get("/health", tags=["Health"])
    async def health() -> dict[str, str]:
        return {"status": "healthy", "version": settings.app_version}

    return app


def run() -> None:
    """Entry point for the `surfcal-api` script."""
    import uvicorn

    settings = get_settings()
    logging.basicConfig(level=settings.log_level)
    uvicorn.run(create_app(), host=settings.host, port=settings.port)
