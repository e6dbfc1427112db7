"""FastAPI application - Circuit Flow API.

Run with: circuit-flow-api (honours HOST/PORT), or
uvicorn backend.circuit_flow.main:app
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend.circuit_flow.api.errors import register_error_handlers
from backend.circuit_flow.api.middleware import RequestMetricsMiddleware
from backend.circuit_flow.api.routes.documents import router as documents_router
from backend.circuit_flow.api.routes.generate import router as generate_router
from backend.circuit_flow.api.routes.health import router as health_router
from backend.circuit_flow.config import Settings, get_settings
from backend.circuit_flow.db.engine import Database
from backend.circuit_flow.utils.logging import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Log startup and release the storage handle on shutdown."""
    settings: Settings = app.state.settings
    configure_logging(settings.log_level)
    logger.info("Circuit Flow API %s starting", settings.api_version)
    logger.info("Health check: /health, documents API: /api/documents")
    try:
        yield
    finally:
        await app.state.database.dispose()
        logger.info("Database connections closed")


def create_app(settings: Settings | None = None, database: Database | None = None) -> FastAPI:
    """Build the application.

    Args:
        settings: Settings to use (default: environment)
        database: Storage handle to use (default: built from settings); the
            app takes ownership and disposes it on shutdown

    Returns:
        Configured FastAPI app
    """
    settings = settings or get_settings()

    app = FastAPI(title="Circuit Flow API", version=settings.api_version, lifespan=lifespan)
    app.state.settings = settings
    app.state.database = database or Database.from_settings(settings)

    app.add_middleware(RequestMetricsMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.cors_origin],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    # Register routes
    app.include_router(health_router, tags=["health"])
    app.include_router(documents_router)
    app.include_router(generate_router)

    return app


app = create_app()


def serve() -> None:
    """Run the API under uvicorn on the configured host/port."""
    settings = get_settings()
    configure_logging(settings.log_level)
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    serve()
