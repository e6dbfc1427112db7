"""Operational endpoints.

- /health: liveness, always 200, no dependency checks
- /healthz: readiness, checks database connectivity
- /metrics: Prometheus exposition
"""

import logging
from datetime import datetime, timezone
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Response
from fastapi.responses import JSONResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from backend.circuit_flow.api.deps import get_app_settings, get_database
from backend.circuit_flow.config import Settings
from backend.circuit_flow.db.engine import Database
from backend.circuit_flow.db.repositories import STORAGE_ERRORS

router = APIRouter()
logger = logging.getLogger(__name__)


async def check_db(database: Database) -> tuple[bool, str]:
    """Check database connectivity.

    Returns:
        (is_ok, status_message)
    """
    try:
        await database.ping()
        return (True, "ok")
    except STORAGE_ERRORS as e:
        logger.warning("Database readiness check failed: %s", e)
        return (False, f"error: {type(e).__name__}")


@router.get("/health")
async def health(settings: Annotated[Settings, Depends(get_app_settings)]) -> dict[str, str]:
    """Liveness check.

    Returns:
        200 OK always (application is running)
    """
    return {
        "status": "ok",
        "version": settings.api_version,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/healthz", response_model=None)
async def healthz(
    database: Annotated[Database, Depends(get_database)],
) -> dict[str, Any] | JSONResponse:
    """Readiness check.

    Returns:
        200 with component status if the database answers
        503 if it does not
    """
    db_ok, db_status = await check_db(database)

    response_body = {
        "status": "ok" if db_ok else "degraded",
        "components": {"db": db_status},
    }

    if not db_ok:
        return JSONResponse(content=response_body, status_code=503)

    return response_body


@router.get("/metrics")
async def metrics() -> Response:
    """Prometheus text exposition of request counters and latencies."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
