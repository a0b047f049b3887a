"""
GuestNotes Backend — Health Check Routes
==========================================

What:  GET / (liveness, always {"status": "ok"}) and GET /health (database probe).
Who:   Load balancers, Docker health checks, uptime monitors.

Status levels for /health:
    - healthy:   database answered SELECT 1 (HTTP 200)
    - unhealthy: database unreachable (HTTP 503)
"""

import logging
import time

from fastapi import APIRouter, Depends, Response

from app import __version__
from app.database import Database, get_database
from app.schemas.note import HealthResponse, StatusResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get("/", response_model=StatusResponse, summary="Liveness probe")
async def root() -> StatusResponse:
    return StatusResponse(status="ok")


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "Database unreachable", "model": HealthResponse}},
    summary="Service health check",
)
async def health_check(
    response: Response,
    database: Database = Depends(get_database),
) -> HealthResponse:
    """
    Check the health of the service and its database.

    Database: Executes SELECT 1 through the application's Database handle.
    """
    if await database.ping():
        db_status, overall = "connected", "healthy"
    else:
        db_status, overall = "disconnected", "unhealthy"
        response.status_code = 503

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
