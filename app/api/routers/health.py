"""
Health check endpoints for monitoring and orchestration (Railway, Docker, K8s).

Provides multiple health check endpoints:
- /health: Basic liveness check (always returns 200)
- /health/db: Booking store connectivity check
- /health/ready: Readiness check (all dependencies healthy)
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app.api.dependencies import get_use_cases
from app.domain.errors import StoreError

logger = logging.getLogger(__name__)

router = APIRouter()

SERVICE_NAME = "hotel-booking-api"


async def _store_is_healthy(use_cases: dict) -> bool:
    try:
        await use_cases["get_booking"].ping()
    except StoreError as e:
        logger.error("Booking store health check failed", exc_info=e)
        return False
    return True


@router.get("/health")
async def health_check():
    """
    Basic liveness check.

    Returns 200 OK if the application is running.
    """
    return {"status": "ok", "service": SERVICE_NAME}


@router.get("/health/db")
async def health_check_db(use_cases=Depends(get_use_cases)):
    """
    Booking store connectivity health check.

    Returns 503 Service Unavailable if the store cannot serve queries.
    """
    if await _store_is_healthy(use_cases):
        return {"status": "healthy", "component": "database"}
    return JSONResponse(
        status_code=503,
        content={
            "status": "unhealthy",
            "component": "database",
            "error": "Database connection failed",
        },
    )


@router.get("/health/ready")
async def health_check_ready(use_cases=Depends(get_use_cases)):
    """
    Readiness check.

    Returns 503 if not ready to accept requests.
    """
    if await _store_is_healthy(use_cases):
        return {"status": "ready", "checks": {"database": "healthy"}}
    return JSONResponse(
        status_code=503,
        content={"status": "not_ready", "checks": {"database": "unhealthy"}},
    )


@router.get("/health/live")
async def health_check_live():
    """Alias for /health for orchestrators that prefer the /health/live name."""
    return {"status": "ok", "service": SERVICE_NAME}
