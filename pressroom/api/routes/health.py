"""Health & Readiness Probes — liveness and readiness endpoints.

Invariants:
    - GET /health/ always returns 200 if process is up (liveness)
    - GET /health/ready returns 503 if database is unreachable (readiness)
"""

import logging
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from pressroom.api.dependencies import get_container
from pressroom.container import AppContainer

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "pressroom-api",
        "version": "1.0.0",
    }


@router.get("/ready")
async def readiness_check(container: AppContainer = Depends(get_container)):
    """Readiness probe — database connectivity plus cache counters."""
    db_ok = await container.db.health_check()
    if not db_ok:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "database_unavailable",
            },
        )
    return {
        "status": "ready",
        "checks": {"database": "healthy"},
        "caches": {
            "data": container.data_cache.snapshot(),
            "pages": container.page_cache.snapshot(),
        },
    }
