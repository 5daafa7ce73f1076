"""Health & Readiness Probes — liveness and readiness endpoints for container orchestration.

Invariants:
    - GET /health/ always returns 200 if process is up (liveness)
    - GET /health/ready returns 503 if the validator executable is not installed
"""

import logging
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from ampcheck.config import get_settings
from ampcheck.infrastructure.amp_validator import resolve_executable

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "amp-checker-api",
        "version": "1.0.0",
    }


@router.get("/ready")
async def readiness_check():
    """Readiness probe — includes validator availability."""
    executable = get_settings().validator_executable
    if resolve_executable(executable) is None:
        logger.warning(f"Validator executable '{executable}' not found")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "validator_unavailable",
            },
        )
    return {"status": "ready", "checks": {"validator": "available"}}
