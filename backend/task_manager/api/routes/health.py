"""Health & Welcome — liveness, readiness and the plain-text welcome page.

Invariants:
    - GET /api/health always returns 200 if process is up (liveness)
    - GET /api/health/ready returns 503 if database is unreachable (readiness)
    - None of these paths require a token
"""

import logging

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse, PlainTextResponse

from task_manager.infrastructure import database

logger = logging.getLogger(__name__)
router = APIRouter(tags=["health"])

WELCOME_TEXT = "Welcome to Task Manager"


@router.get("/api/health", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {"status": "healthy", "service": "task-manager-api"}


@router.get("/api/health/ready")
async def readiness_check():
    """Readiness probe — includes database connectivity."""
    manager = database.db_manager
    db_ok = await manager.health_check() if manager else False
    if not db_ok:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "database_unavailable",
            },
        )
    return {"status": "ready", "checks": {"database": "healthy"}}


@router.get("/welcome", response_class=PlainTextResponse)
async def welcome():
    return WELCOME_TEXT
