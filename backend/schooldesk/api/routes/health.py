"""Health Check: liveness endpoint and API root.

Invariants:
    - GET /api/health always returns 200 if the process is up
    - GET / describes the API (name, version, health path)
"""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, status

from schooldesk import __version__
from schooldesk.config import get_settings
from schooldesk.core.endpoints import HEALTH
from schooldesk.core.envelope import build_envelope

logger = logging.getLogger(__name__)
router = APIRouter(tags=["health"])


@router.get("/api" + HEALTH, status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness check. Returns 200 if the process is up."""
    return {
        "success": True,
        "message": "API is running",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": get_settings().environment,
    }


@router.get("/")
async def root():
    return build_envelope("Welcome to SchoolDesk API", {
        "version": __version__,
        "health": "/api" + HEALTH,
    })
