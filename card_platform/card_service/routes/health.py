"""
Health check endpoints for the card service
"""
from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter, Request, status

from ..db import check_db_connection
from ..errors import ServiceUnavailableError

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_check() -> Dict[str, Any]:
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/ready", status_code=status.HTTP_200_OK)
def readiness_check(request: Request) -> Dict[str, Any]:
    """
    Readiness check against the database.

    Raises:
        ServiceUnavailableError: 503 if the database cannot be reached
    """
    if not check_db_connection(request.app.state.engine):
        raise ServiceUnavailableError("Service not ready")

    return {
        "status": "ready",
        "database": "connected",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
