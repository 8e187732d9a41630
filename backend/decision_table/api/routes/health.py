"""
Health check endpoint
"""
from datetime import datetime, timezone

from fastapi import APIRouter

from decision_table import __version__
from decision_table.core.config import get_settings

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check():
    """
    Liveness check

    Returns:
        dict: Health status
    """
    settings = get_settings()
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "service": settings.app_name,
        "version": __version__,
        "environment": settings.app_env,
    }
