"""
Health check endpoints
"""

import logging

from fastapi import APIRouter, Depends
from pymongo.database import Database
from pymongo.errors import PyMongoError

from gitbattle.config import settings
from gitbattle.database.mongo import get_db
from gitbattle.utils.datetime import utc_now

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health")
async def health_check():
    """Simple API health check."""
    return {
        "status": "healthy",
        "timestamp": utc_now().isoformat(),
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
    }


@router.get("/health/db")
def database_health(db: Database = Depends(get_db)):
    """MongoDB health check."""
    try:
        db.command("ping")
    except PyMongoError as exc:
        logger.warning(f"MongoDB ping failed: {exc}")
        return {
            "status": "unhealthy",
            "database": "disconnected",
            "error": str(exc),
            "timestamp": utc_now().isoformat(),
        }

    return {
        "status": "healthy",
        "database": "connected",
        "timestamp": utc_now().isoformat(),
    }
