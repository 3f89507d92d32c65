"""
Health check endpoint with database probe and favorites metrics.
"""

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession
from datetime import datetime, timezone
import logging
import time

from tourhub.config.settings import settings
from tourhub.core.db import get_db
from tourhub.core.concurrency_manager import user_locks
from tourhub.core.error_handlers import error_handler
from tourhub.core.metrics import snapshot_metrics

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])

# Application start time for uptime calculation
_app_start_time = time.time()


@router.get("/health")
async def health_check(db: AsyncSession = Depends(get_db)):
    """Health check with database status, favorites latency and error statistics."""
    try:
        await db.execute(text("SELECT 1"))
        database = {"status": "healthy", "connection": "ok"}
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        database = {"status": "unhealthy", "error": str(e)}

    return {
        "status": "healthy" if database["status"] == "healthy" else "unhealthy",
        "version": settings.app_version,
        "environment": settings.environment.value,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "uptime_seconds": round(time.time() - _app_start_time, 3),
        "details": {
            "database": database,
            "favorites": snapshot_metrics(),
            "locked_users": user_locks.active_keys(),
        },
        "error_statistics": error_handler.get_error_statistics(),
    }
