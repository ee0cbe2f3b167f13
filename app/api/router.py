"""Main API router"""

import logging

from fastapi import APIRouter
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from .routes import auth, users, dashboard
from ..core.config import settings
from ..db.database import SessionLocal

logger = logging.getLogger(__name__)

# Main API router
api_router = APIRouter()

# Include all routes
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(users.router, prefix="/profile", tags=["profile"])
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])


@api_router.get("/health")
async def health_check():
    """Health check that reports database and Redis connectivity"""
    db = SessionLocal()
    try:
        db.execute(text("SELECT 1"))
        db_status = "healthy"
    except SQLAlchemyError as e:
        logger.warning(f"Database health check failed: {e}")
        db_status = "unhealthy"
    finally:
        db.close()

    # Redis only backs the optional Celery scheduler, so it never degrades the status
    try:
        import redis
        redis.from_url(settings.REDIS_URL, socket_connect_timeout=1).ping()
        redis_status = "healthy"
    except Exception as e:
        logger.warning(f"Redis health check failed: {e}")
        redis_status = "unhealthy"

    return {
        "status": "healthy" if db_status == "healthy" else "degraded",
        "database": db_status,
        "redis": redis_status,
        "version": settings.VERSION,
    }
