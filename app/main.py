"""
FastAPI main application
"""

import logging

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from app.core.config import settings
from app.core.logging import configure_logging
from app.api.errors import register_exception_handlers
from app.api.router import api_router
from app.infrastructure.background.session_reaper import SessionReaper

# Import all ORM models to ensure relationships are resolved
import app.infrastructure.orm  # noqa: F401

configure_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    # Startup - migrations handle database schema
    logger.info(f"Starting {settings.PROJECT_NAME} API ({settings.ENVIRONMENT})")
    reaper = SessionReaper()
    if settings.SESSION_REAPER_ENABLED:
        await reaper.start()
    app.state.session_reaper = reaper
    try:
        yield
    finally:
        # Shutdown
        await reaper.stop()
        logger.info(f"Shutting down {settings.PROJECT_NAME} API")


# Create FastAPI app
app = FastAPI(
    title=f"{settings.PROJECT_NAME} API",
    description=settings.DESCRIPTION,
    version=settings.VERSION,
    lifespan=lifespan
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_HOSTS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Include API routes
app.include_router(api_router, prefix=settings.API_V1_PREFIX)


@app.get("/")
async def root():
    """Root endpoint"""
    return {"message": f"{settings.PROJECT_NAME} API", "version": settings.VERSION}


if __name__ == "__main__":
    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower()
    )
