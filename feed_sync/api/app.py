"""
FastAPI application factory.
"""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

from feed_sync import __version__
from feed_sync.api.dependencies import cleanup_dependencies
from feed_sync.api.routes import health, sync

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    logger.info("Feed sync API starting up")
    yield
    logger.info("Feed sync API shutting down")
    await cleanup_dependencies()


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application
    """
    openapi_tags = [
        {"name": "health", "description": "Service health checks"},
        {"name": "sync", "description": "Feed synchronization and event log"},
    ]

    app = FastAPI(
        title="Feed Sync API",
        description="Synchronizes La Revue RSS feeds into the news store",
        version=__version__,
        lifespan=lifespan,
        openapi_tags=openapi_tags,
    )

    app.include_router(health.router, tags=["health"])
    app.include_router(sync.router, tags=["sync"])

    return app
