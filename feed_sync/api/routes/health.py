"""Health check endpoint."""

from fastapi import APIRouter, Depends

from feed_sync.api.dependencies import get_database_if_available, get_existing_sync_service
from feed_sync.api.models import HealthResponse
from feed_sync.storage.database import Database
from feed_sync.sync.service import FeedSyncService

router = APIRouter()


@router.get("/health", response_model=HealthResponse, summary="Service health")
async def health(
    database: Database | None = Depends(get_database_if_available),
    service: FeedSyncService | None = Depends(get_existing_sync_service),
) -> HealthResponse:
    """Reports "degraded" instead of failing when the database is down."""
    db_healthy = database is not None and await database.health_check()
    return HealthResponse(
        status="healthy" if db_healthy else "degraded",
        database=db_healthy,
        sync_running=service is not None and service.is_running,
    )
