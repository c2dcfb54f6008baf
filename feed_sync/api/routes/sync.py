"""Sync endpoints - trigger runs, test feeds, read and clear the event log."""

import asyncio

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query, status

from feed_sync.api.auth import verify_api_key
from feed_sync.api.dependencies import get_sync_service
from feed_sync.api.models import (
    ErrorResponse,
    FeedTestItem,
    FeedTestResponse,
    LogEntryItem,
    LogsResponse,
    SourceItem,
    SyncStatusResponse,
    TriggerSyncResponse,
)
from feed_sync.sync.schemas import EventLogEntry
from feed_sync.sync.service import FeedSyncService

logger = structlog.get_logger(__name__)
router = APIRouter()

_background_tasks: set[asyncio.Task] = set()  # prevent GC of fire-and-forget tasks


def _entry_to_item(entry: EventLogEntry) -> LogEntryItem:
    return LogEntryItem(**entry.to_dict())


@router.post(
    "/sync",
    response_model=TriggerSyncResponse,
    status_code=status.HTTP_202_ACCEPTED,
    responses={401: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
    summary="Start a full feed synchronization in the background",
)
async def trigger_sync(
    service: FeedSyncService = Depends(get_sync_service),
    api_key: str = Depends(verify_api_key),
) -> TriggerSyncResponse:
    if service.is_running:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Sync already in progress",
        )

    async def _run_sync() -> None:
        try:
            await service.sync_all()
        except Exception as e:
            # Already recorded in the event log by the service
            logger.error("Background sync failed", error=str(e))

    task = asyncio.create_task(_run_sync())
    _background_tasks.add(task)
    task.add_done_callback(_background_tasks.discard)

    return TriggerSyncResponse(
        status="started",
        message="Feed synchronization started in background",
    )


@router.get(
    "/sync/status",
    response_model=SyncStatusResponse,
    summary="Current run state and configured sources",
)
async def sync_status(
    service: FeedSyncService = Depends(get_sync_service),
    api_key: str = Depends(verify_api_key),
) -> SyncStatusResponse:
    return SyncStatusResponse(
        state=service.state.value,
        running=service.is_running,
        sources=[
            SourceItem(feed_url=s.feed_url, category=s.category, partition=s.partition)
            for s in service.registry
        ],
    )


@router.post(
    "/sync/test",
    response_model=FeedTestResponse,
    summary="Check feed reachability without storing anything",
)
async def test_feeds(
    sample_size: int | None = Query(default=None, ge=1, le=100),
    service: FeedSyncService = Depends(get_sync_service),
    api_key: str = Depends(verify_api_key),
) -> FeedTestResponse:
    results = await service.test_feeds(sample_size=sample_size)
    return FeedTestResponse(
        results=[FeedTestItem(**r.to_dict()) for r in results],
        all_ok=all(r.ok for r in results),
    )


@router.get(
    "/logs",
    response_model=LogsResponse,
    summary="Recent sync events, newest first",
)
async def get_logs(
    limit: int = Query(default=50, ge=1, le=1000),
    service: FeedSyncService = Depends(get_sync_service),
    api_key: str = Depends(verify_api_key),
) -> LogsResponse:
    entries = service.get_logs(limit)
    return LogsResponse(
        entries=[_entry_to_item(e) for e in entries],
        total=len(service.event_log),
    )


@router.delete(
    "/logs",
    response_model=LogsResponse,
    summary="Clear the event log",
)
async def clear_logs(
    service: FeedSyncService = Depends(get_sync_service),
    api_key: str = Depends(verify_api_key),
) -> LogsResponse:
    service.clear_logs()
    entries = service.get_logs()
    return LogsResponse(
        entries=[_entry_to_item(e) for e in entries],
        total=len(service.event_log),
    )
