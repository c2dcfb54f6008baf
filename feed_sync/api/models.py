"""
Pydantic request/response models for the sync API.
"""

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Response model for errors."""

    detail: str = Field(..., description="Error message")
    error_type: str = Field(default="error", description="Error type")


class TriggerSyncResponse(BaseModel):
    """Response for a sync trigger."""

    status: str = Field(..., description="'started'")
    message: str


class SourceItem(BaseModel):
    feed_url: str
    category: str
    partition: str


class SyncStatusResponse(BaseModel):
    """Current run state and configured sources."""

    state: str = Field(..., description="'idle' or 'running'")
    running: bool
    sources: list[SourceItem]


class FeedTestItem(BaseModel):
    feed_url: str
    category: str
    status: str
    item_count: int
    error: str | None = None


class FeedTestResponse(BaseModel):
    results: list[FeedTestItem]
    all_ok: bool


class LogEntryItem(BaseModel):
    timestamp: str
    message: str
    severity: str


class LogsResponse(BaseModel):
    entries: list[LogEntryItem]
    total: int


class HealthResponse(BaseModel):
    status: str
    database: bool
    sync_running: bool
