"""Sync pipeline: orchestration, deduplication and event log."""

from feed_sync.sync.deduplication import DeduplicationGate
from feed_sync.sync.event_log import EventLog
from feed_sync.sync.schemas import (
    EventLogEntry,
    FeedTestResult,
    Severity,
    SourceSyncResult,
    SyncResult,
    SyncState,
)
from feed_sync.sync.service import FeedSyncService

__all__ = [
    "DeduplicationGate",
    "EventLog",
    "EventLogEntry",
    "FeedSyncService",
    "FeedTestResult",
    "Severity",
    "SourceSyncResult",
    "SyncResult",
    "SyncState",
]
