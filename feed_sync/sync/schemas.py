"""Data models for the sync pipeline: events, run state and results."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from feed_sync.sources.schemas import SourceDescriptor


def _utc_now() -> datetime:
    """Return current UTC time with timezone info."""
    return datetime.now(timezone.utc)


class Severity(str, Enum):
    """Event severity, ordered from least to most urgent."""

    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


class SyncState(str, Enum):
    """Orchestrator run state. A run goes IDLE -> RUNNING -> IDLE."""

    IDLE = "idle"
    RUNNING = "running"


@dataclass(frozen=True)
class EventLogEntry:
    """One progress/result event."""

    message: str
    severity: Severity = Severity.INFO
    timestamp: datetime = field(default_factory=_utc_now)

    def to_dict(self) -> dict[str, Any]:
        return {
            "timestamp": self.timestamp.isoformat(),
            "message": self.message,
            "severity": self.severity.value,
        }


@dataclass
class SourceSyncResult:
    """Counts for one source. `processed` includes duplicates and failures."""

    source: SourceDescriptor
    added: int = 0
    processed: int = 0
    errors: int = 0


@dataclass
class SyncResult:
    """Totals for a full run across all sources."""

    total_added: int = 0
    total_processed: int = 0
    sources: list[SourceSyncResult] = field(default_factory=list)

    @property
    def total_errors(self) -> int:
        return sum(s.errors for s in self.sources)

    def add(self, result: SourceSyncResult) -> None:
        self.sources.append(result)
        self.total_added += result.added
        self.total_processed += result.processed


@dataclass
class FeedTestResult:
    """Reachability report for one feed."""

    feed_url: str
    category: str
    status: str
    item_count: int = 0
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == "ok"

    def to_dict(self) -> dict[str, Any]:
        return {
            "feed_url": self.feed_url,
            "category": self.category,
            "status": self.status,
            "item_count": self.item_count,
            "error": self.error,
        }
