"""
Bounded, newest-first event log for sync progress.

The log keeps the last `capacity` entries in memory only. Observers
either poll query() or subscribe() a listener that is called with every
new entry. Every entry is also written to the structured application
log.
"""

from collections import deque
from collections.abc import Callable

import structlog

from feed_sync.sync.schemas import EventLogEntry, Severity

logger = structlog.get_logger(__name__)

DEFAULT_CAPACITY = 100
DEFAULT_QUERY_LIMIT = 50

EventListener = Callable[[EventLogEntry], None]

_LOG_METHODS = {
    Severity.INFO: "info",
    Severity.SUCCESS: "info",
    Severity.WARNING: "warning",
    Severity.ERROR: "error",
}


class EventLog:
    """
    Fixed-capacity ring buffer of EventLogEntry.

    Usage:
        log = EventLog(capacity=100)
        log.record("Sync started")
        log.record("Feed unreachable", Severity.ERROR)
        recent = log.query(limit=10)  # newest first
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError(f"capacity must be >= 1, got {capacity}")
        self._entries: deque[EventLogEntry] = deque(maxlen=capacity)
        self._listeners: list[EventListener] = []

    @property
    def capacity(self) -> int:
        return self._entries.maxlen or 0

    def __len__(self) -> int:
        return len(self._entries)

    def record(
        self,
        message: str,
        severity: Severity = Severity.INFO,
    ) -> EventLogEntry:
        """
        Add an entry at the front, evicting the oldest when full.

        Args:
            message: Human-readable event description
            severity: Event severity

        Returns:
            The recorded entry
        """
        entry = EventLogEntry(message=message, severity=Severity(severity))
        self._entries.appendleft(entry)

        getattr(logger, _LOG_METHODS[entry.severity])(
            message, severity=entry.severity.value
        )

        for listener in list(self._listeners):
            try:
                listener(entry)
            except Exception as e:
                logger.warning("Event listener failed", error=str(e))

        return entry

    def query(self, limit: int = DEFAULT_QUERY_LIMIT) -> list[EventLogEntry]:
        """Most recent entries, newest first."""
        if limit <= 0:
            return []
        return list(self._entries)[:limit]

    def clear(self) -> None:
        """Drop all entries, then record that the log was cleared."""
        self._entries.clear()
        self.record("Logs cleared")

    def subscribe(self, listener: EventListener) -> None:
        """Register a callback invoked with every new entry."""
        self._listeners.append(listener)

    def unsubscribe(self, listener: EventListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)
