"""Tests for EventLog."""

import pytest

from feed_sync.sync.event_log import EventLog
from feed_sync.sync.schemas import EventLogEntry, Severity


class TestEventLog:
    """Tests for EventLog."""

    def test_record_returns_entry(self, event_log):
        entry = event_log.record("Hello", Severity.SUCCESS)

        assert isinstance(entry, EventLogEntry)
        assert entry.message == "Hello"
        assert entry.severity is Severity.SUCCESS
        assert entry.timestamp.tzinfo is not None

    def test_default_severity_is_info(self, event_log):
        assert event_log.record("x").severity is Severity.INFO

    def test_accepts_severity_string(self, event_log):
        assert event_log.record("x", "warning").severity is Severity.WARNING

    def test_query_newest_first(self, event_log):
        for i in range(3):
            event_log.record(f"event {i}")

        assert [e.message for e in event_log.query()] == ["event 2", "event 1", "event 0"]

    def test_query_limit(self, event_log):
        for i in range(60):
            event_log.record(f"event {i}")

        assert len(event_log.query()) == 50
        assert [e.message for e in event_log.query(2)] == ["event 59", "event 58"]

    @pytest.mark.parametrize("limit", [0, -1])
    def test_non_positive_limit_returns_empty(self, event_log, limit):
        event_log.record("x")
        assert event_log.query(limit) == []

    def test_capacity_evicts_oldest(self):
        log = EventLog(capacity=100)
        for i in range(101):
            log.record(f"event {i}")

        entries = log.query(1000)
        assert len(entries) == 100
        assert entries[0].message == "event 100"
        assert entries[-1].message == "event 1"

    def test_invalid_capacity(self):
        with pytest.raises(ValueError):
            EventLog(capacity=0)

    def test_clear_leaves_single_entry(self, event_log):
        for i in range(5):
            event_log.record(f"event {i}")

        event_log.clear()

        entries = event_log.query()
        assert len(entries) == 1
        assert entries[0].message == "Logs cleared"

    def test_listener_notified(self, event_log):
        seen = []
        event_log.subscribe(seen.append)

        entry = event_log.record("x")
        event_log.unsubscribe(seen.append)
        event_log.record("y")

        assert seen == [entry]

    def test_failing_listener_does_not_break_recording(self, event_log):
        def broken(entry):
            raise RuntimeError("boom")

        event_log.subscribe(broken)
        event_log.record("still recorded")

        assert event_log.query()[0].message == "still recorded"

    def test_to_dict(self, event_log):
        data = event_log.record("x", Severity.ERROR).to_dict()

        assert data["message"] == "x"
        assert data["severity"] == "error"
        assert "timestamp" in data
