"""Tests for logging setup and sync run context."""

import logging

import pytest
import structlog

from feed_sync.config.settings import Settings
from feed_sync.observability.logging import (
    QUIET_LOGGERS,
    new_sync_run_id,
    setup_logging,
    sync_run_context,
)


@pytest.fixture(autouse=True)
def clean_context():
    structlog.contextvars.clear_contextvars()
    yield
    structlog.contextvars.clear_contextvars()


class TestSyncRunContext:
    def test_binds_run_id(self):
        with sync_run_context("run-1") as run_id:
            assert run_id == "run-1"
            assert structlog.contextvars.get_contextvars()["sync_run_id"] == "run-1"

        assert "sync_run_id" not in structlog.contextvars.get_contextvars()

    def test_generates_run_id(self):
        with sync_run_context() as run_id:
            assert len(run_id) == 12
            assert structlog.contextvars.get_contextvars()["sync_run_id"] == run_id

    def test_keeps_caller_fields(self):
        """Should only unbind the run id on exit."""
        structlog.contextvars.bind_contextvars(request_id="req-7")

        with sync_run_context():
            pass

        assert structlog.contextvars.get_contextvars() == {"request_id": "req-7"}

    def test_unbinds_on_error(self):
        with pytest.raises(RuntimeError):
            with sync_run_context():
                raise RuntimeError("boom")

        assert "sync_run_id" not in structlog.contextvars.get_contextvars()

    def test_run_ids_differ(self):
        assert new_sync_run_id() != new_sync_run_id()


class TestSetupLogging:
    def test_quiets_http_loggers(self):
        setup_logging(Settings(log_level="DEBUG"))

        for name in QUIET_LOGGERS:
            assert logging.getLogger(name).level == logging.WARNING

    def test_production_renders_json(self):
        setup_logging(Settings(environment="production"))

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)

    def test_development_renders_console(self):
        setup_logging(Settings(environment="development"))

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)
