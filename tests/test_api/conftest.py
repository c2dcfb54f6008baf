"""Shared fixtures for API tests."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from feed_sync.api.app import create_app
from feed_sync.api.auth import verify_api_key
from feed_sync.api.dependencies import (
    get_database_if_available,
    get_existing_sync_service,
    get_sync_service,
)
from feed_sync.sync.service import FeedSyncService


@pytest.fixture
def sync_service(memory_store, stub_fetcher, registry, event_log) -> FeedSyncService:
    """Real service over in-memory collaborators."""
    return FeedSyncService(
        store=memory_store,
        fetcher=stub_fetcher,
        registry=registry,
        event_log=event_log,
        metrics=MagicMock(),
    )


@pytest.fixture
def mock_database() -> AsyncMock:
    db = AsyncMock()
    db.health_check = AsyncMock(return_value=True)
    return db


@pytest.fixture
def client(sync_service, mock_database):
    """TestClient with auth bypassed and dependencies overridden."""
    app = create_app()
    app.dependency_overrides[verify_api_key] = lambda: "test-key"
    app.dependency_overrides[get_sync_service] = lambda: sync_service
    app.dependency_overrides[get_existing_sync_service] = lambda: sync_service
    app.dependency_overrides[get_database_if_available] = lambda: mock_database
    return TestClient(app)
