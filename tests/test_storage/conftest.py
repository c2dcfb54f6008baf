"""Shared fixtures for storage tests."""

from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest


@pytest.fixture
def mock_database() -> AsyncMock:
    """Mock Database instance matching the Database API."""
    db = AsyncMock()
    db.fetchval = AsyncMock(return_value=None)
    db.fetchrow = AsyncMock(return_value=None)
    db.execute = AsyncMock(return_value="CREATE TABLE")
    return db


@pytest.fixture
def sample_db_row() -> dict:
    """A dict mimicking an asyncpg Record for an article."""
    return {
        "id": 7,
        "url": "https://example.com/a1",
        "title": "Hello",
        "content": "<p>Hi</p>",
        "summary": "Hi",
        "category": "hotel",
        "partition": "hotels",
        "status": "published",
        "featured": False,
        "tags": ["actualité", "hotel", "wordpress"],
        "locality": None,
        "author": "La Revue",
        "source": "https://example.com/feed",
        "image_url": None,
        "published_at": datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc),
        "published_at_raw": None,
        "view_count": 0,
        "created_at": datetime(2025, 1, 1, tzinfo=timezone.utc),
        "synced_at": datetime(2025, 1, 1, tzinfo=timezone.utc),
    }
