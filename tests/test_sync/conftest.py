"""Shared fixtures for sync tests."""

from unittest.mock import MagicMock

import pytest

from feed_sync.ingestion.schemas import FetchResult, RawItem
from feed_sync.sync.service import FeedSyncService


@pytest.fixture
def mock_metrics() -> MagicMock:
    """Stand-in for MetricsCollector so tests don't touch the global registry."""
    return MagicMock()


@pytest.fixture
def service(memory_store, stub_fetcher, registry, event_log, mock_metrics) -> FeedSyncService:
    return FeedSyncService(
        store=memory_store,
        fetcher=stub_fetcher,
        registry=registry,
        event_log=event_log,
        max_items=20,
        test_items=5,
        metrics=mock_metrics,
    )


@pytest.fixture
def feed_items():
    """Factory building a FetchResult of `count` distinct items under base_url."""

    def _build(base_url: str, count: int) -> FetchResult:
        return FetchResult(
            items=[
                RawItem(
                    title=f"Article {i}",
                    link=f"{base_url}/article-{i}",
                    body_html=f"<p>Texte {i}</p>",
                )
                for i in range(count)
            ]
        )

    return _build
