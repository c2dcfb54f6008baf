"""Pytest fixtures for feed-sync tests."""

import pytest

from feed_sync.ingestion.feed_client import FeedFetcher
from feed_sync.ingestion.schemas import FetchResult, RawItem
from feed_sync.sources.registry import SourceRegistry
from feed_sync.sources.schemas import SourceDescriptor
from feed_sync.storage.memory import InMemoryArticleStore
from feed_sync.sync.event_log import EventLog


class StubFetcher(FeedFetcher):
    """Fetcher returning canned results per feed URL, recording every call."""

    def __init__(self, results: dict[str, FetchResult | Exception] | None = None):
        self.results = results or {}
        self.calls: list[tuple[str, int]] = []

    async def fetch(self, feed_url: str, max_items: int) -> FetchResult:
        self.calls.append((feed_url, max_items))
        result = self.results.get(feed_url, FetchResult())
        if isinstance(result, Exception):
            raise result
        return FetchResult(
            status=result.status,
            items=result.items[:max_items],
            message=result.message,
        )


@pytest.fixture
def hotel_source() -> SourceDescriptor:
    return SourceDescriptor(
        feed_url="https://example.com/feed",
        category="hotel",
        partition="hotels",
    )


@pytest.fixture
def restaurant_source() -> SourceDescriptor:
    return SourceDescriptor(
        feed_url="https://example.org/feed",
        category="restaurant",
        partition="restaurants",
    )


@pytest.fixture
def registry(hotel_source: SourceDescriptor, restaurant_source: SourceDescriptor) -> SourceRegistry:
    return SourceRegistry([hotel_source, restaurant_source])


@pytest.fixture
def sample_item() -> RawItem:
    """The reference item: untrimmed title and an embedded script."""
    return RawItem(
        title=" Hello ",
        link="https://example.com/a1",
        published_at="Mon, 15 Jan 2024 10:30:00 +0000",
        body_html="<p>Hi</p><script>evil()</script>",
    )


@pytest.fixture
def memory_store() -> InMemoryArticleStore:
    return InMemoryArticleStore()


@pytest.fixture
def event_log() -> EventLog:
    return EventLog(capacity=100)


@pytest.fixture
def stub_fetcher() -> StubFetcher:
    return StubFetcher()
