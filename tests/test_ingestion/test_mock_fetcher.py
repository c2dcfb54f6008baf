"""Tests for the mock fetcher."""

import pytest

from feed_sync.ingestion.mock_fetcher import MockFeedFetcher

FEED_URL = "https://larevuedeshotels.com/feed"


class TestMockFeedFetcher:
    """Tests for MockFeedFetcher."""

    @pytest.mark.asyncio
    async def test_fetch_returns_items(self):
        fetcher = MockFeedFetcher(items_per_feed=5)

        result = await fetcher.fetch(FEED_URL, max_items=20)

        assert result.ok
        assert len(result.items) == 5
        assert all(i.link.startswith("https://larevuedeshotels.com/") for i in result.items)
        assert fetcher.calls == [FEED_URL]

    @pytest.mark.asyncio
    async def test_respects_max_items(self):
        result = await MockFeedFetcher(items_per_feed=10).fetch(FEED_URL, max_items=3)
        assert len(result.items) == 3

    @pytest.mark.asyncio
    async def test_items_are_deterministic(self):
        """Same feed URL should always yield the same links."""
        first = await MockFeedFetcher().fetch(FEED_URL, max_items=10)
        second = await MockFeedFetcher().fetch(FEED_URL, max_items=10)

        assert [i.link for i in first.items] == [i.link for i in second.items]
        assert len({i.link for i in first.items}) == 10

    @pytest.mark.asyncio
    async def test_failing_feed_reports_error(self):
        fetcher = MockFeedFetcher(failing_feeds={FEED_URL})

        result = await fetcher.fetch(FEED_URL, max_items=10)

        assert not result.ok
        assert result.items == []
        assert FEED_URL in result.message
