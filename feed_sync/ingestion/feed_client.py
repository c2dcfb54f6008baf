"""
Feed fetchers: the transport side of the sync pipeline.

A FeedFetcher turns a feed URL into an ordered list of RawItem. Two
implementations are provided:
- Rss2JsonFetcher: goes through the rss2json.com API, which returns the
  feed already converted to JSON (thumbnail and enclosure included)
- DirectFeedFetcher: downloads the feed and parses RSS/Atom locally with
  feedparser

Transport failures and HTTP error statuses raise FeedFetchError. A feed
that was reached but reported a problem (rss2json status "error",
unparseable XML) comes back as a non-ok FetchResult so diagnostics can
show the message without an exception.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any

import feedparser
from bs4 import BeautifulSoup

from feed_sync.config.settings import Settings, get_settings
from feed_sync.ingestion.http_client import HTTPClient, HTTPClientError
from feed_sync.ingestion.schemas import STATUS_OK, FetchResult, RawItem

logger = logging.getLogger(__name__)

STATUS_ERROR = "error"


class FeedFetchError(Exception):
    """Raised when a feed cannot be fetched or reports a failure."""

    def __init__(
        self,
        message: str,
        feed_url: str | None = None,
        status_code: int | None = None,
    ):
        super().__init__(message)
        self.feed_url = feed_url
        self.status_code = status_code


class FeedFetcher(ABC):
    """Abstract base for feed transports."""

    @abstractmethod
    async def fetch(self, feed_url: str, max_items: int) -> FetchResult:
        """
        Fetch up to max_items entries from a feed, in feed order.

        Args:
            feed_url: Location of the RSS/Atom feed
            max_items: Maximum number of entries to return

        Returns:
            FetchResult with status and items

        Raises:
            FeedFetchError: On transport failure or HTTP error status
        """


class Rss2JsonFetcher(FeedFetcher):
    """
    Fetch feeds through the rss2json.com conversion API.

    The API key is optional for the free tier but required for `count`
    values above the free limit.
    """

    def __init__(
        self,
        api_url: str = "https://api.rss2json.com/v1/api.json",
        api_key: str | None = None,
        timeout: float = 30.0,
        user_agent: str | None = None,
    ):
        self._api_url = api_url
        self._api_key = api_key
        self._timeout = timeout
        self._user_agent = user_agent

    async def fetch(self, feed_url: str, max_items: int) -> FetchResult:
        params: dict[str, Any] = {"rss_url": feed_url, "count": max_items}
        if self._api_key:
            params["api_key"] = self._api_key

        try:
            async with HTTPClient(timeout=self._timeout, user_agent=self._user_agent) as client:
                response = await client.get(self._api_url, params=params)
                payload = response.json()
        except HTTPClientError as e:
            raise FeedFetchError(str(e), feed_url=feed_url, status_code=e.status_code) from e
        except ValueError as e:
            raise FeedFetchError(f"Invalid JSON from feed API: {e}", feed_url=feed_url) from e

        if not isinstance(payload, dict):
            raise FeedFetchError(
                f"Unexpected feed API response: {type(payload).__name__}", feed_url=feed_url
            )

        status = payload.get("status", STATUS_ERROR)
        if status != STATUS_OK:
            return FetchResult(status=status, message=payload.get("message"))

        items = []
        raw_items = payload.get("items") or []
        if not isinstance(raw_items, list):
            raise FeedFetchError("Unexpected feed API items field", feed_url=feed_url)

        for raw in raw_items[:max_items]:
            if not isinstance(raw, dict):
                continue
            item = self._to_raw_item(raw)
            if item is not None:
                items.append(item)

        return FetchResult(status=STATUS_OK, items=items)

    def _to_raw_item(self, raw: dict[str, Any]) -> RawItem | None:
        """Convert one rss2json item; entries without a link are dropped."""
        link = raw.get("link")
        if not link:
            logger.debug(f"Skipping feed item without link: {raw.get('title')!r}")
            return None

        enclosure = raw.get("enclosure")
        enclosure_url = enclosure.get("link") if isinstance(enclosure, dict) else None

        return RawItem(
            title=raw.get("title"),
            link=link,
            published_at=raw.get("pubDate"),
            body_html=raw.get("content") or None,
            summary_html=raw.get("description") or None,
            thumbnail_url=raw.get("thumbnail") or None,
            enclosure_url=enclosure_url or None,
        )


class DirectFeedFetcher(FeedFetcher):
    """
    Download feeds directly and parse them with feedparser.

    Content Handling:
        - content:encoded -> body_html, summary/description -> summary_html
        - media:thumbnail, else the first <img> of the body -> thumbnail_url
        - first enclosure with an href -> enclosure_url
    """

    def __init__(
        self,
        timeout: float = 30.0,
        user_agent: str | None = None,
    ):
        self._timeout = timeout
        self._user_agent = user_agent

    async def fetch(self, feed_url: str, max_items: int) -> FetchResult:
        try:
            async with HTTPClient(timeout=self._timeout, user_agent=self._user_agent) as client:
                response = await client.get(feed_url)
        except HTTPClientError as e:
            raise FeedFetchError(str(e), feed_url=feed_url, status_code=e.status_code) from e

        feed = feedparser.parse(response.text)
        entries = feed.get("entries", [])

        if feed.get("bozo") and not entries:
            return FetchResult(
                status=STATUS_ERROR,
                message=f"Unparseable feed: {feed.get('bozo_exception')}",
            )

        items = []
        for entry in entries[:max_items]:
            item = self._to_raw_item(entry)
            if item is not None:
                items.append(item)

        logger.debug(f"Parsed {len(entries)} entries from {feed_url}")
        return FetchResult(status=STATUS_OK, items=items)

    def _to_raw_item(self, entry: dict[str, Any]) -> RawItem | None:
        link = entry.get("link")
        if not link:
            return None

        body_html = None
        if entry.get("content"):
            body_html = entry["content"][0].get("value") or None

        return RawItem(
            title=entry.get("title"),
            link=link,
            published_at=entry.get("published") or entry.get("updated"),
            body_html=body_html,
            summary_html=entry.get("summary") or None,
            thumbnail_url=self._thumbnail(entry, body_html),
            enclosure_url=self._enclosure(entry),
        )

    def _thumbnail(self, entry: dict[str, Any], body_html: str | None) -> str | None:
        thumbnails = entry.get("media_thumbnail") or []
        if thumbnails and thumbnails[0].get("url"):
            return thumbnails[0]["url"]

        html_content = body_html or entry.get("summary")
        if not html_content:
            return None

        soup = BeautifulSoup(html_content, "html.parser")
        img = soup.find("img", src=True)
        return img["src"] if img else None

    def _enclosure(self, entry: dict[str, Any]) -> str | None:
        for enclosure in entry.get("enclosures") or []:
            href = enclosure.get("href")
            if href:
                return href
        return None


def create_fetcher(settings: Settings | None = None) -> FeedFetcher:
    """Build the fetcher selected by the FETCH_MODE setting."""
    settings = settings or get_settings()

    if settings.fetch_mode == "direct":
        return DirectFeedFetcher(
            timeout=settings.http_timeout,
            user_agent=settings.user_agent,
        )

    return Rss2JsonFetcher(
        api_url=settings.rss2json_api_url,
        api_key=settings.rss2json_api_key,
        timeout=settings.http_timeout,
        user_agent=settings.user_agent,
    )
