"""
Feed sync service - pulls every registered feed into the article store.

For each source in registry order: fetch the feed, map each item to an
ArticleRecord, skip items whose url is already stored, insert the rest.
Progress and failures are recorded in the EventLog.

Failure handling:
- A feed that cannot be fetched aborts the whole run (remaining sources
  are not attempted). Articles inserted before the failure stay stored.
- A single item that fails to map or persist is recorded and skipped;
  the rest of the feed is still processed.
- Calling sync_all() while a run is in progress records a warning and
  returns None without touching the fetcher or the store.

Sources and items are processed strictly sequentially; nothing is
fetched concurrently and no call is retried.
"""

import time

import structlog

from feed_sync.config.settings import get_settings
from feed_sync.ingestion.feed_client import FeedFetcher, FeedFetchError, create_fetcher
from feed_sync.ingestion.mapper import map_item
from feed_sync.ingestion.mock_fetcher import MockFeedFetcher
from feed_sync.ingestion.schemas import RawItem
from feed_sync.observability.logging import sync_run_context
from feed_sync.observability.metrics import MetricsCollector, get_metrics
from feed_sync.sources.registry import SourceRegistry, load_registry
from feed_sync.sources.schemas import SourceDescriptor
from feed_sync.storage.base import ArticleStore
from feed_sync.sync.deduplication import DeduplicationGate
from feed_sync.sync.event_log import DEFAULT_QUERY_LIMIT, EventLog
from feed_sync.sync.schemas import (
    EventLogEntry,
    FeedTestResult,
    Severity,
    SourceSyncResult,
    SyncResult,
    SyncState,
)

logger = structlog.get_logger(__name__)

TITLE_PREVIEW_LENGTH = 50


def _preview(text: str, length: int = TITLE_PREVIEW_LENGTH) -> str:
    return text if len(text) <= length else text[:length] + "..."


class FeedSyncService:
    """
    Orchestrates synchronization of all registered feeds into a store.

    Collaborators are injected; only the store is mandatory. A single
    instance is meant to be shared by every caller (CLI, API, scheduler)
    so that its run state guards against overlapping runs.

    Usage:
        service = FeedSyncService(store=InMemoryArticleStore())
        result = await service.sync_all()
        for entry in service.get_logs(limit=10):
            print(entry.message)
    """

    def __init__(
        self,
        store: ArticleStore,
        fetcher: FeedFetcher | None = None,
        registry: SourceRegistry | None = None,
        event_log: EventLog | None = None,
        max_items: int | None = None,
        test_items: int | None = None,
        author: str | None = None,
        metrics: MetricsCollector | None = None,
        use_mock: bool = False,
    ):
        """
        Initialize sync service.

        Args:
            store: Article store (lookup by key + insert)
            fetcher: Feed transport (or create from config)
            registry: Sources to sync (or load from config)
            event_log: Event log (or a new one sized from config)
            max_items: Items fetched per feed during a sync
            test_items: Items fetched per feed by test_feeds()
            author: Attribution stored on new articles
            metrics: Metrics collector (or the global one)
            use_mock: Use the mock fetcher instead of the network
        """
        settings = get_settings()

        self._store = store
        if fetcher is not None:
            self._fetcher = fetcher
        elif use_mock:
            self._fetcher = MockFeedFetcher()
        else:
            self._fetcher = create_fetcher(settings)

        self._registry = registry or load_registry(settings)
        self._events = event_log or EventLog(capacity=settings.event_log_capacity)
        self._max_items = max_items or settings.feed_max_items
        self._test_items = test_items or settings.feed_test_items
        self._author = author or settings.default_author
        self._metrics = metrics or get_metrics()

        self._gate = DeduplicationGate(store)
        self._state = SyncState.IDLE

        logger.info(
            "Feed sync service initialized",
            sources=[s.feed_url for s in self._registry],
            fetcher=type(self._fetcher).__name__,
            max_items=self._max_items,
        )

    @property
    def state(self) -> SyncState:
        return self._state

    @property
    def is_running(self) -> bool:
        """Check if a full sync is in progress."""
        return self._state is SyncState.RUNNING

    @property
    def registry(self) -> SourceRegistry:
        return self._registry

    @property
    def event_log(self) -> EventLog:
        return self._events

    async def sync_all(self) -> SyncResult | None:
        """
        Run one full synchronization over every registered source.

        Returns:
            SyncResult with per-source counts, or None if a run was
            already in progress

        Raises:
            Exception: Whatever aborted the run (typically FeedFetchError),
                after the failure was recorded and the state reset
        """
        if self._state is SyncState.RUNNING:
            self._events.record("Sync already in progress", Severity.WARNING)
            self._metrics.record_run("rejected")
            return None

        # Flag is set before the first await so a concurrent caller sees it
        self._state = SyncState.RUNNING
        try:
            with sync_run_context():
                return await self._run_all_sources()
        finally:
            self._state = SyncState.IDLE

    async def _run_all_sources(self) -> SyncResult:
        self._events.record("Starting feed synchronization")
        started = time.monotonic()
        result = SyncResult()

        try:
            for source in self._registry:
                self._events.record(f"Processing source: {source.feed_url}")
                result.add(await self.sync_source(source))
        except Exception as e:
            self._events.record(f"Sync failed: {e}", Severity.ERROR)
            self._metrics.record_run("failure")
            raise

        self._events.record(
            f"Sync completed: {result.total_added} new articles "
            f"out of {result.total_processed} processed",
            Severity.SUCCESS,
        )
        self._metrics.record_run("success")
        logger.info(
            "Feed sync completed",
            added=result.total_added,
            processed=result.total_processed,
            errors=result.total_errors,
            elapsed_seconds=round(time.monotonic() - started, 2),
        )
        return result

    async def sync_source(
        self,
        source: SourceDescriptor,
        max_items: int | None = None,
    ) -> SourceSyncResult:
        """
        Fetch one feed and store its new articles.

        Args:
            source: Feed to synchronize
            max_items: Override of the per-feed item cap

        Returns:
            Counts for this source

        Raises:
            FeedFetchError: If the feed cannot be fetched or reports an error
        """
        result = SourceSyncResult(source=source)
        limit = max_items or self._max_items

        self._events.record(f"Fetching feed: {source.label}")
        started = time.monotonic()

        try:
            fetched = await self._fetcher.fetch(source.feed_url, limit)
            if not fetched.ok:
                raise FeedFetchError(
                    f"Feed error: {fetched.message or fetched.status}",
                    feed_url=source.feed_url,
                )
        except Exception as e:
            self._metrics.record_fetch(
                source.category, time.monotonic() - started, success=False
            )
            self._events.record(f"Source {source.label} failed: {e}", Severity.ERROR)
            raise

        self._metrics.record_fetch(source.category, time.monotonic() - started)
        self._events.record(f"{len(fetched.items)} articles found for {source.label}")

        for item in fetched.items:
            try:
                if await self._process_item(item, source):
                    result.added += 1
            except Exception as e:
                result.errors += 1
                self._events.record(
                    f'Article "{item.title or item.link}" failed: {e}',
                    Severity.ERROR,
                )
                logger.warning(
                    "Article processing failed",
                    url=item.link,
                    error=str(e),
                    exc_info=True,
                )
            result.processed += 1

        self._events.record(
            f"{source.label}: {result.added} new / {result.processed} processed"
        )
        self._metrics.record_source(
            category=source.category,
            added=result.added,
            processed=result.processed,
            errors=result.errors,
        )
        return result

    async def _process_item(self, item: RawItem, source: SourceDescriptor) -> bool:
        """Map, deduplicate and store one item. Returns True if inserted."""
        record = map_item(item, source, author=self._author)

        if await self._gate.exists(record.url):
            return False

        await self._store.insert(record)
        self._events.record(f'Article added: "{_preview(record.title)}"', Severity.SUCCESS)
        return True

    async def test_feeds(self, sample_size: int | None = None) -> list[FeedTestResult]:
        """
        Check that every feed is reachable, without touching the store.

        Never raises: a failing feed is reported with status "error".

        Args:
            sample_size: Items requested per feed (default from config)

        Returns:
            One FeedTestResult per source, in registry order
        """
        count = sample_size or self._test_items
        results: list[FeedTestResult] = []

        self._events.record("Testing feeds")

        for source in self._registry:
            try:
                fetched = await self._fetcher.fetch(source.feed_url, count)
            except Exception as e:
                self._events.record(f"Feed test {source.label} failed: {e}", Severity.ERROR)
                results.append(
                    FeedTestResult(
                        feed_url=source.feed_url,
                        category=source.category,
                        status="error",
                        error=str(e),
                    )
                )
                continue

            results.append(
                FeedTestResult(
                    feed_url=source.feed_url,
                    category=source.category,
                    status=fetched.status,
                    item_count=len(fetched.items),
                    error=fetched.message,
                )
            )

            if fetched.ok:
                self._events.record(f"{source.label}: {len(fetched.items)} articles available")
            else:
                self._events.record(
                    f"{source.label}: {fetched.message or fetched.status}", Severity.ERROR
                )

        self._events.record("Feed test finished")
        return results

    def get_logs(self, limit: int = DEFAULT_QUERY_LIMIT) -> list[EventLogEntry]:
        """Recent events, newest first."""
        return self._events.query(limit)

    def clear_logs(self) -> None:
        """Empty the event log."""
        self._events.clear()
