"""
Deduplication gate: has this article URL been stored already?

The URL is compared literally. A trailing slash, a query string or a
different scheme produce a different key. The check is read-before-write
with no lock; FeedSyncService's single-flight guard is what keeps two
runs from inserting the same URL.
"""

from feed_sync.storage.base import ArticleStore

NATURAL_KEY = "url"


class DeduplicationGate:
    """Existence check against the store's natural key."""

    def __init__(self, store: ArticleStore) -> None:
        self._store = store

    async def exists(self, url: str) -> bool:
        """Return True if a record with this exact url is already stored."""
        return await self._store.find_by_key(NATURAL_KEY, url) is not None
