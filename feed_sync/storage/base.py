"""
Abstract store interface for article persistence.

The sync pipeline only needs two capabilities from a store: look up a
record by an exact field value, and insert a new record. Any backend
providing both can be injected into FeedSyncService.
"""

from abc import ABC, abstractmethod
from typing import Any

from feed_sync.ingestion.schemas import ArticleRecord


class ArticleStore(ABC):
    """Abstract base for article stores."""

    @abstractmethod
    async def find_by_key(self, field: str, value: Any) -> ArticleRecord | None:
        """
        Find one record whose `field` equals `value` exactly.

        Args:
            field: Record field name (e.g. "url")
            value: Value to match, compared literally

        Returns:
            The first matching record, or None
        """

    @abstractmethod
    async def insert(self, record: ArticleRecord) -> ArticleRecord:
        """
        Persist a new record.

        Args:
            record: Record built by the mapper

        Returns:
            The stored record with id, created_at and synced_at assigned
        """
