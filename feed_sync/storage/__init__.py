"""Storage layer - article persistence."""

from feed_sync.storage.base import ArticleStore
from feed_sync.storage.database import Database
from feed_sync.storage.memory import InMemoryArticleStore
from feed_sync.storage.repository import ArticleRepository

__all__ = ["ArticleStore", "ArticleRepository", "Database", "InMemoryArticleStore"]
