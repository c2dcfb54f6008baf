"""
Article repository backed by PostgreSQL.

Stores ArticleRecord rows in the news table. `url` carries a UNIQUE
constraint; the pipeline checks for an existing url before inserting, so
a unique violation only surfaces if two writers race.
"""

import logging
from datetime import datetime
from typing import Any

from feed_sync.config.settings import get_settings
from feed_sync.ingestion.schemas import ArticleRecord
from feed_sync.storage.base import ArticleStore
from feed_sync.storage.database import Database

logger = logging.getLogger(__name__)

_CREATE_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS {table} (
    id               BIGSERIAL PRIMARY KEY,
    url              TEXT NOT NULL UNIQUE,
    title            TEXT NOT NULL,
    content          TEXT NOT NULL,
    summary          TEXT NOT NULL,
    category         TEXT NOT NULL,
    partition        TEXT NOT NULL,
    status           TEXT NOT NULL DEFAULT 'published',
    featured         BOOLEAN NOT NULL DEFAULT FALSE,
    tags             TEXT[] NOT NULL DEFAULT '{{}}',
    locality         TEXT,
    author           TEXT NOT NULL,
    source           TEXT NOT NULL,
    image_url        TEXT,
    published_at     TIMESTAMPTZ,
    published_at_raw TEXT,
    view_count       INTEGER NOT NULL DEFAULT 0,
    created_at       TIMESTAMPTZ NOT NULL DEFAULT NOW(),
    synced_at        TIMESTAMPTZ NOT NULL DEFAULT NOW()
);

CREATE INDEX IF NOT EXISTS idx_{table}_partition
    ON {table}(partition, published_at DESC);
CREATE INDEX IF NOT EXISTS idx_{table}_category
    ON {table}(category);
CREATE INDEX IF NOT EXISTS idx_{table}_locality
    ON {table}(locality) WHERE locality IS NOT NULL;
"""

_INSERT_SQL = """
INSERT INTO {table} (
    url, title, content, summary, category, partition, status, featured,
    tags, locality, author, source, image_url, published_at,
    published_at_raw, view_count
)
VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9, $10, $11, $12, $13, $14, $15, $16)
RETURNING *
"""

# Columns find_by_key may filter on; field names are interpolated into SQL
_KEY_COLUMNS = frozenset({
    "id", "url", "title", "category", "partition", "status",
    "locality", "author", "source", "image_url",
})


def _record_to_article(record) -> ArticleRecord:
    """Convert an asyncpg Record to an ArticleRecord."""
    published_at: datetime | str | None = record["published_at"]
    if published_at is None:
        published_at = record["published_at_raw"]

    return ArticleRecord(
        id=str(record["id"]),
        url=record["url"],
        title=record["title"],
        content=record["content"],
        summary=record["summary"],
        category=record["category"],
        partition=record["partition"],
        status=record["status"],
        featured=record["featured"],
        tags=list(record["tags"] or []),
        locality=record["locality"],
        author=record["author"],
        source=record["source"],
        image_url=record["image_url"],
        published_at=published_at,
        view_count=record["view_count"],
        created_at=record["created_at"],
        synced_at=record["synced_at"],
    )


class ArticleRepository(ArticleStore):
    """ArticleStore over a PostgreSQL table."""

    def __init__(self, database: Database, table: str | None = None) -> None:
        """
        Initialize repository.

        Args:
            database: Connected Database instance
            table: Table name (default from settings)
        """
        self._db = database
        self._table = table or get_settings().articles_table

    @property
    def table(self) -> str:
        return self._table

    async def create_table(self) -> None:
        """Create the articles table and indexes (idempotent)."""
        await self._db.execute(_CREATE_TABLE_SQL.format(table=self._table))
        logger.info("Articles table ensured: %s", self._table)

    async def find_by_key(self, field: str, value: Any) -> ArticleRecord | None:
        if field not in _KEY_COLUMNS:
            raise ValueError(f"Unsupported lookup field: {field}")

        if field == "id":
            value = int(value)

        row = await self._db.fetchrow(
            f"SELECT * FROM {self._table} WHERE {field} = $1 LIMIT 1",
            value,
        )
        return _record_to_article(row) if row else None

    async def insert(self, record: ArticleRecord) -> ArticleRecord:
        published_at = record.published_at
        published_at_raw = None
        if isinstance(published_at, str):
            published_at, published_at_raw = None, published_at

        row = await self._db.fetchrow(
            _INSERT_SQL.format(table=self._table),
            record.url,
            record.title,
            record.content,
            record.summary,
            record.category,
            record.partition,
            record.status,
            record.featured,
            record.tags,
            record.locality,
            record.author,
            record.source,
            record.image_url,
            published_at,
            published_at_raw,
            record.view_count,
        )
        logger.debug("Inserted article %s into %s", record.url, self._table)
        return _record_to_article(row)

    async def count(self) -> int:
        """Count stored articles."""
        return await self._db.fetchval(f"SELECT COUNT(*) FROM {self._table}") or 0
