"""In-process article store for dry runs and tests."""

from datetime import datetime, timezone
from typing import Any

from feed_sync.ingestion.schemas import ArticleRecord
from feed_sync.storage.base import ArticleStore


class InMemoryArticleStore(ArticleStore):
    """List-backed ArticleStore. Contents live as long as the instance."""

    def __init__(self, records: list[ArticleRecord] | None = None) -> None:
        self._records: list[ArticleRecord] = []
        for record in records or []:
            self._records.append(self._stamp(record))

    @property
    def records(self) -> list[ArticleRecord]:
        return list(self._records)

    def __len__(self) -> int:
        return len(self._records)

    async def find_by_key(self, field: str, value: Any) -> ArticleRecord | None:
        if field not in ArticleRecord.model_fields:
            raise ValueError(f"Unknown article field: {field}")

        for record in self._records:
            if getattr(record, field) == value:
                return record
        return None

    async def insert(self, record: ArticleRecord) -> ArticleRecord:
        stored = self._stamp(record)
        self._records.append(stored)
        return stored

    def _stamp(self, record: ArticleRecord) -> ArticleRecord:
        now = datetime.now(timezone.utc)
        return record.model_copy(
            update={
                "id": str(len(self._records) + 1),
                "created_at": now,
                "synced_at": now,
            }
        )
