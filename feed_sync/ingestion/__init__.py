"""Feed ingestion - schemas, fetchers, normalization and mapping."""

from feed_sync.ingestion.schemas import (
    ArticleRecord,
    FetchResult,
    RawItem,
)

__all__ = [
    "ArticleRecord",
    "FetchResult",
    "RawItem",
]
