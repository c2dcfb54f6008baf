"""
Canonical article schema for the feed-sync pipeline.

CRITICAL: ArticleRecord is what lands in the news collection read by the
La Revue app - do not rename fields without updating the storage layer
and the app's queries. Every feed item MUST be mapped to this exact
structure.
"""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, Field

STATUS_OK = "ok"


class RawItem(BaseModel):
    """
    One entry as returned by a feed fetcher, before normalization.

    Only `link` is guaranteed. Items without a usable body are still
    processed and receive placeholder content.
    """

    title: str | None = Field(default=None, description="Entry title, untrimmed")
    link: str = Field(..., description="Article URL, the natural key")
    published_at: str | None = Field(
        default=None,
        description="Raw publication date string as found in the feed",
    )
    body_html: str | None = Field(default=None, description="Full HTML content")
    summary_html: str | None = Field(default=None, description="HTML excerpt/description")
    thumbnail_url: str | None = None
    enclosure_url: str | None = None


class FetchResult(BaseModel):
    """Outcome of fetching one feed: a status plus the ordered entries."""

    status: str = STATUS_OK
    items: list[RawItem] = Field(default_factory=list)
    message: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == STATUS_OK


class ArticleRecord(BaseModel):
    """
    CANONICAL ARTICLE RECORD

    Created exactly once per `url` by the mapper and never updated by the
    pipeline afterwards. `id`, `created_at` and `synced_at` are assigned
    by the store on insert.
    """

    # Identity
    id: str | None = Field(default=None, description="Store-assigned identifier")
    url: str = Field(..., description="Source article URL, unique per record")

    # Content
    title: str
    content: str = Field(..., description="Sanitized HTML body")
    summary: str = Field(..., description="Plain text, at most ~200 characters")

    # Classification
    category: str = Field(..., description="Content type of the owning source")
    partition: str = Field(..., description="Downstream collection/section")
    status: Literal["published"] = "published"
    featured: bool = False
    tags: list[str] = Field(default_factory=list)
    locality: str | None = Field(default=None, description="Inferred city, if any")

    # Attribution
    author: str = "La Revue"
    source: str = Field(..., description="Feed URL the article came from")
    image_url: str | None = None

    # Timestamps
    published_at: datetime | str | None = Field(
        default=None,
        description="Parsed publication date, or the raw string if unparseable",
    )
    created_at: datetime | None = None
    synced_at: datetime | None = None

    # Engagement
    view_count: int = Field(default=0, ge=0)

    def to_storage_dict(self) -> dict[str, Any]:
        """
        Convert to dict for database storage.

        Excludes store-assigned fields.
        """
        data = self.model_dump()
        for key in ("id", "created_at", "synced_at"):
            data.pop(key, None)
        return data
