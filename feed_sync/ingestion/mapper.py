"""
Article mapper: RawItem + SourceDescriptor -> ArticleRecord.

Mapping is side-effect free. Missing optional fields (body, image, date)
are tolerated and filled with defaults; a missing title is a caller
error and raises ArticleMappingError.
"""

from datetime import datetime, timezone
from email.utils import parsedate_to_datetime

from feed_sync.ingestion.normalizer import infer_locality, sanitize, summarize
from feed_sync.ingestion.schemas import ArticleRecord, RawItem
from feed_sync.sources.schemas import SourceDescriptor

DEFAULT_AUTHOR = "La Revue"
NEWS_TAG = "actualité"
PROVENANCE_TAG = "wordpress"


class ArticleMappingError(ValueError):
    """Raised when a feed item violates a mapping precondition."""

    def __init__(self, message: str, link: str | None = None):
        super().__init__(message)
        self.link = link


def parse_published_at(raw: str | None) -> datetime | str | None:
    """
    Parse a feed publication date.

    Accepts RFC 822 dates (RSS pubDate) and ISO 8601 / "YYYY-MM-DD HH:MM:SS"
    dates (rss2json). Naive dates are taken as UTC.

    Args:
        raw: Date string from the feed

    Returns:
        Aware datetime on success, the raw string unchanged if it cannot
        be parsed, None if absent
    """
    if raw is None:
        return None

    value = raw.strip()
    if not value:
        return None

    parsed: datetime | None = None
    try:
        parsed = parsedate_to_datetime(value)
    except (TypeError, ValueError, IndexError):
        parsed = None

    if parsed is None:
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return raw

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def map_item(
    item: RawItem,
    source: SourceDescriptor,
    author: str = DEFAULT_AUTHOR,
) -> ArticleRecord:
    """
    Build the canonical article record for one feed item.

    Args:
        item: Raw feed entry
        source: Descriptor of the feed the entry came from
        author: Attribution stored on the record

    Returns:
        ArticleRecord ready to insert

    Raises:
        ArticleMappingError: If the item has no title
    """
    if item.title is None:
        raise ArticleMappingError(
            f"Feed item has no title: {item.link}",
            link=item.link,
        )

    content = sanitize(item.body_html or item.summary_html)
    summary = summarize(item.summary_html or content)
    image_url = item.thumbnail_url or item.enclosure_url or None

    return ArticleRecord(
        url=item.link,
        title=item.title.strip(),
        content=content,
        summary=summary,
        category=source.category,
        partition=source.partition,
        tags=[NEWS_TAG, source.category, PROVENANCE_TAG],
        locality=infer_locality(content),
        author=author,
        source=source.feed_url,
        image_url=image_url,
        published_at=parse_published_at(item.published_at),
    )
