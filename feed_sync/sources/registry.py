"""Ordered, read-only registry of feed sources."""

import json
import logging
from collections.abc import Iterable, Iterator
from pathlib import Path

from feed_sync.config.settings import Settings, get_settings
from feed_sync.sources.schemas import SourceDescriptor

logger = logging.getLogger(__name__)

DEFAULT_SOURCES: tuple[SourceDescriptor, ...] = (
    SourceDescriptor(
        feed_url="https://larevuedeshotels.com/feed",
        category="hotel",
        partition="hotels",
    ),
    SourceDescriptor(
        feed_url="https://larevuedesrestaurants.com/feed",
        category="restaurant",
        partition="restaurants",
    ),
)


def _parse_entry(entry: dict) -> SourceDescriptor:
    """Convert a JSON entry to a SourceDescriptor."""
    return SourceDescriptor(
        feed_url=entry["feed_url"],
        category=entry["category"],
        partition=entry["partition"],
        display_name=entry.get("display_name", ""),
    )


class SourceRegistry:
    """Immutable ordered collection of SourceDescriptor.

    Iteration follows declaration order, which is also the order sources
    are synchronized in.
    """

    def __init__(self, sources: Iterable[SourceDescriptor] = DEFAULT_SOURCES) -> None:
        self._sources = tuple(sources)
        self._by_url: dict[str, SourceDescriptor] = {}

        for source in self._sources:
            if source.feed_url in self._by_url:
                raise ValueError(f"Duplicate feed URL in registry: {source.feed_url}")
            self._by_url[source.feed_url] = source

    def __iter__(self) -> Iterator[SourceDescriptor]:
        return iter(self._sources)

    def __len__(self) -> int:
        return len(self._sources)

    def __contains__(self, feed_url: object) -> bool:
        return feed_url in self._by_url

    def get(self, feed_url: str) -> SourceDescriptor | None:
        """Look up a source by feed URL."""
        return self._by_url.get(feed_url)

    @property
    def sources(self) -> tuple[SourceDescriptor, ...]:
        return self._sources

    @classmethod
    def from_json(cls, path: Path) -> "SourceRegistry":
        """Load sources from a JSON list of {feed_url, category, partition} objects."""
        with open(path, encoding="utf-8") as f:
            entries = json.load(f)

        registry = cls(_parse_entry(e) for e in entries)
        logger.info("Loaded %d sources from %s", len(registry), path)
        return registry


def load_registry(settings: Settings | None = None) -> SourceRegistry:
    """Registry from SOURCES_FILE if configured, built-in sources otherwise."""
    settings = settings or get_settings()
    if settings.sources_file is not None:
        return SourceRegistry.from_json(settings.sources_file)
    return SourceRegistry()
