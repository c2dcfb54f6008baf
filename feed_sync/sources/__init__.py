"""Sources: the static registry of feeds the pipeline polls."""

from feed_sync.sources.registry import DEFAULT_SOURCES, SourceRegistry, load_registry
from feed_sync.sources.schemas import SourceDescriptor

__all__ = [
    "DEFAULT_SOURCES",
    "SourceDescriptor",
    "SourceRegistry",
    "load_registry",
]
