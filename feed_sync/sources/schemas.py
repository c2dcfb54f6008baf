"""Data models for the sources module."""

from dataclasses import dataclass


@dataclass(frozen=True)
class SourceDescriptor:
    """A feed the pipeline polls.

    `feed_url` identifies the source and must be unique in a registry.
    `category` is the content type (hotel, restaurant) copied onto every
    article; `partition` names the app section the articles belong to.
    """

    feed_url: str
    category: str
    partition: str
    display_name: str = ""

    @property
    def label(self) -> str:
        """Name used in log messages."""
        return self.display_name or self.category
