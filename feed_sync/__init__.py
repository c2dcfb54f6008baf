"""feed-sync: RSS article synchronization into the La Revue news store."""

__version__ = "0.1.0"
