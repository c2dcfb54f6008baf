"""
Prometheus metrics for monitoring feed synchronization.

Defines and exposes metrics for:
- Sync runs by outcome
- Articles added, processed and failed per category
- Feed fetch latency

Metrics are exposed via HTTP endpoint for Prometheus scraping.
"""

import logging

from prometheus_client import (
    REGISTRY,
    Counter,
    Histogram,
    start_http_server,
)

from feed_sync.config.settings import get_settings

logger = logging.getLogger(__name__)

# Buckets for fetch latency histograms (in seconds)
LATENCY_BUCKETS = (0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0)


class MetricsCollector:
    """
    Prometheus metrics collector for the sync pipeline.

    Usage:
        metrics = get_metrics()
        metrics.start_server()
        metrics.record_source(category="hotel", added=3, processed=20, errors=0)
    """

    def __init__(self):
        self.sync_runs = Counter(
            "feed_sync_runs_total",
            "Total full synchronization runs",
            ["status"],  # status: success, failure, rejected
        )

        self.articles_added = Counter(
            "feed_sync_articles_added_total",
            "Articles inserted into the store",
            ["category"],
        )

        self.articles_processed = Counter(
            "feed_sync_articles_processed_total",
            "Feed items processed (new, duplicate or failed)",
            ["category"],
        )

        self.article_errors = Counter(
            "feed_sync_article_errors_total",
            "Feed items that failed mapping or persistence",
            ["category"],
        )

        self.fetch_errors = Counter(
            "feed_sync_fetch_errors_total",
            "Feed fetches that failed",
            ["category"],
        )

        self.fetch_latency = Histogram(
            "feed_sync_fetch_latency_seconds",
            "Time to fetch one feed",
            ["category"],
            buckets=LATENCY_BUCKETS,
        )

    def start_server(self, port: int | None = None) -> None:
        """
        Start Prometheus metrics HTTP server.

        Args:
            port: Port to expose metrics on (default from settings)
        """
        settings = get_settings()
        port = port or settings.metrics_port

        start_http_server(port, registry=REGISTRY)
        logger.info(f"Prometheus metrics server started on port {port}")

    def record_run(self, status: str) -> None:
        self.sync_runs.labels(status=status).inc()

    def record_source(
        self,
        category: str,
        added: int,
        processed: int,
        errors: int,
    ) -> None:
        """Record the outcome of one source sync."""
        self.articles_added.labels(category=category).inc(added)
        self.articles_processed.labels(category=category).inc(processed)
        if errors:
            self.article_errors.labels(category=category).inc(errors)

    def record_fetch(
        self,
        category: str,
        latency: float,
        success: bool = True,
    ) -> None:
        """Record a feed fetch attempt."""
        self.fetch_latency.labels(category=category).observe(latency)
        if not success:
            self.fetch_errors.labels(category=category).inc()


# Global metrics instance
_metrics: MetricsCollector | None = None


def get_metrics() -> MetricsCollector:
    """Get global metrics collector instance."""
    global _metrics
    if _metrics is None:
        _metrics = MetricsCollector()
    return _metrics
