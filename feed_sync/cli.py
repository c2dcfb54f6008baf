"""
Command-line interface for feed-sync.

Provides commands to synchronize feeds, check their reachability,
initialize the database and serve the HTTP API.

Usage:
    feed-sync sync         # Run one full synchronization
    feed-sync test-feeds   # Check every feed without storing anything
    feed-sync sources      # List configured sources
    feed-sync init-db      # Create the articles table
    feed-sync serve        # Start the API server
"""

import asyncio
import os
import sys

import click

from feed_sync.config.settings import get_settings
from feed_sync.observability.logging import setup_logging
from feed_sync.observability.metrics import get_metrics

SEVERITY_COLORS = {
    "info": None,
    "success": "green",
    "warning": "yellow",
    "error": "red",
}


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug logging")
def main(debug: bool) -> None:
    """Feed Sync - La Revue RSS to news store synchronization."""
    if debug:
        os.environ["LOG_LEVEL"] = "DEBUG"
        get_settings.cache_clear()

    setup_logging()


def _echo_events(entries) -> None:
    for entry in reversed(entries):
        color = SEVERITY_COLORS.get(entry.severity.value)
        line = f"  [{entry.timestamp:%H:%M:%S}] {entry.message}"
        click.echo(click.style(line, fg=color) if color else line)


@main.command()
@click.option("--mock", is_flag=True, help="Use the mock fetcher instead of the network")
@click.option("--memory", is_flag=True, help="Store articles in memory (dry run)")
@click.option("--max-items", default=None, type=int, help="Items fetched per feed")
@click.option("--show-events", is_flag=True, help="Print the event log after the run")
def sync(mock: bool, memory: bool, max_items: int | None, show_events: bool) -> None:
    """Run one full feed synchronization."""
    from feed_sync.storage.database import Database
    from feed_sync.storage.memory import InMemoryArticleStore
    from feed_sync.storage.repository import ArticleRepository
    from feed_sync.sync.service import FeedSyncService

    async def run() -> int:
        db = None
        if memory:
            store = InMemoryArticleStore()
        else:
            db = Database()
            await db.connect()
            store = ArticleRepository(db)

        service = FeedSyncService(store=store, use_mock=mock, max_items=max_items)

        try:
            result = await service.sync_all()
        except Exception as e:
            click.echo(click.style(f"Sync failed: {e}", fg="red"))
            return 1
        finally:
            if show_events:
                click.echo("\nEvents:")
                _echo_events(service.get_logs(limit=service.event_log.capacity))
            if db is not None:
                await db.close()

        if result is None:
            click.echo(click.style("Sync already in progress", fg="yellow"))
            return 1

        click.echo("\nSync Results:")
        for source_result in result.sources:
            click.echo(
                f"  {source_result.source.label}: "
                f"{source_result.added} new / {source_result.processed} processed"
                + (f" ({source_result.errors} errors)" if source_result.errors else "")
            )
        click.echo(
            click.style(
                f"Total: {result.total_added} new articles out of "
                f"{result.total_processed} processed",
                fg="green",
            )
        )
        return 0

    sys.exit(asyncio.run(run()))


@main.command("test-feeds")
@click.option("--mock", is_flag=True, help="Use the mock fetcher instead of the network")
@click.option("--sample-size", default=None, type=int, help="Items requested per feed")
def test_feeds(mock: bool, sample_size: int | None) -> None:
    """Check that every configured feed is reachable."""
    from feed_sync.storage.memory import InMemoryArticleStore
    from feed_sync.sync.service import FeedSyncService

    async def run() -> bool:
        # test_feeds never touches the store
        service = FeedSyncService(store=InMemoryArticleStore(), use_mock=mock)
        results = await service.test_feeds(sample_size=sample_size)

        click.echo("\nFeed Test Results:")
        click.echo("-" * 40)
        for r in results:
            icon = "✓" if r.ok else "✗"
            color = "green" if r.ok else "red"
            detail = f"{r.item_count} articles" if r.ok else (r.error or r.status)
            click.echo(click.style(f"  {icon} {r.category} ({r.feed_url}): {detail}", fg=color))
        click.echo("-" * 40)

        return all(r.ok for r in results)

    sys.exit(0 if asyncio.run(run()) else 1)


@main.command()
def sources() -> None:
    """List the configured feed sources in sync order."""
    from feed_sync.sources.registry import load_registry

    registry = load_registry()
    for index, source in enumerate(registry, start=1):
        click.echo(f"{index}. {source.feed_url}  category={source.category}  partition={source.partition}")


@main.command("init-db")
def init_db() -> None:
    """Initialize the database schema."""
    from feed_sync.storage.database import Database
    from feed_sync.storage.repository import ArticleRepository

    async def run():
        db = Database()
        await db.connect()

        repo = ArticleRepository(db)
        await repo.create_table()

        click.echo(f"Database initialized successfully (table: {repo.table})")

        await db.close()

    asyncio.run(run())


@main.command()
@click.option("--host", default=None, help="API server host")
@click.option("--port", default=None, type=int, help="API server port")
@click.option("--reload", is_flag=True, help="Enable auto-reload (dev only)")
@click.option("--metrics/--no-metrics", default=True, help="Enable metrics server")
def serve(host: str | None, port: int | None, reload: bool, metrics: bool) -> None:
    """Start the sync API server."""
    import uvicorn

    settings = get_settings()
    host = host or settings.api_host
    port = port or settings.api_port

    if metrics:
        get_metrics().start_server()
        click.echo(f"Metrics available on http://localhost:{settings.metrics_port}/metrics")

    click.echo(f"Starting API server on {host}:{port}")
    click.echo(f"API docs available on http://localhost:{port}/docs")

    uvicorn.run(
        "feed_sync.api.app:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
        log_level="info",
    )


if __name__ == "__main__":
    main()
