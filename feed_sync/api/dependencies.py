"""
Dependency injection for FastAPI endpoints.

The sync service is a per-process singleton: its run state is what
rejects a second POST /sync while one is running, so every request must
see the same instance.
"""

import asyncio

import asyncpg
import structlog

from feed_sync.storage.database import Database
from feed_sync.storage.repository import ArticleRepository
from feed_sync.sync.service import FeedSyncService

logger = structlog.get_logger(__name__)

# Global service instances (initialized on first request)
_database: Database | None = None
_sync_service: FeedSyncService | None = None
_init_lock = asyncio.Lock()


async def get_database() -> Database:
    """Get the shared, connected Database."""
    global _database

    if _database is None:
        async with _init_lock:
            if _database is None:
                database = Database()
                await database.connect()
                # Published only once connected
                _database = database

    return _database


async def get_database_if_available() -> Database | None:
    """Shared Database, or None when it cannot be reached."""
    try:
        return await get_database()
    except (OSError, asyncpg.PostgresError, asyncpg.InterfaceError) as e:
        logger.warning("Article database unavailable", error=str(e))
        return None


async def get_sync_service() -> FeedSyncService:
    """Get the shared sync service."""
    global _sync_service

    if _sync_service is None:
        database = await get_database()
        # Re-checked after the await; no await between check and assignment
        if _sync_service is None:
            _sync_service = FeedSyncService(store=ArticleRepository(database))

    return _sync_service


def get_existing_sync_service() -> FeedSyncService | None:
    """The shared sync service if one was created, without creating it."""
    return _sync_service


async def cleanup_dependencies() -> None:
    """Release shared resources on shutdown."""
    global _database, _sync_service, _init_lock

    _sync_service = None
    if _database is not None:
        await _database.close()
        _database = None
    _init_lock = asyncio.Lock()
