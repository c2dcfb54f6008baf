"""
PostgreSQL connection pool for the article store.

The sync pipeline issues one statement at a time (a lookup by url, then
an insert), so the pool stays small: one connection for the running
sync plus one for health checks and API reads.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import asyncpg

from feed_sync.config.settings import get_settings

logger = logging.getLogger(__name__)


class Database:
    """
    asyncpg pool wrapper exposing the few query helpers the store needs.

    Usage:
        db = Database()
        await db.connect()
        repo = ArticleRepository(db)
        ...
        await db.close()
    """

    def __init__(
        self,
        database_url: str | None = None,
        min_size: int | None = None,
        max_size: int | None = None,
        command_timeout: float | None = None,
    ):
        """
        Args:
            database_url: PostgreSQL connection URL (default DATABASE_URL)
            min_size: Minimum pool size
            max_size: Maximum pool size
            command_timeout: Per-statement timeout in seconds
        """
        settings = get_settings()

        self._database_url = database_url or str(settings.database_url)
        self._min_size = min_size or settings.db_pool_min_size
        self._max_size = max(max_size or settings.db_pool_max_size, self._min_size)
        self._command_timeout = command_timeout or settings.db_command_timeout

        self._pool: asyncpg.Pool | None = None

    @property
    def is_connected(self) -> bool:
        return self._pool is not None

    async def connect(self) -> None:
        """Open the pool. Calling it on a connected instance is a no-op."""
        if self._pool is not None:
            return

        try:
            self._pool = await asyncpg.create_pool(
                self._database_url,
                min_size=self._min_size,
                max_size=self._max_size,
                command_timeout=self._command_timeout,
            )
        except (OSError, asyncpg.PostgresError) as e:
            logger.error(f"Failed to connect to article database: {e}")
            raise

        logger.info(
            f"Article database connected (pool: {self._min_size}-{self._max_size}, "
            f"timeout: {self._command_timeout}s)"
        )

    async def close(self) -> None:
        """Close the pool if open."""
        if self._pool:
            await self._pool.close()
            self._pool = None
            logger.info("Article database connection closed")

    @asynccontextmanager
    async def acquire(self) -> AsyncIterator[asyncpg.Connection]:
        if self._pool is None:
            raise RuntimeError("Database not connected. Call connect() first.")
        async with self._pool.acquire() as conn:
            yield conn

    async def execute(self, query: str, *args: Any) -> str:
        async with self.acquire() as conn:
            return await conn.execute(query, *args)

    async def fetchrow(self, query: str, *args: Any) -> asyncpg.Record | None:
        async with self.acquire() as conn:
            return await conn.fetchrow(query, *args)

    async def fetchval(self, query: str, *args: Any) -> Any:
        async with self.acquire() as conn:
            return await conn.fetchval(query, *args)

    async def health_check(self) -> bool:
        """True if the pool is open and answers a trivial query."""
        if self._pool is None:
            return False
        try:
            return await self.fetchval("SELECT 1") == 1
        except (OSError, RuntimeError, asyncpg.PostgresError, asyncpg.InterfaceError) as e:
            logger.warning(f"Database health check failed: {e}")
            return False
