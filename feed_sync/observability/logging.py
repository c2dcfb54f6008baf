"""
Logging setup for feed-sync.

Each process (CLI command or API server) calls setup_logging() once.
Lines emitted during a sync run carry a `sync_run_id` field so one run
can be followed across the fetcher, the store and the service; the id
is bound by sync_run_context() for the duration of the run.
"""

import logging
import sys
import uuid
from collections.abc import Iterator
from contextlib import contextmanager

import structlog
from structlog.types import Processor

from feed_sync.config.settings import Settings, get_settings

# Libraries that log every request at INFO
QUIET_LOGGERS = ("httpx", "httpcore", "asyncio", "asyncpg")


def _renderers(settings: Settings) -> list[Processor]:
    if settings.is_production:
        return [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    return [structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())]


def setup_logging(settings: Settings | None = None) -> None:
    """
    Route structlog and stdlib logging to stdout.

    JSON lines in production, console output elsewhere.

    Usage:
        setup_logging()
        logger = structlog.get_logger(__name__)
        logger.info("Article added", url="https://...", category="hotel")
    """
    settings = settings or get_settings()

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        *_renderers(settings),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, settings.log_level),
    )

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def new_sync_run_id() -> str:
    return uuid.uuid4().hex[:12]


@contextmanager
def sync_run_context(run_id: str | None = None) -> Iterator[str]:
    """
    Tag every log line emitted inside the block with `sync_run_id`.

    Only the run id is unbound on exit; fields bound by the caller
    (an API request id, for instance) are left in place.

    Yields:
        The run id in effect
    """
    run_id = run_id or new_sync_run_id()
    with structlog.contextvars.bound_contextvars(sync_run_id=run_id):
        yield run_id
