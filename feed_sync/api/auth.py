"""
X-API-KEY check for the sync routes.

POST /sync writes into the article store and DELETE /logs drops the
event history, so once API_KEYS is set every sync route needs one of
its keys. With API_KEYS unset the API is open (local development).
/health never requires a key; metrics are served on their own port.
"""

import secrets

import structlog
from fastapi import HTTPException, Security, status
from fastapi.security import APIKeyHeader

from feed_sync.config.settings import Settings, get_settings

logger = structlog.get_logger(__name__)

api_key_header = APIKeyHeader(name="X-API-KEY", auto_error=False)

# Returned in place of a key when API_KEYS is unset
OPEN_ACCESS = "open-access"


def configured_keys(settings: Settings) -> list[str]:
    """Keys from the comma-separated API_KEYS setting, blanks dropped."""
    if not settings.api_keys:
        return []
    return [k.strip() for k in settings.api_keys.split(",") if k.strip()]


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "ApiKey"},
    )


async def verify_api_key(api_key: str | None = Security(api_key_header)) -> str:
    """
    Check the X-API-KEY header against API_KEYS.

    An API_KEYS value holding only separators or blanks accepts no key
    at all rather than opening the API.

    Returns:
        The accepted key, or OPEN_ACCESS when API_KEYS is unset

    Raises:
        HTTPException: 401 if the key is missing or not configured
    """
    settings = get_settings()
    if not settings.api_keys:
        return OPEN_ACCESS

    if api_key is None:
        raise _unauthorized("Missing API key. Provide X-API-KEY header.")

    candidate = api_key.encode()
    if not any(secrets.compare_digest(candidate, key.encode()) for key in configured_keys(settings)):
        logger.warning("Rejected sync API key")
        raise _unauthorized("Invalid API key")

    return api_key
