"""
HTTP infrastructure layer for feed fetching.

Provides:
- HTTPClient: Async HTTP client that turns transport failures and
  error statuses into HTTPClientError

Third-party calls are made exactly once: no retries, no backoff and no
rate limiting. A failed fetch is reported to the caller, which decides
whether it is fatal.
"""

import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)


class HTTPClientError(Exception):
    """Base exception for HTTP client errors."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_body: str | None = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.response_body = response_body


class HTTPClient:
    """
    Async HTTP client with uniform error reporting.

    Example:
        async with HTTPClient(timeout=30.0) as client:
            response = await client.get(
                "https://api.rss2json.com/v1/api.json",
                params={"rss_url": "https://example.com/feed"},
            )
    """

    def __init__(
        self,
        timeout: float = 30.0,
        user_agent: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize HTTP client.

        Args:
            timeout: Request timeout in seconds.
            user_agent: User-Agent header sent with every request.
            transport: Optional custom transport (tests).
        """
        self.timeout = timeout
        self.user_agent = user_agent
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "HTTPClient":
        """Enter async context manager, create client."""
        headers = {"User-Agent": self.user_agent} if self.user_agent else None
        self._client = httpx.AsyncClient(
            timeout=self.timeout,
            headers=headers,
            follow_redirects=True,
            transport=self._transport,
        )
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Exit async context manager, close client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def get(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        """
        Perform a GET request.

        Args:
            url: Request URL
            params: Query parameters
            headers: Request headers

        Returns:
            httpx.Response on success

        Raises:
            HTTPClientError: On transport failure or a status >= 400
        """
        if not self._client:
            raise RuntimeError("HTTPClient must be used as async context manager")

        try:
            response = await self._client.get(url, params=params, headers=headers)
        except httpx.HTTPError as e:
            logger.warning(f"Request to {url} failed: {type(e).__name__}: {e}")
            raise HTTPClientError(f"Request failed: {type(e).__name__}: {e}") from e

        if response.status_code >= 400:
            raise HTTPClientError(
                f"HTTP error: {response.status_code}",
                status_code=response.status_code,
                response_body=response.text,
            )

        return response
