"""httpx-based implementation of the Transport protocol."""

import logging

import httpx

from siren_cache.config import settings
from siren_cache.entities import OutboundRequest, TransportResponse
from siren_cache.exceptions import TransportError

logger = logging.getLogger(__name__)


class HttpxTransport:
    """Transport backed by a shared httpx.AsyncClient.

    This class satisfies the Transport protocol through structural typing.

    Example:
        ```python
        transport = HttpxTransport.create(timeout=10.0)
        response = await transport.send(OutboundRequest("GET", "https://api.example.com/"))
        await transport.close()
        ```
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
        max_connections: int | None = None,
        max_keepalive_connections: int | None = None,
    ) -> None:
        """Initialize the transport.

        Args:
            client: Pre-configured client. If None, one is created lazily.
            timeout: Request timeout in seconds. Defaults to settings.
            max_connections: Connection pool size. Defaults to settings.
            max_keepalive_connections: Idle pool size. Defaults to settings.
        """
        self._client = client
        self._timeout = timeout or settings.http_timeout
        self._max_connections = max_connections or settings.http_max_connections
        self._max_keepalive = max_keepalive_connections or settings.http_max_keepalive

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-load the async HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                follow_redirects=True,
                limits=httpx.Limits(
                    max_connections=self._max_connections,
                    max_keepalive_connections=self._max_keepalive,
                ),
            )
        return self._client

    @classmethod
    def create(cls, timeout: float | None = None) -> "HttpxTransport":
        """Factory method to create HttpxTransport with defaults from settings."""
        return cls(timeout=timeout)

    async def send(self, request: OutboundRequest) -> TransportResponse:
        """Issue `request` and return the final response whatever its status.

        Redirects are followed, including on injected clients.

        Raises:
            TransportError: On connection, DNS, protocol or timeout failure
        """
        logger.debug("%s %s", request.method, request.url)
        try:
            response = await self.client.request(
                request.method,
                request.url,
                headers=dict(request.headers),
                content=request.body,
                follow_redirects=True,
            )
        except httpx.TimeoutException as e:
            raise TransportError(f"Request timed out: {request.method} {request.url}") from e
        except httpx.HTTPError as e:
            raise TransportError(f"Request failed: {e}") from e

        return TransportResponse(
            status_code=response.status_code,
            reason=response.reason_phrase,
            text=response.text,
        )

    async def close(self) -> None:
        """Close the async HTTP client.

        Should be called when shutting down the application.
        """
        if self._client is not None:
            await self._client.aclose()
            self._client = None
