"""Transport protocol.

Defines the interface for anything that can issue an OutboundRequest and
hand back a TransportResponse.

Implementations can include:
- httpx.AsyncClient (default)
- aiohttp
- In-memory fakes for tests
"""

from typing import Protocol, runtime_checkable

from siren_cache.entities import OutboundRequest, TransportResponse


@runtime_checkable
class Transport(Protocol):
    """Protocol for HTTP transports.

    Any type that implements these methods satisfies the protocol, no
    explicit inheritance needed.

    Example:
        ```python
        from siren_cache.protocols import Transport

        transport: Transport = HttpxTransport.create()
        ```
    """

    async def send(self, request: OutboundRequest) -> TransportResponse:
        """Issue a request and return the response.

        Args:
            request: The fully built request

        Returns:
            The response, whatever its status

        Raises:
            TransportError: If no response could be obtained
        """
        ...

    async def close(self) -> None:
        """Release any connections held by the transport."""
        ...
