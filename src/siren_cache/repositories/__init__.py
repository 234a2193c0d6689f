"""Repository layer for external access.

Concrete implementations of the protocols in siren_cache.protocols.
"""

from siren_cache.protocols import Transport

from .httpx_transport import HttpxTransport

__all__ = [
    "HttpxTransport",
    "Transport",
]
