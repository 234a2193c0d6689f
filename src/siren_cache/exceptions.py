"""Error taxonomy for fetching and parsing hypermedia entities.

These exceptions are raised by the transport and parser layers and caught
at the EntityStore boundary, where they become `error` events.
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Classification carried by every error event."""

    TRANSPORT = "transport"
    HTTP_STATUS = "http_status"
    PARSE = "parse"
    UNKNOWN = "unknown"


class SirenCacheError(Exception):
    """Base class for all siren-cache errors."""

    kind = ErrorKind.UNKNOWN


class TransportError(SirenCacheError):
    """Network-level failure: connection refused, DNS, timeout."""

    kind = ErrorKind.TRANSPORT


class HttpStatusError(SirenCacheError):
    """A well-formed response carried a non-success status."""

    kind = ErrorKind.HTTP_STATUS

    def __init__(self, status_code: int, reason: str = "") -> None:
        self.status_code = status_code
        self.reason = reason
        super().__init__(f"Request failed, status: {status_code} ({reason})")


class EntityParseError(SirenCacheError):
    """Response body is not JSON or not a valid entity document."""

    kind = ErrorKind.PARSE
