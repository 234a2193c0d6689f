"""Transport-level request and response entities."""

import json
from dataclasses import dataclass, field
from typing import Any, Mapping


@dataclass(frozen=True)
class OutboundRequest:
    """Fully specified request produced by the request builder.

    Attributes:
        method: Uppercased HTTP method
        url: Target address, including any query string
        headers: Header name to value
        body: Encoded request body, or None
    """

    method: str
    url: str
    headers: Mapping[str, str] = field(default_factory=dict)
    body: str | None = None


@dataclass(frozen=True)
class TransportResponse:
    """Response handed back by a Transport.

    Attributes:
        status_code: Numeric HTTP status
        reason: Status text (e.g. "Not Found")
        text: Decoded response body
    """

    status_code: int
    reason: str = ""
    text: str = ""

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def json(self) -> Any:
        """Decode the body as JSON.

        Raises:
            ValueError: If the body is not valid JSON
        """
        return json.loads(self.text)
