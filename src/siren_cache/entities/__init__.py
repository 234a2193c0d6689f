"""Domain entities for the hypermedia model.

These are pure frozen dataclasses used by services, repositories and
handlers. Wire-format validation lives in the dto package and the parser;
entities carry no JSON schema logic of their own.

Every model type exposes a `kind` tag ("entity", "link", "action",
"embedded-link", "embedded-entity") for dispatch without type inspection.
"""

from .action import Action, Field
from .entity import EmbeddedEntity, EmbeddedLink, Entity, SubEntity
from .fetch_result import FetchResult
from .http import OutboundRequest, TransportResponse
from .link import Link

__all__ = [
    "Action",
    "EmbeddedEntity",
    "EmbeddedLink",
    "Entity",
    "FetchResult",
    "Field",
    "Link",
    "OutboundRequest",
    "SubEntity",
    "TransportResponse",
]
