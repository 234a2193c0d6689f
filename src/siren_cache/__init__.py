"""Siren Cache - client-side entity cache for Siren hypermedia APIs.

This package provides a layered architecture for fetching, caching and
acting on hypermedia entities:

Layers:
    - entities: Immutable hypermedia model (Entity, Link, Action, Field)
    - protocols: Interface contracts (Transport)
    - repositories: Transport implementations (httpx)
    - services: Request building and the per-credential EntityStore
    - handlers: HTTP endpoint handlers for the explorer API
    - dto: Data transfer objects (API contracts and wire documents)

Usage:
    ```python
    from siren_cache import EntityStore

    store = EntityStore.create()
    store.subscribe("inflight", lambda e: print("in flight:", e.count))
    entity = await store.get("https://api.example.com/", token="secret")
    ```

For HTTP API:
    ```python
    from siren_cache.api.app import app
    ```
"""

from siren_cache.config import configure_logging, settings
from siren_cache.entities import (
    Action,
    EmbeddedEntity,
    EmbeddedLink,
    Entity,
    FetchResult,
    Field,
    Link,
    OutboundRequest,
    TransportResponse,
)
from siren_cache.events import ErrorEvent, EventNotifier, InflightEvent, UpdateEvent
from siren_cache.exceptions import (
    EntityParseError,
    ErrorKind,
    HttpStatusError,
    SirenCacheError,
    TransportError,
)
from siren_cache.parser import parse_entity
from siren_cache.protocols import Transport
from siren_cache.repositories import HttpxTransport
from siren_cache.services import EntityStore, build_request

__all__ = [
    # Configuration
    "settings",
    "configure_logging",
    # Entities (domain model)
    "Action",
    "EmbeddedEntity",
    "EmbeddedLink",
    "Entity",
    "FetchResult",
    "Field",
    "Link",
    "OutboundRequest",
    "TransportResponse",
    "parse_entity",
    # Events
    "ErrorEvent",
    "EventNotifier",
    "InflightEvent",
    "UpdateEvent",
    # Errors
    "EntityParseError",
    "ErrorKind",
    "HttpStatusError",
    "SirenCacheError",
    "TransportError",
    # Protocols and repositories
    "Transport",
    "HttpxTransport",
    # Services
    "EntityStore",
    "build_request",
]
