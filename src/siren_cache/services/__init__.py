"""Service layer for caching and request logic.

Services depend on protocols (interfaces), not concrete implementations,
making them testable and flexible.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Cache)  -> (Transport)

Usage:
    ```python
    from siren_cache.services import EntityStore

    store = EntityStore.create()
    entity = await store.get("https://api.example.com/")
    ```
"""

from .entity_store import EntityStore
from .request_builder import build_request, field_data, urlencode_data

__all__ = [
    "EntityStore",
    "build_request",
    "field_data",
    "urlencode_data",
]
