"""Data Transfer Objects.

Pydantic models for the explorer API contract (requests/responses) and for
validating Siren entity documents on the wire (siren).

Internal logic uses the frozen entities from the entities package.
"""

from .requests import ActionFieldItem, FetchEntityRequest, SubmitActionRequest
from .responses import (
    ClearCacheResponse,
    EntityResponse,
    HealthCheckResponse,
    StoreStatsResponse,
)
from .siren import (
    SirenActionDocument,
    SirenEntityDocument,
    SirenFieldDocument,
    SirenLinkDocument,
    SirenSubEntityDocument,
)

__all__ = [
    "ActionFieldItem",
    "FetchEntityRequest",
    "SubmitActionRequest",
    "ClearCacheResponse",
    "EntityResponse",
    "HealthCheckResponse",
    "StoreStatsResponse",
    "SirenActionDocument",
    "SirenEntityDocument",
    "SirenFieldDocument",
    "SirenLinkDocument",
    "SirenSubEntityDocument",
]
