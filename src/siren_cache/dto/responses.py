"""Response DTOs for API endpoints."""

from typing import Any

from pydantic import BaseModel, Field


class EntityResponse(BaseModel):
    """Response DTO carrying an entity document."""

    href: str = Field(..., description="The requested or action address")
    self_href: str | None = Field(None, description="The entity's declared self href")
    from_cache: bool = Field(..., description="Whether the entity was served without a request")
    entity: dict[str, Any] = Field(..., description="The raw entity document")


class ClearCacheResponse(BaseModel):
    """Response DTO for clearing the caller's namespace."""

    cleared: bool = Field(..., description="Whether a namespace existed and was removed")


class StoreStatsResponse(BaseModel):
    """Response DTO for store statistics."""

    namespaces: int = Field(..., description="Number of credential namespaces", ge=0)
    entries: int = Field(..., description="Total cached entries across namespaces", ge=0)
    inflight: int = Field(..., description="Requests currently outstanding", ge=0)
    pending: int = Field(..., description="Coalesced reads in progress", ge=0)
    coalesce_requests: bool = Field(..., description="Whether concurrent reads are coalesced")


class HealthCheckResponse(BaseModel):
    """Response DTO for health check."""

    status: str = Field(..., description="Health status: 'healthy'")
    inflight: int = Field(..., description="Requests currently outstanding", ge=0)
