"""Request DTOs for API endpoints."""

from typing import Any

from pydantic import BaseModel, Field


class FetchEntityRequest(BaseModel):
    """Request DTO for reading an entity through the store."""

    href: str = Field(..., description="Absolute address of the entity", min_length=1)
    use_cache: bool = Field(True, description="Serve from and populate the cache")


class ActionFieldItem(BaseModel):
    """Single field of an action submission."""

    name: str = Field(..., description="Parameter name", min_length=1)
    type: str = Field("text", description="Input type hint")
    value: Any = Field(None, description="Parameter value")


class SubmitActionRequest(BaseModel):
    """Request DTO for submitting an action."""

    href: str = Field(..., description="Action target address", min_length=1)
    name: str | None = Field(None, description="Action name")
    method: str | None = Field(None, description="HTTP method, GET when omitted")
    type: str | None = Field(None, description="Content type of the request body")
    fields: list[ActionFieldItem] = Field(default_factory=list, description="Action fields")
    use_cache: bool = Field(True, description="Cache the result under its self href")
