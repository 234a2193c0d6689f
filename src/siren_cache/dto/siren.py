"""Wire-format DTOs for Siren entity documents.

These Pydantic models validate the JSON returned by a hypermedia API.
The parser converts them into frozen domain entities.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class SirenLinkDocument(BaseModel):
    """A link member of an entity document."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    rel: list[str] = Field(..., min_length=1)
    href: str
    title: str | None = None
    classes: list[str] = Field(default_factory=list, alias="class")
    type: str | None = None


class SirenFieldDocument(BaseModel):
    """A field member of an action document."""

    model_config = ConfigDict(extra="allow")

    name: str
    type: str = "text"
    value: Any = None
    title: str | None = None


class SirenActionDocument(BaseModel):
    """An action member of an entity document."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    href: str
    name: str | None = None
    method: str | None = None
    type: str | None = None
    title: str | None = None
    classes: list[str] = Field(default_factory=list, alias="class")
    fields: list[SirenFieldDocument] = Field(default_factory=list)


class SirenEntityDocument(BaseModel):
    """A top-level entity document."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    classes: list[str] = Field(default_factory=list, alias="class")
    title: str | None = None
    properties: dict[str, Any] = Field(default_factory=dict)
    links: list[SirenLinkDocument] = Field(default_factory=list)
    actions: list[SirenActionDocument] = Field(default_factory=list)
    entities: list["SirenSubEntityDocument"] = Field(default_factory=list)


class SirenSubEntityDocument(SirenEntityDocument):
    """A nested entity: either an embedded link or an embedded representation."""

    rel: list[str] = Field(default_factory=list)
    href: str | None = None
    type: str | None = None

    @property
    def is_link(self) -> bool:
        """True when the document only references another resource."""
        has_representation = "properties" in self.model_fields_set or bool(
            self.links or self.actions or self.entities
        )
        return self.href is not None and not has_representation


SirenEntityDocument.model_rebuild()
SirenSubEntityDocument.model_rebuild()
