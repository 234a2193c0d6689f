"""Conversion of JSON entity documents into domain entities."""

from typing import Any

from pydantic import ValidationError

from siren_cache.dto.siren import (
    SirenActionDocument,
    SirenEntityDocument,
    SirenLinkDocument,
    SirenSubEntityDocument,
)
from siren_cache.entities import Action, EmbeddedEntity, EmbeddedLink, Entity, Field, Link
from siren_cache.entities.entity import SubEntity, freeze
from siren_cache.exceptions import EntityParseError


def parse_entity(document: Any) -> Entity:
    """Parse a decoded JSON document into an Entity.

    Args:
        document: The decoded JSON value (expected to be an object)

    Returns:
        The immutable Entity

    Raises:
        EntityParseError: If the document does not describe an entity
    """
    if not isinstance(document, dict):
        raise EntityParseError(
            f"Entity document must be a JSON object, got {type(document).__name__}"
        )
    try:
        parsed = SirenEntityDocument.model_validate(document)
    except ValidationError as e:
        raise EntityParseError(f"Invalid entity document: {e}") from e

    return Entity(**_entity_kwargs(parsed, document))


def _entity_kwargs(parsed: SirenEntityDocument, raw: dict[str, Any]) -> dict[str, Any]:
    raw_entities = raw.get("entities") or []
    return {
        "classes": tuple(parsed.classes),
        "title": parsed.title,
        "properties": freeze(parsed.properties),
        "links": tuple(_link(l) for l in parsed.links),
        "actions": tuple(_action(a) for a in parsed.actions),
        "entities": tuple(
            _sub_entity(sub, sub_raw) for sub, sub_raw in zip(parsed.entities, raw_entities)
        ),
        "raw": freeze(raw),
    }


def _link(doc: SirenLinkDocument) -> Link:
    return Link(
        rel=tuple(doc.rel),
        href=doc.href,
        title=doc.title,
        classes=tuple(doc.classes),
        type=doc.type,
    )


def _action(doc: SirenActionDocument) -> Action:
    return Action(
        href=doc.href,
        name=doc.name,
        method=doc.method,
        type=doc.type,
        title=doc.title,
        classes=tuple(doc.classes),
        fields=tuple(
            Field(name=f.name, type=f.type, value=freeze(f.value), title=f.title)
            for f in doc.fields
        ),
    )


def _sub_entity(doc: SirenSubEntityDocument, raw: dict[str, Any]) -> SubEntity:
    if doc.is_link:
        return EmbeddedLink(
            rel=tuple(doc.rel),
            href=doc.href,
            classes=tuple(doc.classes),
            title=doc.title,
            type=doc.type,
        )
    return EmbeddedEntity(rel=tuple(doc.rel), **_entity_kwargs(doc, raw))
