"""Entity and sub-entity domain entities."""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, ClassVar, Mapping, Union

from .action import Action
from .link import Link

_EMPTY: Mapping[str, Any] = MappingProxyType({})


@dataclass(frozen=True)
class Entity:
    """A parsed hypermedia document.

    Collections are tuples and mappings are read-only views, so an Entity
    never changes after the parser builds it.

    Attributes:
        classes: Class labels (the document's "class" member)
        title: Optional human-readable title
        properties: Opaque key/value data
        links: Navigational links
        actions: Executable operations
        entities: Nested sub-entities
        raw: The original JSON document
    """

    kind: ClassVar[str] = "entity"

    classes: tuple[str, ...] = ()
    title: str | None = None
    properties: Mapping[str, Any] = field(default_factory=lambda: _EMPTY)
    links: tuple[Link, ...] = ()
    actions: tuple[Action, ...] = ()
    entities: tuple["SubEntity", ...] = ()
    raw: Mapping[str, Any] = field(default_factory=lambda: _EMPTY, repr=False, compare=False)

    def link(self, rel: str) -> Link | None:
        """Return the first link carrying `rel`, or None."""
        for link in self.links:
            if link.has_rel(rel):
                return link
        return None

    def links_by_rel(self, rel: str) -> tuple[Link, ...]:
        """Return every link carrying `rel`, in document order."""
        return tuple(link for link in self.links if link.has_rel(rel))

    @property
    def self_href(self) -> str | None:
        """The canonical address declared by the "self" link, if any."""
        self_link = self.link("self")
        return self_link.href if self_link else None

    def action(self, name: str) -> Action | None:
        """Return the action called `name`, or None."""
        for action in self.actions:
            if action.name == name:
                return action
        return None

    def has_class(self, name: str) -> bool:
        return name in self.classes

    def to_json(self) -> dict[str, Any]:
        """Return a mutable deep copy of the original document."""
        return thaw(self.raw)


@dataclass(frozen=True)
class EmbeddedLink:
    """Sub-entity that only references another resource."""

    kind: ClassVar[str] = "embedded-link"

    rel: tuple[str, ...]
    href: str
    classes: tuple[str, ...] = ()
    title: str | None = None
    type: str | None = None


@dataclass(frozen=True)
class EmbeddedEntity(Entity):
    """Sub-entity carrying a full representation."""

    kind: ClassVar[str] = "embedded-entity"

    rel: tuple[str, ...] = ()

    def to_entity(self) -> Entity:
        """Promote this representation to a standalone Entity."""
        return Entity(
            classes=self.classes,
            title=self.title,
            properties=self.properties,
            links=self.links,
            actions=self.actions,
            entities=self.entities,
            raw=self.raw,
        )


SubEntity = Union[EmbeddedLink, EmbeddedEntity]


def thaw(value: Any) -> Any:
    """Recursively convert read-only views back to dicts and tuples to lists."""
    if isinstance(value, Mapping):
        return {k: thaw(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [thaw(v) for v in value]
    return value


def freeze(value: Any) -> Any:
    """Recursively convert dicts to read-only views and lists to tuples."""
    if isinstance(value, Mapping):
        return MappingProxyType({k: freeze(v) for k, v in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(freeze(v) for v in value)
    return value
