"""Action and field domain entities."""

from dataclasses import dataclass
from typing import Any, ClassVar


@dataclass(frozen=True)
class Field:
    """A named input of an action.

    Attributes:
        name: Parameter name sent with the request
        type: Input type hint (e.g. "hidden", "text", "number")
        value: Current value, opaque JSON
        title: Optional human-readable label
    """

    name: str
    type: str = "text"
    value: Any = None
    title: str | None = None


@dataclass(frozen=True)
class Action:
    """Declarative description of an HTTP operation exposed by an entity.

    Attributes:
        href: Target address
        name: Optional identifier, unique within the owning entity
        method: HTTP method, GET when absent
        type: Content-type hint for the request body
        fields: Ordered request parameters
        title: Optional human-readable label
        classes: Optional class labels
    """

    kind: ClassVar[str] = "action"

    href: str
    name: str | None = None
    method: str | None = None
    type: str | None = None
    fields: tuple[Field, ...] = ()
    title: str | None = None
    classes: tuple[str, ...] = ()

    @property
    def http_method(self) -> str:
        """Uppercased method, defaulting to GET."""
        return (self.method or "GET").upper()

    def field(self, name: str) -> Field | None:
        """Return the last field called `name`, or None."""
        found = None
        for f in self.fields:
            if f.name == name:
                found = f
        return found
