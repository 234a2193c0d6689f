"""Link domain entity."""

from dataclasses import dataclass
from typing import ClassVar


@dataclass(frozen=True)
class Link:
    """Navigational link to another resource.

    Attributes:
        rel: Relation names (e.g. ("self",), ("next", "collection"))
        href: Absolute or resolvable address of the target
        title: Optional human-readable label
        classes: Optional class labels of the target
        type: Optional media type of the target
    """

    kind: ClassVar[str] = "link"

    rel: tuple[str, ...]
    href: str
    title: str | None = None
    classes: tuple[str, ...] = ()
    type: str | None = None

    def has_rel(self, rel: str) -> bool:
        """Check whether this link carries the given relation."""
        return rel in self.rel
