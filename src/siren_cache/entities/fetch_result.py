"""Fetch result domain entity."""

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .entity import Entity

if TYPE_CHECKING:
    from siren_cache.events import ErrorEvent


@dataclass(frozen=True)
class FetchResult:
    """Outcome of a get or submit_action call.

    Attributes:
        entity: The fetched (or cached) entity, None on failure
        error: The error event emitted for a failure, None on success
        from_cache: True when no request was issued
    """

    entity: Entity | None = None
    error: "ErrorEvent | None" = None
    from_cache: bool = False

    @property
    def ok(self) -> bool:
        return self.entity is not None
