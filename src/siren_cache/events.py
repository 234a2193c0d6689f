"""Typed lifecycle events and the notifier that delivers them.

The EntityStore announces three kinds of events:
    - inflight: the number of outstanding requests changed
    - update: an entity was stored under its self href
    - error: a fetch failed
"""

import logging
from collections import defaultdict
from collections.abc import Callable
from dataclasses import dataclass
from typing import ClassVar, Union

from siren_cache.entities import Entity
from siren_cache.exceptions import ErrorKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InflightEvent:
    """The outstanding request count changed."""

    name: ClassVar[str] = "inflight"

    count: int


@dataclass(frozen=True)
class UpdateEvent:
    """An entity was cached under `href`."""

    name: ClassVar[str] = "update"

    href: str
    entity: Entity


@dataclass(frozen=True)
class ErrorEvent:
    """A fetch failed."""

    name: ClassVar[str] = "error"

    message: str
    kind: ErrorKind = ErrorKind.UNKNOWN


StoreEvent = Union[InflightEvent, UpdateEvent, ErrorEvent]
Listener = Callable[[StoreEvent], None]

EVENT_NAMES = (InflightEvent.name, UpdateEvent.name, ErrorEvent.name)


class EventNotifier:
    """Publish/subscribe channel keyed by event name.

    Example:
        ```python
        notifier = EventNotifier()
        unsubscribe = notifier.subscribe("inflight", lambda e: print(e.count))
        notifier.emit(InflightEvent(count=1))
        unsubscribe()
        ```
    """

    def __init__(self) -> None:
        self._listeners: dict[str, list[Listener]] = defaultdict(list)

    def subscribe(self, event_name: str, listener: Listener) -> Callable[[], bool]:
        """Register `listener` for `event_name`.

        Args:
            event_name: One of "inflight", "update", "error"
            listener: Callable receiving the event object

        Returns:
            A callable that removes the listener again

        Raises:
            ValueError: If the event name is unknown
        """
        if event_name not in EVENT_NAMES:
            raise ValueError(f"Unknown event '{event_name}', expected one of {list(EVENT_NAMES)}")
        self._listeners[event_name].append(listener)
        return lambda: self.unsubscribe(event_name, listener)

    def unsubscribe(self, event_name: str, listener: Listener) -> bool:
        """Remove a listener. Returns True if it was registered."""
        listeners = self._listeners.get(event_name, [])
        if listener in listeners:
            listeners.remove(listener)
            return True
        return False

    def emit(self, event: StoreEvent) -> None:
        """Deliver `event` synchronously to every listener of its name.

        A listener that raises is logged and skipped; the remaining
        listeners still receive the event.
        """
        for listener in list(self._listeners.get(event.name, [])):
            try:
                listener(event)
            except Exception:
                logger.exception("Listener %r failed handling %s event", listener, event.name)

    def listener_count(self, event_name: str | None = None) -> int:
        if event_name is None:
            return sum(len(v) for v in self._listeners.values())
        return len(self._listeners.get(event_name, []))
