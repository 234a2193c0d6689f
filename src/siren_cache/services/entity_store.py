"""Entity cache and action execution.

The EntityStore fetches hypermedia entities, caches them per credential
and submits actions, announcing progress through an EventNotifier.
"""

import asyncio
import logging
from typing import Any

from siren_cache.config import settings
from siren_cache.entities import Action, EmbeddedEntity, Entity, FetchResult
from siren_cache.events import (
    ErrorEvent,
    EventNotifier,
    InflightEvent,
    Listener,
    UpdateEvent,
)
from siren_cache.exceptions import (
    EntityParseError,
    ErrorKind,
    HttpStatusError,
    SirenCacheError,
)
from siren_cache.parser import parse_entity
from siren_cache.protocols import Transport

from .request_builder import build_request

logger = logging.getLogger(__name__)

Namespace = dict[str, Entity]


class EntityStore:
    """Per-credential entity cache and action executor.

    Each credential ("token", None for anonymous) owns a separate namespace
    mapping addresses to entities. Namespaces never share entries.

    An entity fetched with `get` may live under two keys: the href the
    caller asked for and the entity's own self href. The two entries are
    independent; evicting one leaves the other in place.

    Failures never raise. They are emitted as `error` events and reported
    as a None entity (or a failed FetchResult).

    Emits:
        inflight: InflightEvent(count) whenever a request starts or ends
        update: UpdateEvent(href, entity) when an entity is cached by self href
        error: ErrorEvent(message, kind) when a fetch fails

    Example:
        ```python
        store = EntityStore.create()
        store.subscribe("error", lambda e: print(e.message))

        entity = await store.get("https://api.example.com/orders/1", token="abc")
        if entity is not None:
            cancel = entity.action("cancel-order")
            await store.submit_action(cancel, token="abc")
        ```
    """

    def __init__(
        self,
        transport: Transport,
        notifier: EventNotifier | None = None,
        coalesce_requests: bool | None = None,
    ) -> None:
        """Initialize the entity store.

        Args:
            transport: HTTP transport used for every request (required).
            notifier: Event notifier. If None, creates a private one.
            coalesce_requests: Share one request between concurrent cached
                gets of the same href. Defaults to settings.
        """
        self._transport = transport
        self._notifier = notifier or EventNotifier()
        self._coalesce = (
            settings.coalesce_requests if coalesce_requests is None else coalesce_requests
        )
        self._cache: dict[str | None, Namespace] = {}
        self._inflight = 0
        self._pending: dict[tuple[str | None, str], asyncio.Future[FetchResult]] = {}

    @classmethod
    def create(
        cls,
        transport: Transport | None = None,
        coalesce_requests: bool | None = None,
    ) -> "EntityStore":
        """Factory method to create an EntityStore with an httpx transport.

        Args:
            transport: Transport to use. If None, creates an HttpxTransport.
            coalesce_requests: Override settings.coalesce_requests.

        Returns:
            Configured EntityStore
        """
        if transport is None:
            from siren_cache.repositories import HttpxTransport

            transport = HttpxTransport.create()
        return cls(transport=transport, coalesce_requests=coalesce_requests)

    # Events

    @property
    def events(self) -> EventNotifier:
        """The notifier announcing inflight, update and error events."""
        return self._notifier

    def subscribe(self, event_name: str, listener: Listener):
        """Register a listener. Returns a callable that unsubscribes it."""
        return self._notifier.subscribe(event_name, listener)

    @property
    def inflight(self) -> int:
        """Number of requests currently outstanding."""
        return self._inflight

    # Namespaces

    def get_cache(self, token: str | None = None) -> Namespace:
        """Return the namespace for `token`, creating it if needed."""
        cache = self._cache.get(token)
        if cache is None:
            cache = self._cache[token] = {}
        return cache

    def clear(self, token: str | None = None) -> bool:
        """Drop the whole namespace for `token`.

        Reads already in flight for `token` are detached, so the next get
        issues a fresh request instead of joining them.

        Returns:
            True if a namespace existed and was removed
        """
        for key in [k for k in self._pending if k[0] == token]:
            del self._pending[key]
        if token not in self._cache:
            return False
        del self._cache[token]
        logger.debug("Cleared cache namespace (%s)", _describe(token))
        return True

    def evict(self, href: str, token: str | None = None) -> bool:
        """Remove the single entry stored under `href`.

        Other keys referring to the same resource are left untouched.

        Returns:
            True if an entry was removed
        """
        cache = self._cache.get(token)
        if cache is None or href not in cache:
            return False
        del cache[href]
        return True

    def stats(self) -> dict[str, Any]:
        """Get store statistics."""
        return {
            "namespaces": len(self._cache),
            "entries": sum(len(c) for c in self._cache.values()),
            "inflight": self._inflight,
            "pending": len(self._pending),
            "coalesce_requests": self._coalesce,
        }

    # Actions

    async def submit_action(
        self,
        action: Action,
        token: str | None = None,
        use_cache: bool = True,
    ) -> Entity | None:
        """Submit `action` and return the resulting entity.

        Args:
            action: The action to submit
            token: Optional bearer credential selecting the namespace
            use_cache: Store the result under its self href

        Returns:
            The parsed entity, or None if the request failed
        """
        result = await self.submit_action_result(action, token=token, use_cache=use_cache)
        return result.entity

    async def submit_action_result(
        self,
        action: Action,
        token: str | None = None,
        use_cache: bool = True,
    ) -> FetchResult:
        """Submit `action` and return a FetchResult.

        Same behaviour as submit_action, but failures are also reported in
        the returned result.
        """
        self._inflight += 1
        self._notifier.emit(InflightEvent(count=self._inflight))
        try:
            entity = await self._fetch(action, token)
            if use_cache:
                self._cache_by_self(entity, token)
            return FetchResult(entity=entity)
        except SirenCacheError as e:
            logger.warning("%s %s failed: %s", action.http_method, action.href, e)
            return self._fail(str(e), e.kind)
        except Exception as e:
            logger.exception("%s %s failed unexpectedly", action.http_method, action.href)
            return self._fail(str(e) or type(e).__name__, ErrorKind.UNKNOWN)
        finally:
            self._inflight -= 1
            self._notifier.emit(InflightEvent(count=self._inflight))

    # Reads

    async def get(
        self,
        href: str,
        token: str | None = None,
        use_cache: bool = True,
    ) -> Entity | None:
        """Fetch the entity at `href`, serving it from cache when possible.

        Args:
            href: Address to read
            token: Optional bearer credential selecting the namespace
            use_cache: Read from and write to the namespace

        Returns:
            The entity, or None if the request failed
        """
        result = await self.get_result(href, token=token, use_cache=use_cache)
        return result.entity

    async def get_result(
        self,
        href: str,
        token: str | None = None,
        use_cache: bool = True,
    ) -> FetchResult:
        """Fetch the entity at `href` and return a FetchResult."""
        if not use_cache:
            return await self._load(href, token, use_cache=False)

        cache = self.get_cache(token)
        if href in cache:
            logger.debug("Cache hit: %s (%s)", href, _describe(token))
            return FetchResult(entity=cache[href], from_cache=True)

        if not self._coalesce:
            return await self._load(href, token, use_cache=True)

        key = (token, href)
        pending = self._pending.get(key)
        if pending is None:
            logger.debug("Cache miss: %s (%s)", href, _describe(token))
            pending = asyncio.ensure_future(self._load(href, token, use_cache=True))
            self._pending[key] = pending
            pending.add_done_callback(lambda done: self._forget(key, done))
        else:
            logger.debug("Joining in-flight request: %s (%s)", href, _describe(token))
        return await asyncio.shield(pending)

    async def close(self) -> None:
        """Close the underlying transport."""
        await self._transport.close()

    # Internals

    async def _fetch(self, action: Action, token: str | None) -> Entity:
        request = build_request(action, token)
        response = await self._transport.send(request)
        if not response.ok:
            raise HttpStatusError(response.status_code, response.reason)
        try:
            document = response.json()
        except ValueError as e:
            raise EntityParseError(f"Response body is not valid JSON: {e}") from e
        return parse_entity(document)

    async def _load(self, href: str, token: str | None, use_cache: bool) -> FetchResult:
        result = await self.submit_action_result(Action(href=href), token=token, use_cache=use_cache)
        if use_cache and result.entity is not None:
            cache = self.get_cache(token)
            # requested href, which may differ from the self href
            cache[href] = result.entity
            for sub in result.entity.entities:
                if isinstance(sub, EmbeddedEntity) and sub.self_href:
                    cache[sub.self_href] = sub.to_entity()
        return result

    def _cache_by_self(self, entity: Entity, token: str | None) -> None:
        href = entity.self_href
        if href is None:
            return
        self.get_cache(token)[href] = entity
        self._notifier.emit(UpdateEvent(href=href, entity=entity))

    def _forget(self, key: tuple[str | None, str], done: asyncio.Future) -> None:
        # a clear may have replaced this entry with a newer request
        if self._pending.get(key) is done:
            del self._pending[key]

    def _fail(self, message: str, kind: ErrorKind) -> FetchResult:
        error = ErrorEvent(message=message, kind=kind)
        self._notifier.emit(error)
        return FetchResult(error=error)


def _describe(token: str | None) -> str:
    return "anonymous" if token is None else "token"
