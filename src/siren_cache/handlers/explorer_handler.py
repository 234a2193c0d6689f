"""HTTP handlers for the entity explorer.

Handlers convert between DTOs (API contracts) and EntityStore calls.
They handle HTTP concerns like status codes and error responses.
"""

from fastapi import HTTPException, status

from siren_cache.dto import (
    ClearCacheResponse,
    EntityResponse,
    FetchEntityRequest,
    HealthCheckResponse,
    StoreStatsResponse,
    SubmitActionRequest,
)
from siren_cache.entities import Action, FetchResult, Field
from siren_cache.exceptions import ErrorKind
from siren_cache.services import EntityStore


class ExplorerHandler:
    """HTTP handlers for browsing a hypermedia API through the store.

    The bearer token of the incoming request is passed through as the
    credential, so each caller sees only its own namespace.

    Example:
        ```python
        store = EntityStore.create()
        handler = ExplorerHandler(store=store)

        @app.post("/entities/fetch", response_model=EntityResponse)
        async def fetch_entity(request: FetchEntityRequest):
            return await handler.fetch_entity(request, token=None)
        ```
    """

    def __init__(self, store: EntityStore) -> None:
        """Initialize the explorer handler.

        Args:
            store: The entity store (required).
        """
        self._store = store

    async def fetch_entity(
        self, request: FetchEntityRequest, token: str | None
    ) -> EntityResponse:
        """Handle POST /entities/fetch requests.

        Raises:
            HTTPException: 502 if the upstream fetch failed
        """
        result = await self._store.get_result(
            request.href, token=token, use_cache=request.use_cache
        )
        return self._to_response(request.href, result)

    async def submit_action(
        self, request: SubmitActionRequest, token: str | None
    ) -> EntityResponse:
        """Handle POST /actions/submit requests.

        Raises:
            HTTPException: 502 if the upstream request failed
        """
        action = Action(
            href=request.href,
            name=request.name,
            method=request.method,
            type=request.type,
            fields=tuple(Field(name=f.name, type=f.type, value=f.value) for f in request.fields),
        )
        result = await self._store.submit_action_result(
            action, token=token, use_cache=request.use_cache
        )
        return self._to_response(request.href, result)

    def clear_cache(self, token: str | None) -> ClearCacheResponse:
        """Handle DELETE /cache requests."""
        return ClearCacheResponse(cleared=self._store.clear(token))

    def get_stats(self) -> StoreStatsResponse:
        """Handle GET /stats requests."""
        return StoreStatsResponse(**self._store.stats())

    def health_check(self) -> HealthCheckResponse:
        """Handle GET /health requests."""
        return HealthCheckResponse(status="healthy", inflight=self._store.inflight)

    @staticmethod
    def _to_response(href: str, result: FetchResult) -> EntityResponse:
        if result.entity is None:
            error = result.error
            kind = error.kind.value if error else ErrorKind.UNKNOWN.value
            message = error.message if error else "Request failed"
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail={"kind": kind, "message": message},
            )
        return EntityResponse(
            href=href,
            self_href=result.entity.self_href,
            from_cache=result.from_cache,
            entity=result.entity.to_json(),
        )
