"""Dependency injection configuration for the FastAPI app.

Uses FastAPI's app.state pattern for storing service instances.

Pattern:
    - Services stored in app.state during lifespan
    - Dependency functions retrieve from request.app.state
    - The caller's bearer token is extracted per request
"""

import logging
from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, Header, Request

from siren_cache.config import configure_logging
from siren_cache.events import ErrorEvent, InflightEvent
from siren_cache.handlers import ExplorerHandler
from siren_cache.repositories import HttpxTransport
from siren_cache.services import EntityStore

logger = logging.getLogger(__name__)


def get_handler(request: Request) -> ExplorerHandler:
    """Dependency injection for ExplorerHandler from app.state.

    Raises:
        RuntimeError: If the handler is not initialized
    """
    handler = getattr(request.app.state, "explorer_handler", None)
    if handler is None:
        raise RuntimeError("ExplorerHandler not initialized. Check lifespan setup.")
    return handler


def get_token(authorization: Annotated[str | None, Header()] = None) -> str | None:
    """Extract the bearer credential from the Authorization header.

    Returns:
        The token, or None for anonymous callers
    """
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def _log_error(event: ErrorEvent) -> None:
    logger.warning("Upstream %s error: %s", event.kind.value, event.message)


def _log_inflight(event: InflightEvent) -> None:
    logger.debug("Requests in flight: %d", event.count)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for the FastAPI app.

    Initializes all layers and stores them in app.state:
    1. Transport (httpx) - app.state.transport
    2. Handler (HTTP endpoints) - app.state.explorer_handler

    Cleanup:
        Closes the transport and removes all services from app.state
    """
    configure_logging()

    transport = HttpxTransport.create()
    store = EntityStore.create(transport=transport)
    store.subscribe("error", _log_error)
    store.subscribe("inflight", _log_inflight)
    handler = ExplorerHandler(store=store)

    app.state.transport = transport
    app.state.explorer_handler = handler
    logger.info("Entity store initialized (coalesce_requests=%s)", store.stats()["coalesce_requests"])

    yield

    await store.close()
    del app.state.explorer_handler
    del app.state.transport
    logger.info("Entity store shut down")


# Type aliases for cleaner dependency injection
HandlerDep = Annotated[ExplorerHandler, Depends(get_handler)]
TokenDep = Annotated[str | None, Depends(get_token)]
