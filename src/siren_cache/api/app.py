from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from siren_cache.api.dependencies import HandlerDep, TokenDep, lifespan
from siren_cache.config import settings
from siren_cache.dto import (
    ClearCacheResponse,
    EntityResponse,
    FetchEntityRequest,
    HealthCheckResponse,
    StoreStatsResponse,
    SubmitActionRequest,
)

app = FastAPI(
    title="Siren Cache Explorer API",
    description="Browse and act on Siren hypermedia APIs through a per-credential entity cache",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,  # type: ignore[arg-type]
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
async def root() -> dict[str, Any]:
    """Root endpoint with API information."""
    return {
        "name": "Siren Cache Explorer API",
        "version": "0.1.0",
        "description": "Browse and act on Siren hypermedia APIs through a per-credential entity cache",
        "endpoints": {
            "entities": "/entities/fetch",
            "actions": "/actions/submit",
            "cache": "/cache",
            "stats": "/stats",
            "health": "/health",
            "docs": "/docs",
        },
    }


@app.get("/health", response_model=HealthCheckResponse)
async def health(handler: HandlerDep) -> HealthCheckResponse:
    """Health check endpoint."""
    return handler.health_check()


@app.post("/entities/fetch", response_model=EntityResponse)
async def fetch_entity(
    request: FetchEntityRequest, handler: HandlerDep, token: TokenDep
) -> EntityResponse:
    """
    Read an entity, serving it from the caller's cache namespace when possible.

    Args:
        request: Address to read and whether to use the cache.

    Returns:
        The entity document and whether it came from cache.
    """
    return await handler.fetch_entity(request, token)


@app.post("/actions/submit", response_model=EntityResponse)
async def submit_action(
    request: SubmitActionRequest, handler: HandlerDep, token: TokenDep
) -> EntityResponse:
    """
    Submit an action and return the resulting entity.

    Args:
        request: Action href, method, content type and fields.

    Returns:
        The resulting entity document.
    """
    return await handler.submit_action(request, token)


@app.delete("/cache", response_model=ClearCacheResponse)
async def clear_cache(handler: HandlerDep, token: TokenDep) -> ClearCacheResponse:
    """Drop the caller's cache namespace."""
    return handler.clear_cache(token)


@app.get("/stats", response_model=StoreStatsResponse)
async def get_stats(handler: HandlerDep) -> StoreStatsResponse:
    """Get entity store statistics."""
    return handler.get_stats()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "siren_cache.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )
