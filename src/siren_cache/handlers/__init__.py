"""Handler layer for HTTP endpoints.

Handlers depend on services (caching logic), not directly on repositories.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Cache)  -> (Transport)
"""

from .explorer_handler import ExplorerHandler

__all__ = [
    "ExplorerHandler",
]
