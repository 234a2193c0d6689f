"""Protocol interfaces for swappable implementations.

Protocols use structural typing, so the EntityStore can run against httpx,
another HTTP client, or an in-memory fake in tests.
"""

from .transport import Transport

__all__ = [
    "Transport",
]
