"""Abstract base class for cache service providers.

Defines the key-value contract the query cache store sits on.  The store
keeps one :class:`~src.models.query.CacheEntry` per canonical query key;
implementations decide where entries live and when they expire (an
in-memory TTL cache today, Redis or similar for multi-worker deployments).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class ICacheProvider(ABC):
    """Contract for key-value cache services.

    All operations are async so network-backed stores can be dropped in
    without blocking the event loop.
    """

    @abstractmethod
    async def get(self, key: str) -> Any | None:
        """Return the value stored under *key*, or ``None`` if absent or expired."""

    @abstractmethod
    async def set(self, key: str, value: Any, ttl: int | None = None) -> None:
        """Store *value* under *key*.

        Parameters
        ----------
        key:
            The cache key.
        value:
            The value to store.
        ttl:
            Time-to-live in seconds.  ``None`` uses the provider default.
        """

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """Remove *key*; return ``True`` if an entry was removed."""

    @abstractmethod
    async def size(self) -> int:
        """Return the number of live entries."""
