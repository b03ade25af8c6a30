"""In-memory cache provider using cachetools.TTLCache.

Bounded by entry count and age, so a long-running process does not keep
every query it has ever served.  Not shared across processes; swap in a
networked :class:`ICacheProvider` for multi-worker deployments.
"""

from __future__ import annotations

from typing import Any

import structlog
from cachetools import TTLCache

from src.interfaces.cache_provider import ICacheProvider

logger = structlog.get_logger(logger_name=__name__)


class MemoryCacheProvider(ICacheProvider):
    """In-memory TTL cache backed by ``cachetools.TTLCache``.

    Parameters
    ----------
    max_size:
        Maximum number of entries before the least-recently-used entry
        is evicted.
    ttl:
        Time-to-live in seconds, measured from the last write of an entry.
    """

    def __init__(self, max_size: int = 256, ttl: int = 3600) -> None:
        self._default_ttl = ttl
        self._cache: TTLCache[str, Any] = TTLCache(maxsize=max_size, ttl=ttl)

    @property
    def max_size(self) -> int:
        return int(self._cache.maxsize)

    async def get(self, key: str) -> Any | None:
        value = self._cache.get(key)
        if value is not None:
            logger.debug("cache_hit", key=key)
        else:
            logger.debug("cache_miss", key=key)
        return value

    async def set(self, key: str, value: Any, ttl: int | None = None) -> None:
        """Store *value* under *key*.

        ``TTLCache`` applies one TTL to every entry, so a per-item *ttl* is
        accepted for interface compatibility and ignored.
        """
        self._cache[key] = value
        logger.debug("cache_set", key=key, size=len(self._cache))

    async def delete(self, key: str) -> bool:
        removed = self._cache.pop(key, None) is not None
        logger.debug("cache_delete", key=key, removed=removed)
        return removed

    async def size(self) -> int:
        self._cache.expire()
        return len(self._cache)
