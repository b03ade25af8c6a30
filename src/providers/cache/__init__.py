"""Cache providers.

MemoryCacheProvider holds the per-query pagination state for the lifetime
of the process, bounded by size and TTL.  For multi-worker deployments,
swap in an adapter implementing ICacheProvider without touching the
query cache store.
"""

from src.providers.cache.memory_cache import MemoryCacheProvider

__all__ = ["MemoryCacheProvider"]
