"""Bounded-concurrency primitives for the enrichment stage.

Two helpers live here:

1. **WorkerPool** -- a fixed number of asyncio tasks pulling the next
   unprocessed index from a shared cursor.  Results are written back by
   index, so output order always equals input order no matter which worker
   finishes first or how many workers run.

2. **KeyedLocks** -- one ``asyncio.Lock`` per string key, used to serialize
   mutation of a single query's cache entry while other queries proceed.

Both assume a single event loop: the cursor read-and-increment happens in
one non-suspending step, so two workers can never claim the same index.
"""

from __future__ import annotations

import asyncio
import weakref
from typing import Awaitable, Callable, Generic, Sequence, TypeVar

import structlog

from src.utils.logging import get_logger

_T = TypeVar("_T")
_R = TypeVar("_R")

_logger: structlog.BoundLogger = get_logger(__name__)


class WorkerPool(Generic[_T, _R]):
    """Run an async function over a sequence with at most ``concurrency`` in flight.

    Parameters
    ----------
    concurrency:
        Number of worker tasks.  Values below 1 are treated as 1.  The pool
        never starts more workers than there are items.

    Exceptions raised by ``fn`` propagate out of :meth:`map` after the other
    workers have been cancelled; callers that must not abort a batch wrap
    their own per-item errors (see ``EnrichmentService``).
    """

    def __init__(self, concurrency: int = 5) -> None:
        self._concurrency = max(1, concurrency)

    @property
    def concurrency(self) -> int:
        return self._concurrency

    async def map(
        self,
        fn: Callable[[_T], Awaitable[_R]],
        items: Sequence[_T],
    ) -> list[_R]:
        """Apply *fn* to every item and return results in input order.

        Parameters
        ----------
        fn:
            Coroutine function called once per item.
        items:
            Work items.  Each index is processed exactly once.

        Returns
        -------
        list
            ``results[i] == await fn(items[i])`` for every ``i``.
        """
        total = len(items)
        if total == 0:
            return []

        results: list[_R | None] = [None] * total
        cursor = 0

        async def _worker(worker_id: int) -> None:
            nonlocal cursor
            while True:
                # Claim the next index before the first await of this
                # iteration; no other task can run in between.
                index = cursor
                if index >= total:
                    return
                cursor += 1
                results[index] = await fn(items[index])

        worker_count = min(self._concurrency, total)
        tasks = [asyncio.create_task(_worker(i)) for i in range(worker_count)]
        try:
            await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

        _logger.debug("worker_pool_done", items=total, workers=worker_count)
        return results  # type: ignore[return-value]


class KeyedLocks:
    """Lazily created ``asyncio.Lock`` per key.

    Locks are held in a ``WeakValueDictionary``: once no coroutine holds or
    waits on a key's lock, it is garbage-collected, so the registry does not
    grow with the number of distinct keys ever seen.
    """

    def __init__(self) -> None:
        self._locks: weakref.WeakValueDictionary[str, asyncio.Lock] = (
            weakref.WeakValueDictionary()
        )

    def get(self, key: str) -> asyncio.Lock:
        """Return the lock for *key*, creating it if needed."""
        lock = self._locks.get(key)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[key] = lock
        return lock

    def __len__(self) -> int:
        return len(self._locks)
