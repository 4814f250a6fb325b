"""Read-through resolution of the current subscriber total."""

import logging
from typing import Protocol

from fastapi.concurrency import run_in_threadpool

from services.cache import SubscriberCountCache

logger = logging.getLogger(__name__)


class CountSource(Protocol):
    async def fetch_total(self) -> int: ...


class TotalResolver:
    """Serve the cached total, refetching and rewriting the cache on a miss.

    Cache reads and writes run in the threadpool, since FileStore does
    blocking file I/O. Concurrent misses are not de-duplicated: each one
    fetches and each one overwrites the cache.
    """

    def __init__(self, cache: SubscriberCountCache, source: CountSource):
        self._cache = cache
        self._source = source

    async def resolve(self) -> int:
        cached = await run_in_threadpool(self._cache.read)
        if cached is not None:
            return cached

        total = await self._source.fetch_total()
        try:
            await run_in_threadpool(self._cache.write, total)
        except Exception as e:
            logger.warning("Subscriber count cache write failed: %s", e)
        return total
