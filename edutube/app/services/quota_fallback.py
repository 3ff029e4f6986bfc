# edutube/app/services/quota_fallback.py
"""
Quota fallback policy shared by every aggregation route.
"""
from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable

from starlette.concurrency import run_in_threadpool

from edutube.app.domain.errors import CachedDataUnavailableError, UpstreamQuotaExceededError
from edutube.app.domain.models import AggregationOutcome, CacheStatus
from edutube.app.infra.cache.file_cache import FileStaleCache

logger = logging.getLogger(__name__)


class QuotaFallback:
    """
    Wraps an aggregation call with the keyed stale cache.

    Responsibilities:
    - Cache every successful result under its key
    - Serve the fresh cached result when upstream reports quota exhaustion
    - Optionally serve a fresh cached result before calling upstream at all
    """

    def __init__(self, cache: FileStaleCache):
        self._cache = cache

    async def run(
        self,
        key: str,
        operation: Callable[[], Awaitable[list[dict[str, Any]]]],
        prefer_cache: bool = False,
    ) -> AggregationOutcome:
        """
        Args:
            key: Cache key describing the request scope
            operation: Zero-argument coroutine factory performing the aggregation
            prefer_cache: Serve a fresh entry without calling upstream

        Returns:
            AggregationOutcome tagged MISS, HIT or STALE

        Raises:
            CachedDataUnavailableError: Quota exhausted and no fresh entry for key
        """
        if prefer_cache:
            cached = await run_in_threadpool(self._cache.read, key)
            if cached is not None:
                logger.info("Cached data sent for %s", key)
                return AggregationOutcome(items=cached.payload, cache_status=CacheStatus.HIT)

        try:
            items = await operation()
        except UpstreamQuotaExceededError:
            cached = await run_in_threadpool(self._cache.read, key)
            if cached is None:
                logger.warning("Quota exhausted and no fresh cache for %s", key)
                raise CachedDataUnavailableError(key)
            logger.info("Quota exhausted; stale data from %s sent for %s", cached.written_at.isoformat(), key)
            return AggregationOutcome(items=cached.payload, cache_status=CacheStatus.STALE)

        await run_in_threadpool(self._cache.write, key, items)
        return AggregationOutcome(items=items, cache_status=CacheStatus.MISS)
