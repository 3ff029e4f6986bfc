from __future__ import annotations

import asyncio

import pytest

from edutube.app.domain.errors import CachedDataUnavailableError, UpstreamError, UpstreamQuotaExceededError
from edutube.app.domain.models import CacheStatus
from edutube.app.infra.cache.file_cache import FileStaleCache
from edutube.app.services.quota_fallback import QuotaFallback


class CountingOperation:
    def __init__(self, result=None, error: Exception | None = None) -> None:
        self.result = result if result is not None else []
        self.error = error
        self.calls = 0

    async def __call__(self):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def cache(tmp_path) -> FileStaleCache:
    return FileStaleCache(tmp_path)


class TestQuotaFallbackSuccess:
    def test_success_is_cached_and_tagged_miss(self, cache: FileStaleCache) -> None:
        operation = CountingOperation(result=[{"id": "v1"}])

        outcome = asyncio.run(QuotaFallback(cache).run("latest::x", operation))

        assert outcome.cache_status is CacheStatus.MISS
        assert outcome.items == [{"id": "v1"}]
        assert cache.read("latest::x").payload == [{"id": "v1"}]

    def test_success_overwrites_older_entry(self, cache: FileStaleCache) -> None:
        cache.write("latest::x", [{"id": "old"}])

        asyncio.run(QuotaFallback(cache).run("latest::x", CountingOperation(result=[{"id": "new"}])))

        assert cache.read("latest::x").payload == [{"id": "new"}]


class TestQuotaFallbackOnQuota:
    def test_fresh_entry_is_served_exactly(self, cache: FileStaleCache) -> None:
        payload = [{"id": {"videoId": "v1"}, "snippet": {"channelImage": "img"}}]
        cache.write("latest::x", payload)
        operation = CountingOperation(error=UpstreamQuotaExceededError())

        outcome = asyncio.run(QuotaFallback(cache).run("latest::x", operation))

        assert outcome.cache_status is CacheStatus.STALE
        assert outcome.items == payload
        assert operation.calls == 1

    def test_missing_entry_raises_unavailable(self, cache: FileStaleCache) -> None:
        operation = CountingOperation(error=UpstreamQuotaExceededError())

        with pytest.raises(CachedDataUnavailableError) as exc_info:
            asyncio.run(QuotaFallback(cache).run("latest::x", operation))

        assert exc_info.value.cache_key == "latest::x"

    def test_entry_of_other_key_is_not_served(self, cache: FileStaleCache) -> None:
        cache.write("search:math:a", [{"id": "math"}])
        operation = CountingOperation(error=UpstreamQuotaExceededError())

        with pytest.raises(CachedDataUnavailableError):
            asyncio.run(QuotaFallback(cache).run("search:physics:a", operation))

    def test_stale_entry_is_not_served(self, tmp_path) -> None:
        now = [1000.0]
        cache = FileStaleCache(tmp_path, max_age_seconds=60, clock=lambda: now[0])
        cache.write("latest::x", [{"id": "v1"}])
        now[0] += 61

        with pytest.raises(CachedDataUnavailableError):
            asyncio.run(
                QuotaFallback(cache).run("latest::x", CountingOperation(error=UpstreamQuotaExceededError()))
            )


class TestQuotaFallbackOtherFailures:
    def test_generic_upstream_error_propagates_even_with_cache(self, cache: FileStaleCache) -> None:
        cache.write("latest::x", [{"id": "v1"}])
        operation = CountingOperation(error=UpstreamError("Backend Error", status_code=500))

        with pytest.raises(UpstreamError) as exc_info:
            asyncio.run(QuotaFallback(cache).run("latest::x", operation))

        assert not isinstance(exc_info.value, UpstreamQuotaExceededError)


class TestQuotaFallbackPreferCache:
    def test_fresh_entry_skips_upstream(self, cache: FileStaleCache) -> None:
        cache.write("latest::x", [{"id": "cached"}])
        operation = CountingOperation(result=[{"id": "live"}])

        outcome = asyncio.run(QuotaFallback(cache).run("latest::x", operation, prefer_cache=True))

        assert outcome.cache_status is CacheStatus.HIT
        assert outcome.items == [{"id": "cached"}]
        assert operation.calls == 0

    def test_missing_entry_calls_upstream(self, cache: FileStaleCache) -> None:
        operation = CountingOperation(result=[{"id": "live"}])

        outcome = asyncio.run(QuotaFallback(cache).run("latest::x", operation, prefer_cache=True))

        assert outcome.cache_status is CacheStatus.MISS
        assert operation.calls == 1
