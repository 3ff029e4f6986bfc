from __future__ import annotations

import json

from edutube.app.domain.models import AggregationMode
from edutube.app.infra.cache.file_cache import FileStaleCache, build_cache_key


class FakeClock:
    def __init__(self, now: float = 1_700_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


class TestBuildCacheKey:
    def test_channel_order_does_not_matter(self) -> None:
        first = build_cache_key(AggregationMode.DATE, "math", ["C1", "C2"])
        second = build_cache_key(AggregationMode.DATE, "math", ["C2", "C1", "C1"])
        assert first == second

    def test_mode_and_query_are_part_of_the_key(self) -> None:
        channels = ["C1"]
        assert build_cache_key(AggregationMode.DATE, "math", channels) != build_cache_key(
            AggregationMode.VIEW_COUNT, "math", channels
        )
        assert build_cache_key(AggregationMode.DATE, "math", channels) != build_cache_key(
            AggregationMode.DATE, "physics", channels
        )


class TestFileStaleCache:
    def test_absent_entry_is_not_fresh(self, tmp_path) -> None:
        cache = FileStaleCache(tmp_path)

        assert cache.read("latest::x") is None
        assert cache.is_fresh("latest::x") is False

    def test_write_then_read_returns_payload(self, tmp_path) -> None:
        clock = FakeClock()
        cache = FileStaleCache(tmp_path, max_age_seconds=3600, clock=clock)
        payload = [{"id": {"videoId": "v1"}}]

        assert cache.write("latest::x", payload) is True
        clock.now += 10
        cached = cache.read("latest::x")

        assert cached is not None
        assert cached.payload == payload

    def test_entry_older_than_max_age_is_stale(self, tmp_path) -> None:
        clock = FakeClock()
        cache = FileStaleCache(tmp_path, max_age_seconds=3600, clock=clock)
        cache.write("latest::x", [1, 2, 3])

        clock.now += 3600

        assert cache.read("latest::x") is None
        assert cache.is_fresh("latest::x") is False

    def test_keys_are_isolated(self, tmp_path) -> None:
        cache = FileStaleCache(tmp_path)
        cache.write("search:math:a", ["math"])
        cache.write("search:physics:b", ["physics"])

        assert cache.read("search:math:a").payload == ["math"]
        assert cache.read("search:physics:b").payload == ["physics"]

    def test_write_overwrites_previous_entry(self, tmp_path) -> None:
        cache = FileStaleCache(tmp_path)
        cache.write("latest::x", ["old"])
        cache.write("latest::x", ["new"])

        assert cache.read("latest::x").payload == ["new"]

    def test_write_leaves_no_temp_files(self, tmp_path) -> None:
        cache = FileStaleCache(tmp_path / "nested")
        cache.write("latest::x", ["a"])
        cache.write("latest::y", ["b"])

        names = sorted(path.name for path in (tmp_path / "nested").iterdir())
        assert len(names) == 2
        assert all(name.endswith(".json") for name in names)

    def test_unreadable_entry_is_treated_as_absent(self, tmp_path) -> None:
        cache = FileStaleCache(tmp_path)
        cache.write("latest::x", ["a"])
        entry = next(tmp_path.glob("*.json"))
        entry.write_text("{not json", encoding="utf-8")

        assert cache.read("latest::x") is None

    def test_unserializable_payload_is_reported_not_raised(self, tmp_path) -> None:
        cache = FileStaleCache(tmp_path)

        assert cache.write("latest::x", [object()]) is False
        assert list(tmp_path.glob("*.tmp")) == []

    def test_entry_stores_key_and_timestamp(self, tmp_path) -> None:
        clock = FakeClock(1234.0)
        cache = FileStaleCache(tmp_path, clock=clock)
        cache.write("latest::x", ["a"])

        raw = json.loads(next(tmp_path.glob("*.json")).read_text(encoding="utf-8"))

        assert raw == {"key": "latest::x", "written_at": 1234.0, "payload": ["a"]}
