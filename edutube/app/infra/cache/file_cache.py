# edutube/app/infra/cache/file_cache.py
"""
File-backed cache of aggregation results, one JSON file per cache key.
Entries are only served while younger than max_age_seconds.
"""
from __future__ import annotations

import hashlib
import json
import logging
import os
import tempfile
import threading
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Iterable, Optional

from edutube.app.domain.models import AggregationMode, CachedPayload

logger = logging.getLogger(__name__)

DEFAULT_MAX_AGE_SECONDS = 60 * 60  # 1 hour


def build_cache_key(mode: AggregationMode, query: Optional[str], channel_ids: Iterable[str]) -> str:
    """Key an aggregation by its scope: mode, query text and the channel set."""
    digest = hashlib.sha1(",".join(sorted(set(channel_ids))).encode("utf-8")).hexdigest()
    return f"{mode.value}:{(query or '').strip().lower()}:{digest}"


class FileStaleCache:
    def __init__(
        self,
        directory: str | Path,
        max_age_seconds: int = DEFAULT_MAX_AGE_SECONDS,
        clock: Callable[[], float] = time.time,
    ):
        self.directory = Path(directory)
        self.max_age_seconds = max_age_seconds
        self._clock = clock
        self._locks: dict[str, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    def _path_for(self, key: str) -> Path:
        return self.directory / f"{hashlib.sha256(key.encode('utf-8')).hexdigest()}.json"

    def _lock_for(self, key: str) -> threading.Lock:
        with self._locks_guard:
            return self._locks.setdefault(key, threading.Lock())

    def read(self, key: str) -> Optional[CachedPayload]:
        """Return the entry for key if present and fresh, otherwise None."""
        path = self._path_for(key)
        if not path.exists():
            return None
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as error:
            logger.warning("Unreadable cache entry %s: %s", path.name, error)
            return None
        if not isinstance(raw, dict) or raw.get("key") != key:
            return None
        written_at = raw.get("written_at")
        if not isinstance(written_at, (int, float)):
            return None
        if self._clock() - written_at >= self.max_age_seconds:
            logger.info("Cache entry for %s is stale", key)
            return None
        return CachedPayload(
            payload=raw.get("payload"),
            written_at=datetime.fromtimestamp(written_at, tz=timezone.utc),
        )

    def is_fresh(self, key: str) -> bool:
        return self.read(key) is not None

    def write(self, key: str, payload: Any) -> bool:
        """
        Atomically replace the entry for key.

        Failures are logged and reported as False; they never raise.
        """
        path = self._path_for(key)
        entry = {"key": key, "written_at": self._clock(), "payload": payload}
        with self._lock_for(key):
            tmp_name: Optional[str] = None
            try:
                self.directory.mkdir(parents=True, exist_ok=True)
                with tempfile.NamedTemporaryFile(
                    "w",
                    encoding="utf-8",
                    dir=self.directory,
                    suffix=".tmp",
                    delete=False,
                ) as handle:
                    tmp_name = handle.name
                    json.dump(entry, handle, ensure_ascii=False)
                os.replace(tmp_name, path)
            except (OSError, TypeError, ValueError) as error:
                logger.error("Failed to cache data for %s: %s", key, error)
                if tmp_name and os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                return False
        logger.info("Data cached successfully for %s", key)
        return True
