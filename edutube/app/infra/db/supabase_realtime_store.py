from __future__ import annotations

import logging
import secrets
import time
from datetime import datetime, timezone
from typing import Any, Mapping

import httpx
from postgrest.exceptions import APIError
from supabase import Client

from edutube.app.config import settings
from edutube.app.domain.errors import StoreError
from edutube.app.domain.models import WriteAck
from edutube.app.infra.db.base import PATH_SEPARATOR, RealtimeStore, join_path
from edutube.app.infra.db.supabase_document_store import _create_supabase_client, _fetch_all_pages

logger = logging.getLogger(__name__)


def _now_utc() -> datetime:
    return datetime.now(timezone.utc)


def _push_key() -> str:
    # Millisecond prefix keeps generated keys in creation order.
    return f"{int(time.time() * 1000):013d}{secrets.token_hex(4)}"


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class SupabaseRealtimeStore(RealtimeStore):
    """Records kept as (path, value jsonb) rows, one row per leaf record."""

    def __init__(self, client: Client | None = None, table_name: str | None = None):
        self._client = client or _create_supabase_client()
        self.table_name = table_name or settings.REALTIME_TABLE

    def _execute(self, operation: str, query: Any) -> list[dict[str, Any]]:
        try:
            result = query.execute()
        except APIError as error:
            logger.error("Realtime store %s failed: %s", operation, error)
            raise StoreError(operation, str(error)) from error
        except (httpx.HTTPError, ConnectionError, TimeoutError) as error:
            logger.error("Network error during realtime store %s: %s", operation, error)
            raise StoreError(operation, str(error)) from error
        return result.data or []

    def _rows_like(self, pattern: str, columns: str) -> list[dict[str, Any]]:
        return _fetch_all_pages(
            self._execute,
            "list",
            lambda: self._client.table(self.table_name)
            .select(columns)
            .like("path", pattern)
            .order("path"),
        )

    def _rows_below(self, path: str, columns: str) -> list[tuple[str, dict[str, Any]]]:
        prefix = path + PATH_SEPARATOR
        rows = self._rows_like(_escape_like(prefix) + "%", columns)
        below: list[tuple[str, dict[str, Any]]] = []
        for row in rows:
            row_path = str(row.get("path") or "")
            if row_path.startswith(prefix):
                below.append((row_path[len(prefix):], row))
        return below

    def get(self, path: str) -> Any:
        rows = self._execute(
            "get",
            self._client.table(self.table_name).select("value").eq("path", path).limit(1),
        )
        if not rows:
            return None
        return rows[0].get("value")

    def children(self, path: str) -> dict[str, Any]:
        return {
            remainder: row.get("value")
            for remainder, row in self._rows_below(path, "path,value")
            if PATH_SEPARATOR not in remainder
        }

    def nested_children(self, path: str, node: str) -> dict[tuple[str, str], Any]:
        prefix = path + PATH_SEPARATOR
        # "%" also matches "/", so rows deeper than key/node/child are filtered out below
        pattern = f"{_escape_like(prefix)}%{PATH_SEPARATOR}{_escape_like(node + PATH_SEPARATOR)}%"
        found: dict[tuple[str, str], Any] = {}
        for row in self._rows_like(pattern, "path,value"):
            row_path = str(row.get("path") or "")
            if not row_path.startswith(prefix):
                continue
            segments = row_path[len(prefix):].split(PATH_SEPARATOR)
            if len(segments) == 3 and segments[1] == node:
                found[(segments[0], segments[2])] = row.get("value")
        return dict(sorted(found.items()))

    def set(self, path: str, value: Any) -> WriteAck:
        now = _now_utc()
        self._execute(
            "set",
            self._client.table(self.table_name).upsert(
                {"path": path, "value": value, "updated_at": now.isoformat()},
                on_conflict="path",
            ),
        )
        logger.info("Realtime record written: %s", path)
        return WriteAck(path=path, updated_at=now)

    def update(self, path: str, fields: Mapping[str, Any]) -> WriteAck:
        existing = self.get(path)
        merged = {**existing, **dict(fields)} if isinstance(existing, dict) else dict(fields)
        return self.set(path, merged)

    def push(self, path: str, value: Any) -> WriteAck:
        key = _push_key()
        ack = self.set(join_path(*path.split(PATH_SEPARATOR), key), value)
        ack.key = key
        return ack
