from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Mapping

import httpx
from postgrest.exceptions import APIError
from supabase import Client, create_client

from edutube.app.config import settings
from edutube.app.domain.errors import DocumentNotFoundError, StoreError
from edutube.app.domain.models import WriteAck
from edutube.app.infra.db.base import DocumentStore

logger = logging.getLogger(__name__)

# PostgREST truncates responses at db-max-rows (1000 by default)
PAGE_SIZE = 1000


def _now_utc() -> datetime:
    return datetime.now(timezone.utc)


def _create_supabase_client() -> Client:
    return create_client(str(settings.SUPABASE_URL), settings.SUPABASE_SERVICE_ROLE_KEY)


def _fetch_all_pages(
    execute: Callable[[str, Any], list[dict[str, Any]]],
    operation: str,
    build_query: Callable[[], Any],
    page_size: int = PAGE_SIZE,
) -> list[dict[str, Any]]:
    """Run an ordered select page by page until a short page comes back."""
    rows: list[dict[str, Any]] = []
    start = 0
    while True:
        page = execute(operation, build_query().range(start, start + page_size - 1))
        rows.extend(page)
        if len(page) < page_size:
            return rows
        start += page_size


def _as_fields(value: object) -> dict[str, Any]:
    return dict(value) if isinstance(value, dict) else {}


class SupabaseDocumentStore(DocumentStore):
    """Documents kept as (collection, document_id, data jsonb) rows."""

    def __init__(self, client: Client | None = None, table_name: str | None = None):
        self._client = client or _create_supabase_client()
        self.table_name = table_name or settings.DOCUMENTS_TABLE

    def _execute(self, operation: str, query: Any) -> list[dict[str, Any]]:
        try:
            result = query.execute()
        except APIError as error:
            logger.error("Document store %s failed: %s", operation, error)
            raise StoreError(operation, str(error)) from error
        except (httpx.HTTPError, ConnectionError, TimeoutError) as error:
            logger.error("Network error during document store %s: %s", operation, error)
            raise StoreError(operation, str(error)) from error
        return result.data or []

    def get_document(self, collection: str, document_id: str) -> dict[str, Any] | None:
        rows = self._execute(
            "get_document",
            self._client.table(self.table_name)
            .select("data")
            .eq("collection", collection)
            .eq("document_id", document_id)
            .limit(1),
        )
        if not rows:
            return None
        return _as_fields(rows[0].get("data"))

    def list_documents(self, collection: str) -> list[tuple[str, dict[str, Any]]]:
        rows = _fetch_all_pages(
            self._execute,
            "list_documents",
            lambda: self._client.table(self.table_name)
            .select("document_id,data")
            .eq("collection", collection)
            .order("document_id"),
        )
        return [(str(row["document_id"]), _as_fields(row.get("data"))) for row in rows]

    def set_document(
        self,
        collection: str,
        document_id: str,
        data: Mapping[str, Any],
        merge: bool = True,
    ) -> WriteAck:
        fields = dict(data)
        if merge:
            existing = self.get_document(collection, document_id) or {}
            fields = {**existing, **fields}
        return self._write(collection, document_id, fields, "set_document")

    def update_document(
        self,
        collection: str,
        document_id: str,
        data: Mapping[str, Any],
    ) -> WriteAck:
        existing = self.get_document(collection, document_id)
        if existing is None:
            raise DocumentNotFoundError(collection, document_id)
        return self._write(collection, document_id, {**existing, **dict(data)}, "update_document")

    def delete_field(self, collection: str, document_id: str, field: str) -> WriteAck:
        existing = self.get_document(collection, document_id)
        if existing is None:
            raise DocumentNotFoundError(collection, document_id)
        existing.pop(field, None)
        return self._write(collection, document_id, existing, "delete_field")

    def _write(
        self,
        collection: str,
        document_id: str,
        fields: dict[str, Any],
        operation: str,
    ) -> WriteAck:
        now = _now_utc()
        self._execute(
            operation,
            self._client.table(self.table_name).upsert(
                {
                    "collection": collection,
                    "document_id": document_id,
                    "data": fields,
                    "updated_at": now.isoformat(),
                },
                on_conflict="collection,document_id",
            ),
        )
        logger.info("Document written: %s/%s (%s)", collection, document_id, operation)
        return WriteAck(path=f"{collection}/{document_id}", updated_at=now)
