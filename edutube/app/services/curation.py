# edutube/app/services/curation.py
"""
Whitelist, blacklist and category records kept in the document store.
"""
from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from edutube.app.config import settings
from edutube.app.domain.errors import DocumentNotFoundError, FieldNotFoundError
from edutube.app.domain.models import WriteAck
from edutube.app.infra.db.base import DocumentStore

logger = logging.getLogger(__name__)

# Never written as a field; clients send it back with fetched records.
RESERVED_ID_FIELD = "id"


def _without_id(fields: Mapping[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in fields.items() if key != RESERVED_ID_FIELD}


class CurationService:
    def __init__(
        self,
        store: DocumentStore,
        *,
        ids_collection: Optional[str] = None,
        all_document: Optional[str] = None,
        categories_collection: Optional[str] = None,
        category_document_id: Optional[str] = None,
        blacklist_collection: Optional[str] = None,
        blacklist_document_id: Optional[str] = None,
    ):
        self._store = store
        self.ids_collection = ids_collection or settings.IDS_COLLECTION
        self.all_document = all_document or settings.ALL_CHANNELS_DOCUMENT
        self.categories_collection = categories_collection or settings.CATEGORIES_COLLECTION
        self.category_document_id = category_document_id or settings.CATEGORY_DOCUMENT_ID
        self.blacklist_collection = blacklist_collection or settings.BLACKLIST_COLLECTION
        self.blacklist_document_id = blacklist_document_id or settings.BLACKLIST_DOCUMENT_ID

    def _singleton(self, collection: str, document_id: str) -> dict[str, Any]:
        document = self._store.get_document(collection, document_id)
        if document is None:
            raise DocumentNotFoundError(collection, document_id)
        return document

    # Whitelisted channel id sets

    def add_whitelist_ids(self, name: Optional[str], fields: Mapping[str, Any]) -> WriteAck:
        document_id = (name or "").strip().lower() or self.all_document
        ack = self._store.set_document(self.ids_collection, document_id, fields, merge=True)
        logger.info("Whitelist ids added to %s: %d fields", document_id, len(fields))
        return ack

    def fetch_whitelist_ids(self) -> list[dict[str, Any]]:
        return [
            {"id": document_id, **fields}
            for document_id, fields in self._store.list_documents(self.ids_collection)
        ]

    def update_whitelist_ids(self, fields: Mapping[str, Any]) -> WriteAck:
        return self._store.update_document(self.ids_collection, self.all_document, _without_id(fields))

    def delete_whitelist_id(self, document_id: str, field: str) -> str:
        document = self._store.get_document(self.ids_collection, document_id)
        if document is None or not document.get(field):
            raise FieldNotFoundError(document_id, field)
        self._store.delete_field(self.ids_collection, document_id, field)
        logger.info("Whitelist field %s removed from %s", field, document_id)
        return f"Field {field} of Document {document_id} deleted successfully."

    # Blacklisted channels

    def add_blacklist(self, fields: Mapping[str, Any]) -> WriteAck:
        return self._store.set_document(
            self.blacklist_collection, self.blacklist_document_id, fields, merge=True
        )

    def fetch_blacklist(self) -> list[list[Any]]:
        document = self._singleton(self.blacklist_collection, self.blacklist_document_id)
        return [[key, value] for key, value in document.items()]

    def delete_blacklist_field(self, field: str) -> WriteAck:
        return self._store.delete_field(self.blacklist_collection, self.blacklist_document_id, field)

    # Whitelisted categories

    def add_categories(self, fields: Mapping[str, Any]) -> WriteAck:
        return self._store.set_document(
            self.categories_collection, self.category_document_id, fields, merge=True
        )

    def fetch_category_entries(self) -> list[list[Any]]:
        document = self._singleton(self.categories_collection, self.category_document_id)
        return [[key, value] for key, value in document.items()]

    def fetch_category_values(self) -> list[Any]:
        document = self._singleton(self.categories_collection, self.category_document_id)
        return list(document.values())

    def update_categories(self, fields: Mapping[str, Any]) -> WriteAck:
        return self._store.update_document(
            self.categories_collection, self.category_document_id, _without_id(fields)
        )

    def delete_category_field(self, field: str) -> WriteAck:
        return self._store.delete_field(self.categories_collection, self.category_document_id, field)
