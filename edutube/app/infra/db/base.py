# edutube/app/infra/db/base.py
"""
Abstract base classes for the two curation stores.
These interfaces allow easy swapping between different store backends.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional

from edutube.app.domain.errors import InvalidPathSegmentError
from edutube.app.domain.models import WriteAck

PATH_SEPARATOR = "/"


def join_path(*segments: str) -> str:
    """Join path segments for the real-time store, rejecting empty or nested segments."""
    cleaned: list[str] = []
    for segment in segments:
        value = str(segment).strip() if segment is not None else ""
        if not value or PATH_SEPARATOR in value:
            raise InvalidPathSegmentError(str(segment))
        cleaned.append(value)
    return PATH_SEPARATOR.join(cleaned)


class DocumentStore(ABC):
    """
    Abstract interface for the document store: named collections of
    named documents, each a flat key/value map.

    Implementations:
    - SupabaseDocumentStore: jsonb rows in a Supabase table
    """

    @abstractmethod
    def get_document(self, collection: str, document_id: str) -> Optional[dict[str, Any]]:
        """
        Read one document.

        Args:
            collection: Collection name
            document_id: Document name inside the collection

        Returns:
            The document fields, or None if the document does not exist
        """
        pass

    @abstractmethod
    def list_documents(self, collection: str) -> list[tuple[str, dict[str, Any]]]:
        """
        Read every document of a collection.

        Args:
            collection: Collection name

        Returns:
            (document_id, fields) pairs ordered by document_id
        """
        pass

    @abstractmethod
    def set_document(
        self,
        collection: str,
        document_id: str,
        data: Mapping[str, Any],
        merge: bool = True,
    ) -> WriteAck:
        """
        Create or overwrite a document.

        Args:
            collection: Collection name
            document_id: Document name
            data: Fields to write
            merge: If True, keep existing fields not present in data

        Returns:
            WriteAck for the written document
        """
        pass

    @abstractmethod
    def update_document(
        self,
        collection: str,
        document_id: str,
        data: Mapping[str, Any],
    ) -> WriteAck:
        """
        Merge fields into an existing document.

        Raises:
            DocumentNotFoundError: If the document does not exist
        """
        pass

    @abstractmethod
    def delete_field(self, collection: str, document_id: str, field: str) -> WriteAck:
        """
        Remove one field from an existing document.

        Raises:
            DocumentNotFoundError: If the document does not exist
        """
        pass


class RealtimeStore(ABC):
    """
    Abstract interface for the real-time store: a key/value tree
    addressed by '/'-joined paths (see join_path).

    Implementations:
    - SupabaseRealtimeStore: one jsonb row per record path
    """

    @abstractmethod
    def get(self, path: str) -> Any:
        """
        Point read of one record.

        Returns:
            The stored value, or None if nothing is stored at path
        """
        pass

    @abstractmethod
    def children(self, path: str) -> dict[str, Any]:
        """
        Read the records stored directly below path.

        Returns:
            Mapping of child key to value, ordered by key
        """
        pass

    @abstractmethod
    def nested_children(self, path: str, node: str) -> dict[tuple[str, str], Any]:
        """
        Read the records stored at path/<key>/node/<child> for every key.

        Args:
            path: Parent path, e.g. "Users"
            node: Fixed node name below each key, e.g. "Requested"

        Returns:
            Mapping of (key, child) to value, ordered by key then child
        """
        pass

    @abstractmethod
    def set(self, path: str, value: Any) -> WriteAck:
        """Overwrite the record at path."""
        pass

    @abstractmethod
    def update(self, path: str, fields: Mapping[str, Any]) -> WriteAck:
        """Merge fields into the record at path, creating it if needed."""
        pass

    @abstractmethod
    def push(self, path: str, value: Any) -> WriteAck:
        """
        Append a record below path under a generated, time-ordered key.

        Returns:
            WriteAck whose key is the generated child key
        """
        pass
