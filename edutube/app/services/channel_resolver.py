from __future__ import annotations

import logging
from typing import Optional

from edutube.app.config import settings
from edutube.app.domain.errors import DocumentNotFoundError
from edutube.app.infra.db.base import DocumentStore

logger = logging.getLogger(__name__)


def _dedupe(values: list[str]) -> list[str]:
    return list(dict.fromkeys(values))


class ChannelResolver:
    """Maps a search key to the channel ids to fan out over."""

    def __init__(
        self,
        store: DocumentStore,
        collection: Optional[str] = None,
        all_document: Optional[str] = None,
    ):
        self._store = store
        self.collection = collection or settings.IDS_COLLECTION
        self.all_document = all_document or settings.ALL_CHANNELS_DOCUMENT

    def identifier_set(self, name: str) -> list[str]:
        document = self._store.get_document(self.collection, name)
        if document is None:
            raise DocumentNotFoundError(self.collection, name)
        return _dedupe([str(value) for value in document.values() if value])

    def all_channels(self) -> list[str]:
        return self.identifier_set(self.all_document)

    def resolve(self, query: str) -> list[str]:
        """
        Union of the identifier set named by the lowercased query and the
        global set. Raises DocumentNotFoundError if either is missing.
        """
        key = (query or "").strip().lower()
        scoped = self.identifier_set(key)
        combined = _dedupe([*scoped, *self.all_channels()])
        logger.debug("Resolved %r to %d channels", key, len(combined))
        return combined
