from __future__ import annotations

import logging
from typing import Any

from edutube.app.domain.errors import RecordNotFoundError
from edutube.app.domain.models import WatchHistoryEntry, WriteAck
from edutube.app.infra.db.base import RealtimeStore, join_path

logger = logging.getLogger(__name__)

USERS_NODE = "Users"
HISTORY_NODE = "Videodata"
NO_HISTORY_MESSAGE = "No watch history found for this user"


def _recency_key(entry: Any) -> tuple[int, float, str]:
    value = entry.get("Timenow") if isinstance(entry, dict) else None
    if value is None:
        return (0, 0.0, "")
    try:
        return (2, float(value), "")
    except (TypeError, ValueError):
        return (1, 0.0, str(value))


def sort_by_recency(entries: list[Any]) -> list[Any]:
    """Most recently watched first; entries with equal Timenow keep their order."""
    return sorted(entries, key=_recency_key, reverse=True)


class WatchHistoryService:
    def __init__(self, store: RealtimeStore):
        self._store = store

    @staticmethod
    def history_path(user: str) -> str:
        return join_path(USERS_NODE, user, HISTORY_NODE)

    @staticmethod
    def entry_path(user: str, video_id: str) -> str:
        return join_path(USERS_NODE, user, HISTORY_NODE, video_id)

    def add_entry(self, user: str, entry: WatchHistoryEntry) -> WriteAck:
        """Create or overwrite the history entry for one video."""
        return self._store.set(self.entry_path(user, entry.video_id), entry.to_record())

    def get_entry(self, user: str, video_id: str) -> dict[str, Any]:
        path = self.entry_path(user, video_id)
        entry = self._store.get(path)
        if entry is None:
            raise RecordNotFoundError(path, NO_HISTORY_MESSAGE)
        return entry

    def list_entries(self, user: str) -> list[Any]:
        path = self.history_path(user)
        entries = list(self._store.children(path).values())
        if not entries:
            raise RecordNotFoundError(path, NO_HISTORY_MESSAGE)
        return sort_by_recency(entries)

    def update_watched_at(self, user: str, video_id: str, watched_at: str) -> WriteAck:
        return self._update_existing(user, video_id, {"Timenow": watched_at})

    def update_notes(self, user: str, video_id: str, notes: Any) -> WriteAck:
        return self._update_existing(user, video_id, {"Notes": notes})

    def _update_existing(self, user: str, video_id: str, fields: dict[str, Any]) -> WriteAck:
        self.get_entry(user, video_id)
        ack = self._store.update(self.entry_path(user, video_id), fields)
        logger.info("History entry %s updated: %s", ack.path, ", ".join(fields))
        return ack
