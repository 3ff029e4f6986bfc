from __future__ import annotations

import logging
from typing import Any

from edutube.app.domain.errors import RecordNotFoundError
from edutube.app.domain.models import WhitelistRequest, WriteAck
from edutube.app.infra.db.base import RealtimeStore, join_path
from edutube.app.services.watch_history import USERS_NODE

logger = logging.getLogger(__name__)

REQUESTS_NODE = "Requested"


class WhitelistRequestService:
    """Channel whitelist requests submitted by users and reviewed by curators."""

    def __init__(self, store: RealtimeStore):
        self._store = store

    @staticmethod
    def requests_path(user: str) -> str:
        return join_path(USERS_NODE, user, REQUESTS_NODE)

    def submit(self, request: WhitelistRequest) -> WriteAck:
        ack = self._store.push(self.requests_path(request.user_email), request.to_record())
        logger.info("Whitelist request %s submitted by %s", ack.key, request.user_email)
        return ack

    def list_all(self) -> list[tuple[str, str, Any]]:
        """
        Every pending or reviewed request as (user, request_id, request),
        ordered by user then request id. Requests of different users never
        collapse into each other, even when their ids coincide.
        """
        requests = self._store.nested_children(USERS_NODE, REQUESTS_NODE)
        return [(user, request_id, request) for (user, request_id), request in requests.items()]

    def set_approval(self, user: str, request_id: str, approved: bool) -> WriteAck:
        path = join_path(USERS_NODE, user, REQUESTS_NODE, request_id)
        if self._store.get(path) is None:
            raise RecordNotFoundError(path, f"Whitelist request {request_id} not found for {user}")
        ack = self._store.update(path, {"is_true": "true" if approved else "false"})
        logger.info("Whitelist request %s marked approved=%s", path, approved)
        return ack
