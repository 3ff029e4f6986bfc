# edutube/app/infra/youtube/client.py
"""
Async client for the YouTube Data API v3.
Only the endpoints the proxy needs: search, videos, channels, playlistItems.
"""
from __future__ import annotations

import logging
from typing import Any, Iterable, Optional

import httpx

from edutube.app.domain.errors import UpstreamError, UpstreamQuotaExceededError

logger = logging.getLogger(__name__)

QUOTA_STATUS_CODES = (403, 429)
QUOTA_REASONS = frozenset(
    {"quotaExceeded", "dailyLimitExceeded", "rateLimitExceeded", "userRateLimitExceeded"}
)
# videos.list accepts at most 50 ids per call
MAX_IDS_PER_CALL = 50


def _error_details(response: httpx.Response) -> tuple[Optional[str], str]:
    try:
        body = response.json()
    except ValueError:
        return None, response.text or response.reason_phrase
    error = body.get("error") if isinstance(body, dict) else None
    if not isinstance(error, dict):
        return None, response.reason_phrase
    reasons = [
        entry.get("reason")
        for entry in error.get("errors") or []
        if isinstance(entry, dict) and entry.get("reason")
    ]
    return (reasons[0] if reasons else None), str(error.get("message") or response.reason_phrase)


def raise_for_upstream_error(response: httpx.Response) -> None:
    """Translate an upstream error response into a domain error."""
    if response.status_code < 400:
        return
    reason, message = _error_details(response)
    if response.status_code in QUOTA_STATUS_CODES and (reason is None or reason in QUOTA_REASONS):
        logger.warning("YouTube quota exhausted: status=%s reason=%s", response.status_code, reason)
        raise UpstreamQuotaExceededError(message, status_code=response.status_code, reason=reason)
    logger.error("YouTube API error: status=%s reason=%s message=%s", response.status_code, reason, message)
    raise UpstreamError(message, status_code=response.status_code, reason=reason)


class YouTubeClient:
    """
    Thin async wrapper over the YouTube Data API v3 REST endpoints.

    Every call returns the response `items` list. HTTP failures are raised as
    UpstreamQuotaExceededError (quota/rate limit) or UpstreamError.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str,
        timeout_seconds: float = 10.0,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=timeout_seconds)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()

    async def _get_items(self, resource: str, params: dict[str, Any]) -> list[dict[str, Any]]:
        query = {key: value for key, value in params.items() if value is not None}
        query["key"] = self._api_key
        url = f"{self._base_url}/{resource}"
        try:
            response = await self._http.get(url, params=query)
        except httpx.TimeoutException as error:
            logger.error("YouTube %s timed out: %s", resource, error)
            raise UpstreamError(f"Timeout calling YouTube {resource}") from error
        except httpx.RequestError as error:
            logger.error("Network error calling YouTube %s: %s", resource, error)
            raise UpstreamError(f"Network error calling YouTube {resource}: {error}") from error

        raise_for_upstream_error(response)
        try:
            body = response.json()
        except ValueError as error:
            raise UpstreamError(f"Invalid JSON from YouTube {resource}", status_code=response.status_code) from error
        items = body.get("items") if isinstance(body, dict) else None
        return list(items or [])

    async def search(
        self,
        *,
        channel_id: Optional[str] = None,
        query: Optional[str] = None,
        result_type: Optional[str] = "video",
        order: Optional[str] = None,
        max_results: Optional[int] = None,
    ) -> list[dict[str, Any]]:
        return await self._get_items(
            "search",
            {
                "part": "snippet",
                "channelId": channel_id,
                "q": query,
                "type": result_type,
                "order": order,
                "maxResults": max_results,
            },
        )

    async def channels(self, channel_id: str, part: str = "snippet,statistics") -> list[dict[str, Any]]:
        return await self._get_items("channels", {"part": part, "id": channel_id})

    async def videos(
        self,
        video_ids: Iterable[str],
        part: str = "snippet",
        fields: Optional[str] = None,
    ) -> list[dict[str, Any]]:
        ids = [video_id for video_id in video_ids if video_id]
        if not ids:
            return []
        items: list[dict[str, Any]] = []
        for start in range(0, len(ids), MAX_IDS_PER_CALL):
            batch = ids[start:start + MAX_IDS_PER_CALL]
            items.extend(
                await self._get_items(
                    "videos",
                    {"part": part, "id": ",".join(batch), "fields": fields},
                )
            )
        return items

    async def video_statistics(self, video_ids: Iterable[str]) -> dict[str, dict[str, Any]]:
        items = await self.videos(video_ids, part="statistics")
        return {str(item.get("id")): item.get("statistics") or {} for item in items if item.get("id")}

    async def playlist_items(self, playlist_id: str, max_results: int = 50) -> list[dict[str, Any]]:
        return await self._get_items(
            "playlistItems",
            {"part": "snippet,contentDetails", "playlistId": playlist_id, "maxResults": max_results},
        )
