# edutube/app/services/aggregation.py
"""
Channel fan-out over the YouTube Data API.
Each channel is queried concurrently; the first failure fails the whole batch.
"""
from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Awaitable, Iterable, Optional, TypeVar

from edutube.app.domain.models import AggregationMode, ChannelDetails
from edutube.app.infra.youtube.client import YouTubeClient

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_MAX_RESULTS = 10


def _parse_datetime(value: object) -> datetime | None:
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value:
        try:
            normalized = value.replace("Z", "+00:00") if value.endswith("Z") else value
            parsed = datetime.fromisoformat(normalized)
        except ValueError:
            return None
    else:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _published_key(item: dict[str, Any]) -> tuple[int, float]:
    snippet = item.get("snippet") or {}
    published = _parse_datetime(snippet.get("publishedAt"))
    if published is None:
        return (1, 0.0)
    return (0, -published.timestamp())


def sort_by_published(items: Iterable[dict[str, Any]]) -> list[dict[str, Any]]:
    """Newest first; ties keep their order, unparseable timestamps go last."""
    return sorted(items, key=_published_key)


def _video_id(item: dict[str, Any]) -> Optional[str]:
    identifier = item.get("id")
    if isinstance(identifier, dict):
        return identifier.get("videoId")
    if isinstance(identifier, str):
        return identifier
    return None


def _with_channel_image(item: dict[str, Any], image_url: Optional[str], statistics: dict[str, Any]) -> dict[str, Any]:
    return {
        **item,
        "snippet": {**(item.get("snippet") or {}), "channelImage": image_url},
        "statistics": statistics,
    }


async def gather_all(awaitables: Iterable[Awaitable[T]]) -> list[T]:
    """Run awaitables concurrently; on the first failure cancel the rest and re-raise."""
    tasks = [asyncio.ensure_future(awaitable) for awaitable in awaitables]
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for task in tasks:
            task.cancel()
        # Collect sibling outcomes so no task exception goes unretrieved
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


class AggregationGateway:
    def __init__(self, youtube: YouTubeClient, max_results: int = DEFAULT_MAX_RESULTS):
        self._youtube = youtube
        self.max_results = max_results

    async def aggregate(
        self,
        mode: AggregationMode,
        channel_ids: list[str],
        query: Optional[str] = None,
    ) -> list[dict[str, Any]]:
        per_channel = await gather_all(
            self._collect_channel(mode, channel_id, query) for channel_id in channel_ids
        )
        merged = [item for items in per_channel for item in items]
        logger.info(
            "Aggregated %d items from %d channels (mode=%s)",
            len(merged),
            len(channel_ids),
            mode.value,
        )
        if mode.sorts_by_date:
            return sort_by_published(merged)
        return merged

    async def channel_details(self, channel_id: str) -> ChannelDetails:
        items = await self._youtube.channels(channel_id, part="snippet,statistics")
        if not items:
            logger.warning("No channel metadata for %s", channel_id)
            return ChannelDetails(channel_id=channel_id, image_url=None)
        channel = items[0]
        thumbnails = (channel.get("snippet") or {}).get("thumbnails") or {}
        image_url = (thumbnails.get("default") or {}).get("url")
        return ChannelDetails(
            channel_id=channel_id,
            image_url=image_url,
            statistics=channel.get("statistics") or {},
        )

    async def _collect_channel(
        self,
        mode: AggregationMode,
        channel_id: str,
        query: Optional[str],
    ) -> list[dict[str, Any]]:
        if mode is AggregationMode.PLAYLISTS:
            return await self._youtube.search(
                channel_id=channel_id,
                query=query,
                result_type="playlist",
            )
        if mode is AggregationMode.LATEST:
            return await self._latest_for_channel(channel_id)

        order = "viewCount" if mode is AggregationMode.VIEW_COUNT else None
        videos, details = await gather_all(
            [
                self._youtube.search(
                    channel_id=channel_id,
                    query=query,
                    result_type="video",
                    order=order,
                    max_results=self.max_results,
                ),
                self.channel_details(channel_id),
            ]
        )
        return [_with_channel_image(video, details.image_url, details.statistics) for video in videos]

    async def _latest_for_channel(self, channel_id: str) -> list[dict[str, Any]]:
        videos, details = await gather_all(
            [
                self._youtube.search(
                    channel_id=channel_id,
                    result_type="video",
                    order="date",
                    max_results=self.max_results,
                ),
                self.channel_details(channel_id),
            ]
        )
        videos = videos[: self.max_results]
        statistics = await self._youtube.video_statistics(
            [video_id for video_id in map(_video_id, videos) if video_id]
        )
        return [
            _with_channel_image(video, details.image_url, statistics.get(_video_id(video) or "", {}))
            for video in videos
        ]
