from __future__ import annotations

import logging
from typing import Any

from starlette.concurrency import run_in_threadpool

from edutube.app.domain.models import AggregationMode, AggregationOutcome
from edutube.app.infra.cache.file_cache import build_cache_key
from edutube.app.infra.youtube.client import YouTubeClient
from edutube.app.services.aggregation import AggregationGateway
from edutube.app.services.channel_resolver import ChannelResolver
from edutube.app.services.quota_fallback import QuotaFallback

logger = logging.getLogger(__name__)

DEFAULT_PLAYLIST_MAX_RESULTS = 50


class VideoFeedService:
    """Entry point for every route that reads from YouTube."""

    def __init__(
        self,
        resolver: ChannelResolver,
        gateway: AggregationGateway,
        fallback: QuotaFallback,
        youtube: YouTubeClient,
        serve_fresh_first: bool = False,
        playlist_max_results: int = DEFAULT_PLAYLIST_MAX_RESULTS,
    ):
        self._resolver = resolver
        self._gateway = gateway
        self._fallback = fallback
        self._youtube = youtube
        self.serve_fresh_first = serve_fresh_first
        self.playlist_max_results = playlist_max_results

    async def latest(self) -> AggregationOutcome:
        channel_ids = await run_in_threadpool(self._resolver.all_channels)
        key = build_cache_key(AggregationMode.LATEST, None, channel_ids)
        return await self._fallback.run(
            key,
            lambda: self._gateway.aggregate(AggregationMode.LATEST, channel_ids),
            prefer_cache=self.serve_fresh_first,
        )

    async def search(self, query: str, mode: AggregationMode = AggregationMode.SEARCH) -> AggregationOutcome:
        normalized = query.strip().lower()
        channel_ids = await run_in_threadpool(self._resolver.resolve, normalized)
        key = build_cache_key(mode, normalized, channel_ids)
        return await self._fallback.run(
            key,
            lambda: self._gateway.aggregate(mode, channel_ids, query=normalized),
        )

    async def playlists(self, query: str) -> AggregationOutcome:
        channel_ids = await run_in_threadpool(self._resolver.all_channels)
        key = build_cache_key(AggregationMode.PLAYLISTS, query, channel_ids)
        return await self._fallback.run(
            key,
            lambda: self._gateway.aggregate(AggregationMode.PLAYLISTS, channel_ids, query=query),
        )

    async def playlist_items(self, playlist_id: str) -> list[dict[str, Any]]:
        return await self._youtube.playlist_items(playlist_id, max_results=self.playlist_max_results)

    async def search_anywhere(self, query: str) -> list[dict[str, Any]]:
        return await self._youtube.search(query=query, result_type=None, max_results=1)

    async def channel_info(self, channel_id: str) -> list[dict[str, Any]]:
        return await self._youtube.channels(channel_id, part="snippet")

    async def video_data(self, video_id: str) -> list[dict[str, Any]]:
        return await self._youtube.videos([video_id], part="snippet", fields="items(id,snippet)")
