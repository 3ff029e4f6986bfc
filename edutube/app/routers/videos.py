# edutube/app/routers/videos.py
from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Query, Response

from edutube.app.deps import get_video_feed_service
from edutube.app.domain.models import AggregationMode, AggregationOutcome
from edutube.app.services.video_feed import VideoFeedService

router = APIRouter(tags=["videos"])

CACHE_HEADER = "X-Cache"


def _send(outcome: AggregationOutcome, response: Response) -> list[dict[str, Any]]:
    response.headers[CACHE_HEADER] = outcome.cache_status.value
    return outcome.items


@router.get("/all")
async def all_videos(
    response: Response,
    feed: VideoFeedService = Depends(get_video_feed_service),
) -> list[dict[str, Any]]:
    """Latest videos of every whitelisted channel, newest first."""
    return _send(await feed.latest(), response)


@router.get("/search")
async def search_videos(
    response: Response,
    search_query: str = Query(..., min_length=1),
    feed: VideoFeedService = Depends(get_video_feed_service),
) -> list[dict[str, Any]]:
    return _send(await feed.search(search_query, AggregationMode.SEARCH), response)


@router.get("/sorting")
async def sorting(
    response: Response,
    search_query: str = Query(..., min_length=1),
    feed: VideoFeedService = Depends(get_video_feed_service),
) -> list[dict[str, Any]]:
    return _send(await feed.search(search_query, AggregationMode.DATE), response)


@router.get("/sortingUploadTime")
async def sorting_upload_time(
    response: Response,
    search_query: str = Query(..., min_length=1),
    feed: VideoFeedService = Depends(get_video_feed_service),
) -> list[dict[str, Any]]:
    return _send(await feed.search(search_query, AggregationMode.DATE), response)


@router.get("/sortingViewCount")
async def sorting_view_count(
    response: Response,
    search_query: str = Query(..., min_length=1),
    feed: VideoFeedService = Depends(get_video_feed_service),
) -> list[dict[str, Any]]:
    """Most viewed first within each channel; channels keep their fan-out order."""
    return _send(await feed.search(search_query, AggregationMode.VIEW_COUNT), response)


@router.get("/getPlaylist")
async def get_playlist(
    response: Response,
    search_query: str = Query(..., min_length=1),
    feed: VideoFeedService = Depends(get_video_feed_service),
) -> list[dict[str, Any]]:
    return _send(await feed.playlists(search_query), response)


@router.get("/getPlaylistData")
async def get_playlist_data(
    playListId: str = Query(..., min_length=1),
    feed: VideoFeedService = Depends(get_video_feed_service),
) -> list[dict[str, Any]]:
    return await feed.playlist_items(playListId)


@router.get("/searchWithGoogleapis")
async def search_with_googleapis(
    search_query: str = Query(..., min_length=1),
    feed: VideoFeedService = Depends(get_video_feed_service),
) -> list[dict[str, Any]]:
    return await feed.search_anywhere(search_query)


@router.get("/getWhiteListedChannels")
async def get_whitelisted_channels(
    search_query: str = Query(..., min_length=1),
    feed: VideoFeedService = Depends(get_video_feed_service),
) -> list[dict[str, Any]]:
    return await feed.channel_info(search_query)


@router.get("/videoData")
async def video_data(
    search_query: str = Query(..., min_length=1),
    feed: VideoFeedService = Depends(get_video_feed_service),
) -> list[dict[str, Any]]:
    return await feed.video_data(search_query)
