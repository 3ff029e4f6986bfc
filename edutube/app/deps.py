# edutube/app/deps.py (process-wide singletons, exposed as dependencies)

from __future__ import annotations

from fastapi import Depends
from supabase import Client, create_client

from edutube.app.config import settings
from edutube.app.infra.cache.file_cache import FileStaleCache
from edutube.app.infra.db.base import DocumentStore, RealtimeStore
from edutube.app.infra.db.supabase_document_store import SupabaseDocumentStore
from edutube.app.infra.db.supabase_realtime_store import SupabaseRealtimeStore
from edutube.app.infra.youtube.client import YouTubeClient
from edutube.app.services.aggregation import AggregationGateway
from edutube.app.services.channel_resolver import ChannelResolver
from edutube.app.services.curation import CurationService
from edutube.app.services.quota_fallback import QuotaFallback
from edutube.app.services.video_feed import VideoFeedService
from edutube.app.services.watch_history import WatchHistoryService
from edutube.app.services.whitelist_requests import WhitelistRequestService

_client: Client | None = None
_youtube: YouTubeClient | None = None
_cache: FileStaleCache | None = None


def get_supabase() -> Client:
    global _client
    if _client is None:
        _client = create_client(str(settings.SUPABASE_URL),
                                settings.SUPABASE_SERVICE_ROLE_KEY)
    return _client


def get_document_store(supa: Client = Depends(get_supabase)) -> DocumentStore:
    return SupabaseDocumentStore(supa)


def get_realtime_store(supa: Client = Depends(get_supabase)) -> RealtimeStore:
    return SupabaseRealtimeStore(supa)


def get_youtube_client() -> YouTubeClient:
    global _youtube
    if _youtube is None:
        _youtube = YouTubeClient(
            api_key=settings.API_KEY,
            base_url=settings.BASEAPI_URL,
            timeout_seconds=settings.YOUTUBE_TIMEOUT_SECONDS,
        )
    return _youtube


async def close_youtube_client() -> None:
    global _youtube
    if _youtube is not None:
        await _youtube.aclose()
        _youtube = None


def get_stale_cache() -> FileStaleCache:
    global _cache
    if _cache is None:
        _cache = FileStaleCache(settings.CACHE_DIR, max_age_seconds=settings.CACHE_MAX_AGE_SECONDS)
    return _cache


def get_video_feed_service(
    store: DocumentStore = Depends(get_document_store),
    youtube: YouTubeClient = Depends(get_youtube_client),
    cache: FileStaleCache = Depends(get_stale_cache),
) -> VideoFeedService:
    return VideoFeedService(
        resolver=ChannelResolver(store),
        gateway=AggregationGateway(youtube, max_results=settings.YOUTUBE_MAX_RESULTS),
        fallback=QuotaFallback(cache),
        youtube=youtube,
        serve_fresh_first=settings.CACHE_SERVE_FRESH_FIRST,
        playlist_max_results=settings.PLAYLIST_MAX_RESULTS,
    )


def get_curation_service(store: DocumentStore = Depends(get_document_store)) -> CurationService:
    return CurationService(store)


def get_watch_history_service(store: RealtimeStore = Depends(get_realtime_store)) -> WatchHistoryService:
    return WatchHistoryService(store)


def get_whitelist_request_service(
    store: RealtimeStore = Depends(get_realtime_store),
) -> WhitelistRequestService:
    return WhitelistRequestService(store)
