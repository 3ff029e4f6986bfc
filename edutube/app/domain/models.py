# edutube/app/domain/models.py
"""
Domain models for the curation proxy.
These are pure data structures with no infrastructure dependencies.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional


class AggregationMode(str, Enum):
    """How a channel fan-out queries upstream and orders the merged result."""
    LATEST = "latest"
    SEARCH = "search"
    DATE = "date"
    VIEW_COUNT = "view_count"
    PLAYLISTS = "playlists"

    @property
    def sorts_by_date(self) -> bool:
        return self in (AggregationMode.LATEST, AggregationMode.DATE)


class CacheStatus(str, Enum):
    """Where an aggregation response came from."""
    MISS = "MISS"    # fresh from upstream
    HIT = "HIT"      # fresh cache served before calling upstream
    STALE = "STALE"  # cache served after quota exhaustion


@dataclass(frozen=True)
class ChannelDetails:
    """Channel metadata attached to every video of that channel."""
    channel_id: str
    image_url: Optional[str]
    statistics: dict[str, Any] = field(default_factory=dict)


@dataclass
class CachedPayload:
    payload: Any
    written_at: datetime


@dataclass
class AggregationOutcome:
    items: list[dict[str, Any]]
    cache_status: CacheStatus = CacheStatus.MISS


@dataclass
class WriteAck:
    """Acknowledgment returned by store writes."""
    path: str
    updated_at: datetime
    key: Optional[str] = None

    def as_dict(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "key": self.key,
            "updated_at": self.updated_at.isoformat(),
        }


@dataclass
class WatchHistoryEntry:
    """One watched video for a user, stored under Users/<email>/Videodata/<video_id>."""
    video_id: str
    watched_at: Optional[str] = None
    description: Optional[str] = None
    channel_title: Optional[str] = None
    channel_name: Optional[str] = None
    thumbnail: Optional[str] = None
    notes: Any = None
    channel_image: Optional[str] = None

    def to_record(self) -> dict[str, Any]:
        return {
            "videoId": self.video_id,
            "Timenow": self.watched_at,
            "Description": self.description,
            "ChannelTitle": self.channel_title,
            "ChannelName": self.channel_name,
            "Thumbnail": self.thumbnail,
            "Notes": self.notes,
            "channelImage": self.channel_image,
        }


@dataclass
class WhitelistRequest:
    """A user's request to whitelist a channel, stored under Users/<email>/Requested/<id>."""
    user_email: str
    youtube_link: Optional[str] = None
    category: Optional[str] = None
    new_category: Optional[str] = None
    is_approved: str = "false"

    def to_record(self) -> dict[str, Any]:
        return {
            "Categories": self.category,
            "new_category": self.new_category,
            "YoutubeLink": self.youtube_link,
            "is_true": self.is_approved,
            "user_id": self.user_email,
        }
