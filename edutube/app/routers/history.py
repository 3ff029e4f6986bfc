# edutube/app/routers/history.py
from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Query
from fastapi.responses import PlainTextResponse

from edutube.app.deps import get_watch_history_service
from edutube.app.domain.models import WatchHistoryEntry
from edutube.app.schemas.curation import WriteAckResponse
from edutube.app.services.watch_history import WatchHistoryService

router = APIRouter(tags=["history"])


@router.put("/AddHistory", response_model=WriteAckResponse)
def add_history(
    email: str = Query(..., min_length=1),
    video_id: str = Query(..., min_length=1),
    time_now: Optional[str] = Query(None),
    desc: Optional[str] = Query(None),
    channel_title: Optional[str] = Query(None),
    channel_name: Optional[str] = Query(None),
    thumb_nail: Optional[str] = Query(None),
    channelImage: Optional[str] = Query(None),
    notes: Any = Body(None),
    history: WatchHistoryService = Depends(get_watch_history_service),
) -> WriteAckResponse:
    entry = WatchHistoryEntry(
        video_id=video_id,
        watched_at=time_now,
        description=desc,
        channel_title=channel_title,
        channel_name=channel_name,
        thumbnail=thumb_nail,
        notes=notes,
        channel_image=channelImage,
    )
    return WriteAckResponse.from_ack(history.add_entry(email, entry))


@router.get("/getClickedVideoData")
def get_clicked_video_data(
    email: str = Query(..., min_length=1),
    video_id: str = Query(..., min_length=1),
    history: WatchHistoryService = Depends(get_watch_history_service),
) -> list[Any]:
    return [history.get_entry(email, video_id)]


@router.get("/watchHistory")
def watch_history(
    search_query: str = Query(..., min_length=1),
    history: WatchHistoryService = Depends(get_watch_history_service),
) -> list[Any]:
    """All history entries of a user, most recently watched first."""
    return history.list_entries(search_query)


@router.put("/updateHistoryTime", response_class=PlainTextResponse)
def update_history_time(
    email: str = Query(..., min_length=1),
    video_id: str = Query(..., min_length=1),
    time_now: str = Query(..., min_length=1),
    history: WatchHistoryService = Depends(get_watch_history_service),
) -> str:
    history.update_watched_at(email, video_id, time_now)
    return "OK"


@router.put("/updateNotes", response_model=WriteAckResponse)
def update_notes(
    email: str = Query(..., min_length=1),
    video_id: str = Query(..., min_length=1),
    notes: Any = Body(None),
    history: WatchHistoryService = Depends(get_watch_history_service),
) -> WriteAckResponse:
    return WriteAckResponse.from_ack(history.update_notes(email, video_id, notes))


@router.get("/getNotes")
def get_notes(
    email: str = Query(..., min_length=1),
    video_id: str = Query(..., min_length=1),
    history: WatchHistoryService = Depends(get_watch_history_service),
) -> list[Any]:
    return [history.get_entry(email, video_id)]
