# edutube/app/routers/channel_lists.py
from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Query
from fastapi.responses import PlainTextResponse

from edutube.app.deps import get_curation_service
from edutube.app.schemas.curation import WriteAckResponse
from edutube.app.services.curation import CurationService

router = APIRouter(tags=["channel lists"])


# Whitelisted channels

@router.put("/addwhitelistId", response_class=PlainTextResponse)
def add_whitelist_id(
    fields: dict[str, Any] = Body(...),
    search_query: Optional[str] = Query(None),
    curation: CurationService = Depends(get_curation_service),
) -> str:
    curation.add_whitelist_ids(search_query, fields)
    return "Added"


@router.get("/fetchwhitelistId")
def fetch_whitelist_ids(curation: CurationService = Depends(get_curation_service)) -> list[dict[str, Any]]:
    return curation.fetch_whitelist_ids()


@router.put("/updatewhitelistId", response_model=WriteAckResponse)
def update_whitelist_ids(
    fields: dict[str, Any] = Body(...),
    curation: CurationService = Depends(get_curation_service),
) -> WriteAckResponse:
    return WriteAckResponse.from_ack(curation.update_whitelist_ids(fields))


@router.put("/deletewhitelistId", response_class=PlainTextResponse)
def delete_whitelist_id(
    document: str = Query(..., min_length=1),
    field: str = Query(..., min_length=1),
    curation: CurationService = Depends(get_curation_service),
) -> str:
    return curation.delete_whitelist_id(document, field)


# Blacklisted channels

@router.put("/addblacklistId", response_class=PlainTextResponse)
def add_blacklist_id(
    fields: dict[str, Any] = Body(...),
    curation: CurationService = Depends(get_curation_service),
) -> str:
    curation.add_blacklist(fields)
    return "Added"


@router.get("/fetchblacklistId")
def fetch_blacklist_ids(curation: CurationService = Depends(get_curation_service)) -> list[list[Any]]:
    return curation.fetch_blacklist()


@router.put("/deleteblacklistlistId", response_model=WriteAckResponse)
def delete_blacklist_id(
    search_query: str = Query(..., min_length=1),
    curation: CurationService = Depends(get_curation_service),
) -> WriteAckResponse:
    return WriteAckResponse.from_ack(curation.delete_blacklist_field(search_query))
