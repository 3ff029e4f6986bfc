# edutube/app/routers/whitelist_requests.py
from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Depends, Query

from edutube.app.deps import get_whitelist_request_service
from edutube.app.domain.models import WhitelistRequest
from edutube.app.schemas.curation import WriteAckResponse
from edutube.app.services.whitelist_requests import WhitelistRequestService

router = APIRouter(tags=["whitelist requests"])


@router.put("/addWhitelistRequest", response_model=WriteAckResponse)
def add_whitelist_request(
    email: str = Query(..., min_length=1),
    youtube_link: Optional[str] = Query(None),
    category: Optional[str] = Query(None),
    is_true: str = Query("false"),
    new_category: Optional[str] = Query(None),
    requests: WhitelistRequestService = Depends(get_whitelist_request_service),
) -> WriteAckResponse:
    request = WhitelistRequest(
        user_email=email,
        youtube_link=youtube_link,
        category=category,
        new_category=new_category,
        is_approved=is_true,
    )
    return WriteAckResponse.from_ack(requests.submit(request))


@router.get("/fetchwhitelistingrequests")
def fetch_whitelisting_requests(
    requests: WhitelistRequestService = Depends(get_whitelist_request_service),
) -> list[list[Any]]:
    """[request_id, request] pairs for every user; each request carries its submitter in user_id."""
    return [[request_id, request] for _user, request_id, request in requests.list_all()]


@router.put("/addStatusTrue", response_model=WriteAckResponse)
def add_status_true(
    email: str = Query(..., min_length=1),
    req_id: str = Query(..., min_length=1),
    requests: WhitelistRequestService = Depends(get_whitelist_request_service),
) -> WriteAckResponse:
    return WriteAckResponse.from_ack(requests.set_approval(email, req_id, approved=True))


@router.put("/addStatusFalse", response_model=WriteAckResponse)
def add_status_false(
    email: str = Query(..., min_length=1),
    req_id: str = Query(..., min_length=1),
    requests: WhitelistRequestService = Depends(get_whitelist_request_service),
) -> WriteAckResponse:
    return WriteAckResponse.from_ack(requests.set_approval(email, req_id, approved=False))
