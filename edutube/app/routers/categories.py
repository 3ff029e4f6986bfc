# edutube/app/routers/categories.py
from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, Query
from fastapi.responses import PlainTextResponse

from edutube.app.deps import get_curation_service
from edutube.app.schemas.curation import WriteAckResponse
from edutube.app.services.curation import CurationService

router = APIRouter(tags=["categories"])


@router.get("/categories")
def list_categories(curation: CurationService = Depends(get_curation_service)) -> list[Any]:
    return curation.fetch_category_values()


@router.get("/mainscreencatgorieswhitelist")
def main_screen_categories(curation: CurationService = Depends(get_curation_service)) -> list[Any]:
    return curation.fetch_category_values()


@router.get("/fetchcategorieswhitelist")
def fetch_categories_whitelist(curation: CurationService = Depends(get_curation_service)) -> list[list[Any]]:
    return curation.fetch_category_entries()


@router.put("/addcategorieswhitelist", response_class=PlainTextResponse)
def add_categories_whitelist(
    fields: dict[str, Any] = Body(...),
    curation: CurationService = Depends(get_curation_service),
) -> str:
    curation.add_categories(fields)
    return "Added"


@router.put("/updatecategorieswhitelist", response_model=WriteAckResponse)
def update_categories_whitelist(
    fields: dict[str, Any] = Body(...),
    curation: CurationService = Depends(get_curation_service),
) -> WriteAckResponse:
    return WriteAckResponse.from_ack(curation.update_categories(fields))


@router.put("/deletecategorieswhitelist", response_model=WriteAckResponse)
def delete_categories_whitelist(
    search_query: str = Query(..., min_length=1),
    curation: CurationService = Depends(get_curation_service),
) -> WriteAckResponse:
    return WriteAckResponse.from_ack(curation.delete_category_field(search_query))
