# FILE: backend/secondbrain/api/endpoints/link.py
# 1. Creating/revoking share links requires auth; resolving a hash does not.
# 2. Unknown or mis-scoped hashes answer 411 ("Sorry Wrong Url!!!").

import asyncio
from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from bson import ObjectId

from ...core.responses import send_response
from ...models.content import SourceName
from ...models.link import BrainLinkRequest, LinkOut, ShareUrlOut
from ...services.link_service import LinkService, summary_url
from .dependencies import CurrentUser, get_link_service

router = APIRouter(tags=["Links"])

@router.post("/create-link/{content_id}")
async def create_link(
    content_id: str,
    current_user: CurrentUser,
    service: LinkService = Depends(get_link_service),
):
    link, created = await asyncio.to_thread(service.create_item_link, current_user.id, ObjectId(content_id))
    data = LinkOut.model_validate(link.model_dump())
    if not created:
        return send_response(status.HTTP_200_OK, True, "Link already exists", data)
    return send_response(status.HTTP_201_CREATED, True, "Link created successfully", data)

@router.post("/brain-link")
async def brain_link(
    body: BrainLinkRequest,
    current_user: CurrentUser,
    service: LinkService = Depends(get_link_service),
):
    if not body.share_brain:
        await asyncio.to_thread(service.disable_share, current_user.id)
        return send_response(status.HTTP_200_OK, True, "Link deleted successfully")

    url, created = await asyncio.to_thread(service.enable_share, current_user.id)
    if created:
        return send_response(status.HTTP_201_CREATED, True, "Link created successfully", ShareUrlOut(link=url))
    return send_response(status.HTTP_200_OK, True, "Here is your link", ShareUrlOut(link=url))

@router.get("/brain/{hash}")
async def get_brain_link(
    hash: str,
    page_number: Optional[str] = Query(None, alias="pageNumber"),
    page_size: Optional[str] = Query(None, alias="pageSize"),
    source: Optional[SourceName] = Query(None),
    service: LinkService = Depends(get_link_service),
):
    page = await asyncio.to_thread(service.resolve_collection_link, hash, page_number, page_size, source)
    return send_response(status.HTTP_200_OK, True, "Here is your content", page)

@router.post("/summary-link/{content_id}")
async def create_summary_link(
    content_id: str,
    current_user: CurrentUser,
    service: LinkService = Depends(get_link_service),
):
    link, created = await asyncio.to_thread(service.create_item_link, current_user.id, ObjectId(content_id))
    data = ShareUrlOut(link=summary_url(link.hash))
    if not created:
        return send_response(status.HTTP_200_OK, True, "Link already exists", data)
    return send_response(status.HTTP_201_CREATED, True, "Summary link created successfully", data)

@router.get("/summary/{hash}")
async def get_summary_link(
    hash: str,
    service: LinkService = Depends(get_link_service),
):
    view = await asyncio.to_thread(service.resolve_item_summary_link, hash)
    return send_response(status.HTTP_200_OK, True, "Here is your summary", view)
