# FILE: backend/secondbrain/api/endpoints/content.py
# 1. Owner-scoped create/list/delete; summary projection is public by content id.
# 2. A duplicate link for the same owner answers 409 with the existing record (raised by the service).

import asyncio
import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from pymongo.database import Database
from bson import ObjectId

from ...core.db import get_db
from ...core.errors import NotFound
from ...core.responses import send_response
from ...models.content import ContentCreate, ContentPage, DeleteContentRequest, SourceName
from ...models.source import SourceOut
from ...services import source_service
from ...services.content_service import ContentService
from ...tasks.summary_tasks import resummarize_content_task
from .dependencies import CurrentUser, get_content_service

router = APIRouter(tags=["Content"])
logger = logging.getLogger(__name__)

@router.post("/add-content")
async def add_content(
    content_in: ContentCreate,
    current_user: CurrentUser,
    service: ContentService = Depends(get_content_service),
):
    content = await asyncio.to_thread(
        service.create_content,
        owner_id=current_user.id,
        link=content_in.link,
        type=content_in.type,
        title=content_in.title,
        tags=content_in.tags,
        source=content_in.source,
    )
    return send_response(status.HTTP_200_OK, True, "Content created successfully", content)

@router.get("/get-all-content")
async def get_all_content(
    current_user: CurrentUser,
    page_number: Optional[str] = Query(None, alias="pageNumber"),
    page_size: Optional[str] = Query(None, alias="pageSize"),
    source: Optional[SourceName] = Query(None),
    service: ContentService = Depends(get_content_service),
):
    items, count = await asyncio.to_thread(service.list_for_owner, current_user.id, page_number, page_size, source)
    return send_response(status.HTTP_200_OK, True, "Content fetched successfully", ContentPage(content=items, count=count))

@router.delete("/delete-content")
async def delete_content(
    body: DeleteContentRequest,
    current_user: CurrentUser,
    service: ContentService = Depends(get_content_service),
):
    await asyncio.to_thread(service.delete_for_owner, current_user.id, body.content_id)
    return send_response(status.HTTP_200_OK, True, "Content deleted successfully")

@router.get("/get-all-sources")
async def get_all_sources(db: Database = Depends(get_db)):
    sources = await asyncio.to_thread(source_service.list_sources, db)
    if not sources:
        return send_response(status.HTTP_404_NOT_FOUND, False, "No sources found", [])
    data = [SourceOut.model_validate(s.model_dump()) for s in sources]
    return send_response(status.HTTP_200_OK, True, "Sources fetched successfully", data)

@router.get("/summary/{content_id}")
async def get_content_summary(
    content_id: str,
    service: ContentService = Depends(get_content_service),
):
    view = await asyncio.to_thread(service.get_summary_view, ObjectId(content_id))
    return send_response(status.HTTP_200_OK, True, "Here is your summary", view)

@router.post("/resummarize/{content_id}", status_code=status.HTTP_202_ACCEPTED)
async def resummarize_content(
    content_id: str,
    current_user: CurrentUser,
    service: ContentService = Depends(get_content_service),
):
    content = await asyncio.to_thread(service.get_for_owner, current_user.id, ObjectId(content_id))
    if content is None:
        raise NotFound("Content not found")
    if content.summary:
        return send_response(status.HTTP_200_OK, True, "Content already has a summary", content)

    resummarize_content_task.delay(str(content.id))
    logger.info(f"Queued summary regeneration for content {content.id}")
    return send_response(status.HTTP_202_ACCEPTED, True, "Summary generation queued", {"contentId": str(content.id)})
