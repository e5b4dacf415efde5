# FILE: backend/secondbrain/api/endpoints/tags.py

import asyncio
from fastapi import APIRouter, Depends, status
from pymongo.database import Database

from ...core.db import get_db
from ...core.responses import send_response
from ...models.tag import TagCreate
from ...services import tag_service
from .dependencies import CurrentUser

router = APIRouter(tags=["Tags"])

@router.post("/create-tag")
async def create_tag(tag_in: TagCreate, current_user: CurrentUser, db: Database = Depends(get_db)):
    tag = await asyncio.to_thread(tag_service.create_tag, db, tag_in.title)
    return send_response(status.HTTP_201_CREATED, True, "Tag created successfully", tag)

@router.get("/get-all-tags")
async def get_all_tags(db: Database = Depends(get_db)):
    tags = await asyncio.to_thread(tag_service.list_tags, db)
    return send_response(status.HTTP_200_OK, True, "Tags fetched successfully", tags)
