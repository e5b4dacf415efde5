# FILE: backend/secondbrain/services/tag_service.py

from datetime import datetime, timezone
from typing import Iterable, List
from bson import ObjectId
from pymongo import ReturnDocument
from pymongo.database import Database

from ..models.tag import TagOut

def create_tag(db: Database, title: str) -> TagOut:
    """Find-or-create by normalized title."""
    normalized = title.strip().lower()
    now = datetime.now(timezone.utc)
    doc = db.tags.find_one_and_update(
        {"title": normalized},
        {"$setOnInsert": {"title": normalized, "created_at": now}},
        upsert=True,
        return_document=ReturnDocument.AFTER,
    )
    return TagOut.model_validate(doc)

def list_tags(db: Database) -> List[TagOut]:
    return [TagOut.model_validate(doc) for doc in db.tags.find({}).sort("title", 1)]

def missing_tag_ids(db: Database, tag_ids: Iterable[ObjectId]) -> List[ObjectId]:
    wanted = list(dict.fromkeys(tag_ids))
    if not wanted:
        return []
    found = {doc["_id"] for doc in db.tags.find({"_id": {"$in": wanted}}, {"_id": 1})}
    return [tag_id for tag_id in wanted if tag_id not in found]
