# FILE: backend/secondbrain/services/source_service.py
# Source registry: every source name referenced by content exists here.
# 'ensure_source' is an atomic upsert, so concurrent callers still end up with one record.

import structlog
from datetime import datetime, timezone
from typing import List
from pymongo import ReturnDocument
from pymongo.database import Database

from ..models.source import SourceInDB

logger = structlog.get_logger(__name__)

def ensure_source(db: Database, name: str) -> SourceInDB:
    """Returns the source called `name`, creating it on first use."""
    now = datetime.now(timezone.utc)
    doc = db.sources.find_one_and_update(
        {"name": name},
        {"$setOnInsert": {"name": name, "created_at": now, "updated_at": now}},
        upsert=True,
        return_document=ReturnDocument.AFTER,
    )
    logger.debug("source.ensured", name=name, source_id=str(doc["_id"]))
    return SourceInDB.model_validate(doc)

def get_source_by_name(db: Database, name: str) -> SourceInDB | None:
    doc = db.sources.find_one({"name": name})
    return SourceInDB.model_validate(doc) if doc else None

def list_sources(db: Database) -> List[SourceInDB]:
    """All known sources in insertion order. An empty list means the registry is empty."""
    cursor = db.sources.find({}).sort("_id", 1)
    return [SourceInDB.model_validate(doc) for doc in cursor]
