# FILE: backend/secondbrain/services/content_service.py
# 1. Creation flow: validate -> register source -> per-owner dedup -> reuse summary or summarize -> persist.
# 2. Summarization is best effort: its failure never prevents the record from being saved.
# 3. Dedup and reuse are point-in-time reads; concurrent creates may both pass the check.

import structlog
from datetime import datetime, timezone
from typing import Any, List, Optional, Tuple, Union
from bson import ObjectId
from pymongo.database import Database

from ..core.errors import AppError, DuplicateForOwner, MissingField, NotFound, TagNotFound
from ..models.content import ContentInDB, ContentOut, ContentType, SourceName, SummaryView
from . import source_service, tag_service
from .summary_service import (
    SummarizationSkipped,
    Summarized,
    SummaryOutcome,
    SummaryProvider,
    get_summary_provider,
)

logger = structlog.get_logger(__name__)

DEFAULT_PAGE_NUMBER = 1
DEFAULT_PAGE_SIZE = 10

def normalize_page_param(value: Any, default: int) -> int:
    """Absent, non-numeric and non-positive values fall back to `default`."""
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number > 0 else default

def _source_value(source: Union[SourceName, str, None]) -> Optional[str]:
    if source is None:
        return None
    value = source.value if isinstance(source, SourceName) else str(source)
    return value or None

class ContentService:
    def __init__(self, db: Database, summary_provider: Optional[SummaryProvider] = None):
        self.db = db
        self.summary_provider = summary_provider or get_summary_provider()

    # --- Creation ---

    def create_content(
        self,
        owner_id: ObjectId,
        link: Optional[str],
        type: Union[ContentType, str, None],
        title: Optional[str],
        tags: Optional[List[ObjectId]] = None,
        source: Union[SourceName, str, None] = None,
    ) -> ContentOut:
        """
        Saves a link for `owner_id` and returns the stored record.
        Raises DuplicateForOwner (carrying the existing record) if the owner already saved this link.
        """
        for field_name, value in (("link", link), ("type", type), ("title", title)):
            if value is None or (isinstance(value, str) and not value.strip()):
                raise MissingField(f"'{field_name}' is required")

        try:
            content_type = ContentType(type)
            source_name = SourceName(_source_value(source) or SourceName.NONE.value)
        except ValueError as e:
            raise AppError(str(e))

        tags = list(tags or [])
        missing = tag_service.missing_tag_ids(self.db, tags)
        if missing:
            raise TagNotFound(data=[str(t) for t in missing])

        if source_name is not SourceName.NONE:
            source_service.ensure_source(self.db, source_name.value)

        existing = self.db.contents.find_one({"user_id": owner_id, "link": link})
        if existing:
            logger.info("content.duplicate_for_owner", user_id=str(owner_id), content_id=str(existing["_id"]))
            raise DuplicateForOwner("Content already exists", data=ContentOut.model_validate(existing))

        outcome = self.resolve_summary(link, source_name)

        record = ContentInDB(
            link=link,
            type=content_type,
            title=title.strip(),
            tags=tags,
            source=source_name,
            summary=outcome.text if isinstance(outcome, Summarized) else None,
            user_id=owner_id,
        )
        doc = record.model_dump(exclude={"id"}, mode="python")
        doc["type"] = content_type.value
        doc["source"] = source_name.value
        result = self.db.contents.insert_one(doc)
        logger.info(
            "content.created",
            user_id=str(owner_id),
            content_id=str(result.inserted_id),
            source=source_name.value,
            summarized=isinstance(outcome, Summarized),
        )
        return ContentOut.model_validate(self.db.contents.find_one({"_id": result.inserted_id}))

    def find_reusable_summary(self, link: str) -> Optional[str]:
        """Summary already computed for the same link by any owner, if one exists."""
        doc = self.db.contents.find_one(
            {"link": link, "summary": {"$nin": [None, ""]}},
            {"summary": 1},
        )
        return doc["summary"] if doc else None

    def resolve_summary(self, link: str, source: Union[SourceName, str, None]) -> SummaryOutcome:
        reused = self.find_reusable_summary(link)
        if reused:
            logger.info("content.summary_reused", link=link)
            return Summarized(text=reused)

        if _source_value(source) in (None, SourceName.NONE.value):
            return SummarizationSkipped(reason="no source supplied")

        outcome = self.summary_provider.try_summarize(source, link)
        if isinstance(outcome, SummarizationSkipped):
            logger.info("content.summary_skipped", link=link, source=_source_value(source), reason=outcome.reason)
        return outcome

    # --- Queries ---

    def list_for_owner(
        self,
        owner_id: ObjectId,
        page_number: Any = None,
        page_size: Any = None,
        source: Union[SourceName, str, None] = None,
    ) -> Tuple[List[ContentOut], int]:
        """Newest-first page of the owner's content plus the total matching the same filter."""
        page_number = normalize_page_param(page_number, DEFAULT_PAGE_NUMBER)
        page_size = normalize_page_param(page_size, DEFAULT_PAGE_SIZE)

        query: dict[str, Any] = {"user_id": owner_id}
        source_value = _source_value(source)
        if source_value:
            query["source"] = source_value

        cursor = (
            self.db.contents.find(query)
            .sort([("created_at", -1), ("_id", -1)])
            .skip((page_number - 1) * page_size)
            .limit(page_size)
        )
        items = [ContentOut.model_validate(doc) for doc in cursor]
        return items, self.db.contents.count_documents(query)

    def get_for_owner(self, owner_id: ObjectId, content_id: ObjectId) -> Optional[ContentOut]:
        doc = self.db.contents.find_one({"_id": content_id, "user_id": owner_id})
        return ContentOut.model_validate(doc) if doc else None

    def delete_for_owner(self, owner_id: ObjectId, content_id: ObjectId) -> bool:
        """Deleting someone else's (or a missing) record matches nothing and is not an error."""
        result = self.db.contents.delete_one({"_id": content_id, "user_id": owner_id})
        if result.deleted_count:
            logger.info("content.deleted", user_id=str(owner_id), content_id=str(content_id))
        return result.deleted_count > 0

    def get_summary_view(self, content_id: ObjectId) -> SummaryView:
        doc = self.db.contents.find_one({"_id": content_id})
        if not doc:
            raise NotFound("No Content To Show")
        return SummaryView(
            content_id=doc["_id"],
            user_id=doc["user_id"],
            summary=doc.get("summary"),
            title=doc["title"],
            link=doc["link"],
            source=doc.get("source", SourceName.NONE.value),
            type=doc["type"],
            tags=doc.get("tags", []),
            created_at=doc["created_at"],
        )

    # --- Backfill ---

    def find_unsummarized_ids(self, limit: int = 50) -> List[ObjectId]:
        cursor = self.db.contents.find(
            {"summary": {"$in": [None, ""]}, "source": {"$nin": [None, SourceName.NONE.value]}},
            {"_id": 1},
        ).sort("created_at", 1).limit(limit)
        return [doc["_id"] for doc in cursor]

    def resummarize(self, content_id: ObjectId) -> Optional[str]:
        """Fills in a missing summary. Returns the summary now stored, or None if still missing."""
        doc = self.db.contents.find_one({"_id": content_id})
        if not doc:
            raise NotFound("Content not found")
        if doc.get("summary"):
            return doc["summary"]

        outcome = self.resolve_summary(doc["link"], doc.get("source"))
        if not isinstance(outcome, Summarized):
            return None

        self.db.contents.update_one(
            {"_id": content_id, "summary": {"$in": [None, ""]}},
            {"$set": {"summary": outcome.text, "updated_at": datetime.now(timezone.utc)}},
        )
        logger.info("content.resummarized", content_id=str(content_id))
        return outcome.text
