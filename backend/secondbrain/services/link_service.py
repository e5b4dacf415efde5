# FILE: backend/secondbrain/services/link_service.py
# 1. Share tokens: random URL-safe hashes mapping to one content item or to a user's whole collection.
# 2. A hash is a bearer capability. Resolution checks only that the hash exists and has the right scope.
# 3. One collection link per user (find-or-create / delete); item links are find-or-create per (user, content).

import math
import secrets
import structlog
from typing import Any, Optional, Tuple
from bson import ObjectId
from pymongo.database import Database

from ..core.config import settings
from ..core.errors import NotASummaryLink, NotFound, WrongUrl
from ..models.content import BrainPage, SourceName, SummaryView
from ..models.link import LinkInDB, MIN_HASH_LENGTH
from .content_service import ContentService

logger = structlog.get_logger(__name__)

ITEM_HASH_LENGTH = 10
COLLECTION_HASH_LENGTH = 20

def generate_hash(length: int = ITEM_HASH_LENGTH) -> str:
    """Cryptographically random token over the URL-safe base64 alphabet, without padding."""
    if length < MIN_HASH_LENGTH:
        raise ValueError(f"Hash length must be at least {MIN_HASH_LENGTH}")
    return secrets.token_urlsafe(math.ceil(length * 3 / 4))[:length]

def brain_url(hash_: str) -> str:
    return f"{settings.FRONTEND_BASE_URL.rstrip('/')}/brain/{hash_}"

def summary_url(hash_: str) -> str:
    return f"{settings.FRONTEND_BASE_URL.rstrip('/')}/shared-summary/{hash_}"

class LinkService:
    def __init__(self, db: Database, content_service: ContentService):
        self.db = db
        self.content_service = content_service

    def _insert_link(self, owner_id: ObjectId, length: int, content_id: Optional[ObjectId] = None) -> LinkInDB:
        link = LinkInDB(hash=generate_hash(length), user_id=owner_id, content_id=content_id)
        doc = link.model_dump(exclude={"id"})
        if content_id is None:
            doc.pop("content_id")
        result = self.db.links.insert_one(doc)
        return LinkInDB.model_validate({**doc, "_id": result.inserted_id})

    def _collection_query(self, owner_id: ObjectId) -> dict:
        return {"user_id": owner_id, "$or": [{"content_id": {"$exists": False}}, {"content_id": None}]}

    def get_by_hash(self, hash_: str) -> Optional[LinkInDB]:
        doc = self.db.links.find_one({"hash": hash_})
        return LinkInDB.model_validate(doc) if doc else None

    # --- Collection ("brain") share ---

    def enable_share(self, owner_id: ObjectId) -> Tuple[str, bool]:
        """Returns (url, created). An already active collection link is returned unchanged."""
        existing = self.db.links.find_one(self._collection_query(owner_id))
        if existing:
            return brain_url(existing["hash"]), False

        link = self._insert_link(owner_id, COLLECTION_HASH_LENGTH)
        logger.info("link.collection_enabled", user_id=str(owner_id))
        return brain_url(link.hash), True

    def disable_share(self, owner_id: ObjectId) -> bool:
        result = self.db.links.delete_many(self._collection_query(owner_id))
        if result.deleted_count:
            logger.info("link.collection_disabled", user_id=str(owner_id))
        return result.deleted_count > 0

    def resolve_collection_link(
        self,
        hash_: str,
        page_number: Any = None,
        page_size: Any = None,
        source: Optional[SourceName] = None,
    ) -> BrainPage:
        link = self.get_by_hash(hash_)
        if link is None or not link.is_collection_link:
            raise WrongUrl()

        owner = self.db.users.find_one({"_id": link.user_id}, {"username": 1})
        if owner is None:
            raise WrongUrl()

        items, count = self.content_service.list_for_owner(link.user_id, page_number, page_size, source)
        return BrainPage(username=owner["username"], content=items, count=count)

    # --- Single item share ---

    def create_item_link(self, owner_id: ObjectId, content_id: ObjectId) -> Tuple[LinkInDB, bool]:
        """Returns (link, created). Re-sharing the same item hands back the existing link."""
        if self.content_service.get_for_owner(owner_id, content_id) is None:
            raise NotFound("Content not found")

        existing = self.db.links.find_one({"user_id": owner_id, "content_id": content_id})
        if existing:
            return LinkInDB.model_validate(existing), False

        link = self._insert_link(owner_id, ITEM_HASH_LENGTH, content_id=content_id)
        logger.info("link.item_created", user_id=str(owner_id), content_id=str(content_id))
        return link, True

    def resolve_item_summary_link(self, hash_: str) -> SummaryView:
        link = self.get_by_hash(hash_)
        if link is None:
            raise WrongUrl()
        if link.is_collection_link:
            raise NotASummaryLink()
        # Content deleted after sharing: the stale link resolves to NotFound.
        return self.content_service.get_summary_view(link.content_id)
