# FILE: backend/secondbrain/models/link.py
# 1. A Link maps an opaque hash to one content item, or (content_id=None) to a user's whole collection.
# 2. Holding the hash is the capability; resolution never checks ownership.

from pydantic import BaseModel, Field, ConfigDict
from typing import Optional
from datetime import datetime, timezone
from .common import PyObjectId

MIN_HASH_LENGTH = 7

def _utcnow() -> datetime:
    return datetime.now(timezone.utc)

class LinkInDB(BaseModel):
    id: PyObjectId = Field(alias="_id", default=None)
    hash: str = Field(..., min_length=MIN_HASH_LENGTH)
    user_id: PyObjectId
    content_id: Optional[PyObjectId] = None
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    model_config = ConfigDict(
        populate_by_name=True,
        arbitrary_types_allowed=True,
    )

    @property
    def is_collection_link(self) -> bool:
        return self.content_id is None

class LinkOut(BaseModel):
    id: PyObjectId = Field(alias="_id", serialization_alias="_id")
    hash: str
    user_id: PyObjectId = Field(serialization_alias="userId")
    content_id: Optional[PyObjectId] = Field(default=None, serialization_alias="contentId")
    created_at: datetime = Field(serialization_alias="createdAt")

    model_config = ConfigDict(
        populate_by_name=True,
        from_attributes=True,
        arbitrary_types_allowed=True,
    )

class BrainLinkRequest(BaseModel):
    share_brain: bool = Field(alias="shareBrain")

    model_config = ConfigDict(populate_by_name=True)

class ShareUrlOut(BaseModel):
    link: str
