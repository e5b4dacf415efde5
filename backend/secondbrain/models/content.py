# FILE: backend/secondbrain/models/content.py
# 1. Content = a saved link owned by one user, optionally enriched with a generated summary.
# 2. 'source' drives which summary strategy runs; 'none' means no summarization.
# 3. Output models expose camelCase keys to match the frontend contract.

from enum import Enum
from urllib.parse import urlparse
from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import Optional, List
from datetime import datetime, timezone
from .common import PyObjectId

def _utcnow() -> datetime:
    return datetime.now(timezone.utc)

class ContentType(str, Enum):
    VIDEO = "video"
    IMAGE = "image"
    AUDIO = "audio"
    ARTICLE = "article"
    REPOSITORY = "repository"

class SourceName(str, Enum):
    NONE = "none"
    YOUTUBE = "youtube"
    TWITTER = "twitter"
    FACEBOOK = "facebook"
    GITHUB = "github"

# Create - request body of /content/add-content
class ContentCreate(BaseModel):
    link: str
    type: ContentType
    title: str = Field(..., min_length=3)
    tags: List[PyObjectId] = []
    source: SourceName = SourceName.NONE

    model_config = ConfigDict(arbitrary_types_allowed=True)

    @field_validator("link")
    @classmethod
    def validate_link(cls, v: str) -> str:
        v = v.strip()
        parsed = urlparse(v)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError("Invalid URL")
        return v

# DB Model
class ContentInDB(BaseModel):
    id: PyObjectId = Field(alias="_id", default=None)
    link: str
    type: ContentType
    title: str
    tags: List[PyObjectId] = []
    source: SourceName = SourceName.NONE
    summary: Optional[str] = None
    user_id: PyObjectId
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    model_config = ConfigDict(
        populate_by_name=True,
        arbitrary_types_allowed=True,
    )

# Return Model
class ContentOut(BaseModel):
    id: PyObjectId = Field(alias="_id", serialization_alias="_id")
    link: str
    type: ContentType
    title: str
    tags: List[PyObjectId] = []
    source: SourceName
    summary: Optional[str] = None
    user_id: PyObjectId = Field(serialization_alias="userId")
    created_at: datetime = Field(serialization_alias="createdAt")
    updated_at: datetime = Field(serialization_alias="updatedAt")

    model_config = ConfigDict(
        populate_by_name=True,
        from_attributes=True,
        arbitrary_types_allowed=True,
    )

class ContentPage(BaseModel):
    content: List[ContentOut]
    count: int

class BrainPage(ContentPage):
    username: str

class DeleteContentRequest(BaseModel):
    content_id: PyObjectId = Field(alias="contentId")

    model_config = ConfigDict(populate_by_name=True, arbitrary_types_allowed=True)

# Public projection served by /content/summary/{id} and shared summary links
class SummaryView(BaseModel):
    content_id: PyObjectId = Field(serialization_alias="contentId")
    user_id: PyObjectId = Field(serialization_alias="userId")
    summary: Optional[str] = None
    title: str
    link: str
    source: SourceName
    type: ContentType
    tags: List[PyObjectId] = []
    created_at: datetime = Field(serialization_alias="createdAt")

    model_config = ConfigDict(
        populate_by_name=True,
        arbitrary_types_allowed=True,
    )
