# FILE: backend/secondbrain/models/tag.py

from pydantic import BaseModel, Field, ConfigDict
from typing import Optional
from datetime import datetime
from .common import PyObjectId

class TagCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=50)

class TagOut(BaseModel):
    id: PyObjectId = Field(alias="_id", serialization_alias="_id")
    title: str
    created_at: Optional[datetime] = Field(default=None, serialization_alias="createdAt")

    model_config = ConfigDict(
        populate_by_name=True,
        from_attributes=True,
        arbitrary_types_allowed=True,
    )
