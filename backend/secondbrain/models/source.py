# FILE: backend/secondbrain/models/source.py

from pydantic import BaseModel, Field, ConfigDict
from typing import Optional
from datetime import datetime
from .common import PyObjectId

class SourceInDB(BaseModel):
    id: PyObjectId = Field(alias="_id", default=None)
    name: str = Field(..., min_length=3)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(
        populate_by_name=True,
        arbitrary_types_allowed=True,
    )

class SourceOut(BaseModel):
    id: PyObjectId = Field(alias="_id", serialization_alias="_id")
    name: str
    created_at: Optional[datetime] = Field(default=None, serialization_alias="createdAt")
    updated_at: Optional[datetime] = Field(default=None, serialization_alias="updatedAt")

    model_config = ConfigDict(
        populate_by_name=True,
        from_attributes=True,
        arbitrary_types_allowed=True,
    )
