# FILE: backend/secondbrain/models/common.py
# 1. Provides the reusable `PyObjectId` type for MongoDB integration.
# 2. `BeforeValidator` converts string ids into `bson.ObjectId` instances.
# 3. `PlainSerializer` renders the id as a plain string in JSON responses.

from bson import ObjectId
from pydantic import BeforeValidator, PlainSerializer, WithJsonSchema
from typing import Annotated

def validate_object_id(v):
    if isinstance(v, ObjectId):
        return v
    if isinstance(v, str) and ObjectId.is_valid(v):
        return ObjectId(v)
    raise ValueError("Invalid ObjectId")

PyObjectId = Annotated[
    ObjectId,
    BeforeValidator(validate_object_id),
    PlainSerializer(lambda v: str(v), return_type=str, when_used="json"),
    WithJsonSchema({"type": "string", "example": "665f1c2e9b1e8a3d4c5b6a79"}),
]
