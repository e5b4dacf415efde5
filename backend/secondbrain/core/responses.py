# FILE: backend/secondbrain/core/responses.py
# Standard response envelope: {statusCode, success, message, data, error}.

from typing import Any, Generic, Optional, TypeVar
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict
from bson import ObjectId

T = TypeVar("T")

class ApiResponse(BaseModel, Generic[T]):
    statusCode: int
    success: bool
    message: str
    data: Optional[T] = None
    error: Optional[Any] = None

    model_config = ConfigDict(arbitrary_types_allowed=True)

def _encode(value: Any) -> Any:
    if isinstance(value, BaseModel):
        value = value.model_dump(by_alias=True)
    return jsonable_encoder(value, custom_encoder={ObjectId: str})

def send_response(
    status_code: int,
    success: bool,
    message: str,
    data: Any = None,
    error: Any = None,
) -> JSONResponse:
    body = {
        "statusCode": status_code,
        "success": success,
        "message": message,
        "data": _encode(data),
        "error": _encode(error),
    }
    return JSONResponse(status_code=status_code, content=body)
