# FILE: backend/secondbrain/api/endpoints/dependencies.py
# 1. Bearer access tokens only; refresh tokens are accepted solely by /user/refresh.
# 2. Services are built per request from the DB dependency so tests can override either.

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from typing import Annotated
from pymongo.database import Database
from bson import ObjectId
from bson.errors import InvalidId

from ...core.db import get_db
from ...core.security import decode_token
from ...models.user import UserInDB
from ...services import user_service
from ...services.content_service import ContentService
from ...services.link_service import LinkService
from ...services.summary_service import SummaryProvider, get_summary_provider

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/user/login")

def get_current_user(
    token: Annotated[str, Depends(oauth2_scheme)],
    db: Database = Depends(get_db)
) -> UserInDB:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    payload = decode_token(token, expected_type="access")
    user_id = payload.get("id")
    if not user_id:
        raise credentials_exception

    try:
        user = user_service.get_user_by_id(db, ObjectId(user_id))
    except InvalidId:
        raise credentials_exception
    if user is None:
        raise credentials_exception
    return user

def get_content_service(
    db: Database = Depends(get_db),
    provider: SummaryProvider = Depends(get_summary_provider),
) -> ContentService:
    return ContentService(db, provider)

def get_link_service(
    db: Database = Depends(get_db),
    content_service: ContentService = Depends(get_content_service),
) -> LinkService:
    return LinkService(db, content_service)

CurrentUser = Annotated[UserInDB, Depends(get_current_user)]
