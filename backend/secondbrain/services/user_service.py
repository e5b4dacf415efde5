# FILE: backend/secondbrain/services/user_service.py
# 1. Registration, credential checks, email verification and password reset.
# 2. Email/username lookups are case-insensitive.

import re
import structlog
from datetime import datetime, timezone
from typing import Optional
from bson import ObjectId
from pymongo.database import Database

from ..core.errors import InvalidCredentials, InvalidOtp, NotFound, UserExists
from ..core.security import verify_password, get_password_hash
from ..models.user import UserInDB, UserCreate
from . import otp_service

logger = structlog.get_logger(__name__)

def _ci(value: str) -> dict:
    return {"$regex": f"^{re.escape(value)}$", "$options": "i"}

def get_user_by_username(db: Database, username: str) -> Optional[UserInDB]:
    user_dict = db.users.find_one({"username": _ci(username)})
    return UserInDB.model_validate(user_dict) if user_dict else None

def get_user_by_email(db: Database, email: str) -> Optional[UserInDB]:
    user_dict = db.users.find_one({"email": _ci(email)})
    return UserInDB.model_validate(user_dict) if user_dict else None

def get_user_by_id(db: Database, user_id: ObjectId) -> Optional[UserInDB]:
    user_dict = db.users.find_one({"_id": user_id})
    return UserInDB.model_validate(user_dict) if user_dict else None

def create(db: Database, obj_in: UserCreate) -> UserInDB:
    if get_user_by_email(db, obj_in.email):
        raise UserExists()
    if get_user_by_username(db, obj_in.username):
        raise UserExists("Username already taken")

    user_data = obj_in.model_dump()
    password = user_data.pop("password")
    now = datetime.now(timezone.utc)
    user_data.update({
        "email": obj_in.email.lower(),
        "hashed_password": get_password_hash(password),
        "is_email_verified": False,
        "created_at": now,
        "updated_at": now,
    })
    result = db.users.insert_one(user_data)
    logger.info("user.registered", user_id=str(result.inserted_id))
    return UserInDB.model_validate(db.users.find_one({"_id": result.inserted_id}))

def authenticate(db: Database, email: str, password: str) -> UserInDB:
    user = get_user_by_email(db, email)
    if not user:
        raise NotFound("User not found")
    if not verify_password(password, user.hashed_password):
        raise InvalidCredentials()
    return user

def verify_email(db: Database, email: str, code: str) -> UserInDB:
    user = get_user_by_email(db, email)
    if not user:
        raise NotFound("User not found")
    if user.is_email_verified:
        return user
    if not otp_service.consume_code(db, user.id, otp_service.PURPOSE_VERIFY_EMAIL, code):
        raise InvalidOtp()
    db.users.update_one(
        {"_id": user.id},
        {"$set": {"is_email_verified": True, "updated_at": datetime.now(timezone.utc)}},
    )
    logger.info("user.email_verified", user_id=str(user.id))
    return get_user_by_id(db, user.id)

def reset_password(db: Database, email: str, code: str, new_password: str) -> None:
    user = get_user_by_email(db, email)
    if not user or not otp_service.consume_code(db, user.id, otp_service.PURPOSE_RESET_PASSWORD, code):
        raise InvalidOtp()
    db.users.update_one(
        {"_id": user.id},
        {"$set": {"hashed_password": get_password_hash(new_password), "updated_at": datetime.now(timezone.utc)}},
    )
    logger.info("user.password_reset", user_id=str(user.id))
