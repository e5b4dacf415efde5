# FILE: backend/secondbrain/api/endpoints/auth.py
# 1. Registration leaves the account unverified and emails a one-time code.
# 2. Login of an unverified account re-sends the code instead of issuing tokens.
# 3. The refresh token travels only in an httpOnly cookie.

import asyncio
from typing import Annotated, Optional
from fastapi import APIRouter, Cookie, Depends, HTTPException, status
from pymongo.database import Database
from bson import ObjectId

from ...core import security
from ...core.config import settings
from ...core.db import get_db
from ...core.responses import send_response
from ...models.user import (
    ForgotPasswordRequest,
    ResetPasswordRequest,
    Token,
    UserCreate,
    UserInDB,
    UserLogin,
    UserOut,
    VerifyEmailRequest,
)
from ...services import email_service, otp_service, user_service
from .dependencies import CurrentUser

router = APIRouter(tags=["Authentication"])

REFRESH_COOKIE = "refresh_token"

def _user_out(user: UserInDB) -> UserOut:
    return UserOut.model_validate(user.model_dump())

def _token_payload(user: UserInDB) -> dict:
    return {"id": str(user.id), "username": user.username}

async def _send_code(db: Database, user: UserInDB, purpose: str) -> None:
    code = await asyncio.to_thread(otp_service.issue_code, db, user.id, purpose)
    sender = (
        email_service.send_verification_code
        if purpose == otp_service.PURPOSE_VERIFY_EMAIL
        else email_service.send_password_reset_code
    )
    await asyncio.to_thread(sender, user.email, user.username, code)

@router.post("/register")
async def register_user(user_in: UserCreate, db: Database = Depends(get_db)):
    user = await asyncio.to_thread(user_service.create, db, user_in)
    await _send_code(db, user, otp_service.PURPOSE_VERIFY_EMAIL)
    return send_response(status.HTTP_201_CREATED, True, "User created successfully", _user_out(user))

@router.post("/login")
async def login(form_data: UserLogin, db: Database = Depends(get_db)):
    user = await asyncio.to_thread(user_service.authenticate, db, form_data.email, form_data.password)

    if not user.is_email_verified:
        await _send_code(db, user, otp_service.PURPOSE_VERIFY_EMAIL)
        return send_response(status.HTTP_200_OK, True, "User Email not verified", {"verified": False})

    access_token = security.create_access_token(data=_token_payload(user))
    refresh_token = security.create_refresh_token(data=_token_payload(user))

    response = send_response(
        status.HTTP_200_OK,
        True,
        "Login successful",
        {"user": _user_out(user), "token": access_token, "verified": True},
    )
    response.set_cookie(
        key=REFRESH_COOKIE,
        value=refresh_token,
        httponly=True,
        secure=settings.ENVIRONMENT == "production",
        samesite="strict" if settings.ENVIRONMENT == "production" else "lax",
        max_age=settings.REFRESH_TOKEN_EXPIRE_MINUTES * 60,
    )
    return response

@router.post("/verify-email")
async def verify_email(body: VerifyEmailRequest, db: Database = Depends(get_db)):
    user = await asyncio.to_thread(user_service.verify_email, db, body.email, body.code)
    return send_response(status.HTTP_200_OK, True, "Email verified successfully", _user_out(user))

@router.post("/forgot-password")
async def forgot_password(body: ForgotPasswordRequest, db: Database = Depends(get_db)):
    user = await asyncio.to_thread(user_service.get_user_by_email, db, body.email)
    if user:
        await _send_code(db, user, otp_service.PURPOSE_RESET_PASSWORD)
    return send_response(status.HTTP_200_OK, True, "If the account exists, a reset code has been sent")

@router.post("/reset-password")
async def reset_password(body: ResetPasswordRequest, db: Database = Depends(get_db)):
    await asyncio.to_thread(user_service.reset_password, db, body.email, body.code, body.new_password)
    return send_response(status.HTTP_200_OK, True, "Password updated successfully")

@router.post("/refresh")
async def refresh_token(
    refresh_cookie: Annotated[Optional[str], Cookie(alias=REFRESH_COOKIE)] = None,
    db: Database = Depends(get_db),
):
    if not refresh_cookie:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Refresh token missing")
    payload = security.decode_token(refresh_cookie, expected_type="refresh")
    user = await asyncio.to_thread(user_service.get_user_by_id, db, ObjectId(payload["id"]))
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Could not validate refresh token")
    token = Token(access_token=security.create_access_token(data=_token_payload(user)))
    return send_response(status.HTTP_200_OK, True, "Token refreshed", token)

@router.get("/me")
async def get_current_user_profile(current_user: CurrentUser):
    return send_response(status.HTTP_200_OK, True, "User fetched successfully", _user_out(current_user))
