import secrets
import string
from passlib.context import CryptContext
from datetime import datetime, timedelta, timezone
from typing import Optional, Any
from jose import jwt, JWTError

from fastapi import HTTPException, status
from ..core.config import settings

# --- Password Hashing Context ---
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

OTP_ALPHABET = string.ascii_letters + string.digits
OTP_LENGTH = 6

def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Checks if the plain password matches the hashed password."""
    return pwd_context.verify(plain_password, hashed_password)

def get_password_hash(password: str) -> str:
    """Hashes the plain password."""
    return pwd_context.hash(password)

def generate_verification_code(length: int = OTP_LENGTH) -> str:
    """Random alphanumeric one-time code for email verification and password reset."""
    return "".join(secrets.choice(OTP_ALPHABET) for _ in range(length))

# --- JWT Token Functions ---

def _create_token(data: dict, token_type: str, secret: str, expires_delta: timedelta) -> str:
    to_encode = data.copy()
    user_id = data.get("id")
    if not user_id or not isinstance(user_id, str):
        raise ValueError("User ID ('id') must be provided and must be a string")

    if not secret:
        raise ValueError("Token secret is not configured")

    to_encode.update({
        "exp": datetime.now(timezone.utc) + expires_delta,
        "sub": user_id,
        "type": token_type,
    })
    return jwt.encode(to_encode, secret, algorithm=settings.ALGORITHM)

def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Creates a JWT access token."""
    delta = expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    return _create_token(data, "access", settings.SECRET_KEY, delta)

def create_refresh_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Creates a JWT refresh token, signed with its own secret."""
    delta = expires_delta or timedelta(minutes=settings.REFRESH_TOKEN_EXPIRE_MINUTES)
    return _create_token(data, "refresh", settings.REFRESH_SECRET_KEY, delta)

def decode_token(token: str, expected_type: str = "access") -> dict[str, Any]:
    """
    Decodes and verifies a JWT token of the expected type.
    Raises 401 on any signature, expiry or type mismatch.
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid token",
        headers={"WWW-Authenticate": "Bearer"},
    )
    if not token or not isinstance(token, str):
        raise credentials_exception

    secret = settings.REFRESH_SECRET_KEY if expected_type == "refresh" else settings.SECRET_KEY
    try:
        payload = jwt.decode(token, secret, algorithms=[settings.ALGORITHM])
    except JWTError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Token validation failed: {e}",
            headers={"WWW-Authenticate": "Bearer"},
        )
    if payload.get("type") != expected_type:
        raise credentials_exception
    return payload
