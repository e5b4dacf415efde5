# FILE: backend/secondbrain/services/otp_service.py
# One-time codes for email verification and password reset.
# Only the bcrypt hash of a code is stored; codes expire after OTP_EXPIRE_MINUTES.

from datetime import datetime, timedelta, timezone
from bson import ObjectId
from pymongo.database import Database

from ..core.config import settings
from ..core.security import generate_verification_code, get_password_hash, verify_password

PURPOSE_VERIFY_EMAIL = "verify_email"
PURPOSE_RESET_PASSWORD = "reset_password"

def _as_utc(value: datetime) -> datetime:
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)

def issue_code(db: Database, user_id: ObjectId, purpose: str) -> str:
    code = generate_verification_code()
    now = datetime.now(timezone.utc)
    db.otps.insert_one({
        "user_id": user_id,
        "purpose": purpose,
        "hashed_code": get_password_hash(code),
        "expires_at": now + timedelta(minutes=settings.OTP_EXPIRE_MINUTES),
        "created_at": now,
    })
    return code

def consume_code(db: Database, user_id: ObjectId, purpose: str, code: str) -> bool:
    """True if `code` matches an unexpired code; all codes for that purpose are then discarded."""
    now = datetime.now(timezone.utc)
    candidates = db.otps.find({"user_id": user_id, "purpose": purpose}).sort("created_at", -1)
    for otp in candidates:
        if _as_utc(otp["expires_at"]) < now:
            continue
        if verify_password(code, otp["hashed_code"]):
            db.otps.delete_many({"user_id": user_id, "purpose": purpose})
            return True
    return False
