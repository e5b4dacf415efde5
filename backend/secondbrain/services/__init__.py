# FILE: backend/secondbrain/services/__init__.py

from . import (
    email_service,
    llm_service,
    otp_service,
    source_service,
    tag_service,
    user_service,
    summary_service,
    content_service,
    link_service,
)
