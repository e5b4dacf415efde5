# FILE: backend/secondbrain/core/errors.py
# Domain error taxonomy. Every AppError is rendered by the top-level handler
# into the standard response envelope with its own status code.

from typing import Any, Optional


class AppError(Exception):
    status_code: int = 400
    message: str = "Bad request"

    def __init__(self, message: Optional[str] = None, data: Any = None):
        self.message = message or self.message
        self.data = data
        super().__init__(self.message)


class MissingField(AppError):
    status_code = 400
    message = "Required field is missing"


class DuplicateForOwner(AppError):
    """The owner already saved this link. ``data`` holds the existing record."""
    status_code = 409
    message = "Content already exists"


class TagNotFound(AppError):
    status_code = 400
    message = "Tag not found"


class NotFound(AppError):
    status_code = 404
    message = "Resource not found"


class WrongUrl(AppError):
    status_code = 411
    message = "Sorry Wrong Url!!!"


class NotASummaryLink(WrongUrl):
    message = "This link does not point to a summary"


class InvalidCredentials(AppError):
    status_code = 403
    message = "Invalid Credentials"


class UserExists(AppError):
    status_code = 403
    message = "User already exists"


class InvalidOtp(AppError):
    status_code = 400
    message = "Invalid or expired verification code"


# --- Summary pipeline (absorbed inside content creation, never rendered) ---

class SummaryError(Exception):
    """Base for failures inside the summary pipeline."""


class InvalidLinkFormat(SummaryError):
    def __init__(self, source: str, link: str):
        self.source = source
        self.link = link
        super().__init__(f"Invalid {source} URL: {link}")


class SummaryGenerationFailed(SummaryError):
    def __init__(self, source: str, link: str, reason: str):
        self.source = source
        self.link = link
        self.reason = reason
        super().__init__(f"Summary generation failed for {source} link {link}: {reason}")
