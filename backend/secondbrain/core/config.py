# FILE: backend/secondbrain/core/config.py
# 1. Handles comma-separated CORS strings (for Docker/Production).
# 2. Handles JSON strings.
# 3. External API keys for the summary pipeline are optional; without one, summaries for that source fail and the content is saved unsummarized.

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Union
from pydantic import field_validator
import json

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file='.env', env_file_encoding='utf-8', extra='ignore')

    # --- API Setup ---
    API_V1_STR: str = "/api/v1"
    ENVIRONMENT: str = "production"

    # --- Auth ---
    SECRET_KEY: str = "changeme"
    REFRESH_SECRET_KEY: str = "changeme-refresh"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    REFRESH_TOKEN_EXPIRE_MINUTES: int = 10080
    OTP_EXPIRE_MINUTES: int = 10

    # --- CORS Configuration ---
    BACKEND_CORS_ORIGINS: List[str] = ["http://localhost:5173"]

    @field_validator("BACKEND_CORS_ORIGINS", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v: Union[str, List[str]]) -> List[str]:
        if isinstance(v, str) and not v.startswith("["):
            # Handle comma-separated string: "http://localhost,https://myapp.com"
            return [i.strip() for i in v.split(",") if i.strip()]
        elif isinstance(v, str):
            # Handle JSON string: '["http://localhost"]'
            return json.loads(v)
        return v

    # --- Database & Broker ---
    DATABASE_URI: str = "mongodb://localhost:27017/second_brain"
    REDIS_URL: str = "redis://redis:6379/0"

    # --- Share Links ---
    FRONTEND_BASE_URL: str = "http://localhost:5173"

    # --- Generative Summaries (OpenAI-compatible endpoint) ---
    LLM_API_KEY: str = ""
    LLM_BASE_URL: str = "https://openrouter.ai/api/v1"
    LLM_MODEL: str = "google/gemini-flash-1.5"

    # --- Metadata Providers ---
    YOUTUBE_API_KEY: str = ""
    TWITTER_BEARER_TOKEN: str = ""
    GITHUB_ACCESS_TOKEN: str = ""
    METADATA_TIMEOUT_SECONDS: float = 15.0

    # --- Email (OTP delivery) ---
    SMTP_SERVER: str = "smtp.gmail.com"
    SMTP_PORT: int = 587
    SMTP_USER: str = ""
    SMTP_PASSWORD: str = ""

settings = Settings()
