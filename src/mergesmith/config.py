"""Configuration management for MergeSmith."""

import os

from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv()


def _parse_cors_origins() -> list[str]:
    """Parse CORS origins from environment variable."""
    cors_env = os.getenv("CORS_ALLOW_ORIGINS")
    if cors_env:
        return cors_env.split(",")
    return ["*"]


class Settings(BaseModel):
    """Application settings."""

    # Server settings
    host: str = os.getenv("HOST", "127.0.0.1")
    port: int = int(os.getenv("PORT", "8000"))
    debug: bool = os.getenv("DEBUG", "false").lower() == "true"
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # CORS settings (comma-separated list of allowed origins, or * for all)
    cors_allow_origins: list[str] = _parse_cors_origins()

    # Merge behavior
    escape_placeholder_names: bool = os.getenv("ESCAPE_PLACEHOLDER_NAMES", "true").lower() == "true"  # Match [name] literally instead of as a regex
    document_name_prefix: str = os.getenv("DOCUMENT_NAME_PREFIX", "Email")  # Documents are named "<prefix> 1", "<prefix> 2", ...
    fallback_field_label: str = os.getenv("FALLBACK_FIELD_LABEL", "Field")  # Shown as [Field] when an unnamed placeholder runs out of values

    # Session settings
    session_ttl_minutes: int = int(os.getenv("SESSION_TTL_MINUTES", "120"))
    max_sessions: int = int(os.getenv("MAX_SESSIONS", "1000"))

    # Export settings
    export_filename: str = os.getenv("EXPORT_FILENAME", "emails.txt")


settings = Settings()
