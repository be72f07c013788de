"""
app/core/config.py

Centralised configuration loaded from environment variables.
Use a .env file locally; Docker Compose injects these at runtime.
"""

from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # ── Application ────────────────────────────────────────────────────────────
    app_name: str = "Site File Intake API"
    app_version: str = "1.0.0"
    debug: bool = False

    # ── Uploads ────────────────────────────────────────────────────────────────
    upload_root: Path = Path("uploads")

    # Kept as raw strings: both are parsed into an UploadPolicy at startup,
    # and the size string is echoed back verbatim in "File too large" errors.
    allowed_file_types: Optional[str] = None    # e.g. "jpg,png,pdf"
    max_file_size: Optional[str] = None         # e.g. "25MB"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


# Single shared instance; import this everywhere.
settings = Settings()
