"""
backend/config.py

Application configuration via Pydantic Settings.
All values can be overridden with environment variables or a .env file.

Quick start — create a .env file in your project root:
    API_PORT=8080
    LOG_PATH=/var/log/zeek/current/conn.log
    STATIC_DIR=./static
"""

from __future__ import annotations

import json
from typing import Annotated

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # API
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8080
    CORS_ORIGINS: Annotated[list[str], NoDecode] = []   # JSON list or comma-separated

    # Ingestion
    LOG_PATH: str | None = None   # conn.log preloaded at startup
    MAX_UPLOAD_BYTES: int = 50 * 1024 * 1024

    # Views
    TIMELINE_BUCKET_SECONDS: int = 10

    # Front-end assets served at / and /static (optional)
    STATIC_DIR: str | None = None

    # Logging
    LOG_LEVEL: str = "INFO"

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def parse_origins(cls, v):
        if isinstance(v, str):
            v = v.strip()
            if v.startswith("["):
                try:
                    return json.loads(v)
                except ValueError:
                    pass
            return [o.strip() for o in v.split(",") if o.strip()]
        return v

    @field_validator("TIMELINE_BUCKET_SECONDS")
    @classmethod
    def positive_bucket(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("TIMELINE_BUCKET_SECONDS must be positive")
        return v


settings = Settings()
