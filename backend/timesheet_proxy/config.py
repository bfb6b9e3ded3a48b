from __future__ import annotations

import os
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Relay runtime configuration."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    app_name: str = "Timesheet Proxy"
    host: str = os.getenv("PROXY_HOST", "127.0.0.1")
    port: int = int(os.getenv("PROXY_PORT", "8080"))

    google_script_url: Optional[str] = None
    google_script_api_key: str = ""

    cors_origins: List[str] = Field(
        default_factory=lambda: [
            origin.strip() for origin in os.getenv("PROXY_CORS_ORIGINS", "*").split(",") if origin.strip()
        ]
    )
    upstream_timeout: float = float(os.getenv("PROXY_UPSTREAM_TIMEOUT", "30"))
    log_level: str = os.getenv("PROXY_LOG_LEVEL", "INFO")

    @field_validator("google_script_url", mode="before")
    @classmethod
    def _blank_url_is_unset(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = str(value).strip()
        return value or None

    @field_validator("cors_origins", mode="before")
    @classmethod
    def _split_origins(cls, value: str | List[str]) -> List[str]:
        if isinstance(value, list):
            return value
        if not value:
            return []
        return [origin.strip() for origin in value.split(",") if origin.strip()]


settings = Settings()
