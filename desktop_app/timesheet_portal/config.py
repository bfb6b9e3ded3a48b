"""Configuración del portal de horas."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

DEFAULT_PROXY_URL = "http://127.0.0.1:8080/api/proxy"
DEFAULT_REQUEST_TIMEOUT = 10.0
DEFAULT_RETRY_ATTEMPTS = 3
DEFAULT_RETRY_DELAY = 0.8
DEFAULT_REFRESH_DELAY = 2.5
DEFAULT_SESSION_FILE = Path.home() / ".timesheet_portal" / "session.json"


@dataclass(slots=True)
class AppConfig:
    """Valores de configuración de la aplicación."""

    proxy_url: str = DEFAULT_PROXY_URL
    request_timeout_seconds: float = DEFAULT_REQUEST_TIMEOUT
    retry_attempts: int = DEFAULT_RETRY_ATTEMPTS
    retry_delay_seconds: float = DEFAULT_RETRY_DELAY
    refresh_delay_seconds: float = DEFAULT_REFRESH_DELAY
    session_file: Path = field(default_factory=lambda: DEFAULT_SESSION_FILE)
    field_aliases_file: Optional[Path] = None
    log_level: str = "INFO"


def load_config(env_path: Optional[Path] = None) -> AppConfig:
    """Carga la configuración desde un `.env` opcional y el entorno."""

    env_path = env_path or Path(__file__).resolve().parent.parent / ".env"
    if env_path.exists():
        load_dotenv(env_path)

    aliases_file = os.getenv("TIMESHEET_FIELD_ALIASES_FILE")
    return AppConfig(
        proxy_url=os.getenv("TIMESHEET_PROXY_URL", DEFAULT_PROXY_URL),
        request_timeout_seconds=float(os.getenv("TIMESHEET_REQUEST_TIMEOUT", DEFAULT_REQUEST_TIMEOUT)),
        retry_attempts=int(os.getenv("TIMESHEET_RETRY_ATTEMPTS", DEFAULT_RETRY_ATTEMPTS)),
        retry_delay_seconds=float(os.getenv("TIMESHEET_RETRY_DELAY", DEFAULT_RETRY_DELAY)),
        refresh_delay_seconds=float(os.getenv("TIMESHEET_REFRESH_DELAY", DEFAULT_REFRESH_DELAY)),
        session_file=Path(os.getenv("TIMESHEET_SESSION_FILE", str(DEFAULT_SESSION_FILE))),
        field_aliases_file=Path(aliases_file) if aliases_file else None,
        log_level=os.getenv("TIMESHEET_LOG_LEVEL", "INFO").upper(),
    )


__all__ = ["AppConfig", "load_config"]
