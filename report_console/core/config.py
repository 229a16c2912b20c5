from __future__ import annotations

import os
from dataclasses import dataclass, field

DEFAULT_CORS_ORIGINS = ["http://localhost:3000", "http://127.0.0.1:3000"]


def _env_float(name: str, default: float | None) -> float | None:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return float(raw)


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(slots=True)
class Settings:
    """Runtime configuration for the report console."""

    service_url: str = "http://localhost:3000"
    session_cookie: str | None = None
    timeout: float | None = None
    poll_interval: float = 5.0
    display_timezone: str = "UTC"
    log_level: str = "INFO"
    log_json: bool = False
    cors_origins: list[str] = field(default_factory=lambda: list(DEFAULT_CORS_ORIGINS))

    @classmethod
    def from_env(cls) -> "Settings":
        origins_env = os.getenv("API_CORS_ORIGINS", "")
        origins = [origin.strip() for origin in origins_env.split(",") if origin.strip()]
        if not origins:
            origins = list(DEFAULT_CORS_ORIGINS)

        return cls(
            service_url=os.getenv("REPORT_SERVICE_URL") or "http://localhost:3000",
            session_cookie=os.getenv("REPORT_SERVICE_COOKIE") or None,
            timeout=_env_float("REPORT_SERVICE_TIMEOUT", None),
            poll_interval=_env_float("REPORT_POLL_INTERVAL", 5.0) or 5.0,
            display_timezone=os.getenv("REPORT_DISPLAY_TIMEZONE") or "UTC",
            log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
            log_json=_env_bool("LOG_JSON"),
            cors_origins=origins,
        )
