from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

PROJECT_ROOT = Path(__file__).resolve().parents[2]


def project_path(value: str) -> Path:
    path = Path(value)
    return path if path.is_absolute() else PROJECT_ROOT / path


def _get_env(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value


def _get_env_bool(name: str, default: bool) -> bool:
    raw = _get_env(name, None)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _get_env_int(name: str, default: int) -> int:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _get_env_list(name: str, default: list[str]) -> tuple[str, ...]:
    raw = _get_env(name, None)
    if raw is None:
        return tuple(default)
    values = [item.strip() for item in raw.split(",")]
    clean = [item for item in values if item]
    return tuple(clean) if clean else tuple(default)


@dataclass(frozen=True)
class Settings:
    environment: str
    port: int
    log_level: str
    sentry_dsn: str | None
    log_message_max_chars: int
    cors_allowed_origins: tuple[str, ...]
    rate_limit: str
    rate_limit_enabled: bool
    site_config_path: str
    resume_data_path: str
    session_timeout_hours: int
    session_max_history: int
    session_cleanup_interval_s: int

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


_environment = (_get_env("ENVIRONMENT", "development") or "development").strip().lower()

settings = Settings(
    environment=_environment,
    port=_get_env_int("PORT", 3001),
    log_level=_get_env("LOG_LEVEL", "INFO") or "INFO",
    sentry_dsn=_get_env("SENTRY_DSN"),
    log_message_max_chars=_get_env_int("LOG_MESSAGE_MAX_CHARS", 50),
    cors_allowed_origins=_get_env_list("CORS_ORIGIN", ["http://localhost:5173"]),
    rate_limit=_get_env(
        "RATE_LIMIT",
        "100 per 15 minutes" if _environment == "production" else "1000 per 15 minutes",
    )
    or "100 per 15 minutes",
    rate_limit_enabled=_get_env_bool("RATE_LIMIT_ENABLED", True),
    site_config_path=_get_env("SITE_CONFIG_PATH", "config/site.yaml") or "config/site.yaml",
    resume_data_path=_get_env("RESUME_DATA_PATH", "data/resume.json") or "data/resume.json",
    session_timeout_hours=_get_env_int("SESSION_TIMEOUT_HOURS", 24),
    session_max_history=_get_env_int("SESSION_MAX_HISTORY", 10),
    session_cleanup_interval_s=_get_env_int("SESSION_CLEANUP_INTERVAL_S", 3600),
)

if settings.session_max_history < 1:
    raise RuntimeError("SESSION_MAX_HISTORY must be a positive integer.")

if settings.session_timeout_hours < 1:
    raise RuntimeError("SESSION_TIMEOUT_HOURS must be a positive integer.")
