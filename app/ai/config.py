from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from typing import Any

from app.core.site_config import get_site_value

DEFAULT_PROVIDER = "groq"
DEFAULT_MODEL = "llama-3.3-70b-versatile"
DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_TOKENS = 1024
DEFAULT_TIMEOUT_S = 30.0


class AIProvider(str, Enum):
    GROQ = "groq"
    OPENAI = "openai"
    GOOGLE = "google"


@dataclass(frozen=True)
class ProviderSpec:
    api_key_env: str
    base_url: str | None


PROVIDER_SPECS: dict[AIProvider, ProviderSpec] = {
    AIProvider.GROQ: ProviderSpec("GROQ_API_KEY", "https://api.groq.com/openai/v1"),
    AIProvider.OPENAI: ProviderSpec("OPENAI_API_KEY", None),
    AIProvider.GOOGLE: ProviderSpec(
        "GOOGLE_API_KEY", "https://generativelanguage.googleapis.com/v1beta/openai/"
    ),
}


@dataclass(frozen=True)
class AIConfig:
    provider: str
    model: str
    temperature: float
    max_tokens: int
    base_url: str | None = None
    timeout_s: float = DEFAULT_TIMEOUT_S
    max_retries: int = 0


def _env(name: str) -> str | None:
    value = (os.getenv(name) or "").strip()
    return value or None


def _as_float(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _as_int(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _first(*values: Any) -> Any:
    for value in values:
        if value is not None:
            return value
    return None


def _file_str(path: str) -> str | None:
    value = get_site_value(path)
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def load_ai_config() -> AIConfig:
    """Resolve provider settings: environment first, then config/site.yaml, then defaults."""
    provider = _first(_env("AI_PROVIDER"), _file_str("ai.provider"), DEFAULT_PROVIDER)
    model = _first(_env("AI_MODEL"), _file_str("ai.model"), DEFAULT_MODEL)
    temperature = _first(
        _as_float(_env("AI_TEMPERATURE")),
        _as_float(get_site_value("ai.temperature")),
        DEFAULT_TEMPERATURE,
    )
    max_tokens = _first(
        _as_int(_env("AI_MAX_TOKENS")),
        _as_int(get_site_value("ai.maxTokens")),
        DEFAULT_MAX_TOKENS,
    )
    return AIConfig(
        provider=provider.lower(),
        model=model,
        temperature=temperature,
        max_tokens=max_tokens,
        base_url=_env("AI_BASE_URL"),
        timeout_s=_first(_as_float(_env("AI_TIMEOUT_S")), DEFAULT_TIMEOUT_S),
        max_retries=_first(_as_int(_env("AI_MAX_RETRIES")), 0),
    )
