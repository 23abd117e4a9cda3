from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from app.core.config import project_path, settings

_SITE_CONFIG_CACHE: dict[str, Any] | None = None


def _site_config_path() -> Path:
    return project_path(settings.site_config_path)


def get_site_config() -> dict[str, Any]:
    """Load the site config (config/site.yaml by default) and cache it.

    A missing file yields an empty mapping so built-in defaults apply.
    """
    global _SITE_CONFIG_CACHE

    if _SITE_CONFIG_CACHE is not None:
        return _SITE_CONFIG_CACHE

    path = _site_config_path()
    if not path.exists():
        _SITE_CONFIG_CACHE = {}
        return _SITE_CONFIG_CACHE

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise RuntimeError(f"Failed to read site config '{path}': {exc}") from exc

    try:
        parsed = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise RuntimeError(f"Invalid YAML in site config '{path}': {exc}") from exc

    if parsed is None:
        parsed = {}
    if not isinstance(parsed, dict):
        raise RuntimeError(f"Invalid site config '{path}': expected a top-level mapping.")

    _SITE_CONFIG_CACHE = parsed
    return _SITE_CONFIG_CACHE


def get_site_value(path: str, default: Any = None) -> Any:
    """Get nested config value using dot path notation, e.g. 'ai.model'."""
    if not path:
        return default

    current: Any = get_site_config()
    for key in path.split("."):
        if not isinstance(current, dict):
            return default
        if key not in current:
            return default
        current = current[key]
    return current


def get_candidate_name() -> str:
    name = get_site_value("site.name")
    if isinstance(name, str) and name.strip():
        return name.strip()
    return ""


def is_feature_enabled(feature: str, default: bool = True) -> bool:
    value = get_site_value(f"features.{feature}", default)
    return bool(value)


def reset_site_config_cache() -> None:
    global _SITE_CONFIG_CACHE
    _SITE_CONFIG_CACHE = None
