# -*- coding: utf-8 -*-
"""Settings persistence and validation."""

from __future__ import annotations

from copy import deepcopy
from pathlib import Path
from typing import Any

from smartlex.constants import (
    COMPACT_WIDTH,
    DEFAULT_SETTINGS_FILE,
    DEFAULT_STORE_FILE,
    HISTORY_CAPACITY,
    LANGUAGES,
)
from smartlex.utils.file_utils import read_json_file, write_json_file


DEFAULT_CONFIG: dict[str, Any] = {
    "api_keys": {"gemini": "USE_ENV_FILE"},
    "analysis": {"model": "gemini_flash", "timeout_seconds": 60},
    "history": {"capacity": HISTORY_CAPACITY},
    "ui": {"language": "zh", "compact_width": COMPACT_WIDTH, "start_pinned": False},
    "notifications": {"enabled": True},
    "storage": {"path": DEFAULT_STORE_FILE},
}

ENV_KEY_NAMES = {"gemini": "GEMINI_API_KEY"}


class ConfigError(ValueError):
    """Raised when settings are invalid."""


def get_default_config() -> dict[str, Any]:
    """Return a deep copy of the default config."""
    return deepcopy(DEFAULT_CONFIG)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _load_env_file(env_path: Path) -> dict[str, str]:
    """Load a simple .env file (KEY=VALUE)."""
    values: dict[str, str] = {}
    if not env_path.exists():
        return values

    for raw_line in env_path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip()
        if not key:
            continue
        if len(value) >= 2 and value[0] == value[-1] and value[0] in {'"', "'"}:
            value = value[1:-1]
        values[key] = value
    return values


def _apply_env_overrides(config: dict[str, Any], env_values: dict[str, str]) -> dict[str, Any]:
    """Apply environment-based overrides to runtime config."""
    merged = deepcopy(config)
    for key_name, env_var in ENV_KEY_NAMES.items():
        value = env_values.get(env_var, "").strip()
        if value:
            merged.setdefault("api_keys", {})
            merged["api_keys"][key_name] = value
    return merged


def validate_config(config: dict[str, Any]) -> None:
    """Validate the fields the core relies on."""
    language = config.get("ui", {}).get("language")
    if language not in LANGUAGES:
        raise ConfigError(f"ui.language must be one of {', '.join(LANGUAGES)}")

    capacity = config.get("history", {}).get("capacity")
    if not isinstance(capacity, int) or isinstance(capacity, bool) or not (1 <= capacity <= HISTORY_CAPACITY):
        raise ConfigError(f"history.capacity must be an int in range 1..{HISTORY_CAPACITY}")

    timeout = config.get("analysis", {}).get("timeout_seconds")
    if not isinstance(timeout, (int, float)) or not (1 <= float(timeout) <= 600):
        raise ConfigError("analysis.timeout_seconds must be in range 1..600")

    if not str(config.get("storage", {}).get("path", "")).strip():
        raise ConfigError("storage.path must not be empty")


def load_config(path: str | Path | None = None, environ: dict[str, str] | None = None) -> dict[str, Any]:
    """Load config from JSON and merge into defaults.

    Keys from a ``.env`` next to the settings file win over the JSON; keys in
    ``environ`` (usually ``os.environ``) win over both.
    """
    config_path = Path(path or DEFAULT_SETTINGS_FILE)
    env_values = _load_env_file(config_path.parent / ".env")
    if environ:
        env_values.update({k: v for k, v in environ.items() if k in ENV_KEY_NAMES.values()})
    if not config_path.exists():
        return _apply_env_overrides(get_default_config(), env_values)

    loaded = read_json_file(config_path)
    merged = _deep_merge(get_default_config(), loaded)
    merged = _apply_env_overrides(merged, env_values)
    validate_config(merged)
    return merged


def _strip_api_keys(config: dict[str, Any]) -> dict[str, Any]:
    """Replace real API keys with the .env placeholder."""
    config_copy = deepcopy(config)
    api_keys = config_copy.get("api_keys", {})
    for key_name in ENV_KEY_NAMES:
        current_value = api_keys.get(key_name)
        if current_value and current_value != "USE_ENV_FILE":
            api_keys[key_name] = "USE_ENV_FILE"
    return config_copy


def save_config(config: dict[str, Any], path: str | Path | None = None) -> Path:
    """Validate and save config as JSON, without real API keys.

    API keys belong in the .env file, not in settings.json.
    """
    validate_config(config)
    config_path = Path(path or DEFAULT_SETTINGS_FILE)
    write_json_file(config_path, _strip_api_keys(config))
    return config_path


def api_key(config: dict[str, Any], name: str = "gemini") -> str:
    value = str(config.get("api_keys", {}).get(name, "")).strip()
    return "" if value == "USE_ENV_FILE" else value
