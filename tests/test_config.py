# -*- coding: utf-8 -*-
"""Tests for config persistence and validation."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from smartlex.config import (
    ConfigError,
    api_key,
    get_default_config,
    load_config,
    save_config,
    validate_config,
)


def test_default_config_has_all_keys() -> None:
    config = get_default_config()
    assert {"api_keys", "analysis", "history", "ui", "notifications", "storage"}.issubset(config.keys())
    assert config["history"]["capacity"] == 100


def test_default_config_is_a_copy() -> None:
    config = get_default_config()
    config["ui"]["language"] = "en"
    assert get_default_config()["ui"]["language"] == "zh"


def test_load_missing_file_returns_defaults(tmp_path: Path) -> None:
    loaded = load_config(tmp_path / "settings.json")
    assert loaded == get_default_config()


def test_save_and_load_config(tmp_path: Path, default_config: dict) -> None:
    target = tmp_path / "settings.json"
    default_config["ui"]["language"] = "en"
    save_config(default_config, target)
    assert load_config(target)["ui"]["language"] == "en"


def test_partial_file_is_merged_into_defaults(tmp_path: Path) -> None:
    target = tmp_path / "settings.json"
    target.write_text(json.dumps({"analysis": {"model": "gemini_pro"}}), encoding="utf-8")
    loaded = load_config(target)
    assert loaded["analysis"]["model"] == "gemini_pro"
    assert loaded["analysis"]["timeout_seconds"] == 60


def test_env_file_overrides_api_key(tmp_path: Path) -> None:
    (tmp_path / ".env").write_text('GEMINI_API_KEY="AIzaTestKey"\n', encoding="utf-8")
    loaded = load_config(tmp_path / "settings.json")
    assert api_key(loaded) == "AIzaTestKey"


def test_environ_wins_over_env_file(tmp_path: Path) -> None:
    (tmp_path / ".env").write_text("GEMINI_API_KEY=fromfile\n", encoding="utf-8")
    loaded = load_config(tmp_path / "settings.json", environ={"GEMINI_API_KEY": "fromenv", "OTHER": "x"})
    assert api_key(loaded) == "fromenv"


def test_placeholder_key_reads_as_empty(default_config: dict) -> None:
    assert api_key(default_config) == ""


def test_save_strips_real_api_key(tmp_path: Path, default_config: dict) -> None:
    target = tmp_path / "settings.json"
    default_config["api_keys"]["gemini"] = "AIzaRealSecret"
    save_config(default_config, target)
    saved = json.loads(target.read_text(encoding="utf-8"))
    assert saved["api_keys"]["gemini"] == "USE_ENV_FILE"
    assert default_config["api_keys"]["gemini"] == "AIzaRealSecret"


@pytest.mark.parametrize(
    ("section", "key", "value"),
    [
        ("ui", "language", "fr"),
        ("history", "capacity", 0),
        ("history", "capacity", 101),
        ("history", "capacity", True),
        ("analysis", "timeout_seconds", 0),
        ("storage", "path", " "),
    ],
)
def test_validate_rejects_bad_values(default_config: dict, section: str, key: str, value) -> None:
    default_config[section][key] = value
    with pytest.raises(ConfigError):
        validate_config(default_config)


def test_invalid_file_raises_config_error(tmp_path: Path) -> None:
    target = tmp_path / "settings.json"
    target.write_text(json.dumps({"ui": {"language": "xx"}}), encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(target)
