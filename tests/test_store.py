# -*- coding: utf-8 -*-
"""Tests for session persistence."""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path

import pytest

from smartlex.core.history_cache import HistoryCache
from smartlex.core.state import AppState
from smartlex.core.store import JsonFileStore, MemoryStore, SessionStore
from smartlex.models.analysis_result import AnalysisResult


def test_json_store_writes_and_reloads(tmp_path: Path) -> None:
    target = tmp_path / "store.json"
    store = JsonFileStore(target)
    store.set("history", [{"term": "a"}])
    assert target.exists()
    assert JsonFileStore(target).get("history") == [{"term": "a"}]


def test_json_store_keeps_unicode_readable(tmp_path: Path) -> None:
    target = tmp_path / "store.json"
    JsonFileStore(target).set("label", "首页")
    assert "首页" in target.read_text(encoding="utf-8")


def test_json_store_ignores_corrupt_file(tmp_path: Path) -> None:
    target = tmp_path / "store.json"
    target.write_text("{not json", encoding="utf-8")
    assert JsonFileStore(target).get("history", []) == []


def test_memory_store_returns_copies() -> None:
    store = MemoryStore()
    value = {"a": [1]}
    store.set("k", value)
    value["a"].append(2)
    assert store.get("k") == {"a": [1]}


def test_restore_trims_history_to_capacity() -> None:
    raw = [AnalysisResult(term=f"t{i}", context="c").to_dict() for i in range(5)]
    backend = MemoryStore({"history": raw, "current_analysis": raw[4]})
    state = AppState(history=HistoryCache(capacity=3))
    SessionStore(backend).restore(state)
    snapshot = state.snapshot()
    assert [item.term for item in snapshot.history] == ["t0", "t1", "t2"]
    assert snapshot.current_analysis is not None
    assert snapshot.current_analysis.term == "t4"


def test_restore_with_empty_store() -> None:
    state = AppState()
    SessionStore(MemoryStore()).restore(state)
    assert state.snapshot().history == ()
    assert state.snapshot().current_analysis is None


def test_save_history_round_trips_through_file(tmp_path: Path) -> None:
    target = tmp_path / "store.json"
    state = AppState()
    state.history.insert(AnalysisResult(term="Silver Lining", context="c"))
    SessionStore(JsonFileStore(target)).save_history(state)

    restored = AppState()
    SessionStore(JsonFileStore(target)).restore(restored)
    assert [item.term for item in restored.snapshot().history] == ["Silver Lining"]
    assert json.loads(target.read_text(encoding="utf-8"))["history"][0]["term"] == "Silver Lining"


def test_library_skips_duplicates() -> None:
    session_store = SessionStore(MemoryStore())
    result = AnalysisResult(term="a", context="b")
    assert session_store.add_to_library(result) is True
    assert session_store.add_to_library(result) is False
    assert [item.id for item in session_store.library()] == [result.id]


def test_write_failure_is_logged_not_raised(caplog) -> None:
    class _BrokenStore(MemoryStore):
        def set(self, key, value):
            raise OSError("disk full")

    state = AppState()
    state.history.insert(AnalysisResult(term="a", context="b"))
    SessionStore(_BrokenStore()).save_history(state)
    assert "Could not persist history" in caplog.text


def test_json_store_rejects_unserializable_value_without_poisoning(tmp_path: Path) -> None:
    target = tmp_path / "store.json"
    store = JsonFileStore(target)
    store.set("history", [{"term": "a"}])

    with pytest.raises(TypeError):
        store.set("current_analysis", {"when": datetime(2024, 1, 1)})

    assert store.get("current_analysis") is None
    assert not (tmp_path / "store.json.tmp").exists()
    store.set("library", [{"term": "b"}])
    reloaded = JsonFileStore(target)
    assert reloaded.get("library") == [{"term": "b"}]
    assert reloaded.get("history") == [{"term": "a"}]


def test_session_store_swallows_serialization_errors(tmp_path: Path) -> None:
    session_store = SessionStore(JsonFileStore(tmp_path / "store.json"))
    bad = AnalysisResult(term="when", context="ctx", sections={"when": datetime(2024, 1, 1)})
    good = AnalysisResult(term="fine", context="ctx", sections={"definition": "ok"})

    assert session_store.add_to_library(bad) is False
    assert session_store.add_to_library(good) is True
    assert [item.term for item in session_store.library()] == ["fine"]
