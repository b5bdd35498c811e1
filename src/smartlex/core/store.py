# -*- coding: utf-8 -*-
"""Cross-session persistence of history and the current analysis."""

from __future__ import annotations

import logging
import threading
from copy import deepcopy
from pathlib import Path
from typing import Any, Protocol

from smartlex.constants import STORE_KEY_CURRENT, STORE_KEY_HISTORY, STORE_KEY_LIBRARY
from smartlex.core.state import AppState
from smartlex.models.analysis_result import AnalysisResult
from smartlex.utils.file_utils import read_json_file, write_json_file

logger = logging.getLogger(__name__)


class PersistentStore(Protocol):
    """Key/value store with get/set semantics."""

    def get(self, key: str, default: Any = None) -> Any: ...

    def set(self, key: str, value: Any) -> None: ...


class MemoryStore:
    """In-process store, used for tests and throwaway sessions."""

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = deepcopy(data or {})

    def get(self, key: str, default: Any = None) -> Any:
        return deepcopy(self._data.get(key, default))

    def set(self, key: str, value: Any) -> None:
        self._data[key] = deepcopy(value)


class JsonFileStore:
    """Store every key in one JSON object on disk."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._lock = threading.Lock()
        self._data = self._load()

    def _load(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            return read_json_file(self.path)
        except ValueError as exc:
            # json.JSONDecodeError is a ValueError too
            logger.warning("Ignoring unreadable store %s: %s", self.path, exc)
            return {}

    def get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            return deepcopy(self._data.get(key, default))

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            updated = {**self._data, key: deepcopy(value)}
            write_json_file(self.path, updated)
            self._data = updated


def _decode_results(raw: Any) -> list[AnalysisResult]:
    if not isinstance(raw, list):
        return []
    return [AnalysisResult.from_dict(item) for item in raw if isinstance(item, dict)]


class SessionStore:
    """Restore and save the persisted parts of AppState."""

    def __init__(self, backend: PersistentStore) -> None:
        self.backend = backend

    def restore(self, state: AppState) -> None:
        history = _decode_results(self.backend.get(STORE_KEY_HISTORY, []))
        current_raw = self.backend.get(STORE_KEY_CURRENT)
        current = AnalysisResult.from_dict(current_raw) if isinstance(current_raw, dict) else None
        with state.mutate():
            state.history.replace(history)
            state.current_analysis = current
        logger.info("Restored session: %d history entries, current=%s", len(state.history), bool(current))

    def save_history(self, state: AppState) -> None:
        self._write(STORE_KEY_HISTORY, [item.to_dict() for item in state.history.list()])

    def save_current(self, state: AppState) -> None:
        current = state.current_analysis
        self._write(STORE_KEY_CURRENT, current.to_dict() if current is not None else None)

    def library(self) -> list[AnalysisResult]:
        return _decode_results(self.backend.get(STORE_KEY_LIBRARY, []))

    def add_to_library(self, result: AnalysisResult) -> bool:
        """Prepend a result to the library; False if its id is already there or the write failed."""
        items = self.library()
        if any(item.id == result.id for item in items):
            return False
        items.insert(0, result)
        return self._write(STORE_KEY_LIBRARY, [item.to_dict() for item in items])

    def _write(self, key: str, value: Any) -> bool:
        try:
            self.backend.set(key, value)
        except (OSError, TypeError, ValueError):
            logger.exception("Could not persist %s", key)
            return False
        return True
