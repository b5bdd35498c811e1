# -*- coding: utf-8 -*-
"""Bounded, newest-first store of past analysis results."""

from __future__ import annotations

import threading
from collections.abc import Iterable

from smartlex.constants import HISTORY_CAPACITY
from smartlex.models.analysis_result import AnalysisResult


class HistoryCache:
    """Keep at most ``capacity`` results, newest first."""

    def __init__(self, capacity: int = HISTORY_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.capacity = int(capacity)
        self._items: list[AnalysisResult] = []
        self._lock = threading.Lock()

    def insert(self, result: AnalysisResult) -> None:
        """Prepend a result and evict the oldest entries beyond capacity."""
        with self._lock:
            self._items.insert(0, result)
            del self._items[self.capacity:]

    def list(self) -> tuple[AnalysisResult, ...]:
        """Return a read-only snapshot, newest first."""
        with self._lock:
            return tuple(self._items)

    def head(self) -> AnalysisResult | None:
        with self._lock:
            return self._items[0] if self._items else None

    def replace(self, results: Iterable[AnalysisResult]) -> None:
        """Swap in a newest-first sequence, e.g. one restored from disk."""
        items = list(results)[: self.capacity]
        with self._lock:
            self._items = items

    def clear(self) -> None:
        with self._lock:
            self._items = []

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)
