# -*- coding: utf-8 -*-
"""Application state container shared by the view controller and the orchestrator."""

from __future__ import annotations

import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field

from smartlex.core.history_cache import HistoryCache
from smartlex.core.labels import DEFAULT_LANGUAGE, text
from smartlex.models.analysis_result import AnalysisResult
from smartlex.models.view import BreadcrumbInfo, Origin, View


@dataclass(frozen=True)
class StateSnapshot:
    """Consistent, read-only copy of the app state at one instant."""

    current_view: View
    previous_view: View
    breadcrumb: BreadcrumbInfo
    current_analysis: AnalysisResult | None
    is_analyzing: bool
    history: tuple[AnalysisResult, ...]


StateListener = Callable[[StateSnapshot], None]


@dataclass
class AppState:
    """Mutable app state passed by reference to its writers.

    Only ViewController and AnalysisOrchestrator write to it, always inside
    ``mutate()``; readers use ``snapshot()``.
    """

    history: HistoryCache = field(default_factory=HistoryCache)
    language: str = DEFAULT_LANGUAGE
    current_view: View = View.HOME
    previous_view: View = View.HOME
    breadcrumb: BreadcrumbInfo | None = None
    current_analysis: AnalysisResult | None = None
    is_analyzing: bool = False
    _lock: threading.RLock = field(default_factory=threading.RLock, init=False, repr=False, compare=False)
    _depth: int = field(default=0, init=False, repr=False, compare=False)
    _listeners: list[StateListener] = field(default_factory=list, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.breadcrumb is None:
            self.breadcrumb = BreadcrumbInfo(text(Origin.HISTORY.label_key, self.language), View.HISTORY)

    @contextmanager
    def mutate(self) -> Iterator["AppState"]:
        """Hold the state lock for one atomic transition, then notify listeners once."""
        with self._lock:
            self._depth += 1
            try:
                yield self
            finally:
                self._depth -= 1
            snapshot = self.snapshot() if self._depth == 0 else None
        if snapshot is not None:
            for listener in list(self._listeners):
                listener(snapshot)

    def snapshot(self) -> StateSnapshot:
        with self._lock:
            return StateSnapshot(
                current_view=self.current_view,
                previous_view=self.previous_view,
                breadcrumb=self.require_breadcrumb(),
                current_analysis=self.current_analysis,
                is_analyzing=self.is_analyzing,
                history=self.history.list(),
            )

    def require_breadcrumb(self) -> BreadcrumbInfo:
        if self.breadcrumb is None:
            raise RuntimeError("AppState.breadcrumb was cleared")
        return self.breadcrumb

    def add_listener(self, listener: StateListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: StateListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)
