# -*- coding: utf-8 -*-
"""View transitions and breadcrumb tracking."""

from __future__ import annotations

import logging

from smartlex.core.labels import text
from smartlex.core.state import AppState, StateSnapshot
from smartlex.core.store import SessionStore
from smartlex.models.analysis_result import AnalysisResult
from smartlex.models.view import BreadcrumbInfo, Origin, View

logger = logging.getLogger(__name__)


class ViewController:
    """Own every write to the current view, previous view and breadcrumb."""

    def __init__(self, state: AppState, session_store: SessionStore | None = None) -> None:
        self._state = state
        self._session_store = session_store

    @property
    def current_view(self) -> View:
        return self._state.snapshot().current_view

    def snapshot(self) -> StateSnapshot:
        return self._state.snapshot()

    def navigate(self, view: View) -> View:
        if view is View.ANALYSIS_RESULT:
            raise ValueError("Use navigate_to_analysis() to show a result")
        with self._state.mutate() as state:
            self._switch(state, view)
        return view

    def navigate_to_analysis(self, result: AnalysisResult, origin_view: View | Origin) -> None:
        """Show ``result`` with a breadcrumb back to ``origin_view``."""
        origin = origin_view if isinstance(origin_view, Origin) else Origin.from_view(origin_view)
        with self._state.mutate() as state:
            state.current_analysis = result
            # breadcrumb before view
            state.breadcrumb = self.breadcrumb_for(origin)
            self._switch(state, View.ANALYSIS_RESULT)
        if self._session_store is not None:
            self._session_store.save_current(self._state)

    def close(self, fallback_view: View = View.HOME) -> View:
        """Go back to the view shown before the current one."""
        with self._state.mutate() as state:
            target = state.previous_view
            if target is state.current_view or (target is View.ANALYSIS_RESULT and state.current_analysis is None):
                target = fallback_view
            self._switch(state, target)
        return target

    def return_to_breadcrumb_origin(self) -> View:
        with self._state.mutate() as state:
            target = state.require_breadcrumb().origin_view
            self._switch(state, target)
        return target

    def breadcrumb_for(self, origin: Origin) -> BreadcrumbInfo:
        return BreadcrumbInfo(label=text(origin.label_key, self._state.language), origin_view=origin.view)

    @staticmethod
    def _switch(state: AppState, view: View) -> None:
        if view is state.current_view:
            return
        logger.debug("View %s -> %s", state.current_view.name, view.name)
        state.previous_view = state.current_view
        state.current_view = view
