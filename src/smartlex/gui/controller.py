# -*- coding: utf-8 -*-
"""Application controller bridging the core session and the Qt widgets."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from PyQt6.QtCore import QObject, pyqtSignal

from smartlex.core.labels import text
from smartlex.core.orchestrator import AnalysisService, NotificationService
from smartlex.core.session import build_session
from smartlex.core.state import StateSnapshot
from smartlex.core.store import PersistentStore
from smartlex.gui.dispatcher import QtDispatcher
from smartlex.models.analysis_result import AnalysisResult
from smartlex.models.toast import Severity
from smartlex.models.view import View

logger = logging.getLogger(__name__)


class AppController(QObject):
    """
    Central controller for the window.
    Routes user commands to the view controller and orchestrator and
    re-emits state changes as Qt signals.
    """
    state_changed = pyqtSignal(object)
    toast_requested = pyqtSignal(str, object)
    pin_changed = pyqtSignal(bool)

    def __init__(
        self,
        settings: dict[str, Any],
        *,
        service: AnalysisService | None = None,
        notifier: NotificationService | None = None,
        store: PersistentStore | None = None,
        base_dir: Path | None = None,
    ) -> None:
        super().__init__()
        self.settings = settings
        self.language = str(settings.get("ui", {}).get("language", "zh"))
        self.pinned = bool(settings.get("ui", {}).get("start_pinned", False))
        self.dispatcher = QtDispatcher(self)
        self.session = build_session(
            settings,
            toasts=self,
            service=service,
            notifier=notifier,
            store=store,
            dispatcher=self.dispatcher,
            base_dir=base_dir,
        )
        self.session.state.add_listener(self._on_state_changed)

    def snapshot(self) -> StateSnapshot:
        return self.session.state.snapshot()

    def show(self, message: str, severity: Severity = Severity.INFO) -> None:
        """ToastService entry point; the window renders the toast."""
        self.toast_requested.emit(message, severity)

    def go_to(self, view: View) -> None:
        self.session.views.navigate(view)

    def submit_analysis(self, term: str, context: str, image_data: str | None = None) -> bool:
        future = self.session.orchestrator.submit(term, context, image_data, origin=View.HOME)
        return future is not None

    def select_history_item(self, result: AnalysisResult) -> None:
        self.session.views.navigate_to_analysis(result, View.HISTORY)

    def select_library_item(self, result: AnalysisResult) -> None:
        self.session.views.navigate_to_analysis(result, View.LIBRARY)

    def dismiss_overlay(self) -> None:
        self.session.views.close(View.HOME)

    def return_to_breadcrumb(self) -> None:
        self.session.views.return_to_breadcrumb_origin()

    def library_items(self) -> list[AnalysisResult]:
        return self.session.session_store.library()

    def save_current_to_library(self) -> bool:
        current = self.snapshot().current_analysis
        if current is None:
            return False
        added = self.session.session_store.add_to_library(current)
        if added:
            self.show(text("toast.saved_to_library", self.language), Severity.SUCCESS)
        return added

    def toggle_pin(self) -> None:
        self.pinned = not self.pinned
        self.show(text("toast.pinned" if self.pinned else "toast.unpinned", self.language), Severity.INFO)
        self.pin_changed.emit(self.pinned)

    def shutdown(self) -> None:
        self.session.state.remove_listener(self._on_state_changed)
        self.session.orchestrator.shutdown(wait_for_tasks=False)

    def _on_state_changed(self, snapshot: StateSnapshot) -> None:
        self.state_changed.emit(snapshot)
