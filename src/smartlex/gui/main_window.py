# -*- coding: utf-8 -*-
"""Main window: sidebar, header and one stacked page per view."""

from __future__ import annotations

import logging
from typing import Any

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QGuiApplication, QKeySequence, QShortcut
from PyQt6.QtWidgets import (
    QFrame,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from smartlex.constants import APP_NAME, APP_VERSION, COMPACT_WIDTH
from smartlex.core.labels import text
from smartlex.core.state import StateSnapshot
from smartlex.gui.controller import AppController
from smartlex.gui.pages import HistoryPage, HomePage, LibraryPage, ResultPage, SettingsPage
from smartlex.gui.toast_widget import ToastWidget
from smartlex.models.toast import Severity
from smartlex.models.view import View

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Render the app state; every user command goes through the controller."""

    def __init__(self, controller: AppController, settings: dict[str, Any], parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.controller = controller
        self.settings = settings
        self.language = controller.language
        self.compact_mode = False

        self.setWindowTitle(f"{APP_NAME} v{APP_VERSION}")
        self.resize(1280, 820)

        self._build_ui()
        self._bind_hotkeys()

        controller.state_changed.connect(self.render_state)
        controller.toast_requested.connect(self._show_toast)
        controller.pin_changed.connect(self._apply_pin)

        compact_width = int(settings.get("ui", {}).get("compact_width", COMPACT_WIDTH))
        screen = QGuiApplication.primaryScreen()
        if screen is not None and screen.availableGeometry().width() < compact_width:
            self.set_compact_mode(True)
        self._apply_pin(controller.pinned)
        self.render_state(controller.snapshot())

    def _build_ui(self) -> None:
        self.sidebar = QFrame()
        self.sidebar.setObjectName("sidebar")
        sidebar_layout = QVBoxLayout(self.sidebar)
        sidebar_layout.setContentsMargins(12, 12, 12, 12)
        self.nav_buttons: dict[View, QPushButton] = {}
        for view in (View.HOME, View.HISTORY, View.LIBRARY, View.SETTINGS):
            button = QPushButton(text(f"label.{view.value}", self.language))
            button.setCheckable(True)
            button.clicked.connect(lambda _checked=False, target=view: self.controller.go_to(target))
            sidebar_layout.addWidget(button)
            self.nav_buttons[view] = button
        sidebar_layout.addStretch(1)

        header = QWidget()
        header_layout = QHBoxLayout(header)
        header_layout.setContentsMargins(12, 4, 12, 4)
        self.brand_button = QPushButton("SmartLex Core")
        self.brand_button.setFlat(True)
        self.brand_button.clicked.connect(lambda: self.controller.go_to(View.HOME))
        self.status_label = QLabel("")
        self.status_label.setObjectName("mutedText")
        self.pin_button = QPushButton("Pin")
        self.pin_button.setCheckable(True)
        self.pin_button.clicked.connect(self.controller.toggle_pin)
        self.compact_button = QPushButton("Compact")
        self.compact_button.setCheckable(True)
        self.compact_button.clicked.connect(lambda: self.set_compact_mode(not self.compact_mode))
        header_layout.addWidget(self.brand_button)
        header_layout.addWidget(self.status_label, 1)
        header_layout.addWidget(self.pin_button)
        header_layout.addWidget(self.compact_button)

        self.home_page = HomePage()
        self.history_page = HistoryPage(self.language)
        self.library_page = LibraryPage(self.language)
        self.settings_page = SettingsPage(self.settings, self.language)
        self.result_page = ResultPage()

        self.stack = QStackedWidget()
        self.pages: dict[View, QWidget] = {
            View.HOME: self.home_page,
            View.HISTORY: self.history_page,
            View.LIBRARY: self.library_page,
            View.SETTINGS: self.settings_page,
            View.ANALYSIS_RESULT: self.result_page,
        }
        for page in self.pages.values():
            self.stack.addWidget(page)

        self.home_page.analyze_requested.connect(self.controller.submit_analysis)
        self.home_page.history_requested.connect(lambda: self.controller.go_to(View.HISTORY))
        self.history_page.item_selected.connect(self.controller.select_history_item)
        self.history_page.close_requested.connect(self.controller.dismiss_overlay)
        self.library_page.item_selected.connect(self.controller.select_library_item)
        self.library_page.history_requested.connect(lambda: self.controller.go_to(View.HISTORY))
        self.result_page.breadcrumb_clicked.connect(self.controller.return_to_breadcrumb)
        self.result_page.history_requested.connect(lambda: self.controller.go_to(View.HISTORY))
        self.result_page.save_requested.connect(self.controller.save_current_to_library)

        main = QWidget()
        main_layout = QVBoxLayout(main)
        main_layout.setContentsMargins(0, 0, 0, 0)
        main_layout.setSpacing(0)
        main_layout.addWidget(header)
        main_layout.addWidget(self.stack, 1)

        central = QWidget()
        central_layout = QHBoxLayout(central)
        central_layout.setContentsMargins(0, 0, 0, 0)
        central_layout.setSpacing(0)
        central_layout.addWidget(self.sidebar)
        central_layout.addWidget(main, 1)
        self.setCentralWidget(central)

        self.toast = ToastWidget(central)

    def _bind_hotkeys(self) -> None:
        escape = QShortcut(QKeySequence(Qt.Key.Key_Escape), self)
        escape.activated.connect(self._on_escape)

    def _on_escape(self) -> None:
        if self.controller.snapshot().current_view is View.HISTORY:
            self.controller.dismiss_overlay()

    def render_state(self, snapshot: StateSnapshot) -> None:
        view = snapshot.current_view
        if view is View.HISTORY:
            self.history_page.set_results(snapshot.history)
        elif view is View.LIBRARY:
            self.library_page.set_results(self.controller.library_items())
        elif view is View.ANALYSIS_RESULT:
            self.result_page.set_content(snapshot.current_analysis, snapshot.breadcrumb)
        self.stack.setCurrentWidget(self.pages[view])
        for nav_view, button in self.nav_buttons.items():
            button.setChecked(nav_view is view)
        self.home_page.set_busy(snapshot.is_analyzing)
        self.status_label.setText("Analyzing..." if snapshot.is_analyzing else "")

    def set_compact_mode(self, compact: bool) -> None:
        self.compact_mode = compact
        self.sidebar.setVisible(not compact)
        self.compact_button.setChecked(compact)

    def _apply_pin(self, pinned: bool) -> None:
        self.pin_button.setChecked(pinned)
        if bool(self.windowFlags() & Qt.WindowType.WindowStaysOnTopHint) == pinned:
            return
        self.setWindowFlag(Qt.WindowType.WindowStaysOnTopHint, pinned)
        if self.isVisible():
            self.show()

    def _show_toast(self, message: str, severity: Severity) -> None:
        self.toast.show_message(message, severity)

    def closeEvent(self, event) -> None:  # noqa: N802
        self.controller.shutdown()
        super().closeEvent(event)
