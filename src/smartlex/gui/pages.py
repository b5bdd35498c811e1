# -*- coding: utf-8 -*-
"""One page widget per top-level view."""

from __future__ import annotations

import html
import logging
from pathlib import Path
from typing import Any

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtWidgets import (
    QFileDialog,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QListWidget,
    QListWidgetItem,
    QPlainTextEdit,
    QPushButton,
    QTextBrowser,
    QVBoxLayout,
    QWidget,
)

from smartlex.config import api_key
from smartlex.core.labels import text
from smartlex.models.analysis_request import AnalysisRequest
from smartlex.models.analysis_result import AnalysisResult
from smartlex.models.view import BreadcrumbInfo
from smartlex.utils.image_utils import file_to_data_url

logger = logging.getLogger(__name__)


class HomePage(QWidget):
    """Analysis station: term, context and an optional image."""

    analyze_requested = pyqtSignal(str, str, object)
    history_requested = pyqtSignal()

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.image_data: str | None = None
        self._busy = False

        self.title_label = QLabel("DEEP ANALYSIS")
        self.title_label.setObjectName("appTitle")
        self.term_input = QLineEdit()
        self.term_input.setPlaceholderText("Silver Lining...")
        self.context_input = QPlainTextEdit()
        self.context_input.setPlaceholderText("It's a silver lining in a dark cloud.")
        self.image_label = QLabel("")
        self.image_label.setObjectName("mutedText")
        self.attach_button = QPushButton("Attach image")
        self.clear_image_button = QPushButton("Remove image")
        self.analyze_button = QPushButton("Analyze")
        self.analyze_button.setObjectName("primaryButton")
        self.history_button = QPushButton("History")

        image_row = QHBoxLayout()
        image_row.addWidget(self.attach_button)
        image_row.addWidget(self.clear_image_button)
        image_row.addWidget(self.image_label, 1)

        action_row = QHBoxLayout()
        action_row.addWidget(self.history_button)
        action_row.addStretch(1)
        action_row.addWidget(self.analyze_button)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(24, 24, 24, 24)
        layout.setSpacing(12)
        layout.addWidget(self.title_label)
        layout.addWidget(self.term_input)
        layout.addWidget(self.context_input, 1)
        layout.addLayout(image_row)
        layout.addLayout(action_row)

        self.term_input.textChanged.connect(self._refresh_button)
        self.context_input.textChanged.connect(self._refresh_button)
        self.attach_button.clicked.connect(self._choose_image)
        self.clear_image_button.clicked.connect(self.clear_image)
        self.analyze_button.clicked.connect(self._emit_analyze)
        self.history_button.clicked.connect(self.history_requested.emit)
        self._refresh_button()

    def set_busy(self, busy: bool) -> None:
        self._busy = busy
        self.analyze_button.setText("Analyzing..." if busy else "Analyze")
        self._refresh_button()

    def set_image_file(self, path: Path) -> None:
        self.image_data = file_to_data_url(path)
        self.image_label.setText(path.name)
        self._refresh_button()

    def clear_image(self) -> None:
        self.image_data = None
        self.image_label.setText("")
        self._refresh_button()

    def _current_request(self) -> AnalysisRequest:
        return AnalysisRequest(
            term=self.term_input.text(),
            context=self.context_input.toPlainText(),
            image_data=self.image_data,
        )

    def _refresh_button(self) -> None:
        self.analyze_button.setEnabled(not self._busy and self._current_request().is_valid())
        self.clear_image_button.setEnabled(self.image_data is not None)

    def _choose_image(self) -> None:
        path, _ = QFileDialog.getOpenFileName(self, "Attach image", "", "Images (*.png *.jpg *.jpeg *.webp)")
        if path:
            self.set_image_file(Path(path))

    def _emit_analyze(self) -> None:
        request = self._current_request()
        if self._busy or not request.is_valid():
            return
        self.analyze_requested.emit(request.term.strip(), request.context.strip(), request.image_data)


class _ResultListPage(QWidget):
    """List of analysis results; clicking a row selects it."""

    item_selected = pyqtSignal(object)
    close_requested = pyqtSignal()

    def __init__(self, title: str, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.title_label = QLabel(title)
        self.title_label.setObjectName("sectionTitle")
        self.close_button = QPushButton("Close")
        self.empty_label = QLabel("Nothing here yet.")
        self.empty_label.setObjectName("mutedText")
        self.list_widget = QListWidget()

        header = QHBoxLayout()
        header.addWidget(self.title_label, 1)
        header.addWidget(self.close_button)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(24, 24, 24, 24)
        layout.addLayout(header)
        layout.addWidget(self.empty_label)
        layout.addWidget(self.list_widget, 1)

        self.list_widget.itemClicked.connect(self._on_item_clicked)
        self.close_button.clicked.connect(self.close_requested.emit)

    def set_results(self, results: tuple[AnalysisResult, ...] | list[AnalysisResult]) -> None:
        self.list_widget.clear()
        for result in results:
            item = QListWidgetItem(f"{result.term}  -  {result.created_at}")
            item.setData(Qt.ItemDataRole.UserRole, result)
            self.list_widget.addItem(item)
        self.empty_label.setVisible(not results)

    def _on_item_clicked(self, item: QListWidgetItem) -> None:
        result = item.data(Qt.ItemDataRole.UserRole)
        if isinstance(result, AnalysisResult):
            self.item_selected.emit(result)


class HistoryPage(_ResultListPage):
    def __init__(self, language: str, parent: QWidget | None = None) -> None:
        super().__init__(text("label.history", language), parent)


class LibraryPage(_ResultListPage):
    history_requested = pyqtSignal()

    def __init__(self, language: str, parent: QWidget | None = None) -> None:
        super().__init__(text("label.library", language), parent)
        self.close_button.setText(text("label.history", language))
        self.close_button.clicked.disconnect()
        self.close_button.clicked.connect(self.history_requested.emit)


class SettingsPage(QWidget):
    """Read-only summary of the active settings."""

    def __init__(self, settings: dict[str, Any], language: str, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        title = QLabel(text("label.settings", language))
        title.setObjectName("sectionTitle")
        key_state = "set" if api_key(settings, "gemini") else "missing"
        lines = [
            f"Gemini API key: {key_state}",
            f"Model: {settings.get('analysis', {}).get('model', '')}",
            f"History capacity: {settings.get('history', {}).get('capacity', '')}",
            f"Language: {language}",
            f"Store: {settings.get('storage', {}).get('path', '')}",
        ]
        body = QLabel("\n".join(lines))
        body.setObjectName("mutedText")
        layout = QVBoxLayout(self)
        layout.setContentsMargins(24, 24, 24, 24)
        layout.addWidget(title)
        layout.addWidget(body)
        layout.addStretch(1)


class ResultPage(QWidget):
    """Show the current analysis with a breadcrumb back to its origin."""

    breadcrumb_clicked = pyqtSignal()
    history_requested = pyqtSignal()
    save_requested = pyqtSignal()

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.breadcrumb_button = QPushButton("")
        self.breadcrumb_button.setFlat(True)
        self.history_button = QPushButton("History")
        self.save_button = QPushButton("Save to library")
        self.term_label = QLabel("")
        self.term_label.setObjectName("appTitle")
        self.body = QTextBrowser()

        header = QHBoxLayout()
        header.addWidget(self.breadcrumb_button)
        header.addStretch(1)
        header.addWidget(self.save_button)
        header.addWidget(self.history_button)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(24, 24, 24, 24)
        layout.addLayout(header)
        layout.addWidget(self.term_label)
        layout.addWidget(self.body, 1)

        self.breadcrumb_button.clicked.connect(self.breadcrumb_clicked.emit)
        self.history_button.clicked.connect(self.history_requested.emit)
        self.save_button.clicked.connect(self.save_requested.emit)

    def set_content(self, result: AnalysisResult | None, breadcrumb: BreadcrumbInfo) -> None:
        self.breadcrumb_button.setText(f"< {breadcrumb.label}")
        if result is None:
            self.term_label.setText("")
            self.body.setHtml("")
            return
        self.term_label.setText(result.term)
        parts = [f"<p><i>{html.escape(result.context)}</i></p>"]
        for key, value in result.sections.items():
            if isinstance(value, list):
                rendered = "".join(f"<li>{html.escape(str(item))}</li>" for item in value)
                parts.append(f"<h3>{html.escape(key)}</h3><ul>{rendered}</ul>")
            else:
                parts.append(f"<h3>{html.escape(key)}</h3><p>{html.escape(str(value))}</p>")
        self.body.setHtml("".join(parts))
