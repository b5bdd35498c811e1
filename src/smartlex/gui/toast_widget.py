# -*- coding: utf-8 -*-
"""Ephemeral in-window feedback messages."""

from __future__ import annotations

from PyQt6.QtCore import Qt, QTimer
from PyQt6.QtWidgets import QLabel, QWidget

from smartlex.models.toast import Severity


_STYLES = {
    Severity.INFO: "background:#1f2937;color:#f9fafb;",
    Severity.SUCCESS: "background:#15803d;color:#f0fdf4;",
    Severity.ERROR: "background:#b91c1c;color:#fef2f2;",
}


class ToastWidget(QLabel):
    """Floating label at the bottom of its parent that hides itself."""

    def __init__(self, parent: QWidget, duration_ms: int = 3000) -> None:
        super().__init__(parent)
        self.setObjectName("toast")
        self.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.setWordWrap(True)
        self.severity = Severity.INFO
        self._timer = QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.setInterval(duration_ms)
        self._timer.timeout.connect(self.hide)
        self.hide()

    def show_message(self, message: str, severity: Severity = Severity.INFO) -> None:
        self.severity = severity
        self.setText(message)
        self.setStyleSheet(_STYLES[severity] + "border-radius:8px;padding:10px 16px;font-weight:600;")
        self._place()
        self.show()
        self.raise_()
        self._timer.start()

    def _place(self) -> None:
        parent = self.parentWidget()
        if parent is None:
            return
        width = min(420, max(200, parent.width() - 40))
        self.setFixedWidth(width)
        self.adjustSize()
        self.move((parent.width() - width) // 2, parent.height() - self.height() - 24)
