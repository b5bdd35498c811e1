# -*- coding: utf-8 -*-
"""Shared pytest fixtures."""

from __future__ import annotations

import base64
import os
import sys
import threading
from pathlib import Path

import pytest


SRC_DIR = Path(__file__).resolve().parents[1] / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


PNG_1X1_BYTES = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAQAAAC1HAwCAAAAC0lEQVR42mP8/x8AAwMCAO7+fJ8AAAAASUVORK5CYII="
)


class FakeAnalysisService:
    """Returns a canned result, raises a queued error, or blocks until released."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, str, str | None]] = []
        self.error: Exception | None = None
        self.gate: threading.Event | None = None
        self.started = threading.Event()

    def analyze(self, term: str, context: str, image_data: str | None = None):
        from smartlex.models.analysis_result import AnalysisResult

        self.calls.append((term, context, image_data))
        self.started.set()
        if self.gate is not None:
            self.gate.wait(2.0)
        if self.error is not None:
            raise self.error
        return AnalysisResult(
            term=term,
            context=context,
            sections={"definition": f"meaning of {term}"},
            model="fake",
            has_image=image_data is not None,
        )


class FakeToasts:
    def __init__(self) -> None:
        self.shown: list[tuple[str, object]] = []

    def show(self, message: str, severity=None) -> None:
        self.shown.append((message, severity))


class FakeNotifier:
    def __init__(self, granted: bool = True) -> None:
        self.granted = granted
        self.permission_requests = 0
        self.sent: list[tuple[str, str]] = []

    def request_permission(self) -> bool:
        self.permission_requests += 1
        return self.granted

    def notify(self, title: str, body: str) -> None:
        from smartlex.core.errors import NotificationPermissionDenied

        if not self.granted:
            raise NotificationPermissionDenied(title)
        self.sent.append((title, body))


@pytest.fixture
def fake_service() -> FakeAnalysisService:
    return FakeAnalysisService()


@pytest.fixture
def toasts() -> FakeToasts:
    return FakeToasts()


@pytest.fixture
def notifier() -> FakeNotifier:
    return FakeNotifier()


@pytest.fixture
def default_config() -> dict:
    from smartlex.config import get_default_config

    return get_default_config()


@pytest.fixture
def make_result():
    from smartlex.models.analysis_result import AnalysisResult

    def _make(term: str = "Silver Lining", context: str = "It's a silver lining in a dark cloud.") -> AnalysisResult:
        return AnalysisResult(term=term, context=context, sections={"definition": "hope"})

    return _make


@pytest.fixture
def sample_png(tmp_path: Path) -> Path:
    path = tmp_path / "context.png"
    path.write_bytes(PNG_1X1_BYTES)
    return path


@pytest.fixture
def qt_app():
    pytest.importorskip("PyQt6")
    from PyQt6.QtWidgets import QApplication

    app = QApplication.instance() or QApplication([])
    yield app
