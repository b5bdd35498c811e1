# -*- coding: utf-8 -*-
"""Run callables on the thread that owns the dispatcher (the GUI thread)."""

from __future__ import annotations

from collections.abc import Callable

from PyQt6.QtCore import QObject, Qt, pyqtSignal


class QtDispatcher(QObject):
    """Queue callables from worker threads onto this object's thread."""

    _invoke = pyqtSignal(object)

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._invoke.connect(self._run, Qt.ConnectionType.QueuedConnection)

    def __call__(self, callback: Callable[[], None]) -> None:
        self._invoke.emit(callback)

    def _run(self, callback: Callable[[], None]) -> None:
        callback()
