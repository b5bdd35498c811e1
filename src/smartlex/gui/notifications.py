# -*- coding: utf-8 -*-
"""Desktop notifications through the system tray."""

from __future__ import annotations

import logging

from PyQt6.QtGui import QIcon
from PyQt6.QtWidgets import QApplication, QStyle, QSystemTrayIcon, QWidget

from smartlex.core.errors import NotificationPermissionDenied

logger = logging.getLogger(__name__)


class TrayNotifier:
    """Show balloon messages; permission means the tray supports them."""

    def __init__(self, parent: QWidget | None = None, icon: QIcon | None = None) -> None:
        self._parent = parent
        self._icon = icon
        self._tray: QSystemTrayIcon | None = None
        self._granted = False

    def request_permission(self) -> bool:
        if self._tray is not None:
            return self._granted
        self._granted = QSystemTrayIcon.isSystemTrayAvailable() and QSystemTrayIcon.supportsMessages()
        if self._granted:
            icon = self._icon
            if icon is None:
                style = self._parent.style() if self._parent is not None else QApplication.style()
                icon = style.standardIcon(QStyle.StandardPixmap.SP_MessageBoxInformation)
            self._tray = QSystemTrayIcon(icon, self._parent)
            self._tray.show()
        else:
            logger.info("System tray messages unavailable, notifications disabled")
        return self._granted

    def notify(self, title: str, body: str) -> None:
        if not self._granted or self._tray is None:
            raise NotificationPermissionDenied(title)
        self._tray.showMessage(title, body, QSystemTrayIcon.MessageIcon.Information, 4000)
