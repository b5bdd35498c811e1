# -*- coding: utf-8 -*-
"""Notification services that do not need a GUI."""

from __future__ import annotations

import logging

from smartlex.core.errors import NotificationPermissionDenied

logger = logging.getLogger(__name__)


class LogNotifier:
    """Write notifications to the log; used by the CLI."""

    def __init__(self, granted: bool = True) -> None:
        self._granted = granted
        self.sent: list[tuple[str, str]] = []

    def request_permission(self) -> bool:
        return self._granted

    def notify(self, title: str, body: str) -> None:
        if not self._granted:
            raise NotificationPermissionDenied(title)
        self.sent.append((title, body))
        logger.info("Notification: %s - %s", title, body)
