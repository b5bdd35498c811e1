# -*- coding: utf-8 -*-
"""Application entry point."""

from __future__ import annotations

import logging
import os
import sys
import traceback
from pathlib import Path

from PyQt6.QtWidgets import QApplication, QMessageBox

from smartlex.config import ConfigError, get_default_config, load_config
from smartlex.constants import APP_NAME
from smartlex.gui.controller import AppController
from smartlex.gui.main_window import MainWindow
from smartlex.gui.notifications import TrayNotifier
from smartlex.utils.logger import setup_session_logging


def global_exception_handler(exc_type, exc_value, exc_traceback):
    """Log fatal errors and keep a copy in logs/LAST_CRASH.log."""
    error_msg = "".join(traceback.format_exception(exc_type, exc_value, exc_traceback))
    logging.getLogger().critical("FATAL CRASH:\n%s", error_msg)

    crash_path = Path.cwd() / "logs" / "LAST_CRASH.log"
    crash_path.parent.mkdir(parents=True, exist_ok=True)
    crash_path.write_text(error_msg, encoding="utf-8")

    if QApplication.instance():
        QMessageBox.critical(None, "Application Crash", f"A fatal error occurred.\nDetails saved to: {crash_path}")

    sys.__excepthook__(exc_type, exc_value, exc_traceback)


def main() -> int:
    """Start the GUI application."""
    sys.excepthook = global_exception_handler
    base_dir = Path.cwd()
    setup_session_logging(base_dir, APP_NAME)
    logger = logging.getLogger(__name__)
    app = QApplication(sys.argv)

    try:
        settings = load_config(base_dir / "settings.json", environ=dict(os.environ))
    except ConfigError as exc:
        logger.error("Invalid settings.json, using defaults: %s", exc)
        QMessageBox.warning(None, "Settings", f"settings.json is invalid and was ignored:\n{exc}")
        settings = get_default_config()

    controller = AppController(settings, notifier=TrayNotifier(), base_dir=base_dir)
    window = MainWindow(controller, settings)
    window.show()
    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
