# -*- coding: utf-8 -*-
"""Root logging setup with per-session log files."""

from __future__ import annotations

import logging
import os
from datetime import datetime
from pathlib import Path


LOG_FORMAT = "%(asctime)s [%(threadName)s] %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"


def get_logger(name: str, log_file: str | Path | None = None, level: int = logging.DEBUG) -> logging.Logger:
    """Return a logger with its own console handler and, optionally, a file handler."""
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    logger.setLevel(level)
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)

    if log_file is not None:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def _env_level(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    level = logging.getLevelName(raw.strip().upper())
    return level if isinstance(level, int) else default


def setup_session_logging(base_dir: str | Path, app_name: str, level: int | None = None) -> Path | None:
    """Configure root logging once: console plus a session log under ``logs/``.

    ``SMARTLEX_LOG_LEVEL`` overrides the default INFO level.
    """
    root = logging.getLogger()
    if getattr(root, "_smartlex_logging_configured", False):
        return getattr(root, "_smartlex_session_log", None)

    level = level if level is not None else _env_level("SMARTLEX_LOG_LEVEL", logging.INFO)
    root.setLevel(level)
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    if not any(isinstance(handler, logging.StreamHandler) for handler in root.handlers):
        stream_handler = logging.StreamHandler()
        stream_handler.setLevel(level)
        stream_handler.setFormatter(formatter)
        root.addHandler(stream_handler)

    logs_dir = Path(base_dir) / "logs"
    safe_app_name = app_name.lower().replace(" ", "-")
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    session_log_path: Path | None = logs_dir / f"{safe_app_name}-{timestamp}.log"
    try:
        logs_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(session_log_path, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)
        root.info("=== %s starting ===", app_name)
        root.info("Session log file established: %s", session_log_path)
    except OSError as e:
        root.error("Failed to establish session log file: %s", e)
        session_log_path = None

    root._smartlex_logging_configured = True  # type: ignore[attr-defined]
    root._smartlex_session_log = session_log_path  # type: ignore[attr-defined]
    return session_log_path
