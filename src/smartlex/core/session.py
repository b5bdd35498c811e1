# -*- coding: utf-8 -*-
"""Wire the core objects for one application session."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from smartlex.config import api_key
from smartlex.constants import HISTORY_CAPACITY
from smartlex.core.history_cache import HistoryCache
from smartlex.core.orchestrator import (
    AnalysisOrchestrator,
    AnalysisService,
    Dispatcher,
    NotificationService,
    ToastService,
)
from smartlex.core.state import AppState
from smartlex.core.store import JsonFileStore, PersistentStore, SessionStore
from smartlex.core.view_controller import ViewController
from smartlex.integrations.gemini_client import GeminiClient

logger = logging.getLogger(__name__)


@dataclass
class CoreSession:
    state: AppState
    views: ViewController
    orchestrator: AnalysisOrchestrator
    session_store: SessionStore


def build_service(settings: dict[str, Any]) -> GeminiClient:
    analysis = settings.get("analysis", {})
    return GeminiClient(
        api_key=api_key(settings, "gemini"),
        model=str(analysis.get("model", "gemini_flash")),
        timeout=float(analysis.get("timeout_seconds", 60)),
    )


def build_session(
    settings: dict[str, Any],
    *,
    toasts: ToastService,
    service: AnalysisService | None = None,
    notifier: NotificationService | None = None,
    store: PersistentStore | None = None,
    dispatcher: Dispatcher | None = None,
    base_dir: str | Path | None = None,
) -> CoreSession:
    """Create state, controllers and orchestrator, restoring the persisted session."""
    if store is None:
        store_path = Path(str(settings.get("storage", {}).get("path")))
        if not store_path.is_absolute() and base_dir is not None:
            store_path = Path(base_dir) / store_path
        store = JsonFileStore(store_path)

    capacity = int(settings.get("history", {}).get("capacity", HISTORY_CAPACITY))
    state = AppState(
        history=HistoryCache(capacity),
        language=str(settings.get("ui", {}).get("language", "zh")),
    )
    session_store = SessionStore(store)
    session_store.restore(state)

    if notifier is not None and settings.get("notifications", {}).get("enabled", True):
        granted = notifier.request_permission()
        logger.info("Notification permission %s", "granted" if granted else "denied")
    elif notifier is not None:
        notifier = None

    views = ViewController(state, session_store)
    orchestrator = AnalysisOrchestrator(
        state,
        views,
        service if service is not None else build_service(settings),
        toasts,
        notifier=notifier,
        session_store=session_store,
        dispatcher=dispatcher,
    )
    return CoreSession(state=state, views=views, orchestrator=orchestrator, session_store=session_store)
