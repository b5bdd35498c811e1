# -*- coding: utf-8 -*-
"""Single-flight orchestration of analysis requests."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from concurrent.futures import Future, ThreadPoolExecutor, wait
from contextlib import contextmanager
from functools import partial
from typing import Protocol

from smartlex.core.errors import AnalysisError, NotificationPermissionDenied, ValidationError
from smartlex.core.labels import text
from smartlex.core.state import AppState
from smartlex.core.store import SessionStore
from smartlex.core.view_controller import ViewController
from smartlex.models.analysis_request import AnalysisRequest
from smartlex.models.analysis_result import AnalysisResult
from smartlex.models.toast import Severity
from smartlex.models.view import Origin, View

logger = logging.getLogger(__name__)


class AnalysisService(Protocol):
    def analyze(self, term: str, context: str, image_data: str | None = None) -> AnalysisResult: ...


class NotificationService(Protocol):
    def request_permission(self) -> bool: ...

    def notify(self, title: str, body: str) -> None: ...


class ToastService(Protocol):
    def show(self, message: str, severity: Severity = Severity.INFO) -> None: ...


Dispatcher = Callable[[Callable[[], None]], None]


def call_now(callback: Callable[[], None]) -> None:
    callback()


class AnalysisOrchestrator:
    """Run at most one analysis at a time and apply its outcome to the app state.

    The service call runs on a single background worker. Its outcome is
    handed to ``dispatcher`` so that every state transition happens on one
    logical thread; the GUI passes a dispatcher that hops onto the Qt main
    thread, headless callers keep the default and complete on the worker.
    """

    def __init__(
        self,
        state: AppState,
        view_controller: ViewController,
        service: AnalysisService,
        toasts: ToastService,
        notifier: NotificationService | None = None,
        session_store: SessionStore | None = None,
        dispatcher: Dispatcher | None = None,
    ) -> None:
        self._state = state
        self._views = view_controller
        self._service = service
        self._toasts = toasts
        self._notifier = notifier
        self._session_store = session_store
        self._dispatch = dispatcher or call_now
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="smartlex-analysis")
        self._futures: list[Future] = []

    @property
    def is_analyzing(self) -> bool:
        return self._state.snapshot().is_analyzing

    def submit(
        self,
        term: str,
        context: str = "",
        image_data: str | None = None,
        origin: View | Origin = View.HOME,
    ) -> Future | None:
        """Start an analysis; return None if the request is invalid, one is already running or the worker is gone."""
        request = AnalysisRequest(term=term, context=context, image_data=image_data)
        try:
            request.validate()
        except ValidationError as exc:
            logger.warning("Rejected analysis request: %s", exc)
            return None

        with self._state.mutate() as state:
            if state.is_analyzing:
                logger.info("Analysis already in flight, ignoring submit for %r", term)
                return None
            state.is_analyzing = True

        resolved = origin if isinstance(origin, Origin) else Origin.from_view(origin)
        try:
            future = self._executor.submit(self._run, request, resolved)
        except RuntimeError:
            # executor already shut down
            with self._in_flight():
                logger.error("Could not schedule analysis of %r", term, exc_info=True)
            return None
        self._futures = [f for f in self._futures if not f.done()] + [future]
        return future

    def _run(self, request: AnalysisRequest, origin: Origin) -> AnalysisResult | None:
        logger.info("Analyzing %r (image=%s)", request.term, bool(request.image_data))
        outcome: AnalysisResult | Exception
        try:
            outcome = self._service.analyze(request.term, request.context, request.image_data)
        except Exception as exc:
            # every service failure ends here, nothing escapes to the session
            outcome = exc
        self._dispatch(partial(self._complete, request, origin, outcome))
        return outcome if isinstance(outcome, AnalysisResult) else None

    @contextmanager
    def _in_flight(self) -> Iterator[None]:
        try:
            yield
        finally:
            with self._state.mutate() as state:
                state.is_analyzing = False

    def _complete(self, request: AnalysisRequest, origin: Origin, outcome: AnalysisResult | Exception) -> None:
        with self._in_flight():
            if isinstance(outcome, AnalysisResult):
                self._on_success(request, origin, outcome)
            else:
                self._on_failure(request, outcome)

    def _on_success(self, request: AnalysisRequest, origin: Origin, result: AnalysisResult) -> None:
        with self._state.mutate() as state:
            state.history.insert(result)
            self._views.navigate_to_analysis(result, origin)
        if self._session_store is not None:
            self._session_store.save_history(self._state)
        logger.info("Analysis of %r finished (%s)", request.term, result.id)

        language = self._state.language
        self._send_notification(
            text("notify.title", language),
            text("notify.body", language, term=request.term),
        )
        self._toasts.show(text("toast.success", language), Severity.SUCCESS)

    def _on_failure(self, request: AnalysisRequest, error: Exception) -> None:
        if isinstance(error, ValidationError):
            logger.warning("Analysis service rejected %r: %s", request.term, error)
            return
        if isinstance(error, AnalysisError):
            logger.warning("Analysis of %r failed: %s: %s", request.term, type(error).__name__, error.message)
            message = error.message
        else:
            logger.error("Analysis of %r failed unexpectedly", request.term, exc_info=error)
            message = str(error)
        self._toasts.show(message or text("toast.failure", self._state.language), Severity.ERROR)

    def _send_notification(self, title: str, body: str) -> None:
        if self._notifier is None:
            return
        try:
            self._notifier.notify(title, body)
        except NotificationPermissionDenied:
            logger.debug("Notification skipped, permission denied")
        except Exception:
            logger.warning("Notification failed", exc_info=True)

    def wait_idle(self, timeout: float | None = None) -> None:
        futures = [f for f in self._futures if not f.done()]
        if futures:
            wait(futures, timeout=timeout)

    def shutdown(self, wait_for_tasks: bool = True) -> None:
        self._executor.shutdown(wait=wait_for_tasks, cancel_futures=False)
