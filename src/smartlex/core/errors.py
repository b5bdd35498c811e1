# -*- coding: utf-8 -*-
"""Error kinds raised by the analysis and notification collaborators."""

from __future__ import annotations


class AnalysisError(Exception):
    """Base class for failures surfaced by an analysis service."""

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message


class NetworkError(AnalysisError):
    """The analysis service could not be reached."""


class ServiceError(AnalysisError):
    """The analysis service answered with an error."""


class ValidationError(AnalysisError):
    """The request is missing a term or a context."""


class NotificationPermissionDenied(Exception):
    """OS notifications are not permitted in this session."""
