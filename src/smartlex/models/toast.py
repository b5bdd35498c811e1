# -*- coding: utf-8 -*-
"""Toast severities."""

from __future__ import annotations

from enum import Enum


class Severity(str, Enum):
    INFO = "info"
    SUCCESS = "success"
    ERROR = "error"
