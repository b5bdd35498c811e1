# -*- coding: utf-8 -*-
"""Views, breadcrumb origins and the breadcrumb record."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class View(Enum):
    """Mutually exclusive top-level screens."""

    HOME = "home"
    HISTORY = "history"
    LIBRARY = "library"
    SETTINGS = "settings"
    ANALYSIS_RESULT = "analysis_result"


class Origin(Enum):
    """Where an analysis result was opened from.

    Only the tag matters: it selects the breadcrumb label and the view the
    breadcrumb returns to.
    """

    HOME = View.HOME
    LIBRARY = View.LIBRARY
    HISTORY = View.HISTORY

    @classmethod
    def from_view(cls, view: View) -> "Origin":
        if view is View.HOME:
            return cls.HOME
        if view is View.LIBRARY:
            return cls.LIBRARY
        return cls.HISTORY

    @property
    def view(self) -> View:
        return self.value

    @property
    def label_key(self) -> str:
        return f"label.{self.value.value}"


@dataclass(frozen=True)
class BreadcrumbInfo:
    """Label and target of the "back to where you came from" link."""

    label: str
    origin_view: View

    def __post_init__(self) -> None:
        if self.origin_view not in (View.HOME, View.HISTORY, View.LIBRARY):
            raise ValueError(f"Breadcrumb cannot point to {self.origin_view.name}")
