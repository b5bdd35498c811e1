# -*- coding: utf-8 -*-
"""Localized UI strings."""

from __future__ import annotations

from smartlex.constants import MESSAGES


DEFAULT_LANGUAGE = "zh"


def text(key: str, language: str = DEFAULT_LANGUAGE, **params: str) -> str:
    """Return the localized string for ``key``, falling back to the default language."""
    table = MESSAGES.get(language) or MESSAGES[DEFAULT_LANGUAGE]
    template = table.get(key)
    if template is None:
        template = MESSAGES[DEFAULT_LANGUAGE].get(key, key)
    return template.format(**params) if params else template
