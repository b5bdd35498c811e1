# -*- coding: utf-8 -*-
"""Analysis request data model."""

from __future__ import annotations

from dataclasses import dataclass

from smartlex.core.errors import ValidationError


@dataclass(frozen=True)
class AnalysisRequest:
    """One submission: a term, its context and an optional encoded image."""

    term: str
    context: str = ""
    image_data: str | None = None

    def validate(self) -> None:
        """Raise ValidationError unless the term and a context or image are present."""
        if not self.term.strip():
            raise ValidationError("term must not be empty")
        if not self.context.strip() and not self.image_data:
            raise ValidationError("context must not be empty unless an image is supplied")

    def is_valid(self) -> bool:
        try:
            self.validate()
        except ValidationError:
            return False
        return True
