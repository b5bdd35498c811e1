# -*- coding: utf-8 -*-
"""Analysis result data model."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Mapping


def _utc_now() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


@dataclass(frozen=True)
class AnalysisResult:
    """Immutable result produced by an analysis service.

    ``sections`` holds the service payload as returned; the core never looks
    inside it.
    """

    term: str
    context: str
    sections: Mapping[str, Any] = field(default_factory=dict)
    model: str = ""
    has_image: bool = False
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    created_at: str = field(default_factory=_utc_now)

    def __post_init__(self) -> None:
        object.__setattr__(self, "sections", MappingProxyType(dict(self.sections)))

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "term": self.term,
            "context": self.context,
            "sections": dict(self.sections),
            "model": self.model,
            "has_image": self.has_image,
            "created_at": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AnalysisResult":
        sections = data.get("sections", {})
        return cls(
            term=str(data.get("term", "")),
            context=str(data.get("context", "")),
            sections=sections if isinstance(sections, Mapping) else {},
            model=str(data.get("model", "")),
            has_image=bool(data.get("has_image", False)),
            id=str(data.get("id") or uuid.uuid4().hex),
            created_at=str(data.get("created_at") or _utc_now()),
        )
