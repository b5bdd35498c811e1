# -*- coding: utf-8 -*-
"""Tests for the Gemini analysis service adapter."""

from __future__ import annotations

import io
import json
from urllib import error

import pytest

from smartlex.core.errors import NetworkError, ServiceError, ValidationError
from smartlex.integrations import gemini_client
from smartlex.integrations.gemini_client import GeminiClient


class _FakeResponse:
    def __init__(self, payload: dict, status: int = 200) -> None:
        self.status = status
        self._body = json.dumps(payload).encode("utf-8")

    def read(self) -> bytes:
        return self._body

    def __enter__(self):
        return self

    def __exit__(self, *exc) -> None:
        return None


def _candidate(text: str) -> dict:
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


@pytest.fixture
def captured(monkeypatch):
    calls: list = []

    def _install(response=None, exc: Exception | None = None):
        def _urlopen(req, timeout=None):
            calls.append(req)
            if exc is not None:
                raise exc
            return response

        monkeypatch.setattr(gemini_client.request, "urlopen", _urlopen)
        return calls

    return _install


def test_analyze_returns_parsed_sections(captured) -> None:
    calls = captured(_FakeResponse(_candidate(json.dumps({"definition": "hope in hardship"}))))
    client = GeminiClient(api_key="test-key")
    result = client.analyze("Silver Lining", "It's a silver lining in a dark cloud.")

    assert result.term == "Silver Lining"
    assert result.sections["definition"] == "hope in hardship"
    assert result.model == "gemini-2.5-flash"
    sent = json.loads(calls[0].data.decode("utf-8"))
    assert "Silver Lining" in sent["contents"][0]["parts"][0]["text"]
    assert calls[0].get_header("X-goog-api-key") == "test-key"


def test_image_is_sent_inline(captured) -> None:
    calls = captured(_FakeResponse(_candidate("{}")))
    GeminiClient(api_key="test-key").analyze("term", "", "data:image/png;base64,AAAA")
    parts = json.loads(calls[0].data.decode("utf-8"))["contents"][0]["parts"]
    assert parts[1] == {"inline_data": {"mime_type": "image/png", "data": "AAAA"}}


def test_fenced_json_is_unwrapped() -> None:
    parsed = GeminiClient().parse_response('```json\n{"notes": "x"}\n```')
    assert parsed == {"notes": "x"}


def test_plain_text_response_is_kept() -> None:
    assert GeminiClient().parse_response("just prose") == {"analysis": "just prose"}


def test_http_error_becomes_service_error_with_api_message(captured) -> None:
    body = io.BytesIO(json.dumps({"error": {"message": "quota exceeded"}}).encode("utf-8"))
    captured(exc=error.HTTPError("https://x", 429, "Too Many Requests", {}, body))
    with pytest.raises(ServiceError, match="quota exceeded"):
        GeminiClient(api_key="test-key").analyze("term", "ctx")


def test_connection_failure_becomes_network_error(captured) -> None:
    captured(exc=error.URLError("unreachable"))
    with pytest.raises(NetworkError):
        GeminiClient(api_key="test-key").analyze("term", "ctx")


def test_timeout_becomes_network_error(captured) -> None:
    captured(exc=TimeoutError("timed out"))
    with pytest.raises(NetworkError):
        GeminiClient(api_key="test-key").analyze("term", "ctx")


def test_empty_candidates_is_service_error(captured) -> None:
    captured(_FakeResponse({"candidates": []}))
    with pytest.raises(ServiceError):
        GeminiClient(api_key="test-key").analyze("term", "ctx")


def test_missing_key_is_service_error() -> None:
    with pytest.raises(ServiceError):
        GeminiClient(api_key="").analyze("term", "ctx")


def test_missing_context_is_validation_error() -> None:
    with pytest.raises(ValidationError):
        GeminiClient(api_key="test-key").analyze("term", "")


def test_validate_key_format() -> None:
    assert GeminiClient().validate_key("AIzaSomething") is True
    assert GeminiClient().validate_key("sk-wrong") is False
