# -*- coding: utf-8 -*-
"""Gemini text/vision wrapper implementing the analysis service."""

from __future__ import annotations

import json
import logging
from typing import Any
from urllib import error, parse, request

from smartlex.core.errors import NetworkError, ServiceError, ValidationError
from smartlex.models.analysis_result import AnalysisResult
from smartlex.utils.image_utils import split_image_data

logger = logging.getLogger(__name__)

API_BASE = "https://generativelanguage.googleapis.com/v1beta"


class GeminiClient:
    """Thin wrapper around the Gemini ``generateContent`` endpoint."""

    SUPPORTED_MODELS = {
        "gemini_flash": "gemini-2.5-flash",
        "gemini_pro": "gemini-2.5-pro",
    }

    def __init__(self, api_key: str = "", model: str = "gemini_flash", timeout: float = 60.0) -> None:
        self.api_key = api_key
        self.model = model
        self.timeout = float(timeout)

    def validate_key(self, api_key: str | None = None, *, check_remote: bool = False, timeout: float = 2.0) -> bool:
        """Validate key format and optionally test it against the model listing."""
        key = (api_key if api_key is not None else self.api_key).strip()
        if not (bool(key) and (key.startswith("AIza") or key.startswith("test-"))):
            return False
        if not check_remote:
            return True
        try:
            status, _ = self._request_json("GET", f"{API_BASE}/models", api_key=key, timeout=timeout)
        except NetworkError:
            return False
        return status == 200

    def analyze(self, term: str, context: str, image_data: str | None = None) -> AnalysisResult:
        """Run one deep analysis of ``term`` in ``context``."""
        if not term.strip() or (not context.strip() and not image_data):
            raise ValidationError("term and context are required")
        routed_model = self.SUPPORTED_MODELS.get(self.model, self.model)
        if not self.validate_key():
            raise ServiceError("Gemini API key missing or invalid format")

        parts: list[dict[str, Any]] = [{"text": self.build_prompt(term, context, has_image=bool(image_data))}]
        if image_data:
            mime, b64 = split_image_data(image_data)
            parts.append({"inline_data": {"mime_type": mime, "data": b64}})
        payload = {
            "contents": [{"role": "user", "parts": parts}],
            "generationConfig": {"temperature": 0.4, "responseMimeType": "application/json"},
        }
        url = f"{API_BASE}/models/{parse.quote(routed_model, safe='')}:generateContent"
        status, response_payload = self._request_json(
            "POST", url, api_key=self.api_key, timeout=self.timeout, data=payload
        )
        if status != 200:
            raise ServiceError(self._error_message(response_payload) or f"Gemini request failed (status={status})")

        raw_text = self._extract_text(response_payload)
        return AnalysisResult(
            term=term,
            context=context,
            sections=self.parse_response(raw_text),
            model=routed_model,
            has_image=bool(image_data),
        )

    def build_prompt(self, term: str, context: str, *, has_image: bool = False) -> str:
        return (
            "You are a linguist explaining a term the reader met in the wild.\n\n"
            "## Term\n"
            f"{term}\n\n"
            "## Original context\n"
            f"{context or '(see attached image)'}\n\n"
            + ("The attached image shows where the term appeared.\n\n" if has_image else "")
            + "Return a JSON object with the keys: definition, meaning_in_context, "
            "etymology, usage_examples (array), synonyms (array), notes."
        )

    def parse_response(self, raw_response: str) -> dict[str, Any]:
        cleaned = raw_response.strip()
        if cleaned.startswith("```"):
            cleaned = cleaned.strip("`")
            if cleaned.lower().startswith("json"):
                cleaned = cleaned[4:]
        try:
            parsed = json.loads(cleaned)
        except json.JSONDecodeError:
            return {"analysis": raw_response.strip()}
        if not isinstance(parsed, dict):
            return {"analysis": parsed}
        return parsed

    @staticmethod
    def _extract_text(payload: dict[str, Any] | None) -> str:
        candidates = (payload or {}).get("candidates", [])
        if not isinstance(candidates, list) or not candidates or not isinstance(candidates[0], dict):
            raise ServiceError("Gemini response has no candidates")
        content = candidates[0].get("content", {})
        parts = content.get("parts", []) if isinstance(content, dict) else []
        texts = [str(part.get("text", "")) for part in parts if isinstance(part, dict) and part.get("text")]
        if not texts:
            raise ServiceError("Gemini response has no text")
        return "\n".join(texts)

    @staticmethod
    def _error_message(payload: dict[str, Any] | None) -> str:
        details = (payload or {}).get("error")
        if isinstance(details, dict):
            return str(details.get("message", "")).strip()
        return ""

    def _request_json(
        self,
        method: str,
        url: str,
        *,
        api_key: str,
        timeout: float,
        data: dict[str, Any] | None = None,
    ) -> tuple[int, dict[str, Any] | None]:
        body = None
        headers = {"Content-Type": "application/json"}
        if api_key:
            headers["x-goog-api-key"] = api_key
        if data is not None:
            body = json.dumps(data).encode("utf-8")
        req = request.Request(url, headers=headers, data=body, method=method)
        try:
            with request.urlopen(req, timeout=timeout) as response:
                status = int(getattr(response, "status", 200))
                raw_body = response.read().decode("utf-8", errors="ignore")
        except error.HTTPError as exc:
            raw_body = exc.read().decode("utf-8", errors="ignore")
            logger.debug("Gemini HTTP %s: %s", exc.code, raw_body[:500])
            return int(exc.code), self._decode(raw_body)
        except (error.URLError, TimeoutError, OSError) as exc:
            reason = getattr(exc, "reason", exc)
            raise NetworkError(f"Could not reach Gemini: {reason}") from exc
        return status, self._decode(raw_body)

    @staticmethod
    def _decode(raw_body: str) -> dict[str, Any]:
        try:
            payload = json.loads(raw_body) if raw_body else {}
        except json.JSONDecodeError:
            payload = {}
        return payload if isinstance(payload, dict) else {}
