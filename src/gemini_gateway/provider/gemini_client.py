"""Minimal client for the Gemini generateContent REST endpoint."""
from __future__ import annotations
from typing import Any, Protocol, Sequence

import httpx

from gemini_gateway.common.schema import Part, part_payload

class ProviderError(Exception):
    """Failure reported by (or while reaching) the generation provider."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class TextGenerator(Protocol):
    def generate(self, model: str, parts: Sequence[Part]) -> str: ...


def _error_message(r: httpx.Response) -> str:
    try:
        message = r.json()["error"]["message"]
        if message:
            return str(message)
    except Exception:
        pass
    return r.text.strip() or f"Gemini API returned HTTP {r.status_code}"


def _extract_text(data: dict[str, Any]) -> str:
    """Join the text parts of the first candidate."""
    candidates = data.get("candidates") or []
    if not candidates:
        reason = (data.get("promptFeedback") or {}).get("blockReason", "unknown")
        raise ProviderError(f"Prompt was blocked by Gemini: {reason}")
    candidate = candidates[0]
    parts = (candidate.get("content") or {}).get("parts") or []
    texts = [p["text"] for p in parts if "text" in p]
    if not texts:
        reason = candidate.get("finishReason", "unknown")
        raise ProviderError(f"Gemini returned no text (finish reason: {reason})")
    return "".join(texts)


class GeminiClient:
    def __init__(
        self,
        api_key: str | None,
        base_url: str = "https://generativelanguage.googleapis.com",
        timeout: float = 120.0,
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def generate(self, model: str, parts: Sequence[Part]) -> str:
        """
        Submit content parts to a Gemini model and return the generated text.

        Args:
            model: Model identifier, e.g. ``gemini-2.5-flash``.
            parts: Prompt strings and encoded attachments, in order.

        Raises:
            ProviderError: on missing credentials, transport failure,
                an HTTP error status or a response without text.
        """
        if not self.api_key:
            raise ProviderError("GEMINI_API_KEY is not set.")

        url = f"{self.base_url}/v1beta/models/{model}:generateContent"
        headers = {"x-goog-api-key": self.api_key}
        payload = {
            "contents": [
                {"role": "user", "parts": [part_payload(p) for p in parts]},
            ],
        }

        try:
            with httpx.Client(timeout=self.timeout) as client:
                r = client.post(url, headers=headers, json=payload)
        except httpx.HTTPError as e:
            raise ProviderError(f"Request to Gemini failed: {e}") from e

        if r.status_code >= 400:
            raise ProviderError(_error_message(r), status_code=r.status_code)

        try:
            data = r.json()
        except ValueError as e:
            raise ProviderError("Malformed Gemini response") from e
        return _extract_text(data)
