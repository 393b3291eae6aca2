from __future__ import annotations

import json
from typing import Any

import httpx

from .providers import ProviderError, provider_error_message, require_api_key

GEMINI_API_BASE = "https://generativelanguage.googleapis.com/v1beta"


def _coerce_gemini_text(response_json: dict[str, Any]) -> str:
    candidates = response_json.get("candidates")
    if not isinstance(candidates, list) or not candidates:
        return ""
    first = candidates[0] if isinstance(candidates[0], dict) else {}
    content = first.get("content")
    if not isinstance(content, dict):
        return ""
    parts: list[str] = []
    for item in content.get("parts") or []:
        if isinstance(item, dict):
            text_value = item.get("text")
            if isinstance(text_value, str):
                parts.append(text_value)
    return "".join(parts)


class GeminiTextGenerator:
    """Single-prompt text generation against the Gemini REST API."""

    def __init__(
        self,
        *,
        api_key: str | None,
        model: str,
        timeout_seconds: float = 30.0,
        base_url: str = GEMINI_API_BASE,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.timeout_seconds = timeout_seconds
        self.base_url = base_url.rstrip("/")
        self._transport = transport

    async def generate(self, prompt: str) -> str:
        api_key = require_api_key(self.api_key, "GEMINI_API_KEY")
        payload = {"contents": [{"role": "user", "parts": [{"text": prompt}]}]}
        async with httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout_seconds, connect=8.0),
            transport=self._transport,
        ) as client:
            response = await client.post(
                f"{self.base_url}/models/{self.model}:generateContent",
                params={"key": api_key},
                headers={"Content-Type": "application/json"},
                json=payload,
            )
        if response.status_code >= 400:
            raise ProviderError(provider_error_message(response))
        try:
            response_json = response.json()
        except json.JSONDecodeError as exc:
            raise ProviderError("Text generation provider returned invalid JSON.") from exc
        if not isinstance(response_json, dict):
            raise ProviderError("Text generation provider returned an unexpected payload.")
        return _coerce_gemini_text(response_json)
