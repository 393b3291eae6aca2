from __future__ import annotations

import httpx

from .providers import ProviderError, provider_error_message, require_api_key

ELEVENLABS_API_BASE = "https://api.elevenlabs.io/v1"


class ElevenLabsSynthesizer:
    def __init__(
        self,
        *,
        api_key: str | None,
        timeout_seconds: float = 30.0,
        base_url: str = ELEVENLABS_API_BASE,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_key = api_key
        self.timeout_seconds = timeout_seconds
        self.base_url = base_url.rstrip("/")
        self._transport = transport

    async def synthesize(self, voice_id: str, model_id: str, text: str) -> bytes:
        api_key = require_api_key(self.api_key, "ELEVENLABS_API_KEY")
        headers = {
            "xi-api-key": api_key,
            "Content-Type": "application/json",
            "Accept": "audio/mpeg",
        }
        async with httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout_seconds, connect=8.0),
            transport=self._transport,
        ) as client:
            response = await client.post(
                f"{self.base_url}/text-to-speech/{voice_id}",
                headers=headers,
                json={"text": text, "model_id": model_id},
            )
        if response.status_code >= 400:
            raise ProviderError(provider_error_message(response))
        return response.content
