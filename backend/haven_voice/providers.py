from __future__ import annotations

import httpx


class ProviderError(RuntimeError):
    pass


def provider_error_message(response: httpx.Response) -> str:
    message = response.text.strip()
    try:
        payload = response.json()
    except Exception:
        payload = None
    if isinstance(payload, dict):
        err = payload.get("error")
        if isinstance(err, dict):
            msg = err.get("message")
            if isinstance(msg, str) and msg.strip():
                return msg.strip()
        detail = payload.get("detail")
        if isinstance(detail, dict):
            msg = detail.get("message")
            if isinstance(msg, str) and msg.strip():
                return msg.strip()
        msg = payload.get("message")
        if isinstance(msg, str) and msg.strip():
            return msg.strip()
    return message or f"HTTP {response.status_code}"


def require_api_key(api_key: str | None, name: str) -> str:
    key = (api_key or "").strip()
    if not key:
        raise ProviderError(f"{name} is not configured.")
    return key
