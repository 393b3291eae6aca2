from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends
from fastapi.responses import Response
from pydantic import BaseModel

from haven_app import HavenApp
from haven_core.errors import UpstreamError, ValidationError

from .deps import get_container

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["chat"])


class ChatRequest(BaseModel):
    # Left untyped so falsy JSON values reach the handler's own check.
    text: Any = None


@router.post("/chat")
async def chat(payload: ChatRequest | None = None, container: HavenApp = Depends(get_container)):
    text = payload.text if payload else None
    logger.info("Received text: %s", text)
    if not text:
        raise ValidationError("No text provided", extra={"success": False})

    try:
        result = await container.relay.respond(str(text))
    except Exception as exc:
        logger.exception("Chat route error: %s", exc)
        raise UpstreamError(str(exc) or "Server error") from exc

    return Response(
        content=result.audio,
        media_type="audio/mpeg",
        headers={"Content-Length": str(len(result.audio))},
    )
