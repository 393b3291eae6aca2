from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

logger = logging.getLogger(__name__)

FALLBACK_REPLY = "Sorry, I didn't catch that."


class TextGenerator(Protocol):
    async def generate(self, prompt: str) -> str: ...


class SpeechSynthesizer(Protocol):
    async def synthesize(self, voice_id: str, model_id: str, text: str) -> bytes: ...


@dataclass
class RelayResult:
    reply: str
    audio: bytes


class SpeechRelay:
    """Turn user text into a spoken reply: generate text, then synthesize it."""

    def __init__(
        self,
        *,
        text_generator: TextGenerator,
        speech_synthesizer: SpeechSynthesizer,
        voice_id: str,
        tts_model: str,
    ) -> None:
        self.text_generator = text_generator
        self.speech_synthesizer = speech_synthesizer
        self.voice_id = voice_id
        self.tts_model = tts_model

    async def respond(self, text: str) -> RelayResult:
        generated = await self.text_generator.generate(text)
        reply = generated if isinstance(generated, str) and generated.strip() else FALLBACK_REPLY
        logger.info("Generated reply: %s", reply)

        audio = await self.speech_synthesizer.synthesize(self.voice_id, self.tts_model, reply)
        audio = bytes(audio)
        logger.info("Generated audio, size: %d", len(audio))
        return RelayResult(reply=reply, audio=audio)
