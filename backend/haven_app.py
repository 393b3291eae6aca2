from __future__ import annotations

from haven_core import Settings
from haven_store import ProfileAggregator, SQLiteDocumentDB, UserStore
from haven_voice import ElevenLabsSynthesizer, GeminiTextGenerator, SpeechRelay


class HavenApp:
    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self.db = SQLiteDocumentDB(settings.db_path)
        self.users = UserStore(self.db)
        self.profiles = ProfileAggregator(self.users)
        self.relay = SpeechRelay(
            text_generator=GeminiTextGenerator(
                api_key=settings.gemini_api_key,
                model=settings.gemini_model,
                timeout_seconds=settings.provider_timeout_seconds,
            ),
            speech_synthesizer=ElevenLabsSynthesizer(
                api_key=settings.elevenlabs_api_key,
                timeout_seconds=settings.provider_timeout_seconds,
            ),
            voice_id=settings.voice_id,
            tts_model=settings.tts_model,
        )
