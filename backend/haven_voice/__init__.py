from .elevenlabs import ElevenLabsSynthesizer
from .gemini import GeminiTextGenerator
from .providers import ProviderError
from .relay import FALLBACK_REPLY, RelayResult, SpeechRelay, SpeechSynthesizer, TextGenerator

__all__ = [
    "FALLBACK_REPLY",
    "ElevenLabsSynthesizer",
    "GeminiTextGenerator",
    "ProviderError",
    "RelayResult",
    "SpeechRelay",
    "SpeechSynthesizer",
    "TextGenerator",
]
