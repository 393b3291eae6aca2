from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Mapping

GEMINI_MODEL = "gemini-2.0-flash-exp"
ELEVENLABS_MODEL = "eleven_monolingual_v1"
DEFAULT_VOICE_ID = "21m00Tcm4TlvDq8ikWAM"  # Rachel

_ENV_LINE_RE = re.compile(r"^(?:export\s+)?([A-Za-z_][A-Za-z0-9_]*)\s*=\s*(.*)$")
_BACKEND_DIR = Path(__file__).resolve().parents[1]


def parse_env_text(text: str) -> dict[str, str]:
    """Parse dotenv-style KEY=value lines; comments and malformed lines are skipped."""
    values: dict[str, str] = {}
    for line in text.splitlines():
        match = _ENV_LINE_RE.match(line.strip())
        if match is None:
            continue
        key, value = match.group(1), match.group(2).strip()
        if value[:1] in {"'", '"'} and len(value) >= 2 and value[-1] == value[0]:
            value = value[1:-1]
        values[key] = value
    return values


def load_local_env_file(path: Path) -> None:
    """Export values from ``path`` without overriding variables already set."""
    if not path.is_file():
        return
    for key, value in parse_env_text(path.read_text(encoding="utf-8")).items():
        os.environ.setdefault(key, value)


def bootstrap_local_env(candidates: Iterable[Path] | None = None) -> None:
    if candidates is None:
        candidates = [_BACKEND_DIR.parent / ".env", _BACKEND_DIR / ".env"]
    for candidate in candidates:
        load_local_env_file(candidate)


def _optional(environ: Mapping[str, str], key: str) -> str | None:
    value = (environ.get(key) or "").strip()
    return value or None


@dataclass(frozen=True)
class Settings:
    gemini_api_key: str | None = None
    elevenlabs_api_key: str | None = None
    voice_id: str = DEFAULT_VOICE_ID
    gemini_model: str = GEMINI_MODEL
    tts_model: str = ELEVENLABS_MODEL
    db_path: str = str(_BACKEND_DIR / "haven.sqlite")
    allowed_origins: list[str] = field(default_factory=lambda: ["http://localhost:3000"])
    provider_timeout_seconds: float = 30.0
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        env = os.environ if environ is None else environ
        origins = [
            origin.strip()
            for origin in (env.get("ALLOWED_ORIGINS") or "http://localhost:3000").split(",")
            if origin.strip()
        ]
        return cls(
            gemini_api_key=_optional(env, "GEMINI_API_KEY"),
            elevenlabs_api_key=_optional(env, "ELEVENLABS_API_KEY"),
            voice_id=_optional(env, "ELEVENLABS_VOICE_ID") or DEFAULT_VOICE_ID,
            db_path=_optional(env, "HAVEN_DB_PATH") or cls.db_path,
            allowed_origins=origins,
            provider_timeout_seconds=float(env.get("HAVEN_PROVIDER_TIMEOUT_SECONDS") or "30"),
            log_level=(_optional(env, "LOG_LEVEL") or "INFO").upper(),
        )
