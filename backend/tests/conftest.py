from __future__ import annotations

import importlib
import sys
from pathlib import Path
from typing import Callable

import pytest
from fastapi.testclient import TestClient

BACKEND_DIR = Path(__file__).resolve().parents[1]
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

from fakes import FakeSpeechSynthesizer, FakeTextGenerator  # noqa: E402


@pytest.fixture
def backend_module(tmp_path, monkeypatch):
    db_path = tmp_path / "haven-test.sqlite"
    monkeypatch.setenv("HAVEN_DB_PATH", str(db_path))
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.delenv("ELEVENLABS_API_KEY", raising=False)
    monkeypatch.delenv("ELEVENLABS_VOICE_ID", raising=False)

    if "main" in sys.modules:
        module = importlib.reload(sys.modules["main"])
    else:
        module = importlib.import_module("main")
    return module


@pytest.fixture
def client(backend_module):
    with TestClient(backend_module.app) as test_client:
        yield test_client


@pytest.fixture
def fake_collaborators(backend_module, monkeypatch) -> Callable[..., tuple[FakeTextGenerator, FakeSpeechSynthesizer]]:
    def _install(
        generator: FakeTextGenerator | None = None,
        synthesizer: FakeSpeechSynthesizer | None = None,
    ) -> tuple[FakeTextGenerator, FakeSpeechSynthesizer]:
        generator = generator or FakeTextGenerator()
        synthesizer = synthesizer or FakeSpeechSynthesizer()
        monkeypatch.setattr(backend_module.container.relay, "text_generator", generator)
        monkeypatch.setattr(backend_module.container.relay, "speech_synthesizer", synthesizer)
        return generator, synthesizer

    return _install


@pytest.fixture
def create_user(client) -> Callable[..., dict]:
    def _create(name: str = "Ava", email: str = "ava@example.com") -> dict:
        response = client.post("/api/users", json={"name": name, "email": email})
        assert response.status_code in {200, 201}
        return response.json()

    return _create
