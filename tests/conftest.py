from __future__ import annotations

from pathlib import Path

import pytest

from mediascribe.exceptions import RemoteServiceError
from mediascribe.remote.ports import HandleState, RemoteHandle, SamplingConfig

_ENV_VARS = (
    "API_KEY",
    "GOOGLE_API_KEY",
    "GEMINI_API_KEY",
    "DEBUG",
    "MEDIASCRIBE_MODEL",
    "MEDIASCRIBE_POLL_INTERVAL",
    "MEDIASCRIBE_POLL_TIMEOUT",
    "MEDIASCRIBE_TEMPERATURE",
    "MEDIASCRIBE_EXTRACTION",
    "MEDIASCRIBE_MAX_ATTEMPTS",
    "MEDIASCRIBE_LOG_LEVEL",
)


class FakeMediaService:
    """In-memory RemoteMediaService that records every call.

    ``states`` is consumed one entry per status query; the last entry repeats.
    """

    def __init__(
        self,
        states: list[HandleState] | None = None,
        response: str | None = '{"summary":"ok"}',
        *,
        upload_error: Exception | None = None,
        status_error: Exception | None = None,
        generate_error: Exception | None = None,
    ) -> None:
        self.states = list(states or [HandleState.PROCESSING, HandleState.READY])
        self.response = response
        self.upload_error = upload_error
        self.status_error = status_error
        self.generate_error = generate_error
        self.upload_calls: list[tuple[bytes, str, str]] = []
        self.status_calls: list[str] = []
        self.generate_calls: list[tuple[str, str, str, str, SamplingConfig]] = []
        self._mime_type = ""

    def _handle(self, state: HandleState) -> RemoteHandle:
        return RemoteHandle(
            uri="https://generativelanguage.googleapis.com/v1beta/files/abc123",
            name="files/abc123",
            mime_type=self._mime_type,
            state=state,
        )

    async def upload(self, data: bytes, mime_type: str, display_name: str) -> RemoteHandle:
        self.upload_calls.append((data, mime_type, display_name))
        if self.upload_error is not None:
            raise RemoteServiceError("upload", self.upload_error)
        self._mime_type = mime_type
        return self._handle(HandleState.PENDING)

    async def get_status(self, name: str) -> RemoteHandle:
        self.status_calls.append(name)
        if self.status_error is not None:
            raise RemoteServiceError("get_status", self.status_error)
        state = self.states.pop(0) if len(self.states) > 1 else self.states[0]
        return self._handle(state)

    async def generate(
        self,
        instructions: str,
        file_uri: str,
        mime_type: str,
        model: str,
        sampling: SamplingConfig,
    ) -> str | None:
        self.generate_calls.append((instructions, file_uri, mime_type, model, sampling))
        if self.generate_error is not None:
            raise RemoteServiceError("generate", self.generate_error)
        return self.response


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    """Keep developer credentials and .env files out of the tests."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def fake_service_cls() -> type[FakeMediaService]:
    return FakeMediaService


@pytest.fixture
def audio_file(tmp_path: Path) -> Path:
    """A stand-in for a ten second mp3 recording."""
    path = tmp_path / "interview.mp3"
    path.write_bytes(b"ID3\x03\x00\x00\x00" + b"\x00" * 160_000)
    return path


@pytest.fixture
def prompt_file(tmp_path: Path) -> Path:
    path = tmp_path / "prompt.md"
    path.write_text("Transcribe the audio and answer as JSON with a 'summary' key.", encoding="utf-8")
    return path
