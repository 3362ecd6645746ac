from types import SimpleNamespace

import httpx
import pytest
from google.genai import errors as genai_errors
from google.genai import types
from pydantic import SecretStr

import mediascribe.remote.gemini as gemini_module
from mediascribe.exceptions import RemoteServiceError
from mediascribe.remote.gemini import GeminiMediaService, to_handle
from mediascribe.remote.ports import HandleState, RemoteMediaService, SamplingConfig
from mediascribe.remote.retry import is_retryable_error


def _server_error(code: int = 503) -> genai_errors.ServerError:
    return genai_errors.ServerError(code, {"error": {"code": code, "message": "overloaded", "status": "UNAVAILABLE"}})


def _client_error(code: int) -> genai_errors.ClientError:
    return genai_errors.ClientError(code, {"error": {"code": code, "message": "bad request", "status": "INVALID"}})


def _file(state: types.FileState | None, mime_type: str | None = "audio/mp3") -> types.File:
    return types.File(
        name="files/abc123",
        uri="https://generativelanguage.googleapis.com/v1beta/files/abc123",
        mime_type=mime_type,
        state=state,
    )


class _FakeFiles:
    def __init__(self, *, upload_errors=(), state=types.FileState.PROCESSING):
        self.upload_errors = list(upload_errors)
        self.state = state
        self.uploads: list[tuple[bytes, types.UploadFileConfig]] = []
        self.gets: list[str] = []

    async def upload(self, *, file, config):
        self.uploads.append((file.read(), config))
        if self.upload_errors:
            raise self.upload_errors.pop(0)
        return _file(types.FileState.PROCESSING, config.mime_type)

    async def get(self, *, name):
        self.gets.append(name)
        return _file(self.state)


class _FakeModels:
    def __init__(self, *, errors=(), text='{"summary": "ok"}'):
        self.errors = list(errors)
        self.text = text
        self.calls: list[dict] = []

    async def generate_content(self, *, model, contents, config):
        self.calls.append({"model": model, "contents": contents, "config": config})
        if self.errors:
            raise self.errors.pop(0)
        return SimpleNamespace(text=self.text)


def _service(files=None, models=None, max_attempts=3) -> tuple[GeminiMediaService, _FakeFiles, _FakeModels]:
    files = files or _FakeFiles()
    models = models or _FakeModels()
    client = SimpleNamespace(aio=SimpleNamespace(files=files, models=models))
    return GeminiMediaService(client, max_attempts=max_attempts, min_wait=0, max_wait=0), files, models


@pytest.mark.parametrize(
    ("state", "expected"),
    [
        (types.FileState.PROCESSING, HandleState.PROCESSING),
        (types.FileState.ACTIVE, HandleState.READY),
        (types.FileState.FAILED, HandleState.FAILED),
        (types.FileState.STATE_UNSPECIFIED, HandleState.PENDING),
        (None, HandleState.PENDING),
    ],
)
def test_file_state_mapping(state, expected):
    handle = to_handle(_file(state))

    assert handle.state is expected
    assert handle.name == "files/abc123"


def test_missing_mime_type_falls_back():
    assert to_handle(_file(None, mime_type=None), "video/mp4").mime_type == "video/mp4"


def test_service_satisfies_the_port():
    service, _, _ = _service()

    assert isinstance(service, RemoteMediaService)


@pytest.mark.asyncio
async def test_upload_sends_bytes_with_mime_type_and_display_name():
    service, files, _ = _service()

    handle = await service.upload(b"ID3data", "audio/mp3", "interview.mp3")

    data, config = files.uploads[0]
    assert data == b"ID3data"
    assert config.mime_type == "audio/mp3"
    assert config.display_name == "interview.mp3"
    assert handle.state is HandleState.PROCESSING


@pytest.mark.asyncio
async def test_transient_upload_error_is_retried():
    service, files, _ = _service(files=_FakeFiles(upload_errors=[_server_error()]))

    handle = await service.upload(b"data", "audio/wav", "a.wav")

    assert len(files.uploads) == 2
    assert handle.name == "files/abc123"


@pytest.mark.asyncio
async def test_client_error_is_not_retried():
    service, files, _ = _service(files=_FakeFiles(upload_errors=[_client_error(400)]))

    with pytest.raises(RemoteServiceError) as excinfo:
        await service.upload(b"data", "audio/wav", "a.wav")

    assert len(files.uploads) == 1
    assert excinfo.value.operation == "upload"
    assert isinstance(excinfo.value.cause, genai_errors.ClientError)


@pytest.mark.asyncio
async def test_retries_stop_after_max_attempts():
    errors = [_server_error(), _server_error(), _server_error()]
    service, _, models = _service(models=_FakeModels(errors=errors), max_attempts=2)

    with pytest.raises(RemoteServiceError):
        await service.generate("Transcribe.", "https://x/files/abc123", "audio/mp3", "gemini-2.5-flash", SamplingConfig())

    assert len(models.calls) == 2


@pytest.mark.asyncio
async def test_get_status_reads_the_file_by_name():
    service, files, _ = _service(files=_FakeFiles(state=types.FileState.ACTIVE))

    handle = await service.get_status("files/abc123")

    assert files.gets == ["files/abc123"]
    assert handle.state is HandleState.READY


@pytest.mark.asyncio
async def test_generate_sends_instructions_then_file_reference():
    service, _, models = _service()
    uri = "https://generativelanguage.googleapis.com/v1beta/files/abc123"

    text = await service.generate(
        "Summarize as JSON.",
        uri,
        "audio/mp3",
        "gemini-2.5-pro",
        SamplingConfig(temperature=0.1, max_output_tokens=1024),
    )

    call = models.calls[0]
    instructions, part = call["contents"]
    assert text == '{"summary": "ok"}'
    assert call["model"] == "gemini-2.5-pro"
    assert instructions == "Summarize as JSON."
    assert part.file_data.file_uri == uri
    assert part.file_data.mime_type == "audio/mp3"
    assert call["config"].temperature == 0.1
    assert call["config"].max_output_tokens == 1024


@pytest.mark.asyncio
async def test_generate_passes_through_missing_text():
    service, _, _ = _service(models=_FakeModels(text=None))

    assert await service.generate("x", "uri", "audio/mp3", "gemini-2.5-flash", SamplingConfig()) is None


@pytest.mark.parametrize(
    ("error", "expected"),
    [
        (_server_error(500), True),
        (_client_error(429), True),
        (_client_error(400), False),
        (_client_error(404), False),
        (httpx.ConnectError("refused"), True),
        (httpx.ReadTimeout("slow"), True),
        (ValueError("bug"), False),
    ],
)
def test_is_retryable_error(error, expected):
    assert is_retryable_error(error) is expected


def test_http_status_errors_are_classified_by_code():
    request = httpx.Request("POST", "https://generativelanguage.googleapis.com/upload")

    def _status_error(code: int) -> httpx.HTTPStatusError:
        response = httpx.Response(code, request=request)
        return httpx.HTTPStatusError("status", request=request, response=response)

    assert is_retryable_error(_status_error(503))
    assert is_retryable_error(_status_error(429))
    assert not is_retryable_error(_status_error(403))


@pytest.mark.asyncio
async def test_transient_status_error_is_retried_and_awaited():
    class _FlakyFiles(_FakeFiles):
        async def get(self, *, name):
            self.gets.append(name)
            if len(self.gets) == 1:
                raise _server_error(502)
            return _file(types.FileState.ACTIVE)

    service, files, _ = _service(files=_FlakyFiles())

    handle = await service.get_status("files/abc123")

    assert files.gets == ["files/abc123", "files/abc123"]
    assert handle.state is HandleState.READY


@pytest.mark.asyncio
async def test_unparseable_reply_becomes_remote_service_error():
    error = genai_errors.UnknownApiResponseError("Failed to parse response as JSON: <html>502 Bad Gateway</html>")
    service, _, models = _service(models=_FakeModels(errors=[error]))

    with pytest.raises(RemoteServiceError) as excinfo:
        await service.generate("x", "uri", "audio/mp3", "gemini-2.5-flash", SamplingConfig())

    assert excinfo.value.operation == "generate"
    assert excinfo.value.cause is error
    assert len(models.calls) == 1


@pytest.mark.parametrize("api_key", [SecretStr("sk-secret"), "sk-secret"])
def test_from_api_key_passes_the_plain_key_to_the_client(monkeypatch, api_key):
    created: list[str] = []

    def _client(*, api_key):
        created.append(api_key)
        return SimpleNamespace(aio=SimpleNamespace(files=_FakeFiles(), models=_FakeModels()))

    monkeypatch.setattr(gemini_module.genai, "Client", _client)

    service = gemini_module.GeminiMediaService.from_api_key(api_key, max_attempts=5)

    assert created == ["sk-secret"]
    assert service._max_attempts == 5
