"""Gemini implementation of the remote media service."""

from __future__ import annotations

import io
import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types
from pydantic import SecretStr

from mediascribe.exceptions import RemoteServiceError
from mediascribe.remote.ports import HandleState, RemoteHandle, SamplingConfig
from mediascribe.remote.retry import get_async_retrying

logger = logging.getLogger(__name__)

_T = TypeVar("_T")

# google.genai FileState names. Anything else (STATE_UNSPECIFIED, missing) is pending.
_FILE_STATES: dict[str, HandleState] = {
    "PROCESSING": HandleState.PROCESSING,
    "ACTIVE": HandleState.READY,
    "FAILED": HandleState.FAILED,
}


def to_handle(file: types.File | Any, fallback_mime_type: str = "") -> RemoteHandle:
    """Convert a ``google.genai`` File into a :class:`RemoteHandle`."""
    state = getattr(file, "state", None)
    state_name = getattr(state, "name", None) or ""
    return RemoteHandle(
        uri=file.uri or "",
        name=file.name or "",
        mime_type=file.mime_type or fallback_mime_type,
        state=_FILE_STATES.get(state_name, HandleState.PENDING),
    )


class GeminiMediaService:
    """Upload media and generate content through the Gemini Files API.

    Transient failures (429, 5xx, network errors) are retried with exponential
    backoff; everything else surfaces as :class:`RemoteServiceError`.
    """

    def __init__(
        self,
        client: genai.Client,
        *,
        max_attempts: int = 3,
        min_wait: float = 2.0,
        max_wait: float = 30.0,
    ) -> None:
        self._client = client
        self._max_attempts = max_attempts
        self._min_wait = min_wait
        self._max_wait = max_wait

    @classmethod
    def from_api_key(cls, api_key: SecretStr | str, **kwargs: Any) -> GeminiMediaService:
        secret = api_key.get_secret_value() if isinstance(api_key, SecretStr) else api_key
        return cls(genai.Client(api_key=secret), **kwargs)

    async def upload(self, data: bytes, mime_type: str, display_name: str) -> RemoteHandle:
        config = types.UploadFileConfig(mime_type=mime_type, display_name=display_name)
        file = await self._call(
            "upload",
            lambda: self._client.aio.files.upload(file=io.BytesIO(data), config=config),
        )
        logger.debug("Uploaded %s (%d bytes) as %s", display_name, len(data), file.name)
        return to_handle(file, mime_type)

    async def get_status(self, name: str) -> RemoteHandle:
        file = await self._call("get_status", lambda: self._client.aio.files.get(name=name))
        return to_handle(file)

    async def generate(
        self,
        instructions: str,
        file_uri: str,
        mime_type: str,
        model: str,
        sampling: SamplingConfig,
    ) -> str | None:
        contents: list[Any] = [
            instructions,
            types.Part.from_uri(file_uri=file_uri, mime_type=mime_type),
        ]
        config = types.GenerateContentConfig(
            temperature=sampling.temperature,
            max_output_tokens=sampling.max_output_tokens,
        )
        response = await self._call(
            "generate",
            lambda: self._client.aio.models.generate_content(model=model, contents=contents, config=config),
        )
        return response.text

    async def _call(self, operation: str, call: Callable[[], Awaitable[_T]]) -> _T:
        retrying = get_async_retrying(
            max_attempts=self._max_attempts,
            min_wait=self._min_wait,
            max_wait=self._max_wait,
        )
        try:
            async for attempt in retrying:
                with attempt:
                    return await call()
        except (
            genai_errors.APIError,
            genai_errors.UnknownApiResponseError,
            httpx.HTTPError,
            OSError,
        ) as exc:
            logger.debug("Gemini %s failed: %s", operation, exc)
            raise RemoteServiceError(operation, exc) from exc
