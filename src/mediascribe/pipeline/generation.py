"""Generation request against a ready remote file."""

from __future__ import annotations

import logging

from mediascribe.exceptions import (
    EmptyResponseError,
    GenerationFailedError,
    HandleNotReadyError,
    RemoteServiceError,
)
from mediascribe.remote.ports import HandleState, RemoteHandle, RemoteMediaService, SamplingConfig

logger = logging.getLogger(__name__)


class GenerationInvoker:
    """Pairs the instructions with a READY handle and asks the service for text."""

    def __init__(self, service: RemoteMediaService, sampling: SamplingConfig | None = None) -> None:
        self._service = service
        self._sampling = sampling or SamplingConfig()

    @property
    def sampling(self) -> SamplingConfig:
        return self._sampling

    async def generate(self, instructions: str, handle: RemoteHandle, model: str) -> str:
        """Return the unprocessed response text.

        Raises:
            HandleNotReadyError: If ``handle`` has not been observed READY.
            GenerationFailedError: If the service fails or returns no text.

        """
        if handle.state is not HandleState.READY:
            msg = f"{handle.name} is {handle.state.value}; generation requires a ready handle"
            raise HandleNotReadyError(msg)

        logger.info("Generating with %s (temperature=%s)", model, self._sampling.temperature)
        try:
            raw_text = await self._service.generate(
                instructions,
                handle.uri,
                handle.mime_type,
                model,
                self._sampling,
            )
        except RemoteServiceError as exc:
            raise GenerationFailedError(handle.name, model, exc) from exc

        if not raw_text or not raw_text.strip():
            raise EmptyResponseError(handle.name, model)

        logger.debug("Received %d characters from %s", len(raw_text), model)
        return raw_text
