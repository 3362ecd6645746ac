"""Interface to the remote generation service and the values it exchanges."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Protocol, runtime_checkable


class HandleState(str, Enum):
    """Processing state of an uploaded asset."""

    PENDING = "pending"
    PROCESSING = "processing"
    READY = "ready"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (HandleState.READY, HandleState.FAILED)


@dataclass(frozen=True, slots=True)
class RemoteHandle:
    """Service-side identifier and last observed state of an uploaded file."""

    uri: str
    name: str
    mime_type: str
    state: HandleState


@dataclass(frozen=True, slots=True)
class SamplingConfig:
    """Generation parameters sent with every request."""

    temperature: float = 0.1
    max_output_tokens: int | None = None


@runtime_checkable
class RemoteMediaService(Protocol):
    """Upload, status and generation operations of the remote service.

    Implementations raise :class:`mediascribe.exceptions.RemoteServiceError`
    when an operation fails; any retry policy lives inside the implementation.
    """

    async def upload(self, data: bytes, mime_type: str, display_name: str) -> RemoteHandle: ...

    async def get_status(self, name: str) -> RemoteHandle: ...

    async def generate(
        self,
        instructions: str,
        file_uri: str,
        mime_type: str,
        model: str,
        sampling: SamplingConfig,
    ) -> str | None: ...
