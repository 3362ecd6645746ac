"""Centralized exceptions for the mediascribe application."""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum
from pathlib import Path
from typing import Any


class ErrorKind(str, Enum):
    """Terminal failure categories of a pipeline run."""

    MEDIA_NOT_FOUND = "media_not_found"
    UNSUPPORTED_MEDIA_TYPE = "unsupported_media_type"
    UPLOAD_FAILED = "upload_failed"
    REMOTE_PROCESSING_FAILED = "remote_processing_failed"
    GENERATION_FAILED = "generation_failed"
    TRANSPORT_ERROR = "transport_error"
    POLLING_TIMED_OUT = "polling_timed_out"
    ARTIFACT_WRITE_FAILED = "artifact_write_failed"


class MediascribeError(Exception):
    """Base exception for all mediascribe errors."""


# ============================================================================
# Pipeline failures
# ============================================================================


class PipelineError(MediascribeError):
    """Base exception for failures that terminate a pipeline run."""

    kind: ErrorKind


class MediaNotFoundError(PipelineError):
    """Raised when the media path does not resolve to a readable file."""

    kind = ErrorKind.MEDIA_NOT_FOUND

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Media file not found: {path}")


class UnsupportedMediaTypeError(PipelineError):
    """Raised when the media extension is not in the supported table."""

    kind = ErrorKind.UNSUPPORTED_MEDIA_TYPE

    def __init__(self, path: Path, extension: str) -> None:
        self.path = path
        self.extension = extension
        super().__init__(f"Unsupported or unknown media type: {extension!r} ({path})")


class UploadFailedError(PipelineError):
    """Raised when the remote service rejects or fails the upload."""

    kind = ErrorKind.UPLOAD_FAILED

    def __init__(self, path: Path, cause: BaseException) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"Upload of {path} failed: {cause}")


class RemoteProcessingFailedError(PipelineError):
    """Raised when the remote asset reaches the FAILED state."""

    kind = ErrorKind.REMOTE_PROCESSING_FAILED

    def __init__(self, handle_name: str) -> None:
        self.handle_name = handle_name
        super().__init__(f"Remote processing failed for {handle_name}")


class GenerationFailedError(PipelineError):
    """Raised when the generation request fails."""

    kind = ErrorKind.GENERATION_FAILED

    def __init__(self, handle_name: str, model: str, cause: BaseException | str) -> None:
        self.handle_name = handle_name
        self.model = model
        self.cause = cause
        super().__init__(f"Generation with {model} for {handle_name} failed: {cause}")


class EmptyResponseError(GenerationFailedError):
    """Raised when the service returns no text."""

    def __init__(self, handle_name: str, model: str) -> None:
        super().__init__(handle_name, model, "empty response")


class TransportError(PipelineError):
    """Raised when a status query cannot reach the service."""

    kind = ErrorKind.TRANSPORT_ERROR

    def __init__(self, handle_name: str, cause: BaseException) -> None:
        self.handle_name = handle_name
        self.cause = cause
        super().__init__(f"Status query for {handle_name} failed: {cause}")


class PollingTimedOutError(PipelineError):
    """Raised when the readiness deadline passes before a terminal state."""

    kind = ErrorKind.POLLING_TIMED_OUT

    def __init__(self, handle_name: str, elapsed: float) -> None:
        self.handle_name = handle_name
        self.elapsed = elapsed
        super().__init__(f"{handle_name} still processing after {elapsed:.1f}s")


class ArtifactWriteError(PipelineError):
    """Raised when an output artifact cannot be written."""

    kind = ErrorKind.ARTIFACT_WRITE_FAILED

    def __init__(self, path: Path, cause: OSError) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"Could not write {path}: {cause}")


# ============================================================================
# Remote service
# ============================================================================


class RemoteServiceError(MediascribeError):
    """Raised by a RemoteMediaService when an operation fails."""

    def __init__(self, operation: str, cause: BaseException) -> None:
        self.operation = operation
        self.cause = cause
        super().__init__(f"{operation} failed: {cause}")


# ============================================================================
# Configuration
# ============================================================================


class ConfigError(MediascribeError):
    """Base exception for all configuration-related errors."""


class ApiKeyNotFoundError(ConfigError):
    """Raised when no API key is configured."""

    def __init__(self, env_vars: Sequence[str]) -> None:
        self.env_vars = tuple(env_vars)
        super().__init__(f"API key not set. Define one of: {', '.join(self.env_vars)}")


class ConfigValidationError(ConfigError):
    """Raised when configuration values fail validation."""

    def __init__(self, errors: Sequence[Any] | None = None) -> None:
        self.errors = list(errors or [])
        details = "; ".join(str(error.get("msg", error)) for error in self.errors if isinstance(error, dict))
        message = f"Configuration validation failed with {len(self.errors)} error(s)."
        super().__init__(f"{message} {details}" if details else message)


class InstructionsNotFoundError(ConfigError):
    """Raised when the instructions (prompt) file does not exist."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Prompt file not found: {path}")


class HandleNotReadyError(RuntimeError):
    """Raised when generation is attempted on a handle that is not READY."""
