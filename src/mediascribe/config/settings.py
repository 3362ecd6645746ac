"""Runtime configuration for mediascribe.

Values come from (highest priority first):

1. Explicit overrides passed to :meth:`MediascribeConfig.load` (CLI flags)
2. Environment variables and the ``.env`` file
3. ``.mediascribe.toml`` in the working directory
4. Defaults
"""

from __future__ import annotations

import logging
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final, Literal

from pydantic import AliasChoices, Field, SecretStr, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from mediascribe.exceptions import ApiKeyNotFoundError, ConfigValidationError

logger = logging.getLogger(__name__)

CONFIG_FILENAME: Final[str] = ".mediascribe.toml"
API_KEY_ENV_VARS: Final[tuple[str, ...]] = ("API_KEY", "GOOGLE_API_KEY", "GEMINI_API_KEY")

DEFAULT_MODEL: Final[str] = "gemini-2.5-flash"
SUPPORTED_MODELS: Final[tuple[str, ...]] = (
    "gemini-2.5-flash",
    "gemini-2.5-pro",
    "gemini-2.0-flash",
    "gemini-2.5-flash-preview-04-17",
    "gemini-2.5-flash-preview-05-20",
    "gemini-1.5-pro",
    "gemini-1.5-flash",
)

DEFAULT_POLL_INTERVAL: Final[float] = 5.0
DEFAULT_TEMPERATURE: Final[float] = 0.1
DEFAULT_OUTPUT: Final[str] = "transcription_output.md"
DEFAULT_DEBUG_FILENAME: Final[str] = "debug_response.txt"


def _deep_merge(destination: dict[str, Any], source: Mapping[str, Any]) -> dict[str, Any]:
    """Merge source into destination, with source values overwriting."""
    for key, value in source.items():
        if isinstance(value, Mapping) and isinstance(destination.get(key), Mapping):
            destination[key] = _deep_merge(dict(destination[key]), value)
        else:
            destination[key] = value
    return destination


class MediascribeConfig(BaseSettings):
    """Root configuration.

    Tool settings use the ``MEDIASCRIBE_`` prefix (e.g. ``MEDIASCRIBE_POLL_TIMEOUT``).
    The credential and the debug toggle keep the plain ``API_KEY``/``DEBUG`` names.
    """

    api_key: SecretStr | None = Field(
        default=None,
        validation_alias=AliasChoices("api_key", *API_KEY_ENV_VARS),
        description="Gemini API key",
    )
    debug: bool = Field(
        default=False,
        validation_alias=AliasChoices("debug", "DEBUG"),
        description="Verbose logging and full tracebacks on failure",
    )
    model: str = Field(default=DEFAULT_MODEL, description="Gemini model used for generation")
    poll_interval: float = Field(
        default=DEFAULT_POLL_INTERVAL,
        gt=0,
        description="Seconds between readiness checks of an uploaded file",
    )
    poll_timeout: float | None = Field(
        default=None,
        gt=0,
        description="Give up waiting for the uploaded file after this many seconds (None waits forever)",
    )
    temperature: float = Field(
        default=DEFAULT_TEMPERATURE,
        ge=0.0,
        le=2.0,
        description="Sampling temperature (0.1 keeps reruns close to reproducible)",
    )
    max_output_tokens: int | None = Field(default=None, ge=1, description="Output token cap")
    extraction: Literal["brace_span", "none"] = Field(
        default="brace_span",
        description="How the primary artifact is derived from the raw response",
    )
    max_attempts: int = Field(
        default=3,
        ge=1,
        le=10,
        description="Attempts per remote call on transient errors",
    )
    debug_filename: str = Field(
        default=DEFAULT_DEBUG_FILENAME,
        description="Name of the raw-response artifact, written next to the output file",
    )

    model_config = SettingsConfigDict(
        extra="ignore",
        env_prefix="MEDIASCRIBE_",
        env_file=".env",
        env_file_encoding="utf-8",
        populate_by_name=True,
    )

    @field_validator("model")
    @classmethod
    def validate_model(cls, v: str) -> str:
        """Accept bare or ``models/``-prefixed names from the supported list."""
        name = v.removeprefix("models/")
        if name not in SUPPORTED_MODELS:
            msg = f"Unsupported model {v!r}. Choose one of: {', '.join(SUPPORTED_MODELS)}"
            raise ValueError(msg)
        return name

    def require_api_key(self) -> str:
        """Return the raw API key or raise :class:`ApiKeyNotFoundError`."""
        if self.api_key is None or not self.api_key.get_secret_value():
            raise ApiKeyNotFoundError(API_KEY_ENV_VARS)
        return self.api_key.get_secret_value()

    @classmethod
    def load(cls, root: Path | None = None, **overrides: Any) -> MediascribeConfig:
        """Build the configuration for ``root`` (defaults to the working directory).

        Both ``.mediascribe.toml`` and ``.env`` are read from ``root``.
        ``None`` overrides are ignored so unset CLI flags fall through to the
        environment and the config file.
        """
        root_path = root if root is not None else Path.cwd()
        config_file = root_path / CONFIG_FILENAME

        file_settings: dict[str, Any] = {}
        if config_file.is_file():
            with config_file.open("rb") as f:
                file_settings = tomllib.load(f)
            logger.debug("Loaded settings from %s", config_file)

        try:
            env_settings = cls(_env_file=root_path / ".env").model_dump(exclude_unset=True)
            merged = _deep_merge(file_settings, env_settings)
            merged = _deep_merge(merged, {k: v for k, v in overrides.items() if v is not None})
            return cls.model_validate(merged)
        except ValidationError as exc:
            raise ConfigValidationError(exc.errors()) from exc
