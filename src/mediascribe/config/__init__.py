"""Configuration loading for mediascribe."""

from mediascribe.config.settings import (
    API_KEY_ENV_VARS,
    DEFAULT_MODEL,
    DEFAULT_OUTPUT,
    SUPPORTED_MODELS,
    MediascribeConfig,
)

__all__ = [
    "API_KEY_ENV_VARS",
    "DEFAULT_MODEL",
    "DEFAULT_OUTPUT",
    "SUPPORTED_MODELS",
    "MediascribeConfig",
]
