"""Centralized logging configuration for mediascribe."""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING, Final, cast

from rich.console import Console
from rich.logging import RichHandler

__all__ = ["configure_logging", "console"]

_LOG_LEVEL_ENV: Final[str] = "MEDIASCRIBE_LOG_LEVEL"
_DEFAULT_LEVEL_NAME: Final[str] = "INFO"

console = Console()

if TYPE_CHECKING:

    class _ManagedRichHandler(RichHandler):
        _mediascribe_managed: bool

else:
    _ManagedRichHandler = RichHandler


def _resolve_level(*, debug: bool) -> int:
    """Return the logging level defined via environment variable."""
    if debug:
        return logging.DEBUG
    level_name = os.getenv(_LOG_LEVEL_ENV, _DEFAULT_LEVEL_NAME).upper()
    return getattr(logging, level_name, logging.INFO)


def configure_logging(*, debug: bool = False) -> None:
    """Configure logging once with a Rich handler."""
    root_logger = logging.getLogger()
    level = _resolve_level(debug=debug)

    managed_handler: _ManagedRichHandler | None = None
    for handler in root_logger.handlers:
        if isinstance(handler, RichHandler) and getattr(handler, "_mediascribe_managed", False):
            managed_handler = cast(_ManagedRichHandler, handler)
            break

    if managed_handler is None:
        root_logger.handlers.clear()
        handler = _ManagedRichHandler(
            console=console,
            rich_tracebacks=True,
            show_path=debug,
            markup=False,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        handler._mediascribe_managed = True
        root_logger.addHandler(handler)
    else:
        managed_handler.show_path = debug

    root_logger.setLevel(level)

    # The SDK and its HTTP stack are chatty at INFO.
    for noisy in ("httpx", "httpcore", "google_genai"):
        logging.getLogger(noisy).setLevel(logging.DEBUG if debug else logging.WARNING)

    logging.captureWarnings(True)
