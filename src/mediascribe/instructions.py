"""Loading of the instruction text sent alongside the media."""

from __future__ import annotations

import logging
from pathlib import Path

from mediascribe.exceptions import InstructionsNotFoundError

logger = logging.getLogger(__name__)


def read_instructions(path: Path) -> str:
    """Return the prompt file's text verbatim."""
    if not path.is_file():
        raise InstructionsNotFoundError(path)
    text = path.read_text(encoding="utf-8")
    logger.debug("Read %d characters of instructions from %s", len(text), path)
    return text
