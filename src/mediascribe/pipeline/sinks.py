"""Destinations for the raw and extracted artifacts."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol, runtime_checkable

from mediascribe.exceptions import ArtifactWriteError

logger = logging.getLogger(__name__)


@runtime_checkable
class ArtifactSink(Protocol):
    """Receives the two artifacts of a successful run."""

    def write_raw(self, raw_text: str) -> None: ...

    def write_extracted(self, extracted_text: str) -> None: ...


class FileArtifactSink:
    """Write the extracted text to ``output_path`` and the raw text to ``debug_path``."""

    def __init__(self, output_path: Path, debug_path: Path) -> None:
        self.output_path = output_path
        self.debug_path = debug_path

    @classmethod
    def beside(cls, output_path: Path, debug_filename: str) -> FileArtifactSink:
        """Place the debug artifact in the output file's directory."""
        return cls(output_path, output_path.parent / debug_filename)

    def write_raw(self, raw_text: str) -> None:
        self._write(self.debug_path, raw_text)

    def write_extracted(self, extracted_text: str) -> None:
        self._write(self.output_path, extracted_text)

    def _write(self, path: Path, text: str) -> None:
        try:
            path.write_text(text, encoding="utf-8")
        except OSError as exc:
            raise ArtifactWriteError(path, exc) from exc
        logger.debug("Wrote %d characters to %s", len(text), path)
