"""Classification of local media files."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Final

from mediascribe.exceptions import MediaNotFoundError, UnsupportedMediaTypeError

logger = logging.getLogger(__name__)


class MimeClass(str, Enum):
    """Coarse media class accepted by the generation service."""

    AUDIO = "audio"
    VIDEO = "video"


MEDIA_TYPES: Final[dict[str, tuple[str, MimeClass]]] = {
    ".mp3": ("audio/mp3", MimeClass.AUDIO),
    ".wav": ("audio/wav", MimeClass.AUDIO),
    ".aac": ("audio/aac", MimeClass.AUDIO),
    ".ogg": ("audio/ogg", MimeClass.AUDIO),
    ".flac": ("audio/flac", MimeClass.AUDIO),
    ".mp4": ("video/mp4", MimeClass.VIDEO),
    ".mpeg": ("video/mpeg", MimeClass.VIDEO),
    ".mov": ("video/quicktime", MimeClass.VIDEO),
    ".wmv": ("video/x-ms-wmv", MimeClass.VIDEO),
    ".avi": ("video/x-msvideo", MimeClass.VIDEO),
    ".mkv": ("video/x-matroska", MimeClass.VIDEO),
}


@dataclass(frozen=True, slots=True)
class MediaDescriptor:
    """A local media file ready to be uploaded."""

    local_path: Path
    mime_class: MimeClass
    mime_type: str
    display_name: str

    def read_bytes(self) -> bytes:
        return self.local_path.read_bytes()


def supported_extensions() -> list[str]:
    """Extensions (with leading dot) accepted by :func:`describe_media`."""
    return list(MEDIA_TYPES)


def classify_extension(path: Path) -> tuple[str, MimeClass]:
    """Map ``path``'s extension to its MIME type and class.

    Raises:
        UnsupportedMediaTypeError: If the extension is not in :data:`MEDIA_TYPES`.

    """
    ext = path.suffix.lower()
    try:
        return MEDIA_TYPES[ext]
    except KeyError:
        raise UnsupportedMediaTypeError(path, ext) from None


def describe_media(path: str | os.PathLike[str]) -> MediaDescriptor:
    """Build a :class:`MediaDescriptor` for ``path``.

    The only filesystem access is an existence/readability check; the bytes
    are read later, when the upload happens.
    """
    media_path = Path(path)
    if not media_path.is_file() or not os.access(media_path, os.R_OK):
        raise MediaNotFoundError(media_path)

    mime_type, mime_class = classify_extension(media_path)
    descriptor = MediaDescriptor(
        local_path=media_path,
        mime_class=mime_class,
        mime_type=mime_type,
        display_name=media_path.name,
    )
    logger.debug("Classified %s as %s (%s)", media_path, mime_type, mime_class.value)
    return descriptor
