"""Local media classification."""

from mediascribe.media.descriptor import (
    MEDIA_TYPES,
    MediaDescriptor,
    MimeClass,
    classify_extension,
    describe_media,
    supported_extensions,
)

__all__ = [
    "MEDIA_TYPES",
    "MediaDescriptor",
    "MimeClass",
    "classify_extension",
    "describe_media",
    "supported_extensions",
]
