"""Upload of a classified media file to the remote service."""

from __future__ import annotations

import logging

from mediascribe.exceptions import RemoteServiceError, UploadFailedError
from mediascribe.media import MediaDescriptor
from mediascribe.remote.ports import RemoteHandle, RemoteMediaService

logger = logging.getLogger(__name__)


class UploadCoordinator:
    """Sends a :class:`MediaDescriptor`'s bytes to the service and returns the handle."""

    def __init__(self, service: RemoteMediaService) -> None:
        self._service = service

    async def upload(self, descriptor: MediaDescriptor) -> RemoteHandle:
        """Upload ``descriptor``; failures are terminal and not retried here."""
        logger.info("Uploading %s (%s)", descriptor.display_name, descriptor.mime_type)
        try:
            handle = await self._service.upload(
                descriptor.read_bytes(),
                descriptor.mime_type,
                descriptor.display_name,
            )
        except (RemoteServiceError, OSError) as exc:
            raise UploadFailedError(descriptor.local_path, exc) from exc

        logger.info("Uploaded as %s (state: %s)", handle.name, handle.state.value)
        return handle
