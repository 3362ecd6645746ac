"""Waiting for an uploaded file to finish server-side processing."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from mediascribe.exceptions import (
    PollingTimedOutError,
    RemoteProcessingFailedError,
    RemoteServiceError,
    TransportError,
)
from mediascribe.remote.ports import HandleState, RemoteHandle, RemoteMediaService

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = 5.0


@dataclass(frozen=True, slots=True)
class PollingTick:
    """Emitted each time a status query comes back non-terminal."""

    handle: RemoteHandle
    attempt: int
    elapsed: float


TickCallback = Callable[[PollingTick], None]
SettledCallback = Callable[[RemoteHandle], None]


class ReadinessPoller:
    """Re-query a handle until it is READY or FAILED.

    With ``timeout=None`` the poller waits indefinitely, as long as the
    service keeps reporting the file as pending or processing. ``on_tick``
    fires on every non-terminal answer, ``on_settled`` once with the READY or
    FAILED handle.
    """

    def __init__(
        self,
        service: RemoteMediaService,
        *,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        timeout: float | None = None,
        on_tick: TickCallback | None = None,
        on_settled: SettledCallback | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._service = service
        self._poll_interval = poll_interval
        self._timeout = timeout
        self._on_tick = on_tick
        self._on_settled = on_settled
        self._sleep = sleep
        self._clock = clock

    async def await_ready(self, handle: RemoteHandle) -> RemoteHandle:
        """Return the refreshed handle once it is READY."""
        start = self._clock()
        attempt = 0
        current = await self._query(handle.name)

        while not current.state.is_terminal:
            attempt += 1
            elapsed = self._clock() - start
            if self._timeout is not None and elapsed >= self._timeout:
                raise PollingTimedOutError(handle.name, elapsed)
            if self._on_tick is not None:
                self._on_tick(PollingTick(handle=current, attempt=attempt, elapsed=elapsed))
            logger.debug("%s is %s, checking again in %.1fs", handle.name, current.state.value, self._poll_interval)
            await self._sleep(self._poll_interval)
            current = await self._query(handle.name)

        if self._on_settled is not None:
            self._on_settled(current)
        if current.state is HandleState.FAILED:
            raise RemoteProcessingFailedError(handle.name)

        logger.info("%s is ready after %d check(s)", handle.name, attempt + 1)
        return current

    async def _query(self, name: str) -> RemoteHandle:
        try:
            return await self._service.get_status(name)
        except RemoteServiceError as exc:
            raise TransportError(name, exc) from exc
