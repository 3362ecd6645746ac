"""Retry policy for calls to the remote service."""

from __future__ import annotations

import logging

import httpx
from google.genai import errors as genai_errors
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

logger = logging.getLogger(__name__)

HTTP_TOO_MANY_REQUESTS = 429
HTTP_SERVER_ERROR = 500


def is_retryable_error(exception: BaseException) -> bool:
    """Return True for rate limits, server errors and network failures."""
    if isinstance(exception, genai_errors.ServerError):
        return True
    if isinstance(exception, genai_errors.ClientError):
        return exception.code == HTTP_TOO_MANY_REQUESTS
    if isinstance(exception, httpx.HTTPStatusError):
        status = exception.response.status_code
        return status == HTTP_TOO_MANY_REQUESTS or status >= HTTP_SERVER_ERROR
    return isinstance(exception, (httpx.NetworkError, httpx.TimeoutException))


def get_async_retrying(
    max_attempts: int = 3,
    min_wait: float = 2.0,
    max_wait: float = 30.0,
    multiplier: float = 1.0,
) -> AsyncRetrying:
    """Get a tenacity AsyncRetrying object for ``async for attempt in ...`` loops.

    The last exception is re-raised once attempts are exhausted.
    """
    return AsyncRetrying(
        stop=stop_after_attempt(max_attempts),
        wait=wait_exponential(multiplier=multiplier, min=min_wait, max=max_wait),
        retry=retry_if_exception(is_retryable_error),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )
