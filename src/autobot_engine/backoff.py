import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional, TypeVar

import aiohttp

from autobot_engine.config import get_settings
from autobot_engine.exceptions import NoAttemptsError

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def snooze(ms: float) -> None:
    """
    Suspend the current coroutine for the given number of milliseconds.
    """
    await asyncio.sleep(max(0, ms) / 1000)


async def retry(
    operation: Callable[[], Awaitable[T]],
    max_attempts: Optional[int] = None,
    base_delay_ms: Optional[float] = None,
) -> T:
    """
    Run an async operation, retrying failures with a linear backoff.

    After failed attempt k the retrier waits k * base_delay_ms before trying
    again, so the waits are base, 2*base, 3*base, ... Every exception counts as
    retryable. When all attempts fail the error from the last attempt is
    re-raised unchanged.

    Args:
        operation: Zero-argument callable returning an awaitable.
        max_attempts: Total number of attempts. Defaults to the configured value.
        base_delay_ms: Backoff unit in milliseconds. Defaults to the configured value.

    Raises:
        NoAttemptsError: If max_attempts <= 0. The operation is never called.
    """
    settings = get_settings()
    if max_attempts is None:
        max_attempts = settings.retry_max_attempts
    if base_delay_ms is None:
        base_delay_ms = settings.retry_base_delay_ms
    if max_attempts <= 0:
        raise NoAttemptsError(max_attempts)

    attempt = 1
    while True:
        try:
            return await operation()
        except Exception as e:
            if attempt >= max_attempts:
                logger.warning(f"Attempt {attempt}/{max_attempts} failed, giving up: {e!r}")
                raise
            delay_ms = base_delay_ms * attempt
            logger.warning(f"Attempt {attempt}/{max_attempts} failed, retrying in {delay_ms}ms: {e!r}")
        await snooze(delay_ms)
        attempt += 1


async def retry_fetch(
    session: aiohttp.ClientSession,
    url: str,
    method: str = "GET",
    max_attempts: Optional[int] = None,
    base_delay_ms: Optional[float] = None,
    **kwargs: Any,
) -> aiohttp.ClientResponse:
    """
    Make an HTTP request, retrying transport failures with a linear backoff.

    Any response counts as a success, whatever its status code. Extra keyword
    arguments are passed to session.request (headers, params, json, ...).
    """

    async def _request() -> aiohttp.ClientResponse:
        return await session.request(method=method, url=url, **kwargs)

    return await retry(_request, max_attempts=max_attempts, base_delay_ms=base_delay_ms)
