"""File reads with retry for transient errors.

Transient errnos (EAGAIN, EBUSY, ETIMEDOUT, EMFILE, ENFILE) are retried with
capped exponential backoff; every other OSError fails immediately.
"""

from __future__ import annotations

import asyncio
import errno
import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

import aiofiles

from favicon_engine.core.config import RetryPolicy
from favicon_engine.infrastructure.exceptions import (
    IconNotFoundError,
    IconPermissionError,
    IconReadFailedError,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

RETRYABLE_ERRNOS: frozenset[int] = frozenset({
    errno.EAGAIN,
    errno.EBUSY,
    errno.ETIMEDOUT,
    errno.EMFILE,
    errno.ENFILE,
})

_PERMISSION_ERRNOS = frozenset({errno.EACCES, errno.EPERM})


def _errno_name(err: OSError) -> str:
    return errno.errorcode.get(err.errno or 0, "UNKNOWN")


def is_retryable_error(err: BaseException) -> bool:
    """Return True if err is an OSError with a transient errno."""
    return isinstance(err, OSError) and err.errno in RETRYABLE_ERRNOS


async def retry_file_operation(
    operation: Callable[[], Awaitable[T]],
    policy: RetryPolicy | None = None,
    operation_name: str = "file operation",
) -> T:
    """Run operation, retrying transient OSErrors with exponential backoff.

    Args:
        operation: Zero-argument coroutine factory (called once per attempt).
        policy: Retry budget and backoff; defaults to RetryPolicy().
        operation_name: Label for log messages.

    Returns:
        The operation's result.

    Raises:
        OSError: The non-retryable error, or the last transient error once
            the retry budget is spent.
    """
    policy = policy or RetryPolicy()
    attempt = 0
    while True:
        try:
            return await operation()
        except OSError as err:
            if not is_retryable_error(err):
                raise
            if attempt >= policy.max_retries:
                if attempt > 0:
                    logger.warning(
                        "%s failed after %s attempts (%s)",
                        operation_name,
                        attempt + 1,
                        _errno_name(err),
                    )
                raise
            delay = policy.delay_for(attempt)
            logger.debug(
                "Retrying %s after %s (attempt %s/%s, delay %.3fs)",
                operation_name,
                _errno_name(err),
                attempt + 1,
                policy.max_retries,
                delay,
            )
            await asyncio.sleep(delay)
            attempt += 1


async def _read_bytes(file_path: str) -> bytes:
    async with aiofiles.open(file_path, "rb") as f:
        return await f.read()


async def read_icon_file(file_path: str, policy: RetryPolicy | None = None) -> bytes:
    """Read an icon file, retrying transient errors.

    Args:
        file_path: Path returned by icon discovery.
        policy: Retry budget for transient errors.

    Returns:
        File contents.

    Raises:
        IconNotFoundError: File vanished after discovery.
        IconPermissionError: EACCES / EPERM.
        IconReadFailedError: Any other OSError, including exhausted retries.
    """
    try:
        return await retry_file_operation(
            lambda: _read_bytes(file_path),
            policy,
            operation_name=f"reading {file_path}",
        )
    except FileNotFoundError as e:
        raise IconNotFoundError(file_path) from e
    except OSError as e:
        code = _errno_name(e)
        if e.errno in _PERMISSION_ERRNOS:
            raise IconPermissionError(file_path, code) from e
        raise IconReadFailedError(file_path, code, str(e)) from e
