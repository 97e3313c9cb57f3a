"""retry_on_error: retry a failing operation until it succeeds or a time budget runs out."""

import asyncio
import inspect
import sys
from dataclasses import dataclass
from typing import Any

from await_run.clock import SystemClock

RETRY_INTERVAL_MS = 1000
ANONYMOUS_FUNCTION = "anonymous function"


@dataclass(frozen=True)
class RetrySuccess:
    value: Any
    success: bool = True


@dataclass(frozen=True)
class RetryTimeout:
    reason: str = "timeout"
    success: bool = False


def print_warning(message):
    print(f"Warning: {message}", file=sys.stderr)


def _operation_name(operation, label):
    if label:
        return label
    name = getattr(operation, "__name__", None)
    if not name or name == "<lambda>":
        return ANONYMOUS_FUNCTION
    return name


def format_retry_warning(name, error):
    return (
        "retry_on_error: An unexpected error has occurred:\n"
        f"  name: {name}\n"
        f"  error: {error}"
    )


async def retry_on_error(
    operation,
    timeout_ms: float,
    label=None,
    clock=None,
    warn=None,
    retry_interval_ms: float = RETRY_INTERVAL_MS,
):
    """Call operation until it succeeds, waiting retry_interval_ms after each failure.

    The deadline is measured from this call, not from each attempt. If it
    expires before an attempt succeeds, the in-flight attempt is cancelled
    and RetryTimeout is returned. Each failure seen before the deadline is
    reported once through warn.

    Returns:
        RetrySuccess(value) or RetryTimeout().
    """
    if clock is None:
        clock = SystemClock()
    if warn is None:
        warn = print_warning
    name = _operation_name(operation, label)
    started = clock.now()

    async def attempt_until_success():
        while True:
            try:
                value = operation()
                if inspect.isawaitable(value):
                    value = await value
                return value
            except Exception as error:
                if clock.now() - started < timeout_ms:
                    warn(format_retry_warning(name, error))
            await clock.sleep(retry_interval_ms)

    attempts = asyncio.ensure_future(attempt_until_success())
    deadline = asyncio.ensure_future(clock.sleep(timeout_ms))
    try:
        done, _ = await asyncio.wait(
            {attempts, deadline}, return_when=asyncio.FIRST_COMPLETED,
        )
    finally:
        attempts.cancel()
        deadline.cancel()

    # The deadline wins over a success that settles at or after it.
    if deadline in done or clock.now() - started >= timeout_ms:
        return RetryTimeout()
    return RetrySuccess(attempts.result())
