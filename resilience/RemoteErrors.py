# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-04
# Updated: 2026-10-16
# Description: RemoteErrors
# -----------------------------------------------------------------------------
import threading
from concurrent.futures import Executor, TimeoutError as FutureTimeoutError
from typing import Any, Callable, TypeVar

import openai

import settings

T = TypeVar("T")


class RemoteTimeoutError(TimeoutError):
    """Remote AI call did not finish inside its time budget."""


class RemoteBusyError(RuntimeError):
    """Every worker stayed busy; the remote call was never started."""


def is_quota_error(err: BaseException) -> bool:
    """True for 429 / insufficient_quota style failures."""
    if isinstance(err, openai.RateLimitError):
        return True
    if getattr(err, "status_code", None) == 429 or getattr(err, "status", None) == 429:
        return True
    return getattr(err, "code", None) == "insufficient_quota"


def is_timeout_error(err: BaseException) -> bool:
    return isinstance(err, (RemoteTimeoutError, FutureTimeoutError, openai.APITimeoutError))


def is_busy_error(err: BaseException) -> bool:
    return isinstance(err, RemoteBusyError)


def cooldown_ms(err: BaseException) -> int:
    """Breaker cool-down for a failed remote call."""
    if is_quota_error(err):
        return settings.BREAKER_QUOTA_COOLDOWN_MS
    return settings.BREAKER_ERROR_COOLDOWN_MS


def call_with_timeout(
        executor: Executor,
        timeout_s: float,
        fn: Callable[..., T],
        *args: Any,
        queue_wait_s: float = settings.REMOTE_QUEUE_WAIT_S,
) -> T:
    """
    Run fn on the executor and give up timeout_s after it starts (the worker
    may finish later). Time spent queued behind other calls is not charged to
    timeout_s; it is bounded separately by queue_wait_s.
    """
    started = threading.Event()

    def run() -> T:
        started.set()
        return fn(*args)

    future = executor.submit(run)
    if not started.wait(queue_wait_s):
        if future.cancel():
            raise RemoteBusyError(f"no free worker within {queue_wait_s:.1f}s")
        # picked up just as the wait ran out
        started.wait()
    try:
        return future.result(timeout=timeout_s)
    except FutureTimeoutError as e:
        future.cancel()
        raise RemoteTimeoutError(f"remote call exceeded {timeout_s:.1f}s") from e


def describe(err: BaseException) -> str:
    code = getattr(err, "code", None)
    if code:
        return str(code)
    return str(err) or type(err).__name__
