# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-03
# Description: CircuitBreaker
# -----------------------------------------------------------------------------
import threading
import time
from typing import Callable, Optional


class CircuitBreaker:
    """
    Two-state breaker shared by the remote embedding and completion calls.

    Closed: allow() is True.
    Open:   allow() is False until the reopen deadline passes; the first
            allow() after that clears the Open state and lets the call through
            (there is no separate half-open state).

    `clock` returns seconds from a monotonic source; tests inject a fake one.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic, name: str = "openai"):
        self.name = name
        self._clock = clock
        self._lock = threading.Lock()
        self._open_until: Optional[float] = None

    def allow(self) -> bool:
        with self._lock:
            if self._open_until is None:
                return True
            if self._clock() >= self._open_until:
                self._open_until = None
                return True
            return False

    def open(self, duration_ms: int) -> None:
        with self._lock:
            self._open_until = self._clock() + duration_ms / 1000.0

    @property
    def is_open(self) -> bool:
        with self._lock:
            return self._open_until is not None and self._clock() < self._open_until

    def remaining_ms(self) -> int:
        with self._lock:
            if self._open_until is None:
                return 0
            return max(0, int((self._open_until - self._clock()) * 1000))
