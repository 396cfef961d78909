# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-10-16
# Description: RateLimiter
# -----------------------------------------------------------------------------
import math
import threading
import time
from typing import Callable, Dict, Tuple


class RateLimiter:
    """
    Fixed-window request counter per client key (e.g. remote address).

    hit(key) counts one request and returns False once `max_requests` have
    been seen inside the current `window_s` window. The window for a key
    starts at its first request. `clock` is injectable for tests.
    """

    # expired windows are swept once this many keys are tracked
    SWEEP_AT = 10_000

    def __init__(
            self,
            max_requests: int,
            window_s: float,
            clock: Callable[[], float] = time.monotonic,
            name: str = "ai",
    ):
        if max_requests <= 0 or window_s <= 0:
            raise ValueError("max_requests and window_s must be positive")
        self.max_requests = max_requests
        self.window_s = window_s
        self.name = name
        self._clock = clock
        self._lock = threading.Lock()
        self._windows: Dict[str, Tuple[float, int]] = {}  # key -> (window start, count)

    def hit(self, key: str) -> bool:
        now = self._clock()
        with self._lock:
            if len(self._windows) >= self.SWEEP_AT:
                self._sweep(now)

            start, count = self._windows.get(key, (now, 0))
            if now - start >= self.window_s:
                start, count = now, 0
            count += 1
            self._windows[key] = (start, count)
            return count <= self.max_requests

    def retry_after_s(self, key: str) -> int:
        """Whole seconds until the key's current window ends (0 when untracked)."""
        with self._lock:
            entry = self._windows.get(key)
        if entry is None:
            return 0
        return max(0, math.ceil(entry[0] + self.window_s - self._clock()))

    def _sweep(self, now: float) -> None:
        expired = [k for k, (start, _) in self._windows.items() if now - start >= self.window_s]
        for k in expired:
            del self._windows[k]
