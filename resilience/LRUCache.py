# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-03
# Description: LRUCache
# -----------------------------------------------------------------------------
import threading
from collections import OrderedDict
from typing import Generic, Hashable, Optional, TypeVar

V = TypeVar("V")


class LRUCache(Generic[V]):
    """
    Bounded least-recently-used cache.

    get() refreshes recency on a hit; put() evicts the single oldest entry
    when the capacity would be exceeded. Each call is atomic under the lock,
    the get-then-put sequence done by callers is not.
    """

    def __init__(self, capacity: int = 2000):
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self.capacity = capacity
        self._data: "OrderedDict[Hashable, V]" = OrderedDict()
        self._lock = threading.Lock()

    def get(self, key: Hashable) -> Optional[V]:
        with self._lock:
            if key not in self._data:
                return None
            self._data.move_to_end(key)
            return self._data[key]

    def put(self, key: Hashable, value: V) -> None:
        with self._lock:
            if key in self._data:
                self._data.move_to_end(key)
            elif len(self._data) >= self.capacity:
                self._data.popitem(last=False)
            self._data[key] = value

    def clear(self) -> None:
        with self._lock:
            self._data.clear()

    def __contains__(self, key: Hashable) -> bool:
        with self._lock:
            return key in self._data

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)
