# memory/ttl_cache.py
from __future__ import annotations

import time
from typing import Any, Callable, Dict, Generic, Hashable, Optional, Tuple, TypeVar

T = TypeVar("T")


class TTLCache(Generic[T]):
    """
    Process-wide memo: key -> (stored_at, value).
    Entries expire after `ttl_seconds`; there is no size bound.
    """

    def __init__(self, ttl_seconds: float, clock: Callable[[], float] = time.time):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._data: Dict[Hashable, Tuple[float, T]] = {}

    def get(self, key: Hashable) -> Optional[T]:
        entry = self._data.get(key)
        if not entry:
            return None
        ts, value = entry
        if self._clock() - ts <= self.ttl_seconds:
            return value
        self._data.pop(key, None)
        return None

    def set(self, key: Hashable, value: T) -> None:
        self._data[key] = (self._clock(), value)

    def pop(self, key: Hashable) -> None:
        self._data.pop(key, None)

    def clear(self) -> None:
        self._data.clear()

    def __contains__(self, key: Any) -> bool:
        return self.get(key) is not None

    def __len__(self) -> int:
        return len(self._data)
