"""In-memory timestamp store for the sliding window limiter.

Notes:
- Per-process only: running multiple workers multiplies the effective limit.
- Thread-safe: uses a lock around the shared mapping.
"""

from __future__ import annotations

import threading

from app.adapters.rate_limit.base import RateLimitStore


class InMemoryRateLimitStore(RateLimitStore):
    """Dict-backed store. State is lost on process restart."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._timestamps_by_key: dict[str, list[float]] = {}

    def __len__(self) -> int:
        with self._lock:
            return len(self._timestamps_by_key)

    def get(self, key: str) -> list[float]:
        with self._lock:
            return list(self._timestamps_by_key.get(key, ()))

    def set(self, key: str, timestamps: list[float]) -> None:
        with self._lock:
            self._timestamps_by_key[key] = list(timestamps)

    def clear(self) -> None:
        with self._lock:
            self._timestamps_by_key.clear()
