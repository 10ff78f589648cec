"""Sliding window rate limiter over an injectable timestamp store.

Each client keeps the timestamps of its recent admitted requests. A request is
admitted while fewer than ``limit`` of them fall inside the last
``window_seconds``; denied requests are not recorded.
"""

from __future__ import annotations

import math
import threading
import time
import zlib
from typing import Callable

from app.adapters.rate_limit.base import AbstractRateLimiter, RateLimitResult, RateLimitStore
from app.adapters.rate_limit.in_memory import InMemoryRateLimitStore

# Shared bucket for requests whose client address is unavailable
UNKNOWN_CLIENT = "unknown"

# Number of locks shared by all keys; two keys may map to the same lock
LOCK_STRIPES = 64


class SlidingWindowRateLimiter(AbstractRateLimiter):
    """Rate limiter counting requests in a sliding time window per key.

    Important:
        With the default in-memory store this limiter is per-process only.
        Pass a shared ``store`` to enforce limits across workers.
    """

    def __init__(
        self,
        *,
        limit: int,
        window_seconds: float,
        store: RateLimitStore | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the sliding window limiter.

        Args:
            limit: Maximum number of requests per window.
            window_seconds: Window length in seconds.
            store: Timestamp store; defaults to a fresh in-memory store.
            clock: Time source function returning UNIX time in seconds.

        Raises:
            ValueError: If limit or window_seconds are invalid.
        """
        if limit < 1:
            raise ValueError("limit must be >= 1")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be > 0")

        self._limit = limit
        self._window_seconds = window_seconds
        self._store = store if store is not None else InMemoryRateLimitStore()
        self._clock = clock
        self._key_locks = [threading.Lock() for _ in range(LOCK_STRIPES)]

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def window_seconds(self) -> float:
        return self._window_seconds

    @property
    def store(self) -> RateLimitStore:
        return self._store

    def _lock_for(self, key: str) -> threading.Lock:
        # Lock chosen by key hash from a fixed pool
        digest = zlib.crc32(key.encode())
        return self._key_locks[digest % LOCK_STRIPES]

    def _prune(self, timestamps: list[float], now: float) -> list[float]:
        return [ts for ts in timestamps if now - ts < self._window_seconds]

    def check(self, key: str | None, now: float | None = None) -> RateLimitResult:
        """Admit or deny one request for ``key``.

        Stale timestamps are dropped before counting. An admitted request is
        appended and the pruned window written back; a denied request leaves
        the store untouched.
        """
        key = key or UNKNOWN_CLIENT
        now = self._clock() if now is None else now

        with self._lock_for(key):
            recent = self._prune(self._store.get(key), now)

            if len(recent) < self._limit:
                recent.append(now)
                self._store.set(key, recent)
                return RateLimitResult(
                    allowed=True,
                    limit=self._limit,
                    remaining=self._limit - len(recent),
                    reset_at=int(math.ceil(recent[0] + self._window_seconds)),
                    retry_after_seconds=None,
                )

            reset_at = recent[0] + self._window_seconds
            return RateLimitResult(
                allowed=False,
                limit=self._limit,
                remaining=0,
                reset_at=int(math.ceil(reset_at)),
                retry_after_seconds=max(0, int(math.ceil(reset_at - now))),
            )

    def reset(self) -> None:
        self._store.clear()
