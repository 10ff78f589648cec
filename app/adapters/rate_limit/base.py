"""Rate limiter interfaces.

The API should depend on these abstractions (not the concrete implementation)
so we can swap storage backends later (e.g., Redis) with minimal changes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class RateLimitResult:
    """Result of a rate limit check.

    Attributes:
        allowed: Whether the request is allowed to proceed.
        limit: Max requests per window.
        remaining: Remaining requests in the current window (0 when blocked).
        reset_at: UNIX epoch seconds when the oldest counted request expires.
        retry_after_seconds: Suggested wait time in seconds when blocked.
    """

    allowed: bool
    limit: int
    remaining: int
    reset_at: int
    retry_after_seconds: int | None


class RateLimitStore(ABC):
    """Mapping of client identifier to its ordered request timestamps."""

    @abstractmethod
    def get(self, key: str) -> list[float]:
        """Return a copy of the timestamps recorded for ``key`` (oldest first)."""
        raise NotImplementedError

    @abstractmethod
    def set(self, key: str, timestamps: list[float]) -> None:
        """Replace the timestamps recorded for ``key``."""
        raise NotImplementedError

    @abstractmethod
    def clear(self) -> None:
        """Forget every key."""
        raise NotImplementedError


class AbstractRateLimiter(ABC):
    """Interface for rate limiters."""

    @abstractmethod
    def check(self, key: str | None, now: float | None = None) -> RateLimitResult:
        """Admit or deny one request for ``key``, recording it when admitted.

        Args:
            key: Client identifier (e.g., IP address). Empty values share a bucket.
            now: UNIX time in seconds; defaults to the limiter's clock.

        Returns:
            RateLimitResult describing whether it was allowed.
        """
        raise NotImplementedError

    def admit(self, key: str | None, now: float | None = None) -> bool:
        """Shorthand for ``check(key, now).allowed``."""
        return self.check(key, now).allowed

    @abstractmethod
    def reset(self) -> None:
        """Drop all recorded requests."""
        raise NotImplementedError
