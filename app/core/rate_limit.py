"""Rate limiting wiring for the HTTP layer.

This module owns the process-wide limiter instance and the helpers that turn
limiter decisions into HTTP details.

Design goals:
- Minimal coupling: the contact pipeline depends on the limiter interface only.
- Swap-friendly: the timestamp store can be replaced (e.g., Redis) behind an
  abstract interface.

Rate limiting strategy:
- Sliding window per client address (5 submissions per 15 minutes by default).
- Requests without a client address share the "unknown" bucket.
"""

from __future__ import annotations

import hashlib

from fastapi import Request

from app.adapters.rate_limit.base import AbstractRateLimiter, RateLimitResult
from app.adapters.rate_limit.sliding_window import UNKNOWN_CLIENT, SlidingWindowRateLimiter
from app.core.config import settings

RATE_LIMIT_MESSAGE = "Too many requests. Please try again later."


_limiter: AbstractRateLimiter | None = None
_limiter_config: tuple[int, int] | None = None


def get_rate_limiter() -> AbstractRateLimiter:
    """Return the process-wide rate limiter instance.

    The instance is cached in-module to preserve state across requests.
    If configuration changes (primarily in tests), the limiter is rebuilt.

    Returns:
        AbstractRateLimiter: Configured limiter instance.
    """

    global _limiter, _limiter_config

    config = (
        settings.app.rate_limit_requests,
        settings.app.rate_limit_window_seconds,
    )

    if _limiter is None or _limiter_config != config:
        _limiter = SlidingWindowRateLimiter(
            limit=settings.app.rate_limit_requests,
            window_seconds=settings.app.rate_limit_window_seconds,
        )
        _limiter_config = config

    return _limiter


def get_optional_rate_limiter() -> AbstractRateLimiter | None:
    """FastAPI dependency: the limiter, or None when rate limiting is disabled."""

    if not settings.app.rate_limit_enabled:
        return None
    return get_rate_limiter()


def clear_rate_limit() -> None:
    """Forget every recorded request on the process-wide limiter."""

    if _limiter is not None:
        _limiter.reset()


def client_identifier(request: Request) -> str:
    """Connection-level client address used as the limiter key."""

    return request.client.host if request.client and request.client.host else UNKNOWN_CLIENT


def hash_limiter_key(key: str) -> str:
    """Hash the rate limit key for logging without exposing addresses."""
    return hashlib.sha256(key.encode()).hexdigest()[:16]


def rate_limit_headers(result: RateLimitResult) -> dict[str, str]:
    """Build throttling headers for a denied request (empty when disabled)."""

    if not settings.app.rate_limit_include_headers:
        return {}

    return {
        "Retry-After": str(result.retry_after_seconds or 0),
        "X-RateLimit-Limit": str(result.limit),
        "X-RateLimit-Remaining": str(result.remaining),
        "X-RateLimit-Reset": str(result.reset_at),
    }
