"""Rate limiting adapters.

This package provides a small abstraction layer so the service can start with
an in-memory timestamp store and later migrate to Redis or another shared store
without changing the API layer.
"""

from app.adapters.rate_limit.base import AbstractRateLimiter, RateLimitResult, RateLimitStore
from app.adapters.rate_limit.in_memory import InMemoryRateLimitStore
from app.adapters.rate_limit.sliding_window import UNKNOWN_CLIENT, SlidingWindowRateLimiter

__all__ = [
    "AbstractRateLimiter",
    "InMemoryRateLimitStore",
    "RateLimitResult",
    "RateLimitStore",
    "SlidingWindowRateLimiter",
    "UNKNOWN_CLIENT",
]
