"""In-process sliding-window rate limiting for read and write operations."""

from oplimiter.clock import Clock, ManualClock, MonotonicClock, SystemClock
from oplimiter.engine import RateLimitEngine
from oplimiter.errors import (
    InvalidConfigurationError,
    RateLimiterError,
    UnknownUserError,
)
from oplimiter.models import Operation, OperationType, User

__all__ = [
    "Clock",
    "InvalidConfigurationError",
    "ManualClock",
    "MonotonicClock",
    "Operation",
    "OperationType",
    "RateLimitEngine",
    "RateLimiterError",
    "SystemClock",
    "UnknownUserError",
    "User",
]
