"""Exceptions raised by the rate limiting engine."""

from __future__ import annotations


class RateLimiterError(Exception):
    """Base class for every error raised by this package."""


class UnknownUserError(RateLimiterError, KeyError):
    """Raised when an operation names a user the engine was not built with."""

    def __init__(self, user_id: str) -> None:
        super().__init__(user_id)
        self.user_id = user_id

    def __str__(self) -> str:
        return f"Unknown user: {self.user_id!r}"


class InvalidConfigurationError(RateLimiterError, ValueError):
    """Raised when the engine or its user registry is misconfigured."""


__all__ = ["RateLimiterError", "UnknownUserError", "InvalidConfigurationError"]
