"""Engine assembly from settings."""

from __future__ import annotations

from typing import List, Optional

from oplimiter.clock import Clock
from oplimiter.config import Settings, load_settings
from oplimiter.engine import RateLimitEngine
from oplimiter.models import User
from oplimiter.registry import load_users
from oplimiter.utils.logging import configure_logging


def create_engine(
    settings: Optional[Settings] = None,
    users: Optional[List[User]] = None,
    clock: Optional[Clock] = None,
) -> RateLimitEngine:
    """Build a ready-to-use engine.

    Users come from ``users`` when given, otherwise from the registry file
    named by ``settings.users_file``.
    """
    settings = settings or load_settings()
    configure_logging(settings.log_level)

    if users is None:
        users = load_users(settings.users_file)

    return RateLimitEngine(
        users,
        read_limit_per_minute=settings.read_limit_per_min,
        write_limit_per_minute=settings.write_limit_per_min,
        clock=clock,
    )


__all__ = ["create_engine"]
