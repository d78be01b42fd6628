"""Helpers for loading the set of known users."""

from __future__ import annotations

import json
from pathlib import Path
from typing import List, Optional

from oplimiter.errors import InvalidConfigurationError
from oplimiter.models import User
from oplimiter.utils.logging import get_logger

logger = get_logger(__name__)


def load_users(path: Optional[Path] = None) -> List[User]:
    """Load users from a JSON array of ``{"id": ..., "login": ...}`` objects.

    Returns an empty list when no path is given.
    """
    if path is None:
        return []

    if not path.exists():
        raise FileNotFoundError(f"User registry not found: {path}")

    with path.open("r", encoding="utf-8") as handle:
        try:
            data = json.load(handle)
        except json.JSONDecodeError as exc:
            raise InvalidConfigurationError(
                f"User registry {path} is not valid JSON: {exc}"
            ) from exc

    if not isinstance(data, list):
        raise InvalidConfigurationError(f"User registry {path} must be a JSON array")

    users: List[User] = []
    for index, entry in enumerate(data):
        if not isinstance(entry, dict):
            raise InvalidConfigurationError(f"User #{index} in {path} is not an object")
        user_id = entry.get("id")
        if not user_id or not isinstance(user_id, str):
            raise InvalidConfigurationError(f"User #{index} in {path} has no string id")
        login = entry.get("login")
        users.append(User(id=user_id, login=login if isinstance(login, str) else ""))

    logger.info("users_loaded", path=str(path), count=len(users))
    return users


__all__ = ["load_users"]
