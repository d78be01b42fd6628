"""Per-user, per-operation-type sliding window admission control."""

from __future__ import annotations

import bisect
import threading
from collections import deque
from typing import Deque, Dict, FrozenSet, Iterable, Optional, Tuple

from oplimiter.clock import Clock, MonotonicClock
from oplimiter.errors import InvalidConfigurationError, UnknownUserError
from oplimiter.models import Operation, OperationType, User
from oplimiter.utils.logging import get_logger

WINDOW_SECONDS = 60

logger = get_logger(__name__)


def _validate_limit(name: str, value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidConfigurationError(f"{name} must be an integer, got {value!r}")
    if value <= 0:
        raise InvalidConfigurationError(f"{name} must be positive, got {value}")
    return value


class RateLimitEngine:
    """Decide whether users may perform operations within per-minute limits.

    Every known user owns one window of timestamps per operation type. A
    window only ever holds timestamps newer than ``now - WINDOW_SECONDS``
    once it has been pruned, and is kept in ascending order so that expired
    entries are always at the front.

    Callers ask :meth:`is_allowed` first and call :meth:`record_operation`
    once the operation actually ran, or use :meth:`try_acquire` to do both
    atomically.
    """

    def __init__(
        self,
        users: Iterable[User],
        read_limit_per_minute: int,
        write_limit_per_minute: int,
        clock: Optional[Clock] = None,
    ) -> None:
        self._limits: Dict[OperationType, int] = {
            OperationType.READ: _validate_limit(
                "read_limit_per_minute", read_limit_per_minute
            ),
            OperationType.WRITE: _validate_limit(
                "write_limit_per_minute", write_limit_per_minute
            ),
        }
        self._clock: Clock = clock or MonotonicClock()

        windows: Dict[str, Dict[OperationType, Deque[int]]] = {}
        locks: Dict[str, threading.Lock] = {}
        for user in users:
            if user.id in windows:
                raise InvalidConfigurationError(f"Duplicate user id: {user.id!r}")
            windows[user.id] = {op_type: deque() for op_type in OperationType}
            locks[user.id] = threading.Lock()

        # Both maps are read-only from here on; only the deques mutate.
        self._windows = windows
        self._locks = locks

        logger.info(
            "rate_limit_engine_created",
            users=len(windows),
            read_limit=read_limit_per_minute,
            write_limit=write_limit_per_minute,
        )

    @property
    def users(self) -> FrozenSet[str]:
        """Ids of every user the engine tracks."""
        return frozenset(self._windows)

    @property
    def window_seconds(self) -> int:
        return WINDOW_SECONDS

    def limit_for(self, operation_type: OperationType) -> int:
        """Return the per-minute ceiling configured for ``operation_type``."""
        return self._limits[OperationType.parse(operation_type)]

    def is_allowed(self, operation: Operation) -> bool:
        """Return whether ``operation`` fits in its user's current window.

        Expired timestamps are dropped as a side effect; nothing is recorded.

        Raises:
            UnknownUserError: If the operation's user was not registered.
        """
        lock, window = self._lookup(operation)
        with lock:
            now = self._clock.now()
            self._prune(window, now)
            return self._admit(operation, window)

    def record_operation(self, operation: Operation) -> None:
        """Count ``operation`` as performed at the current time.

        Raises:
            UnknownUserError: If the operation's user was not registered.
        """
        lock, window = self._lookup(operation)
        with lock:
            now = self._clock.now()
            self._prune(window, now)
            self._append(operation, window, now)

    def try_acquire(self, operation: Operation) -> bool:
        """Check and record ``operation`` under a single lock hold.

        Returns ``True`` and counts the operation if it was admitted, or
        ``False`` without recording anything.

        Raises:
            UnknownUserError: If the operation's user was not registered.
        """
        lock, window = self._lookup(operation)
        with lock:
            now = self._clock.now()
            self._prune(window, now)
            if not self._admit(operation, window):
                return False
            self._append(operation, window, now)
            return True

    def remaining(self, operation: Operation) -> int:
        """Return how many more operations of this kind fit right now."""
        lock, window = self._lookup(operation)
        with lock:
            self._prune(window, self._clock.now())
            return max(0, self._limits[operation.operation_type] - len(window))

    def snapshot(self, operation: Operation) -> Tuple[int, ...]:
        """Return a copy of the window for ``operation``, without pruning it."""
        lock, window = self._lookup(operation)
        with lock:
            return tuple(window)

    def _lookup(self, operation: Operation) -> Tuple[threading.Lock, Deque[int]]:
        buckets = self._windows.get(operation.user_id)
        if buckets is None:
            logger.warning(
                "unknown_user",
                user_id=operation.user_id,
                operation_type=operation.operation_type.value,
            )
            raise UnknownUserError(operation.user_id)
        return self._locks[operation.user_id], buckets[operation.operation_type]

    def _admit(self, operation: Operation, window: Deque[int]) -> bool:
        limit = self._limits[operation.operation_type]
        if len(window) < limit:
            return True
        logger.debug(
            "operation_denied",
            user_id=operation.user_id,
            operation_type=operation.operation_type.value,
            count=len(window),
            limit=limit,
        )
        return False

    @staticmethod
    def _prune(window: Deque[int], now: int) -> None:
        # A timestamp exactly WINDOW_SECONDS old has expired.
        cutoff = now - WINDOW_SECONDS
        while window and window[0] <= cutoff:
            window.popleft()

    @staticmethod
    def _append(operation: Operation, window: Deque[int], now: int) -> None:
        if window and window[-1] > now:
            logger.warning(
                "clock_regressed",
                user_id=operation.user_id,
                operation_type=operation.operation_type.value,
                now=now,
                newest=window[-1],
            )
            bisect.insort_right(window, now)
            return
        window.append(now)


__all__ = ["RateLimitEngine", "WINDOW_SECONDS"]
