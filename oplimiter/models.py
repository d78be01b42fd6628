"""Value types shared by the engine and its callers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


class OperationType(Enum):
    """Kinds of operations that are limited independently."""

    READ = "read"
    WRITE = "write"

    @classmethod
    def parse(cls, value: Union["OperationType", str]) -> "OperationType":
        """Return the member for ``value``, accepting names or values in any case."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            normalized = value.strip().lower()
            for member in cls:
                if member.value == normalized:
                    return member
        raise ValueError(f"Unknown operation type: {value!r}")


@dataclass(frozen=True)
class User:
    """A rate-limited identity.

    Attributes:
        id: Stable unique identifier, the only field the engine reads.
        login: Display name.
    """

    id: str
    login: str


@dataclass(frozen=True)
class Operation:
    """A request to perform (or a record of having performed) an operation."""

    user_id: str
    operation_type: OperationType

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "operation_type", OperationType.parse(self.operation_type)
        )
