"""
Result type - Success/Failure container for expected domain outcomes.

Every service operation returns a Result instead of raising for failures
the caller is expected to handle (unknown account, expired code, ...).
Infrastructure faults are never wrapped; they propagate as exceptions.
"""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

E = TypeVar("E")
R = TypeVar("R")


@dataclass(frozen=True)
class Failure(Generic[E]):
    """Failed outcome carrying a domain error."""

    error: E

    def is_success(self) -> bool:
        return False

    def is_failure(self) -> bool:
        return True


@dataclass(frozen=True)
class Success(Generic[R]):
    """Successful outcome carrying the operation's value."""

    value: R

    def is_success(self) -> bool:
        return True

    def is_failure(self) -> bool:
        return False


Result = Union[Failure[E], Success[R]]
