"""Result — the uniform return contract of every service operation.

Invariants:
    - A Result is exactly one of Ok(value) or Err(error)
    - Err.error is a fixed, human-readable message (never driver text)
    - Callers check result.is_ok before touching .value

Design Decisions:
    - Return-instead-of-raise for expected domain failures (duplicate username,
      not found, bad credentials); exceptions stay for programming errors
    - Frozen dataclasses: results are values, never mutated after creation
"""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful outcome carrying the operation's value."""
    value: T

    @property
    def is_ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    """Failed outcome carrying a fixed error message."""
    error: str

    @property
    def is_ok(self) -> bool:
        return False

    def to_response(self) -> dict:
        """Wire shape of a failed operation."""
        return {"error": self.error}


Result = Union[Ok[T], Err]
