from __future__ import annotations

from dataclasses import dataclass
from functools import wraps
from typing import Callable, Generic, Optional, TypeVar

from circulation.errors import ErrorKind, LibraryError, error_for

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of a public Library operation: either a value or one error kind."""

    value: Optional[T] = None
    error: Optional[ErrorKind] = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T, message: str = "") -> "Result[T]":
        return cls(value=value, message=message)

    @classmethod
    def failure(cls, error: ErrorKind, message: str) -> "Result[T]":
        return cls(error=error, message=message)

    def unwrap(self) -> T:
        """Return the value, or raise the exception matching the error kind."""
        if self.error is not None:
            raise error_for(self.error, self.message)
        return self.value  # type: ignore[return-value]


def returns_result(func: Callable[..., T]) -> Callable[..., Result[T]]:
    """Wrap an operation so domain failures come back as Result.failure."""
    @wraps(func)
    def wrapper(*args, **kwargs) -> Result[T]:
        try:
            return Result.success(func(*args, **kwargs))
        except LibraryError as e:
            return Result.failure(e.kind, e.message)
    return wrapper
