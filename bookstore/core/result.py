"""Result — tagged success/failure value returned by every service operation.

Invariants:
    - Exactly one of value/error is meaningful: success <=> error is None
    - ok(None) is a valid success (used for "not found" reads that map to 404)
    - unwrap() raises the carried BookStoreError; the global handler maps it to HTTP

Design Decisions:
    - Frozen dataclass over exceptions for expected business failures:
      callers must check success before using value
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

from bookstore.core.errors import BookStoreError

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    value: T | None = None
    error: BookStoreError | None = None

    @property
    def success(self) -> bool:
        return self.error is None

    @classmethod
    def ok(cls, value: T | None) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def fail(cls, error: BookStoreError) -> "Result[T]":
        return cls(error=error)

    def unwrap(self) -> T | None:
        """Return the value or raise the carried error."""
        if self.error is not None:
            raise self.error
        return self.value
