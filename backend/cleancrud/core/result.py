"""Result — success/failure wrapper returned instead of raising for expected failures.

Invariants:
    - A success carries a value (possibly None) and never any errors
    - A failure carries at least one Error and never exposes a value
    - Result and Error are immutable

Design Decisions:
    - ErrorKind drives the HTTP status at the web boundary; the core never
      knows about status codes (mapping lives in core/errors.py)
    - Frozen dataclasses over pydantic: the core stays dependency-free
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Generic, TypeVar

T = TypeVar("T")
U = TypeVar("U")


class ErrorKind(str, Enum):
    """Why a request failed — decides how the caller reacts."""
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    BUSINESS_RULE = "business_rule"


@dataclass(frozen=True)
class Error:
    """A single expected failure."""
    code: str
    message: str
    kind: ErrorKind = ErrorKind.VALIDATION
    field: str | None = None


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of a request: success-with-value or failure-with-errors."""
    _value: T | None = None
    errors: tuple[Error, ...] = ()

    @classmethod
    def success(cls, value: T | None = None) -> "Result[T]":
        return cls(_value=value)

    @classmethod
    def failure(cls, *errors: Error) -> "Result[T]":
        if not errors:
            raise ValueError("failure requires at least one error")
        return cls(errors=tuple(errors))

    @property
    def succeeded(self) -> bool:
        return not self.errors

    @property
    def failed(self) -> bool:
        return bool(self.errors)

    @property
    def value(self) -> T | None:
        if self.failed:
            raise ValueError("failed result has no value")
        return self._value

    def unwrap(self) -> T | None:
        """Value of a success; raises ValueError listing the error codes otherwise."""
        if self.failed:
            codes = ", ".join(e.code for e in self.errors)
            raise ValueError(f"result failed: {codes}")
        return self._value

    def map(self, fn: Callable[[T], U]) -> "Result[U]":
        """Transform the value of a success; failures pass through unchanged."""
        if self.failed:
            return Result(errors=self.errors)
        return Result(_value=fn(self._value))
