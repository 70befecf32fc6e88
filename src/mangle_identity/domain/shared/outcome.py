"""Tagged outcome values returned by the identity core.

An ``Outcome`` carries either a success value or a ``Failure``, never both.
Application services return outcomes instead of raising, so callers have to
look at the result before using it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

from mangle_identity.domain.shared.exceptions import DomainException, ErrorCode

T = TypeVar("T")


@dataclass(frozen=True)
class Failure:
    """A failed operation: error kind plus enough context to report it."""

    code: ErrorCode
    message: str
    key: str | None = None

    @classmethod
    def from_exception(cls, exc: DomainException) -> Failure:
        return cls(code=exc.code, message=exc.message, key=exc.key)

    def to_exception(self) -> DomainException:
        return DomainException(self.message, code=self.code, key=self.key)


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Success value XOR failure."""

    value: T | None = None
    failure: Failure | None = None

    def __post_init__(self) -> None:
        if self.value is not None and self.failure is not None:
            msg = "Outcome cannot carry both a value and a failure"
            raise ValueError(msg)

    @classmethod
    def ok(cls, value: T) -> Outcome[T]:
        return cls(value=value)

    @classmethod
    def fail(cls, failure: Failure) -> Outcome[T]:
        return cls(failure=failure)

    @classmethod
    def from_exception(cls, exc: DomainException) -> Outcome[T]:
        return cls(failure=Failure.from_exception(exc))

    @property
    def is_ok(self) -> bool:
        return self.failure is None

    @property
    def code(self) -> ErrorCode | None:
        return self.failure.code if self.failure else None
