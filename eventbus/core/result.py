"""Success-or-error value returned by scope-level operations.

Freezing a scope is an expected runtime condition (a subsystem shut down), so
:class:`~eventbus.bus.scope.EventScope` reports it as data rather than raising.
Callers branch on :attr:`Result.success` or call :meth:`Result.unwrap` to turn
the error back into an exception.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, TypeVar

from eventbus.core.errors import ResultError

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True, slots=True)
class Result(Generic[T]):
    """Outcome holding either ``value`` (success) or ``error`` (failure).

    Invariants:
        - success is True  -> error is None
        - success is False -> error is an Exception
    """

    success: bool
    value: T | None = None
    error: Exception | None = None

    def __post_init__(self) -> None:
        if self.success and self.error is not None:
            raise ValueError("Successful result must not carry an error.")
        if not self.success:
            if not isinstance(self.error, Exception):
                raise ValueError("Failed result must carry an Exception.")
            if self.value is not None:
                raise ValueError("Failed result must not carry a value.")

    def __bool__(self) -> bool:
        return self.success

    def unwrap(self) -> T:
        """Return the value, or raise the carried error."""

        if not self.success:
            raise self.error  # type: ignore[misc]
        return self.value  # type: ignore[return-value]

    def expect(self, message: str) -> T:
        """Return the value, or raise :class:`ResultError` with ``message``."""

        if not self.success:
            raise ResultError(f"{message}: {self.error}") from self.error
        return self.value  # type: ignore[return-value]

    def unwrap_or(self, default: T) -> T:
        return self.value if self.success else default  # type: ignore[return-value]

    def map(self, func: Callable[[T], U]) -> "Result[U]":
        if not self.success:
            return Result(success=False, error=self.error)
        return Result(success=True, value=func(self.value))  # type: ignore[arg-type]


def Ok(value: T | None = None) -> Result[T]:
    return Result(success=True, value=value)


def Err(error: Exception) -> Result[T]:
    return Result(success=False, error=error)


__all__ = ["Result", "Ok", "Err"]
