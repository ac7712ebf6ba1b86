"""Discriminated operation outcome.

Exactly one of ``value`` and ``error`` is meaningful. Use ``settle`` to turn
a raising operation into a Result when errors should be handled as values:

    result = await settle(secrets.inspect("db-pass"))
    if result.ok:
        print(result.value.id)
    else:
        print(result.error.code)
"""

from collections.abc import Awaitable
from dataclasses import dataclass
from typing import Generic, TypeVar

from podbind.errors import PodbindError

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Result(Generic[T]):
    """Outcome of one operation: a value or a PodbindError, never both."""

    _value: T | None = None
    _error: PodbindError | None = None

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(_value=value)

    @classmethod
    def failure(cls, error: PodbindError) -> "Result[T]":
        return cls(_error=error)

    @property
    def ok(self) -> bool:
        return self._error is None

    @property
    def value(self) -> T:
        """The success value.

        Raises:
            ValueError: If the result holds an error.
        """
        if self._error is not None:
            raise ValueError("Result holds an error, not a value") from self._error
        return self._value  # type: ignore[return-value]

    @property
    def error(self) -> PodbindError:
        """The failure.

        Raises:
            ValueError: If the result holds a value.
        """
        if self._error is None:
            raise ValueError("Result holds a value, not an error")
        return self._error

    def unwrap(self) -> T:
        """Return the value or raise the stored error."""
        if self._error is not None:
            raise self._error
        return self._value  # type: ignore[return-value]


async def settle(operation: Awaitable[T]) -> Result[T]:
    """Await an operation and capture PodbindError as a failed Result.

    Transport errors and cancellation are not PodbindError and still
    propagate.
    """
    try:
        value = await operation
    except PodbindError as exc:
        return Result.failure(exc)
    return Result.success(value)
