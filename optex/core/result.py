"""Result[T, E] — error values instead of exceptions.

Every exercise/rebate operation that can violate a contract returns
Ok[T] | Err[E]. Ok wraps the computed value; Err wraps an OptexError.

Supports: .map, .and_then, .unwrap, .unwrap_or.
Free functions: unwrap, sequence.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any, NoReturn, final


@final
@dataclass(frozen=True, slots=True)
class Ok[T]:
    """Success variant of Result."""

    value: T

    def map[U](self, f: Callable[[T], U]) -> Ok[U]:
        return Ok(f(self.value))

    def and_then[U, E](self, f: Callable[[T], Ok[U] | Err[E]]) -> Ok[U] | Err[E]:
        """Chain a computation that itself returns a Result."""
        return f(self.value)

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: T) -> T:  # noqa: ARG002
        return self.value


@final
@dataclass(frozen=True, slots=True)
class Err[E]:
    """Error variant of Result. Short-circuits map and and_then."""

    error: E

    def map(self, f: Callable[[Any], Any]) -> Err[E]:  # noqa: ARG002
        return self

    def and_then(self, f: Callable[[Any], Any]) -> Err[E]:  # noqa: ARG002
        return self

    def unwrap(self) -> NoReturn:
        """Raise RuntimeError — there is no value to return."""
        raise RuntimeError(f"Called unwrap on Err: {self.error}")

    def unwrap_or[T](self, default: T) -> T:
        return default


type Result[T, E] = Ok[T] | Err[E]


def unwrap[T](result: Ok[T] | Err[Any]) -> T:
    """Extract Ok value or raise RuntimeError. Test/boundary code only."""
    if isinstance(result, Ok):
        return result.value
    if isinstance(result, Err):
        raise RuntimeError(f"unwrap on Err: {result.error}")
    raise TypeError(f"Expected Ok or Err, got {type(result).__name__}")


def sequence[T, E](results: Iterable[Ok[T] | Err[E]]) -> Ok[tuple[T, ...]] | Err[E]:
    """Collect Results into a Result of tuple. Stops at the first Err."""
    values: list[T] = []
    for r in results:
        if isinstance(r, Err):
            return r
        values.append(r.value)
    return Ok(tuple(values))
