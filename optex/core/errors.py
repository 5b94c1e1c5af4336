"""Error value hierarchy — no exercise or rebate accessor raises.

Every error is a frozen dataclass value that can be pattern-matched and
inspected. Base class OptexError, five @final subclasses. All of them are
contract violations: nothing here is transient or retried.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import final

from optex.core.types import UtcDatetime


@dataclass(frozen=True, slots=True)
class OptexError:
    """Base error value. NOT @final — has subclasses."""

    message: str
    code: str
    timestamp: UtcDatetime
    source: str  # "module.function" that produced this error

    def with_context(self, context: str) -> OptexError:
        """Return a copy with context prepended to message."""
        return replace(self, message=f"{context}: {self.message}")

    def to_dict(self) -> dict[str, object]:
        return {
            "message": self.message,
            "code": self.code,
            "timestamp": self.timestamp.value.isoformat(),
            "source": self.source,
        }


@final
@dataclass(frozen=True, slots=True)
class FieldViolation:
    """Describes a single field validation failure."""

    path: str  # e.g. "settlement.settlement_days"
    constraint: str  # e.g. "must be >= 0"
    actual_value: str  # e.g. "-1"


@final
@dataclass(frozen=True, slots=True)
class ValidationError(OptexError):
    """One or more constructor arguments failed validation."""

    fields: tuple[FieldViolation, ...]

    def to_dict(self) -> dict[str, object]:
        return {
            **OptexError.to_dict(self),
            "fields": [
                {"path": f.path, "constraint": f.constraint, "actual_value": f.actual_value}
                for f in self.fields
            ],
        }


@final
@dataclass(frozen=True, slots=True)
class IndexOutOfRangeError(OptexError):
    """Indexed accessor called with an index outside [0, size)."""

    index: int
    size: int

    def to_dict(self) -> dict[str, object]:
        return {**OptexError.to_dict(self), "index": self.index, "size": self.size}


@final
@dataclass(frozen=True, slots=True)
class SizeMismatchError(OptexError):
    """Per-date sequence length differs from the exercise date count."""

    expected: int
    actual: int

    def to_dict(self) -> dict[str, object]:
        return {**OptexError.to_dict(self), "expected": self.expected, "actual": self.actual}


@final
@dataclass(frozen=True, slots=True)
class UnsupportedOperationError(OptexError):
    """Operation is not defined for this exercise type."""

    operation: str
    exercise_type: str

    def to_dict(self) -> dict[str, object]:
        return {
            **OptexError.to_dict(self),
            "operation": self.operation,
            "exercise_type": self.exercise_type,
        }


@final
@dataclass(frozen=True, slots=True)
class InvalidDateOrderingError(OptexError):
    """Exercise dates are empty or not strictly ascending."""

    dates: tuple[str, ...]  # ISO-formatted, as supplied

    def to_dict(self) -> dict[str, object]:
        return {**OptexError.to_dict(self), "dates": list(self.dates)}
