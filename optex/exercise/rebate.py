"""Rebated exercise — a rebate amount attached to every exercise date.

On exercise the holder receives the rebate (if positive) or pays it (if
negative) on the rebate payment date: the exercise date advanced by the
settlement days under the settlement calendar and convention.

A rebate is given either as one amount for all dates (ScalarRebate) or one
amount per exercise date (PerDateRebate); both resolve to a per-date tuple
at construction.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import assert_never, final

from optex.config import (
    DEFAULT_CONVENTION,
    DEFAULT_REBATE,
    DEFAULT_SETTLEMENT_DAYS,
    RebateSettlement,
)
from optex.core.calendar import Calendar
from optex.core.errors import (
    FieldViolation,
    IndexOutOfRangeError,
    SizeMismatchError,
    UnsupportedOperationError,
    ValidationError,
)
from optex.core.result import Err, Ok, sequence
from optex.core.types import BusinessDayConvention, UtcDatetime
from optex.exercise.styles import Exercise, ExerciseType

logger = logging.getLogger(__name__)

type RebateAmount = Decimal | float | int


def _is_finite_decimal(value: object) -> bool:
    return isinstance(value, Decimal) and value.is_finite()


# ---------------------------------------------------------------------------
# RebateSpec
# ---------------------------------------------------------------------------


@final
@dataclass(frozen=True, slots=True)
class ScalarRebate:
    """One rebate amount, broadcast to every exercise date."""

    amount: Decimal

    def __post_init__(self) -> None:
        if not _is_finite_decimal(self.amount):
            raise TypeError(f"ScalarRebate.amount must be finite Decimal, got {self.amount!r}")


@final
@dataclass(frozen=True, slots=True)
class PerDateRebate:
    """One rebate amount per exercise date, in exercise date order."""

    amounts: tuple[Decimal, ...]

    def __post_init__(self) -> None:
        if not isinstance(self.amounts, tuple):
            object.__setattr__(self, "amounts", tuple(self.amounts))
        for i, a in enumerate(self.amounts):
            if not _is_finite_decimal(a):
                raise TypeError(f"PerDateRebate.amounts[{i}] must be finite Decimal, got {a!r}")


type RebateSpec = ScalarRebate | PerDateRebate


def _parse_amount(raw: object, path: str) -> Ok[Decimal] | FieldViolation:
    if isinstance(raw, bool) or not isinstance(raw, Decimal | float | int):
        return FieldViolation(path=path, constraint="must be a number", actual_value=repr(raw))
    value = raw if isinstance(raw, Decimal) else Decimal(str(raw))
    if not value.is_finite():
        return FieldViolation(path=path, constraint="must be finite", actual_value=str(raw))
    return Ok(value)


def parse_rebate_spec(
    rebate: RebateSpec | RebateAmount | Sequence[RebateAmount],
) -> Ok[RebateSpec] | Err[ValidationError]:
    """Coerce a bare amount or a sequence of amounts into a RebateSpec."""
    if isinstance(rebate, ScalarRebate | PerDateRebate):
        return Ok(rebate)
    violations: list[FieldViolation] = []
    if isinstance(rebate, Sequence) and not isinstance(rebate, str):
        amounts: list[Decimal] = []
        for i, raw in enumerate(rebate):
            match _parse_amount(raw, f"rebates[{i}]"):
                case Ok(v):
                    amounts.append(v)
                case FieldViolation() as fv:
                    violations.append(fv)
        if not violations:
            return Ok(PerDateRebate(amounts=tuple(amounts)))
    else:
        match _parse_amount(rebate, "rebate"):
            case Ok(v):
                return Ok(ScalarRebate(amount=v))
            case FieldViolation() as fv:
                violations.append(fv)
    return Err(ValidationError(
        message="RebatedExercise: invalid rebate amount",
        code="INVALID_REBATE",
        timestamp=UtcDatetime.now(),
        source="exercise.rebate.parse_rebate_spec",
        fields=tuple(violations),
    ))


def resolve_rebates(
    spec: RebateSpec, exercise: Exercise,
) -> Ok[tuple[Decimal, ...]] | Err[SizeMismatchError]:
    """Expand a RebateSpec into one amount per exercise date."""
    size = len(exercise.dates)
    match spec:
        case ScalarRebate(amount=amount):
            return Ok((amount,) * size)
        case PerDateRebate(amounts=amounts):
            if len(amounts) != size:
                return Err(SizeMismatchError(
                    message=(
                        f"size mismatch between exercise dates ({size}) "
                        f"and rebates ({len(amounts)})"
                    ),
                    code="SIZE_MISMATCH",
                    timestamp=UtcDatetime.now(),
                    source="exercise.rebate.resolve_rebates",
                    expected=size,
                    actual=len(amounts),
                ))
            return Ok(amounts)
        case _never:
            assert_never(_never)


# ---------------------------------------------------------------------------
# RebatedExercise
# ---------------------------------------------------------------------------


@final
@dataclass(frozen=True, slots=True)
class RebatedExercise:
    """An exercise with a rebate per exercise date.

    type, dates, last_date and date_at delegate to the wrapped exercise.
    Invariant: len(rebates) == len(exercise.dates).
    """

    exercise: Exercise
    rebates: tuple[Decimal, ...]
    settlement: RebateSettlement = field(default_factory=RebateSettlement)

    def __post_init__(self) -> None:
        if not isinstance(self.rebates, tuple):
            object.__setattr__(self, "rebates", tuple(self.rebates))
        if len(self.rebates) != len(self.exercise.dates):
            raise TypeError(
                f"RebatedExercise: {len(self.rebates)} rebates for "
                f"{len(self.exercise.dates)} exercise dates"
            )

    @staticmethod
    def create(
        exercise: Exercise,
        rebate: RebateSpec | RebateAmount | Sequence[RebateAmount] = DEFAULT_REBATE,
        settlement_days: int = DEFAULT_SETTLEMENT_DAYS,
        calendar: Calendar | None = None,
        convention: BusinessDayConvention = DEFAULT_CONVENTION,
    ) -> Ok[RebatedExercise] | Err[SizeMismatchError | ValidationError]:
        match parse_rebate_spec(rebate):
            case Err(e):
                return Err(e)
            case Ok(spec):
                pass
        match resolve_rebates(spec, exercise):
            case Err(e):
                return Err(e)
            case Ok(rebates):
                pass
        match RebateSettlement.create(settlement_days, calendar, convention):
            case Err(e):
                return Err(e)
            case Ok(settlement):
                pass
        logger.debug(
            "RebatedExercise: %s exercise, %s rebates, %s settlement days (%s)",
            exercise.type.value, len(rebates), settlement.settlement_days,
            settlement.convention,
        )
        return Ok(RebatedExercise(exercise=exercise, rebates=rebates, settlement=settlement))

    @property
    def type(self) -> ExerciseType:
        return self.exercise.type

    @property
    def dates(self) -> tuple[date, ...]:
        return self.exercise.dates

    @property
    def last_date(self) -> date:
        return self.exercise.last_date

    def date_at(self, index: int) -> Ok[date] | Err[IndexOutOfRangeError]:
        return self.exercise.date_at(index)

    def rebate_at(self, index: int) -> Ok[Decimal] | Err[IndexOutOfRangeError]:
        size = len(self.rebates)
        if not 0 <= index < size:
            return Err(IndexOutOfRangeError(
                message=(
                    f"rebate with index {index} does not exist "
                    f"(valid range [0, {size - 1}])"
                ),
                code="INDEX_OUT_OF_RANGE",
                timestamp=UtcDatetime.now(),
                source="exercise.rebate.RebatedExercise.rebate_at",
                index=index,
                size=size,
            ))
        return Ok(self.rebates[index])

    def rebate_payment_date_at(
        self, index: int,
    ) -> Ok[date] | Err[UnsupportedOperationError | IndexOutOfRangeError]:
        """Payment date of the rebate due on exercise at dates[index].

        European and Bermudan only: an American window has no exercise date
        until the holder exercises, see rebate_payment_date_for.
        """
        if self.type not in (ExerciseType.EUROPEAN, ExerciseType.BERMUDAN):
            return Err(UnsupportedOperationError(
                message=(
                    "for american style exercises the rebate payment date "
                    "has to be calculated from the actual exercise date"
                ),
                code="UNSUPPORTED_OPERATION",
                timestamp=UtcDatetime.now(),
                source="exercise.rebate.RebatedExercise.rebate_payment_date_at",
                operation="rebate_payment_date_at",
                exercise_type=self.type.value,
            ))
        return self.date_at(index).map(self._payment_date)

    def rebate_payment_dates(
        self,
    ) -> Ok[tuple[date, ...]] | Err[UnsupportedOperationError | IndexOutOfRangeError]:
        """Payment dates for every exercise date, in exercise date order."""
        return sequence(self.rebate_payment_date_at(i) for i in range(len(self.dates)))

    def rebate_payment_date_for(
        self, exercise_date: date,
    ) -> Ok[date] | Err[ValidationError]:
        """Payment date of the rebate for an actual exercise on exercise_date."""
        if not self.exercise.is_exercisable_on(exercise_date):
            return Err(ValidationError(
                message=(
                    f"RebatedExercise: {exercise_date} is not an exercise date "
                    f"of this {self.type.value.lower()} exercise"
                ),
                code="NOT_EXERCISABLE",
                timestamp=UtcDatetime.now(),
                source="exercise.rebate.RebatedExercise.rebate_payment_date_for",
                fields=(FieldViolation(
                    path="exercise_date",
                    constraint="must be an exercisable date",
                    actual_value=exercise_date.isoformat(),
                ),),
            ))
        return Ok(self._payment_date(exercise_date))

    def _payment_date(self, exercise_date: date) -> date:
        s = self.settlement
        paid = s.calendar.advance(exercise_date, s.settlement_days, "D", s.convention)
        logger.debug("Rebate payment date for exercise on %s: %s", exercise_date, paid)
        return paid
