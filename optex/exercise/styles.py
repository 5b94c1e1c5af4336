"""Exercise styles — American, Bermudan and European exercise dates.

All types are @final @dataclass(frozen=True, slots=True). Each variant
projects onto an ordered tuple of dates whose last element is the expiry;
date_at and last_date are implemented once over that projection.

Direct construction of AmericanExercise rejects an inverted window with
TypeError; BermudanExercise stores dates as supplied. The create() smart
constructors validate ordering and return Ok | Err.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import assert_never, final

from optex.core.errors import IndexOutOfRangeError, InvalidDateOrderingError
from optex.core.result import Err, Ok
from optex.core.types import UNBOUNDED_PAST, UtcDatetime


class ExerciseType(Enum):
    AMERICAN = "AMERICAN"
    BERMUDAN = "BERMUDAN"
    EUROPEAN = "EUROPEAN"


# ---------------------------------------------------------------------------
# Shared accessors over the dates projection
# ---------------------------------------------------------------------------


def exercise_date_at(
    dates: tuple[date, ...], index: int,
) -> Ok[date] | Err[IndexOutOfRangeError]:
    """Return dates[index], or Err when index is outside [0, len(dates))."""
    if not 0 <= index < len(dates):
        return Err(IndexOutOfRangeError(
            message=(
                f"date with index {index} does not exist "
                f"(valid range [0, {len(dates)}))"
            ),
            code="INDEX_OUT_OF_RANGE",
            timestamp=UtcDatetime.now(),
            source="exercise.styles.exercise_date_at",
            index=index,
            size=len(dates),
        ))
    return Ok(dates[index])


def exercise_last_date(dates: tuple[date, ...]) -> date:
    """Expiry: the last exercisable date."""
    return dates[-1]


def _ordering_err(
    message: str, dates: tuple[date, ...], source: str,
) -> Err[InvalidDateOrderingError]:
    return Err(InvalidDateOrderingError(
        message=message,
        code="INVALID_DATE_ORDERING",
        timestamp=UtcDatetime.now(),
        source=source,
        dates=tuple(d.isoformat() for d in dates),
    ))


# ---------------------------------------------------------------------------
# Variants
# ---------------------------------------------------------------------------


@final
@dataclass(frozen=True, slots=True)
class AmericanExercise:
    """American exercise: any date in the window [earliest, latest].

    earliest_date may be UNBOUNDED_PAST, meaning exercisable since
    inception. With payoff_at_expiry the payoff is settled at latest_date
    even when exercised earlier.
    """

    earliest_date: date
    latest_date: date
    payoff_at_expiry: bool = False

    def __post_init__(self) -> None:
        if self.earliest_date != UNBOUNDED_PAST and self.earliest_date > self.latest_date:
            raise TypeError(
                f"AmericanExercise: earliest_date ({self.earliest_date}) "
                f"must be <= latest_date ({self.latest_date})"
            )

    @staticmethod
    def until(latest_date: date, payoff_at_expiry: bool = False) -> AmericanExercise:
        """Window with no lower bound, closing at latest_date."""
        return AmericanExercise(
            earliest_date=UNBOUNDED_PAST,
            latest_date=latest_date,
            payoff_at_expiry=payoff_at_expiry,
        )

    @staticmethod
    def create(
        earliest_date: date,
        latest_date: date,
        payoff_at_expiry: bool = False,
    ) -> Ok[AmericanExercise] | Err[InvalidDateOrderingError]:
        if earliest_date > latest_date:
            return _ordering_err(
                f"AmericanExercise: earliest_date ({earliest_date}) "
                f"must be <= latest_date ({latest_date})",
                (earliest_date, latest_date),
                "exercise.styles.AmericanExercise.create",
            )
        return Ok(AmericanExercise(
            earliest_date=earliest_date,
            latest_date=latest_date,
            payoff_at_expiry=payoff_at_expiry,
        ))

    @property
    def type(self) -> ExerciseType:
        return ExerciseType.AMERICAN

    @property
    def dates(self) -> tuple[date, ...]:
        return (self.earliest_date, self.latest_date)

    @property
    def last_date(self) -> date:
        return exercise_last_date(self.dates)

    def date_at(self, index: int) -> Ok[date] | Err[IndexOutOfRangeError]:
        return exercise_date_at(self.dates, index)

    def is_exercisable_on(self, d: date) -> bool:
        return self.earliest_date <= d <= self.latest_date


@final
@dataclass(frozen=True, slots=True)
class BermudanExercise:
    """Bermudan exercise: a fixed set of discrete exercise dates.

    Dates are kept verbatim, in the order given. The caller owns the
    ascending-order contract; last_date is only the expiry when it holds.
    Use create() to have it checked.
    """

    exercise_dates: tuple[date, ...]
    payoff_at_expiry: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.exercise_dates, tuple):
            object.__setattr__(self, "exercise_dates", tuple(self.exercise_dates))
        if not self.exercise_dates:
            raise TypeError("BermudanExercise.exercise_dates must be non-empty")

    @staticmethod
    def create(
        exercise_dates: Iterable[date],
        payoff_at_expiry: bool = False,
    ) -> Ok[BermudanExercise] | Err[InvalidDateOrderingError]:
        dates = tuple(exercise_dates)
        source = "exercise.styles.BermudanExercise.create"
        if not dates:
            return _ordering_err(
                "BermudanExercise: exercise_dates must be non-empty", dates, source,
            )
        for i in range(1, len(dates)):
            if dates[i] <= dates[i - 1]:
                return _ordering_err(
                    "BermudanExercise: exercise_dates must be strictly ascending, "
                    f"but date[{i}]={dates[i]} <= date[{i - 1}]={dates[i - 1]}",
                    dates,
                    source,
                )
        return Ok(BermudanExercise(exercise_dates=dates, payoff_at_expiry=payoff_at_expiry))

    @property
    def type(self) -> ExerciseType:
        return ExerciseType.BERMUDAN

    @property
    def dates(self) -> tuple[date, ...]:
        return self.exercise_dates

    @property
    def last_date(self) -> date:
        return exercise_last_date(self.dates)

    def date_at(self, index: int) -> Ok[date] | Err[IndexOutOfRangeError]:
        return exercise_date_at(self.dates, index)

    def is_exercisable_on(self, d: date) -> bool:
        return d in self.exercise_dates


@final
@dataclass(frozen=True, slots=True)
class EuropeanExercise:
    """European exercise: the single expiry date."""

    expiry_date: date

    @property
    def type(self) -> ExerciseType:
        return ExerciseType.EUROPEAN

    @property
    def dates(self) -> tuple[date, ...]:
        return (self.expiry_date,)

    @property
    def last_date(self) -> date:
        return exercise_last_date(self.dates)

    def date_at(self, index: int) -> Ok[date] | Err[IndexOutOfRangeError]:
        return exercise_date_at(self.dates, index)

    def is_exercisable_on(self, d: date) -> bool:
        return d == self.expiry_date


type Exercise = AmericanExercise | BermudanExercise | EuropeanExercise
type EarlyExercise = AmericanExercise | BermudanExercise


def is_early_exercise(exercise: Exercise) -> bool:
    """True for styles that allow exercise before expiry."""
    match exercise:
        case AmericanExercise() | BermudanExercise():
            return True
        case EuropeanExercise():
            return False
        case _never:
            assert_never(_never)
