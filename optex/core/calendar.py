"""Business day calendars and date adjustment.

The calendar is a consumed capability: anything satisfying the Calendar
protocol can be passed to a rebate schedule. Two built-ins are provided,
NullCalendar (every day is a business day) and WeekendsOnly (Saturday and
Sunday are holidays). Holiday calendars are out of scope.

Type definitions live in core/types.py. This module provides functions.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Protocol, assert_never, final

from optex.core.types import BusinessDayConvention, TimeUnit

type BusinessDayRule = Callable[[date], bool]


class Calendar(Protocol):
    """Pure, reentrant business day calendar."""

    def is_business_day(self, d: date) -> bool: ...

    def adjust(self, d: date, convention: BusinessDayConvention) -> date: ...

    def advance(
        self, d: date, n: int, unit: TimeUnit, convention: BusinessDayConvention,
    ) -> date: ...


# ---------------------------------------------------------------------------
# Adjustment and advance, parameterised by a business day rule
# ---------------------------------------------------------------------------


def _roll(d: date, step: int, is_business_day: BusinessDayRule) -> date:
    result = d
    while not is_business_day(result):
        result += timedelta(days=step)
    return result


def adjust_date(
    d: date, convention: BusinessDayConvention, is_business_day: BusinessDayRule,
) -> date:
    """Adjust a date according to a business day convention.

    FOLLOWING: move to next business day.
    MOD_FOLLOWING: move to next business day, unless that crosses a month
                   boundary, in which case move to previous business day.
    PRECEDING: move to previous business day.
    NONE: no adjustment.
    """
    match convention:
        case "NONE":
            return d
        case "FOLLOWING":
            return _roll(d, 1, is_business_day)
        case "PRECEDING":
            return _roll(d, -1, is_business_day)
        case "MOD_FOLLOWING":
            result = _roll(d, 1, is_business_day)
            if result.month != d.month:
                result = _roll(d, -1, is_business_day)
            return result
        case _never:
            assert_never(_never)


def advance_date(
    d: date,
    n: int,
    unit: TimeUnit,
    convention: BusinessDayConvention,
    is_business_day: BusinessDayRule,
) -> date:
    """Move a date by n business days.

    "D" counts business days: zero days means adjust only; otherwise the
    result is always a business day and the convention is not applied.
    """
    match unit:
        case "D":
            if n == 0:
                return adjust_date(d, convention, is_business_day)
            step = 1 if n > 0 else -1
            result = d
            for _ in range(abs(n)):
                result = _roll(result + timedelta(days=step), step, is_business_day)
            return result
        case _never:
            assert_never(_never)


# ---------------------------------------------------------------------------
# Built-in calendars
# ---------------------------------------------------------------------------


@final
@dataclass(frozen=True, slots=True)
class NullCalendar:
    """Calendar with no holidays: every day, weekends included, is a business day."""

    def is_business_day(self, d: date) -> bool:  # noqa: ARG002
        return True

    def adjust(self, d: date, convention: BusinessDayConvention) -> date:
        return adjust_date(d, convention, self.is_business_day)

    def advance(
        self, d: date, n: int, unit: TimeUnit, convention: BusinessDayConvention,
    ) -> date:
        return advance_date(d, n, unit, convention, self.is_business_day)


@final
@dataclass(frozen=True, slots=True)
class WeekendsOnly:
    """Calendar whose only holidays are Saturdays and Sundays."""

    def is_business_day(self, d: date) -> bool:
        return d.weekday() < 5  # Mon=0 .. Fri=4

    def adjust(self, d: date, convention: BusinessDayConvention) -> date:
        return adjust_date(d, convention, self.is_business_day)

    def advance(
        self, d: date, n: int, unit: TimeUnit, convention: BusinessDayConvention,
    ) -> date:
        return advance_date(d, n, unit, convention, self.is_business_day)
