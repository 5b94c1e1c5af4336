"""Rebate settlement defaults and configuration.

No environment or file lookup. Pure configuration data.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import final

from optex.core.calendar import Calendar, NullCalendar
from optex.core.errors import FieldViolation, ValidationError
from optex.core.result import Err, Ok
from optex.core.types import BUSINESS_DAY_CONVENTIONS, BusinessDayConvention, UtcDatetime

# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------

DEFAULT_REBATE: Decimal = Decimal("0")
DEFAULT_SETTLEMENT_DAYS: int = 0
DEFAULT_CONVENTION: BusinessDayConvention = "FOLLOWING"


def _is_int(value: object) -> bool:
    # bool is a subclass of int
    return isinstance(value, int) and not isinstance(value, bool)


@final
@dataclass(frozen=True, slots=True)
class RebateSettlement:
    """When a rebate is paid relative to the exercise date.

    payment date = calendar.advance(exercise date, settlement_days, "D", convention)
    """

    settlement_days: int = DEFAULT_SETTLEMENT_DAYS
    calendar: Calendar = field(default_factory=NullCalendar)
    convention: BusinessDayConvention = DEFAULT_CONVENTION

    def __post_init__(self) -> None:
        if not _is_int(self.settlement_days):
            raise TypeError(
                "RebateSettlement.settlement_days must be int, "
                f"got {type(self.settlement_days).__name__}"
            )
        if self.settlement_days < 0:
            raise TypeError(
                "RebateSettlement.settlement_days must be >= 0, "
                f"got {self.settlement_days}"
            )
        if self.convention not in BUSINESS_DAY_CONVENTIONS:
            raise TypeError(
                f"RebateSettlement.convention must be one of {BUSINESS_DAY_CONVENTIONS}, "
                f"got {self.convention!r}"
            )

    @staticmethod
    def create(
        settlement_days: int = DEFAULT_SETTLEMENT_DAYS,
        calendar: Calendar | None = None,
        convention: BusinessDayConvention = DEFAULT_CONVENTION,
    ) -> Ok[RebateSettlement] | Err[ValidationError]:
        """Validate settlement parameters, collecting every violation."""
        violations: list[FieldViolation] = []
        if not _is_int(settlement_days):
            violations.append(FieldViolation(
                path="settlement_days", constraint="must be int",
                actual_value=repr(settlement_days),
            ))
        elif settlement_days < 0:
            violations.append(FieldViolation(
                path="settlement_days", constraint="must be >= 0",
                actual_value=str(settlement_days),
            ))
        if convention not in BUSINESS_DAY_CONVENTIONS:
            violations.append(FieldViolation(
                path="convention",
                constraint=f"must be one of {', '.join(BUSINESS_DAY_CONVENTIONS)}",
                actual_value=repr(convention),
            ))
        if violations:
            return Err(ValidationError(
                message="RebateSettlement: invalid settlement parameters",
                code="INVALID_SETTLEMENT",
                timestamp=UtcDatetime.now(),
                source="config.RebateSettlement.create",
                fields=tuple(violations),
            ))
        return Ok(RebateSettlement(
            settlement_days=settlement_days,
            calendar=calendar if calendar is not None else NullCalendar(),
            convention=convention,
        ))
