"""Core types: UtcDatetime, TimeUnit, BusinessDayConvention, UNBOUNDED_PAST."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, date, datetime
from typing import Literal, final


@final
@dataclass(frozen=True, slots=True)
class UtcDatetime:
    """Timezone-aware UTC datetime. Naive datetimes are rejected."""

    value: datetime

    def __post_init__(self) -> None:
        if self.value.tzinfo is None:
            raise TypeError("UtcDatetime requires timezone-aware datetime, got naive")

    @staticmethod
    def now() -> UtcDatetime:
        return UtcDatetime(value=datetime.now(tz=UTC))


# ---------------------------------------------------------------------------
# Date arithmetic vocabulary
# ---------------------------------------------------------------------------

# Settlement offsets are counted in business days only.
type TimeUnit = Literal["D"]

type BusinessDayConvention = Literal[
    "NONE", "FOLLOWING", "MOD_FOLLOWING", "PRECEDING",
]

BUSINESS_DAY_CONVENTIONS: tuple[BusinessDayConvention, ...] = (
    "NONE", "FOLLOWING", "MOD_FOLLOWING", "PRECEDING",
)

# Earliest exercise date of an American exercise with no lower bound:
# exercisable since contract inception.
UNBOUNDED_PAST: date = date.min
