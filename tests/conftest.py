"""Hypothesis strategies and pytest fixtures for optex.

Every exercise style has a corresponding Hypothesis strategy.
Strategies are composable: rebated exercises are built from styles.
"""

from __future__ import annotations

from datetime import date, timedelta
from decimal import Decimal

from hypothesis import HealthCheck, settings
from hypothesis import strategies as st
from hypothesis.strategies import SearchStrategy

from optex.core.result import unwrap
from optex.exercise.styles import (
    AmericanExercise,
    BermudanExercise,
    EuropeanExercise,
    Exercise,
)

# ---------------------------------------------------------------------------
# Hypothesis global settings
# ---------------------------------------------------------------------------

settings.register_profile(
    "ci",
    max_examples=200,
    suppress_health_check=[HealthCheck.too_slow],
    deadline=None,
)
settings.register_profile(
    "dev",
    max_examples=50,
    suppress_health_check=[HealthCheck.too_slow],
    deadline=None,
)
settings.load_profile("dev")


# ===================================================================
# PRIMITIVE STRATEGIES
# ===================================================================


def exercise_dates(
    min_year: int = 2020,
    max_year: int = 2035,
) -> SearchStrategy[date]:
    """Plain calendar dates in a realistic contract range."""
    return st.dates(min_value=date(min_year, 1, 1), max_value=date(max_year, 12, 31))


def rebate_amounts() -> SearchStrategy[Decimal]:
    """Signed, finite rebate amounts."""
    return st.decimals(
        min_value=Decimal("-1000000"),
        max_value=Decimal("1000000"),
        places=2,
        allow_nan=False,
        allow_infinity=False,
    )


# ===================================================================
# EXERCISE STRATEGIES
# ===================================================================


@st.composite
def european_exercises(draw: st.DrawFn) -> EuropeanExercise:
    return EuropeanExercise(expiry_date=draw(exercise_dates()))


@st.composite
def american_exercises(draw: st.DrawFn) -> AmericanExercise:
    """Generate American windows via the validating constructor."""
    earliest = draw(exercise_dates())
    span = draw(st.integers(min_value=0, max_value=3650))
    return unwrap(AmericanExercise.create(
        earliest, earliest + timedelta(days=span), payoff_at_expiry=draw(st.booleans()),
    ))


@st.composite
def bermudan_exercises(
    draw: st.DrawFn,
    min_size: int = 1,
    max_size: int = 12,
) -> BermudanExercise:
    """Generate Bermudan exercises with strictly ascending dates."""
    dates = draw(st.lists(exercise_dates(), min_size=min_size, max_size=max_size, unique=True))
    return unwrap(BermudanExercise.create(sorted(dates), payoff_at_expiry=draw(st.booleans())))


@st.composite
def exercises(draw: st.DrawFn) -> Exercise:
    """Generate exactly one Exercise variant (American | Bermudan | European)."""
    return draw(st.one_of(
        american_exercises(),
        bermudan_exercises(),
        european_exercises(),
    ))
