"""Tests for optex.exercise.styles — American, Bermudan and European exercise."""

from __future__ import annotations

import dataclasses
from datetime import date

import pytest
from hypothesis import given
from hypothesis import strategies as st

from optex.core.errors import IndexOutOfRangeError, InvalidDateOrderingError
from optex.core.result import Err, Ok, unwrap
from optex.core.types import UNBOUNDED_PAST
from optex.exercise.styles import (
    AmericanExercise,
    BermudanExercise,
    EuropeanExercise,
    Exercise,
    ExerciseType,
    is_early_exercise,
)
from tests.conftest import exercise_dates, exercises

# ---------------------------------------------------------------------------
# ExerciseType
# ---------------------------------------------------------------------------


class TestExerciseType:
    def test_values(self) -> None:
        assert {e.value for e in ExerciseType} == {"AMERICAN", "BERMUDAN", "EUROPEAN"}


# ---------------------------------------------------------------------------
# Shared accessors (all variants)
# ---------------------------------------------------------------------------


class TestSharedAccessors:
    @given(exercises())
    def test_date_at_matches_dates(self, e: Exercise) -> None:
        for i, d in enumerate(e.dates):
            assert e.date_at(i) == Ok(d)

    @given(exercises(), st.integers(min_value=0, max_value=50))
    def test_date_at_past_end_err(self, e: Exercise, extra: int) -> None:
        result = e.date_at(len(e.dates) + extra)
        assert isinstance(result, Err)
        assert isinstance(result.error, IndexOutOfRangeError)
        assert result.error.size == len(e.dates)

    @given(exercises())
    def test_last_date_is_last_element(self, e: Exercise) -> None:
        assert e.last_date == e.dates[-1]

    @given(exercises())
    def test_dates_non_empty(self, e: Exercise) -> None:
        assert len(e.dates) >= 1

    def test_negative_index_err(self) -> None:
        result = EuropeanExercise(date(2024, 6, 21)).date_at(-1)
        assert isinstance(result, Err)
        assert result.error.index == -1

    def test_error_reports_range(self) -> None:
        result = BermudanExercise((date(2024, 3, 1), date(2024, 6, 1))).date_at(2)
        assert isinstance(result, Err)
        assert result.error.code == "INDEX_OUT_OF_RANGE"
        assert "index 2" in result.error.message
        assert "[0, 2)" in result.error.message


# ---------------------------------------------------------------------------
# EuropeanExercise
# ---------------------------------------------------------------------------


class TestEuropeanExercise:
    def test_single_date(self) -> None:
        ee = EuropeanExercise(expiry_date=date(2024, 6, 21))
        assert ee.dates == (date(2024, 6, 21),)
        assert ee.type == ExerciseType.EUROPEAN
        assert ee.last_date == date(2024, 6, 21)

    def test_exercisable_only_at_expiry(self) -> None:
        ee = EuropeanExercise(date(2024, 6, 21))
        assert ee.is_exercisable_on(date(2024, 6, 21))
        assert not ee.is_exercisable_on(date(2024, 6, 20))

    def test_not_early_exercise(self) -> None:
        assert not is_early_exercise(EuropeanExercise(date(2024, 6, 21)))

    def test_frozen(self) -> None:
        ee = EuropeanExercise(date(2024, 6, 21))
        with pytest.raises(dataclasses.FrozenInstanceError):
            ee.expiry_date = date(2024, 7, 1)  # type: ignore[misc]


# ---------------------------------------------------------------------------
# AmericanExercise
# ---------------------------------------------------------------------------


class TestAmericanExercise:
    def test_two_dates(self) -> None:
        ae = AmericanExercise(date(2024, 1, 1), date(2024, 6, 21))
        assert ae.dates == (date(2024, 1, 1), date(2024, 6, 21))
        assert ae.type == ExerciseType.AMERICAN
        assert ae.last_date == date(2024, 6, 21)
        assert ae.payoff_at_expiry is False

    def test_until_uses_unbounded_past(self) -> None:
        ae = AmericanExercise.until(date(2024, 6, 21))
        assert ae.dates == (UNBOUNDED_PAST, date(2024, 6, 21))
        assert ae.is_exercisable_on(date(1999, 1, 1))

    def test_payoff_at_expiry_flag(self) -> None:
        assert AmericanExercise.until(date(2024, 6, 21), payoff_at_expiry=True).payoff_at_expiry

    def test_window_membership(self) -> None:
        ae = AmericanExercise(date(2024, 1, 1), date(2024, 6, 21))
        assert ae.is_exercisable_on(date(2024, 1, 1))
        assert ae.is_exercisable_on(date(2024, 3, 15))
        assert ae.is_exercisable_on(date(2024, 6, 21))
        assert not ae.is_exercisable_on(date(2024, 6, 22))

    def test_create_valid(self) -> None:
        result = AmericanExercise.create(date(2024, 6, 21), date(2024, 6, 21))
        assert isinstance(result, Ok)

    def test_create_inverted_window_err(self) -> None:
        result = AmericanExercise.create(date(2024, 12, 31), date(2024, 1, 1))
        assert isinstance(result, Err)
        assert isinstance(result.error, InvalidDateOrderingError)
        assert result.error.dates == ("2024-12-31", "2024-01-01")

    def test_direct_construction_rejects_inverted_window(self) -> None:
        with pytest.raises(TypeError, match="earliest_date"):
            AmericanExercise(date(2024, 12, 31), date(2024, 1, 1))

    def test_direct_construction_allows_single_day_window(self) -> None:
        ae = AmericanExercise(date(2024, 6, 21), date(2024, 6, 21))
        assert ae.dates == (date(2024, 6, 21), date(2024, 6, 21))

    @given(exercise_dates())
    def test_until_accepts_any_latest_date(self, latest: date) -> None:
        assert AmericanExercise.until(latest).earliest_date == UNBOUNDED_PAST

    def test_is_early_exercise(self) -> None:
        assert is_early_exercise(AmericanExercise.until(date(2024, 6, 21)))


# ---------------------------------------------------------------------------
# BermudanExercise
# ---------------------------------------------------------------------------


class TestBermudanExercise:
    def test_dates_stored(self) -> None:
        be = BermudanExercise((date(2024, 3, 1), date(2024, 6, 1)))
        assert be.dates == (date(2024, 3, 1), date(2024, 6, 1))
        assert be.type == ExerciseType.BERMUDAN
        assert be.last_date == date(2024, 6, 1)

    def test_list_input_stored_as_tuple(self) -> None:
        be = BermudanExercise([date(2024, 3, 1), date(2024, 6, 1)])  # type: ignore[arg-type]
        assert be.dates == (date(2024, 3, 1), date(2024, 6, 1))
        hash(be)

    def test_unsorted_kept_verbatim(self) -> None:
        """No re-sorting: last_date is simply the last supplied date."""
        ds = (date(2024, 6, 1), date(2024, 3, 1), date(2024, 3, 1))
        be = BermudanExercise(ds)
        assert be.dates == ds
        assert be.last_date == date(2024, 3, 1)

    @given(st.lists(exercise_dates(), min_size=1, max_size=10))
    def test_any_sequence_kept_verbatim(self, ds: list[date]) -> None:
        assert BermudanExercise(tuple(ds)).dates == tuple(ds)

    def test_empty_rejected(self) -> None:
        with pytest.raises(TypeError, match="non-empty"):
            BermudanExercise(())

    def test_create_valid(self) -> None:
        be = unwrap(BermudanExercise.create([date(2024, 3, 1), date(2024, 6, 1)]))
        assert be.dates == (date(2024, 3, 1), date(2024, 6, 1))

    def test_create_non_ascending_err(self) -> None:
        result = BermudanExercise.create([date(2024, 6, 1), date(2024, 3, 1)])
        assert isinstance(result, Err)
        assert isinstance(result.error, InvalidDateOrderingError)
        assert "strictly ascending" in result.error.message

    def test_create_duplicate_err(self) -> None:
        result = BermudanExercise.create([date(2024, 6, 1), date(2024, 6, 1)])
        assert isinstance(result, Err)

    def test_create_empty_err(self) -> None:
        result = BermudanExercise.create([])
        assert isinstance(result, Err)
        assert result.error.code == "INVALID_DATE_ORDERING"

    def test_exercisable_only_on_listed_dates(self) -> None:
        be = BermudanExercise((date(2024, 3, 1), date(2024, 6, 1)))
        assert be.is_exercisable_on(date(2024, 3, 1))
        assert not be.is_exercisable_on(date(2024, 4, 1))

    def test_is_early_exercise(self) -> None:
        assert is_early_exercise(BermudanExercise((date(2024, 3, 1),)))
