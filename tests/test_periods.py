from datetime import date

import pytest

from financeflow.engine import build_monthly_buckets
from financeflow.periods import (
    filter_period,
    period_length,
    resolve_period,
    shift_month,
)


@pytest.fixture(scope="module")
def twelve_buckets():
    return build_monthly_buckets([], [], date(2025, 4, 30), 12)


def test_filter_period_3months_keeps_last_three_in_order(twelve_buckets) -> None:
    """'3months' returns the last 3 buckets, in the same relative order."""
    filtered = filter_period(twelve_buckets, "3months")
    assert filtered == twelve_buckets[-3:]
    assert [b.month_label for b in filtered] == ["Feb", "Mar", "Apr"]


@pytest.mark.parametrize(
    "key, expected",
    [("30days", 1), ("3months", 3), ("6months", 6), ("12months", 12)],
)
def test_filter_period_lengths(twelve_buckets, key, expected) -> None:
    assert len(filter_period(twelve_buckets, key)) == expected
    assert period_length(key) == expected


@pytest.mark.parametrize("key", ["90days", "", None, "yearly"])
def test_unknown_period_defaults_to_six_months(twelve_buckets, key) -> None:
    assert len(filter_period(twelve_buckets, key)) == 6
    assert resolve_period(key).key == "6months"


def test_filter_period_does_not_mutate_source(twelve_buckets) -> None:
    source = list(twelve_buckets)
    result = filter_period(source, "30days")
    result.clear()
    assert source == twelve_buckets


def test_filter_period_on_short_series_returns_everything() -> None:
    buckets = build_monthly_buckets([], [], date(2025, 4, 30), 2)
    assert filter_period(buckets, "12months") == buckets


def test_shift_month_crosses_year_boundaries() -> None:
    assert shift_month(2025, 1, -1) == (2024, 12)
    assert shift_month(2025, 12, 1) == (2026, 1)
    assert shift_month(2025, 4, -11) == (2024, 5)
    assert shift_month(2025, 4, -24) == (2023, 4)
