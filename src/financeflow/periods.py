# FinanceFlow - Financial reporting engine for small businesses
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
Period helpers for FinanceFlow.

This module defines the dashboard reporting periods ("Last 30 days",
"Last 3 months", ...) and the helpers used to slice a monthly series to the
period selected by the user, as well as small calendar utilities shared by
the engine (reference date, month stepping).
"""

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Period:
    """A dashboard period: identifier, number of trailing months, label."""

    key: str
    months: int
    label: str


# "30days" is served by the most recent monthly bucket, not a day-level filter.
PERIODS: dict[str, Period] = {
    "30days": Period(key="30days", months=1, label="Last 30 days"),
    "3months": Period(key="3months", months=3, label="Last 3 months"),
    "6months": Period(key="6months", months=6, label="Last 6 months"),
    "12months": Period(key="12months", months=12, label="Last 12 months"),
}

DEFAULT_PERIOD = "6months"


def _today() -> date:
    """Return today's date as a date object (isolated for easier testing)."""
    return datetime.today().date()


def resolve_period(key: Optional[str]) -> Period:
    """Return the Period for ``key``, falling back to the 6-month period."""
    if key is None:
        return PERIODS[DEFAULT_PERIOD]
    return PERIODS.get(str(key).strip().lower(), PERIODS[DEFAULT_PERIOD])


def period_length(key: Optional[str]) -> int:
    """Number of trailing monthly buckets covered by the period ``key``."""
    return resolve_period(key).months


def filter_period(buckets: Sequence[T], key: Optional[str]) -> list[T]:
    """
    Keep the trailing buckets covered by the requested period.

    Parameters
    ----------
    buckets:
        Monthly series ordered oldest -> newest.
    key:
        One of '30days', '3months', '6months', '12months'. Unknown values
        (and None) behave like '6months'.

    Returns
    -------
    list
        A new list with the last 1, 3, 6 or 12 buckets, in the same order as
        ``buckets``. The input sequence is never modified.
    """
    n = period_length(key)
    items = list(buckets)
    return items[-n:] if n < len(items) else items


def shift_month(year: int, month: int, offset: int) -> tuple[int, int]:
    """Move (year, month) by ``offset`` months (negative goes back in time)."""
    index = year * 12 + (month - 1) + offset
    return index // 12, index % 12 + 1
