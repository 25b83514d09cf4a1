# FinanceFlow - Financial reporting engine for small businesses
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
Dashboard orchestration for FinanceFlow.

This module provides the high-level entry points used to compute every
view of the dashboard in a *single pass* over the records:

- ``calculate_financial_metrics()`` returns the full monthly window and its
  summary (the data behind the "Financial Overview" chart and the summary
  cards),
- ``build_dashboard()`` additionally slices the window to the period chosen
  by the user, summarizes that slice and merges the recent activity feed.

Separation of concerns
----------------------
- ``engine.py`` is the single source of truth for bucketing and summary
  rules.
- ``periods.py`` owns the period identifiers and slicing.
- ``activity.py`` owns the activity feed.
- ``dashboard.py`` assembles everything and exposes JSON-compatible output
  through ``DashboardData.to_dict()``.

Nothing is cached: every call recomputes all views from the records it is
given.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date
from typing import Any, Optional

from .activity import DEFAULT_ACTIVITY_LIMIT, Activity, build_recent_activity
from .engine import (
    DEFAULT_WINDOW_MONTHS,
    FinancialSummary,
    MonthlyBucket,
    build_monthly_buckets,
    compute_summary,
)
from .periods import DEFAULT_PERIOD, Period, _today, filter_period, resolve_period
from .records import Expense, Invoice


@dataclass(frozen=True)
class FinancialMetrics:
    """Monthly series over the full window and its summary."""

    monthly: list[MonthlyBucket]
    summary: FinancialSummary


@dataclass(frozen=True)
class DashboardData:
    """
    Every derived view needed to render the dashboard.

    Attributes
    ----------
    reference_date :
        The "now" the trailing window was computed for.
    period :
        The resolved period (unknown identifiers fall back to 6 months).
    monthly :
        Full trailing window, oldest -> newest.
    period_monthly :
        Trailing slice of ``monthly`` covered by ``period``.
    summary :
        Totals over the full window.
    period_summary :
        Totals over ``period_monthly``.
    recent_activity :
        Most recent invoices and expenses, newest first.
    """

    reference_date: date
    period: Period
    monthly: list[MonthlyBucket]
    period_monthly: list[MonthlyBucket]
    summary: FinancialSummary
    period_summary: FinancialSummary
    recent_activity: list[Activity]

    def to_dict(self) -> dict[str, Any]:
        """Plain, JSON-compatible representation."""
        return {
            "referenceDate": self.reference_date.isoformat(),
            "period": self.period.key,
            "periodLabel": self.period.label,
            "monthlyData": [b.as_dict() for b in self.monthly],
            "periodMonthlyData": [b.as_dict() for b in self.period_monthly],
            "summary": self.summary.as_dict(),
            "periodSummary": self.period_summary.as_dict(),
            "recentActivities": [a.as_dict() for a in self.recent_activity],
        }


def calculate_financial_metrics(
    invoices: Sequence[Invoice],
    expenses: Sequence[Expense],
    reference_date: Optional[date] = None,
    months: int = DEFAULT_WINDOW_MONTHS,
    key_by_year: bool = True,
) -> FinancialMetrics:
    """Bucket the records over the trailing window and summarize the window."""
    monthly = build_monthly_buckets(
        invoices,
        expenses,
        reference_date=reference_date,
        months=months,
        key_by_year=key_by_year,
    )
    return FinancialMetrics(monthly=monthly, summary=compute_summary(monthly, invoices))


def build_dashboard(
    invoices: Sequence[Invoice],
    expenses: Sequence[Expense],
    period: Optional[str] = DEFAULT_PERIOD,
    activity_limit: int = DEFAULT_ACTIVITY_LIMIT,
    reference_date: Optional[date] = None,
    months: int = DEFAULT_WINDOW_MONTHS,
    key_by_year: bool = True,
) -> DashboardData:
    """
    Compute all dashboard views for one snapshot of records.

    Parameters
    ----------
    invoices, expenses:
        Records supplied by the caller; they are never modified.
    period:
        Period identifier ('30days', '3months', '6months', '12months').
    activity_limit:
        Maximum number of items in the recent activity feed.
    reference_date:
        The "now" of the trailing window. Defaults to today.
    months:
        Length of the full trailing window.
    key_by_year:
        See ``engine.build_monthly_buckets``.
    """
    if reference_date is None:
        reference_date = _today()

    metrics = calculate_financial_metrics(
        invoices,
        expenses,
        reference_date=reference_date,
        months=months,
        key_by_year=key_by_year,
    )
    resolved = resolve_period(period)
    period_monthly = filter_period(metrics.monthly, resolved.key)

    return DashboardData(
        reference_date=reference_date,
        period=resolved,
        monthly=metrics.monthly,
        period_monthly=period_monthly,
        summary=metrics.summary,
        period_summary=compute_summary(period_monthly, invoices),
        recent_activity=build_recent_activity(invoices, expenses, activity_limit),
    )
