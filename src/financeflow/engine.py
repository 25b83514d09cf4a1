# FinanceFlow - Financial reporting engine for small businesses
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
Core aggregation engine for FinanceFlow.

This module turns raw invoice and expense records into the two numeric
views that power the dashboard charts and summary cards:

1. Monthly buckets
   ---------------
   ``build_monthly_buckets()`` produces one bucket per calendar month of a
   trailing window ending at a reference date (12 months by default),
   ordered oldest -> newest. For every bucket:

       revenue  = sum of paid invoice amounts dated in that month
       expenses = sum of expense amounts dated in that month
       profit   = revenue - expenses

   Records whose date cannot be parsed are skipped (and logged) rather
   than corrupting a bucket.

2. Financial summary
   -----------------
   ``compute_summary()`` reduces a bucket sequence (full window or a
   period slice, see ``periods.filter_period``) together with the raw
   invoice set into total revenue, total expenses, net profit and the
   outstanding invoice balance. The outstanding balance does not depend on
   dates or on the bucket window.

Bucket keys
-----------
By default a record lands in the bucket with the same (year, month); records
outside the window are ignored. With ``key_by_year=False`` the engine keys
buckets on the month name only, so that e.g. March of last year and March
of this year share one bucket. That mode reproduces the historical dashboard
behaviour and is kept for comparison purposes.

All functions are pure: inputs are never modified and every call returns
fresh objects. Amounts are not rounded here; rounding is a display concern
handled in ``views.py``.
"""

import calendar
import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date
from typing import Any, Optional

from .amounts import normalize_amount
from .periods import _today, shift_month
from .records import Expense, Invoice, parse_record_date

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_MONTHS = 12


@dataclass(frozen=True)
class MonthlyBucket:
    """
    One month of the trailing time series.

    Attributes
    ----------
    month_label :
        Short English month name ('Jan', 'Feb', ...).
    year, month :
        Calendar position of the bucket within the window.
    revenue :
        Sum of paid invoice amounts for the month.
    expenses :
        Sum of expense amounts for the month.
    profit :
        revenue - expenses.
    """

    month_label: str
    year: int
    month: int
    revenue: float = 0.0
    expenses: float = 0.0
    profit: float = 0.0

    def as_dict(self) -> dict[str, Any]:
        return {
            "month": self.month_label,
            "year": self.year,
            "revenue": self.revenue,
            "expenses": self.expenses,
            "profit": self.profit,
        }


@dataclass(frozen=True)
class FinancialSummary:
    """Scalar totals displayed on the dashboard summary cards."""

    total_revenue: float = 0.0
    total_expenses: float = 0.0
    net_profit: float = 0.0
    outstanding_invoices: float = 0.0

    def as_dict(self) -> dict[str, float]:
        return {
            "totalRevenue": self.total_revenue,
            "totalExpenses": self.total_expenses,
            "netProfit": self.net_profit,
            "outstandingInvoices": self.outstanding_invoices,
        }


def month_window(
    reference_date: date, months: int = DEFAULT_WINDOW_MONTHS
) -> list[tuple[int, int]]:
    """
    Return the (year, month) pairs of the trailing window, oldest first.

    The window ends with the month of ``reference_date`` and steps back
    ``months - 1`` times. Only the year and month of the reference date are
    used, so the result does not depend on the day of month.

    Raises:
        ValueError: if ``months`` is lower than 1.
    """
    if months < 1:
        raise ValueError(f"Window length must be at least 1 month, got {months}.")

    return [
        shift_month(reference_date.year, reference_date.month, -offset)
        for offset in range(months - 1, -1, -1)
    ]


class _Accumulator:
    """Mutable running totals for one bucket while records are folded in."""

    __slots__ = ("year", "month", "revenue", "expenses", "profit")

    def __init__(self, year: int, month: int) -> None:
        self.year = year
        self.month = month
        self.revenue = 0.0
        self.expenses = 0.0
        self.profit = 0.0

    def freeze(self) -> MonthlyBucket:
        return MonthlyBucket(
            month_label=calendar.month_abbr[self.month],
            year=self.year,
            month=self.month,
            revenue=self.revenue,
            expenses=self.expenses,
            profit=self.profit,
        )


def build_monthly_buckets(
    invoices: Iterable[Invoice],
    expenses: Iterable[Expense],
    reference_date: Optional[date] = None,
    months: int = DEFAULT_WINDOW_MONTHS,
    key_by_year: bool = True,
) -> list[MonthlyBucket]:
    """Accumulate revenue, expenses and profit into monthly buckets.

    Steps:
        1. Build one empty bucket per month of the trailing window.
        2. For each paid invoice, add its normalized amount to the matching
           bucket's revenue and profit.
        3. For each expense, add its normalized amount to the matching
           bucket's expenses and subtract it from its profit.

    Args:
        invoices: Invoice records (any status; only 'paid' ones count).
        expenses: Expense records.
        reference_date: The "now" of the window. Defaults to today.
        months: Window length in months (12 by default).
        key_by_year: Match records on (year, month) when True, on the
            month name only when False.

    Returns:
        A list of ``months`` MonthlyBucket objects ordered oldest -> newest,
        zero-filled when no record falls into a month.
    """
    if reference_date is None:
        reference_date = _today()

    window = month_window(reference_date, months)

    # 1) One accumulator per month, addressable by its key.
    buckets = [_Accumulator(year, month) for year, month in window]
    by_key: dict[Any, _Accumulator] = {}
    for acc in buckets:
        key = (acc.year, acc.month) if key_by_year else acc.month
        # Month-name keys with windows longer than 12 months: the most recent
        # bucket wins for a repeated month.
        by_key[key] = acc

    def _bucket_for(record: Any, kind: str) -> Optional[_Accumulator]:
        record_date = parse_record_date(record.date)
        if record_date is None:
            logger.warning(
                "Skipping %s %r: invalid date %r.", kind, record.id, record.date
            )
            return None

        key = (
            (record_date.year, record_date.month)
            if key_by_year
            else record_date.month
        )
        acc = by_key.get(key)
        if acc is None:
            logger.debug(
                "%s %r dated %s is outside the reporting window.",
                kind.capitalize(),
                record.id,
                record_date.isoformat(),
            )
        return acc

    # 2) Revenue: paid invoices only.
    for invoice in invoices:
        if not invoice.is_paid:
            continue
        acc = _bucket_for(invoice, "invoice")
        if acc is None:
            continue
        amount = normalize_amount(invoice.amount)
        acc.revenue += amount
        acc.profit += amount

    # 3) Expenses always reduce profit.
    for expense in expenses:
        acc = _bucket_for(expense, "expense")
        if acc is None:
            continue
        amount = normalize_amount(expense.amount)
        acc.expenses += amount
        acc.profit -= amount

    return [acc.freeze() for acc in buckets]


def outstanding_balance(invoices: Iterable[Invoice]) -> float:
    """Sum of pending, unpaid and overdue invoice amounts (dates ignored)."""
    return sum(
        (normalize_amount(inv.amount) for inv in invoices if inv.is_outstanding),
        0.0,
    )


def compute_summary(
    buckets: Sequence[MonthlyBucket],
    invoices: Iterable[Invoice],
) -> FinancialSummary:
    """
    Reduce a bucket sequence and the raw invoices into summary totals.

    Revenue and expenses are summed over the buckets passed in, so the
    caller decides whether the summary covers the full window or a period
    slice. The outstanding balance is computed from the invoices directly
    and is independent of the window.

    An empty input yields an all-zero summary.
    """
    total_revenue = sum((b.revenue for b in buckets), 0.0)
    total_expenses = sum((b.expenses for b in buckets), 0.0)

    return FinancialSummary(
        total_revenue=total_revenue,
        total_expenses=total_expenses,
        net_profit=total_revenue - total_expenses,
        outstanding_invoices=outstanding_balance(invoices),
    )
