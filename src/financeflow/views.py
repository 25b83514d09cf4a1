# FinanceFlow - Financial reporting engine for small businesses
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
View utilities for FinanceFlow.

This module converts the engine outputs (monthly buckets, financial summary,
activity feed) into pandas DataFrames ready for console display or CSV
export. Amounts are rounded here, and only here: the engine never rounds.
"""

from collections.abc import Sequence

import pandas as pd

from .activity import Activity
from .engine import FinancialSummary, MonthlyBucket

_SUMMARY_LABELS = [
    ("total_revenue", "Total revenue"),
    ("total_expenses", "Total expenses"),
    ("net_profit", "Net profit"),
    ("outstanding_invoices", "Outstanding invoices"),
]


def buckets_to_dataframe(
    buckets: Sequence[MonthlyBucket], decimals: int = 2
) -> pd.DataFrame:
    """Return one row per bucket: month, year, revenue, expenses, profit."""
    df = pd.DataFrame(
        [
            {
                "month": b.month_label,
                "year": b.year,
                "revenue": b.revenue,
                "expenses": b.expenses,
                "profit": b.profit,
            }
            for b in buckets
        ],
        columns=["month", "year", "revenue", "expenses", "profit"],
    )
    for col in ("revenue", "expenses", "profit"):
        df[col] = df[col].astype(float).round(decimals)
    return df


def summary_to_dataframe(summary: FinancialSummary, decimals: int = 2) -> pd.DataFrame:
    """Return the summary as a two-column (metric, amount) table."""
    df = pd.DataFrame(
        [
            {"metric": label, "amount": float(getattr(summary, attr))}
            for attr, label in _SUMMARY_LABELS
        ],
        columns=["metric", "amount"],
    )
    df["amount"] = df["amount"].round(decimals)
    return df


def activity_to_dataframe(
    activities: Sequence[Activity], decimals: int = 2
) -> pd.DataFrame:
    """Return the activity feed in display order (most recent first)."""
    df = pd.DataFrame(
        [
            {
                "date": a.date.isoformat() if a.date else "",
                "type": a.kind,
                "description": a.description,
                "amount": a.amount,
                "status": a.status,
                "tone": a.tone,
            }
            for a in activities
        ],
        columns=["date", "type", "description", "amount", "status", "tone"],
    )
    df["amount"] = df["amount"].astype(float).round(decimals)
    return df
