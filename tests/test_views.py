from datetime import date

import pytest

from financeflow.activity import build_recent_activity
from financeflow.engine import build_monthly_buckets, compute_summary
from financeflow.records import Expense, Invoice
from financeflow.views import (
    activity_to_dataframe,
    buckets_to_dataframe,
    summary_to_dataframe,
)

REF = date(2025, 4, 30)


def test_buckets_to_dataframe_rounds_for_display_only() -> None:
    invoices = [Invoice(id="1", date="2025-04-01", amount=10.005, status="paid")]
    buckets = build_monthly_buckets(invoices, [], REF, 3)

    df = buckets_to_dataframe(buckets, decimals=1)

    assert list(df.columns) == ["month", "year", "revenue", "expenses", "profit"]
    assert df["month"].tolist() == ["Feb", "Mar", "Apr"]
    assert df.loc[2, "revenue"] == pytest.approx(10.0)
    # The engine value itself is untouched.
    assert buckets[-1].revenue == pytest.approx(10.005)


def test_summary_to_dataframe_labels() -> None:
    invoices = [Invoice(id="1", date="2025-04-01", amount=250, status="overdue")]
    summary = compute_summary(build_monthly_buckets(invoices, [], REF), invoices)

    df = summary_to_dataframe(summary)

    assert df["metric"].tolist() == [
        "Total revenue",
        "Total expenses",
        "Net profit",
        "Outstanding invoices",
    ]
    assert df["amount"].tolist() == [0.0, 0.0, 0.0, 250.0]


def test_activity_to_dataframe_keeps_feed_order() -> None:
    feed = build_recent_activity(
        [Invoice(id="1", date="2025-04-01", amount=5, status="pending")],
        [Expense(id="e", date="bad", amount=3, description="Coffee")],
    )

    df = activity_to_dataframe(feed)

    assert df["type"].tolist() == ["invoice", "expense"]
    assert df["date"].tolist() == ["2025-04-01", ""]
    assert df["amount"].tolist() == [5.0, -3.0]
    assert activity_to_dataframe([]).empty
