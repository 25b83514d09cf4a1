import json
from datetime import date

import pytest

from financeflow.dashboard import build_dashboard, calculate_financial_metrics
from financeflow.records import Expense, Invoice

REF = date(2025, 4, 30)


@pytest.fixture()
def records():
    invoices = [
        Invoice(id="1", date="2025-04-10", amount=100, status="paid"),
        Invoice(id="2", date="2025-01-10", amount="$1,000.00", status="paid"),
        Invoice(id="3", date="2025-04-20", amount=250, status="overdue"),
        Invoice(id="4", date="2025-04-21", amount=75, status="draft"),
    ]
    expenses = [
        Expense(id="e1", date="2025-04-12", amount=30, category="Software"),
        Expense(id="e2", date="2024-12-01", amount="45.50", category="Travel"),
    ]
    return invoices, expenses


def test_calculate_financial_metrics_full_window(records) -> None:
    invoices, expenses = records
    metrics = calculate_financial_metrics(invoices, expenses, REF)

    assert len(metrics.monthly) == 12
    assert metrics.summary.total_revenue == pytest.approx(1100)
    assert metrics.summary.total_expenses == pytest.approx(75.5)
    assert metrics.summary.net_profit == pytest.approx(1024.5)
    assert metrics.summary.outstanding_invoices == pytest.approx(250)


def test_build_dashboard_period_slice(records) -> None:
    """The period summary only covers the selected trailing months."""
    invoices, expenses = records
    data = build_dashboard(invoices, expenses, period="3months", reference_date=REF)

    assert data.period.key == "3months"
    assert [b.month_label for b in data.period_monthly] == ["Feb", "Mar", "Apr"]
    assert data.period_summary.total_revenue == pytest.approx(100)
    assert data.period_summary.total_expenses == pytest.approx(30)
    assert data.period_summary.net_profit == pytest.approx(70)
    # Outstanding balance is independent of the window.
    assert data.period_summary.outstanding_invoices == pytest.approx(250)
    assert data.summary.total_revenue == pytest.approx(1100)


def test_build_dashboard_activity_and_defaults(records) -> None:
    invoices, expenses = records
    data = build_dashboard(invoices, expenses, period="bogus", reference_date=REF)

    assert data.period.key == "6months"
    assert len(data.period_monthly) == 6
    assert [a.id for a in data.recent_activity] == ["4", "3", "e1", "1", "2"]


def test_dashboard_to_dict_is_json_compatible(records) -> None:
    invoices, expenses = records
    data = build_dashboard(
        invoices, expenses, period="30days", activity_limit=2, reference_date=REF
    )

    payload = json.loads(json.dumps(data.to_dict()))

    assert payload["referenceDate"] == "2025-04-30"
    assert payload["period"] == "30days"
    assert payload["periodMonthlyData"] == [
        {"month": "Apr", "year": 2025, "revenue": 100.0, "expenses": 30.0, "profit": 70.0}
    ]
    assert payload["summary"]["outstandingInvoices"] == 250.0
    assert [a["id"] for a in payload["recentActivities"]] == ["4", "3"]
    assert payload["recentActivities"][0]["date"] == "2025-04-21"


def test_empty_dashboard() -> None:
    data = build_dashboard([], [], reference_date=REF)
    assert len(data.monthly) == 12
    assert all(b.profit == 0 for b in data.monthly)
    assert data.summary.net_profit == 0
    assert data.recent_activity == []
