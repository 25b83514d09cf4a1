from datetime import date, datetime

import pandas as pd

from financeflow.records import (
    Invoice,
    expense_from_mapping,
    invoice_from_mapping,
    parse_record_date,
)


def test_parse_record_date_accepts_common_shapes() -> None:
    assert parse_record_date("2025-04-25") == date(2025, 4, 25)
    assert parse_record_date("Apr 25, 2025") == date(2025, 4, 25)
    assert parse_record_date(date(2025, 1, 2)) == date(2025, 1, 2)
    assert parse_record_date(datetime(2025, 1, 2, 23, 59)) == date(2025, 1, 2)
    assert parse_record_date(pd.Timestamp("2025-03-01")) == date(2025, 3, 1)


def test_parse_record_date_returns_none_when_invalid() -> None:
    assert parse_record_date(None) is None
    assert parse_record_date("") is None
    assert parse_record_date("not a date") is None
    assert parse_record_date("2025-13-45") is None
    # Integers would otherwise be read as nanoseconds since 1970.
    assert parse_record_date(20250401) is None
    assert parse_record_date(1.5) is None


def test_invoice_status_rollup_flags() -> None:
    """Status matching is case-insensitive; draft is neither paid nor outstanding."""
    paid = Invoice(id="1", date="2025-01-01", amount=10, status="PAID")
    draft = Invoice(id="2", date="2025-01-01", amount=10, status="draft")
    unpaid = Invoice(id="3", date="2025-01-01", amount=10, status="unpaid")

    assert paid.is_paid and not paid.is_outstanding
    assert not draft.is_paid and not draft.is_outstanding
    assert unpaid.is_outstanding


def test_invoice_from_mapping_accepts_camel_and_snake_case() -> None:
    inv = invoice_from_mapping(
        {
            "id": 7,
            "date": "2025-02-01",
            "dueDate": "2025-03-01",
            "amount": "$1,000.00",
            "status": " Pending ",
            "customer": "Acme",
        }
    )
    assert inv.id == "7"
    assert inv.due_date == "2025-03-01"
    assert inv.status == "pending"
    assert inv.amount == "$1,000.00"
    assert inv.customer == "Acme"

    inv2 = invoice_from_mapping({"date": "2025-02-01", "due_date": "2025-02-15"}, 4)
    assert inv2.id == "invoice-5"
    assert inv2.due_date == "2025-02-15"


def test_expense_from_mapping_skips_nan_cells() -> None:
    """Empty cells coming from pandas (NaN) are treated as missing."""
    exp = expense_from_mapping(
        {"id": "e1", "date": "2025-02-03", "amount": 30, "vendor": float("nan")}
    )
    assert exp.vendor is None
    assert exp.category == ""
    assert exp.amount == 30
