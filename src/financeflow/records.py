# FinanceFlow - Financial reporting engine for small businesses
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
Invoice and expense records consumed by the FinanceFlow engine.

Records are owned by the caller (database, remote API, CSV export...). The
engine only reads them: dates and amounts are kept exactly as supplied and
interpreted lazily by ``parse_record_date`` and
``financeflow.amounts.normalize_amount``, so that malformed values degrade
record by record instead of failing at construction time.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Optional

import pandas as pd


class InvoiceStatus:
    """Invoice status values and the rollups they take part in."""

    PAID = "paid"
    PENDING = "pending"
    UNPAID = "unpaid"
    OVERDUE = "overdue"
    DRAFT = "draft"

    # Statuses counted in the outstanding balance.
    OUTSTANDING = frozenset({PENDING, UNPAID, OVERDUE})


@dataclass(frozen=True)
class Invoice:
    """An invoice as supplied by the persistence layer."""

    id: str
    date: Any
    amount: Any
    status: str
    due_date: Any = None
    customer: Optional[str] = None
    email: Optional[str] = None
    description: Optional[str] = None
    items: tuple = field(default_factory=tuple)
    notes: Optional[str] = None

    @property
    def normalized_status(self) -> str:
        return str(self.status or "").strip().lower()

    @property
    def is_paid(self) -> bool:
        return self.normalized_status == InvoiceStatus.PAID

    @property
    def is_outstanding(self) -> bool:
        return self.normalized_status in InvoiceStatus.OUTSTANDING


@dataclass(frozen=True)
class Expense:
    """An expense as supplied by the persistence layer."""

    id: str
    date: Any
    amount: Any
    category: str = ""
    description: str = ""
    vendor: Optional[str] = None
    notes: Optional[str] = None


def parse_record_date(value: Any) -> Optional[date]:
    """
    Interpret a record date as a calendar date.

    Accepts ``date``/``datetime``/``pandas.Timestamp`` objects and strings
    understood by ``pandas.to_datetime`` (ISO dates, "Apr 25, 2025", ...).
    Any other type (numbers included) is unparseable: pandas would read an
    integer such as 20250401 as nanoseconds since the epoch.
    Time-of-day and timezone information is dropped.

    Returns ``None`` when the value is missing or cannot be parsed.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None

    try:
        ts = pd.to_datetime(value, errors="coerce")
    except (TypeError, ValueError, OverflowError):
        return None

    if not isinstance(ts, pd.Timestamp) or pd.isna(ts):
        return None
    return ts.date()


def _first(raw: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    """Return the first non-missing value among ``keys``."""
    for key in keys:
        value = raw.get(key)
        if value is None:
            continue
        # pandas fills empty CSV cells with NaN
        if isinstance(value, float) and pd.isna(value):
            continue
        return value
    return default


def _optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def invoice_from_mapping(raw: Mapping[str, Any], index: int = 0) -> Invoice:
    """
    Build an Invoice from a plain mapping (JSON object, CSV row).

    Both camelCase and snake_case keys are accepted (``dueDate``,
    ``due_date``, or ``duedate`` from lowercased CSV headers). When no id
    is present, a positional id is generated from ``index``.
    """
    items = _first(raw, "items", default=())
    if not isinstance(items, (list, tuple)):
        items = ()

    return Invoice(
        id=str(_first(raw, "id", default=f"invoice-{index + 1}")),
        date=_first(raw, "date"),
        amount=_first(raw, "amount"),
        status=str(_first(raw, "status", default="")).strip().lower(),
        due_date=_first(raw, "dueDate", "due_date", "duedate"),
        customer=_optional_str(_first(raw, "customer")),
        email=_optional_str(_first(raw, "email")),
        description=_optional_str(_first(raw, "description")),
        items=tuple(items),
        notes=_optional_str(_first(raw, "notes")),
    )


def expense_from_mapping(raw: Mapping[str, Any], index: int = 0) -> Expense:
    """Build an Expense from a plain mapping (JSON object, CSV row)."""
    return Expense(
        id=str(_first(raw, "id", default=f"expense-{index + 1}")),
        date=_first(raw, "date"),
        amount=_first(raw, "amount"),
        category=str(_first(raw, "category", default="")).strip(),
        description=str(_first(raw, "description", default="")).strip(),
        vendor=_optional_str(_first(raw, "vendor")),
        notes=_optional_str(_first(raw, "notes")),
    )
