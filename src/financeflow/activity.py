# FinanceFlow - Financial reporting engine for small businesses
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
Recent activity feed for FinanceFlow.

Invoices and expenses are merged into a single list of ``Activity`` items,
sorted from the most recent to the oldest and truncated to a fixed length
(5 by default). Each item carries a signed amount (expenses are outflows)
and a presentation tone derived from the invoice status:

    paid            -> success
    pending, unpaid -> warning
    overdue         -> danger
    draft / other   -> neutral
    expense         -> danger

Ordering
--------
Items are sorted with a stable sort on their parsed date, descending.
Records with an unparseable date sort as the oldest items. Items sharing a
date keep the order in which they were merged: invoices first, then
expenses, each in input order.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date
from typing import Any, Optional

from .amounts import normalize_amount
from .records import Expense, Invoice, InvoiceStatus, parse_record_date

DEFAULT_ACTIVITY_LIMIT = 5

TONE_SUCCESS = "success"
TONE_WARNING = "warning"
TONE_DANGER = "danger"
TONE_NEUTRAL = "neutral"

_TONE_BY_STATUS = {
    InvoiceStatus.PAID: TONE_SUCCESS,
    InvoiceStatus.PENDING: TONE_WARNING,
    InvoiceStatus.UNPAID: TONE_WARNING,
    InvoiceStatus.OVERDUE: TONE_DANGER,
    InvoiceStatus.DRAFT: TONE_NEUTRAL,
}


@dataclass(frozen=True)
class Activity:
    """One line of the recent activity feed."""

    id: str
    kind: str
    date: Optional[date]
    description: str
    amount: float
    status: str
    tone: str

    def as_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": self.kind,
            "date": self.date.isoformat() if self.date else None,
            "description": self.description,
            "amount": self.amount,
            "status": self.status,
            "tone": self.tone,
        }


def status_tone(status: Any) -> str:
    """Presentation tone for an invoice status."""
    return _TONE_BY_STATUS.get(str(status or "").strip().lower(), TONE_NEUTRAL)


def invoice_activity(invoice: Invoice) -> Activity:
    """Map an invoice to a feed item (positive amount, status-based tone)."""
    if invoice.description:
        description = invoice.description
    elif invoice.customer:
        description = f"Invoice {invoice.id} - {invoice.customer}"
    else:
        description = f"Invoice {invoice.id}"

    status = invoice.normalized_status
    return Activity(
        id=str(invoice.id),
        kind="invoice",
        date=parse_record_date(invoice.date),
        description=description,
        amount=abs(normalize_amount(invoice.amount)),
        status=status.capitalize() if status else "Unknown",
        tone=status_tone(status),
    )


def expense_activity(expense: Expense) -> Activity:
    """Map an expense to a feed item (outflow, always 'danger')."""
    description = expense.description or expense.category or f"Expense {expense.id}"
    return Activity(
        id=str(expense.id),
        kind="expense",
        date=parse_record_date(expense.date),
        description=description,
        amount=-abs(normalize_amount(expense.amount)),
        status="Expense",
        tone=TONE_DANGER,
    )


def _sort_key(item: Activity) -> tuple[bool, date]:
    # Missing dates compare lower than any real date.
    return (item.date is not None, item.date or date.min)


def build_recent_activity(
    invoices: Iterable[Invoice],
    expenses: Iterable[Expense],
    limit: int = DEFAULT_ACTIVITY_LIMIT,
) -> list[Activity]:
    """
    Merge invoices and expenses into the most recent ``limit`` feed items.

    Returns a list of ``min(limit, len(invoices) + len(expenses))`` items
    sorted by date, most recent first.

    Raises:
        ValueError: if ``limit`` is negative.
    """
    if limit < 0:
        raise ValueError(f"Activity limit cannot be negative, got {limit}.")

    items = [invoice_activity(inv) for inv in invoices]
    items.extend(expense_activity(exp) for exp in expenses)

    # sorted() stays stable with reverse=True: ties keep merge order.
    items = sorted(items, key=_sort_key, reverse=True)
    return items[:limit]
