# FinanceFlow - Financial reporting engine for small businesses
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
I/O module for FinanceFlow.

The engine itself never fetches records: it receives invoices and expenses
from a *record source*. This module defines that interface and a file-based
implementation used by the CLI.

Supported file formats
----------------------
Files are selected by extension:

- ``.csv``  : one record per row, read with pandas. Column names are
  case-insensitive and trimmed.
- ``.json`` : a JSON array of objects (as exported by the web application).

Expected fields
---------------
Invoices:
    id, date, amount, status, dueDate / due_date, customer, email,
    description, notes

Expenses:
    id, date, amount, category, description, vendor, notes

Only ``date`` and ``amount`` are required for a record to take part in the
rollups (plus ``status`` for invoices). Values are *not* validated here:
amounts stay as read (the engine normalizes "$1,234.56"-style strings) and
dates stay raw, so that malformed values are handled record by record by the
engine instead of failing the whole load.
"""

import json
import os
from pathlib import Path
from typing import Any, Protocol, Union

import pandas as pd

from .records import Expense, Invoice, expense_from_mapping, invoice_from_mapping

PathLike = Union[str, "os.PathLike[str]"]


class RecordSource(Protocol):
    """Anything able to supply the current invoices and expenses."""

    def load_invoices(self) -> list[Invoice]: ...

    def load_expenses(self) -> list[Expense]: ...


def _read_records(path: PathLike) -> list[dict[str, Any]]:
    """Read raw records from a CSV or JSON file."""
    p = Path(path)
    if not p.is_file():
        raise FileNotFoundError(f"Records file not found: {p}")

    suffix = p.suffix.lower()

    if suffix == ".csv":
        try:
            # Keep every value as text: amounts may carry currency symbols.
            df = pd.read_csv(p, dtype=str, keep_default_na=False)
        except pd.errors.EmptyDataError:
            return []
        except (pd.errors.ParserError, UnicodeDecodeError) as exc:
            raise ValueError(f"Failed to parse CSV records file: {p}") from exc

        df.columns = [str(c).strip() for c in df.columns]
        records = df.to_dict(orient="records")
        # Lowercase keys: "dueDate" becomes "duedate".
        return [
            {k.lower(): (v if v != "" else None) for k, v in row.items()}
            for row in records
        ]

    if suffix == ".json":
        try:
            data = json.loads(p.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise ValueError(f"Failed to parse JSON records file: {p}") from exc

        if not isinstance(data, list) or not all(isinstance(r, dict) for r in data):
            raise ValueError(
                f"Invalid JSON records file {p}: expected an array of objects."
            )
        return data

    raise ValueError(
        f"Unsupported records file format '{p.suffix}' for {p}. "
        "Expected a .csv or .json file."
    )


def read_invoices(path: PathLike) -> list[Invoice]:
    """
    Read invoices from a CSV or JSON file.

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    ValueError
        If the file format is unsupported or its content cannot be parsed.
    """
    return [invoice_from_mapping(raw, i) for i, raw in enumerate(_read_records(path))]


def read_expenses(path: PathLike) -> list[Expense]:
    """Read expenses from a CSV or JSON file (see ``read_invoices``)."""
    return [expense_from_mapping(raw, i) for i, raw in enumerate(_read_records(path))]


class FileRecordSource:
    """Record source backed by one invoices file and one expenses file.

    Either path may be None, in which case the corresponding collection is
    empty. Files are re-read on every call so that the engine always works on
    the current snapshot.
    """

    def __init__(self, invoices_path=None, expenses_path=None) -> None:
        self.invoices_path = Path(invoices_path) if invoices_path else None
        self.expenses_path = Path(expenses_path) if expenses_path else None

    def load_invoices(self) -> list[Invoice]:
        if self.invoices_path is None:
            return []
        return read_invoices(self.invoices_path)

    def load_expenses(self) -> list[Expense]:
        if self.expenses_path is None:
            return []
        return read_expenses(self.expenses_path)
