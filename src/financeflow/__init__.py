# FinanceFlow - Financial reporting engine for small businesses
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
FinanceFlow
-----------

The financial reporting engine behind the FinanceFlow small-business
dashboard. It turns raw invoice and expense records into the derived views
displayed by the dashboard:

- a rolling monthly series of revenue, expenses and profit,
- summary totals (revenue, expenses, net profit, outstanding invoices),
- a merged, time-ordered recent activity feed.

Records are supplied by the caller (database, API, CSV/JSON files); the
engine never fetches nor stores them. Every view is recomputed from the
records it is given, with no shared state between calls.

Version: 0.1.0

Usage:
    python -m financeflow.cli --help
"""

__all__ = ["amounts", "activity", "dashboard", "engine", "io", "periods", "views"]

__version__ = "0.1.0"
