# FinanceFlow - Financial reporting engine for small businesses
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
Command-Line Interface (CLI) for FinanceFlow.

This module wires together the building blocks of FinanceFlow:

- configuration (input files, dashboard options, display options),
- record loading from CSV / JSON files,
- the aggregation engine (monthly buckets, summary),
- the recent activity feed,
- view helpers (tables and CSV export).

The CLI is intentionally thin: it does not implement any financial logic
itself. It reads records, calls ``dashboard.build_dashboard`` and renders
the result.


High-level pipeline
-------------------

1) Load the TOML configuration (``financeflow_config.toml`` by default, or
   ``--config PATH``).
2) Resolve the invoices / expenses files, with optional ``--invoices`` and
   ``--expenses`` overrides.
3) Read the records and compute the dashboard for the reference date
   (``--reference-date``, today by default) and period (``--period``).
4) Render the selected scope as console tables, CSV files or JSON.


Scopes: what to render
----------------------

- ``monthly``:  monthly revenue / expenses / profit for the selected period,
- ``summary``:  summary totals for the full window and the selected period,
- ``activity``: the recent activity feed,
- ``all`` (default): everything above.

Examples
--------

    python -m financeflow.cli --invoices invoices.csv --expenses expenses.csv
    python -m financeflow.cli --period 3months --scope summary
    python -m financeflow.cli --display-mode json --reference-date 2025-04-30
"""

import argparse
import json
import logging
from datetime import date, datetime
from pathlib import Path
from typing import Optional

from . import __version__
from .config import DISPLAY_MODES, LOG_LEVELS, AppConfig, load_app_config
from .dashboard import DashboardData, build_dashboard
from .io import FileRecordSource, RecordSource
from .periods import PERIODS
from .views import activity_to_dataframe, buckets_to_dataframe, summary_to_dataframe

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser for the CLI."""
    ap = argparse.ArgumentParser(
        prog="python -m financeflow.cli",
        description=(
            "FinanceFlow - Financial reporting engine for small businesses. "
            "Reads invoices and expenses, builds the monthly revenue / "
            "expenses / profit series, summary totals and recent activity."
        ),
    )

    ap.add_argument(
        "--version",
        action="store_true",
        help="Show the installed version of financeflow and exit.",
    )

    ap.add_argument(
        "--config",
        dest="config_path",
        help=(
            "Path to the TOML configuration file. "
            "If omitted, 'financeflow_config.toml' in the current directory is "
            "used when present."
        ),
    )

    # Input overrides
    ap.add_argument(
        "--invoices",
        dest="invoices_path",
        help="Invoices file (CSV or JSON). Overrides [inputs].invoices.",
    )
    ap.add_argument(
        "--expenses",
        dest="expenses_path",
        help="Expenses file (CSV or JSON). Overrides [inputs].expenses.",
    )

    # Dashboard options
    ap.add_argument(
        "--period",
        choices=list(PERIODS),
        help="Reporting period. Overrides [dashboard].period (default: 6months).",
    )
    ap.add_argument(
        "--reference-date",
        dest="reference_date",
        help="Reference date (YYYY-MM-DD) ending the trailing window. Default: today.",
    )
    ap.add_argument(
        "--activity-limit",
        dest="activity_limit",
        type=int,
        help="Number of items in the recent activity feed (default: 5).",
    )
    ap.add_argument(
        "--window-months",
        dest="window_months",
        type=int,
        help="Length of the full monthly window (default: 12).",
    )

    ap.add_argument(
        "--scope",
        choices=["monthly", "summary", "activity", "all"],
        default="all",
        help="Select what to render (default: all).",
    )

    # Display options
    ap.add_argument(
        "--display-mode",
        dest="display_mode",
        choices=list(DISPLAY_MODES),
        help=(
            "Override the display.mode setting. "
            "'table' prints tables to stdout, 'csv' writes CSV files, "
            "'json' prints JSON, 'both' prints tables and writes CSV files."
        ),
    )
    ap.add_argument(
        "--output",
        dest="output_dir",
        help="Output directory for CSV files. Overrides [display].output_dir.",
    )
    ap.add_argument(
        "--log-level",
        dest="log_level",
        choices=list(LOG_LEVELS),
        help="Logging level. Overrides [logging].level (default: WARNING).",
    )

    return ap


def _parse_reference_date(value: Optional[str]) -> Optional[date]:
    """Parse an optional YYYY-MM-DD CLI argument."""
    if value is None:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise ValueError(
            f"Invalid reference date {value!r}, expected YYYY-MM-DD format."
        ) from exc


def _render_tables(data: DashboardData, scope: str, decimals: int) -> None:
    if scope in {"monthly", "all"}:
        print()
        print(f"=== Financial overview ({data.period.label}) ===")
        print(buckets_to_dataframe(data.period_monthly, decimals).to_string(index=False))

    if scope in {"summary", "all"}:
        print()
        print(f"=== Summary ({len(data.monthly)} months) ===")
        print(summary_to_dataframe(data.summary, decimals).to_string(index=False))
        print()
        print(f"=== Summary ({data.period.label}) ===")
        print(summary_to_dataframe(data.period_summary, decimals).to_string(index=False))

    if scope in {"activity", "all"}:
        print()
        print("=== Recent activity ===")
        if not data.recent_activity:
            print("No recent activity.")
        else:
            df = activity_to_dataframe(data.recent_activity, decimals)
            print(df.to_string(index=False))


def _write_csv(
    data: DashboardData, scope: str, decimals: int, output_dir: Path
) -> None:
    output_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y-%m-%d-%H-%M-%S")

    frames = []
    if scope in {"monthly", "all"}:
        frames.append(("monthly", buckets_to_dataframe(data.period_monthly, decimals)))
    if scope in {"summary", "all"}:
        frames.append(("summary", summary_to_dataframe(data.summary, decimals)))
        frames.append(
            ("period_summary", summary_to_dataframe(data.period_summary, decimals))
        )
    if scope in {"activity", "all"}:
        frames.append(
            ("recent_activity", activity_to_dataframe(data.recent_activity, decimals))
        )

    for name, df in frames:
        path = output_dir / f"{name}_{timestamp}.csv"
        df.to_csv(path, index=False)
        print(f"Wrote {path} ({len(df)} rows)")


def _render_json(data: DashboardData, scope: str) -> None:
    payload = data.to_dict()
    if scope == "monthly":
        keys = ["referenceDate", "period", "monthlyData", "periodMonthlyData"]
    elif scope == "summary":
        keys = ["referenceDate", "period", "summary", "periodSummary"]
    elif scope == "activity":
        keys = ["referenceDate", "recentActivities"]
    else:
        keys = list(payload)
    print(json.dumps({k: payload[k] for k in keys}, indent=2))


def run(args: argparse.Namespace, config: AppConfig) -> DashboardData:
    """Load the records and compute the dashboard for the parsed arguments."""
    source: RecordSource = FileRecordSource(
        invoices_path=args.invoices_path or config.inputs.invoices,
        expenses_path=args.expenses_path or config.inputs.expenses,
    )
    invoices = source.load_invoices()
    expenses = source.load_expenses()
    logger.info("Loaded %d invoices and %d expenses.", len(invoices), len(expenses))

    dashboard_cfg = config.dashboard
    activity_limit = (
        args.activity_limit
        if args.activity_limit is not None
        else dashboard_cfg.activity_limit
    )
    window_months = (
        args.window_months
        if args.window_months is not None
        else dashboard_cfg.window_months
    )

    return build_dashboard(
        invoices,
        expenses,
        period=args.period or dashboard_cfg.period,
        activity_limit=activity_limit,
        reference_date=_parse_reference_date(args.reference_date),
        months=window_months,
        key_by_year=dashboard_cfg.key_by_year,
    )


def main(argv: Optional[list[str]] = None) -> None:
    """Entry point for the FinanceFlow CLI."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    # --version: short-circuit and exit early.
    if args.version:
        print(f"financeflow version {__version__}")
        return

    try:
        config = load_app_config(args.config_path)
    except (FileNotFoundError, ValueError) as exc:
        parser.error(str(exc))

    logging.basicConfig(
        level=args.log_level or config.log_level,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not (args.invoices_path or config.inputs.invoices) and not (
        args.expenses_path or config.inputs.expenses
    ):
        parser.error(
            "No input files configured. Provide --invoices and/or --expenses, "
            "or set them in the [inputs] section of the configuration."
        )

    try:
        data = run(args, config)
    except (FileNotFoundError, ValueError) as exc:
        raise SystemExit(f"Error: {exc}") from exc

    display_mode = args.display_mode or config.display.mode
    decimals = config.display.decimals

    if display_mode == "json":
        _render_json(data, args.scope)
        return

    print(
        f"Reference date: {data.reference_date.isoformat()} | "
        f"Period: {data.period.label}"
    )

    if display_mode in {"table", "both"}:
        _render_tables(data, args.scope, decimals)

    if display_mode in {"csv", "both"}:
        output_dir = Path(args.output_dir) if args.output_dir else config.display.output_dir
        _write_csv(data, args.scope, decimals, output_dir)


if __name__ == "__main__":
    main()
