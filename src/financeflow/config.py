# FinanceFlow - Financial reporting engine for small businesses
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
Configuration helpers for FinanceFlow.

This module is responsible for:
- loading the application configuration from a TOML file,
- validating dashboard options (period, activity feed length, window),
- exposing typed dataclasses used by the CLI.
"""

import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from .activity import DEFAULT_ACTIVITY_LIMIT
from .engine import DEFAULT_WINDOW_MONTHS
from .periods import DEFAULT_PERIOD, PERIODS

DEFAULT_CONFIG_FILE = "financeflow_config.toml"

DISPLAY_MODES = ("table", "csv", "json", "both")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class InputsConfig:
    """Locations of the invoices and expenses files (CSV or JSON)."""

    invoices: Optional[Path] = None
    expenses: Optional[Path] = None


@dataclass(frozen=True)
class DashboardConfig:
    """Options of the dashboard computation."""

    period: str = DEFAULT_PERIOD
    activity_limit: int = DEFAULT_ACTIVITY_LIMIT
    window_months: int = DEFAULT_WINDOW_MONTHS
    key_by_year: bool = True


@dataclass(frozen=True)
class DisplayConfig:
    """Rendering options for the CLI."""

    mode: str = "table"
    decimals: int = 2
    output_dir: Path = Path("data/output")


@dataclass(frozen=True)
class AppConfig:
    """
    Application-wide configuration for FinanceFlow.

    This aggregates:
    - the input files feeding the engine,
    - the dashboard options (period, activity feed, window),
    - display options for tables, CSV and JSON output,
    - the logging level.
    """

    inputs: InputsConfig = field(default_factory=InputsConfig)
    dashboard: DashboardConfig = field(default_factory=DashboardConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    log_level: str = "WARNING"


def _load_toml(path: Path) -> dict[str, Any]:
    """
    Load a TOML file and return its content as a dictionary.

    Raises:
        FileNotFoundError: if the file does not exist.
        ValueError: if the TOML content cannot be parsed.
    """
    if not path.is_file():
        raise FileNotFoundError(f"Config file not found: {path}")

    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        raise ValueError(f"Failed to parse TOML config file: {path}") from exc


def _section(raw: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    section = raw.get(name) or {}
    if not isinstance(section, Mapping):
        raise ValueError(f"Config section [{name}] must be a table.")
    return section


def _int_option(section: Mapping[str, Any], key: str, default: int, name: str) -> int:
    raw = section.get(key, default)
    if isinstance(raw, bool):
        raise ValueError(f"Invalid value for '{name}.{key}': expected an integer.")
    try:
        return int(raw)
    except (TypeError, ValueError) as exc:
        raise ValueError(
            f"Invalid value for '{name}.{key}': expected an integer."
        ) from exc


def _parse_inputs(section: Mapping[str, Any], base_dir: Path) -> InputsConfig:
    def _resolve_optional(rel: Any) -> Optional[Path]:
        if not rel:
            return None
        return (base_dir / str(rel)).resolve()

    return InputsConfig(
        invoices=_resolve_optional(section.get("invoices")),
        expenses=_resolve_optional(section.get("expenses")),
    )


def _parse_dashboard(section: Mapping[str, Any]) -> DashboardConfig:
    """
    Extract and validate the [dashboard] options.

    Raises:
        ValueError: on an unknown period or out-of-range numbers.
    """
    period = str(section.get("period", DEFAULT_PERIOD)).strip().lower()
    if period not in PERIODS:
        raise ValueError(
            f"Invalid value for 'dashboard.period': {period!r}. "
            f"Expected one of: {', '.join(PERIODS)}."
        )

    activity_limit = _int_option(
        section, "activity_limit", DEFAULT_ACTIVITY_LIMIT, "dashboard"
    )
    if activity_limit < 0:
        raise ValueError("'dashboard.activity_limit' cannot be negative.")

    window_months = _int_option(
        section, "window_months", DEFAULT_WINDOW_MONTHS, "dashboard"
    )
    if window_months < 1:
        raise ValueError("'dashboard.window_months' must be at least 1.")

    key_by_year = section.get("key_by_year", True)
    if not isinstance(key_by_year, bool):
        raise ValueError("Invalid value for 'dashboard.key_by_year': expected a boolean.")

    return DashboardConfig(
        period=period,
        activity_limit=activity_limit,
        window_months=window_months,
        key_by_year=key_by_year,
    )


def _parse_display(section: Mapping[str, Any], base_dir: Path) -> DisplayConfig:
    mode = str(section.get("mode", "table")).strip().lower()
    if mode not in DISPLAY_MODES:
        raise ValueError(
            f"Invalid value for 'display.mode': {mode!r}. "
            f"Expected one of: {', '.join(DISPLAY_MODES)}."
        )

    decimals = _int_option(section, "decimals", 2, "display")
    if decimals < 0:
        raise ValueError("'display.decimals' cannot be negative.")

    output_dir = (base_dir / str(section.get("output_dir") or "data/output")).resolve()

    return DisplayConfig(mode=mode, decimals=decimals, output_dir=output_dir)


def load_app_config(config_path: Optional[str] = None) -> AppConfig:
    """
    Load the FinanceFlow application configuration from a TOML file.

    Expected top-level sections in the TOML file (all optional)
    ----------------------------------------------------------
    [inputs]
        ``invoices`` and ``expenses`` file paths (CSV or JSON).

    [dashboard]
        ``period`` (30days | 3months | 6months | 12months),
        ``activity_limit``, ``window_months``, ``key_by_year``.

    [display]
        ``mode`` (table | csv | json | both), ``decimals``, ``output_dir``.

    [logging]
        ``level`` (DEBUG, INFO, WARNING, ERROR, CRITICAL).

    All file paths in the TOML are resolved relative to the directory of
    the TOML file itself.

    Parameters
    ----------
    config_path :
        Path to the TOML file. When omitted, ``financeflow_config.toml`` in
        the current directory is used if it exists, otherwise the default
        configuration is returned.

    Returns
    -------
    AppConfig
        Parsed and validated application configuration.

    Raises
    ------
    FileNotFoundError
        If an explicitly given config file does not exist.
    ValueError
        If the file cannot be parsed or contains invalid values.
    """
    if config_path is None:
        config_file = Path(DEFAULT_CONFIG_FILE).resolve()
        if not config_file.is_file():
            return AppConfig()
    else:
        config_file = Path(config_path).resolve()

    raw = _load_toml(config_file)
    base_dir = config_file.parent

    log_level = str(_section(raw, "logging").get("level", "WARNING")).upper()
    if log_level not in LOG_LEVELS:
        raise ValueError(
            f"Invalid value for 'logging.level': {log_level!r}. "
            f"Expected one of: {', '.join(LOG_LEVELS)}."
        )

    return AppConfig(
        inputs=_parse_inputs(_section(raw, "inputs"), base_dir),
        dashboard=_parse_dashboard(_section(raw, "dashboard")),
        display=_parse_display(_section(raw, "display"), base_dir),
        log_level=log_level,
    )
