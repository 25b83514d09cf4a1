# FinanceFlow - Financial reporting engine for small businesses
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
Amount normalization for FinanceFlow.

Invoice and expense amounts reach the engine either as numbers or as
currency-formatted strings ("$1,234.56", "1 250.00 EUR", ...). This module
turns such values into floats without ever raising, so that one malformed
record cannot break a whole dashboard.

Two entry points are provided:

- ``normalize_amount(value)`` returns a float, using ``0.0`` when nothing
  can be extracted. A legitimate zero and a failed parse therefore look the
  same to the caller.
- ``parse_amount(value)`` returns a ``ParsedAmount`` carrying both the value
  and an ``ok`` flag, for callers that need to tell the two cases apart.
"""

import logging
import math
import numbers
import re
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

logger = logging.getLogger(__name__)

# Everything except digits, decimal point and minus sign is dropped before
# parsing ("$1,234.56" -> "1234.56").
_STRIP_RE = re.compile(r"[^\d.\-]")

# Longest leading decimal number of the cleaned string ("12.5.3" -> "12.5").
_LEADING_NUMBER_RE = re.compile(r"-?(?:\d+(?:\.\d*)?|\.\d+)")


@dataclass(frozen=True)
class ParsedAmount:
    """Result of a strict amount parse."""

    value: float
    ok: bool


_UNPARSED = ParsedAmount(value=0.0, ok=False)


def parse_amount(value: Any) -> ParsedAmount:
    """
    Parse a monetary value and report whether parsing succeeded.

    Rules
    -----
    - real numbers (int, float, Decimal, numpy scalars) are converted to
      float as-is; booleans are not considered numbers,
    - any other value is converted to ``str``, stripped of every character
      other than digits, ``.`` and ``-``, and the longest leading decimal
      number is kept,
    - non-finite results (NaN, infinity) are treated as failures.

    Failures return ``ParsedAmount(0.0, ok=False)``; this function never
    raises.
    """
    if isinstance(value, bool):
        logger.debug("Boolean amount %r cannot be parsed.", value)
        return _UNPARSED

    if isinstance(value, (numbers.Real, Decimal)):
        try:
            result = float(value)
        except (OverflowError, ValueError):
            logger.debug("Amount %r cannot be represented as a float.", value)
            return _UNPARSED
        if not math.isfinite(result):
            logger.debug("Non-finite amount %r treated as unparseable.", value)
            return _UNPARSED
        return ParsedAmount(value=result, ok=True)

    cleaned = _STRIP_RE.sub("", str(value))
    match = _LEADING_NUMBER_RE.match(cleaned)
    if match is None:
        logger.debug("No numeric value found in amount %r.", value)
        return _UNPARSED

    result = float(match.group(0))
    if not math.isfinite(result):
        logger.debug("Non-finite amount %r treated as unparseable.", value)
        return _UNPARSED

    return ParsedAmount(value=result, ok=True)


def normalize_amount(value: Any) -> float:
    """Best-effort conversion of ``value`` to a float, ``0.0`` if unparseable."""
    return parse_amount(value).value
