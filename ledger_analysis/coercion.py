"""Best-effort coercion helpers for raw transaction fields.

Raw records keep ``amount`` and ``date`` exactly as they were loaded. The
analyzer converts them only when a query needs a number or a calendar date,
through the two functions below:

- :func:`coerce_amount` never raises. Anything that is not a plain number or a
  plain decimal literal becomes ``math.nan``, and NaN propagates through every
  sum built from it. Literals beyond the float range, and the words
  ``Infinity`` / ``-Infinity``, become signed infinities.
- :func:`parse_calendar_date` raises :class:`~ledger_analysis.errors.InvalidRangeError`
  for input it cannot read, so date filters never silently match everything
  (or nothing).
"""

from __future__ import annotations

import math
import re
from datetime import date, datetime
from decimal import Decimal
from typing import Any

from .errors import InvalidRangeError
from .logging_setup import get_logger

logger = get_logger("ledger_analysis.coercion")

# Optional sign, then "Infinity" or digits with optional fraction (or a bare
# fraction) and optional exponent. Excludes "nan", "inf", hex and digit separators.
_DECIMAL_LITERAL = re.compile(r"[+-]?(?:Infinity|(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)")

_DATE_FORMATS: tuple[str, ...] = (
    "%Y-%m-%d",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%dT%H:%M:%S.%f",
    "%Y/%m/%d",
)


def coerce_amount(value: Any) -> float:
    """Return ``value`` as a float, or ``math.nan`` when it is not numeric."""

    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if isinstance(value, (int, float, Decimal)):
        return float(value)
    if isinstance(value, str):
        s = value.strip()
        if _DECIMAL_LITERAL.fullmatch(s):
            return float(s)
    logger.debug("non-numeric amount %r coerced to NaN", value)
    return math.nan


def parse_calendar_date(value: Any) -> date:
    """Interpret ``value`` as a calendar date (any time component is dropped)."""

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise InvalidRangeError(value)

    s = value.strip()
    if s.endswith("Z"):
        s = s[:-1]
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(s, fmt).date()
        except ValueError:
            continue
    raise InvalidRangeError(value)


def js_round(value: float) -> float:
    """Round half up (towards positive infinity), passing NaN through."""

    if math.isnan(value) or math.isinf(value):
        return value
    floor = math.floor(value)
    return float(floor + 1 if value - floor >= 0.5 else floor)


def format_amount(value: float) -> str:
    # Integral values print without a trailing ".0": 75.0 -> "75".
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if math.isfinite(value) and value == int(value):
        return str(int(value))
    return repr(value)


__all__ = ["coerce_amount", "parse_calendar_date", "js_round", "format_amount"]
