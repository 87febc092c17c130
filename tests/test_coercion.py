import datetime as dt
import math
from decimal import Decimal

import pytest

from ledger_analysis import InvalidRangeError, coerce_amount, parse_calendar_date
from ledger_analysis.coercion import format_amount, js_round


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (100, 100.0),
        (-50, -50.0),
        (12.25, 12.25),
        (Decimal("2.5"), 2.5),
        ("12.50", 12.5),
        (" -3 ", -3.0),
        ("+7", 7.0),
        (".5", 0.5),
        ("1e3", 1000.0),
        ("1e400", math.inf),
        ("-1e400", -math.inf),
        ("Infinity", math.inf),
        ("-Infinity", -math.inf),
        (math.inf, math.inf),
        (True, 1.0),
        (False, 0.0),
    ],
)
def test_coerce_amount_numeric_inputs(raw, expected):
    assert coerce_amount(raw) == expected


@pytest.mark.parametrize(
    "raw", ["abc", "", "   ", None, "nan", "inf", "infinity", "1,000", "$5", [1], {}]
)
def test_coerce_amount_non_numeric_becomes_nan(raw):
    assert math.isnan(coerce_amount(raw))


def test_nan_propagates_through_sums():
    values = [coerce_amount(v) for v in (10, "oops", 5)]
    assert math.isnan(math.fsum(values))


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("2024-03-05", dt.date(2024, 3, 5)),
        (" 2024-03-05 ", dt.date(2024, 3, 5)),
        ("2024-03-05 18:30:00", dt.date(2024, 3, 5)),
        ("2024-03-05T18:30:00", dt.date(2024, 3, 5)),
        ("2024-03-05T18:30:00.250Z", dt.date(2024, 3, 5)),
        ("2024/03/05", dt.date(2024, 3, 5)),
        (dt.date(2024, 3, 5), dt.date(2024, 3, 5)),
        (dt.datetime(2024, 3, 5, 1, 2, 3), dt.date(2024, 3, 5)),
    ],
)
def test_parse_calendar_date_accepts_common_forms(raw, expected):
    assert parse_calendar_date(raw) == expected


@pytest.mark.parametrize("raw", ["2024-13-01", "2024-02-30", "yesterday", "", None, 20240305])
def test_parse_calendar_date_rejects_malformed_input(raw):
    with pytest.raises(InvalidRangeError) as excinfo:
        parse_calendar_date(raw)
    assert excinfo.value.value == raw
    # Also usable as a plain ValueError.
    assert isinstance(excinfo.value, ValueError)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (2.5, 3.0),
        (2.4, 2.0),
        (-2.5, -2.0),
        (-2.6, -3.0),
        (25.0, 25.0),
        (0.49999999999999994, 0.0),
        (4503599627370497.0, 4503599627370497.0),
    ],
)
def test_js_round_rounds_half_up(value, expected):
    assert js_round(value) == expected


def test_js_round_passes_non_finite_values_through():
    assert math.isnan(js_round(math.nan))
    assert js_round(-math.inf) == -math.inf


@pytest.mark.parametrize(
    ("value", "expected"),
    [(75.0, "75"), (-25.0, "-25"), (12.5, "12.5"), (0.1 + 0.2, "0.30000000000000004")],
)
def test_format_amount(value, expected):
    assert format_amount(value) == expected


def test_format_amount_non_finite():
    assert format_amount(math.nan) == "NaN"
    assert format_amount(math.inf) == "Infinity"
    assert format_amount(-math.inf) == "-Infinity"
