"""Public interface for the ``ledger_analysis`` package.

This module exposes the analyzer, the record model and the error types as the
stable import surface. There is no runtime logic here, only symbol re-exports.
"""

from .analyzer import TransactionAnalyzer
from .coercion import coerce_amount, parse_calendar_date
from .errors import (
    DegenerateAggregateError,
    InvalidRangeError,
    LedgerError,
    LoadError,
    TransactionNotFoundError,
)
from .ingest import load_raw_records
from .models import (
    AmountRangeReport,
    MonthActivity,
    RawTransaction,
    RawTransactions,
    TransactionRecord,
    TransactionType,
)

__all__ = [
    # Analyzer / loading
    "TransactionAnalyzer",
    "load_raw_records",
    # Models / types
    "TransactionRecord",
    "TransactionType",
    "AmountRangeReport",
    "MonthActivity",
    "RawTransaction",
    "RawTransactions",
    # Coercion
    "coerce_amount",
    "parse_calendar_date",
    # Errors
    "LedgerError",
    "TransactionNotFoundError",
    "InvalidRangeError",
    "DegenerateAggregateError",
    "LoadError",
]
