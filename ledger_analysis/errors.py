"""Exception hierarchy for ``ledger_analysis``.

Every failure raised by the analyzer derives from :class:`LedgerError` so
callers (e.g., the CLI) can catch the package's errors in one place. Each
subclass also derives from the closest builtin so generic handlers
(``LookupError``, ``ValueError``) keep working.
"""

from __future__ import annotations

from typing import Any


class LedgerError(Exception):
    """Base class for all ``ledger_analysis`` errors."""


class TransactionNotFoundError(LedgerError, LookupError):
    """No record in the collection carries the requested id."""

    def __init__(self, transaction_id: Any) -> None:
        super().__init__(f"no transaction with id {transaction_id!r}")
        self.transaction_id = transaction_id


class InvalidRangeError(LedgerError, ValueError):
    """A date bound or date component could not be interpreted."""

    def __init__(self, value: Any, reason: str = "unparseable date") -> None:
        super().__init__(f"{reason}: {value!r}")
        self.value = value


class DegenerateAggregateError(LedgerError, ArithmeticError):
    """An aggregate is undefined for the current collection (e.g., empty)."""


class LoadError(LedgerError, ValueError):
    """An input file could not be turned into raw transaction mappings."""


__all__ = [
    "LedgerError",
    "TransactionNotFoundError",
    "InvalidRangeError",
    "DegenerateAggregateError",
    "LoadError",
]
