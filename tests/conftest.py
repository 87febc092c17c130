"""Pytest configuration for test isolation.

The package logger is configured at most once per process and the CLI reads
``LEDGER_ANALYSIS_*`` settings from the environment and from a ``.env`` file in
the working directory. To keep tests hermetic, every test runs in its own
temporary working directory with those variables cleared and the logging
configuration reset afterwards.
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest

from ledger_analysis.logging_setup import reset_logging

_ENV_VARS = ("LEDGER_ANALYSIS_DATA", "LEDGER_ANALYSIS_LOG_LEVEL")


@pytest.fixture(autouse=True)
def _isolate_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    monkeypatch.chdir(tmp_path)
    for name in _ENV_VARS:
        # setenv first so teardown also removes values a .env file loaded.
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    reset_logging()
    yield
    reset_logging()


def make_transactions() -> list[dict[str, Any]]:
    """The three-record collection used throughout the analyzer tests."""

    return [
        {
            "transaction_id": "1",
            "transaction_date": "2024-03-05",
            "transaction_amount": 100,
            "transaction_type": "debit",
            "transaction_description": "Weekly groceries",
            "merchant_name": "Fresh Mart",
            "card_type": "Visa",
        },
        {
            "transaction_id": "2",
            "transaction_date": "2024-03-10",
            "transaction_amount": -50,
            "transaction_type": "credit",
            "transaction_description": "Refund for returned shoes",
            "merchant_name": "Shoe Hub",
            "card_type": "MasterCard",
        },
        {
            "transaction_id": "3",
            "transaction_date": "2024-04-01",
            "transaction_amount": 25,
            "transaction_type": "debit",
            "transaction_description": "Cinema tickets",
            "merchant_name": "Star Cinema",
            "card_type": "Visa",
        },
    ]


@pytest.fixture
def transactions() -> list[dict[str, Any]]:
    return make_transactions()
