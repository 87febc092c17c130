"""Ingest utilities shared by the CLI and host applications.

Exposes a single helper that reads a transaction export and returns raw record
mappings for :class:`~ledger_analysis.analyzer.TransactionAnalyzer`. The file
format is chosen by suffix:

- ``.json``: a top-level array of objects (e.g., ``transaction.json``);
- ``.csv``: a header row followed by one transaction per row.

Values are returned as loaded. Shape coercion happens when the analyzer builds
its records; numeric coercion of amounts happens at query time.
"""

from __future__ import annotations

import csv
import json
from collections.abc import Mapping
from os import PathLike
from pathlib import Path
from typing import Any

from ..errors import LoadError
from ..logging_setup import get_logger

logger = get_logger("ledger_analysis.ingest")

# Each inner set lists accepted spellings of one column; at least one of the
# columns must be present for a CSV to be recognized as a transaction export.
_CSV_KEY_COLUMNS: tuple[frozenset[str], ...] = (
    frozenset({"transaction_id", "id"}),
    frozenset({"transaction_date", "date"}),
    frozenset({"transaction_amount", "amount"}),
)


def _load_json(path: Path) -> list[dict[str, Any]]:
    try:
        with path.open(encoding="utf-8") as f:
            payload = json.load(f)
    except json.JSONDecodeError as e:
        raise LoadError(f"Failed to parse JSON in {path}: {e}") from e

    if not isinstance(payload, list):
        raise LoadError(
            f"Expected a JSON array of transactions in {path}, got {type(payload).__name__}"
        )
    bad = [i for i, item in enumerate(payload) if not isinstance(item, Mapping)]
    if bad:
        raise LoadError(f"Non-object entries in {path} at positions: {bad[:10]}")
    return [dict(item) for item in payload]


def _load_csv(path: Path) -> list[dict[str, Any]]:
    with path.open(encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        headers = set(reader.fieldnames or [])
        if not headers:
            raise LoadError(f"CSV appears to have no header row: {path}")
        if not any(headers & spellings for spellings in _CSV_KEY_COLUMNS):
            raise LoadError(
                "CSV header does not look like a transaction export. Expected one of: "
                + ", ".join(sorted(set().union(*_CSV_KEY_COLUMNS)))
            )
        try:
            # Surplus cells land under a ``None`` key; they have no column to map to.
            return [{k: v for k, v in row.items() if k is not None} for row in reader]
        except csv.Error as e:
            raise LoadError(f"Failed to parse CSV {path}: {e}") from e


def load_raw_records(path: str | PathLike[str]) -> list[dict[str, Any]]:
    """Read ``path`` and return one raw mapping per transaction, in file order.

    Raises :class:`~ledger_analysis.errors.LoadError` for unsupported suffixes
    and ill-shaped content; ``FileNotFoundError`` and other ``OSError``s
    propagate unchanged.
    """

    p = Path(path)
    suffix = p.suffix.lower()
    if suffix == ".json":
        records = _load_json(p)
    elif suffix == ".csv":
        records = _load_csv(p)
    else:
        raise LoadError(f"Unsupported transaction file type {p.suffix!r}: {p}")

    logger.info("loaded %d transactions from %s", len(records), p)
    return records


__all__ = ["load_raw_records"]
