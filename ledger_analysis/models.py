"""Data models and type aliases for ``ledger_analysis``.

The central type is :class:`TransactionRecord`, a frozen pydantic model built
from a loosely-shaped mapping. Construction performs shape coercion only:

- every field is optional and defaults to ``None``;
- keys are accepted in two spellings (``id``/``transaction_id``,
  ``merchant``/``merchant_name``, ``card_type``/``cardType`` ...), and unknown
  keys are ignored;
- text fields are converted to ``str``; date/datetime objects become ISO
  ``YYYY-MM-DD`` strings;
- ``amount`` is copied verbatim. It is turned into a number only at read time
  via :func:`~ledger_analysis.coercion.coerce_amount`.

No raw record is rejected for its content.
"""

from __future__ import annotations

import datetime as dt
import json
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, NamedTuple, TypeAlias

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from .coercion import coerce_amount, format_amount, parse_calendar_date

# ---------------------------------------------------------------------------
# Raw (load-side) shapes
# ---------------------------------------------------------------------------

RawTransaction: TypeAlias = Mapping[str, Any]
"""A single transaction as produced by a loader (JSON object, CSV row, form)."""

RawTransactions: TypeAlias = Iterable[RawTransaction]


class TransactionType(StrEnum):
    """The three tags the aggregate operations know about.

    ``TransactionRecord.type`` stays free text; only these exact lowercase
    strings are counted by ``dominant_type`` and the debit aggregates.
    """

    CREDIT = "credit"
    DEBIT = "debit"
    EQUAL = "equal"


# ---------------------------------------------------------------------------
# Transaction record
# ---------------------------------------------------------------------------


class TransactionRecord(BaseModel):
    """One financial transaction; immutable after construction."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str | None = Field(
        default=None,
        validation_alias=AliasChoices("transaction_id", "id"),
        serialization_alias="transaction_id",
    )
    date: str | None = Field(
        default=None,
        validation_alias=AliasChoices("transaction_date", "date"),
        serialization_alias="transaction_date",
    )
    amount: Any = Field(
        default=None,
        validation_alias=AliasChoices("transaction_amount", "amount"),
        serialization_alias="transaction_amount",
    )
    type: str | None = Field(
        default=None,
        validation_alias=AliasChoices("transaction_type", "type"),
        serialization_alias="transaction_type",
    )
    description: str | None = Field(
        default=None,
        validation_alias=AliasChoices("transaction_description", "description"),
        serialization_alias="transaction_description",
    )
    merchant: str | None = Field(
        default=None,
        validation_alias=AliasChoices("merchant_name", "merchant"),
        serialization_alias="merchant_name",
    )
    card_type: str | None = Field(
        default=None,
        validation_alias=AliasChoices("card_type", "cardType"),
        serialization_alias="card_type",
    )

    @field_validator("id", "type", "description", "merchant", "card_type", mode="before")
    @classmethod
    def _as_text(cls, v: Any) -> str | None:
        if v is None or isinstance(v, str):
            return v
        return str(v)

    @field_validator("date", mode="before")
    @classmethod
    def _date_as_text(cls, v: Any) -> str | None:
        if isinstance(v, dt.datetime):
            return v.date().isoformat()
        if isinstance(v, dt.date):
            return v.isoformat()
        if v is None or isinstance(v, str):
            return v
        return str(v)

    # -- construction / serialization ---------------------------------------

    @classmethod
    def from_raw(cls, raw: RawTransaction | TransactionRecord) -> TransactionRecord:
        """Build a record from a raw mapping (records pass through unchanged)."""

        if isinstance(raw, TransactionRecord):
            return raw
        if not isinstance(raw, Mapping):
            raise TypeError(
                f"transaction input must be a mapping, got {type(raw).__name__}"
            )
        return cls.model_validate(dict(raw))

    @classmethod
    def from_text(cls, text: str) -> TransactionRecord:
        """Parse the output of :meth:`to_text` back into a record."""

        return cls.model_validate_json(text)

    def to_text(self) -> str:
        """Canonical JSON text: export key names, field order, 2-space indent."""

        return json.dumps(
            self.model_dump(by_alias=True), indent=2, ensure_ascii=False, default=str
        )

    # -- read-time views -----------------------------------------------------

    @property
    def numeric_amount(self) -> float:
        return coerce_amount(self.amount)

    @property
    def calendar_date(self) -> dt.date:
        return parse_calendar_date(self.date)


def render_records(records: Iterable[TransactionRecord]) -> str:
    """Join the canonical text of ``records`` with single newlines."""

    return "\n".join(record.to_text() for record in records)


# ---------------------------------------------------------------------------
# Query results
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class AmountRangeReport:
    """Records whose amount fell inside a range, with their combined total."""

    total: float
    records: tuple[TransactionRecord, ...]

    @property
    def text(self) -> str:
        return (
            f"Total of matching transactions: {format_amount(self.total)}\n"
            f"Matching transactions:\n{render_records(self.records)}"
        )

    def __str__(self) -> str:
        return self.text


class MonthActivity(NamedTuple):
    """Winner of a month bucketing; ``month`` is ``None`` when no bucket won."""

    month: int | None
    value: float


__all__ = [
    "RawTransaction",
    "RawTransactions",
    "TransactionType",
    "TransactionRecord",
    "render_records",
    "AmountRangeReport",
    "MonthActivity",
]
