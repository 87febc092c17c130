"""In-memory transaction analyzer.

:class:`TransactionAnalyzer` owns an ordered, append-only sequence of
:class:`~ledger_analysis.models.TransactionRecord` values and answers queries
over it. Queries come in two flavors:

- numeric aggregates (``total_amount``, ``total_amount_by_date``, ...) that
  coerce amounts via :func:`~ledger_analysis.coercion.coerce_amount`; a
  non-numeric amount becomes NaN and the aggregate is NaN;
- selections that return display text: the canonical text of each matching
  record joined by ``"\\n"``, in collection order (``""`` when nothing
  matches).

The analyzer is single-owner and synchronous. It defines no locking; hosts
sharing one instance across threads must serialize access themselves.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Iterable, Iterator
from typing import Any

from .coercion import coerce_amount, format_amount, js_round, parse_calendar_date
from .errors import DegenerateAggregateError, InvalidRangeError, TransactionNotFoundError
from .logging_setup import get_logger
from .models import (
    AmountRangeReport,
    MonthActivity,
    RawTransaction,
    RawTransactions,
    TransactionRecord,
    TransactionType,
    render_records,
)

logger = get_logger("ledger_analysis.analyzer")

_MONTHS = range(1, 13)


def _total(values: Iterable[float]) -> float:
    """Exact sum of ``values``; infinities and NaN follow IEEE addition."""

    values = list(values)
    try:
        return math.fsum(values)
    except (OverflowError, ValueError):
        # fsum rejects overflowing partials and inf + -inf.
        return sum(values, 0.0)


def _sum_amounts(records: list[TransactionRecord]) -> float:
    return _total(coerce_amount(r.amount) for r in records)


def _date_component(value: int | None, name: str) -> int | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidRangeError(value, reason=f"{name} must be an integer")
    return value


def _peak(buckets: dict[int, float]) -> MonthActivity:
    """Scan months 1..12; the first bucket strictly above the running best wins.

    The running best starts at zero, so when no bucket is positive there is no
    winner. Ties keep the lower month.
    """

    best_month: int | None = None
    best_value = 0.0
    for month in _MONTHS:
        value = buckets.get(month, 0.0)
        if value > best_value:
            best_month, best_value = month, value
    return MonthActivity(best_month, best_value)


class TransactionAnalyzer:
    """Ordered, append-only collection of transactions plus its query surface."""

    def __init__(self, raw_records: RawTransactions = ()) -> None:
        self._records: list[TransactionRecord] = [
            TransactionRecord.from_raw(raw) for raw in raw_records
        ]
        logger.debug("analyzer created with %d transactions", len(self._records))

    # -- collection ----------------------------------------------------------

    def append(self, raw_record: RawTransaction | TransactionRecord) -> TransactionRecord:
        """Convert ``raw_record`` and add it at the end of the collection."""

        record = TransactionRecord.from_raw(raw_record)
        self._records.append(record)
        logger.debug("appended transaction %r (now %d)", record.id, len(self._records))
        return record

    @property
    def records(self) -> tuple[TransactionRecord, ...]:
        """Snapshot of the collection in insertion order."""

        return tuple(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[TransactionRecord]:
        return iter(tuple(self._records))

    def _select(self, predicate: Callable[[TransactionRecord], bool]) -> list[TransactionRecord]:
        return [r for r in self._records if predicate(r)]

    # -- text views ----------------------------------------------------------

    def all_as_text(self) -> str:
        return render_records(self._records)

    def descriptions(self) -> list[str | None]:
        return [r.description for r in self._records]

    def unique_types(self) -> list[str | None]:
        """Distinct ``type`` values in first-occurrence order."""

        return list(dict.fromkeys(r.type for r in self._records))

    def by_type(self, type_: str) -> str:
        return render_records(self._select(lambda r: r.type == type_))

    def by_merchant(self, name: str) -> str:
        return render_records(self._select(lambda r: r.merchant == name))

    def find_by_id(self, id_: Any) -> str:
        """Return the text of the first record whose id equals ``id_``.

        Ids are compared as strings, so ``find_by_id(1)`` finds ``"1"``.
        Raises :class:`TransactionNotFoundError` when nothing matches.
        """

        wanted = str(id_)
        for record in self._records:
            if record.id == wanted:
                return record.to_text()
        raise TransactionNotFoundError(id_)

    # -- date selections -----------------------------------------------------

    def in_date_range(self, start: Any, end: Any) -> str:
        """Records dated within ``[start, end]``; reversed bounds select nothing."""

        lo = parse_calendar_date(start)
        hi = parse_calendar_date(end)
        return render_records(self._select(lambda r: lo <= r.calendar_date <= hi))

    def before(self, date: Any) -> str:
        """Records dated strictly earlier than ``date``."""

        bound = parse_calendar_date(date)
        return render_records(self._select(lambda r: r.calendar_date < bound))

    # -- aggregates ----------------------------------------------------------

    def total_amount(self) -> float:
        return _sum_amounts(self._records)

    def total_amount_by_date(
        self,
        year: int | None = None,
        month: int | None = None,
        day: int | None = None,
    ) -> float:
        """Sum amounts of records matching every provided date component.

        Omitted components match any record; month is 1-based. With nothing
        provided no dates are parsed and the result equals ``total_amount()``.
        """

        year = _date_component(year, "year")
        month = _date_component(month, "month")
        day = _date_component(day, "day")
        if year is None and month is None and day is None:
            return self.total_amount()

        def matches(record: TransactionRecord) -> bool:
            d = record.calendar_date
            return (
                (year is None or d.year == year)
                and (month is None or d.month == month)
                and (day is None or d.day == day)
            )

        return _sum_amounts(self._select(matches))

    def total_debit_amount(self) -> float:
        return _sum_amounts(self._select(lambda r: r.type == TransactionType.DEBIT))

    def average_amount(self) -> float:
        """Mean amount rounded half up.

        Raises :class:`DegenerateAggregateError` for an empty collection.
        """

        if not self._records:
            raise DegenerateAggregateError("average of an empty transaction collection")
        return js_round(self.total_amount() / len(self._records))

    def by_amount_range(self, min_amount: float, max_amount: float) -> AmountRangeReport:
        """Records with ``min_amount <= amount <= max_amount`` and their total."""

        lo = coerce_amount(min_amount)
        hi = coerce_amount(max_amount)
        matching = self._select(lambda r: lo <= coerce_amount(r.amount) <= hi)
        return AmountRangeReport(total=_sum_amounts(matching), records=tuple(matching))

    # -- month buckets -------------------------------------------------------

    def monthly_totals(self) -> dict[int, float]:
        """Sum of amounts per calendar month (1-12), all years combined."""

        buckets: dict[int, list[float]] = {}
        for record in self._records:
            buckets.setdefault(record.calendar_date.month, []).append(
                coerce_amount(record.amount)
            )
        return {m: _total(values) for m, values in sorted(buckets.items())}

    def monthly_debit_counts(self) -> dict[int, int]:
        counts: dict[int, int] = {}
        for record in self._select(lambda r: r.type == TransactionType.DEBIT):
            month = record.calendar_date.month
            counts[month] = counts.get(month, 0) + 1
        return dict(sorted(counts.items()))

    def busiest_month(self) -> MonthActivity:
        return _peak(self.monthly_totals())

    def busiest_debit_month(self) -> MonthActivity:
        return _peak({m: float(n) for m, n in self.monthly_debit_counts().items()})

    def most_active_month(self) -> str:
        month, total = self.busiest_month()
        return (
            f"Month with the highest total amount: {month or 'none'}, "
            f"total: {format_amount(total)}"
        )

    def most_active_debit_month(self) -> str:
        month, count = self.busiest_debit_month()
        return (
            f"Month with the most debit transactions: {month or 'none'}, "
            f"count: {format_amount(count)}"
        )

    # -- type tally ----------------------------------------------------------

    def type_counts(self) -> dict[TransactionType, int]:
        tags = {tag.value: tag for tag in TransactionType}
        counts = {tag: 0 for tag in TransactionType}
        for record in self._records:
            tag = tags.get(record.type)
            if tag is not None:
                counts[tag] += 1
        return counts

    def dominant_type(self) -> str:
        """``"debit"`` or ``"credit"`` when strictly ahead of both others, else ``"equal"``."""

        counts = self.type_counts()
        credit = counts[TransactionType.CREDIT]
        debit = counts[TransactionType.DEBIT]
        equal = counts[TransactionType.EQUAL]
        if debit > credit and debit > equal:
            return TransactionType.DEBIT.value
        if credit > debit and credit > equal:
            return TransactionType.CREDIT.value
        return TransactionType.EQUAL.value


__all__ = ["TransactionAnalyzer"]
