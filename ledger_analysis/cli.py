"""CLI for the ``ledger_analysis`` package.

A Typer-based console interface with one subcommand per analyzer query plus a
``report`` summary rendered with ``rich``. Environment variables are loaded
from a local ``.env`` using ``python-dotenv`` before any command runs:

- ``LEDGER_ANALYSIS_DATA``: transaction file used when ``--data`` is omitted
  (defaults to ``transactions.json`` in the working directory);
- ``LEDGER_ANALYSIS_LOG_LEVEL``: logging level when ``--log-level`` is omitted.

Business logic lives in :mod:`ledger_analysis.analyzer`; this module only
loads data, dispatches, and turns errors into ``Error: ...`` lines on stderr
with exit status 1.
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import NoReturn

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from .analyzer import TransactionAnalyzer
from .coercion import format_amount
from .errors import DegenerateAggregateError, LedgerError
from .ingest import load_raw_records
from .logging_setup import configure_logging, get_logger

logger = get_logger("ledger_analysis.cli")

_DEFAULT_DATA_FILE = "transactions.json"


@dataclass
class _CliState:
    data_path: Path
    analyzer: TransactionAnalyzer | None = None


# ---- Small module-level helpers used by CLI commands -------------------------


def _fail(message: str) -> NoReturn:
    typer.echo(f"Error: {message}", err=True)
    raise typer.Exit(1)


@contextmanager
def _reporting_errors() -> Iterator[None]:
    """Convert package errors raised inside the block into a CLI failure."""

    try:
        yield
    except LedgerError as e:
        _fail(str(e))


def _analyzer(ctx: typer.Context) -> TransactionAnalyzer:
    """Load the data file once per invocation and cache the analyzer."""

    state: _CliState = ctx.obj
    if state.analyzer is None:
        try:
            raw = load_raw_records(state.data_path)
        except FileNotFoundError:
            _fail(f"File not found: {state.data_path}")
        except PermissionError:
            _fail(f"Permission denied: {state.data_path}")
        except LedgerError as e:
            _fail(str(e))
        with _reporting_errors():
            state.analyzer = TransactionAnalyzer(raw)
    return state.analyzer


def _echo_lines(values: list[str | None]) -> None:
    for value in values:
        typer.echo("" if value is None else value)


# ---- Typer-based console interface -------------------------------------------


app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help=(
        "Query and aggregate a transaction export (JSON array or CSV). "
        "Loads LEDGER_ANALYSIS_* settings from a local .env before running."
    ),
)


@app.callback(invoke_without_command=True)
def _root(
    ctx: typer.Context,
    *,
    data: Path | None = typer.Option(
        None,
        "--data",
        help=f"Transaction file (.json or .csv). Falls back to LEDGER_ANALYSIS_DATA, then {_DEFAULT_DATA_FILE}.",
        dir_okay=False,
    ),
    log_level: str | None = typer.Option(
        None, "--log-level", help="Logging level (falls back to LEDGER_ANALYSIS_LOG_LEVEL)."
    ),
) -> None:
    """Root command.

    Loads ``.env`` from the current working directory (without overriding any
    already-set environment variables), configures logging, and records the
    data file for the subcommand.
    """

    # Load environment from .env in CWD (override=False to keep existing env)
    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)

    try:
        configure_logging(log_level)
    except ValueError as e:
        _fail(str(e))

    data_path = data or Path(os.getenv("LEDGER_ANALYSIS_DATA") or _DEFAULT_DATA_FILE)
    ctx.obj = _CliState(data_path=data_path)
    logger.debug("using transaction file %s", data_path)

    if ctx.invoked_subcommand is None:
        typer.echo("No subcommand provided. Use --help to see available commands.")
        raise typer.Exit(1)


@app.command("list")
def list_cmd(ctx: typer.Context) -> None:
    """Print every transaction."""

    typer.echo(_analyzer(ctx).all_as_text())


@app.command("types")
def types_cmd(ctx: typer.Context) -> None:
    """Print distinct transaction types in first-seen order."""

    _echo_lines(_analyzer(ctx).unique_types())


@app.command("descriptions")
def descriptions_cmd(ctx: typer.Context) -> None:
    """Print every transaction description."""

    _echo_lines(_analyzer(ctx).descriptions())


@app.command("total")
def total_cmd(
    ctx: typer.Context,
    year: int | None = typer.Option(None, help="Only transactions in this year."),
    month: int | None = typer.Option(None, help="Only transactions in this month (1-12)."),
    day: int | None = typer.Option(None, help="Only transactions on this day of month."),
) -> None:
    """Print the total amount, optionally filtered by date components."""

    analyzer = _analyzer(ctx)
    with _reporting_errors():
        typer.echo(format_amount(analyzer.total_amount_by_date(year, month, day)))


@app.command("debit-total")
def debit_total_cmd(ctx: typer.Context) -> None:
    """Print the total amount of debit transactions."""

    typer.echo(format_amount(_analyzer(ctx).total_debit_amount()))


@app.command("average")
def average_cmd(ctx: typer.Context) -> None:
    """Print the average amount, rounded half up."""

    analyzer = _analyzer(ctx)
    with _reporting_errors():
        typer.echo(format_amount(analyzer.average_amount()))


@app.command("by-type")
def by_type_cmd(
    ctx: typer.Context,
    type_: str = typer.Argument(..., metavar="TYPE", help="Exact transaction type."),
) -> None:
    """Print transactions of the given type."""

    typer.echo(_analyzer(ctx).by_type(type_))


@app.command("by-merchant")
def by_merchant_cmd(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Exact merchant name."),
) -> None:
    """Print transactions with the given merchant."""

    typer.echo(_analyzer(ctx).by_merchant(name))


@app.command("date-range")
def date_range_cmd(
    ctx: typer.Context,
    start: str = typer.Argument(..., help="First date (inclusive), e.g. 2024-03-01."),
    end: str = typer.Argument(..., help="Last date (inclusive)."),
) -> None:
    """Print transactions dated within [START, END]."""

    analyzer = _analyzer(ctx)
    with _reporting_errors():
        typer.echo(analyzer.in_date_range(start, end))


@app.command("before")
def before_cmd(
    ctx: typer.Context,
    date: str = typer.Argument(..., help="Exclusive upper bound, e.g. 2024-04-01."),
) -> None:
    """Print transactions dated strictly before DATE."""

    analyzer = _analyzer(ctx)
    with _reporting_errors():
        typer.echo(analyzer.before(date))


@app.command("amount-range")
def amount_range_cmd(
    ctx: typer.Context,
    min_amount: float = typer.Option(..., "--min", help="Lowest amount (inclusive)."),
    max_amount: float = typer.Option(..., "--max", help="Highest amount (inclusive)."),
) -> None:
    """Print the total and the transactions whose amount is within [--min, --max]."""

    typer.echo(_analyzer(ctx).by_amount_range(min_amount, max_amount).text)


@app.command("active-month")
def active_month_cmd(ctx: typer.Context) -> None:
    """Print the month with the highest total amount."""

    analyzer = _analyzer(ctx)
    with _reporting_errors():
        typer.echo(analyzer.most_active_month())


@app.command("active-debit-month")
def active_debit_month_cmd(ctx: typer.Context) -> None:
    """Print the month with the most debit transactions."""

    analyzer = _analyzer(ctx)
    with _reporting_errors():
        typer.echo(analyzer.most_active_debit_month())


@app.command("dominant-type")
def dominant_type_cmd(ctx: typer.Context) -> None:
    """Print the most frequent of credit/debit ("equal" on ties)."""

    typer.echo(_analyzer(ctx).dominant_type())


@app.command("find")
def find_cmd(
    ctx: typer.Context,
    id_: str = typer.Argument(..., metavar="ID", help="Transaction id."),
) -> None:
    """Print the first transaction with the given id."""

    analyzer = _analyzer(ctx)
    with _reporting_errors():
        typer.echo(analyzer.find_by_id(id_))


@app.command("report")
def report_cmd(ctx: typer.Context) -> None:
    """Print a summary table and per-month buckets."""

    analyzer = _analyzer(ctx)
    console = Console()

    with _reporting_errors():
        try:
            average = format_amount(analyzer.average_amount())
        except DegenerateAggregateError:
            average = "n/a"
        busiest = analyzer.busiest_month()
        busiest_debit = analyzer.busiest_debit_month()
        totals = analyzer.monthly_totals()
        debit_counts = analyzer.monthly_debit_counts()

    summary = Table(title="Ledger summary")
    summary.add_column("Metric")
    summary.add_column("Value", justify="right")
    summary.add_row("Transactions", str(len(analyzer)))
    summary.add_row("Total amount", format_amount(analyzer.total_amount()))
    summary.add_row("Debit total", format_amount(analyzer.total_debit_amount()))
    summary.add_row("Average amount", average)
    summary.add_row("Dominant type", analyzer.dominant_type())
    summary.add_row(
        "Types", ", ".join("" if t is None else t for t in analyzer.unique_types())
    )
    summary.add_row("Top month (amount)", str(busiest.month or "none"))
    summary.add_row("Top month (debits)", str(busiest_debit.month or "none"))
    console.print(summary)

    if totals:
        by_month = Table(title="By month")
        by_month.add_column("Month", justify="right")
        by_month.add_column("Total", justify="right")
        by_month.add_column("Debits", justify="right")
        for month, total in totals.items():
            by_month.add_row(str(month), format_amount(total), str(debit_counts.get(month, 0)))
        console.print(by_month)


def main() -> None:
    """Console-script entrypoint (``ledger-analysis``)."""

    app()


if __name__ == "__main__":  # pragma: no cover
    # Running as a module: `python -m ledger_analysis.cli`
    main()
