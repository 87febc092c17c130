import io
import logging

import pytest

from ledger_analysis.logging_setup import configure_logging, get_logger


def test_get_logger_is_silent_until_configured():
    logger = get_logger("ledger_analysis.test")
    pkg = logging.getLogger("ledger_analysis")

    assert logger.name == "ledger_analysis.test"
    assert any(isinstance(h, logging.NullHandler) for h in pkg.handlers)


def test_configure_logging_attaches_one_handler_once():
    stream = io.StringIO()
    configure_logging("DEBUG", fmt="%(name)s %(levelname)s %(message)s", stream=stream)
    configure_logging("ERROR", stream=io.StringIO())  # no-op: already configured

    get_logger("ledger_analysis.analyzer").debug("hello %d", 3)

    pkg = logging.getLogger("ledger_analysis")
    assert len(pkg.handlers) == 1
    assert pkg.propagate is False
    assert stream.getvalue() == "ledger_analysis.analyzer DEBUG hello 3\n"


def test_level_falls_back_to_environment(monkeypatch):
    monkeypatch.setenv("LEDGER_ANALYSIS_LOG_LEVEL", "warning")
    stream = io.StringIO()
    configure_logging(stream=stream)

    log = get_logger("ledger_analysis.ingest")
    log.info("hidden")
    log.warning("shown")

    assert stream.getvalue().splitlines()[-1].endswith("WARNING shown")
    assert "hidden" not in stream.getvalue()


def test_numeric_level_strings_are_accepted():
    configure_logging("10", stream=io.StringIO())
    assert logging.getLogger("ledger_analysis").level == logging.DEBUG


def test_unknown_level_is_rejected():
    with pytest.raises(ValueError, match="unknown logging level"):
        configure_logging("chatty", stream=io.StringIO())


def test_blank_level_defaults_to_info(monkeypatch):
    monkeypatch.setenv("LEDGER_ANALYSIS_LOG_LEVEL", "")
    configure_logging("  ", stream=io.StringIO())
    assert logging.getLogger("ledger_analysis").level == logging.INFO
