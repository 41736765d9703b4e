"""Tests for the logging helpers."""

import logging

import pytest

from strata.infrastructure.observability import StrataLogger, log_context, log_ignored, log_skip
from strata.infrastructure.observability.logging import ContextualFormatter, resolve_level


def _format(message: str) -> str:
    record = logging.LogRecord("strata", logging.INFO, __file__, 1, message, None, None)
    return ContextualFormatter("%(message)s").format(record)


def test_formatter_appends_context():
    with log_context(source="[Strata]"):
        assert _format("booted") == "booted [source=[Strata]]"
    assert _format("booted") == "booted"


def test_context_with_percent_sign_keeps_message_arguments():
    record = logging.LogRecord(
        "strata", logging.INFO, __file__, 1, "Skipping %s", ("cache",), None
    )
    with log_context(middleware="50%off"):
        formatted = ContextualFormatter("%(message)s").format(record)
    assert formatted == "Skipping cache [middleware=50%off]"
    assert record.getMessage() == "Skipping cache"


def test_nested_contexts_merge():
    with log_context(a=1):
        with log_context(b=2):
            assert _format("x") == "x [a=1 b=2]"


@pytest.mark.parametrize(
    "level, expected",
    [(None, logging.INFO), (10, 10), ("debug", logging.DEBUG), ("WARNING", logging.WARNING)],
)
def test_resolve_level(level, expected):
    assert resolve_level(level) == expected


def test_resolve_level_rejects_unknown_names():
    with pytest.raises(ValueError):
        resolve_level("chatty")


def test_strata_logger_two_argument_sink(caplog):
    sink = StrataLogger("strata.test.sink")
    with caplog.at_level(logging.INFO, logger="strata.test.sink"):
        assert sink.log("hello", "[Test]") is None
    assert caplog.records[-1].getMessage() == "hello"


def test_skip_and_ignore_use_distinct_levels(caplog):
    logger = logging.getLogger("strata.test.levels")
    with caplog.at_level(logging.INFO, logger="strata.test.levels"):
        log_skip(logger, "skipped %s", "thing")
        log_ignored(logger, "could not write", OSError("read-only"))
    levels = [record.levelno for record in caplog.records]
    assert levels == [logging.INFO, logging.WARNING]
    assert caplog.records[1].getMessage() == "could not write: read-only"
