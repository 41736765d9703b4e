"""Tests for the diagnostics helpers."""

import logging
import os

from strata.infrastructure.diagnostics import debug, describe_config, read_pid, write_pid_file


def test_pid_round_trip(tmp_path):
    path = tmp_path / "pid"
    assert write_pid_file(path) == os.getpid()
    assert read_pid(path) == os.getpid()


def test_read_pid_handles_missing_and_garbage(tmp_path):
    assert read_pid(tmp_path / "nope") is None
    (tmp_path / "pid").write_text("not a number", encoding="utf-8")
    assert read_pid(tmp_path / "pid") is None


def test_describe_config_flattens_tree():
    rows = describe_config({"logger": {"level": "INFO"}, "routes": [], "empty": {}})
    assert rows == [
        {"key": "logger.level", "value": "INFO"},
        {"key": "routes", "value": []},
        {"key": "empty", "value": {}},
    ]


def test_debug_logs_pretty_value(caplog):
    logger = logging.getLogger("strata.test.debug")
    with caplog.at_level(logging.DEBUG, logger="strata.test.debug"):
        rendered = debug({"b": 1, "a": [1, 2]}, logger)
    assert rendered == "{'a': [1, 2], 'b': 1}"
    assert rendered in caplog.text
