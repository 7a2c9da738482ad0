"""
Tests for structured logging helpers.
"""

import json
import logging

from life_metrics.observability import (
    HumanFormatter,
    JSONFormatter,
    configure_logging,
    get_logger,
    silent_logger,
)


def _record(msg="Health stats computed", **extra):
    record = logging.LogRecord(
        name="life_metrics.aggregators.health",
        level=logging.DEBUG,
        pathname=__file__,
        lineno=1,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter:
    def test_core_fields(self):
        payload = json.loads(JSONFormatter().format(_record()))
        assert payload["level"] == "DEBUG"
        assert payload["logger"] == "life_metrics.aggregators.health"
        assert payload["message"] == "Health stats computed"
        assert payload["timestamp"].endswith("Z")

    def test_timestamp_from_record_creation(self):
        record = _record()
        record.created = 0
        payload = json.loads(JSONFormatter().format(record))
        assert payload["timestamp"] == "1970-01-01T00:00:00.000Z"

    def test_extras_included(self):
        payload = json.loads(JSONFormatter().format(_record(vitals=3, weight=170.5)))
        assert payload["vitals"] == 3
        assert payload["weight"] == 170.5

    def test_non_serializable_extra(self):
        payload = json.loads(JSONFormatter().format(_record(path=object())))
        assert isinstance(payload["path"], str)


class TestHumanFormatter:
    def test_extras_as_pairs(self):
        line = HumanFormatter().format(_record(vitals=3))
        assert "[DEBUG] life_metrics.aggregators.health: Health stats computed" in line
        assert line.endswith("vitals=3")


class TestConfigureLogging:
    def test_installs_single_handler(self):
        configure_logging("DEBUG", json_format=True)
        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JSONFormatter)

    def test_bad_level_falls_back_to_info(self):
        configure_logging("chatty", json_format=False)
        root = logging.getLogger()
        assert root.level == logging.INFO
        assert isinstance(root.handlers[0].formatter, HumanFormatter)


class TestLoggers:
    def test_get_logger(self):
        assert get_logger("life_metrics.x") is logging.getLogger("life_metrics.x")

    def test_silent_logger_emits_nothing(self, caplog):
        log = silent_logger("tests.silent")
        caplog.set_level(logging.DEBUG)
        log.error("should not appear")
        assert not [r for r in caplog.records if r.name == "tests.silent"]

    def test_package_logger_has_null_handler(self):
        import life_metrics  # noqa: F401

        handlers = logging.getLogger("life_metrics").handlers
        assert any(isinstance(h, logging.NullHandler) for h in handlers)
