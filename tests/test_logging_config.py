"""Tests for logging configuration and formatters."""

import json
import logging
from datetime import datetime, timezone

import pytest

from spark_ranker.logging import ComponentLoggerAdapter, get_logger
from spark_ranker.logging.config import (
    SERVICE_NAME,
    ContextualFilter,
    JSONFormatter,
    KeyValueFormatter,
    configure_logging,
)
from spark_ranker.logging.context import log_context


@pytest.fixture
def logger():
    """Create a test logger with no handlers attached."""
    test_logger = logging.getLogger("test_logger")
    test_logger.setLevel(logging.DEBUG)
    test_logger.handlers.clear()

    yield test_logger

    test_logger.handlers.clear()


@pytest.fixture
def restore_root_logger():
    """Put the root logger back the way configure_logging found it."""
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level

    yield root_logger

    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)


def make_record(logger, message="Test message", extra=None):
    return logger.makeRecord("test", logging.INFO, "test.py", 1, message, (), None, extra=extra)


def test_json_formatter_basic(logger):
    """JSONFormatter produces valid JSON with the mandatory fields."""
    log_obj = json.loads(JSONFormatter().format(make_record(logger)))

    assert log_obj["level"] == "INFO"
    assert log_obj["message"] == "Test message"
    assert log_obj["logger"] == "test"
    assert log_obj["timestamp"].endswith("Z")
    # YYYY-MM-DDTHH:MM:SS.sssZ
    assert len(log_obj["timestamp"]) == 24


def test_json_formatter_with_extra_fields(logger):
    record = make_record(
        logger,
        extra={"event": "ranking.profiles.completed", "returned_count": 3, "top_score": None},
    )
    log_obj = json.loads(JSONFormatter().format(record))

    assert log_obj["event"] == "ranking.profiles.completed"
    assert log_obj["returned_count"] == 3
    assert log_obj["top_score"] is None
    assert "name" not in log_obj


def test_json_formatter_serializes_non_json_values(logger):
    """Sets and datetimes in extras still produce valid JSON."""
    record = make_record(
        logger,
        extra={
            "excluded_ids": {4},
            "now": datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc),
            "options": object(),
        },
    )
    log_obj = json.loads(JSONFormatter().format(record))

    assert log_obj["excluded_ids"] == [4]
    assert log_obj["now"] == "2025-06-01T12:00:00+00:00"
    assert isinstance(log_obj["options"], str)


def test_contextual_filter_adds_static_fields(logger):
    record = make_record(logger)
    ContextualFilter(environment="test").filter(record)

    assert record.service == SERVICE_NAME
    assert record.environment == "test"


def test_contextual_filter_adds_context_fields(logger):
    """Fields pushed with log_context land on the record."""
    with log_context(requester_id=12, ranking="profiles"):
        record = make_record(logger)
        ContextualFilter().filter(record)

    assert record.requester_id == 12
    assert record.ranking == "profiles"


def test_contextual_filter_keeps_explicit_extras(logger):
    """An explicit extra wins over the same key in the context."""
    with log_context(ranking="profiles"):
        record = make_record(logger, extra={"ranking": "events"})
        ContextualFilter().filter(record)

    assert record.ranking == "events"


def test_key_value_formatter_with_extras(logger):
    formatter = KeyValueFormatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    record = make_record(
        logger,
        extra={
            "event": "ranking.events.completed",
            "count": 2,
            "flag": True,
            "missing": None,
            "reason": "Near you",
        },
    )
    record.service = SERVICE_NAME

    output = formatter.format(record)

    assert "[INFO] test: Test message" in output
    assert "event=ranking.events.completed" in output
    assert "count=2" in output
    assert "flag=true" in output
    assert "missing=null" in output
    assert 'reason="Near you"' in output
    assert "service=" not in output


def test_configure_logging_invalid_level():
    with pytest.raises(ValueError, match="Invalid log level"):
        configure_logging(level="INVALID")


def test_configure_logging_invalid_format():
    with pytest.raises(ValueError, match="Invalid log format"):
        configure_logging(format_type="invalid")


def test_configure_logging_json_format(restore_root_logger):
    configure_logging(level="DEBUG", format_type="json", environment="test")

    assert restore_root_logger.level == logging.DEBUG
    assert len(restore_root_logger.handlers) == 1
    handler = restore_root_logger.handlers[0]
    assert isinstance(handler.formatter, JSONFormatter)
    assert any(isinstance(f, ContextualFilter) for f in handler.filters)


def test_configure_logging_key_value_format(restore_root_logger):
    configure_logging(level="warning", format_type="key-value")

    assert restore_root_logger.level == logging.WARNING
    assert isinstance(restore_root_logger.handlers[0].formatter, KeyValueFormatter)


def test_configure_logging_writes_to_stderr(restore_root_logger, capsys):
    """Stdout stays free for ranking output."""
    configure_logging(level="INFO", format_type="json")
    logging.getLogger("spark_ranker.test").info("hello", extra={"event": "test.event"})

    captured = capsys.readouterr()
    assert captured.out == ""
    assert json.loads(captured.err.strip().splitlines()[-1])["event"] == "test.event"


def test_get_logger_with_component(caplog):
    caplog.set_level(logging.INFO, logger="spark_ranker")
    adapter = get_logger("spark_ranker.test", component="ranking")

    assert isinstance(adapter, ComponentLoggerAdapter)
    adapter.info("ranked", extra={"event": "test.event"})

    record = caplog.records[-1]
    assert record.component == "ranking"
    assert record.event == "test.event"


def test_get_logger_component_can_be_overridden(caplog):
    caplog.set_level(logging.INFO, logger="spark_ranker")
    get_logger("spark_ranker.test", component="ranking").info(
        "configured", extra={"component": "logging"}
    )
    assert caplog.records[-1].component == "logging"


def test_get_logger_without_component():
    assert isinstance(get_logger("spark_ranker.test"), logging.Logger)
