import json
import logging

import pytest
import structlog

from hyperfn import config
from hyperfn.logging_utils import (
    add_trace_id,
    clear_trace_id,
    configure_logging,
    get_logger,
    get_trace_id,
    set_trace_id,
)


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    level, handlers = root.level, list(root.handlers)
    yield
    structlog.reset_defaults()
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
    root.setLevel(level)


def messages(caplog, name):
    return [record.getMessage() for record in caplog.records if record.name == name]


def test_trace_id_roundtrip():
    set_trace_id("trace-123")
    try:
        assert get_trace_id() == "trace-123"
    finally:
        clear_trace_id()
    assert get_trace_id() is None


def test_add_trace_id_processor():
    set_trace_id("trace-abc")
    try:
        event = add_trace_id(None, "info", {"event": "tool_call_start"})
    finally:
        clear_trace_id()
    assert event == {"event": "tool_call_start", "trace_id": "trace-abc"}


def test_add_trace_id_without_trace():
    assert add_trace_id(None, "info", {"event": "x"}) == {"event": "x"}


# ---------------------------------------------------------------------------
# configure_logging
# ---------------------------------------------------------------------------
def test_configure_info_renders_json_and_filters_debug(restore_logging, caplog):
    configure_logging("INFO")
    logger = get_logger("hyperfn.tests.info")
    set_trace_id("trace-json")
    try:
        logger.debug("hidden")
        logger.info("shown", tool_name="add_two")
    finally:
        clear_trace_id()
    lines = messages(caplog, "hyperfn.tests.info")
    assert len(lines) == 1
    record = json.loads(lines[0])
    assert record["event"] == "shown"
    assert record["level"] == "info"
    assert record["tool_name"] == "add_two"
    assert record["trace_id"] == "trace-json"
    assert "timestamp" in record


def test_configure_debug_renders_console(restore_logging, caplog):
    configure_logging("DEBUG")
    logger = get_logger("hyperfn.tests.debug")
    logger.debug("verbose_event")
    lines = messages(caplog, "hyperfn.tests.debug")
    assert len(lines) == 1
    assert "verbose_event" in lines[0]
    with pytest.raises(ValueError):
        json.loads(lines[0])


def test_configure_defaults_to_setting(restore_logging, monkeypatch):
    monkeypatch.setattr(config, "LOG_LEVEL", "WARNING")
    configure_logging()
    assert logging.getLogger().level == logging.WARNING
