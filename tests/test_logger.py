"""Tests for structured JSON logging."""

import json
import logging

from textshaper.logger import JsonFormatter, get_logger


def make_record(**extra):
    record = logging.LogRecord(
        name="textshaper",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="chat.response",
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formats_extra_fields():
    output = json.loads(JsonFormatter().format(make_record(component="openai_chat", choices_count=1)))

    assert output["level"] == "INFO"
    assert output["message"] == "chat.response"
    assert output["component"] == "openai_chat"
    assert output["choices_count"] == 1
    assert "timestamp" in output


def test_non_serializable_fields_become_strings():
    output = json.loads(JsonFormatter().format(make_record(error=ValueError("boom"))))

    assert output["error"] == "boom"


def test_component_logger_attaches_component(caplog):
    logger = logging.getLogger("textshaper")
    logger.propagate = True
    try:
        with caplog.at_level(logging.INFO, logger="textshaper"):
            get_logger("shaper").info("shaping", mode="direct")
    finally:
        logger.propagate = False

    record = caplog.records[-1]
    assert record.component == "shaper"
    assert record.mode == "direct"
