from __future__ import annotations

import json
import logging
import sys

from recipe_catalog.logs import JSONFormatter, configure_logging


def make_record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="recipe_catalog.api",
        level=logging.INFO,
        pathname="api.py",
        lineno=10,
        msg="GET %s %s",
        args=("/api/recipes", 200),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_includes_message_and_extras():
    output = JSONFormatter().format(make_record(method="GET", status=200))
    parsed = json.loads(output)

    assert parsed["level"] == "INFO"
    assert parsed["logger"] == "recipe_catalog.api"
    assert parsed["message"] == "GET /api/recipes 200"
    assert parsed["method"] == "GET"
    assert parsed["status"] == 200
    assert "recipe_id" not in parsed


def test_json_formatter_includes_exception():
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        record = make_record()
        record.exc_info = sys.exc_info()

    parsed = json.loads(JSONFormatter().format(record))

    assert "RuntimeError: boom" in parsed["exception"]


def test_configure_logging_does_not_stack_handlers():
    configure_logging("DEBUG", "json")
    logger = configure_logging("WARNING", "text")

    ours = [h for h in logger.handlers if getattr(h, "_recipe_catalog", False)]
    assert len(ours) == 1
    assert not isinstance(ours[0].formatter, JSONFormatter)
    assert logger.level == logging.WARNING
