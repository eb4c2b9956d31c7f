"""Structured Logging — JSON formatter fields and idempotent setup."""

import json
import logging

from app.infrastructure.observability import JSONFormatter, setup_logging


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "app.services.project_lifecycle", logging.INFO, __file__, 1,
        "Project cancelled", None, None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_includes_base_fields():
    log = json.loads(JSONFormatter().format(_record()))
    assert log["level"] == "INFO"
    assert log["logger"] == "app.services.project_lifecycle"
    assert log["message"] == "Project cancelled"
    assert "timestamp" in log


def test_json_formatter_surfaces_known_extras_only():
    log = json.loads(JSONFormatter().format(
        _record(project_id="abc", error_code="PROJECT_CONFLICT", unrelated="x"),
    ))
    assert log["project_id"] == "abc"
    assert log["error_code"] == "PROJECT_CONFLICT"
    assert "unrelated" not in log


def test_setup_logging_does_not_stack_handlers():
    setup_logging("DEBUG", "json")
    setup_logging("INFO", "text")
    try:
        ours = [h for h in logging.root.handlers if h.get_name() == "boonkosang"]
        assert len(ours) == 1
        assert logging.root.level == logging.INFO
    finally:
        for handler in list(logging.root.handlers):
            if handler.get_name() == "boonkosang":
                logging.root.removeHandler(handler)
