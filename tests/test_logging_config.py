"""Tests for structured logging configuration."""

from __future__ import annotations

import io
import json
import logging
import sys

from monitor.config import Settings
from monitor.logging_config import (
    JSONFormatter,
    MonitorLogHandler,
    configure_logging,
    get_logger,
    setup_logging,
)


def _record(level=logging.INFO, msg="hello %s", args=("world",), exc_info=None) -> logging.LogRecord:
    return logging.LogRecord(
        name="test", level=level, pathname="test.py",
        lineno=1, msg=msg, args=args, exc_info=exc_info,
    )


def _monitor_handlers() -> list[logging.Handler]:
    return [h for h in logging.getLogger().handlers if isinstance(h, MonitorLogHandler)]


def test_json_formatter_outputs_valid_json():
    parsed = json.loads(JSONFormatter().format(_record()))
    assert parsed["message"] == "hello world"
    assert parsed["level"] == "INFO"
    assert parsed["logger"] == "test"
    assert "timestamp" in parsed
    assert "env" not in parsed


def test_json_formatter_tags_environment():
    parsed = json.loads(JSONFormatter(app_env="staging").format(_record()))
    assert parsed["env"] == "staging"


def test_json_formatter_includes_exception():
    try:
        raise ValueError("test error")
    except ValueError:
        exc_info = sys.exc_info()
    parsed = json.loads(JSONFormatter().format(_record(logging.ERROR, "fail", (), exc_info)))
    assert parsed["exception"]["type"] == "ValueError"
    assert parsed["exception"]["message"] == "test error"


def test_json_formatter_strips_context_prefix():
    record = _record(logging.WARNING, "alert", ())
    record.ctx_athlete_id = "a1"
    record.ctx_alert_type = "MONOTONY"
    parsed = json.loads(JSONFormatter().format(record))
    assert parsed["context"] == {"athlete_id": "a1", "alert_type": "MONOTONY"}


def test_get_logger_returns_named_logger():
    log = get_logger("monitor.services.workload")
    assert log.name == "monitor.services.workload"
    assert isinstance(log, logging.Logger)


def test_setup_logging_idempotent():
    setup_logging("DEBUG")
    setup_logging("WARNING")
    assert len(_monitor_handlers()) == 1
    assert logging.getLogger().level == logging.WARNING


def test_setup_logging_unknown_level_falls_back_to_info():
    setup_logging("chatty")
    assert logging.getLogger().level == logging.INFO


def test_configure_logging_writes_json_lines():
    stream = io.StringIO()
    setup_logging(stream=stream)
    configure_logging(Settings(app_env="staging", log_level="INFO"))
    get_logger("monitor.test").info("ready", extra={"ctx_athlete_id": "a7"})
    line = json.loads(stream.getvalue().strip().splitlines()[-1])
    assert line["message"] == "ready"
    assert line["env"] == "staging"
    assert line["context"] == {"athlete_id": "a7"}
