"""Structured JSON logging for the monitoring engine.

One JSON object per line. Context passed as ``extra={"ctx_<name>": value}``
is collected under ``"context"`` with the prefix stripped, so an alert logged
with ``ctx_athlete_id`` shows up as ``{"context": {"athlete_id": ...}}``.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import IO

from monitor.config import Settings

CONTEXT_PREFIX = "ctx_"


class JSONFormatter(logging.Formatter):
    def __init__(self, app_env: str | None = None):
        super().__init__()
        self.app_env = app_env

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "line": record.lineno,
        }
        if self.app_env:
            entry["env"] = self.app_env
        if record.exc_info and record.exc_info[1]:
            entry["exception"] = {
                "type": type(record.exc_info[1]).__name__,
                "message": str(record.exc_info[1]),
            }
        context = {
            key[len(CONTEXT_PREFIX):]: value
            for key, value in vars(record).items()
            if key.startswith(CONTEXT_PREFIX)
        }
        if context:
            entry["context"] = context
        return json.dumps(entry, default=str)


class MonitorLogHandler(logging.StreamHandler):
    """Root handler installed by ``setup_logging``; at most one is attached."""


def setup_logging(
    level: str = "INFO",
    app_env: str | None = None,
    stream: IO[str] | None = None,
) -> MonitorLogHandler:
    """Point the root logger at a JSON handler and set its level.

    Safe to call repeatedly: the level and formatter are refreshed, the
    handler is not duplicated. Handlers installed by the host are left alone.
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    handler = next((h for h in root.handlers if isinstance(h, MonitorLogHandler)), None)
    if handler is None:
        handler = MonitorLogHandler(stream or sys.stdout)
        root.addHandler(handler)
    elif stream is not None:
        handler.setStream(stream)
    handler.setFormatter(JSONFormatter(app_env))

    logging.getLogger("pandas").setLevel(logging.WARNING)
    return handler


def configure_logging(settings: Settings) -> MonitorLogHandler:
    """Apply the log level of the settings' environment profile."""
    return setup_logging(settings.log_level, settings.app_env)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
