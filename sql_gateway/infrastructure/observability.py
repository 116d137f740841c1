"""Structured Logging: one JSON line per record, installed once per process.

Invariants:
    - Every line has timestamp (record creation time, UTC), level, logger, message
    - Request and statement context (error_code, path, table, record_id, ...)
      surfaced when present; anything else passed in extra is dropped
    - Credentials and bound values are never among the surfaced fields
    - setup_logging is idempotent: a second app factory or lifespan replaces the
      gateway handler instead of stacking another one on the root logger

Design Decisions:
    - JSONFormatter on stdlib logging, no structlog: every module logs through
      logging.getLogger(__name__) and needs nothing else
    - Text format for local runs keeps the same surfaced fields, appended as key=value
"""

import json
import logging
from datetime import datetime, timezone

_EXTRA_FIELDS = (
    "error_code", "path", "method", "status_code",
    "table", "record_id", "rows", "param_count", "duration_ms",
)

_HANDLER_NAME = "sql_gateway"


def _context(record: logging.LogRecord) -> dict:
    return {
        key: record.__dict__[key]
        for key in _EXTRA_FIELDS
        if record.__dict__.get(key) is not None
    }


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging in production."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **_context(record),
        }
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable line with the surfaced fields appended as key=value."""

    def __init__(self):
        super().__init__("%(asctime)s %(levelname)s %(name)s: %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = _context(record)
        if context:
            line += " " + " ".join(f"{k}={v}" for k, v in context.items())
        return line


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Install the gateway handler on the root logger, replacing a previous one."""
    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            root.removeHandler(existing)

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(JSONFormatter() if fmt == "json" else TextFormatter())
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler
