"""Structured Logging: formatters and one-shot setup for the API and the hooks.

Invariants:
    - Every line carries timestamp, level, logger name and message
    - Lifecycle extras (query, mutation, generation) and transport extras
      (method, url, status_code, error_code, path) surfaced when present
    - setup_logging() replaces its own handler on repeat calls, never stacks
    - httpx request chatter capped at WARNING: the client logs its own failures
"""

import logging
import json
from datetime import datetime, timezone

EXTRA_FIELDS = (
    "query", "mutation", "generation", "method", "url",
    "status_code", "error_code", "path",
)

_QUIET_LOGGERS = ("httpx", "httpcore")

_handler: logging.Handler | None = None


def _extras(record: logging.LogRecord) -> dict:
    return {
        key: record.__dict__[key]
        for key in EXTRA_FIELDS
        if record.__dict__.get(key) is not None
    }


class JSONFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **_extras(record),
        }
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable lines with extras appended as key=value."""

    def __init__(self):
        super().__init__("%(asctime)s %(levelname)s %(name)s: %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        extras = _extras(record)
        if not extras:
            return line
        suffix = " ".join(f"{k}={v}" for k, v in extras.items())
        return f"{line} [{suffix}]"


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Install the root handler for `fmt` ("json" or anything else for text)."""
    global _handler
    if _handler is not None:
        logging.root.removeHandler(_handler)
    _handler = logging.StreamHandler()
    _handler.setFormatter(JSONFormatter() if fmt == "json" else TextFormatter())
    logging.root.addHandler(_handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    return _handler
