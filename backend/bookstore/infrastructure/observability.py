"""Structured Logging — JSON formatter and process-wide logging setup.

Invariants:
    - Every record carries timestamp, level, logger name and message
    - Known extras (account_id, book_id, error_code, path, role) are surfaced when set
    - Only allow-listed extras are serialized; passwords, hashes and tokens never are
    - setup_logging is idempotent: a second call replaces its handler instead of stacking

Design Decisions:
    - stdlib logging + a small JSONFormatter: one JSON object per line for log shippers
    - "text" format for local runs and tests
"""

import json
import logging
from datetime import datetime, timezone

EXTRA_FIELDS = ("account_id", "book_id", "error_code", "path", "role")

_HANDLER_NAME = "bookstore"


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in EXTRA_FIELDS:
            value = getattr(record, key, None)
            if value is not None:
                entry[key] = value
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Install the bookstore handler on the root logger."""
    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            root.removeHandler(existing)

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s: %(message)s",
        ))
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    # SQL echo is opt-in via the engine, not the log level
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    return handler
