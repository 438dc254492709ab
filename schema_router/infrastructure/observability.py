"""Structured Logging: JSON formatter and setup for routers in production.

Invariants:
    - Every JSON line carries timestamp, level, logger name and message
    - Only whitelisted request extras (route, method, path, ...) are emitted
    - Importing the library never configures logging; the host calls setup_logging()
    - setup_logging() without arguments follows RouterSettings (SCHEMA_ROUTER_LOG_*)

Design Decisions:
    - Stdlib logging with a small formatter: the host app keeps ownership of
      handlers and levels
    - Timestamp taken from record.created, so queued or delayed handlers still
      report when the event happened
    - setup_logging replaces the handler it installed earlier instead of
      stacking duplicates on the root logger
"""

import json
import logging
from datetime import datetime, timezone

from schema_router.config import get_settings

EXTRA_FIELDS = (
    "route", "method", "path", "source", "error_code", "category", "issue_count",
)


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        log.update(
            (key, record.__dict__[key]) for key in EXTRA_FIELDS
            if record.__dict__.get(key) is not None
        )
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


class _SchemaRouterHandler(logging.StreamHandler):
    """Marker subclass so setup_logging can find the handler it installed."""


def setup_logging(level: str | None = None, fmt: str | None = None) -> logging.Handler:
    """Configure root logging; unset arguments come from RouterSettings."""
    settings = get_settings()
    level = level or settings.log_level
    fmt = fmt or settings.log_format
    for existing in list(logging.root.handlers):
        if isinstance(existing, _SchemaRouterHandler):
            logging.root.removeHandler(existing)
    handler = _SchemaRouterHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s: %(message)s",
        ))
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler
