"""Structured Logging — JSON formatter and setup for operation diagnostics.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Extra fields (operation, configuration_key, status_code, error_code, path)
      surfaced when present
    - The library never configures logging on import; setup_logging is opt-in
    - Level and format default to Settings (APITIME_LOG_LEVEL, APITIME_LOG_FORMAT)
    - Calling setup_logging again replaces the handler it installed before

Design Decisions:
    - Handler goes on the "apitime" logger, not root: host application logging
      stays untouched
"""

import json
import logging
from datetime import datetime, timezone

from apitime.config import Settings, get_settings

LOGGER_NAME = "apitime"

EXTRA_FIELDS = (
    "operation", "configuration_key", "method", "url",
    "status_code", "error_code", "path",
)


class JSONFormatter(logging.Formatter):
    """One JSON object per record, operation fields included."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        log.update({
            key: record.__dict__[key]
            for key in EXTRA_FIELDS
            if record.__dict__.get(key) is not None
        })
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


class _APITimeHandler(logging.StreamHandler):
    pass


def setup_logging(
    level: str | None = None,
    fmt: str | None = None,
    settings: Settings | None = None,
) -> logging.Handler:
    """Install the apitime handler and return it; unset values come from settings."""
    settings = settings or get_settings()
    level = (level or settings.log_level).upper()
    fmt = fmt or settings.log_format

    handler = _APITimeHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s: %(message)s",
        ))

    logger = logging.getLogger(LOGGER_NAME)
    for previous in [h for h in logger.handlers if isinstance(h, _APITimeHandler)]:
        logger.removeHandler(previous)
        previous.close()
    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level, logging.INFO))
    return handler
