"""
Structured logging setup.

JSON lines by default (LOG_FORMAT=json), plain text otherwise. Fields passed
through ``extra=`` are carried into the JSON payload.

Usage:
    from shopmgr.logging_config import get_logger

    logger = get_logger(__name__)
    logger.info("Mechanic assigned", extra={"appointment_id": 7, "mechanic_id": 3})
"""
import json
import logging
import sys
from datetime import datetime, timezone
from typing import Optional

from shopmgr.core.settings import get_settings

# Attributes every LogRecord has; anything else came from ``extra=``
_RESERVED_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {
    "message",
    "asctime",
}

TEXT_FORMAT = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class JSONFormatter(logging.Formatter):
    """Render each record as a single JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and not key.startswith("_"):
                payload[key] = value
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def setup_logging(level: Optional[str] = None, log_format: Optional[str] = None) -> None:
    """Configure the root logger from settings. Safe to call more than once."""
    settings = get_settings()
    level = (level or ("DEBUG" if settings.DEBUG else settings.LOG_LEVEL)).upper()
    log_format = (log_format or settings.LOG_FORMAT).lower()

    if log_format == "json":
        formatter: logging.Formatter = JSONFormatter()
    else:
        formatter = logging.Formatter(TEXT_FORMAT, datefmt=DATE_FORMAT)

    handlers = [logging.StreamHandler(sys.stdout)]
    if settings.LOG_FILE:
        handlers.append(logging.FileHandler(settings.LOG_FILE, encoding="utf-8"))

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)
    root.setLevel(getattr(logging, level, logging.INFO))

    # SQL echo is controlled by DB_ECHO on the engine, keep the library quiet otherwise
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Return a module logger."""
    return logging.getLogger(name)
