# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Structured JSON logging — one JSON line per record.
Scheduler context passed through ``extra=`` (month, member, booking, ticket)
is lifted into top-level keys so log queries can filter on it.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from duty_scheduler.core.config import settings

CONTEXT_FIELDS: tuple[str, ...] = (
    "request_id", "month", "date", "user_id", "booking_id", "ticket_id",
)


class JSONFormatter(logging.Formatter):
    """Render a record plus any scheduler context as a JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "service": settings.SERVICE_NAME,
            "version": settings.SERVICE_VERSION,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for field in CONTEXT_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                entry[field] = value
        if record.exc_info and record.exc_info[1]:
            entry["error"] = str(record.exc_info[1])
            entry["error_type"] = type(record.exc_info[1]).__name__
        return json.dumps(entry, default=str)


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a logger writing JSON lines to stdout at ``LOG_LEVEL``."""
    logger = logging.getLogger(name or settings.SERVICE_NAME)
    if not logger.handlers:
        logger.setLevel(getattr(logging, settings.LOG_LEVEL, logging.INFO))
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(JSONFormatter())
        logger.addHandler(handler)
        logger.propagate = False
    return logger
