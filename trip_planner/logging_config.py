"""
Logging setup for the trip planner API.

Development gets one readable line per record; production gets JSON lines.
Either way each record carries the id of the request that produced it,
taken from ``request_id_var`` (set by RequestIdMiddleware).

Usage:
    from trip_planner.logging_config import get_logger
    logger = get_logger(__name__)
    logger.info("Todo moved", extra={"todo_id": todo.id, "status": status})
"""

import json
import logging
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from trip_planner.config import Settings

request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)

# Keys passed through ``extra=`` anywhere in the service. Only these reach
# the JSON output, so a stray attribute can never leak a secret.
CONTEXT_FIELDS = (
    "user_id",
    "ip_address",
    "reason",
    "method",
    "path",
    "status_code",
    "duration_ms",
    "todo_id",
    "status",
    "position",
    "index",
    "count",
)

DEV_FORMAT = "%(asctime)s %(levelname)-5s [%(name)s] req=%(request_id)s %(message)s"

# Chatty third-party loggers kept at WARNING
QUIET_LOGGERS = ("uvicorn.access", "sqlalchemy.engine", "aiosqlite")


class RequestContextFilter(logging.Filter):
    """Stamp ``request_id`` on every record ("-" outside a request)."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get() or "-"
        return True


class JsonLineFormatter(logging.Formatter):
    """One JSON object per record, with the known context fields."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        request_id = getattr(record, "request_id", "-")
        if request_id != "-":
            entry["request_id"] = request_id

        for field in CONTEXT_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                entry[field] = value

        if record.exc_info:
            entry["exc"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


def configure_logging(settings: "Settings") -> None:
    """Install a single stderr handler on the root logger."""
    if settings.debug:
        level = logging.DEBUG
    else:
        level = logging.getLevelName(settings.log_level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    handler = logging.StreamHandler(sys.stderr)
    handler.addFilter(RequestContextFilter())
    if settings.environment == "production":
        handler.setFormatter(JsonLineFormatter())
    else:
        handler.setFormatter(logging.Formatter(DEV_FORMAT, datefmt="%H:%M:%S"))

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
