"""
Logging for the course catalog.

Catalog log lines carry a fixed set of structured fields (``CATALOG_FIELDS``)
passed through ``extra=``: the facade adds the operation, caller, failure
kind and subject, and the request middleware adds the HTTP fields. Both
formatters render exactly those fields, so a rejected call looks like:

    12:00:01 WARNING [catalog.services.catalog_service] req=3f2a delete_record rejected: ... operation=delete_record caller=V kind=unauthorized

Usage:
    from catalog.logging_config import get_logger
    logger = get_logger(__name__)
    logger.info("Course created", extra={"course_id": course.id, "caller": caller})
"""

import json
import logging
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict, Optional

# Set by RequestIdMiddleware for the duration of one HTTP request
request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)

# Structured fields, in output order
CATALOG_FIELDS = (
    "operation",
    "caller",
    "kind",
    "course_id",
    "address",
    "role",
    "deleted",
    "fields",
    "method",
    "path",
    "status_code",
    "duration_ms",
)

_factory_installed = False


def catalog_fields(record: logging.LogRecord) -> Dict[str, Any]:
    """The catalog fields present on ``record``, in ``CATALOG_FIELDS`` order."""
    found = {}
    for name in CATALOG_FIELDS:
        value = getattr(record, name, None)
        if value is not None:
            found[name] = value
    return found


class RequestIdFilter(logging.Filter):
    """Stamp each record with the current request id, or "-" outside a request."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get() or "-"  # type: ignore[attr-defined]
        return True


class CatalogTextFormatter(logging.Formatter):
    """Human-readable line followed by ``key=value`` catalog fields."""

    def __init__(self):
        super().__init__(
            "%(asctime)s %(levelname)-5s [%(name)s] req=%(request_id)s %(message)s",
            datefmt="%H:%M:%S",
        )

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        fields = catalog_fields(record)
        if not fields:
            return line
        rendered = " ".join(f"{key}={value}" for key, value in fields.items())
        # Keep a traceback, if any, below the fields line
        head, sep, tail = line.partition("\n")
        return f"{head} {rendered}{sep}{tail}"


class JsonFormatter(logging.Formatter):
    """One JSON object per record; keys beyond ``CATALOG_FIELDS`` are dropped."""

    def format(self, record: logging.LogRecord) -> str:
        log_obj: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        req_id = getattr(record, "request_id", None)
        if req_id and req_id != "-":
            log_obj["request_id"] = req_id

        for key, value in catalog_fields(record).items():
            try:
                json.dumps(value)
                log_obj[key] = value
            except (TypeError, ValueError):
                log_obj[key] = str(value)

        if record.exc_info:
            log_obj["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_obj)


def _install_record_factory() -> None:
    """Give every record a ``request_id``, once per process."""
    global _factory_installed
    if _factory_installed:
        return

    base_factory = logging.getLogRecordFactory()

    def record_factory(*args: Any, **kwargs: Any) -> logging.LogRecord:
        record = base_factory(*args, **kwargs)
        if not hasattr(record, "request_id"):
            record.request_id = "-"
        return record

    logging.setLogRecordFactory(record_factory)
    _factory_installed = True


def configure_logging(
    *,
    log_level: str = "INFO",
    environment: str = "development",
    debug: bool = False,
) -> None:
    """
    Configure the root logger. Safe to call more than once.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        environment: 'production' selects JSON output
        debug: If True, use DEBUG level regardless of log_level
    """
    level = logging.DEBUG if debug else getattr(logging, log_level.upper(), logging.INFO)
    _install_record_factory()

    root = logging.getLogger()
    root.setLevel(level)
    for h in root.handlers[:]:
        root.removeHandler(h)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.addFilter(RequestIdFilter())
    handler.setFormatter(JsonFormatter() if environment == "production" else CatalogTextFormatter())
    root.addHandler(handler)

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
