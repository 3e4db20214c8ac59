"""Structured JSON logging for Purchases-Helper."""

import logging
import json
import sys
from datetime import datetime, timezone


class JSONFormatter(logging.Formatter):
    """Format log records as JSON lines.

    Records logged with ``extra={"code": ...}`` (the ``code`` of a
    ``PurchasesHelperError``) carry it as a top-level ``code`` field, and an
    ``entitlement`` extra is passed through the same way.
    """

    passthrough_fields = ("code", "entitlement")

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for name in self.passthrough_fields:
            value = getattr(record, name, None)
            if value is not None:
                log_entry[name] = value
        if record.exc_info and record.exc_info[1]:
            exc = record.exc_info[1]
            log_entry["exception"] = self.formatException(record.exc_info)
            if "code" not in log_entry and getattr(exc, "code", None) is not None:
                log_entry["code"] = exc.code
        return json.dumps(log_entry)


def setup_logging(level: str = "INFO") -> None:
    """Configure structured logging for the library."""
    root = logging.getLogger("purchases_helper")
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    if not any(isinstance(h.formatter, JSONFormatter) for h in root.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(JSONFormatter())
        root.addHandler(handler)
    root.propagate = False


def get_logger(name: str) -> logging.Logger:
    """Get a logger scoped under purchases_helper."""
    return logging.getLogger(f"purchases_helper.{name}")
