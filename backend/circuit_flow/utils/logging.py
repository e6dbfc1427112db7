"""Structured logging for HTTP requests."""

import json
import logging
from typing import Any

logger = logging.getLogger(__name__)

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class StructuredFormatter(logging.Formatter):
    """Formatter appending the ``structured`` extra as a JSON suffix."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        structured = getattr(record, "structured", None)
        if structured:
            message = f"{message} {json.dumps(structured, default=str, sort_keys=True)}"
        return message


def configure_logging(level: str = "INFO") -> None:
    """Install the structured formatter on the root logger.

    Idempotent: the handler is added once, other handlers are left alone.
    """
    root = logging.getLogger()
    if not any(isinstance(h.formatter, StructuredFormatter) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(StructuredFormatter(_LOG_FORMAT))
        root.addHandler(handler)
    root.setLevel(level.upper())


class StructuredRequestLogger:
    """Structured logger for HTTP request outcomes."""

    def log_request(
        self,
        method: str,
        route: str,
        status_code: int,
        latency_ms: float,
        error_reason: str | None = None,
    ) -> None:
        """Log one completed request with structured data."""
        log_data: dict[str, Any] = {
            "method": method,
            "route": route,
            "status": status_code,
            "latency_ms": round(latency_ms, 2),
        }

        if error_reason:
            log_data["error_reason"] = error_reason

        log_msg = f"{method} {route} - {status_code}"

        if status_code < 500:
            logger.info(log_msg, extra={"structured": log_data})
        else:
            logger.warning(log_msg, extra={"structured": log_data})
