"""Structured logging configuration for the report service.

Provides JSON-formatted logs with request/report context so report runs can be
traced through log aggregation (one line per event, machine parseable).
"""
import logging
import json
import sys
import time
from datetime import datetime, timezone
from typing import Any, Dict, Optional
import traceback


# Attributes copied from LogRecord into the JSON payload when present
CONTEXT_FIELDS = (
    "request_id", "form_id", "report_id", "group_by", "compare_by",
    "operation", "endpoint", "method", "path", "status_code",
    "duration_ms", "response_count", "error_type",
)


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging.

    Outputs timestamp, level, message, module, function, line and any known
    context fields passed through ``extra=``.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON string.

        Args:
            record: LogRecord to format

        Returns:
            JSON string with log data
        """
        log_obj: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_obj["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "traceback": traceback.format_exception(*record.exc_info)
            }

        for attr in CONTEXT_FIELDS:
            if hasattr(record, attr):
                log_obj[attr] = getattr(record, attr)

        return json.dumps(log_obj, default=str)


class ContextLogger(logging.LoggerAdapter):
    """Logger adapter that attaches fixed context to every message.

    Example:
        >>> logger = ContextLogger(base_logger, {"form_id": "FORM-001"})
        >>> logger.info("Aggregating fields")
        # Output includes form_id automatically
    """

    def process(self, msg: str, kwargs: Dict[str, Any]) -> tuple:
        extra = kwargs.get("extra", {})
        extra.update(self.extra)
        kwargs["extra"] = extra
        return msg, kwargs


def setup_logging(level: str = "INFO", json_format: bool = True) -> logging.Logger:
    """Configure application-wide logging.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_format: Whether to use JSON formatter (True for production)

    Returns:
        Configured root logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(getattr(logging, level.upper()))

    if json_format:
        formatter = JSONFormatter()
    else:
        # Human-readable format for development
        formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    return root_logger


def get_logger(name: str, context: Optional[Dict[str, Any]] = None) -> logging.Logger:
    """Get a logger, wrapped in a ContextLogger when context is given.

    Example:
        >>> logger = get_logger(__name__, {"form_id": "FORM-001"})
        >>> logger.info("Report generated", extra={"duration_ms": 245})
    """
    logger = logging.getLogger(name)

    if context:
        return ContextLogger(logger, context)

    return logger


class LogTimer:
    """Context manager for timing operations and logging duration.

    Example:
        >>> logger = get_logger(__name__)
        >>> with LogTimer(logger, "generate_report", form_id="FORM-001"):
        ...     payload = build_report(...)
        # Logs: "generate_report completed in 12.5ms"
    """

    def __init__(self, logger: logging.Logger, operation: str, **context: Any):
        self.logger = logger
        self.operation = operation
        self.context = context
        self.start_time: Optional[float] = None

    def __enter__(self):
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.start_time is None:
            return
        duration = (time.perf_counter() - self.start_time) * 1000
        extra = {"operation": self.operation, "duration_ms": round(duration, 2), **self.context}

        if exc_type:
            self.logger.error(
                f"{self.operation} failed after {duration:.1f}ms",
                extra=extra,
                exc_info=True
            )
        else:
            self.logger.info(f"{self.operation} completed in {duration:.1f}ms", extra=extra)


# Initialize logging on module import (can be reconfigured later)
setup_logging(level="INFO", json_format=False)
