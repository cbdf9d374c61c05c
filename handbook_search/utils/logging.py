"""Structured JSON logging for the Handbook Search server."""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional


# Third-party loggers that are too chatty at INFO
NOISY_LOGGERS = ("boto3", "botocore", "urllib3", "azure")


class JSONFormatter(logging.Formatter):
    """
    Format log records as single-line JSON objects.

    Every record carries timestamp, level, component and message. Records
    emitted through log_with_context() also carry context, execution time
    and provider error code when present.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "component": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        if hasattr(record, "context"):
            log_data["context"] = record.context

        if hasattr(record, "execution_time_ms"):
            log_data["execution_time_ms"] = record.execution_time_ms

        if hasattr(record, "error_code"):
            log_data["error_code"] = record.error_code

        # default=str keeps records with odd context values (e.g. exceptions) loggable
        return json.dumps(log_data, default=str)


def configure_logging(log_level: str = "INFO") -> None:
    """
    Install the JSON formatter on the root logger.

    Output goes to stderr: stdout is reserved for the MCP stdio transport.

    Args:
        log_level: Logging level name (ERROR, WARNING, INFO, DEBUG)
    """
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(numeric_level)
    handler.setFormatter(JSONFormatter())
    root_logger.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Get the logger for a component (e.g. "VectorSearchAdapter")."""
    return logging.getLogger(name)


def log_with_context(
    logger: logging.Logger,
    level: int,
    message: str,
    context: Optional[Dict[str, Any]] = None,
    execution_time_ms: Optional[float] = None,
    error_code: Optional[str] = None
) -> None:
    """
    Log a message with structured extras.

    Args:
        logger: Logger instance
        level: Log level (logging.INFO, logging.ERROR, etc.)
        message: Log message
        context: Optional context dictionary
        execution_time_ms: Optional execution time in milliseconds
        error_code: Optional provider error code
    """
    extra: Dict[str, Any] = {}

    if context:
        extra["context"] = context

    if execution_time_ms is not None:
        extra["execution_time_ms"] = execution_time_ms

    if error_code:
        extra["error_code"] = error_code

    logger.log(level, message, extra=extra)
