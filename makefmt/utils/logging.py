"""
Structured logging utilities with JSON formatting and context injection.

This module provides structured logging capabilities with:
- JSON formatted log output for machine-readable logs
- Context injection (path, rule) via LoggerAdapter
- Standardized log fields across the parser, rules and runner
- Integration with Python's standard logging module

Logs go to stderr so formatted Makefile text on stdout stays clean.
"""

import json
import logging
import sys
import traceback
from datetime import datetime, timezone
from logging import LogRecord
from typing import Any, Dict, MutableMapping, Optional

# Attributes every LogRecord carries; anything else came in through "extra".
_RESERVED_ATTRS = frozenset([
    "name", "msg", "args", "created", "filename", "funcName",
    "levelname", "levelno", "lineno", "module", "msecs",
    "message", "pathname", "process", "processName", "relativeCreated",
    "thread", "threadName", "exc_info", "exc_text", "stack_info",
    "taskName", "path", "rule",
])


class JSONFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.

    Outputs log records as JSON with standard fields:
    - timestamp: ISO 8601 formatted timestamp
    - level: Log level (INFO, WARNING, ERROR, etc.)
    - logger: Logger name
    - message: Log message
    - path / rule: File and rule being processed, when known
    - context: Any other extra fields
    - error: Error details when exception info is attached
    """

    def format(self, record: LogRecord) -> str:
        """
        Format log record as JSON.

        Args:
            record: Log record to format

        Returns:
            JSON formatted log string
        """
        log_data: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if hasattr(record, "path"):
            log_data["path"] = record.path
        if hasattr(record, "rule"):
            log_data["rule"] = record.rule

        extra_fields = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _RESERVED_ATTRS
        }
        if extra_fields:
            log_data["context"] = extra_fields

        if record.exc_info:
            log_data["error"] = {
                "type": record.exc_info[0].__name__ if record.exc_info[0] else None,
                "message": str(record.exc_info[1]) if record.exc_info[1] else None,
                "stack_trace": "".join(traceback.format_exception(*record.exc_info)),
            }

        log_data["source"] = {
            "file": record.pathname,
            "line": record.lineno,
            "function": record.funcName,
        }

        return json.dumps(log_data, default=str)


class ContextLoggerAdapter(logging.LoggerAdapter):
    """
    Logger adapter that injects context fields into all log records.

    Context set on the adapter (for example the file being formatted) is
    merged into the ``extra`` of every call.
    """

    def __init__(self, logger: logging.Logger, extra: Optional[Dict[str, Any]] = None):
        super().__init__(logger, extra or {})

    def process(self, msg: str, kwargs: MutableMapping[str, Any]) -> tuple[str, MutableMapping[str, Any]]:
        """
        Process log message and inject context.

        Args:
            msg: Log message
            kwargs: Log kwargs

        Returns:
            Tuple of (message, kwargs) with context injected
        """
        extra = kwargs.get("extra", {})
        extra.update(self.extra)
        kwargs["extra"] = extra
        return msg, kwargs

    def with_context(self, **context: Any) -> "ContextLoggerAdapter":
        """
        Create a new logger adapter with additional context.

        Args:
            **context: Additional context fields

        Returns:
            New logger adapter with merged context
        """
        new_extra = dict(self.extra)
        new_extra.update(context)
        return ContextLoggerAdapter(self.logger, new_extra)


def setup_logging(log_level: str = "WARNING") -> None:
    """
    Configure structured logging for the command-line tool.

    Installs a single stderr handler using ``JSONFormatter`` on the root
    logger, replacing any handlers already present.

    Args:
        log_level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    log_level = log_level.upper()

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(JSONFormatter())
    handler.setLevel(log_level)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()
    root_logger.addHandler(handler)


def get_logger(name: str, **context: Any) -> ContextLoggerAdapter:
    """
    Get a context-aware logger for a module.

    Args:
        name: Logger name (typically __name__)
        **context: Initial context fields (path, rule, etc.)

    Returns:
        Context logger adapter

    Example:
        logger = get_logger(__name__, path="Makefile")
        logger.info("Formatting")  # Will include path
    """
    return ContextLoggerAdapter(logging.getLogger(name), context)


def log_rule_applied(logger: logging.LoggerAdapter, rule_name: str, changed: bool) -> None:
    """
    Log one formatting rule application.

    Args:
        logger: Logger to use
        rule_name: Configuration key of the rule
        changed: Whether the rule replaced or dropped any node
    """
    logger.debug(
        f"Rule applied: {rule_name}",
        extra={"rule": rule_name, "changed": changed},
    )


def log_file_result(logger: logging.LoggerAdapter, path: str, status: str) -> None:
    """
    Log the outcome for one input.

    Args:
        logger: Logger to use
        path: File path, or '<stdin>'
        status: Outcome ('unchanged', 'reformatted', 'would_reformat', 'error')
    """
    logger.info(
        f"Processed {path}: {status}",
        extra={"path": path, "status": status},
    )
