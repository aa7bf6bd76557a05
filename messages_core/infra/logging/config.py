"""
Logging configuration module for the messages core.

Provides unified logging setup with support for:
- Console and file logging
- JSON structured logging
- Rotating file handlers
- Context-aware logging (thread_id, operation)
"""

import json
import logging
import sys
from contextvars import ContextVar
from logging.handlers import RotatingFileHandler
from typing import Any, Optional

from messages_core.config.settings import AppSettings, LoggingSettings, get_settings


# Context variables for correlation IDs
context_thread_id: ContextVar[Optional[int]] = ContextVar("thread_id", default=None)
context_operation: ContextVar[Optional[str]] = ContextVar("operation", default=None)


class ContextFilter(logging.Filter):
    """
    Logging filter that adds context variables to log records.

    This allows correlation of logs across the keyword store and the shortcut
    engine by tracking the conversation thread and the running operation.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        """Add context variables to the log record."""
        record.thread_id = context_thread_id.get()
        record.operation = context_operation.get()
        return True


class JSONFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.

    Outputs log records as JSON objects with standard fields plus any context variables.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if getattr(record, "thread_id", None) is not None:
            log_data["thread_id"] = record.thread_id
        if getattr(record, "operation", None) is not None:
            log_data["operation"] = record.operation

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # Add extra fields
        if hasattr(record, "extra_data"):
            log_data.update(record.extra_data)

        return json.dumps(log_data, ensure_ascii=False, default=str)


class ColoredFormatter(logging.Formatter):
    """
    Colored console formatter for better readability in development.

    Uses ANSI color codes to highlight different log levels.
    """

    # ANSI color codes
    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with colors and a context prefix."""
        levelname = record.levelname
        msg = record.msg
        if levelname in self.COLORS:
            record.levelname = f"{self.COLORS[levelname]}{levelname}{self.RESET}"

        context_parts = []
        if getattr(record, "thread_id", None) is not None:
            context_parts.append(f"thread={record.thread_id}")
        if getattr(record, "operation", None) is not None:
            context_parts.append(f"op={record.operation}")

        if context_parts:
            record.msg = f"[{', '.join(context_parts)}] {record.msg}"

        try:
            return super().format(record)
        finally:
            # Other handlers share the record; leave it as we found it.
            record.levelname = levelname
            record.msg = msg


def setup_logging(
    settings: Optional[LoggingSettings] = None,
    app: Optional[AppSettings] = None,
) -> None:
    """
    Configure logging for the application.

    Debug mode forces the DEBUG level on every handler regardless of the
    configured level.

    Args:
        settings: Logging settings. If None, will load from global settings.
        app: Application settings. If None, will load from global settings.
    """
    if settings is None:
        settings = get_settings().logging
    if app is None:
        app = get_settings().app

    level = "DEBUG" if app.debug else settings.level

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    context_filter = ContextFilter()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.addFilter(context_filter)

    if settings.json_logs:
        console_formatter: logging.Formatter = JSONFormatter()
    else:
        console_formatter = ColoredFormatter(
            fmt=settings.format,
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    console_handler.setFormatter(console_formatter)
    root_logger.addHandler(console_handler)

    if settings.log_file:
        file_handler = RotatingFileHandler(
            filename=settings.log_file,
            maxBytes=settings.log_file_max_bytes,
            backupCount=settings.log_file_backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        file_handler.addFilter(context_filter)

        # file logs are always JSON
        file_handler.setFormatter(JSONFormatter())
        root_logger.addHandler(file_handler)

    # Set levels for third-party loggers to reduce noise
    logging.getLogger("sqlalchemy").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)

    root_logger.info(
        "Logging configured",
        extra={
            "extra_data": {
                "environment": app.environment,
                "level": level,
                "json_logs": settings.json_logs,
                "log_file": str(settings.log_file) if settings.log_file else None,
            }
        },
    )


class LogContext:
    """
    Context manager for setting correlation IDs in logs.

    Example:
        with LogContext(thread_id=42, operation="shortcut.upsert"):
            logger.info("Publishing shortcut")
            # Logs will include thread_id=42 and operation=shortcut.upsert
    """

    def __init__(
        self,
        thread_id: Optional[int] = None,
        operation: Optional[str] = None,
    ):
        """Initialize log context."""
        self.thread_id = thread_id
        self.operation = operation
        self.tokens: list[Any] = []

    def __enter__(self) -> "LogContext":
        """Set context variables."""
        if self.thread_id is not None:
            self.tokens.append(context_thread_id.set(self.thread_id))
        if self.operation is not None:
            self.tokens.append(context_operation.set(self.operation))
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Reset context variables."""
        for token in reversed(self.tokens):
            token.var.reset(token)
        self.tokens.clear()
