"""
formrules Logger
================

Structured logging for validation runs.

Records carry key=value context (field, rule, mode...) and are
rendered as text or JSON by pluggable formatters.
"""

from __future__ import annotations

import json
import logging
import sys
import traceback
from dataclasses import dataclass, field
from datetime import datetime
from enum import IntEnum
from typing import Any, Dict, List, Optional, TextIO, Union


class LogLevel(IntEnum):
    """Log levels."""

    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    CRITICAL = logging.CRITICAL

    @classmethod
    def parse(cls, level: Union[str, int, "LogLevel"]) -> "LogLevel":
        """Accept a level name ("warning") or number."""
        if isinstance(level, str):
            try:
                return cls[level.strip().upper()]
            except KeyError:
                raise ValueError(f"Unknown log level: {level}") from None
        return cls(level)


@dataclass
class LogRecord:
    """
    Structured log record.

    Attributes:
        level: Log level
        message: Log message
        timestamp: Record timestamp
        context: Additional key-values
        exception: Exception info
        logger_name: Emitting logger
    """

    level: LogLevel
    message: str
    timestamp: datetime = field(default_factory=datetime.now)
    context: Dict[str, Any] = field(default_factory=dict)
    exception: Optional[BaseException] = None
    logger_name: str = "formrules"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        data: Dict[str, Any] = {
            "timestamp": self.timestamp.isoformat(),
            "level": self.level.name,
            "message": self.message,
            "logger": self.logger_name,
        }

        if self.context:
            data["context"] = self.context

        if self.exception:
            data["exception"] = {
                "type": type(self.exception).__name__,
                "message": str(self.exception),
            }

        return data


class LogFormatter:
    """Base log formatter."""

    def format(self, record: LogRecord) -> str:
        """Format log record."""
        raise NotImplementedError


class TextFormatter(LogFormatter):
    """
    Plain text formatter.

    Example output:
        2024-01-15 10:30:45 [WARNING] Unknown validation rule field=name rule=foo
    """

    def __init__(
        self,
        format_string: Optional[str] = None,
        date_format: str = "%Y-%m-%d %H:%M:%S",
    ):
        self.format_string = format_string or "{timestamp} [{level}] {message}"
        self.date_format = date_format

    def format(self, record: LogRecord) -> str:
        """Format as text."""
        message = record.message

        if record.context:
            pairs = " ".join(f"{k}={v}" for k, v in record.context.items())
            message = f"{message} {pairs}"

        output = self.format_string.format(
            timestamp=record.timestamp.strftime(self.date_format),
            level=record.level.name,
            message=message,
            logger=record.logger_name,
        )

        if record.exception:
            output += "\n" + "".join(
                traceback.format_exception(
                    type(record.exception),
                    record.exception,
                    record.exception.__traceback__,
                )
            )

        return output


class JsonFormatter(LogFormatter):
    """JSON formatter, one object per line."""

    def format(self, record: LogRecord) -> str:
        return json.dumps(record.to_dict(), default=str)


class StreamHandler:
    """Writes formatted records to a stream (stderr by default)."""

    def __init__(
        self,
        stream: Optional[TextIO] = None,
        formatter: Optional[LogFormatter] = None,
        level: LogLevel = LogLevel.DEBUG,
    ):
        self.stream = stream or sys.stderr
        self.formatter = formatter or TextFormatter()
        self.level = level

    def handle(self, record: LogRecord) -> None:
        """Emit record if it passes the handler level."""
        if record.level >= self.level:
            self.stream.write(self.formatter.format(record) + "\n")
            self.stream.flush()


class Logger:
    """
    Structured logger.

    Example:
        logger = get_logger("formrules.validation")
        logger.debug("Validation finished", fields=3, valid=False)

        field_logger = logger.with_context(field="email")
        field_logger.warning("Unknown rule", rule="foo")
    """

    def __init__(
        self,
        name: str = "formrules",
        level: LogLevel = LogLevel.WARNING,
        handlers: Optional[List[StreamHandler]] = None,
    ):
        self.name = name
        self.level = level
        self._handlers = handlers if handlers is not None else []
        self._context: Dict[str, Any] = {}

    @property
    def handlers(self) -> List[StreamHandler]:
        return self._handlers

    def add_handler(self, handler: StreamHandler) -> "Logger":
        """Add log handler."""
        self._handlers.append(handler)
        return self

    def with_context(self, **context: Any) -> "Logger":
        """
        Create a logger sharing handlers with extra context.

        Args:
            **context: Context key-values

        Returns:
            New logger with merged context
        """
        child = Logger(name=self.name, level=self.level, handlers=self._handlers)
        child._context = {**self._context, **context}
        return child

    def is_enabled_for(self, level: LogLevel) -> bool:
        return level >= self.level

    def _log(
        self,
        level: LogLevel,
        message: str,
        exception: Optional[BaseException] = None,
        **context: Any,
    ) -> None:
        if level < self.level:
            return

        record = LogRecord(
            level=level,
            message=message,
            context={**self._context, **context},
            exception=exception,
            logger_name=self.name,
        )

        for handler in self._handlers:
            try:
                handler.handle(record)
            except Exception:
                pass  # Logging must never break validation

    def debug(self, message: str, **context: Any) -> None:
        """Log debug message."""
        self._log(LogLevel.DEBUG, message, **context)

    def info(self, message: str, **context: Any) -> None:
        """Log info message."""
        self._log(LogLevel.INFO, message, **context)

    def warning(self, message: str, **context: Any) -> None:
        """Log warning message."""
        self._log(LogLevel.WARNING, message, **context)

    def error(
        self,
        message: str,
        exception: Optional[BaseException] = None,
        **context: Any,
    ) -> None:
        """Log error message."""
        self._log(LogLevel.ERROR, message, exception, **context)


# Global logger registry
_loggers: Dict[str, Logger] = {}


def _default_level() -> LogLevel:
    from formrules.core.config import config

    return LogLevel.parse(config("logging.level", "WARNING"))


def _default_formatter() -> LogFormatter:
    from formrules.core.config import config

    if config("logging.format", "text") == "json":
        return JsonFormatter()
    return TextFormatter()


def get_logger(name: str = "formrules", level: Optional[LogLevel] = None) -> Logger:
    """
    Get or create logger.

    New loggers take their level and output format from the
    ``logging.*`` configuration keys.

    Args:
        name: Logger name
        level: Overrides the configured level

    Returns:
        Logger instance
    """
    if name not in _loggers:
        logger = Logger(name=name, level=level or _default_level())
        logger.add_handler(StreamHandler(formatter=_default_formatter()))
        _loggers[name] = logger
    elif level is not None:
        _loggers[name].level = level

    return _loggers[name]


def configure_logging(
    level: Union[str, LogLevel] = LogLevel.INFO,
    format: str = "text",
    stream: Optional[TextIO] = None,
) -> None:
    """
    Reconfigure every formrules logger.

    Args:
        level: Minimum level
        format: "text" or "json"
        stream: Output stream, stderr by default
    """
    parsed = LogLevel.parse(level)
    formatter: LogFormatter = JsonFormatter() if format == "json" else TextFormatter()

    from formrules.core.config import get_config

    get_config().set("logging.level", parsed.name)
    get_config().set("logging.format", format)

    for logger in _loggers.values():
        logger.level = parsed
        logger.handlers[:] = [StreamHandler(stream=stream, formatter=formatter)]
