"""Structured logging utilities."""

import logging
import logging.handlers
import json
import sys
import threading
from typing import Any, Iterable, Optional
from datetime import datetime, timezone
from pathlib import Path

# Loggers that are too chatty at DEBUG for checksum runs
DEFAULT_QUIET_LOGGERS = ("asyncio", "aiofiles")


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "thread": record.threadName,
        }

        if record.exc_info:
            log_data["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "traceback": self.formatException(record.exc_info),
            }

        # Fields attached through LogContext or extra={"extra_fields": ...}
        if hasattr(record, "extra_fields"):
            log_data.update(record.extra_fields)

        return json.dumps(log_data, default=str)


class DetailedFormatter(logging.Formatter):
    """Human-readable detailed formatter."""

    def __init__(self) -> None:
        fmt = (
            "%(asctime)s | %(levelname)-8s | %(threadName)s | "
            "%(name)s:%(funcName)s:%(lineno)d | %(message)s"
        )
        super().__init__(fmt=fmt, datefmt="%Y-%m-%d %H:%M:%S")


class SimpleFormatter(logging.Formatter):
    """Simple formatter for console output."""

    def __init__(self) -> None:
        fmt = "%(levelname)-8s | %(name)s | %(message)s"
        super().__init__(fmt=fmt)


_FORMATTERS = {
    "json": StructuredFormatter,
    "detailed": DetailedFormatter,
    "simple": SimpleFormatter,
}


def setup_logging(
    level: str = "INFO",
    format: str = "simple",
    log_file: Optional[Path] = None,
    max_file_size_mb: int = 10,
    backup_count: int = 5,
    quiet_loggers: Iterable[str] = DEFAULT_QUIET_LOGGERS,
) -> None:
    """Configure the root logger.

    Console output goes to stderr so that checksums printed on stdout stay
    machine-readable.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format: Format type (simple, detailed, json)
        log_file: Optional log file path (always JSON, rotated)
        max_file_size_mb: Max log file size in MB
        backup_count: Number of backup files to keep
        quiet_loggers: Logger names capped at WARNING
    """
    if format not in _FORMATTERS:
        raise ValueError(f"Unknown log format {format!r}")

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(_FORMATTERS[format]())
    root_logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=max_file_size_mb * 1024 * 1024,
            backupCount=backup_count,
        )
        file_handler.setFormatter(StructuredFormatter())
        root_logger.addHandler(file_handler)

    for name in quiet_loggers:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Get logger with structured logging support."""
    return logging.getLogger(name)


# Field sets of the LogContexts active on the current thread, innermost last
_context = threading.local()
_factory_lock = threading.Lock()
_factory_installed = False


def _install_context_factory() -> None:
    """Wrap the log record factory once so records pick up context fields."""
    global _factory_installed
    with _factory_lock:
        if _factory_installed:
            return
        base_factory = logging.getLogRecordFactory()

        def record_factory(*args: Any, **kwargs: Any) -> logging.LogRecord:
            record = base_factory(*args, **kwargs)
            stack = getattr(_context, "stack", None)
            if stack:
                if not hasattr(record, "extra_fields"):
                    record.extra_fields = {}
                for fields in stack:
                    record.extra_fields.update(fields)
            return record

        logging.setLogRecordFactory(record_factory)
        _factory_installed = True


class LogContext:
    """Context manager for adding structured fields to logs.

    Fields are attached to records created on the thread that entered the
    context. Concurrent contexts on other threads never see each other's
    fields, and nested contexts merge with the innermost value winning.
    """

    def __init__(self, logger: logging.Logger, **fields: Any) -> None:
        self.logger = logger
        self.fields = fields

    def __enter__(self) -> "LogContext":
        _install_context_factory()
        if not hasattr(_context, "stack"):
            _context.stack = []
        _context.stack.append(self.fields)
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        stack = _context.stack
        # Remove by identity so out-of-order exits drop only this context
        for i in range(len(stack) - 1, -1, -1):
            if stack[i] is self.fields:
                del stack[i]
                break
