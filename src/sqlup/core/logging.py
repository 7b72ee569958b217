#!/usr/bin/env python3
"""
Structured logging for sqlup with context management.

Features:
- Environment-driven configuration (LOG_LEVEL, LOG_OUTPUT)
- JSON lines for production, readable format for development
- Context propagation (buffer name, dialect) through a ContextVar
- Console output on stderr so stdout stays free for CLI results
"""
from __future__ import annotations

import json
import logging
import logging.handlers
import os
import sys
from contextvars import ContextVar
from pathlib import Path
from typing import Any, Dict, Optional

_log_context: ContextVar[Dict[str, Any]] = ContextVar("sqlup_log_context", default={})

# LogRecord attributes that are not user supplied extras
_RESERVED_ATTRS = frozenset(
    (
        "name", "msg", "args", "levelname", "levelno", "pathname", "filename", "module",
        "lineno", "funcName", "created", "msecs", "relativeCreated", "thread", "threadName",
        "processName", "process", "message", "exc_info", "exc_text", "stack_info",
        "taskName", "context",
    )
)


class StructuredFormatter(logging.Formatter):
    """
    Formatter that outputs JSON for production or readable format for development.
    """

    def __init__(self, use_json: bool = False):
        self.use_json = use_json
        super().__init__()

    def format(self, record: logging.LogRecord) -> str:
        context = _log_context.get({})
        if getattr(record, "context", None):
            context = {**context, **record.context}

        if self.use_json:
            return self._format_json(record, context)
        return self._format_readable(record, context)

    def _format_json(self, record: logging.LogRecord, context: Dict[str, Any]) -> str:
        """Format log record as a single JSON line."""
        log_entry = {
            "timestamp": self.formatTime(record, datefmt="%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "module": record.name,
            "message": record.getMessage(),
        }
        if context:
            log_entry["context"] = context
        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS:
                log_entry[key] = value

        return json.dumps(log_entry, default=str)

    def _format_readable(self, record: logging.LogRecord, context: Dict[str, Any]) -> str:
        """Format log record in human-readable format."""
        timestamp = self.formatTime(record, datefmt="%Y-%m-%d %H:%M:%S")

        context_str = ""
        if context:
            context_str = " | " + " ".join(f"{k}={v}" for k, v in context.items())

        base_msg = f"{timestamp} | {record.levelname:5} | {record.name} | {record.getMessage()}{context_str}"
        if record.exc_info:
            base_msg += f"\n{self.formatException(record.exc_info)}"
        return base_msg


class ContextLogger(logging.LoggerAdapter):
    """
    Logger adapter that automatically includes context in log messages.
    """

    def __init__(self, logger: logging.Logger, extra: Optional[Dict[str, Any]] = None):
        super().__init__(logger, extra or {})

    def process(self, msg: str, kwargs: Dict[str, Any]) -> tuple[str, Dict[str, Any]]:
        context = _log_context.get({})
        if self.extra:
            context = {**context, **self.extra}

        if kwargs.get("extra"):
            call_context = kwargs["extra"].pop("context", {})
            context = {**context, **call_context}

        kwargs.setdefault("extra", {})
        kwargs["extra"]["context"] = context
        return msg, kwargs


def get_log_level() -> str:
    """Get log level from environment or default to WARNING."""
    return os.environ.get("LOG_LEVEL", "WARNING").upper()


def get_log_output() -> str:
    """Get log output mode from environment or default to console."""
    return os.environ.get("LOG_OUTPUT", "console").lower()


def is_production_env() -> bool:
    """Detect if running in production environment."""
    env_indicators = [
        os.environ.get("ENVIRONMENT") == "production",
        os.environ.get("SQLUP_ENV") == "production",
        os.environ.get("KUBERNETES_SERVICE_HOST") is not None,
    ]
    return any(env_indicators)


def setup_structured_logging(
    name: str,
    log_level: Optional[str] = None,
    log_output: Optional[str] = None,
    force_json: Optional[bool] = None,
    context: Optional[Dict[str, Any]] = None,
    logs_dir: Optional[Path] = None,
) -> ContextLogger:
    """
    Setup standardized structured logging.

    Args:
        name: Logger name (typically __name__)
        log_level: Log level override (DEBUG, INFO, WARNING, ERROR)
        log_output: Output mode override (console, file, both)
        force_json: Force JSON output regardless of environment detection
        context: Default context to include in all log messages
        logs_dir: Directory for the rotating log file

    Returns:
        ContextLogger instance with structured logging configured
    """
    logger = logging.getLogger(name)

    # Avoid duplicate handlers
    if logger.handlers:
        return ContextLogger(logger, context)

    level = (log_level or get_log_level()).upper()
    output = log_output or get_log_output()
    use_json = force_json if force_json is not None else is_production_env()

    logger.setLevel(getattr(logging, level, logging.WARNING))
    formatter = StructuredFormatter(use_json=use_json)

    if output in ("console", "both"):
        _setup_console_handler(logger, formatter)
    if output in ("file", "both"):
        _setup_file_handler(logger, formatter, name, logs_dir)

    logger.propagate = False
    return ContextLogger(logger, context)


def _setup_console_handler(logger: logging.Logger, formatter: StructuredFormatter) -> None:
    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setFormatter(formatter)
    logger.addHandler(stderr_handler)


def _setup_file_handler(
    logger: logging.Logger, formatter: StructuredFormatter, name: str, logs_dir: Optional[Path]
) -> None:
    """Setup rotating file handler."""
    if logs_dir is None:
        logs_dir = Path.cwd() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)

    module_basename = name.split(".")[-1]
    file_handler = logging.handlers.RotatingFileHandler(
        logs_dir / f"{module_basename}.log",
        maxBytes=1024 * 1024,
        backupCount=3,
    )
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)


def set_context(**kwargs: Any) -> None:
    """
    Set logging context for the current execution context.

    Args:
        **kwargs: Context key-value pairs (e.g., buffer="query.sql", dialect="postgres")
    """
    _log_context.set({**_log_context.get({}), **kwargs})


def clear_context() -> None:
    """Clear all logging context for the current execution context."""
    _log_context.set({})


def get_context() -> Dict[str, Any]:
    """Get current logging context."""
    return _log_context.get({}).copy()


class LogContext:
    """
    Context manager for temporary logging context.

    Usage:
        with LogContext(buffer="query.sql"):
            logger.debug("Capitalizing region")  # Will include context
    """

    def __init__(self, **kwargs: Any):
        self.new_context = kwargs
        self.old_context: Dict[str, Any] = {}

    def __enter__(self):
        self.old_context = get_context()
        set_context(**self.new_context)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        _log_context.set(self.old_context)


def _package_loggers(package: str):
    for name in list(logging.Logger.manager.loggerDict):
        if name == package or name.startswith(package + "."):
            yield name, logging.getLogger(name)


def set_package_log_level(level: str, package: str = "sqlup") -> None:
    """Change the level of every logger already created under ``package``."""
    numeric_level = getattr(logging, level.upper(), logging.WARNING)
    for _, logger in _package_loggers(package):
        logger.setLevel(numeric_level)


def set_package_log_output(output: str, package: str = "sqlup", logs_dir: Optional[Path] = None) -> None:
    """
    Rebuild the handlers of every configured logger under ``package``.

    Args:
        output: console, file or both
        package: Logger namespace to update
        logs_dir: Directory for the rotating log files (./logs by default)
    """
    output = output.lower()
    for name, logger in _package_loggers(package):
        if not logger.handlers:
            continue
        formatter = logger.handlers[0].formatter or StructuredFormatter(use_json=is_production_env())
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
        if output in ("console", "both"):
            _setup_console_handler(logger, formatter)
        if output in ("file", "both"):
            _setup_file_handler(logger, formatter, name, logs_dir)
