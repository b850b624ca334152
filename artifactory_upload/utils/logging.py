"""
Logging utilities for the Artifactory upload step.

Provides structured logging with entry/exit decorators, JSON formatting and
a correlation ID tied to the CI build that runs the step.

Features:
    - Structured JSON logging when LOG_FORMAT=json
    - Correlation ID derived from pipeline metadata (repo#build)
    - Entry/exit decorators with timing
    - Colorized console output for interactive runs

Example usage:
    >>> from artifactory_upload.utils.logging import get_logger, log_function_call
    >>>
    >>> logger = get_logger(__name__)
    >>> set_correlation_id("acme/app#42")
    >>>
    >>> @log_function_call
    >>> def build(config) -> list:
    >>>     logger.info("Building command")
    >>>     return []
"""

import logging
import functools
import json
import os
import uuid
from typing import Any, Callable, TypeVar, cast, Optional, Dict
from datetime import datetime, timezone
from contextvars import ContextVar

import coloredlogs

F = TypeVar("F", bound=Callable[..., Any])

_correlation_id: ContextVar[Optional[str]] = ContextVar("correlation_id", default=None)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Attributes every LogRecord carries; anything else came in through `extra`.
_STANDARD_RECORD_KEYS = frozenset(
    [
        "name",
        "msg",
        "args",
        "created",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "module",
        "msecs",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "thread",
        "threadName",
        "taskName",
        "exc_info",
        "exc_text",
        "stack_info",
        "getMessage",
    ]
)


def json_logging_enabled() -> bool:
    """Return True when LOG_FORMAT requests JSON output."""
    return os.getenv("LOG_FORMAT", "text").lower() == "json"


# ============================================================================
# Correlation ID Management
# ============================================================================

def get_correlation_id() -> str:
    """
    Get current correlation ID or generate a new one.

    Returns:
        Current correlation ID (generates UUID if not set)
    """
    corr_id = _correlation_id.get()
    if corr_id is None:
        corr_id = str(uuid.uuid4())
        _correlation_id.set(corr_id)
    return corr_id


def set_correlation_id(corr_id: str) -> None:
    """Set correlation ID for the current context."""
    _correlation_id.set(corr_id)


def clear_correlation_id() -> None:
    """Clear correlation ID for the current context."""
    _correlation_id.set(None)


# ============================================================================
# JSON Formatter
# ============================================================================

class JSONFormatter(logging.Formatter):
    """
    JSON log formatter for structured logging.

    Example output:
        {
            "timestamp": "2026-10-18T10:30:15.123456Z",
            "level": "INFO",
            "logger": "artifactory_upload.plugin",
            "message": "Running upload",
            "correlation_id": "acme/app#42",
            "extra": {"event": "function_entry"}
        }
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).replace(tzinfo=None).isoformat() + "Z",
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "correlation_id": get_correlation_id(),
        }

        log_data["source"] = {
            "file": record.pathname,
            "line": record.lineno,
            "function": record.funcName,
        }

        extra_fields = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _STANDARD_RECORD_KEYS
        }
        if extra_fields:
            log_data["extra"] = extra_fields

        if record.exc_info:
            log_data["exception"] = {
                "type": record.exc_info[0].__name__ if record.exc_info[0] else None,
                "message": str(record.exc_info[1]),
                "traceback": self.formatException(record.exc_info),
            }

        log_data["environment"] = {
            "hostname": os.getenv("HOSTNAME", "unknown"),
            "runner": os.getenv("DRONE_RUNNER_HOSTNAME", ""),
        }

        return json.dumps(log_data, default=str)


def setup_logging(level: str = "INFO", enable_colors: bool = True) -> None:
    """
    Configure global logging settings for the step.

    Uses the JSON formatter when LOG_FORMAT=json, colorized text otherwise.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
            Unknown names fall back to INFO.
        enable_colors: Whether to enable colorized console output

    Example:
        >>> setup_logging(level="DEBUG")
    """
    log_level = getattr(logging, (level or "INFO").upper(), logging.INFO)
    if not isinstance(log_level, int):
        log_level = logging.INFO

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Remove existing handlers to avoid duplicates
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)

    if json_logging_enabled():
        console_handler.setFormatter(JSONFormatter())
        root_logger.addHandler(console_handler)
    elif enable_colors:
        coloredlogs.install(
            level=log_level,
            fmt=LOG_FORMAT,
            datefmt=LOG_DATE_FORMAT,
            logger=root_logger,
        )
    else:
        console_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
        root_logger.addHandler(console_handler)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance with the specified name.

    Args:
        name: Logger name (typically __name__ of the calling module)

    Returns:
        Configured logger instance
    """
    return logging.getLogger(name)


def log_function_call(func: F) -> F:
    """
    Decorator that logs function entry and exit with parameters and return values.

    - Logs entry with all parameter reprs
    - Logs exit with return value and execution time
    - Logs exceptions with traceback, then re-raises. Exceptions with a true
      ``expected`` attribute are logged as warnings without traceback

    Arguments are rendered with repr(), so types passed to decorated
    functions must not expose secrets in their repr.

    Args:
        func: Function to be decorated

    Returns:
        Wrapped function with logging
    """
    logger = get_logger(func.__module__)

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        correlation_id = get_correlation_id()

        arg_names = func.__code__.co_varnames[: func.__code__.co_argcount]
        args_repr = [f"{name}={repr(value)}" for name, value in zip(arg_names, args)]
        kwargs_repr = [f"{key}={repr(value)}" for key, value in kwargs.items()]
        all_args = ", ".join(args_repr + kwargs_repr)

        logger.debug(
            f"ENTER {func.__name__}({all_args})",
            extra={
                "function": func.__name__,
                "correlation_id": correlation_id,
                "event": "function_entry",
            },
        )

        start_time = datetime.now()

        try:
            result = func(*args, **kwargs)

            execution_time = (datetime.now() - start_time).total_seconds()
            logger.debug(
                f"EXIT {func.__name__} -> {repr(result)} ({execution_time:.2f}s)",
                extra={
                    "function": func.__name__,
                    "duration_seconds": execution_time,
                    "correlation_id": correlation_id,
                    "event": "function_exit",
                    "status": "success",
                },
            )

            return result

        except Exception as error:
            execution_time = (datetime.now() - start_time).total_seconds()
            expected = getattr(error, "expected", False)
            logger.log(
                logging.WARNING if expected else logging.ERROR,
                f"ERROR {func.__name__} raised {type(error).__name__}: {str(error)}",
                extra={
                    "function": func.__name__,
                    "duration_seconds": execution_time,
                    "correlation_id": correlation_id,
                    "event": "function_error",
                    "status": "error",
                    "error_type": type(error).__name__,
                },
                exc_info=not expected,
            )
            raise

    return cast(F, wrapper)
