"""
Structured logging configuration for the glazing_layout package.

Provides:
- JSON formatter for machine-readable log output
- Console formatter for human-readable output
- Timing context manager and decorator for layout recomputation
- Centralized logging setup

The engine itself never configures logging; it only emits records on
module loggers under ``glazing_layout``. A host application calls
``setup_logging`` once at start-up.

Usage:
    from glazing_layout.logging_config import setup_logging, get_logger

    setup_logging(level=logging.DEBUG, json_file="glazing.log.json")

    logger = get_logger(__name__)
    logger.info("Layout recomputed", extra={"edges": 4, "frame_height": 1000})
"""

import json
import logging
import sys
import time
from contextlib import contextmanager
from datetime import datetime
from functools import wraps
from pathlib import Path
from typing import Any, Callable, Dict, Iterator, Optional, TypeVar, Union

F = TypeVar('F', bound=Callable[..., Any])

PACKAGE_LOGGER = "glazing_layout"

# Standard LogRecord attributes; everything else came in via `extra={}`
_RESERVED_KEYS = frozenset({
    'name', 'msg', 'args', 'created', 'filename', 'funcName',
    'levelname', 'levelno', 'lineno', 'module', 'msecs',
    'pathname', 'process', 'processName', 'relativeCreated',
    'stack_info', 'exc_info', 'exc_text', 'thread', 'threadName',
    'taskName', 'message', 'asctime',
})


def _extra_fields(record: logging.LogRecord) -> Dict[str, Any]:
    """Collect fields passed through `extra={}` on a log record."""
    return {k: v for k, v in record.__dict__.items() if k not in _RESERVED_KEYS}


class JSONFormatter(logging.Formatter):
    """One JSON object per line.

    Output format:
        {"timestamp": "...", "level": "INFO", "logger": "...", "message": "...", ...}
    """

    def __init__(self, include_extra: bool = True):
        super().__init__()
        self.include_extra = include_extra

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.levelno >= logging.WARNING or record.levelno <= logging.DEBUG:
            entry["location"] = {
                "file": record.filename,
                "line": record.lineno,
                "function": record.funcName,
            }

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        if self.include_extra:
            for key, value in _extra_fields(record).items():
                try:
                    json.dumps(value)
                    entry[key] = value
                except (TypeError, ValueError):
                    entry[key] = str(value)

        return json.dumps(entry, ensure_ascii=False)


class ConsoleFormatter(logging.Formatter):
    """Human-readable console formatter with optional colors.

    Format: [TIME] LEVEL logger: message [extra_key=value ...]
    """

    COLORS = {
        'DEBUG': '\033[36m',
        'INFO': '\033[32m',
        'WARNING': '\033[33m',
        'ERROR': '\033[31m',
        'CRITICAL': '\033[35m',
        'RESET': '\033[0m',
    }

    def __init__(self, use_colors: bool = True, show_extra: bool = True):
        super().__init__()
        self.use_colors = use_colors
        self.show_extra = show_extra

    @staticmethod
    def _format_value(key: str, value: Any) -> str:
        if isinstance(value, float):
            return f"{key}={value:.1f}"
        if isinstance(value, (list, tuple)) and len(value) > 3:
            return f"{key}=[...{len(value)} items]"
        return f"{key}={value}"

    def format(self, record: logging.LogRecord) -> str:
        time_str = datetime.fromtimestamp(record.created).strftime("%H:%M:%S")

        level = record.levelname
        if self.use_colors and level in self.COLORS:
            level_str = f"{self.COLORS[level]}{level:8}{self.COLORS['RESET']}"
        else:
            level_str = f"{level:8}"

        logger_name = record.name
        prefix = PACKAGE_LOGGER + "."
        if logger_name.startswith(prefix):
            logger_name = logger_name[len(prefix):]

        extra_str = ""
        if self.show_extra:
            extras = [self._format_value(k, v) for k, v in _extra_fields(record).items()]
            if extras:
                extra_str = " [" + ", ".join(extras) + "]"

        result = f"[{time_str}] {level_str} {logger_name}: {record.getMessage()}{extra_str}"
        if record.exc_info:
            result += "\n" + self.formatException(record.exc_info)
        return result


def setup_logging(
    level: int = logging.INFO,
    json_file: Optional[Union[str, Path]] = None,
    console: bool = True,
    use_colors: bool = True,
    root_logger: bool = False,
) -> logging.Logger:
    """Configure logging for the glazing_layout package.

    Args:
        level: Minimum log level (default INFO)
        json_file: Optional path for JSON log file
        console: Enable console output (default True)
        use_colors: Use ANSI colors in console (default True)
        root_logger: Configure root logger instead of glazing_layout

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger("" if root_logger else PACKAGE_LOGGER)
    logger.setLevel(level)
    logger.handlers.clear()

    if console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level)
        console_handler.setFormatter(ConsoleFormatter(use_colors=use_colors))
        logger.addHandler(console_handler)

    if json_file:
        json_handler = logging.FileHandler(Path(json_file), encoding='utf-8')
        json_handler.setLevel(level)
        json_handler.setFormatter(JSONFormatter())
        logger.addHandler(json_handler)

    if not root_logger:
        logger.propagate = False

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for a module (typically ``__name__``)."""
    return logging.getLogger(name)


@contextmanager
def log_timing(
    logger: logging.Logger,
    operation: str,
    level: int = logging.DEBUG,
    **extra_fields: Any
) -> Iterator[Dict[str, Any]]:
    """Context manager to log how long an operation took.

    Example:
        with log_timing(logger, "Recompute layout", edges=len(edge_configs)):
            data = compute_all_edges(guide, edge_configs, frame_height)

    Yields:
        dict that can be updated with additional fields for the completion record
    """
    timing_info: Dict[str, Any] = {}
    start_time = time.perf_counter()

    logger.log(level, "Starting: %s", operation, extra={
        "event": "start",
        "operation": operation,
        **extra_fields,
    })

    try:
        yield timing_info
    except Exception as e:
        elapsed = time.perf_counter() - start_time
        logger.error("Failed: %s (%.3fs) - %s", operation, elapsed, e, extra={
            "event": "error",
            "operation": operation,
            "elapsed_seconds": elapsed,
            "error": str(e),
            **extra_fields,
        })
        raise

    elapsed = time.perf_counter() - start_time
    timing_info['elapsed_seconds'] = elapsed
    logger.log(level, "Completed: %s (%.3fs)", operation, elapsed, extra={
        "event": "complete",
        "operation": operation,
        **extra_fields,
        **timing_info,
    })


def timed(
    logger: Optional[logging.Logger] = None,
    level: int = logging.DEBUG,
    operation: Optional[str] = None,
) -> Callable[[F], F]:
    """Decorator to log function execution time.

    Args:
        logger: Logger instance (uses the function's module logger if None)
        level: Log level (default DEBUG)
        operation: Operation name (uses function name if None)
    """
    def decorator(func: F) -> F:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            func_logger = logger or logging.getLogger(func.__module__)
            with log_timing(func_logger, operation or func.__name__, level):
                return func(*args, **kwargs)

        return wrapper  # type: ignore
    return decorator


def configure_default_logging(verbose: bool = False) -> logging.Logger:
    """Configure console logging: DEBUG if verbose, INFO otherwise."""
    level = logging.DEBUG if verbose else logging.INFO
    return setup_logging(level=level, console=True, use_colors=True)
