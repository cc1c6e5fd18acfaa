#!/usr/bin/env python3

"""
Centralized logging configuration.

Sets up application-wide logging using Python's standard `logging` module.
Features:
- Configurable log level via argument, LoggingConfig or the LOG_LEVEL environment variable.
- Console (stderr) handler and an optional rotating file handler.
- Custom formatter for aligned multi-line messages.
- Filters to reduce noise from external libraries (Selenium, urllib3, requests).
- Dynamic handler level updates without full reconfiguration.

Every module logs through ``logging.getLogger(__name__)``; the handlers live
on the root logger, so one call to ``setup_logging`` covers the whole package.
"""

# === STANDARD LIBRARY IMPORTS ===
import copy
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING, Optional, Union

# === LOCAL IMPORTS ===
from testing.test_framework import Colors

if TYPE_CHECKING:
    from config.config_schema import LoggingConfig

LOG_FORMAT: str = "%(asctime)s %(levelname).3s [%(module)-8.8s %(funcName)-8.8s %(lineno)-4d] %(message)s"
DATE_FORMAT: str = "%H:%M:%S"
DEFAULT_LOG_LEVEL = "INFO"

# Third-party loggers and their levels. The console handler drops all of their
# records (NameFilter); the levels apply to the file handler.
EXTERNAL_LOGGERS: dict[str, int] = {
    "selenium": logging.WARNING,
    "selenium.webdriver.remote.remote_connection": logging.WARNING,
    "selenium.webdriver.common.service": logging.WARNING,
    "urllib3": logging.ERROR,
    "urllib3.connectionpool": logging.ERROR,
    "requests": logging.WARNING,
}

logger = logging.getLogger(__name__)


class NameFilter(logging.Filter):
    """Filters log records based on logger name starting with excluded prefixes."""

    def __init__(self, excluded_names: list[str]) -> None:
        super().__init__()
        self.excluded_names = excluded_names

    def filter(self, record: logging.LogRecord) -> bool:
        return not any(record.name.startswith(name) for name in self.excluded_names)


class AlignedMessageFormatter(logging.Formatter):
    """
    Formats log records to align multi-line messages below the initial log prefix.
    Leading whitespace from subsequent lines of the original message is removed.
    Warnings and errors are colored unless ``use_color`` is False (file output).
    """

    def __init__(self, fmt: str = LOG_FORMAT, datefmt: str = DATE_FORMAT, use_color: bool = True) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)
        self.use_color = use_color

    def _apply_level_color(self, message: str, level: int) -> str:
        if not self.use_color or '\033[' in message:
            return message
        if level >= logging.ERROR:
            return Colors.red(message)
        if level >= logging.WARNING:
            return Colors.yellow(message)
        return message

    def _prefix_for(self, record: logging.LogRecord) -> str:
        """The formatted prefix (timestamp, level, location) with no message."""
        placeholder = "X"
        record_copy = copy.copy(record)
        record_copy.msg = placeholder
        record_copy.args = ()
        record_copy.exc_info = None
        record_copy.exc_text = None
        formatted = super().format(record_copy)
        index = formatted.find(placeholder, formatted.find("]"))
        if index == -1:
            heuristic_index = formatted.find("] ")
            index = heuristic_index + 2 if heuristic_index != -1 else 0
        return formatted[:index]

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        message = self._apply_level_color(message, record.levelno)

        prefix = self._prefix_for(record)
        indent = " " * len(prefix)
        lines = message.split("\n")
        result_lines = [f"{prefix}{lines[0].lstrip()}"]
        result_lines.extend(f"{indent}{line.lstrip()}" for line in lines[1:])
        return "\n".join(result_lines)


class _LoggingState:
    """Handlers installed by setup_logging, so re-runs update instead of duplicating."""

    handlers: list[logging.Handler] = []


def _resolve_level(log_level: Optional[str]) -> int:
    level_name = (log_level or os.getenv("LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper()
    numeric_level = getattr(logging, level_name, None)
    if not isinstance(numeric_level, int):
        logger.warning(f"Unknown log level '{level_name}', using {DEFAULT_LOG_LEVEL}")
        return logging.INFO
    return numeric_level


def setup_logging(
    log_level: Optional[str] = None,
    log_file: Optional[Union[str, Path]] = None,
    config: Optional["LoggingConfig"] = None,
) -> logging.Logger:
    """
    Configure the root logger with console and optional rotating file handlers.

    If called again, updates existing handler levels instead of re-adding them.

    Args:
        log_level: Minimum level for the handlers ("DEBUG", "INFO", ...).
                   Falls back to ``config.log_level``, then LOG_LEVEL, then INFO.
        log_file: Path of the log file; falls back to ``config.log_file``,
                  then the LOG_FILE environment variable. No file handler when unset.
        config: Optional LoggingConfig supplying level, file and rotation limits.

    Returns:
        The configured root logger.
    """
    root_logger = logging.getLogger()
    numeric_level = _resolve_level(log_level or (config.log_level if config else None))

    if _LoggingState.handlers:
        for handler in _LoggingState.handlers:
            handler.setLevel(numeric_level)
        root_logger.setLevel(numeric_level)
        return root_logger

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(AlignedMessageFormatter())
    console_handler.setLevel(numeric_level)
    console_handler.addFilter(NameFilter(list(EXTERNAL_LOGGERS)))
    _install(root_logger, console_handler)

    log_file = log_file or (config.log_file if config else None) or os.getenv("LOG_FILE")
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        max_bytes = (config.max_log_size_mb if config else 10) * 1024 * 1024
        backup_count = config.backup_count if config else 5
        file_handler = RotatingFileHandler(log_path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8")
        file_handler.setFormatter(AlignedMessageFormatter(use_color=False))
        file_handler.setLevel(numeric_level)
        _install(root_logger, file_handler)

    root_logger.setLevel(numeric_level)
    for name, level in EXTERNAL_LOGGERS.items():
        logging.getLogger(name).setLevel(level)

    logger.debug(f"Logging configured at {logging.getLevelName(numeric_level)} (file: {log_file or 'none'})")
    return root_logger


def _install(root_logger: logging.Logger, handler: logging.Handler) -> None:
    root_logger.addHandler(handler)
    _LoggingState.handlers.append(handler)


def set_log_level(log_level: str) -> None:
    """Change the level of the installed handlers and the root logger."""
    numeric_level = _resolve_level(log_level)
    for handler in _LoggingState.handlers:
        handler.setLevel(numeric_level)
    logging.getLogger().setLevel(numeric_level)


def reset_logging() -> None:
    """Remove and close the handlers installed by setup_logging."""
    root_logger = logging.getLogger()
    for handler in _LoggingState.handlers:
        root_logger.removeHandler(handler)
        handler.close()
    _LoggingState.handlers = []
