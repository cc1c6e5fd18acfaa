#!/usr/bin/env python3

"""
Standardized Error Handling Helpers.

Provides the decorator used for best-effort probes (``safe_execute``) and a
context manager that logs the start, duration and failure of an operation
without swallowing the exception (``ErrorContext``).
"""

# === CORE INFRASTRUCTURE ===
import logging

logger = logging.getLogger(__name__)

# === STANDARD LIBRARY IMPORTS ===
import time
from functools import wraps
from types import TracebackType
from typing import Any, Callable, Optional


def safe_execute(
    default_return: Any = None,
    log_errors: bool = True,
    error_message: Optional[str] = None,
    exceptions: tuple[type[Exception], ...] = (Exception,),
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """
    Decorator to safely execute a function with error handling.

    Only for probes whose failure *is* the answer (e.g. "is the browser open?").
    Verification and navigation code raises instead.
    Only ``exceptions`` are caught; anything else propagates.

    Usage:
        @safe_execute(default_return=False)
        def my_func(): ...
    """

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return func(*args, **kwargs)
            except exceptions as e:
                if log_errors:
                    msg = error_message or f"Error in {func.__name__}: {e}"
                    logger.warning(msg)
                return default_return

        return wrapper

    return decorator


class ErrorContext:
    """
    Context manager for error handling with automatic logging.

    Exceptions always propagate; the context only records them.
    """

    def __init__(self, operation_name: str, log_success: bool = True, **context: Any) -> None:
        self.operation_name = operation_name
        self.log_success = log_success
        self.context = context
        self.start_time: Optional[float] = None

    def __enter__(self) -> "ErrorContext":
        self.start_time = time.time()
        logger.debug(f"Starting operation: {self.operation_name}")
        return self

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc_val: Optional[BaseException],
        _exc_tb: Optional[TracebackType],
    ) -> bool:
        duration = time.time() - self.start_time if self.start_time else 0

        if exc_type is not None and exc_val is not None:
            details = f" | context: {self.context}" if self.context else ""
            logger.error(
                f"Operation failed: {self.operation_name} ({duration:.2f}s) - "
                f"{exc_type.__name__}: {exc_val}{details}"
            )
            return False

        if self.log_success:
            logger.debug(f"Operation completed: {self.operation_name} ({duration:.2f}s)")
        return False
