#!/usr/bin/env python3

"""
Exception hierarchy for the Sentinel page-object framework.

Every failure raised by the framework derives from SentinelError so step
definitions can catch one type at the glue level. Table verification errors
also derive from the matching built-in (ValueError, IndexError, TypeError)
so callers that only know the built-ins still see the right kind.
"""

import logging
from typing import Any

logger = logging.getLogger(__name__)


# === APPLICATION EXCEPTION HIERARCHY ===


class SentinelError(Exception):
    """Base exception class for all Sentinel errors."""

    def __init__(self, message: str = "Sentinel error occurred", **kwargs: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context: dict[str, Any] = kwargs.get("context", {})
        self.recovery_hint: str | None = kwargs.get("recovery_hint")

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for reporting."""
        return {
            "type": type(self).__name__,
            "message": self.message,
            "context": self.context,
            "recovery_hint": self.recovery_hint,
        }


# --- Element / table errors ---


class NoSuchElementError(SentinelError):
    """Raised when an element, row, snapshot or cross-row match cannot be found."""

    def __init__(self, message: str = "Element could not be found", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.element_name = kwargs.get("element_name")


class NoSuchColumnError(SentinelError, ValueError):
    """Raised when a caller asks for a column header the table does not have."""

    def __init__(self, message: str = "Column does not exist", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.column_header = kwargs.get("column_header")


class TableStructureError(SentinelError, IndexError):
    """Raised when a row has fewer cells than the header requires."""

    def __init__(self, message: str = "Table rows and headers do not line up", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.row_index = kwargs.get("row_index")
        self.expected_cells = kwargs.get("expected_cells")
        self.actual_cells = kwargs.get("actual_cells")


class NullCellError(SentinelError, TypeError):
    """Raised when a cell has no text where a containment check needs a string."""

    def __init__(self, message: str = "Cell text is missing", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.column_header = kwargs.get("column_header")


class NoSuchSelectorError(SentinelError):
    """Raised for a selector type that is not supported."""


class ElementNotVisibleError(SentinelError):
    """Raised when an element is hidden or disabled while being interacted with."""


# --- Browser / navigation errors ---


class BrowserSessionError(SentinelError):
    """Raised when there is no usable browser session."""

    def __init__(self, message: str = "Browser session error occurred", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.session_id = kwargs.get("session_id")


class WebDriverError(SentinelError):
    """Raised when a WebDriver cannot be created for the requested browser/OS."""


class NoSuchWindowError(SentinelError):
    """Raised when a window is closed or cannot be switched to."""


class NoSuchFrameError(SentinelError):
    """Raised when no iframe is available on the current page."""


class URLNotFoundError(SentinelError):
    """Raised when the current URL cannot be retrieved."""


class PageNotFoundError(SentinelError):
    """Raised when a page object is not registered or not yet set."""

    def __init__(self, message: str = "Page could not be found", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.page_name = kwargs.get("page_name")


class PageLoadTimeoutError(SentinelError):
    """Raised when a page does not finish loading before the timeout."""

    def __init__(self, message: str = "Page load timed out", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.timeout_duration = kwargs.get("timeout_duration")


# --- Configuration errors ---


class ConfigurationError(SentinelError):
    """Exception for configuration errors."""

    def __init__(self, message: str = "Configuration error occurred", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.config_section = kwargs.get("config_section")


class MissingConfigurationError(ConfigurationError):
    """Exception for missing configuration values."""

    def __init__(self, message: str = "Required configuration is missing", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.missing_keys = kwargs.get("missing_keys", [])


# --- API errors ---


class NoSuchActionError(SentinelError):
    """Raised when an action is not defined for an API object."""


class NoSuchAPIError(SentinelError):
    """Raised when no API object has been set for a scenario uid."""


class APIRequestError(SentinelError):
    """Raised when the HTTP transport fails before a response is available."""

    def __init__(self, message: str = "API request failed", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.url = kwargs.get("url")
        self.method = kwargs.get("method")


__all__ = [
    "APIRequestError",
    "BrowserSessionError",
    "ConfigurationError",
    "ElementNotVisibleError",
    "MissingConfigurationError",
    "NoSuchAPIError",
    "NoSuchActionError",
    "NoSuchColumnError",
    "NoSuchElementError",
    "NoSuchFrameError",
    "NoSuchSelectorError",
    "NoSuchWindowError",
    "NullCellError",
    "PageLoadTimeoutError",
    "PageNotFoundError",
    "SentinelError",
    "TableStructureError",
    "URLNotFoundError",
    "WebDriverError",
]
