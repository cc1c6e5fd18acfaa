#!/usr/bin/env python3

"""Selenium/WebDriver Utilities for Page Objects.

Holds the element-locator contract the table component is written against,
its Selenium implementation, and the small driver helpers shared by the page
manager and the browser manager.
"""

# === CORE INFRASTRUCTURE ===
import logging

from core.error_handling import safe_execute

logger = logging.getLogger(__name__)

# === STANDARD LIBRARY IMPORTS ===
from typing import Any, Optional, Protocol, cast

# === THIRD-PARTY IMPORTS ===
from selenium.webdriver.common.by import By
from selenium.webdriver.remote.webdriver import WebDriver
from selenium.webdriver.remote.webelement import WebElement

# --- Protocols ---


class DriverProtocol(Protocol):
    """Protocol capturing the WebDriver surface to ensure strict typing."""

    def execute_script(self, script: str, *args: object) -> object: ...

    def find_element(self, by: str = ..., value: Optional[str] = ...) -> Any: ...

    def find_elements(self, by: str = ..., value: Optional[str] = ...) -> list[Any]: ...


class WebElementProtocol(Protocol):
    """Protocol for WebElement to ensure strict typing."""

    def get_attribute(self, name: str) -> Optional[str]: ...

    def click(self) -> None: ...

    def clear(self) -> None: ...

    def send_keys(self, *value: object) -> None: ...

    def find_element(self, by: str = ..., value: Optional[str] = ...) -> Any: ...

    def find_elements(self, by: str = ..., value: Optional[str] = ...) -> list[Any]: ...

    @property
    def text(self) -> str: ...

    def is_displayed(self) -> bool: ...

    def is_enabled(self) -> bool: ...

    def is_selected(self) -> bool: ...


class ElementLocator(Protocol):
    """
    What the table component needs from the browser driver.

    Handles are opaque; they are only ever passed back into the locator.
    """

    def find_all(self, tag_name: str, scope: Any) -> list[Any]:
        """Return every element with ``tag_name`` under ``scope`` (empty list if none)."""
        ...

    def get_text(self, handle: Any) -> Optional[str]:
        """Return the visible text of ``handle``."""
        ...

    def find_by_xpath(self, xpath: str, scope: Any) -> Any:
        """Return the first match for ``xpath`` under ``scope``; raise NoSuchElementException if absent."""
        ...


class SeleniumElementLocator:
    """ElementLocator backed by Selenium's element API."""

    def find_all(self, tag_name: str, scope: Any) -> list[Any]:
        found = cast(WebElementProtocol, scope).find_elements(By.TAG_NAME, tag_name)
        return list(found) if found else []

    def get_text(self, handle: Any) -> Optional[str]:
        return cast(WebElementProtocol, handle).text

    def find_by_xpath(self, xpath: str, scope: Any) -> Any:
        return cast(WebElementProtocol, scope).find_element(By.XPATH, xpath)


# --- XPath helpers ---


def xpath_literal(text: str) -> str:
    """
    Quote ``text`` for use inside an XPath expression.

    XPath 1.0 has no escape character, so text holding both quote kinds is
    built with concat().
    """
    if "'" not in text:
        return f"'{text}'"
    if '"' not in text:
        return f'"{text}"'
    parts = text.split("'")
    pieces: list[str] = []
    for index, part in enumerate(parts):
        if part:
            pieces.append(f"'{part}'")
        if index < len(parts) - 1:
            pieces.append('"\'"')
    return f"concat({', '.join(pieces)})"


# --- Selenium Specific Helpers ---


@safe_execute(default_return="", log_errors=False)
def extract_text(element: Optional[WebElement]) -> str:
    """Extract text from an element, empty string when it is gone."""
    if not element:
        return ""

    element_proto = cast(WebElementProtocol, element)
    return element_proto.text or ""


@safe_execute(default_return=False, log_errors=False)
def is_browser_open(driver: Optional[WebDriver]) -> bool:
    """Check if browser is still open and responsive."""
    if not driver:
        return False
    # Raises once the browser has gone away
    _ = driver.current_url
    return True


def close_tabs(driver: Optional[WebDriver], keep_first: bool = True) -> None:
    """Close extra browser tabs, keeping the first one by default."""
    if not driver:
        return

    handles = driver.window_handles
    if keep_first and len(handles) > 1:
        for handle in handles[1:]:
            driver.switch_to.window(handle)
            driver.close()
        driver.switch_to.window(handles[0])
    elif not keep_first:
        for handle in handles:
            driver.switch_to.window(handle)
            driver.close()


def scroll_to_element(driver: Optional[WebDriver], element: Optional[WebElement]) -> None:
    """Scroll element into view."""
    if not driver or not element:
        return

    driver_proto = cast(DriverProtocol, driver)
    driver_proto.execute_script("arguments[0].scrollIntoView(true);", element)


@safe_execute(default_return=False, log_errors=False)
def is_element_visible(element: Optional[WebElement]) -> bool:
    """Check if element is visible; a stale or missing element is not."""
    if not element:
        return False

    element_proto = cast(WebElementProtocol, element)
    return element_proto.is_displayed()
