#!/usr/bin/env python3

"""
Page element base class.

A PageElement is declared once on a page with a selector and bound to the
session's driver when the page is built. The underlying WebElement is looked
up on every call so that a re-rendered DOM never leaves a stale handle
behind.
"""

# === CORE INFRASTRUCTURE ===
import logging

logger = logging.getLogger(__name__)

# === STANDARD LIBRARY IMPORTS ===
from typing import Any, Optional, TypeVar, Union

# === THIRD-PARTY IMPORTS ===
from selenium.common.exceptions import NoSuchElementException, TimeoutException, WebDriverException
from selenium.webdriver.support import expected_conditions as EC
from selenium.webdriver.support.wait import WebDriverWait

# === LOCAL IMPORTS ===
from browser.selectors import Selector, SelectorType
from core.error_handling import safe_execute
from core.exceptions import BrowserSessionError, ElementNotVisibleError, NoSuchElementError

E = TypeVar("E", bound="PageElement")

DEFAULT_WAIT_SECONDS = 10.0


class PageElement:
    """Lazily located element on a page."""

    def __init__(
        self,
        selector_type: Union[str, SelectorType],
        selector_value: str,
        driver: Optional[Any] = None,
        name: Optional[str] = None,
        timeout: float = DEFAULT_WAIT_SECONDS,
    ) -> None:
        self.selector = Selector.of(selector_type, selector_value)
        self.name = name or str(self.selector)
        self.timeout = timeout
        self._driver = driver

    def bind(self: E, driver: Any, name: Optional[str] = None) -> E:
        """Attach the element to a driver (and optionally rename it)."""
        self._driver = driver
        if name:
            self.name = name
        return self

    @property
    def driver(self) -> Any:
        if self._driver is None:
            logger.error(f"Element '{self.name}' used before it was bound to a browser session")
            raise BrowserSessionError(
                f"Element '{self.name}' is not bound to a browser session",
                recovery_hint="Build the page through PageManager.set_page() before using its elements",
            )
        return self._driver

    # --- Lookup ---

    def element(self) -> Any:
        """Locate the WebElement, raising NoSuchElementError when it is absent."""
        try:
            return self.driver.find_element(*self.selector.to_locator())
        except NoSuchElementException as e:
            logger.error(f"Element '{self.name}' not found with {self.selector}: {e.msg}")
            raise NoSuchElementError(
                f"Element '{self.name}' could not be found using {self.selector}",
                element_name=self.name,
            ) from e

    def find_elements(self) -> list[Any]:
        return list(self.driver.find_elements(*self.selector.to_locator()))

    @safe_execute(default_return=False, log_errors=False, exceptions=(WebDriverException,))
    def does_exist(self) -> bool:
        return len(self.find_elements()) > 0

    # --- Interaction ---

    def click(self: E) -> E:
        element = self.element()
        if not element.is_displayed():
            logger.error(f"Cannot click '{self.name}': element is not visible")
            raise ElementNotVisibleError(f"Element '{self.name}' is not visible and cannot be clicked")
        element.click()
        logger.debug(f"Clicked '{self.name}'")
        return self

    def clear(self: E) -> E:
        self.element().clear()
        return self

    def send_keys(self: E, *text: str) -> E:
        element = self.element()
        if not element.is_enabled():
            logger.error(f"Cannot type into '{self.name}': element is disabled")
            raise ElementNotVisibleError(f"Element '{self.name}' is disabled and cannot receive text")
        element.send_keys(*text)
        return self

    def get_text(self) -> str:
        return self.element().text or ""

    def get_attribute(self, attribute: str) -> Optional[str]:
        return self.element().get_attribute(attribute)

    def is_displayed(self) -> bool:
        return bool(self.element().is_displayed())

    def is_enabled(self) -> bool:
        return bool(self.element().is_enabled())

    def is_selected(self) -> bool:
        return bool(self.element().is_selected())

    # --- Waits ---

    def wait_until_visible(self, timeout: Optional[float] = None) -> Any:
        """Wait until the element is present and displayed; return the WebElement."""
        return self._wait(EC.visibility_of_element_located(self.selector.to_locator()), timeout, "visible")

    def wait_until_clickable(self, timeout: Optional[float] = None) -> Any:
        """Wait until the element is visible and enabled; return the WebElement."""
        return self._wait(EC.element_to_be_clickable(self.selector.to_locator()), timeout, "clickable")

    def _wait(self, condition: Any, timeout: Optional[float], state: str) -> Any:
        wait_time = self.timeout if timeout is None else timeout
        try:
            return WebDriverWait(self.driver, wait_time).until(condition)
        except TimeoutException as e:
            logger.error(f"Element '{self.name}' did not become {state} within {wait_time}s")
            raise ElementNotVisibleError(
                f"Element '{self.name}' did not become {state} within {wait_time} seconds",
                context={"selector": str(self.selector), "timeout": wait_time},
            ) from e
        except WebDriverException as e:
            logger.error(f"Waiting for '{self.name}' failed: {e}")
            raise

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, selector={str(self.selector)!r})"
