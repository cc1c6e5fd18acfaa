#!/usr/bin/env python3

"""
Page manager: the per-session context step definitions work through.

Holds the browser, the registry of page classes, the page currently under
test and the handle of the first window opened. One PageManager is created
per test session and passed to the steps that need it.
"""

# === CORE INFRASTRUCTURE ===
import logging

logger = logging.getLogger(__name__)

# === STANDARD LIBRARY IMPORTS ===
from typing import Any, Optional

# === THIRD-PARTY IMPORTS ===
from selenium.common.exceptions import (
    NoSuchFrameException,
    NoSuchWindowException,
    TimeoutException,
    WebDriverException,
)
from selenium.webdriver.common.by import By
from selenium.webdriver.support.wait import WebDriverWait

# === LOCAL IMPORTS ===
from browser.page import Page, PageRegistry, page_registry
from config.config_schema import SeleniumConfig
from core.action_registry import normalize_name
from core.browser_manager import BrowserManager
from core.error_handling import ErrorContext
from core.exceptions import (
    NoSuchFrameError,
    NoSuchWindowError,
    PageLoadTimeoutError,
    PageNotFoundError,
    URLNotFoundError,
)


class PageManager:
    """Navigation, window/frame switching and page-load waiting for one session."""

    def __init__(
        self,
        browser: Optional[BrowserManager] = None,
        registry: Optional[PageRegistry] = None,
        config: Optional[SeleniumConfig] = None,
    ) -> None:
        self.config = config or (browser.config if browser else SeleniumConfig())
        self.browser = browser or BrowserManager(self.config)
        self.registry = registry if registry is not None else page_registry
        self.parent_handle: Optional[str] = None
        self._page: Optional[Page] = None
        self._pages: dict[str, Page] = {}

    @property
    def driver(self) -> Any:
        return self.browser.driver

    # --- Pages ---

    def set_page(self, page_name: str) -> Page:
        """Make ``page_name`` the current page, building it on first use."""
        self._page = self.build_or_retrieve_page(page_name)
        return self._page

    def get_page(self) -> Page:
        if self._page is None:
            logger.error("Page requested before one was set")
            raise PageNotFoundError(
                "No page has been set yet. Call set_page() (e.g. in a 'I am on the ... page' step) first."
            )
        return self._page

    def build_or_retrieve_page(self, page_name: str) -> Page:
        key = normalize_name(page_name)
        page = self._pages.get(key)
        if page is None:
            page = self.registry.build(page_name, self.driver)
            self._pages[key] = page
        return page

    # --- Navigation ---

    def open_page(self, url: str) -> str:
        """Open ``url`` and remember the current window as the parent window."""
        self.open(url)
        self.parent_handle = self.driver.current_window_handle
        return self.parent_handle

    def open(self, url: str) -> None:
        logger.debug(f"Opening {url}")
        self.driver.get(url)

    def close(self) -> None:
        self.driver.close()

    def quit(self) -> None:
        self.browser.close_browser()
        self._pages.clear()
        self._page = None
        self.parent_handle = None

    def navigate_to(self, url: str) -> Optional[Page]:
        self.driver.get(url)
        return self._page

    def navigate_forward(self) -> Optional[Page]:
        self.driver.forward()
        return self._page

    def navigate_back(self) -> Optional[Page]:
        self.driver.back()
        return self._page

    def refresh(self) -> Optional[Page]:
        self.driver.refresh()
        return self._page

    # --- Windows & frames ---

    def switch_to_new_window(self) -> str:
        """Switch to a window other than the parent and return its handle."""
        handles = list(self.driver.window_handles)
        if len(handles) <= 1:
            error_message = (
                "Only one window is open, therefore we cannot switch to a new window. "
                "Please open a new window and try again."
            )
            logger.error(error_message)
            raise NoSuchWindowError(error_message)
        if self.parent_handle is None:
            error_message = "Parent window cannot be found. Please open a window with open_page() and try again."
            logger.error(error_message)
            raise NoSuchWindowError(error_message)

        new_handle = next(handle for handle in reversed(handles) if handle != self.parent_handle)
        self.switch_to_window(new_handle)
        return new_handle

    def switch_to_window(self, handle: str) -> None:
        try:
            self.driver.switch_to.window(handle)
            logger.debug(f"Switched to window {handle}")
        except NoSuchWindowException as e:
            error_message = (
                f"The expected window is already closed or cannot be found. "
                f"Please check your intended target: {e.msg}"
            )
            logger.error(error_message)
            raise NoSuchWindowError(error_message) from e

    def close_child_window(self) -> str:
        """Close the current window and return to the parent."""
        if self.parent_handle is None:
            logger.error("close_child_window called before a parent window was opened")
            raise NoSuchWindowError("Parent window cannot be found. Please open a window with open_page() first.")
        self.close()
        self.switch_to_window(self.parent_handle)
        return self.parent_handle

    def switch_to_iframe(self, index: int = 0) -> None:
        try:
            self.driver.switch_to.frame(index)
            logger.debug(f"Switched to iframe {index} on current page")
        except NoSuchFrameException as e:
            error_message = (
                f"No iFrames were found on the current page. "
                f"Ensure you have the correct page open, and please try again. {e.msg}"
            )
            logger.error(error_message)
            raise NoSuchFrameError(error_message) from e

    def switch_to_default_content(self) -> None:
        self.driver.switch_to.default_content()

    def get_current_url(self) -> str:
        page_name = self._page.name if self._page else "the current page"
        try:
            current_url = self.driver.current_url
        except WebDriverException as e:
            error_message = (
                f"An error occurred when trying to find the current URL for {page_name}. "
                f"Please check the URL and try again: {e.msg}"
            )
            logger.error(error_message)
            raise URLNotFoundError(error_message) from e

        if not current_url:
            logger.error("Current URL not found")
            raise URLNotFoundError("Current URL could not be found. Please check the URL and try again.")
        logger.debug(f"Current URL retrieved: {current_url}")
        return current_url

    # --- Timeouts ---

    def set_timeout(self, seconds: float) -> None:
        """Set the driver's implicit wait."""
        self.driver.implicitly_wait(seconds)

    def set_default_timeout(self) -> None:
        self.set_timeout(self.config.default_timeout)

    def set_page_load_timeout(self, seconds: float) -> None:
        self.driver.set_page_load_timeout(seconds)

    # --- Page load ---

    def is_page_loaded(self) -> bool:
        """True once the body exists and document.readyState is 'complete'."""
        try:
            self.driver.find_element(By.TAG_NAME, "body")
        except TimeoutException as e:
            raise PageLoadTimeoutError(
                "This page timed out before it could finish loading. Please increase the timeout, "
                "ensure the page you are loading exists, or check your internet connection and try again.",
            ) from e
        return self.driver.execute_script("return document.readyState") == "complete"

    def wait_for_page_load(self, timeout: Optional[float] = None) -> bool:
        """
        Poll ``is_page_loaded`` until it is true.

        Raises:
            PageLoadTimeoutError: the page is not loaded within ``timeout`` seconds
        """
        wait_time = self.config.default_timeout if timeout is None else timeout
        self.set_page_load_timeout(wait_time)

        with ErrorContext("wait_for_page_load", timeout=wait_time):
            try:
                WebDriverWait(
                    self.driver,
                    wait_time,
                    poll_frequency=self.config.poll_interval,
                    ignored_exceptions=(),
                ).until(lambda _driver: self.is_page_loaded())
            except TimeoutException as e:
                logger.error(f"Page did not finish loading within {wait_time}s")
                raise PageLoadTimeoutError(
                    f"Page did not finish loading within {wait_time} seconds",
                    timeout_duration=wait_time,
                ) from e
        return True
