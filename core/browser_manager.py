#!/usr/bin/env python3

"""
Browser Manager - Owns the WebDriver lifecycle.

Starts the browser on first use (retrying Selenium start-up failures),
checks that the session is still responsive, and quits it at the end of the
run. The page manager gets its driver from here.
"""

# === CORE INFRASTRUCTURE ===
import logging

logger = logging.getLogger(__name__)

# === STANDARD LIBRARY IMPORTS ===
import time
from typing import Any, Callable, Optional

# === THIRD-PARTY IMPORTS ===
from selenium.common.exceptions import (
    InvalidSessionIdException,
    NoSuchWindowException,
    WebDriverException,
)
from selenium.webdriver.remote.webdriver import WebDriver

# === LOCAL IMPORTS ===
from browser.driver_factory import create_driver
from config.config_schema import SeleniumConfig
from core.exceptions import BrowserSessionError

DriverFactory = Callable[[SeleniumConfig], Any]


class BrowserManager:
    """Manages browser/WebDriver operations and state."""

    def __init__(self, config: Optional[SeleniumConfig] = None, factory: DriverFactory = create_driver) -> None:
        self.config = config or SeleniumConfig()
        self.factory = factory
        self._driver: Optional[WebDriver] = None
        self.driver_live: bool = False
        self.session_start_time: Optional[float] = None

        logger.debug("BrowserManager initialized")

    @property
    def driver(self) -> WebDriver:
        """The live driver, starting the browser if needed."""
        if not self.is_session_valid() and not self.start_browser():
            raise BrowserSessionError(
                f"Could not start {self.config.browser} after {max(self.config.max_retries, 1)} attempts",
                recovery_hint="Check the browser installation, or the remote_url when running against a grid",
            )
        return self._driver  # type: ignore[return-value]

    def attach(self, driver: Any) -> None:
        """Adopt an already created driver (e.g. one shared by a test fixture)."""
        self._driver = driver
        self.driver_live = True
        self.session_start_time = time.time()

    def start_browser(self) -> bool:
        """
        Start the browser session.

        Configuration errors (unknown browser, missing OS, ...) propagate;
        Selenium start-up failures are retried up to ``max_retries`` times.

        Returns:
            bool: True if browser started successfully, False otherwise
        """
        if self.is_session_valid():
            logger.debug("Browser already running and valid")
            return True

        if self._driver is not None:
            logger.debug("Quitting stale driver before starting a new session")
            self.close_browser()

        attempts = max(self.config.max_retries, 1)
        for attempt_num in range(1, attempts + 1):
            logger.debug(f"WebDriver initialization attempt {attempt_num}/{attempts}...")
            try:
                driver = self.factory(self.config)
            except WebDriverException as e:
                logger.warning(f"WebDriverException during init attempt {attempt_num}: {e.msg or e}")
            else:
                self.attach(driver)
                logger.debug(f"Browser ready ({self.config.browser}, attempt {attempt_num})")
                return True

            if attempt_num < attempts:
                logger.debug(f"Waiting {self.config.retry_delay} seconds before retrying initialization...")
                time.sleep(self.config.retry_delay)

        logger.critical(f"Failed to initialize WebDriver after {attempts} attempts.")
        return False

    def close_browser(self) -> None:
        """Quit the browser and reset state."""
        driver_to_close, self._driver = self._driver, None
        if driver_to_close is not None:
            try:
                driver_to_close.quit()
            except WebDriverException as e:
                logger.warning(f"Error quitting WebDriver: {e}")

        self.driver_live = False
        self.session_start_time = None
        logger.debug("Browser session closed")

    def is_session_valid(self) -> bool:
        """True when a driver exists and still answers."""
        if not self._driver or not self.driver_live:
            return False

        try:
            _ = self._driver.current_url
            return True
        except (InvalidSessionIdException, NoSuchWindowException, WebDriverException) as e:
            logger.debug(f"Browser session invalid, will restart: {type(e).__name__}")
            self.driver_live = False
            return False
