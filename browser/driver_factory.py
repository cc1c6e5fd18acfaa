#!/usr/bin/env python3

"""
WebDriver factory.

Creates a Selenium WebDriver for the configured browser and operating system:
a local driver (Chrome, Firefox, Edge, Safari, Internet Explorer) or, when
``remote_url`` is set, a Remote driver against a Selenium Grid or a cloud
provider URL. Selenium Manager resolves local driver binaries.
"""

# === CORE INFRASTRUCTURE ===
import logging

logger = logging.getLogger(__name__)

# === STANDARD LIBRARY IMPORTS ===
from typing import Any, Callable, Optional

# === THIRD-PARTY IMPORTS ===
from selenium import webdriver
from selenium.common.exceptions import WebDriverException
from selenium.webdriver.chrome.options import Options as ChromeOptions
from selenium.webdriver.edge.options import Options as EdgeOptions
from selenium.webdriver.firefox.options import Options as FirefoxOptions
from selenium.webdriver.ie.options import Options as IeOptions
from selenium.webdriver.remote.webdriver import WebDriver
from selenium.webdriver.safari.options import Options as SafariOptions

# === LOCAL IMPORTS ===
from browser.selenium_utils import close_tabs
from config.config_schema import SeleniumConfig
from core.exceptions import MissingConfigurationError, WebDriverError

_BROWSER_ALIASES = {"ie": "internetexplorer", "msedge": "edge", "microsoftedge": "edge"}
_OS_ALIASES = {"macintosh": "mac", "osx": "mac", "macos": "mac", "win": "windows"}

SUPPORTED_OS = frozenset({"linux", "mac", "windows"})

# Operating systems each browser can run on locally
BROWSER_OS_SUPPORT: dict[str, frozenset[str]] = {
    "chrome": SUPPORTED_OS,
    "firefox": SUPPORTED_OS,
    "edge": SUPPORTED_OS,
    "safari": frozenset({"mac"}),
    "internetexplorer": frozenset({"windows"}),
}

_CHROMIUM = frozenset({"chrome", "edge"})


def normalize_browser(name: str) -> str:
    """'Internet Explorer' -> 'internetexplorer', 'IE' -> 'internetexplorer', ' Chrome ' -> 'chrome'."""
    key = "".join(name.split()).lower()
    return _BROWSER_ALIASES.get(key, key)


def normalize_os(name: str) -> str:
    """'OS X', 'Macintosh' -> 'mac'; 'Win' -> 'windows'."""
    key = "".join(name.split()).lower()
    return _OS_ALIASES.get(key, key)


def resolve_target(browser: Optional[str], operating_system: Optional[str], remote: bool = False) -> tuple[str, str]:
    """
    Normalise and validate a browser/OS pair.

    Raises:
        MissingConfigurationError: browser or OS not configured (OS is optional for remote drivers)
        WebDriverError: unknown browser/OS, or a browser that cannot run on that OS
    """
    if not browser:
        logger.error("Browser must be set in the configuration file or the BROWSER environment variable")
        raise MissingConfigurationError(
            "Browser property must be set in the configuration file or via the BROWSER environment variable",
            missing_keys=["browser"],
        )
    if not operating_system and not remote:
        logger.error("OS must be set in the configuration file or the OS environment variable")
        raise MissingConfigurationError(
            "OS property must be set in the configuration file or via the OS environment variable",
            missing_keys=["os"],
        )

    browser_key = normalize_browser(browser)
    os_key = normalize_os(operating_system) if operating_system else ""

    if browser_key not in BROWSER_OS_SUPPORT:
        message = (
            f"Invalid browser type '{browser_key}' passed to the driver factory. "
            f"Valid options: {sorted(BROWSER_OS_SUPPORT)}"
        )
        logger.error(message)
        raise WebDriverError(message)
    if remote:
        return browser_key, os_key

    if os_key not in SUPPORTED_OS:
        message = (
            f"Invalid operating system '{os_key}' passed to the driver factory. "
            f"Valid options: {sorted(SUPPORTED_OS)}"
        )
        logger.error(message)
        raise WebDriverError(message)
    if os_key not in BROWSER_OS_SUPPORT[browser_key]:
        allowed = ", ".join(sorted(BROWSER_OS_SUPPORT[browser_key]))
        message = f"Invalid operating system '{os_key}' passed to the driver factory. {browser_key} can only be used with {allowed}."
        logger.error(message)
        raise WebDriverError(message)
    return browser_key, os_key


# --- Options ---


def _chromium_options(options: Any, config: SeleniumConfig) -> Any:
    options.add_argument("--no-sandbox")
    options.add_argument("--disable-dev-shm-usage")
    if config.headless:
        options.add_argument("--headless=new")
    dimensions = config.window_dimensions
    if dimensions:
        options.add_argument(f"--window-size={dimensions[0]},{dimensions[1]}")
    if config.download_dir:
        options.add_experimental_option(
            "prefs",
            {
                "download.default_directory": str(config.download_dir.resolve()),
                "download.prompt_for_download": False,
            },
        )
    return options


def _firefox_options(config: SeleniumConfig) -> FirefoxOptions:
    options = FirefoxOptions()
    if config.headless:
        options.add_argument("-headless")
    if config.download_dir:
        options.set_preference("browser.download.folderList", 2)
        options.set_preference("browser.download.dir", str(config.download_dir.resolve()))
    return options


def _ie_options(_config: SeleniumConfig) -> IeOptions:
    options = IeOptions()
    options.ignore_zoom_level = True
    return options


_OPTION_BUILDERS: dict[str, Callable[[SeleniumConfig], Any]] = {
    "chrome": lambda config: _chromium_options(ChromeOptions(), config),
    "edge": lambda config: _chromium_options(EdgeOptions(), config),
    "firefox": _firefox_options,
    "safari": lambda _config: SafariOptions(),
    "internetexplorer": _ie_options,
}


def build_options(browser: str, config: SeleniumConfig) -> Any:
    """Browser options for a normalised browser name."""
    return _OPTION_BUILDERS[browser](config)


_LOCAL_DRIVERS: dict[str, Callable[..., WebDriver]] = {
    "chrome": lambda options: webdriver.Chrome(options=options),
    "edge": lambda options: webdriver.Edge(options=options),
    "firefox": lambda options: webdriver.Firefox(options=options),
    "safari": lambda options: webdriver.Safari(options=options),
    "internetexplorer": lambda options: webdriver.Ie(options=options),
}


# --- Factory ---


def create_driver(config: SeleniumConfig) -> WebDriver:
    """
    Create and configure a WebDriver.

    Configuration problems raise WebDriverError / MissingConfigurationError.
    Selenium's own start-up failures propagate unchanged so callers can retry.
    """
    remote = bool(config.remote_url)
    browser, operating_system = resolve_target(config.browser, config.os, remote=remote)
    options = build_options(browser, config)

    if remote:
        if operating_system:
            options.set_capability("platformName", operating_system)
        logger.debug(f"Creating remote {browser} driver at {config.remote_url}")
        driver = webdriver.Remote(command_executor=config.remote_url, options=options)
    else:
        logger.debug(f"Creating local {browser} driver on {operating_system}")
        driver = _LOCAL_DRIVERS[browser](options)

    try:
        _configure_driver_post_init(driver, browser, config)
    except WebDriverException:
        logger.warning(f"Post-init configuration of {browser} failed; quitting the new driver")
        driver.quit()
        raise
    return driver


def _configure_driver_post_init(driver: WebDriver, browser: str, config: SeleniumConfig) -> None:
    """Apply timeouts and window size after creation."""
    driver.set_page_load_timeout(config.page_load_timeout)
    driver.implicitly_wait(config.implicit_wait)

    dimensions = config.window_dimensions
    if dimensions and browser not in _CHROMIUM:
        driver.set_window_size(*dimensions)

    if len(driver.window_handles) > 1:
        logger.debug(f"Multiple tabs ({len(driver.window_handles)}) detected immediately after init. Closing extras.")
        close_tabs(driver)

    logger.debug(f"WebDriver instance ({browser}) fully configured.")
