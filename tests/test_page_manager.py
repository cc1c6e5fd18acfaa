import sys
from pathlib import Path

# Add project root to Python path to allow running script directly
sys.path.append(str(Path(__file__).parent.parent))

from unittest.mock import MagicMock

from selenium.common.exceptions import TimeoutException

from browser.elements.page_element import PageElement
from browser.page import Page, PageRegistry
from browser.page_manager import PageManager
from config.config_schema import SeleniumConfig
from core.browser_manager import BrowserManager
from core.exceptions import (
    NoSuchFrameError,
    NoSuchWindowError,
    PageLoadTimeoutError,
    PageNotFoundError,
    URLNotFoundError,
)
from testing.fakes import FakeWebDriver, FakeWebElement
from testing.test_framework import TestSuite, assert_raises, suppress_logging
from testing.test_utilities import create_standard_test_runner


class HomePage(Page):
    page_name = "Home Page"

    def define_elements(self) -> None:
        self.register_element("Search Box", PageElement("id", "q"))


def _manager(driver: FakeWebDriver = None, **config_overrides) -> tuple[PageManager, FakeWebDriver]:
    driver = driver or FakeWebDriver(children=[FakeWebElement("input", attributes={"id": "q"})])
    config = SeleniumConfig(poll_interval=0.01, default_timeout=2, **config_overrides)
    registry = PageRegistry()
    registry.register(HomePage)
    browser = BrowserManager(config, factory=lambda _config: driver)
    return PageManager(browser=browser, registry=registry), driver


# --- Pages ---


def test_get_page_before_set_raises():
    manager, _ = _manager()
    assert_raises(PageNotFoundError, manager.get_page)


def test_set_page_builds_once_and_caches():
    manager, driver = _manager()
    page = manager.set_page("home page")
    assert isinstance(page, HomePage)
    assert manager.get_page() is page
    assert manager.set_page("Home  Page") is page
    assert page.element("search box").driver is driver


def test_set_unknown_page():
    manager, _ = _manager()
    assert_raises(PageNotFoundError, manager.set_page, "Checkout")


# --- Navigation ---


def test_open_page_records_parent_window():
    manager, driver = _manager()
    assert manager.open_page("https://example.test/") == "window-0"
    assert manager.parent_handle == "window-0"
    assert driver.history == ["https://example.test/"]


def test_navigation_returns_current_page():
    manager, driver = _manager()
    page = manager.set_page("Home Page")
    assert manager.navigate_to("https://example.test/a") is page
    assert manager.navigate_back() is page
    assert manager.navigate_forward() is page
    assert manager.refresh() is page
    assert driver.calls[-3:] == ["back", "forward", "refresh"]


def test_quit_closes_browser_and_forgets_pages():
    manager, driver = _manager()
    manager.set_page("Home Page")
    manager.quit()
    assert driver.quit_called
    assert manager.parent_handle is None
    assert_raises(PageNotFoundError, manager.get_page)


# --- Windows & frames ---


def test_switch_to_new_window():
    manager, driver = _manager()
    manager.open_page("https://example.test/")
    driver.open_window("window-1")
    assert manager.switch_to_new_window() == "window-1"
    assert driver.current_window_handle == "window-1"

    assert manager.close_child_window() == "window-0"
    assert driver.current_window_handle == "window-0"
    assert driver.window_handles == ["window-0"]


def test_switch_to_new_window_needs_two_windows_and_a_parent():
    manager, driver = _manager()
    assert_raises(NoSuchWindowError, manager.switch_to_new_window)

    driver.open_window("window-1")
    assert_raises(NoSuchWindowError, manager.switch_to_new_window)


def test_switch_to_closed_window():
    manager, _ = _manager()
    assert_raises(NoSuchWindowError, manager.switch_to_window, "window-9")


def test_iframes():
    manager, driver = _manager(FakeWebDriver(children=[FakeWebElement("iframe")]))
    manager.switch_to_iframe()
    assert driver.switch_to.frames == [0]
    manager.switch_to_default_content()
    assert driver.switch_to.frames == []
    assert_raises(NoSuchFrameError, manager.switch_to_iframe, 1)


# --- URL & timeouts ---


def test_get_current_url():
    manager, driver = _manager()
    manager.open("https://example.test/home")
    assert manager.get_current_url() == "https://example.test/home"


def test_get_current_url_errors():
    manager, driver = _manager(FakeWebDriver(current_url=""))
    assert_raises(URLNotFoundError, manager.get_current_url)

    crashed = FakeWebDriver()
    crashed.fail_current_url = True
    manager, _ = _manager(crashed)
    assert_raises(URLNotFoundError, manager.get_current_url)


def test_timeouts():
    manager, driver = _manager()
    manager.set_timeout(4)
    assert driver.implicit_wait == 4
    manager.set_default_timeout()
    assert driver.implicit_wait == 2
    manager.set_page_load_timeout(15)
    assert driver.page_load_timeout == 15


# --- Page load ---


def test_wait_for_page_load_polls_until_complete():
    manager, driver = _manager(FakeWebDriver(ready_states=["loading", "interactive", "complete"]))
    assert manager.wait_for_page_load() is True
    assert driver.page_load_timeout == 2
    assert sum(1 for call in driver.calls if "readyState" in call) == 3


def test_wait_for_page_load_times_out():
    manager, _ = _manager(FakeWebDriver(ready_states=["loading"]))
    error = assert_raises(PageLoadTimeoutError, manager.wait_for_page_load, 0.05)
    assert error.timeout_duration == 0.05


def test_is_page_loaded_body_timeout():
    driver = MagicMock()
    driver.find_element.side_effect = TimeoutException("timed out")
    manager = PageManager(browser=BrowserManager(SeleniumConfig(), factory=lambda _config: driver))
    assert_raises(PageLoadTimeoutError, manager.is_page_loaded)


def page_manager_module_tests() -> bool:
    """Run tests for the page manager."""
    with suppress_logging():
        suite = TestSuite("Page Manager", __name__)
        suite.start_suite()

        suite.run_test("Page before set", test_get_page_before_set_raises, expected_outcome="PageNotFoundError")
        suite.run_test(
            "Set page",
            test_set_page_builds_once_and_caches,
            functions_tested="set_page, get_page, build_or_retrieve_page",
            expected_outcome="One page instance per name, bound to the session driver",
        )
        suite.run_test("Unknown page", test_set_unknown_page, expected_outcome="PageNotFoundError")
        suite.run_test("Open page", test_open_page_records_parent_window, functions_tested="open_page")
        suite.run_test(
            "Navigation",
            test_navigation_returns_current_page,
            functions_tested="navigate_to, navigate_back, navigate_forward, refresh",
        )
        suite.run_test("Quit", test_quit_closes_browser_and_forgets_pages, functions_tested="quit")
        suite.run_test(
            "New window",
            test_switch_to_new_window,
            functions_tested="switch_to_new_window, close_child_window",
            expected_outcome="Switch to the child and back to the parent",
        )
        suite.run_test(
            "New window preconditions",
            test_switch_to_new_window_needs_two_windows_and_a_parent,
            expected_outcome="NoSuchWindowError",
        )
        suite.run_test("Closed window", test_switch_to_closed_window, expected_outcome="NoSuchWindowError")
        suite.run_test("iFrames", test_iframes, functions_tested="switch_to_iframe, switch_to_default_content")
        suite.run_test("Current URL", test_get_current_url, functions_tested="get_current_url")
        suite.run_test("Current URL errors", test_get_current_url_errors, expected_outcome="URLNotFoundError")
        suite.run_test("Timeouts", test_timeouts, functions_tested="set_timeout, set_default_timeout, set_page_load_timeout")
        suite.run_test(
            "Wait for page load",
            test_wait_for_page_load_polls_until_complete,
            functions_tested="wait_for_page_load, is_page_loaded",
            method_description="readyState goes loading -> interactive -> complete",
            expected_outcome="True after three polls",
        )
        suite.run_test(
            "Page load timeout",
            test_wait_for_page_load_times_out,
            functions_tested="wait_for_page_load",
            expected_outcome="PageLoadTimeoutError carrying the timeout",
        )
        suite.run_test("Body lookup timeout", test_is_page_loaded_body_timeout, expected_outcome="PageLoadTimeoutError")

        return suite.finish_suite()


run_comprehensive_tests = create_standard_test_runner(page_manager_module_tests)


if __name__ == "__main__":
    sys.exit(0 if run_comprehensive_tests() else 1)
