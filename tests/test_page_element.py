import sys
from pathlib import Path

# Add project root to Python path to allow running script directly
sys.path.append(str(Path(__file__).parent.parent))

from unittest.mock import MagicMock

from selenium.common.exceptions import WebDriverException
from selenium.webdriver.common.by import By

from browser.elements.checkbox import Checkbox
from browser.elements.page_element import PageElement
from browser.selectors import Selector, SelectorType
from browser.selenium_utils import extract_text, is_browser_open, is_element_visible, scroll_to_element
from core.exceptions import BrowserSessionError, ElementNotVisibleError, NoSuchElementError, NoSuchSelectorError
from testing.fakes import FakeWebDriver, FakeWebElement
from testing.test_framework import TestSuite, assert_raises, suppress_logging
from testing.test_utilities import create_standard_test_runner


def _driver_with(*children: FakeWebElement) -> FakeWebDriver:
    return FakeWebDriver(children=list(children))


def test_selector_type_parsing():
    assert SelectorType.parse("css") is SelectorType.CSS
    assert SelectorType.parse("Class Name") is SelectorType.CLASS_NAME
    assert SelectorType.parse(" PARTIAL_TEXT ") is SelectorType.PARTIAL_TEXT
    assert SelectorType.parse(SelectorType.ID) is SelectorType.ID
    assert_raises(NoSuchSelectorError, SelectorType.parse, "jquery")


def test_selector_locators():
    assert Selector.of("css", "#login").to_locator() == (By.CSS_SELECTOR, "#login")
    assert Selector.of("text", "Sign in").to_locator() == (By.LINK_TEXT, "Sign in")
    assert Selector.of("partial text", "Sign").to_locator() == (By.PARTIAL_LINK_TEXT, "Sign")
    assert str(Selector.of("id", "user")) == "id=user"


def test_unbound_element_raises():
    element = PageElement("id", "user", name="username")
    error = assert_raises(BrowserSessionError, element.element)
    assert error.recovery_hint
    assert_raises(BrowserSessionError, element.does_exist)


def test_element_lookup_and_text():
    driver = _driver_with(FakeWebElement("span", "Welcome Ann", attributes={"id": "greeting", "title": "hi"}))
    element = PageElement("id", "greeting").bind(driver, name="greeting")
    assert element.name == "greeting"
    assert element.get_text() == "Welcome Ann"
    assert element.get_attribute("title") == "hi"
    assert element.does_exist() is True


def test_missing_element():
    element = PageElement("id", "nope", driver=_driver_with(), name="ghost")
    error = assert_raises(NoSuchElementError, element.element)
    assert error.element_name == "ghost"
    assert element.does_exist() is False

    broken = MagicMock()
    broken.find_elements.side_effect = WebDriverException("session gone")
    assert PageElement("id", "nope", driver=broken).does_exist() is False


def test_click_and_typing():
    button = FakeWebElement("button", "Go", attributes={"id": "go"})
    field = FakeWebElement("input", attributes={"name": "q", "value": "old"})
    driver = _driver_with(button, field)

    PageElement("id", "go", driver=driver).click()
    assert button.click_count == 1

    PageElement("name", "q", driver=driver).clear().send_keys("sentinel")
    assert field.clear_count == 1
    assert field.get_attribute("value") == "sentinel"


def test_hidden_or_disabled_element():
    driver = _driver_with(
        FakeWebElement("button", attributes={"id": "hidden"}, displayed=False),
        FakeWebElement("input", attributes={"id": "locked"}, enabled=False),
    )
    assert_raises(ElementNotVisibleError, PageElement("id", "hidden", driver=driver).click)
    assert_raises(ElementNotVisibleError, PageElement("id", "locked", driver=driver).send_keys, "x")


def test_wait_until_visible():
    banner = FakeWebElement("div", "Saved", attributes={"class": "banner"})
    driver = _driver_with(banner)
    assert PageElement("class name", "banner", driver=driver).wait_until_visible(timeout=1) is banner


def test_wait_until_visible_times_out():
    driver = _driver_with(FakeWebElement("div", attributes={"id": "spinner"}, displayed=False))
    element = PageElement("id", "spinner", driver=driver, timeout=0)
    error = assert_raises(ElementNotVisibleError, element.wait_until_visible)
    assert error.context["timeout"] == 0


def test_wait_until_clickable():
    save = FakeWebElement("button", "Save", attributes={"id": "save"})
    locked = FakeWebElement("button", "Delete", attributes={"id": "delete"}, enabled=False)
    driver = _driver_with(save, locked)
    assert PageElement("id", "save", driver=driver).wait_until_clickable(timeout=1) is save
    error = assert_raises(ElementNotVisibleError, PageElement("id", "delete", driver=driver).wait_until_clickable, 0)
    assert error.context["selector"] == "id=delete"


def test_checkbox_only_clicks_when_needed():
    box = FakeWebElement("input", attributes={"id": "agree", "type": "checkbox"})
    checkbox = Checkbox("id", "agree", driver=_driver_with(box))

    checkbox.check()
    checkbox.check()
    assert box.selected and box.click_count == 1

    checkbox.uncheck()
    checkbox.uncheck()
    assert not box.selected and box.click_count == 2


def test_selenium_helpers():
    assert extract_text(FakeWebElement("p", "text")) == "text"
    assert extract_text(None) == ""
    assert is_element_visible(FakeWebElement("p", displayed=False)) is False

    row = FakeWebElement("tr")
    driver = FakeWebDriver()
    scroll_to_element(driver, row)
    scroll_to_element(None, row)
    assert driver.calls == ["script:arguments[0].scrollIntoView(true);"]

    assert is_browser_open(driver) is True
    driver.fail_current_url = True
    assert is_browser_open(driver) is False


def page_element_module_tests() -> bool:
    """Run tests for selectors, page elements and checkboxes."""
    with suppress_logging():
        suite = TestSuite("Page Elements", __name__)
        suite.start_suite()

        suite.run_test(
            "Selector type parsing",
            test_selector_type_parsing,
            functions_tested="SelectorType.parse",
            expected_outcome="Case and spacing tolerant; unknown types raise NoSuchSelectorError",
        )
        suite.run_test("Selector locators", test_selector_locators, functions_tested="Selector.to_locator")
        suite.run_test("Unbound element", test_unbound_element_raises, expected_outcome="BrowserSessionError")
        suite.run_test(
            "Element lookup",
            test_element_lookup_and_text,
            functions_tested="bind, get_text, get_attribute, does_exist",
        )
        suite.run_test("Missing element", test_missing_element, expected_outcome="NoSuchElementError; does_exist False")
        suite.run_test("Click and type", test_click_and_typing, functions_tested="click, clear, send_keys")
        suite.run_test(
            "Hidden or disabled",
            test_hidden_or_disabled_element,
            expected_outcome="ElementNotVisibleError",
        )
        suite.run_test("Wait until visible", test_wait_until_visible, functions_tested="wait_until_visible")
        suite.run_test(
            "Wait times out",
            test_wait_until_visible_times_out,
            functions_tested="wait_until_visible",
            expected_outcome="ElementNotVisibleError after the timeout",
        )
        suite.run_test(
            "Wait until clickable",
            test_wait_until_clickable,
            functions_tested="wait_until_clickable",
            expected_outcome="Enabled element returned; disabled one times out",
        )
        suite.run_test(
            "Checkbox",
            test_checkbox_only_clicks_when_needed,
            functions_tested="Checkbox.check, Checkbox.uncheck",
            expected_outcome="One click per state change",
        )
        suite.run_test(
            "Selenium helpers",
            test_selenium_helpers,
            functions_tested="extract_text, is_element_visible, scroll_to_element, is_browser_open",
        )

        return suite.finish_suite()


run_comprehensive_tests = create_standard_test_runner(page_element_module_tests)


if __name__ == "__main__":
    sys.exit(0 if run_comprehensive_tests() else 1)
