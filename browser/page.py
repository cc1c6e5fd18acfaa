#!/usr/bin/env python3

"""
Page objects and the page registry.

A page subclass declares its elements in ``define_elements()``:

    @register_page
    class LoginPage(Page):
        page_name = "Login Page"

        def define_elements(self) -> None:
            self.register_element("username", PageElement("id", "user"))
            self.register_element("results table", Table("css", "table.results"))

Step definitions then look elements up by the phrase used in the feature
file: ``page.element("Results Table")``. Pages are found by name in a
``PageRegistry`` filled when the page modules are imported.
"""

# === CORE INFRASTRUCTURE ===
import logging

logger = logging.getLogger(__name__)

# === STANDARD LIBRARY IMPORTS ===
from typing import Any, Callable, ClassVar, Optional, TypeVar

# === LOCAL IMPORTS ===
from browser.elements.checkbox import Checkbox
from browser.elements.page_element import PageElement
from browser.elements.table import Table
from core.action_registry import ActionRegistry, normalize_name
from core.exceptions import NoSuchElementError, PageNotFoundError

P = TypeVar("P", bound="Page")
ElementT = TypeVar("ElementT", bound=PageElement)


class Page:
    """Base page object holding named, driver-bound elements."""

    page_name: ClassVar[Optional[str]] = None

    def __init__(self, driver: Any) -> None:
        self.driver = driver
        self.name = self.page_name or type(self).__name__
        self._elements: dict[str, PageElement] = {}
        self.define_elements()

    def define_elements(self) -> None:
        """Register this page's elements. Subclasses override."""

    def register_element(self, name: str, element: ElementT) -> ElementT:
        key = normalize_name(name)
        if key in self._elements:
            raise ValueError(f"Element '{key}' already registered on page '{self.name}'")
        self._elements[key] = element.bind(self.driver, name=name)
        return element

    def element(self, name: str) -> PageElement:
        """Get an element by its human-readable name."""
        key = normalize_name(name)
        element = self._elements.get(key)
        if element is None:
            logger.error(f"Element '{key}' is not defined on page '{self.name}'. Known: {sorted(self._elements)}")
            raise NoSuchElementError(
                f"Element '{name}' is not defined on page '{self.name}'",
                element_name=key,
                context={"page": self.name},
            )
        return element

    def table(self, name: str) -> Table:
        return self._typed(name, Table)

    def checkbox(self, name: str) -> Checkbox:
        return self._typed(name, Checkbox)

    def _typed(self, name: str, kind: type[ElementT]) -> ElementT:
        element = self.element(name)
        if not isinstance(element, kind):
            logger.error(f"Element '{name}' on page '{self.name}' is a {type(element).__name__}, not a {kind.__name__}")
            raise NoSuchElementError(
                f"Element '{name}' on page '{self.name}' is not a {kind.__name__}",
                element_name=normalize_name(name),
            )
        return element

    def element_names(self) -> list[str]:
        return list(self._elements)

    def get_current_url(self) -> str:
        return self.driver.current_url

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, elements={len(self._elements)})"


class PageRegistry:
    """Explicit mapping of page name -> Page subclass."""

    def __init__(self) -> None:
        self._pages: ActionRegistry[Page] = ActionRegistry(kind="page")

    def register(self, page_cls: type[P], name: Optional[str] = None) -> type[P]:
        page_name = name or page_cls.page_name or page_cls.__name__
        self._pages.register(page_name, page_cls)
        return page_cls

    def page(self, name: Optional[str] = None) -> Callable[[type[P]], type[P]]:
        """Decorator form of ``register``."""

        def decorator(page_cls: type[P]) -> type[P]:
            return self.register(page_cls, name)

        return decorator

    def build(self, name: str, driver: Any) -> Page:
        """Build a new instance of the page registered as ``name``."""
        page = self._pages.create(name, driver)
        if page is None:
            logger.error(f"Page '{normalize_name(name)}' is not registered. Known pages: {self._pages.names()}")
            raise PageNotFoundError(
                f"We could not find the page '{name}'. Make sure its module is imported and the class registered.",
                page_name=name,
            )
        logger.debug(f"Built page '{page.name}'")
        return page

    def names(self) -> list[str]:
        return self._pages.names()

    def __contains__(self, name: object) -> bool:
        return name in self._pages

    def __len__(self) -> int:
        return len(self._pages)


# Default registry used by the @register_page decorator
page_registry = PageRegistry()


def register_page(page_cls: type[P]) -> type[P]:
    """Register a page class in the default registry."""
    return page_registry.register(page_cls)
