"""Browser Automation Package.

Provides the page-object layer over Selenium WebDriver:
- selenium_utils: element-locator contract and WebDriver helpers
- selectors: selector types and Selenium locator mapping
- elements: page element, checkbox and table components
- page: page objects and the page registry
- page_manager: page-load waiting, navigation, windows and frames
- driver_factory: WebDriver creation for local and remote browsers
"""

_SUBMODULES = frozenset(["driver_factory", "elements", "page", "page_manager", "selectors", "selenium_utils"])


def __getattr__(name: str):
    """Lazy import submodules on attribute access."""
    if name in _SUBMODULES:
        import importlib

        return importlib.import_module(f".{name}", __name__)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def __dir__() -> list[str]:
    """List available submodules."""
    return list(_SUBMODULES)
