#!/usr/bin/env python3

"""
Element selectors.

A selector is the (kind, value) pair a page element is declared with, e.g.
``Selector(SelectorType.ID, "login")``. ``to_locator`` turns it into the
``(By, value)`` tuple Selenium's find methods and expected conditions take.
"""

# === CORE INFRASTRUCTURE ===
import logging

logger = logging.getLogger(__name__)

# === STANDARD LIBRARY IMPORTS ===
from dataclasses import dataclass
from enum import Enum
from typing import Union

# === THIRD-PARTY IMPORTS ===
from selenium.webdriver.common.by import By

# === LOCAL IMPORTS ===
from core.exceptions import NoSuchSelectorError


class SelectorType(Enum):
    """Supported ways of locating an element."""

    CSS = "css"
    ID = "id"
    NAME = "name"
    TEXT = "text"
    XPATH = "xpath"
    CLASS_NAME = "class_name"
    TAG_NAME = "tag_name"
    PARTIAL_TEXT = "partial_text"

    @classmethod
    def parse(cls, value: Union[str, "SelectorType"]) -> "SelectorType":
        """Parse 'css', 'Class Name', 'PARTIAL_TEXT', ... into a SelectorType."""
        if isinstance(value, SelectorType):
            return value
        key = "_".join(str(value).strip().lower().split())
        for member in cls:
            if member.value == key:
                return member
        logger.error(f"Unsupported selector type: {value!r}")
        raise NoSuchSelectorError(
            f"Selector type '{value}' is not supported",
            context={"supported": [member.value for member in cls]},
        )

    @property
    def by(self) -> str:
        return _BY_MAP[self]


_BY_MAP: dict[SelectorType, str] = {
    SelectorType.CSS: By.CSS_SELECTOR,
    SelectorType.ID: By.ID,
    SelectorType.NAME: By.NAME,
    SelectorType.TEXT: By.LINK_TEXT,
    SelectorType.XPATH: By.XPATH,
    SelectorType.CLASS_NAME: By.CLASS_NAME,
    SelectorType.TAG_NAME: By.TAG_NAME,
    SelectorType.PARTIAL_TEXT: By.PARTIAL_LINK_TEXT,
}


@dataclass(frozen=True)
class Selector:
    selector_type: SelectorType
    value: str

    @classmethod
    def of(cls, selector_type: Union[str, SelectorType], value: str) -> "Selector":
        return cls(SelectorType.parse(selector_type), value)

    def to_locator(self) -> tuple[str, str]:
        return (self.selector_type.by, self.value)

    def __str__(self) -> str:
        return f"{self.selector_type.value}={self.value}"
