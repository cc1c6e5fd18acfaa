"""Page element components: plain elements, checkboxes and tables."""

from browser.elements.checkbox import Checkbox
from browser.elements.page_element import PageElement
from browser.elements.table import Table
from browser.elements.table_model import HeaderFallback, Lazy, TableCache, TableModel

__all__ = [
    "Checkbox",
    "HeaderFallback",
    "Lazy",
    "PageElement",
    "Table",
    "TableCache",
    "TableModel",
]
