#!/usr/bin/env python3

"""
Table model: memoised extraction of an HTML table.

Headers, rows and columns are read from the browser on first access and
cached until ``reset()``. Snapshots taken with ``store_table()`` are kept for
the lifetime of the table object so the same table can be compared across
pages or after an action.

Row extraction drops exactly one structural ``tr`` (the header row). Where a
table has no ``th`` cells, the header text comes from the row selected by
the table's ``HeaderFallback`` policy.
"""

# === CORE INFRASTRUCTURE ===
import logging

logger = logging.getLogger(__name__)

# === STANDARD LIBRARY IMPORTS ===
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Callable, Generic, Optional, TypeVar, Union

# === LOCAL IMPORTS ===
from browser.elements.page_element import PageElement
from browser.selectors import SelectorType
from browser.selenium_utils import ElementLocator, SeleniumElementLocator
from core.exceptions import NoSuchElementError, TableStructureError

T = TypeVar("T")

Row = list[Optional[str]]


class Lazy(Generic[T]):
    """A cached value that is either unloaded or loaded(value)."""

    __slots__ = ("_loaded", "_value")

    def __init__(self) -> None:
        self._loaded = False
        self._value: Optional[T] = None

    @property
    def loaded(self) -> bool:
        return self._loaded

    def get_or_create(self, factory: Callable[[], T]) -> T:
        """Return the cached value, building it with ``factory`` the first time."""
        if not self._loaded:
            self._value = factory()
            self._loaded = True
        return self._value  # type: ignore[return-value]

    def invalidate(self) -> None:
        self._loaded = False
        self._value = None


@dataclass
class TableCache:
    """Every cached field of a table; one ``invalidate()`` clears them all."""

    header_elements: Lazy[list[Any]] = field(default_factory=Lazy)
    headers: Lazy[list[Optional[str]]] = field(default_factory=Lazy)
    row_elements: Lazy[list[Any]] = field(default_factory=Lazy)
    rows: Lazy[list[Row]] = field(default_factory=Lazy)
    columns: Lazy[dict[Optional[str], Row]] = field(default_factory=Lazy)

    def invalidate(self) -> None:
        for cache_field in fields(self):
            getattr(self, cache_field.name).invalidate()


class HeaderFallback(Enum):
    """Where header text comes from when the table has no ``th`` cells."""

    # The structural first row holds the headers as td cells.
    FIRST_ROW = "first_row"
    # Headers are copied from the first data row, which also stays a data row.
    FIRST_DATA_ROW = "first_data_row"


class TableModel(PageElement):
    """Cached header/row/column view of a table element."""

    def __init__(
        self,
        selector_type: Union[str, SelectorType],
        selector_value: str,
        driver: Optional[Any] = None,
        name: Optional[str] = None,
        locator: Optional[ElementLocator] = None,
        header_fallback: HeaderFallback = HeaderFallback.FIRST_ROW,
        **kwargs: Any,
    ) -> None:
        super().__init__(selector_type, selector_value, driver=driver, name=name, **kwargs)
        self.locator: ElementLocator = locator or SeleniumElementLocator()
        self.header_fallback = header_fallback
        self._cache = TableCache()
        self._snapshots: dict[int, list[Row]] = {}

    # --- Cache lifecycle ---

    def reset(self) -> None:
        """Forget headers, rows, columns and element handles. Snapshots are kept."""
        self._cache.invalidate()
        logger.debug(f"Table '{self.name}' caches reset")

    # --- Headers ---

    def get_or_create_header_elements(self) -> list[Any]:
        header_elements = self._cache.header_elements.get_or_create(
            lambda: self.locator.find_all("th", self.element())
        )
        logger.debug(f"Number of header elements: {len(header_elements)}")
        return header_elements

    def table_headers_exist(self) -> bool:
        return len(self.get_or_create_header_elements()) > 0

    def get_or_create_headers(self) -> list[Optional[str]]:
        return self._cache.headers.get_or_create(self._read_headers)

    def _read_headers(self) -> list[Optional[str]]:
        headers = [self.locator.get_text(header) for header in self.get_or_create_header_elements()]
        if not headers:
            headers = self._fallback_headers()
        logger.debug(f"Headers: {headers}")
        return headers

    def _fallback_headers(self) -> list[Optional[str]]:
        if self.header_fallback is HeaderFallback.FIRST_DATA_ROW:
            rows = self.get_or_create_rows()
            return list(rows[0]) if rows else []

        row_elements = self.get_or_create_row_elements()
        if not row_elements:
            return []
        return [self.locator.get_text(cell) for cell in self.get_cells(row_elements[0])]

    # --- Rows ---

    def get_or_create_row_elements(self) -> list[Any]:
        return self._cache.row_elements.get_or_create(lambda: self.locator.find_all("tr", self.element()))

    def get_or_create_rows(self) -> list[Row]:
        return self._cache.rows.get_or_create(self._read_rows)

    def _read_rows(self) -> list[Row]:
        # The first tr is the header row
        data_rows = self.get_or_create_row_elements()[1:]
        rows = [[self.locator.get_text(cell) for cell in self.get_cells(row)] for row in data_rows]
        logger.debug(f"Rows data: {rows}")
        return rows

    def get_number_of_rows(self) -> int:
        return max(len(self.get_or_create_row_elements()) - 1, 0)

    def get_cells(self, row_element: Any) -> list[Any]:
        """The ``td`` cells of one row element."""
        return self.locator.find_all("td", row_element)

    # --- Columns ---

    def get_or_create_columns(self) -> dict[Optional[str], Row]:
        return self._cache.columns.get_or_create(self._read_columns)

    def _read_columns(self) -> dict[Optional[str], Row]:
        rows = self.get_or_create_rows()
        headers = self.get_or_create_headers()
        columns: dict[Optional[str], Row] = {}
        for index, header in enumerate(headers):
            cells: Row = []
            for row_index, row in enumerate(rows):
                if index >= len(row):
                    logger.error(
                        f"Row {row_index} of table '{self.name}' has {len(row)} cells "
                        f"but {len(headers)} headers: {headers}"
                    )
                    raise TableStructureError(
                        f"Row {row_index} has no cell for column '{header}' (index {index})",
                        row_index=row_index,
                        expected_cells=len(headers),
                        actual_cells=len(row),
                    )
                cells.append(row[index])
            columns[header] = cells
        logger.debug(f"Columns data: {columns}")
        return columns

    def get_number_of_columns(self) -> int:
        return len(self.get_or_create_headers())

    # --- Snapshots ---

    def store_table(self, page_number: int = 1) -> None:
        """Re-read the rows and keep a copy of them under ``page_number``."""
        self.reset()
        self._snapshots[page_number] = [list(row) for row in self.get_or_create_rows()]
        logger.debug(f"Stored {len(self._snapshots[page_number])} rows of '{self.name}' as page {page_number}")

    def get_stored_table(self, page_number: int = 1) -> list[Row]:
        if page_number not in self._snapshots:
            logger.error(f"No stored copy of table '{self.name}' for page {page_number}")
            raise NoSuchElementError(
                f"Table '{self.name}' has no stored copy for page {page_number}",
                element_name=self.name,
                context={"stored_pages": sorted(self._snapshots)},
            )
        return self._snapshots[page_number]

    def compare_with_stored_table(self, page_number: int = 1) -> bool:
        """Re-read the rows and compare them by value with the stored copy."""
        stored = self.get_stored_table(page_number)
        self.reset()
        current = self.get_or_create_rows()
        if current != stored:
            logger.debug(f"Table '{self.name}' differs from stored page {page_number}")
            return False
        return True
