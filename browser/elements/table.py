#!/usr/bin/env python3

"""
Table element: verification queries over a TableModel.

All checks use substring containment, matching how test steps phrase them
("the Status column contains Active"). A uniqueness check counts, for every
cell, how many cells contain it; a cell is counted against itself, so any
count above one means the column (or row combination) is not unique.
"""

# === CORE INFRASTRUCTURE ===
import logging

logger = logging.getLogger(__name__)

# === STANDARD LIBRARY IMPORTS ===
from typing import Any, Optional, Sequence, Union

# === THIRD-PARTY IMPORTS ===
from selenium.common.exceptions import NoSuchElementException

# === LOCAL IMPORTS ===
from browser.elements.table_model import HeaderFallback, Lazy, Row, TableCache, TableModel
from browser.selenium_utils import xpath_literal
from core.exceptions import NoSuchColumnError, NoSuchElementError, NullCellError, TableStructureError

ROW_HEADER_SEPARATOR = ", "


def _count_containing(values: Sequence[str], value: str) -> int:
    return sum(1 for other in values if value in other)


class Table(TableModel):
    """A page table with column/row verification helpers."""

    # --- Column checks ---

    def verify_column_exists(self, column_name: str) -> bool:
        """True when any header contains ``column_name``."""
        return any(header is not None and column_name in header for header in self.get_or_create_headers())

    def verify_column_cells_contain(self, column_header: str, text_to_match: str) -> bool:
        """True when every cell of the column contains ``text_to_match``."""
        column = self._column(column_header, text_to_match)
        for cell in column:
            if cell is None:
                logger.error(f"Header text: {column_header} | Cell data: None | Text to match: {text_to_match}")
                raise NullCellError(f"Column '{column_header}' has a cell with no text", column_header=column_header)
            if text_to_match not in cell:
                logger.error(
                    f"False result returned. Header text: {column_header} | Cell data: {cell} "
                    f"| Text to match: {text_to_match}"
                )
                return False
        return True

    def verify_column_cells_are_unique(self, column_header: str) -> bool:
        """True when no cell of the column is contained in another cell of it."""
        if not self.verify_column_exists(column_header):
            logger.error(f'Column header "{column_header}" does not exist.')
            raise NoSuchColumnError(f'Column header "{column_header}" does not exist.', column_header=column_header)

        column = self._column(column_header)
        if not column:
            logger.error(f"Column '{column_header}' has no cells to compare")
            raise NoSuchColumnError(f'Column header "{column_header}" does not exist.', column_header=column_header)

        for cell in column:
            if cell is None:
                logger.error(f"Null cell in column. Header text: {column_header}")
                raise NullCellError(f"Column '{column_header}' has a cell with no text", column_header=column_header)
        values: list[str] = [cell for cell in column if cell is not None]
        for cell in values:
            if _count_containing(values, cell) > 1:
                logger.error(f"False result returned. Header text: {column_header} | Cell data: {cell}")
                return False
        return True

    def _column(self, column_header: str, text_to_match: Optional[str] = None) -> Row:
        column = self.get_or_create_columns().get(column_header)
        if column is None:
            logger.error(f"Column does not exist. Header text: {column_header} | Text to match: {text_to_match}")
            raise NoSuchColumnError(f'Column header "{column_header}" does not exist.', column_header=column_header)
        return column

    # --- Row checks ---

    def verify_row_cells_are_unique(self, column_headers: Union[str, Sequence[str]]) -> bool:
        """
        True when the combined cells of the given columns are unique per row.

        ``column_headers`` is a list of header names or one string of names
        separated by ", " (as written in a feature file).
        """
        if isinstance(column_headers, str):
            column_headers = column_headers.split(ROW_HEADER_SEPARATOR)

        indexes = [self._header_index(header) for header in column_headers]
        rows = self.get_or_create_rows()

        combined = [self._combined_cells(indexes, row, row_index) for row_index, row in enumerate(rows)]
        for value in combined:
            if _count_containing(combined, value) > 1:
                logger.debug(f"False result returned. Header indexes: {indexes} | Cell data: {value}")
                return False
        return True

    def _header_index(self, column_header: str) -> int:
        if not self.verify_column_exists(column_header):
            logger.error(f'Column header "{column_header}" does not exist.')
            raise NoSuchColumnError(f'Column header "{column_header}" does not exist.', column_header=column_header)

        headers = self.get_or_create_headers()
        for index, header in enumerate(headers):
            if header == column_header:
                return index
        # verify_column_exists guarantees a containing header
        return next(
            index for index, header in enumerate(headers) if header is not None and column_header in header
        )

    def _combined_cells(self, indexes: Sequence[int], row: Row, row_index: int) -> str:
        parts: list[str] = []
        for index in indexes:
            if index >= len(row):
                logger.error(f"Row {row_index} has {len(row)} cells, cannot read cell {index}")
                raise TableStructureError(
                    f"Row {row_index} has no cell at index {index}",
                    row_index=row_index,
                    expected_cells=index + 1,
                    actual_cells=len(row),
                )
            cell = row[index]
            if cell is None:
                logger.error(f"Null cell in row {row_index} at index {index}")
                raise NullCellError(f"Row {row_index} has a cell with no text at index {index}")
            parts.append(cell)
        return "".join(parts)

    # --- Cross-row lookups ---

    def get_element_in_row_that_contains(self, element_text: str, text_to_match: str) -> Any:
        """Find an element containing ``text_to_match`` in the row whose cell contains ``element_text``."""
        xpath = (
            f".//td[contains(text(), {xpath_literal(element_text)})]"
            f"/..//*[contains(text(), {xpath_literal(text_to_match)})]"
        )
        try:
            return self.locator.find_by_xpath(xpath, self.element())
        except NoSuchElementException as e:
            error_msg = f"{text_to_match} not found in {element_text} Error: {e.msg}"
            logger.error(error_msg)
            raise NoSuchElementError(error_msg, element_name=self.name, context={"xpath": xpath}) from e

    def click_element_in_row_that_contains(self, element_text: str, text_to_click: str) -> None:
        self.get_element_in_row_that_contains(element_text, text_to_click).click()


__all__ = ["HeaderFallback", "Lazy", "Table", "TableCache", "TableModel"]
