"""Checkbox element."""

import logging

from browser.elements.page_element import PageElement

logger = logging.getLogger(__name__)


class Checkbox(PageElement):
    """A checkbox; check/uncheck only click when the state has to change."""

    def check(self) -> "Checkbox":
        if not self.is_selected():
            self.click()
            logger.debug(f"Checked '{self.name}'")
        return self

    def uncheck(self) -> "Checkbox":
        if self.is_selected():
            self.click()
            logger.debug(f"Unchecked '{self.name}'")
        return self
