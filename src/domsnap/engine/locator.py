"""domsnap Element Locator — turns snapshot elements back into live Playwright handles.

Elements inside iframes are reached by narrowing into each enclosing frame
with ``frame_locator()`` before applying the element's own selector, since a
single CSS selector cannot cross a frame boundary.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from domsnap.dom.selectors import frame_selector_chain
from domsnap.dom.views import ElementNode
from domsnap.utils import time_execution

if TYPE_CHECKING:
    from playwright.sync_api import ElementHandle, Locator, Page

logger = logging.getLogger("domsnap.engine.locator")


class ElementLocator:
    """Resolves snapshot elements, xpaths and CSS selectors against a page."""

    def __init__(self, page: Page, include_dynamic_attributes: bool = True) -> None:
        self._page = page
        self._include_dynamic_attributes = include_dynamic_attributes

    @time_execution("--locate_element")
    def locate_element(self, element: ElementNode) -> Locator | None:
        """Return a locator for ``element``, or None if nothing on the page matches."""
        chain = frame_selector_chain(element, self._include_dynamic_attributes)

        scope: Any = self._page
        for frame_selector in chain.frames:
            scope = scope.frame_locator(frame_selector)

        try:
            locator = scope.locator(chain.target).first
            if locator.count() == 0:
                logger.debug("No match for %s (frames: %s)", chain.target, list(chain.frames))
                return None
            return locator
        except Exception as exc:
            logger.error("Failed to locate element %s: %s", chain.target, exc)
            return None

    @time_execution("--locate_by_xpath")
    def locate_by_xpath(self, xpath: str) -> ElementHandle | None:
        """Locate an element in the top-level document by xpath."""
        return self._query(f"xpath={xpath}")

    @time_execution("--locate_by_css_selector")
    def locate_by_css_selector(self, css_selector: str) -> ElementHandle | None:
        """Locate an element in the top-level document by CSS selector."""
        return self._query(css_selector)

    def _query(self, selector: str) -> ElementHandle | None:
        try:
            element_handle = self._page.query_selector(selector)
            if element_handle is None:
                return None
            if not element_handle.is_hidden():
                element_handle.scroll_into_view_if_needed()
            return element_handle
        except Exception as exc:
            logger.error("Failed to locate element by %s: %s", selector, exc)
            return None
