"""domsnap Snapshot Session — per-page snapshot state.

Owns the current snapshot of one page, the differ cache that flags new
elements between snapshots, and index-based access to the selector map.
Indices are only valid for the snapshot that produced them: every call to
``get_state()`` replaces the selector map wholesale.
"""

from __future__ import annotations

import dataclasses
import logging
from typing import TYPE_CHECKING

from domsnap.config import DomSnapConfig
from domsnap.dom.differ import SnapshotDiffer
from domsnap.dom.history import (
    HistoryRecord,
    convert_dom_element_to_history_element,
    find_history_element_in_tree,
)
from domsnap.dom.views import ElementNode, SelectorMap
from domsnap.engine.dom_service import DomService
from domsnap.engine.locator import ElementLocator
from domsnap.utils import time_execution

if TYPE_CHECKING:
    from playwright.sync_api import Locator, Page

logger = logging.getLogger("domsnap.engine.session")


class SessionNotInitializedError(Exception):
    """Raised when an operation needs a snapshot but none has been taken yet."""

    pass


@dataclasses.dataclass
class BrowserState:
    """The page as seen by the most recent snapshot."""

    url: str
    title: str
    element_tree: ElementNode
    selector_map: SelectorMap


class SnapshotSession:
    """Takes snapshots of one page and resolves their indices.

    Snapshot requests for the same page must be serialized by the caller.
    """

    def __init__(self, page: Page, config: DomSnapConfig | None = None) -> None:
        self._page = page
        self._config = config or DomSnapConfig()
        self._dom_service = DomService(page, self._config)
        self._locator = ElementLocator(page, self._config.include_dynamic_attributes)
        self._differ = SnapshotDiffer()
        self._state: BrowserState | None = None

    @property
    def state(self) -> BrowserState | None:
        return self._state

    @property
    def differ(self) -> SnapshotDiffer:
        return self._differ

    def require_state(self) -> BrowserState:
        if self._state is None:
            raise SessionNotInitializedError("No snapshot taken yet; call get_state() first")
        return self._state

    # -- Snapshots -----------------------------------------------------------

    @time_execution("--get_state")
    def get_state(self, cache_clickable_elements_hashes: bool = True) -> BrowserState:
        """Snapshot the page.

        With ``cache_clickable_elements_hashes`` the differ flags elements
        that were not present in the previous snapshot of the same URL,
        which lets a prompt point out only what changed.
        """
        dom_state = self._dom_service.get_clickable_elements()
        url = self._page.url

        if cache_clickable_elements_hashes:
            self._differ.update(dom_state.element_tree, url)

        try:
            title = self._page.title()
        except Exception as exc:
            logger.debug("Could not read title of %s: %s", url, exc)
            title = ""

        self._state = BrowserState(
            url=url,
            title=title,
            element_tree=dom_state.element_tree,
            selector_map=dom_state.selector_map,
        )
        logger.info("Snapshot of %s: %d interactive elements", url, len(dom_state.selector_map))
        return self._state

    def render(self, include_attributes: list[str] | None = None) -> str:
        """Prompt rendering of the current snapshot's interactive elements."""
        state = self.require_state()
        if include_attributes is None:
            include_attributes = self._config.include_attributes
        return state.element_tree.clickable_elements_to_string(include_attributes)

    # -- Index access --------------------------------------------------------

    def get_selector_map(self) -> SelectorMap:
        if self._state is None:
            return {}
        return self._state.selector_map

    def get_dom_element_by_index(self, index: int) -> ElementNode:
        """Raises KeyError if ``index`` is not in the current selector map."""
        state = self.require_state()
        return state.selector_map[index]

    def get_element_by_index(self, index: int) -> Locator | None:
        element = self.get_selector_map().get(index)
        if element is None:
            return None
        return self._locator.locate_element(element)

    # -- History -------------------------------------------------------------

    def record_element(self, index: int) -> HistoryRecord:
        element = self.get_dom_element_by_index(index)
        return convert_dom_element_to_history_element(element, self._config.include_dynamic_attributes)

    def relocate(self, record: HistoryRecord) -> ElementNode | None:
        """Find the element described by ``record`` in the current snapshot."""
        state = self.require_state()
        element = find_history_element_in_tree(record, state.element_tree)
        if element is None:
            logger.debug("Recorded <%s> at %s not found on %s", record.tag_name, record.xpath, state.url)
        return element
