"""domsnap DOM Service — runs the page walk in a Playwright page.

Injects the bundled page-walk script, which serializes the rendered DOM into
a flat node map, and hands the result to the materializer. Blank and new-tab
pages are short-circuited without touching the page.
"""

from __future__ import annotations

import json
import logging
from importlib import resources
from typing import TYPE_CHECKING, Any
from urllib.parse import urlparse

from domsnap.config import DomSnapConfig
from domsnap.dom.materializer import empty_dom_state, materialize
from domsnap.dom.views import DOMState
from domsnap.models import AD_HOST_FRAGMENTS
from domsnap.utils import is_new_tab_page, time_execution

if TYPE_CHECKING:
    from playwright.sync_api import Page

logger = logging.getLogger("domsnap.engine.dom_service")


class DomServiceError(Exception):
    """Raised when the page cannot run the page-walk script."""

    pass


def _load_page_walk_script() -> str:
    js_code = resources.files("domsnap.dom").joinpath("page_walk.js").read_text(encoding="utf-8").strip()
    if js_code.endswith(";"):
        js_code = js_code[:-1]
    return js_code


class DomService:
    """Snapshots the DOM of one Playwright page."""

    def __init__(self, page: Page, config: DomSnapConfig | None = None) -> None:
        self._page = page
        self._config = config or DomSnapConfig()
        self._js_code = _load_page_walk_script()

    @time_execution("--get_clickable_elements")
    def get_clickable_elements(
        self,
        highlight_elements: bool | None = None,
        focus_element: int = -1,
        viewport_expansion: int | None = None,
    ) -> DOMState:
        """Take a fresh snapshot. Unset arguments fall back to the config."""
        if highlight_elements is None:
            highlight_elements = self._config.highlight_elements
        if viewport_expansion is None:
            viewport_expansion = self._config.viewport_expansion
        return self._build_dom_tree(highlight_elements, focus_element, viewport_expansion)

    @time_execution("--build_dom_tree")
    def _build_dom_tree(
        self,
        highlight_elements: bool,
        focus_element: int,
        viewport_expansion: int,
    ) -> DOMState:
        if self._page.evaluate("1+1") != 2:
            raise DomServiceError("The page cannot evaluate javascript code properly")

        url = self._page.url
        if is_new_tab_page(url):
            # No need to inject the walker into an empty tab
            logger.debug("Skipping page walk for blank page %s", url)
            return empty_dom_state()

        debug_mode = logger.getEffectiveLevel() == logging.DEBUG
        args = {
            "doHighlightElements": highlight_elements,
            "focusHighlightIndex": focus_element,
            "viewportExpansion": viewport_expansion,
            "debugMode": debug_mode,
        }

        try:
            eval_page: dict[str, Any] = self._page.evaluate(self._js_code, args)
        except Exception as exc:
            logger.error("Error evaluating page-walk script on %s: %s", url, exc)
            raise

        if debug_mode and isinstance(eval_page, dict) and "perfMetrics" in eval_page:
            logger.debug(
                "DOM tree building performance metrics for %s\n%s",
                url,
                json.dumps(eval_page["perfMetrics"], indent=2),
            )

        return materialize(eval_page, strict_children=self._config.strict_children)

    @time_execution("--get_cross_origin_iframes")
    def get_cross_origin_iframes(self) -> list[str]:
        """URLs of visible cross-origin frames that are not ad or tracker frames."""
        # invisible cross-origin iframes are used for ads and tracking, dont open those
        hidden_frame_urls = self._page.locator("iframe").filter(visible=False).evaluate_all("e => e.map(e => e.src)")
        page_host = urlparse(self._page.url).hostname

        urls: list[str] = []
        for frame in self._page.frames:
            frame_host = urlparse(frame.url).hostname
            if not frame_host:  # data: urls and about:blank
                continue
            if frame_host == page_host:
                continue
            if frame.url in hidden_frame_urls:
                continue
            if any(fragment in frame_host for fragment in AD_HOST_FRAGMENTS):
                continue
            urls.append(frame.url)
        return urls
