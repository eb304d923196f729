"""domsnap - addressable DOM snapshots for browser agents.

Materializes a page's rendered DOM into an element tree, tracks interactive
elements across snapshots by structural fingerprint, and synthesizes CSS
selectors (across iframes) to find them again.
"""

__version__ = "0.1.0"

from domsnap.dom import (
    DOMState,
    ElementNode,
    HistoryRecord,
    MaterializationError,
    SnapshotDiffer,
    TextNode,
    enhanced_css_selector,
    materialize,
    xpath_to_css,
)

__all__ = [
    "DOMState",
    "ElementNode",
    "HistoryRecord",
    "MaterializationError",
    "SnapshotDiffer",
    "TextNode",
    "__version__",
    "enhanced_css_selector",
    "materialize",
    "xpath_to_css",
]
