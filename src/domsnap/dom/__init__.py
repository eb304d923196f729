"""domsnap DOM core — snapshot tree, fingerprints, selectors, diffing and history.

- views: ElementNode / TextNode tree, DOMState and the prompt rendering
- materializer: flat page-walk map -> DOMState
- fingerprint: structural hashes used for identity across snapshots
- selectors: xpath -> CSS conversion and frame-scoped selector chains
- differ: marks interactive elements that are new since the last snapshot
- history: durable element records and their relocation in later trees

Everything here is pure and synchronous; browser I/O lives in domsnap.engine.
"""

from domsnap.dom.differ import SnapshotDiffer, clickable_element_hashes, clickable_elements
from domsnap.dom.fingerprint import ElementFingerprint, ancestor_path, fingerprint, fingerprints_equal
from domsnap.dom.history import (
    HistoryRecord,
    compare_history_element_and_dom_element,
    convert_dom_element_to_history_element,
    find_history_element_in_tree,
)
from domsnap.dom.materializer import MaterializationError, empty_dom_state, materialize
from domsnap.dom.selectors import FrameSelectorChain, enhanced_css_selector, frame_selector_chain, xpath_to_css
from domsnap.dom.views import DOMState, ElementNode, SelectorMap, TextNode

__all__ = [
    "DOMState",
    "ElementFingerprint",
    "ElementNode",
    "FrameSelectorChain",
    "HistoryRecord",
    "MaterializationError",
    "SelectorMap",
    "SnapshotDiffer",
    "TextNode",
    "ancestor_path",
    "clickable_element_hashes",
    "clickable_elements",
    "compare_history_element_and_dom_element",
    "convert_dom_element_to_history_element",
    "empty_dom_state",
    "enhanced_css_selector",
    "find_history_element_in_tree",
    "fingerprint",
    "fingerprints_equal",
    "frame_selector_chain",
    "materialize",
    "xpath_to_css",
]
