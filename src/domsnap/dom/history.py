"""History recorder — durable element records and their relocation in later trees.

A ``HistoryRecord`` keeps everything needed to recompute an element's
fingerprint without the tree it came from, so a step history can store it as
plain JSON and hand it back after the page has been re-snapshotted.

Be careful: text nodes can change even if elements stay the same, which is
why text is not part of the match.
"""

from __future__ import annotations

import dataclasses
from typing import Any, Mapping

from domsnap.dom.fingerprint import (
    ElementFingerprint,
    ancestor_path,
    fingerprint,
    fingerprint_from_parts,
    fingerprints_equal,
)
from domsnap.dom.selectors import enhanced_css_selector
from domsnap.dom.views import CoordinateSet, ElementNode, ViewportInfo


@dataclasses.dataclass(frozen=True)
class HistoryRecord:
    """Tree-independent snapshot of one element."""

    tag_name: str
    xpath: str
    highlight_index: int | None  # informational only, never used for matching
    entire_parent_branch_path: tuple[str, ...]
    attributes: dict[str, str]
    shadow_root: bool = False
    css_selector: str | None = None
    page_coordinates: CoordinateSet | None = None
    viewport_coordinates: CoordinateSet | None = None
    viewport_info: ViewportInfo | None = None

    @property
    def fingerprint(self) -> ElementFingerprint:
        return fingerprint_from_parts(self.entire_parent_branch_path, self.attributes, self.xpath)

    def __hash__(self) -> int:
        # attributes is a dict, so the generated field hash cannot be used
        return hash(self.fingerprint.digest)

    def to_dict(self) -> dict[str, Any]:
        return {
            "tag_name": self.tag_name,
            "xpath": self.xpath,
            "highlight_index": self.highlight_index,
            "entire_parent_branch_path": list(self.entire_parent_branch_path),
            "attributes": dict(self.attributes),
            "shadow_root": self.shadow_root,
            "css_selector": self.css_selector,
            "page_coordinates": self.page_coordinates.to_dict() if self.page_coordinates else None,
            "viewport_coordinates": self.viewport_coordinates.to_dict() if self.viewport_coordinates else None,
            "viewport_info": self.viewport_info.to_dict() if self.viewport_info else None,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> HistoryRecord:
        return cls(
            tag_name=data["tag_name"],
            xpath=data["xpath"],
            highlight_index=data.get("highlight_index"),
            entire_parent_branch_path=tuple(data.get("entire_parent_branch_path") or ()),
            attributes=dict(data.get("attributes") or {}),
            shadow_root=bool(data.get("shadow_root", False)),
            css_selector=data.get("css_selector"),
            page_coordinates=CoordinateSet.from_dict(data.get("page_coordinates")),
            viewport_coordinates=CoordinateSet.from_dict(data.get("viewport_coordinates")),
            viewport_info=ViewportInfo.from_dict(data.get("viewport_info")),
        )


def convert_dom_element_to_history_element(
    element: ElementNode,
    include_dynamic_attributes: bool = True,
) -> HistoryRecord:
    return HistoryRecord(
        tag_name=element.tag_name,
        xpath=element.xpath,
        highlight_index=element.highlight_index,
        entire_parent_branch_path=tuple(ancestor_path(element)),
        attributes=dict(element.attributes),
        shadow_root=element.shadow_root,
        css_selector=enhanced_css_selector(element, include_dynamic_attributes),
        page_coordinates=element.page_coordinates,
        viewport_coordinates=element.viewport_coordinates,
        viewport_info=element.viewport_info,
    )


def find_history_element_in_tree(record: HistoryRecord, tree: ElementNode) -> ElementNode | None:
    """Return the first indexed element in ``tree`` (pre-order) matching ``record``."""
    target = record.fingerprint
    for node in tree.iter_elements():
        if node.highlight_index is None:
            continue
        if fingerprints_equal(fingerprint(node), target):
            return node
    return None


def compare_history_element_and_dom_element(record: HistoryRecord, element: ElementNode) -> bool:
    return fingerprints_equal(record.fingerprint, fingerprint(element))
