"""Tree materializer — rebuilds the element tree from a flat page-walk map.

The page walk serializes the DOM into ``{"map": {id: node_data}, "rootId": id}``.
The producer emits children before their parents, so a single forward pass
can attach every child to its parent by looking it up among the nodes
already built. A child id that has not been seen yet is skipped; that drops
structure silently, so ``strict_children=True`` turns it into an error for
callers that want to catch producer bugs.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from domsnap.dom.views import (
    CoordinateSet,
    DOMNode,
    DOMState,
    ElementNode,
    SelectorMap,
    TextNode,
    ViewportInfo,
)
from domsnap.utils import time_execution

logger = logging.getLogger("domsnap.dom.materializer")


class MaterializationError(Exception):
    """Raised when a page-walk result cannot be turned into an element tree."""

    pass


def parse_node(node_data: Mapping[str, Any] | None) -> tuple[DOMNode | None, list[Any]]:
    """Build one node from its page-walk data; returns the node and its child ids."""
    if not node_data:
        return None, []

    if node_data.get("type") == "TEXT_NODE":
        text_node = TextNode(
            text=node_data.get("text", ""),
            is_visible=bool(node_data.get("isVisible", False)),
        )
        return text_node, []

    highlight_index = node_data.get("highlightIndex")
    element_node = ElementNode(
        tag_name=node_data["tagName"],
        xpath=node_data.get("xpath", ""),
        attributes=dict(node_data.get("attributes") or {}),
        children=[],
        is_visible=bool(node_data.get("isVisible", False)),
        is_interactive=bool(node_data.get("isInteractive", False)),
        is_top_element=bool(node_data.get("isTopElement", False)),
        is_in_viewport=bool(node_data.get("isInViewport", False)),
        shadow_root=bool(node_data.get("shadowRoot", False)),
        highlight_index=int(highlight_index) if highlight_index is not None else None,
        viewport_coordinates=CoordinateSet.from_dict(node_data.get("viewportCoordinates")),
        page_coordinates=CoordinateSet.from_dict(node_data.get("pageCoordinates")),
        viewport_info=ViewportInfo.from_dict(node_data.get("viewport")),
    )
    return element_node, list(node_data.get("children") or [])


@time_execution("--construct_dom_tree")
def materialize(eval_page: Mapping[str, Any], strict_children: bool = False) -> DOMState:
    """Build a DOMState from a page-walk result.

    Raises MaterializationError if a node entry is malformed, if the root is
    missing or is not an element, or, with ``strict_children``, if a node
    references a child that was not emitted before it.
    """
    js_node_map = eval_page.get("map") if isinstance(eval_page, Mapping) else None
    if not isinstance(js_node_map, Mapping):
        raise MaterializationError("Page walk result has no node map")
    js_root_id = eval_page.get("rootId")

    selector_map: SelectorMap = {}
    node_map: dict[str, DOMNode] = {}

    for node_id, node_data in js_node_map.items():
        try:
            node, children_ids = parse_node(node_data)
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            raise MaterializationError(f"Invalid node {node_id}: {exc!r}") from exc
        if node is None:
            continue

        node_map[str(node_id)] = node

        if not isinstance(node, ElementNode):
            continue

        if node.highlight_index is not None:
            selector_map[node.highlight_index] = node

        for child_id in children_ids:
            child_node = node_map.get(str(child_id))
            if child_node is None:
                if strict_children:
                    raise MaterializationError(
                        f"Node {node_id} references child {child_id} before it was emitted"
                    )
                logger.debug("Skipping child %s of node %s: not materialized yet", child_id, node_id)
                continue

            child_node.parent = node
            node.children.append(child_node)

    root = node_map.get(str(js_root_id))
    if not isinstance(root, ElementNode):
        raise MaterializationError(f"Failed to parse HTML to dictionary: root {js_root_id!r} is not an element")

    return DOMState(element_tree=root, selector_map=selector_map)


def empty_dom_state() -> DOMState:
    """The snapshot of a blank page: a bare, invisible body and no interactive elements."""
    body = ElementNode(
        tag_name="body",
        xpath="",
        attributes={},
        children=[],
        is_visible=False,
    )
    return DOMState(element_tree=body, selector_map={})
