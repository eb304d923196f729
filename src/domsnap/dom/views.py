"""DOM snapshot data model.

``ElementNode`` owns its children; ``parent`` is a plain back-reference used
for lookups (ancestor paths, frame chains) and never for lifetime. Nodes
compare by identity: two snapshots of the same page produce distinct objects,
and structural sameness is expressed through fingerprints instead.
"""

from __future__ import annotations

import dataclasses
from typing import Any, Iterator, Mapping, Union

from domsnap.dom.fingerprint import ElementFingerprint, fingerprint


# -- Geometry ----------------------------------------------------------------


@dataclasses.dataclass
class Coordinates:
    x: int
    y: int

    def to_dict(self) -> dict[str, int]:
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> Coordinates:
        data = data or {}
        return cls(x=int(float(data.get("x", 0))), y=int(float(data.get("y", 0))))


@dataclasses.dataclass
class CoordinateSet:
    """Corner, center and size of an element's bounding box."""

    top_left: Coordinates
    top_right: Coordinates
    bottom_left: Coordinates
    bottom_right: Coordinates
    center: Coordinates
    width: int
    height: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "top_left": self.top_left.to_dict(),
            "top_right": self.top_right.to_dict(),
            "bottom_left": self.bottom_left.to_dict(),
            "bottom_right": self.bottom_right.to_dict(),
            "center": self.center.to_dict(),
            "width": self.width,
            "height": self.height,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> CoordinateSet | None:
        """Parse a coordinate set; accepts both camelCase and snake_case keys."""
        if not isinstance(data, Mapping):
            return None
        return cls(
            top_left=Coordinates.from_dict(data.get("topLeft") or data.get("top_left")),
            top_right=Coordinates.from_dict(data.get("topRight") or data.get("top_right")),
            bottom_left=Coordinates.from_dict(data.get("bottomLeft") or data.get("bottom_left")),
            bottom_right=Coordinates.from_dict(data.get("bottomRight") or data.get("bottom_right")),
            center=Coordinates.from_dict(data.get("center")),
            width=int(float(data.get("width", 0))),
            height=int(float(data.get("height", 0))),
        )


@dataclasses.dataclass
class ViewportInfo:
    width: int
    height: int
    scroll_x: int | None = None
    scroll_y: int | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"width": self.width, "height": self.height}
        if self.scroll_x is not None:
            data["scroll_x"] = self.scroll_x
        if self.scroll_y is not None:
            data["scroll_y"] = self.scroll_y
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> ViewportInfo | None:
        if not isinstance(data, Mapping):
            return None
        scroll_x = data.get("scrollX", data.get("scroll_x"))
        scroll_y = data.get("scrollY", data.get("scroll_y"))
        return cls(
            width=int(data.get("width") or 0),
            height=int(data.get("height") or 0),
            scroll_x=int(scroll_x) if scroll_x is not None else None,
            scroll_y=int(scroll_y) if scroll_y is not None else None,
        )


# -- Nodes -------------------------------------------------------------------


@dataclasses.dataclass(eq=False)
class TextNode:
    """A visible-or-not run of text inside an element."""

    text: str
    is_visible: bool
    parent: ElementNode | None = dataclasses.field(default=None, repr=False)

    type = "TEXT_NODE"

    def has_parent_with_highlight_index(self) -> bool:
        current = self.parent
        while current is not None:
            # an indexed ancestor renders this text itself
            if current.highlight_index is not None:
                return True
            current = current.parent
        return False

    def is_parent_in_viewport(self) -> bool:
        if self.parent is None:
            return False
        return self.parent.is_in_viewport

    def is_parent_top_element(self) -> bool:
        if self.parent is None:
            return False
        return self.parent.is_top_element

    def to_dict(self) -> dict[str, Any]:
        return {"text": self.text, "type": self.type}


@dataclasses.dataclass(eq=False)
class ElementNode:
    """An element of the rendered DOM.

    ``xpath`` is relative to the nearest structural root (the document, a
    shadow root, or an iframe's document). To address the element from the
    top-level page, walk up through ``parent`` and switch roots at every
    iframe on the way; see ``domsnap.dom.selectors.frame_selector_chain``.
    """

    tag_name: str
    xpath: str
    attributes: dict[str, str] = dataclasses.field(default_factory=dict)
    children: list[DOMNode] = dataclasses.field(default_factory=list, repr=False)
    is_visible: bool = False
    is_interactive: bool = False
    is_top_element: bool = False
    is_in_viewport: bool = False
    shadow_root: bool = False
    highlight_index: int | None = None
    viewport_coordinates: CoordinateSet | None = None
    page_coordinates: CoordinateSet | None = None
    viewport_info: ViewportInfo | None = None
    is_new: bool | None = None
    parent: ElementNode | None = dataclasses.field(default=None, repr=False)

    @property
    def fingerprint(self) -> ElementFingerprint:
        return fingerprint(self)

    def iter_elements(self) -> Iterator[ElementNode]:
        """Yield this element and every descendant element in pre-order."""
        stack: list[ElementNode] = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(child for child in reversed(node.children) if isinstance(child, ElementNode))

    def get_all_text_till_next_clickable_element(self, max_depth: int = -1) -> str:
        """Text under this element, stopping at nested indexed elements."""
        text_parts: list[str] = []
        stack: list[tuple[DOMNode, int]] = [(self, 0)]

        while stack:
            node, current_depth = stack.pop()
            if max_depth != -1 and current_depth > max_depth:
                continue

            if isinstance(node, TextNode):
                text_parts.append(node.text)
                continue

            if node is not self and node.highlight_index is not None:
                continue

            stack.extend((child, current_depth + 1) for child in reversed(node.children))

        return "\n".join(text_parts).strip()

    def clickable_elements_to_string(self, include_attributes: list[str] | None = None) -> str:
        """Render the interactive subset of the tree for an LLM prompt.

        Each indexed element becomes ``[n]<tag attr='v'>text />`` (``*[n]*``
        when the differ flagged it new). Loose text outside any indexed
        element is kept when its parent is visible and on top.
        """
        formatted_text: list[str] = []
        stack: list[tuple[DOMNode, int]] = [(self, 0)]

        while stack:
            node, depth = stack.pop()
            next_depth = depth
            depth_str = "\t" * depth

            if isinstance(node, TextNode):
                if (
                    not node.has_parent_with_highlight_index()
                    and node.parent is not None
                    and node.parent.is_visible
                    and node.parent.is_top_element
                ):
                    formatted_text.append(f"{depth_str}{node.text}")
                continue

            if node.highlight_index is not None:
                next_depth += 1
                text = node.get_all_text_till_next_clickable_element()
                attributes_html_str = _format_attributes(node, text, include_attributes)

                indicator = f"*[{node.highlight_index}]*" if node.is_new else f"[{node.highlight_index}]"
                line = f"{depth_str}{indicator}<{node.tag_name}"
                if attributes_html_str:
                    line += f" {attributes_html_str}"
                if text:
                    if not attributes_html_str:
                        line += " "
                    line += f">{text}"
                elif not attributes_html_str:
                    line += " "
                line += " />"
                formatted_text.append(line)

            stack.extend((child, next_depth) for child in reversed(node.children))

        return "\n".join(formatted_text)

    def get_file_upload_element(self, check_siblings: bool = True) -> ElementNode | None:
        """Find a file input at or below this element, or among its siblings."""
        for node in self.iter_elements():
            if node.tag_name == "input" and node.attributes.get("type") == "file":
                return node

        if check_siblings and self.parent is not None:
            for sibling in self.parent.children:
                if sibling is not self and isinstance(sibling, ElementNode):
                    result = sibling.get_file_upload_element(check_siblings=False)
                    if result is not None:
                        return result

        return None

    def to_dict(self) -> dict[str, Any]:
        data = self._fields_dict()
        stack: list[tuple[ElementNode, dict[str, Any]]] = [(self, data)]
        while stack:
            node, node_data = stack.pop()
            for child in node.children:
                if isinstance(child, TextNode):
                    node_data["children"].append(child.to_dict())
                    continue
                child_data = child._fields_dict()
                node_data["children"].append(child_data)
                stack.append((child, child_data))
        return data

    def _fields_dict(self) -> dict[str, Any]:
        return {
            "tag_name": self.tag_name,
            "xpath": self.xpath,
            "attributes": dict(self.attributes),
            "is_visible": self.is_visible,
            "is_interactive": self.is_interactive,
            "is_top_element": self.is_top_element,
            "is_in_viewport": self.is_in_viewport,
            "shadow_root": self.shadow_root,
            "highlight_index": self.highlight_index,
            "viewport_coordinates": self.viewport_coordinates.to_dict() if self.viewport_coordinates else None,
            "page_coordinates": self.page_coordinates.to_dict() if self.page_coordinates else None,
            "children": [],
        }

    def __str__(self) -> str:
        tag_str = f"<{self.tag_name}"
        for key, value in self.attributes.items():
            tag_str += f' {key}="{value}"'
        tag_str += ">"

        extras = []
        if self.is_interactive:
            extras.append("interactive")
        if self.is_top_element:
            extras.append("top")
        if self.shadow_root:
            extras.append("shadow-root")
        if self.highlight_index is not None:
            extras.append(f"highlight:{self.highlight_index}")
        if self.is_in_viewport:
            extras.append("in-viewport")
        if extras:
            tag_str += f" [{', '.join(extras)}]"
        return tag_str


def _format_attributes(node: ElementNode, text: str, include_attributes: list[str] | None) -> str:
    if not include_attributes:
        return ""

    attributes_to_include = {
        key: str(node.attributes[key]) for key in include_attributes if key in node.attributes
    }

    # Drop attributes that repeat what the line already says
    if attributes_to_include.get("role") == node.tag_name:
        del attributes_to_include["role"]
    for key in ("aria-label", "placeholder"):
        if key in attributes_to_include and attributes_to_include[key].strip() == text.strip():
            del attributes_to_include[key]

    return " ".join(f"{key}='{value}'" for key, value in attributes_to_include.items())


DOMNode = Union[ElementNode, TextNode]

SelectorMap = dict[int, ElementNode]


@dataclasses.dataclass
class DOMState:
    """One snapshot: the element tree and its index-addressed interactive elements."""

    element_tree: ElementNode
    selector_map: SelectorMap = dataclasses.field(default_factory=dict)
