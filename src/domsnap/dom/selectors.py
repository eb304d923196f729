"""CSS selector synthesis for snapshot elements.

Selectors are best-effort: they are built from the element's position path
and a safelist of stable attributes, and are not guaranteed to be unique.
CSS cannot cross a frame boundary, so an element inside iframes is addressed
by a ``FrameSelectorChain``: one selector per enclosing iframe plus the
element's own selector, each evaluated in the previous one's document.
"""

from __future__ import annotations

import dataclasses
import logging
import re

from domsnap.dom.views import ElementNode
from domsnap.models import DYNAMIC_ATTRIBUTES, SAFE_ATTRIBUTES

logger = logging.getLogger("domsnap.dom.selectors")

_VALID_CLASS_NAME = re.compile(r"^[a-z_][\w-]*$", re.IGNORECASE | re.ASCII)
_SPECIAL_VALUE_CHARS = re.compile(r"[\"'<>`\n\r\t]")
_WHITESPACE_RUN = re.compile(r"\s+")
_PREDICATE = re.compile(r"\[([^\]]*)\]")
_POSITIVE_INT = re.compile(r"[0-9]+")


@dataclasses.dataclass(frozen=True)
class FrameSelectorChain:
    """Selectors needed to reach an element from the top-level page.

    ``frames`` holds one selector per enclosing iframe, outermost first;
    ``target`` is evaluated inside the innermost frame's document.
    """

    frames: tuple[str, ...]
    target: str


def _escape_colons(name: str) -> str:
    return name.replace(":", "\\:")


def xpath_to_css(xpath: str) -> str:
    """Convert a simple positional xpath into an equivalent CSS selector.

    ``/html/body/div[2]/span`` becomes ``html > body > div:nth-of-type(2) > span``.
    Supported predicates are positive integers, ``last()`` and ``position()>1``;
    any other predicate is dropped.
    """
    if not xpath:
        return ""

    css_parts: list[str] = []
    for part in xpath.lstrip("/").split("/"):
        if not part:
            continue

        # Custom elements such as svg:path
        if ":" in part and "[" not in part:
            css_parts.append(_escape_colons(part))
            continue

        if "[" not in part:
            css_parts.append(part)
            continue

        bracket = part.index("[")
        final_part = _escape_colons(part[:bracket])
        for predicate in _PREDICATE.findall(part[bracket:]):
            predicate = predicate.strip()
            if _POSITIVE_INT.fullmatch(predicate) and int(predicate) > 0:
                final_part += f":nth-of-type({int(predicate)})"
            elif predicate == "last()":
                final_part += ":last-of-type"
            elif "position()" in predicate and ">1" in predicate:
                final_part += ":nth-of-type(n+2)"
        css_parts.append(final_part)

    return " > ".join(css_parts)


def enhanced_css_selector(element: ElementNode, include_dynamic_attributes: bool = True) -> str:
    """Build a CSS selector for ``element`` from its xpath, classes and safe attributes.

    Classes and ``data-*`` test hooks are only used when
    ``include_dynamic_attributes`` is set. If the element data cannot be
    turned into a selector, falls back to ``tag[highlight_index='N']``.
    """
    try:
        css_selector = xpath_to_css(element.xpath)

        class_value = element.attributes.get("class")
        if class_value and include_dynamic_attributes:
            for class_name in class_value.split():
                if _VALID_CLASS_NAME.match(class_name):
                    css_selector += f".{class_name}"

        safe_attributes = set(SAFE_ATTRIBUTES)
        if include_dynamic_attributes:
            safe_attributes.update(DYNAMIC_ATTRIBUTES)

        for attribute, value in element.attributes.items():
            if attribute == "class" or not attribute.strip():
                continue
            if attribute not in safe_attributes:
                continue

            safe_attribute = _escape_colons(attribute)
            if value == "":
                css_selector += f"[{safe_attribute}]"
            elif _SPECIAL_VALUE_CHARS.search(value):
                # Only the first line, whitespace collapsed
                first_line = value.split("\n", 1)[0]
                collapsed = _WHITESPACE_RUN.sub(" ", first_line).strip()
                safe_value = collapsed.replace('"', '\\"')
                css_selector += f'[{safe_attribute}*="{safe_value}"]'
            else:
                css_selector += f'[{safe_attribute}="{value}"]'

        return css_selector
    except Exception as exc:
        logger.warning(
            "Falling back to highlight-index selector for <%s> (index %s): %s",
            element.tag_name,
            element.highlight_index,
            exc,
        )
        tag_name = element.tag_name or "*"
        return f"{tag_name}[highlight_index='{element.highlight_index}']"


def frame_selector_chain(element: ElementNode, include_dynamic_attributes: bool = True) -> FrameSelectorChain:
    """Selectors for every iframe above ``element`` plus the element itself."""
    parents: list[ElementNode] = []
    current = element.parent
    while current is not None:
        parents.append(current)
        current = current.parent
    parents.reverse()

    frames = tuple(
        enhanced_css_selector(parent, include_dynamic_attributes) for parent in parents if parent.tag_name == "iframe"
    )
    return FrameSelectorChain(frames=frames, target=enhanced_css_selector(element, include_dynamic_attributes))
