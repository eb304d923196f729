"""Structural fingerprints for DOM elements.

An element's fingerprint is the triple of SHA-256 digests over its ancestor
tag path, its attributes (in insertion order) and its xpath. Fingerprints
are content-derived, so the same element seen in two separate snapshots of
an unchanged page produces equal fingerprints even though the node objects
differ. Matching is exact on all three components; there is no fuzzy or
partial comparison.

Text content is deliberately left out: text nodes churn (counters, clocks,
live data) while the element they sit in stays the same.
"""

from __future__ import annotations

import dataclasses
import hashlib
from typing import TYPE_CHECKING, Mapping, Sequence

if TYPE_CHECKING:
    from domsnap.dom.views import ElementNode


def _hash_string(value: str) -> str:
    return hashlib.sha256(value.encode("utf-8")).hexdigest()


@dataclasses.dataclass(frozen=True)
class ElementFingerprint:
    """Hashes that identify an element's structural position and shape."""

    branch_path_hash: str
    attributes_hash: str
    xpath_hash: str

    @property
    def digest(self) -> str:
        """Single-string form, used for hash-set membership tests."""
        return _hash_string(f"{self.branch_path_hash}-{self.attributes_hash}-{self.xpath_hash}")


def ancestor_path(element: ElementNode) -> list[str]:
    """Tag names from the tree root down to the element's parent."""
    path: list[str] = []
    current = element.parent
    while current is not None:
        path.append(current.tag_name)
        current = current.parent
    path.reverse()
    return path


def branch_path_hash(path: Sequence[str]) -> str:
    return _hash_string("/".join(path))


def attributes_hash(attributes: Mapping[str, str]) -> str:
    return _hash_string("".join(f"{key}={value}" for key, value in attributes.items()))


def xpath_hash(xpath: str) -> str:
    return _hash_string(xpath)


def fingerprint_from_parts(
    path: Sequence[str],
    attributes: Mapping[str, str],
    xpath: str,
) -> ElementFingerprint:
    """Build a fingerprint from already-extracted element data."""
    return ElementFingerprint(
        branch_path_hash=branch_path_hash(path),
        attributes_hash=attributes_hash(attributes),
        xpath_hash=xpath_hash(xpath),
    )


def fingerprint(element: ElementNode) -> ElementFingerprint:
    return fingerprint_from_parts(ancestor_path(element), element.attributes, element.xpath)


def fingerprints_equal(a: ElementFingerprint, b: ElementFingerprint) -> bool:
    return (
        a.branch_path_hash == b.branch_path_hash
        and a.attributes_hash == b.attributes_hash
        and a.xpath_hash == b.xpath_hash
    )


def element_digest(element: ElementNode) -> str:
    return fingerprint(element).digest
