"""Snapshot differ — flags interactive elements that appeared since the last snapshot.

Only the previous snapshot's fingerprint digests are kept, keyed by URL. When
the URL changes the comparison is meaningless, so no element is flagged and
the cache simply starts over for the new page.
"""

from __future__ import annotations

import dataclasses
import logging

from domsnap.dom.fingerprint import element_digest
from domsnap.dom.views import ElementNode

logger = logging.getLogger("domsnap.dom.differ")


@dataclasses.dataclass
class CachedElementHashes:
    """Digests of the interactive elements seen on ``url`` in the previous snapshot."""

    url: str
    hashes: set[str]


def clickable_elements(element_tree: ElementNode) -> list[ElementNode]:
    """Every element in the tree that carries a highlight index, in pre-order."""
    return [node for node in element_tree.iter_elements() if node.highlight_index is not None]


def clickable_element_hashes(element_tree: ElementNode) -> set[str]:
    return {element_digest(node) for node in clickable_elements(element_tree)}


class SnapshotDiffer:
    """Holds the one-slot ``{url, hashes}`` cache for a single page.

    Not safe for concurrent snapshots of the same page; callers serialize.
    """

    def __init__(self) -> None:
        self._cache: CachedElementHashes | None = None

    @property
    def cache(self) -> CachedElementHashes | None:
        return self._cache

    def update(self, element_tree: ElementNode, url: str) -> list[ElementNode]:
        """Mark new elements in ``element_tree`` and replace the cache.

        Returns the elements flagged as new. ``is_new`` is only assigned when
        the cache holds a snapshot of the same URL; otherwise it stays None.
        """
        elements = clickable_elements(element_tree)
        digests = [element_digest(node) for node in elements]
        new_elements: list[ElementNode] = []

        if self._cache is not None and self._cache.url == url:
            for node, digest in zip(elements, digests):
                node.is_new = digest not in self._cache.hashes
                if node.is_new:
                    new_elements.append(node)
            logger.debug("%d/%d interactive elements are new on %s", len(new_elements), len(elements), url)
        else:
            logger.debug("No cached snapshot for %s, skipping new-element detection", url)

        self._cache = CachedElementHashes(url=url, hashes=set(digests))
        return new_elements

    def reset(self) -> None:
        self._cache = None
