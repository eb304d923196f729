"""Unit tests for domsnap.dom.fingerprint — structural element hashes."""

from __future__ import annotations

import copy
import hashlib
from typing import Any

from domsnap.dom.fingerprint import (
    ElementFingerprint,
    ancestor_path,
    attributes_hash,
    branch_path_hash,
    fingerprint,
    fingerprint_from_parts,
    fingerprints_equal,
    xpath_hash,
)
from domsnap.dom.materializer import materialize


def _sha(value: str) -> str:
    return hashlib.sha256(value.encode("utf-8")).hexdigest()


# ---------------------------------------------------------------------------
# 1. Hash components
# ---------------------------------------------------------------------------

class TestHashComponents:
    def test_branch_path_joins_with_slash(self):
        assert branch_path_hash(["html", "body", "div"]) == _sha("html/body/div")

    def test_attributes_concatenate_in_insertion_order(self):
        assert attributes_hash({"type": "submit", "name": "go"}) == _sha("type=submitname=go")

    def test_attribute_order_matters(self):
        assert attributes_hash({"a": "1", "b": "2"}) != attributes_hash({"b": "2", "a": "1"})

    def test_xpath_hash(self):
        assert xpath_hash("html/body") == _sha("html/body")

    def test_digest_combines_components(self):
        fp = ElementFingerprint(branch_path_hash="a", attributes_hash="b", xpath_hash="c")
        assert fp.digest == _sha("a-b-c")


# ---------------------------------------------------------------------------
# 2. Element fingerprints
# ---------------------------------------------------------------------------

class TestElementFingerprint:
    def test_ancestor_path_excludes_element(self, page_walk: dict[str, Any]):
        button = materialize(page_walk).selector_map[0]
        assert ancestor_path(button) == ["html", "body", "div"]

    def test_root_has_empty_path(self, page_walk: dict[str, Any]):
        root = materialize(page_walk).element_tree
        assert ancestor_path(root) == []

    def test_fingerprint_matches_parts(self, page_walk: dict[str, Any]):
        button = materialize(page_walk).selector_map[0]
        expected = fingerprint_from_parts(["html", "body", "div"], button.attributes, "html/body/div/button")
        assert fingerprints_equal(fingerprint(button), expected)
        assert button.fingerprint == expected

    def test_same_page_twice_gives_equal_fingerprints(self, page_walk: dict[str, Any]):
        first = materialize(page_walk).selector_map[1]
        second = materialize(copy.deepcopy(page_walk)).selector_map[1]
        assert first is not second
        assert fingerprints_equal(first.fingerprint, second.fingerprint)

    def test_attribute_change_only_affects_that_element(self, page_walk: dict[str, Any]):
        before = materialize(page_walk)
        changed = copy.deepcopy(page_walk)
        changed["map"]["1"]["attributes"]["type"] = "button"
        after = materialize(changed)

        old_button, new_button = before.selector_map[0].fingerprint, after.selector_map[0].fingerprint
        assert old_button.attributes_hash != new_button.attributes_hash
        assert old_button.branch_path_hash == new_button.branch_path_hash
        assert not fingerprints_equal(old_button, new_button)

        # the sibling input is untouched
        assert fingerprints_equal(before.selector_map[1].fingerprint, after.selector_map[1].fingerprint)

    def test_text_change_keeps_fingerprint(self, page_walk: dict[str, Any]):
        before = materialize(page_walk)
        changed = copy.deepcopy(page_walk)
        changed["map"]["0"]["text"] = "Log in"
        after = materialize(changed)
        assert fingerprints_equal(before.selector_map[0].fingerprint, after.selector_map[0].fingerprint)
