"""Unit tests for domsnap.dom.selectors — xpath conversion and CSS synthesis."""

from __future__ import annotations

from typing import Any

import pytest

from domsnap.dom.materializer import materialize
from domsnap.dom.selectors import FrameSelectorChain, enhanced_css_selector, frame_selector_chain, xpath_to_css
from domsnap.dom.views import ElementNode


# ---------------------------------------------------------------------------
# 1. xpath_to_css
# ---------------------------------------------------------------------------

class TestXpathToCss:
    @pytest.mark.parametrize(
        "xpath, expected",
        [
            ("/html/body/div/span", "html > body > div > span"),
            ("/html/body/div[2]/span", "html > body > div:nth-of-type(2) > span"),
            ("/ul/li[3]/a[1]", "ul > li:nth-of-type(3) > a:nth-of-type(1)"),
            ("html/body/div", "html > body > div"),
            ("ul/li[last()]", "ul > li:last-of-type"),
            ("ul/li[position()>1]", "ul > li:nth-of-type(n+2)"),
        ],
    )
    def test_positional_paths(self, xpath: str, expected: str):
        assert xpath_to_css(xpath) == expected

    def test_unsupported_predicate_is_dropped(self):
        assert xpath_to_css("div[@id='main']/p") == "div > p"

    def test_zero_index_is_dropped(self):
        assert xpath_to_css("ul/li[0]") == "ul > li"

    def test_namespaced_tag_is_escaped(self):
        assert xpath_to_css("svg/svg:path") == "svg > svg\\:path"

    def test_empty_xpath(self):
        assert xpath_to_css("") == ""


# ---------------------------------------------------------------------------
# 2. enhanced_css_selector
# ---------------------------------------------------------------------------

class TestEnhancedCssSelector:
    def test_classes_and_safe_attributes(self):
        element = ElementNode(
            tag_name="div",
            xpath="/html/body/div[2]",
            attributes={
                "class": "foo bar",
                "id": "my-id",
                "placeholder": 'some "quoted" text',
                "data-testid": "123",
            },
        )
        expected = r'html > body > div:nth-of-type(2).foo.bar[id="my-id"][placeholder*="some \"quoted\" text"][data-testid="123"]'
        assert enhanced_css_selector(element, include_dynamic_attributes=True) == expected

    def test_dynamic_attributes_disabled(self):
        element = ElementNode(
            tag_name="button",
            xpath="html/body/button",
            attributes={"class": "btn", "data-testid": "go", "type": "submit"},
        )
        assert enhanced_css_selector(element, include_dynamic_attributes=False) == 'html > body > button[type="submit"]'

    def test_invalid_class_tokens_are_dropped(self):
        element = ElementNode(tag_name="a", xpath="a", attributes={"class": "ok 1bad b@d _fine"})
        assert enhanced_css_selector(element) == "a.ok._fine"

    def test_unsafe_attributes_are_ignored(self):
        element = ElementNode(tag_name="a", xpath="a", attributes={"onclick": "go()", "style": "x", "href": "/home"})
        assert enhanced_css_selector(element) == 'a[href="/home"]'

    def test_empty_value_is_presence_match(self):
        element = ElementNode(tag_name="input", xpath="input", attributes={"required": ""})
        assert enhanced_css_selector(element) == "input[required]"

    def test_multiline_value_uses_first_line(self):
        element = ElementNode(tag_name="a", xpath="a", attributes={"title": "Line  one\nsecond line"})
        assert enhanced_css_selector(element) == 'a[title*="Line one"]'

    def test_fallback_on_bad_attribute_data(self):
        element = ElementNode(tag_name="div", xpath="div", attributes={"id": 5}, highlight_index=3)  # type: ignore[dict-item]
        assert enhanced_css_selector(element) == "div[highlight_index='3']"


# ---------------------------------------------------------------------------
# 3. Frame selector chains
# ---------------------------------------------------------------------------

class TestFrameSelectorChain:
    def test_top_level_element_has_no_frames(self, page_walk: dict[str, Any]):
        button = materialize(page_walk).selector_map[0]
        chain = frame_selector_chain(button)
        assert chain == FrameSelectorChain(frames=(), target='html > body > div > button.btn.primary[type="submit"]')

    def test_element_inside_iframe(self, iframe_page_walk: dict[str, Any]):
        card = materialize(iframe_page_walk).selector_map[0]
        chain = frame_selector_chain(card)
        assert chain.frames == ('html > body > iframe[id="checkout"][src="/pay"]',)
        assert chain.target == 'html > body > input[name="card"]'

    def test_element_inside_nested_iframes(self, nested_iframe_page_walk: dict[str, Any]):
        button = materialize(nested_iframe_page_walk).selector_map[0]
        chain = frame_selector_chain(button)
        # Outermost frame first, each from its own document's xpath
        assert chain.frames == (
            'html > body > iframe[id="outer"]',
            'html > body > div > iframe[id="inner"]',
        )
        assert chain.target == 'html > body > button[name="pay"]'
