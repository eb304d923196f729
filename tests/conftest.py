"""Shared fixtures for domsnap unit tests."""

from __future__ import annotations

import copy
from pathlib import Path
from typing import Any

import pytest
import yaml


def _coords(x: int, y: int, width: int, height: int) -> dict[str, Any]:
    return {
        "topLeft": {"x": x, "y": y},
        "topRight": {"x": x + width, "y": y},
        "bottomLeft": {"x": x, "y": y + height},
        "bottomRight": {"x": x + width, "y": y + height},
        "center": {"x": x + width // 2, "y": y + height // 2},
        "width": width,
        "height": height,
    }


# ---------------------------------------------------------------------------
# Fixture: page-walk result for a small sign-in page
# ---------------------------------------------------------------------------

@pytest.fixture
def page_walk() -> dict[str, Any]:
    """A bottom-up page-walk result: heading, a button and an email input.

    html > body > (h1 "Welcome", div > (button "Sign in" [0], input [1]))
    """
    node_map: dict[str, Any] = {
        "0": {"type": "TEXT_NODE", "text": "Sign in", "isVisible": True},
        "1": {
            "tagName": "button",
            "xpath": "html/body/div/button",
            "attributes": {"class": "btn primary", "type": "submit"},
            "children": ["0"],
            "isVisible": True,
            "isInteractive": True,
            "isTopElement": True,
            "isInViewport": True,
            "highlightIndex": 0,
            "viewportCoordinates": _coords(10, 100, 80, 30),
            "pageCoordinates": _coords(10, 100, 80, 30),
            "viewport": {"width": 1280, "height": 720, "scrollX": 0, "scrollY": 0},
        },
        "2": {
            "tagName": "input",
            "xpath": "html/body/div/input",
            "attributes": {"name": "email", "placeholder": "Email"},
            "children": [],
            "isVisible": True,
            "isInteractive": True,
            "isTopElement": True,
            "isInViewport": True,
            "highlightIndex": 1,
        },
        "3": {
            "tagName": "div",
            "xpath": "html/body/div",
            "attributes": {},
            "children": ["1", "2"],
            "isVisible": True,
            "isTopElement": True,
        },
        "4": {"type": "TEXT_NODE", "text": "Welcome", "isVisible": True},
        "5": {
            "tagName": "h1",
            "xpath": "html/body/h1",
            "attributes": {},
            "children": ["4"],
            "isVisible": True,
            "isTopElement": True,
        },
        "6": {
            "tagName": "body",
            "xpath": "html/body",
            "attributes": {},
            "children": ["5", "3"],
            "isVisible": True,
            "isTopElement": True,
        },
        "7": {
            "tagName": "html",
            "xpath": "html",
            "attributes": {},
            "children": ["6"],
            "isVisible": True,
        },
    }
    return {"map": node_map, "rootId": "7"}


@pytest.fixture
def page_walk_with_banner(page_walk: dict[str, Any]) -> dict[str, Any]:
    """The sign-in page after a cookie-banner button appeared inside the div."""
    result = copy.deepcopy(page_walk)
    node_map = result["map"]
    node_map["8"] = {
        "tagName": "button",
        "xpath": "html/body/div/button[2]",
        "attributes": {"id": "accept-cookies"},
        "children": [],
        "isVisible": True,
        "isInteractive": True,
        "isTopElement": True,
        "isInViewport": True,
        "highlightIndex": 2,
    }
    # Parents must come after their children
    div = node_map.pop("3")
    div["children"] = ["1", "2", "8"]
    body = node_map.pop("6")
    html = node_map.pop("7")
    node_map["3"] = div
    node_map["6"] = body
    node_map["7"] = html
    return result


# ---------------------------------------------------------------------------
# Fixture: page-walk result with an element inside an iframe
# ---------------------------------------------------------------------------

@pytest.fixture
def iframe_page_walk() -> dict[str, Any]:
    """html > body > iframe#checkout > html > body > input[name=card] [0].

    Xpaths inside the iframe restart from the frame's own document.
    """
    node_map: dict[str, Any] = {
        "0": {
            "tagName": "input",
            "xpath": "html/body/input",
            "attributes": {"name": "card"},
            "children": [],
            "isVisible": True,
            "isInteractive": True,
            "isTopElement": True,
            "isInViewport": True,
            "highlightIndex": 0,
        },
        "1": {"tagName": "body", "xpath": "html/body", "attributes": {}, "children": ["0"], "isVisible": True},
        "2": {"tagName": "html", "xpath": "html", "attributes": {}, "children": ["1"], "isVisible": True},
        "3": {
            "tagName": "iframe",
            "xpath": "html/body/iframe",
            "attributes": {"id": "checkout", "src": "/pay"},
            "children": ["2"],
            "isVisible": True,
            "isTopElement": True,
        },
        "4": {"tagName": "body", "xpath": "html/body", "attributes": {}, "children": ["3"], "isVisible": True},
        "5": {"tagName": "html", "xpath": "html", "attributes": {}, "children": ["4"], "isVisible": True},
    }
    return {"map": node_map, "rootId": "5"}


# ---------------------------------------------------------------------------
# Fixture: page-walk result with an iframe inside an iframe
# ---------------------------------------------------------------------------

@pytest.fixture
def nested_iframe_page_walk() -> dict[str, Any]:
    """html > body > iframe#outer > html > body > div > iframe#inner > html > body > button[name=pay] [0].

    Each frame's document restarts its own xpaths.
    """
    node_map: dict[str, Any] = {
        "0": {
            "tagName": "button",
            "xpath": "html/body/button",
            "attributes": {"name": "pay"},
            "children": [],
            "isVisible": True,
            "isInteractive": True,
            "isTopElement": True,
            "isInViewport": True,
            "highlightIndex": 0,
        },
        "1": {"tagName": "body", "xpath": "html/body", "attributes": {}, "children": ["0"], "isVisible": True},
        "2": {"tagName": "html", "xpath": "html", "attributes": {}, "children": ["1"], "isVisible": True},
        "3": {
            "tagName": "iframe",
            "xpath": "html/body/div/iframe",
            "attributes": {"id": "inner"},
            "children": ["2"],
            "isVisible": True,
            "isTopElement": True,
        },
        "4": {"tagName": "div", "xpath": "html/body/div", "attributes": {}, "children": ["3"], "isVisible": True},
        "5": {"tagName": "body", "xpath": "html/body", "attributes": {}, "children": ["4"], "isVisible": True},
        "6": {"tagName": "html", "xpath": "html", "attributes": {}, "children": ["5"], "isVisible": True},
        "7": {
            "tagName": "iframe",
            "xpath": "html/body/iframe",
            "attributes": {"id": "outer"},
            "children": ["6"],
            "isVisible": True,
            "isTopElement": True,
        },
        "8": {"tagName": "body", "xpath": "html/body", "attributes": {}, "children": ["7"], "isVisible": True},
        "9": {"tagName": "html", "xpath": "html", "attributes": {}, "children": ["8"], "isVisible": True},
    }
    return {"map": node_map, "rootId": "9"}


# ---------------------------------------------------------------------------
# Fixture: sample config YAML
# ---------------------------------------------------------------------------

@pytest.fixture
def sample_config_yaml() -> str:
    """Return a valid domsnap config.yaml as a string."""
    return """\
include_dynamic_attributes: false
highlight_elements: true
viewport_expansion: 500
strict_children: true
headless: false
timeout: 45
include_attributes:
  - type
  - name
viewport:
  width: 1920
  height: 1080
"""


@pytest.fixture
def tmp_project_dir(tmp_path: Path) -> Path:
    """Create a temporary .domsnap/ project directory with a config.yaml."""
    project_dir = tmp_path / ".domsnap"
    project_dir.mkdir()
    config_data = {"headless": True, "viewport": {"width": 1280, "height": 720}, "timeout": 30}
    (project_dir / "config.yaml").write_text(yaml.dump(config_data, default_flow_style=False), encoding="utf-8")
    return project_dir
