"""Centralized DOM snapshot constants."""

# Attributes that are stable enough to anchor a CSS selector on
SAFE_ATTRIBUTES = (
    "id",
    # Standard HTML attributes
    "name",
    "type",
    "placeholder",
    # Accessibility attributes
    "aria-label",
    "aria-labelledby",
    "aria-describedby",
    "role",
    # Common form attributes
    "for",
    "autocomplete",
    "required",
    "readonly",
    # Media attributes
    "alt",
    "title",
    "src",
    # Link attributes
    "href",
    "target",
)

# Test-hook attributes; only used when dynamic attributes are enabled
DYNAMIC_ATTRIBUTES = (
    "data-id",
    "data-qa",
    "data-cy",
    "data-testid",
)

# Attributes shown next to each interactive element in the prompt rendering
DEFAULT_INCLUDE_ATTRIBUTES = [
    "title",
    "type",
    "name",
    "role",
    "tabindex",
    "aria-label",
    "placeholder",
    "value",
    "alt",
    "aria-expanded",
]

# Pages that never need a page walk
NEW_TAB_URLS = (
    "about:blank",
    "chrome://new-tab-page/",
    "chrome://new-tab-page",
    "chrome://newtab/",
    "chrome://newtab",
)

# Frame hosts that are ads or trackers, never worth opening
AD_HOST_FRAGMENTS = ("doubleclick.net", "adroll.com", "googletagmanager.com")

# Default viewport
DEFAULT_VIEWPORT = (1280, 720)

# Pixels around the viewport still considered "in view" (-1 = whole page)
DEFAULT_VIEWPORT_EXPANSION = 0

# Navigation timeout
DEFAULT_TIMEOUT = 30  # seconds
