"""domsnap engine — Playwright-facing snapshot modules.

- DomService: runs the page walk and materializes the snapshot
- ElementLocator: resolves snapshot elements to live Playwright handles
- SnapshotSession: per-page snapshot state, new-element detection, index access
"""

from domsnap.engine.dom_service import DomService, DomServiceError
from domsnap.engine.locator import ElementLocator
from domsnap.engine.session import BrowserState, SessionNotInitializedError, SnapshotSession

__all__ = [
    "BrowserState",
    "DomService",
    "DomServiceError",
    "ElementLocator",
    "SessionNotInitializedError",
    "SnapshotSession",
]
