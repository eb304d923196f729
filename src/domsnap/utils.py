"""Small shared helpers: execution timing and page classification."""

from __future__ import annotations

import functools
import logging
import time
from typing import Any, Callable, TypeVar

from domsnap.models import NEW_TAB_URLS

logger = logging.getLogger("domsnap.utils")

F = TypeVar("F", bound=Callable[..., Any])


def time_execution(label: str = "") -> Callable[[F], F]:
    """Log the wall-clock duration of the wrapped call at DEBUG level."""

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            start = time.perf_counter()
            result = func(*args, **kwargs)
            elapsed_ms = (time.perf_counter() - start) * 1000
            logger.debug("%s Execution time: %.2f ms", label, elapsed_ms)
            return result

        return wrapper  # type: ignore[return-value]

    return decorator


def is_new_tab_page(url: str) -> bool:
    """Return True for blank or new-tab URLs that have no DOM worth walking."""
    return url in NEW_TAB_URLS
