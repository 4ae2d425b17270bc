"""In-memory page cache adapter.

Implements PageCachePort for single-process deployments.
"""

import threading

from ignews_preview.components.regeneration import CachedPage


class InMemoryPageCache:
    """Published preview pages keyed by slug."""

    def __init__(self) -> None:
        self._pages: dict[str, CachedPage] = {}
        self._lock = threading.Lock()

    def get(self, slug: str) -> CachedPage | None:
        with self._lock:
            return self._pages.get(slug)

    def put(self, slug: str, entry: CachedPage) -> None:
        with self._lock:
            self._pages[slug] = entry

    def delete(self, slug: str) -> None:
        with self._lock:
            self._pages.pop(slug, None)

    def clear(self) -> None:
        """Clear all pages - useful for testing."""
        with self._lock:
            self._pages.clear()
