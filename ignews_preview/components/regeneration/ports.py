"""
Regeneration component ports.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from typing import Protocol

from ignews_preview.components.page import PageOutput

from .models import CachedPage

# slug -> page, or None when the backend has no document for the slug
PageGenerator = Callable[[str], PageOutput | None]


class PageCachePort(Protocol):
    """Store of published pages, keyed by slug."""

    def get(self, slug: str) -> CachedPage | None:
        ...

    def put(self, slug: str, entry: CachedPage) -> None:
        ...

    def delete(self, slug: str) -> None:
        ...


class BackgroundRunnerPort(Protocol):
    """Runs regeneration tasks off the request path."""

    def submit(self, task: Callable[[], None]) -> None:
        ...


class ClockPort(Protocol):
    def now_utc(self) -> datetime:
        ...
