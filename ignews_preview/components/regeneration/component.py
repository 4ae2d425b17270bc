"""
Regeneration component - keep statically served previews fresh.

Pages are generated once and served from cache. After revalidate_seconds a
page turns stale: the next request still gets the cached page and one
background regeneration is scheduled. Slugs never seen before are
generated on demand while the caller waits.

Invariants:
- At most one background regeneration in flight per slug
- Regenerations of one slug publish one at a time
- A failed regeneration leaves the previous page published
- Not-found outcomes are never cached
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime, timedelta

from ignews_preview.components.content_fetch import ContentFetcher
from ignews_preview.components.page import PageAssembler, PageOutput
from ignews_preview.components.preview import PreviewTransformer

from .models import (
    DEFAULT_REGENERATION_CONFIG,
    CachedPage,
    Freshness,
    RegenerationConfig,
    ServeResult,
)
from .ports import BackgroundRunnerPort, ClockPort, PageCachePort, PageGenerator

logger = logging.getLogger(__name__)


def classify(
    entry: CachedPage | None,
    now_utc: datetime,
    config: RegenerationConfig = DEFAULT_REGENERATION_CONFIG,
) -> Freshness:
    """Freshness of a cache entry at a point in time."""
    if entry is None:
        return Freshness.MISSING
    if now_utc - entry.generated_at >= timedelta(seconds=config.revalidate_seconds):
        return Freshness.STALE
    return Freshness.FRESH


class PagePipeline:
    """fetch -> transform -> assemble for one slug."""

    def __init__(
        self,
        fetcher: ContentFetcher,
        transformer: PreviewTransformer,
        assembler: PageAssembler,
    ) -> None:
        self._fetcher = fetcher
        self._transformer = transformer
        self._assembler = assembler

    def __call__(self, slug: str) -> PageOutput | None:
        start = time.monotonic()
        document = self._fetcher.fetch(slug)
        if document is None:
            return None

        page = self._assembler.assemble(self._transformer.transform(document))
        logger.info(
            "Generated preview for %r in %d ms",
            slug,
            int((time.monotonic() - start) * 1000),
        )
        return page


@dataclass
class _SlugLock:
    lock: threading.Lock = field(default_factory=threading.Lock)
    users: int = 0


class RegenerationScheduler:
    """
    Serves cached pages and decides when to rebuild them.

    Thread-safe; one instance is shared by all request handlers.
    """

    def __init__(
        self,
        generator: PageGenerator,
        cache: PageCachePort,
        runner: BackgroundRunnerPort,
        clock: ClockPort,
        config: RegenerationConfig | None = None,
    ) -> None:
        self._generator = generator
        self._cache = cache
        self._runner = runner
        self._clock = clock
        self._config = config or DEFAULT_REGENERATION_CONFIG

        self._lock = threading.Lock()
        self._in_flight: set[str] = set()
        self._slug_locks: dict[str, _SlugLock] = {}

    @property
    def config(self) -> RegenerationConfig:
        return self._config

    def freshness(self, slug: str) -> Freshness:
        return classify(self._cache.get(slug), self._clock.now_utc(), self._config)

    def is_in_flight(self, slug: str) -> bool:
        with self._lock:
            return slug in self._in_flight

    def serve(self, slug: str) -> ServeResult:
        """
        Return the page for a slug, generating or scheduling as needed.

        Raises:
            ContentBackendError: only when a missing page cannot be generated.
        """
        entry = self._cache.get(slug)
        state = classify(entry, self._clock.now_utc(), self._config)

        if entry is None:
            return self._generate_blocking(slug)

        if state is Freshness.STALE:
            scheduled = self._schedule_background(slug)
            return ServeResult(slug, entry.page, Freshness.STALE, regeneration_scheduled=scheduled)

        return ServeResult(slug, entry.page, Freshness.FRESH)

    # --- Internals ---

    @contextmanager
    def _slug_lock(self, slug: str) -> Iterator[None]:
        """Hold the per-slug lock; the entry is dropped once nobody uses it."""
        with self._lock:
            entry = self._slug_locks.get(slug)
            if entry is None:
                entry = self._slug_locks[slug] = _SlugLock()
            entry.users += 1
        try:
            with entry.lock:
                yield
        finally:
            with self._lock:
                entry.users -= 1
                if entry.users == 0:
                    del self._slug_locks[slug]

    def _publish(self, slug: str, page: PageOutput) -> None:
        self._cache.put(slug, CachedPage(page=page, generated_at=self._clock.now_utc()))

    def _generate_blocking(self, slug: str) -> ServeResult:
        with self._slug_lock(slug):
            # Another request may have generated it while we waited.
            entry = self._cache.get(slug)
            if entry is not None:
                return ServeResult(slug, entry.page, Freshness.MISSING)

            logger.info("No cached preview for %r, generating", slug)
            page = self._generator(slug)
            if page is None:
                return ServeResult(slug, None, Freshness.MISSING)

            self._publish(slug, page)
            return ServeResult(slug, page, Freshness.MISSING)

    def _schedule_background(self, slug: str) -> bool:
        with self._lock:
            if slug in self._in_flight:
                return False
            self._in_flight.add(slug)

        logger.info("Preview for %r is stale, scheduling regeneration", slug)
        try:
            self._runner.submit(lambda: self._regenerate(slug))
        except Exception:
            with self._lock:
                self._in_flight.discard(slug)
            raise
        return True

    def _regenerate(self, slug: str) -> None:
        try:
            with self._slug_lock(slug):
                page = self._generator(slug)
                if page is None:
                    logger.info("Document %r is gone, evicting cached preview", slug)
                    self._cache.delete(slug)
                else:
                    self._publish(slug, page)
        except Exception:
            logger.exception("Background regeneration failed for %r", slug)
        finally:
            with self._lock:
                self._in_flight.discard(slug)
