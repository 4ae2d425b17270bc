"""
Tests for the regeneration component.

- Fresh / Stale / Missing classification on a 30 minute window
- Stale pages are served once while one background regeneration runs
- Missing slugs are generated on demand, not-found is never cached
- Failed regenerations keep the last good page
"""

from __future__ import annotations

import logging
import threading
from datetime import datetime, timedelta

import pytest

from ignews_preview.adapters.background import DeferredBackgroundRunner
from ignews_preview.adapters.page_cache import InMemoryPageCache
from ignews_preview.components.content_fetch import ContentBackendError, ContentFetcher
from ignews_preview.components.page import PageAssembler, PageOutput
from ignews_preview.components.preview import PreviewTransformer
from ignews_preview.components.regeneration import (
    CachedPage,
    Freshness,
    PagePipeline,
    RegenerationConfig,
    RegenerationScheduler,
    classify,
)
from tests.fakes import FakeClock, InMemoryContentBackend, make_raw_post


class CountingGenerator:
    """Page generator wrapping the real pipeline, counting calls."""

    def __init__(self, backend: InMemoryContentBackend) -> None:
        self._pipeline = PagePipeline(ContentFetcher(backend), PreviewTransformer(), PageAssembler())
        self.calls = 0

    def __call__(self, slug: str) -> PageOutput | None:
        self.calls += 1
        return self._pipeline(slug)


@pytest.fixture
def cache() -> InMemoryPageCache:
    return InMemoryPageCache()


@pytest.fixture
def runner() -> DeferredBackgroundRunner:
    return DeferredBackgroundRunner()


@pytest.fixture
def generator(backend: InMemoryContentBackend) -> CountingGenerator:
    return CountingGenerator(backend)


@pytest.fixture
def scheduler(
    generator: CountingGenerator,
    cache: InMemoryPageCache,
    runner: DeferredBackgroundRunner,
    clock: FakeClock,
) -> RegenerationScheduler:
    return RegenerationScheduler(generator, cache, runner, clock)


class TestClassify:
    def _entry(self, generated_at: datetime) -> CachedPage:
        page = PageOutput("s", "t", "d", "en", {}, "", "")
        return CachedPage(page=page, generated_at=generated_at)

    def test_missing(self, now: datetime) -> None:
        assert classify(None, now) is Freshness.MISSING

    def test_fresh_inside_window(self, now: datetime) -> None:
        entry = self._entry(now - timedelta(minutes=29, seconds=59))
        assert classify(entry, now) is Freshness.FRESH

    def test_stale_exactly_at_thirty_minutes(self, now: datetime) -> None:
        entry = self._entry(now - timedelta(minutes=30))
        assert classify(entry, now) is Freshness.STALE

    def test_custom_window(self, now: datetime) -> None:
        entry = self._entry(now - timedelta(seconds=61))
        assert classify(entry, now, RegenerationConfig(revalidate_seconds=60)) is Freshness.STALE


class TestMissing:
    def test_first_request_generates_and_blocks(
        self,
        scheduler: RegenerationScheduler,
        generator: CountingGenerator,
        cache: InMemoryPageCache,
        runner: DeferredBackgroundRunner,
        now: datetime,
    ) -> None:
        result = scheduler.serve("hello-world")

        assert result.freshness is Freshness.MISSING
        assert result.page is not None
        assert "<title>Hi | ig.news</title>" in result.page.html
        assert generator.calls == 1
        assert runner.tasks == []
        entry = cache.get("hello-world")
        assert entry is not None and entry.generated_at == now

    def test_unknown_slug_not_found_and_not_cached(
        self,
        scheduler: RegenerationScheduler,
        generator: CountingGenerator,
        cache: InMemoryPageCache,
    ) -> None:
        first = scheduler.serve("nope")
        second = scheduler.serve("nope")

        assert first.found is False
        assert second.found is False
        assert cache.get("nope") is None
        assert generator.calls == 2

    def test_backend_failure_propagates(
        self,
        scheduler: RegenerationScheduler,
        backend: InMemoryContentBackend,
        backend_error: ContentBackendError,
    ) -> None:
        backend.fail_with = backend_error

        with pytest.raises(ContentBackendError):
            scheduler.serve("hello-world")

    def test_concurrent_first_requests_generate_once(
        self,
        cache: InMemoryPageCache,
        runner: DeferredBackgroundRunner,
        clock: FakeClock,
        backend: InMemoryContentBackend,
    ) -> None:
        started = threading.Event()
        release = threading.Event()
        inner = CountingGenerator(backend)

        def slow_generator(slug: str) -> PageOutput | None:
            started.set()
            release.wait(timeout=5)
            return inner(slug)

        scheduler = RegenerationScheduler(slow_generator, cache, runner, clock)
        results = []
        threads = [
            threading.Thread(target=lambda: results.append(scheduler.serve("hello-world")))
            for _ in range(5)
        ]
        for t in threads:
            t.start()
        started.wait(timeout=5)
        release.set()
        for t in threads:
            t.join(timeout=5)

        assert inner.calls == 1
        assert len(results) == 5
        assert all(r.page is not None for r in results)


class TestFreshAndStale:
    def test_fresh_served_from_cache(
        self,
        scheduler: RegenerationScheduler,
        generator: CountingGenerator,
        clock: FakeClock,
        runner: DeferredBackgroundRunner,
    ) -> None:
        scheduler.serve("hello-world")
        clock.advance(minutes=10)

        result = scheduler.serve("hello-world")

        assert result.freshness is Freshness.FRESH
        assert generator.calls == 1
        assert runner.tasks == []

    def test_stale_after_31_minutes_serves_old_page_and_schedules_once(
        self,
        scheduler: RegenerationScheduler,
        backend: InMemoryContentBackend,
        generator: CountingGenerator,
        clock: FakeClock,
        runner: DeferredBackgroundRunner,
    ) -> None:
        original = scheduler.serve("hello-world").page
        backend.add(make_raw_post(title="Updated"))
        clock.advance(minutes=31)

        first = scheduler.serve("hello-world")
        second = scheduler.serve("hello-world")

        assert first.freshness is Freshness.STALE
        assert first.page == original
        assert first.regeneration_scheduled is True
        assert second.page == original
        assert second.regeneration_scheduled is False
        assert len(runner.tasks) == 1
        assert scheduler.is_in_flight("hello-world")
        assert generator.calls == 1

    def test_background_regeneration_publishes_new_page(
        self,
        scheduler: RegenerationScheduler,
        backend: InMemoryContentBackend,
        clock: FakeClock,
        runner: DeferredBackgroundRunner,
    ) -> None:
        scheduler.serve("hello-world")
        backend.add(make_raw_post(title="Updated"))
        clock.advance(minutes=31)
        scheduler.serve("hello-world")

        assert runner.run_pending() == 1
        result = scheduler.serve("hello-world")

        assert result.freshness is Freshness.FRESH
        assert result.page is not None
        assert result.page.title == "Updated"
        assert not scheduler.is_in_flight("hello-world")

    def test_can_schedule_again_after_regeneration(
        self,
        scheduler: RegenerationScheduler,
        clock: FakeClock,
        runner: DeferredBackgroundRunner,
    ) -> None:
        scheduler.serve("hello-world")
        clock.advance(minutes=31)
        scheduler.serve("hello-world")
        runner.run_pending()
        clock.advance(minutes=31)

        result = scheduler.serve("hello-world")

        assert result.regeneration_scheduled is True

    def test_failed_regeneration_keeps_last_good_page(
        self,
        scheduler: RegenerationScheduler,
        backend: InMemoryContentBackend,
        backend_error: ContentBackendError,
        clock: FakeClock,
        runner: DeferredBackgroundRunner,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        original = scheduler.serve("hello-world").page
        clock.advance(minutes=31)
        scheduler.serve("hello-world")
        backend.fail_with = backend_error

        with caplog.at_level(logging.ERROR):
            runner.run_pending()

        result = scheduler.serve("hello-world")
        assert result.page == original
        assert result.freshness is Freshness.STALE
        assert result.regeneration_scheduled is True
        assert "Background regeneration failed" in caplog.text

    def test_deleted_document_is_evicted(
        self,
        scheduler: RegenerationScheduler,
        backend: InMemoryContentBackend,
        cache: InMemoryPageCache,
        clock: FakeClock,
        runner: DeferredBackgroundRunner,
    ) -> None:
        scheduler.serve("hello-world")
        backend.remove("hello-world")
        clock.advance(minutes=31)
        scheduler.serve("hello-world")

        runner.run_pending()

        assert cache.get("hello-world") is None
        assert scheduler.serve("hello-world").found is False


class TestSlugLocks:
    def test_unknown_slugs_leave_no_locks(
        self,
        cache: InMemoryPageCache,
        runner: DeferredBackgroundRunner,
        clock: FakeClock,
    ) -> None:
        scheduler = RegenerationScheduler(lambda slug: None, cache, runner, clock)

        for i in range(100):
            assert scheduler.serve(f"missing-{i}").found is False

        assert scheduler._slug_locks == {}

    def test_locks_released_after_generation_and_regeneration(
        self,
        scheduler: RegenerationScheduler,
        clock: FakeClock,
        runner: DeferredBackgroundRunner,
    ) -> None:
        scheduler.serve("hello-world")
        clock.advance(minutes=31)
        scheduler.serve("hello-world")
        runner.run_pending()

        assert scheduler._slug_locks == {}

    def test_locks_released_after_failure(
        self,
        scheduler: RegenerationScheduler,
        backend: InMemoryContentBackend,
        backend_error: ContentBackendError,
    ) -> None:
        backend.fail_with = backend_error

        with pytest.raises(ContentBackendError):
            scheduler.serve("hello-world")

        assert scheduler._slug_locks == {}
