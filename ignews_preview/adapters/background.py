"""
Background runner adapters.

Implement BackgroundRunnerPort for the regeneration scheduler.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor

logger = logging.getLogger(__name__)


class ThreadPoolBackgroundRunner:
    """Runs tasks on a small thread pool."""

    def __init__(self, max_workers: int = 4) -> None:
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers,
            thread_name_prefix="preview-regen",
        )

    def submit(self, task: Callable[[], None]) -> None:
        future = self._executor.submit(task)
        future.add_done_callback(self._log_failure)

    @staticmethod
    def _log_failure(future: Future[None]) -> None:
        exc = future.exception()
        if exc is not None:
            logger.error("Background task raised", exc_info=exc)

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)
        logger.info("Background runner stopped")


class DeferredBackgroundRunner:
    """
    Collects tasks and runs them on demand.

    Used in tests and scripts to control when regeneration happens.
    """

    def __init__(self) -> None:
        self.tasks: list[Callable[[], None]] = []

    def submit(self, task: Callable[[], None]) -> None:
        self.tasks.append(task)

    def run_pending(self) -> int:
        """Run queued tasks in order. Returns how many ran."""
        pending, self.tasks = self.tasks, []
        for task in pending:
            task()
        return len(pending)
