from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

import pytest

from ignews_preview.components.content_fetch import ContentBackendError, ContentDocument, parse_document
from tests.fakes import FakeClock, InMemoryContentBackend, make_raw_post


@pytest.fixture
def now() -> datetime:
    return datetime(2024, 6, 15, 12, 0, 0, tzinfo=UTC)


@pytest.fixture
def clock(now: datetime) -> FakeClock:
    return FakeClock(now)


@pytest.fixture
def raw_post() -> dict[str, Any]:
    return make_raw_post()


@pytest.fixture
def document(raw_post: dict[str, Any]) -> ContentDocument:
    return parse_document(raw_post, raw_post["uid"])


@pytest.fixture
def backend(raw_post: dict[str, Any]) -> InMemoryContentBackend:
    repo = InMemoryContentBackend()
    repo.add(raw_post)
    return repo


@pytest.fixture
def backend_error() -> ContentBackendError:
    return ContentBackendError("connection refused")
