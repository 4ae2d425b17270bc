"""
Regeneration component models.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Literal

from ignews_preview.components.page import PageOutput


class Freshness(str, Enum):
    FRESH = "fresh"  # serve cached page
    STALE = "stale"  # serve cached page once, regenerate in background
    MISSING = "missing"  # generate now, caller waits


FallbackMode = Literal["blocking"]


@dataclass(frozen=True)
class RegenerationConfig:
    """Time-based revalidation settings."""

    revalidate_seconds: int = 60 * 30
    fallback: FallbackMode = "blocking"


DEFAULT_REGENERATION_CONFIG = RegenerationConfig()


@dataclass(frozen=True)
class CachedPage:
    """A published page and the moment it was generated."""

    page: PageOutput
    generated_at: datetime


@dataclass(frozen=True)
class ServeResult:
    """
    Outcome of one page request.

    page is None when the slug has no document (not found).
    """

    slug: str
    page: PageOutput | None
    freshness: Freshness
    regeneration_scheduled: bool = False

    @property
    def found(self) -> bool:
        return self.page is not None
