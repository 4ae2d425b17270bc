"""
Regeneration component.

Public API for time-based page regeneration.
"""

from .component import PagePipeline, RegenerationScheduler, classify
from .models import (
    DEFAULT_REGENERATION_CONFIG,
    CachedPage,
    Freshness,
    RegenerationConfig,
    ServeResult,
)
from .ports import BackgroundRunnerPort, ClockPort, PageCachePort, PageGenerator

__all__ = [
    # Entry points
    "PagePipeline",
    "RegenerationScheduler",
    "classify",
    # Models
    "DEFAULT_REGENERATION_CONFIG",
    "CachedPage",
    "Freshness",
    "RegenerationConfig",
    "ServeResult",
    # Ports
    "BackgroundRunnerPort",
    "ClockPort",
    "PageCachePort",
    "PageGenerator",
]
