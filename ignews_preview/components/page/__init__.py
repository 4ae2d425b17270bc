"""
Page component.

Public API for assembling preview pages.
"""

from .component import (
    PageAssembler,
    assemble,
    build_structured_data,
    render_body,
    render_not_found_html,
    render_unavailable_html,
)
from .models import DEFAULT_PAGE_CONFIG, PageConfig, PageOutput, PublisherIdentity, SiteConfig

__all__ = [
    "PageAssembler",
    "assemble",
    "build_structured_data",
    "render_body",
    "render_not_found_html",
    "render_unavailable_html",
    "DEFAULT_PAGE_CONFIG",
    "PageConfig",
    "PageOutput",
    "PublisherIdentity",
    "SiteConfig",
]
