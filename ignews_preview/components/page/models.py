"""
Page component models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class PublisherIdentity:
    """Fixed author/publisher identity for structured data."""

    author_name: str = "Marcon Willian"
    publisher_name: str = "Marcon Willian"
    publisher_logo_url: str = "https://github.com/MarconWillian.png"


@dataclass(frozen=True)
class SiteConfig:
    """Site-wide page settings."""

    name: str = "ig.news"
    subscribe_path: str = "/"
    access_endpoint_path: str = "/api/posts/preview/{slug}/access"
    cta_text: str = "Wanna continue reading?"
    cta_link_text: str = "Subscribe now 🤗"


@dataclass(frozen=True)
class PageConfig:
    site: SiteConfig = field(default_factory=SiteConfig)
    identity: PublisherIdentity = field(default_factory=PublisherIdentity)


DEFAULT_PAGE_CONFIG = PageConfig()


@dataclass(frozen=True)
class PageOutput:
    """A fully rendered preview page, read-only once published."""

    slug: str
    title: str
    description: str
    lang: str
    structured_data: dict[str, Any]
    body_html: str
    html: str
