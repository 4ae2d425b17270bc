"""
Preview component models.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any

from ignews_preview.components.content_fetch import ContentDocument

# --- Configuration ---


@dataclass(frozen=True)
class PreviewConfig:
    """Truncation and formatting rules for previews."""

    max_blocks: int = 3
    excluded_block_types: frozenset[str] = field(
        default_factory=lambda: frozenset(["preformatted"])
    )
    excerpt_block_type: str = "paragraph"
    default_locale: str = "pt-BR"


DEFAULT_PREVIEW_CONFIG = PreviewConfig()


# --- Preview ---


@dataclass(frozen=True)
class Preview:
    """
    Public teaser for one post.

    Built fresh on every regeneration and replaced, never mutated.
    """

    slug: str
    title: str
    content: str
    excerpt: str
    updated_at: str
    date_published: str
    date_modified: str
    lang: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


# --- Input / Output ---


@dataclass(frozen=True)
class TransformInput:
    """Input for building a preview from a document."""

    document: ContentDocument


@dataclass(frozen=True)
class TransformOutput:
    preview: Preview
    blocks_shown: int
    blocks_total: int
