"""
Content fetch component models.

Structured documents as delivered by the content backend, converted into
a closed set of block variants at the fetch boundary.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

# --- Inline Spans ---

SpanType = Literal["strong", "em", "hyperlink", "label"]


@dataclass(frozen=True)
class Span:
    """Inline formatting applied to [start, end) of a block's text."""

    start: int
    end: int
    type: SpanType
    url: str | None = None  # hyperlink target
    label: str | None = None  # label class name


# --- Block Variants ---


@dataclass(frozen=True)
class HeadingBlock:
    """heading1 .. heading6"""

    level: int
    text: str
    spans: tuple[Span, ...] = ()


@dataclass(frozen=True)
class ParagraphBlock:
    text: str
    spans: tuple[Span, ...] = ()


@dataclass(frozen=True)
class PreformattedBlock:
    """Code sample. Never part of a preview."""

    text: str
    spans: tuple[Span, ...] = ()


@dataclass(frozen=True)
class ListItemBlock:
    text: str
    spans: tuple[Span, ...] = ()
    ordered: bool = False


@dataclass(frozen=True)
class ImageBlock:
    url: str
    alt: str = ""


@dataclass(frozen=True)
class EmbedBlock:
    html: str
    embed_url: str = ""


Block = HeadingBlock | ParagraphBlock | PreformattedBlock | ListItemBlock | ImageBlock | EmbedBlock

# Backend type tag for each variant, used for config-driven filtering.
BLOCK_TYPE_NAMES: dict[type, str] = {
    ParagraphBlock: "paragraph",
    PreformattedBlock: "preformatted",
    ImageBlock: "image",
    EmbedBlock: "embed",
}


def block_type_name(block: Block) -> str:
    """Return the backend type tag for a block (e.g. "heading2", "o-list-item")."""
    if isinstance(block, HeadingBlock):
        return f"heading{block.level}"
    if isinstance(block, ListItemBlock):
        return "o-list-item" if block.ordered else "list-item"
    return BLOCK_TYPE_NAMES[type(block)]


# --- Document ---


@dataclass(frozen=True)
class ContentDocument:
    """
    One post as stored by the content backend.

    Owned by the backend; this service never mutates it.
    """

    slug: str
    title: tuple[Block, ...]
    content: tuple[Block, ...]
    first_publication_date: str
    last_publication_date: str
    lang: str
    raw: dict[str, Any] = field(default_factory=dict, compare=False, repr=False)


# --- Errors ---


class ContentBackendError(Exception):
    """The content backend query itself failed (network, 5xx, bad payload)."""

    def __init__(self, message: str, slug: str | None = None) -> None:
        super().__init__(message)
        self.slug = slug


# --- Input / Output ---


@dataclass(frozen=True)
class FetchContentInput:
    """Input for fetching a document by slug."""

    slug: str
    document_type: str = "post"


@dataclass(frozen=True)
class FetchContentOutput:
    """Fetched document, or None when the backend has nothing for the slug."""

    document: ContentDocument | None

    @property
    def found(self) -> bool:
        return self.document is not None
