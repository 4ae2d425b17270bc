"""
Content fetch component.

Retrieves one structured document by slug and converts the backend's loose
JSON blocks into the closed block variants in models.py.

Invariants:
- A missing document is a value (None), never an exception
- Backend failures propagate as ContentBackendError, no retries
- Unknown block types are dropped, unknown span types ignored
"""

from __future__ import annotations

import logging
import re
from typing import Any

from .models import (
    Block,
    ContentDocument,
    EmbedBlock,
    FetchContentInput,
    FetchContentOutput,
    HeadingBlock,
    ImageBlock,
    ListItemBlock,
    ParagraphBlock,
    PreformattedBlock,
    Span,
)
from .ports import ContentBackendPort

logger = logging.getLogger(__name__)

HEADING_TYPE = re.compile(r"^heading([1-6])$")
SPAN_TYPES = frozenset({"strong", "em", "hyperlink", "label"})


# --- Block Parsing ---


def parse_spans(raw_spans: Any) -> tuple[Span, ...]:
    """Parse inline spans, skipping unknown or malformed entries."""
    if not isinstance(raw_spans, list):
        return ()

    spans: list[Span] = []
    for raw in raw_spans:
        if not isinstance(raw, dict):
            continue
        span_type = raw.get("type")
        if span_type not in SPAN_TYPES:
            continue
        try:
            start = int(raw.get("start", 0))
            end = int(raw.get("end", 0))
        except (TypeError, ValueError):
            continue
        if end <= start:
            continue

        data = raw.get("data")
        if not isinstance(data, dict):
            data = {}
        spans.append(
            Span(
                start=start,
                end=end,
                type=span_type,
                url=data.get("url") if span_type == "hyperlink" else None,
                label=data.get("label") if span_type == "label" else None,
            )
        )
    return tuple(spans)


def parse_block(raw: dict[str, Any]) -> Block | None:
    """
    Convert one raw block into its variant.

    Returns None for block types this service does not know.
    """
    block_type = str(raw.get("type", ""))
    text = str(raw.get("text") or "")

    heading = HEADING_TYPE.match(block_type)
    if heading:
        return HeadingBlock(level=int(heading.group(1)), text=text, spans=parse_spans(raw.get("spans")))

    if block_type == "paragraph":
        return ParagraphBlock(text=text, spans=parse_spans(raw.get("spans")))

    if block_type == "preformatted":
        return PreformattedBlock(text=text, spans=parse_spans(raw.get("spans")))

    if block_type in ("list-item", "o-list-item"):
        return ListItemBlock(
            text=text,
            spans=parse_spans(raw.get("spans")),
            ordered=block_type == "o-list-item",
        )

    if block_type == "image":
        return ImageBlock(url=str(raw.get("url") or ""), alt=str(raw.get("alt") or ""))

    if block_type == "embed":
        oembed = raw.get("oembed") or {}
        return EmbedBlock(
            html=str(oembed.get("html") or ""),
            embed_url=str(oembed.get("embed_url") or ""),
        )

    logger.debug("Dropping unsupported block type %r", block_type)
    return None


def parse_blocks(raw_blocks: Any) -> tuple[Block, ...]:
    """Parse a raw block list, preserving order."""
    if not isinstance(raw_blocks, list):
        return ()

    blocks = []
    for raw in raw_blocks:
        if not isinstance(raw, dict):
            continue
        block = parse_block(raw)
        if block is not None:
            blocks.append(block)
    return tuple(blocks)


def parse_document(raw: dict[str, Any], slug: str) -> ContentDocument:
    """
    Build a ContentDocument from a raw backend document.

    Missing fields degrade to empty values rather than failing.
    """
    data = raw.get("data") or {}
    return ContentDocument(
        slug=slug,
        title=parse_blocks(data.get("title")),
        content=parse_blocks(data.get("content")),
        first_publication_date=str(raw.get("first_publication_date") or ""),
        last_publication_date=str(raw.get("last_publication_date") or ""),
        lang=str(raw.get("lang") or ""),
        raw=raw,
    )


# --- Service ---


class ContentFetcher:
    """Fetches posts from the content backend by slug."""

    def __init__(self, backend: ContentBackendPort, document_type: str = "post") -> None:
        self._backend = backend
        self._document_type = document_type

    def fetch(self, slug: str) -> ContentDocument | None:
        """
        Fetch one document.

        Returns None when the backend has no document (or no data) for the slug.
        """
        if not slug:
            raise ValueError("slug must be a non-empty string")

        logger.debug("Fetching %s %r", self._document_type, slug)
        raw = self._backend.get_by_uid(self._document_type, slug)

        if not raw or not raw.get("data"):
            logger.info("No %s found for slug %r", self._document_type, slug)
            return None

        return parse_document(raw, slug)


# --- Component Entry Point ---


def run(
    inp: FetchContentInput,
    *,
    backend: ContentBackendPort,
) -> FetchContentOutput:
    """Fetch a document by slug."""
    fetcher = ContentFetcher(backend, document_type=inp.document_type)
    return FetchContentOutput(document=fetcher.fetch(inp.slug))
