"""
Structured text rendering.

Renders content blocks to safe HTML or plain text.

Key behaviors:
- Text is HTML-escaped, newlines become <br />
- Spans nest by start offset; crossing spans are split
- Links with forbidden protocols render as plain text
- Consecutive list items are grouped into one <ul>/<ol>
"""

from __future__ import annotations

import html
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from ignews_preview.components.content_fetch import (
    Block,
    EmbedBlock,
    HeadingBlock,
    ImageBlock,
    ListItemBlock,
    ParagraphBlock,
    PreformattedBlock,
    Span,
)

# --- Configuration ---


@dataclass(frozen=True)
class RichTextConfig:
    """Link handling options."""

    add_noopener: bool = True
    add_noreferrer: bool = True
    link_target: str = "_blank"

    forbid_protocols: frozenset[str] = field(
        default_factory=lambda: frozenset(
            [
                "javascript:",
                "data:",
                "vbscript:",
            ]
        )
    )


DEFAULT_CONFIG = RichTextConfig()


def is_safe_url(url: str, config: RichTextConfig = DEFAULT_CONFIG) -> bool:
    """Check that a URL does not use a forbidden protocol."""
    if not url:
        return False

    url_lower = url.lower().strip()
    return not any(url_lower.startswith(protocol) for protocol in config.forbid_protocols)


def build_link_rel(config: RichTextConfig = DEFAULT_CONFIG) -> str:
    """Build rel attribute value for links."""
    parts = []
    if config.add_noopener:
        parts.append("noopener")
    if config.add_noreferrer:
        parts.append("noreferrer")
    return " ".join(parts)


def _escape(text: str) -> str:
    return html.escape(text).replace("\n", "<br />")


# --- Spans ---


def _wrap(span: Span, content: str, config: RichTextConfig) -> str:
    if span.type == "strong":
        return f"<strong>{content}</strong>"
    if span.type == "em":
        return f"<em>{content}</em>"
    if span.type == "label":
        return f'<span class="{html.escape(span.label or "")}">{content}</span>'
    if span.type == "hyperlink":
        url = span.url or ""
        if not is_safe_url(url, config):
            return content
        rel = build_link_rel(config)
        return (
            f'<a href="{html.escape(url)}" target="{html.escape(config.link_target)}" '
            f'rel="{rel}">{content}</a>'
        )
    return content


def _render_range(
    text: str,
    spans: Sequence[Span],
    start: int,
    end: int,
    config: RichTextConfig,
) -> str:
    out: list[str] = []
    pos = start

    ordered = sorted(spans, key=lambda s: (s.start, -s.end))
    for idx, span in enumerate(ordered):
        span_start = max(span.start, pos)
        span_end = min(span.end, end)
        if span_end <= span_start:
            continue

        out.append(_escape(text[pos:span_start]))
        inner = [s for s in ordered[idx + 1 :] if s.start < span_end and s.end > span_start]
        out.append(_wrap(span, _render_range(text, inner, span_start, span_end, config), config))
        pos = span_end

    out.append(_escape(text[pos:end]))
    return "".join(out)


def render_spans(text: str, spans: Sequence[Span], config: RichTextConfig = DEFAULT_CONFIG) -> str:
    """Render a block's text with its inline spans applied."""
    return _render_range(text, spans, 0, len(text), config)


# --- Blocks ---


def render_block(block: Block, config: RichTextConfig = DEFAULT_CONFIG) -> str:
    """Render one block. List items render as bare <li>."""
    if isinstance(block, HeadingBlock):
        level = max(1, min(6, block.level))
        return f"<h{level}>{render_spans(block.text, block.spans, config)}</h{level}>"
    if isinstance(block, ParagraphBlock):
        return f"<p>{render_spans(block.text, block.spans, config)}</p>"
    if isinstance(block, PreformattedBlock):
        return f"<pre>{render_spans(block.text, block.spans, config)}</pre>"
    if isinstance(block, ListItemBlock):
        return f"<li>{render_spans(block.text, block.spans, config)}</li>"
    if isinstance(block, ImageBlock):
        if not is_safe_url(block.url, config):
            return ""
        return (
            f'<p class="block-img"><img src="{html.escape(block.url)}" '
            f'alt="{html.escape(block.alt)}" /></p>'
        )
    if isinstance(block, EmbedBlock):
        return f'<div data-oembed="{html.escape(block.embed_url)}">{block.html}</div>'
    raise TypeError(f"Unknown block type: {type(block)}")


def render_html(blocks: Iterable[Block], config: RichTextConfig = DEFAULT_CONFIG) -> str:
    """Render blocks to HTML, grouping consecutive list items."""
    out: list[str] = []
    open_list: str | None = None

    for block in blocks:
        list_tag = None
        if isinstance(block, ListItemBlock):
            list_tag = "ol" if block.ordered else "ul"

        if open_list and open_list != list_tag:
            out.append(f"</{open_list}>")
            open_list = None
        if list_tag and open_list is None:
            out.append(f"<{list_tag}>")
            open_list = list_tag

        out.append(render_block(block, config))

    if open_list:
        out.append(f"</{open_list}>")

    return "".join(out)


def block_text(block: Block) -> str:
    """Plain text of a block; empty for images and embeds."""
    if isinstance(block, (ImageBlock, EmbedBlock)):
        return ""
    return block.text


def render_text(blocks: Iterable[Block], separator: str = " ") -> str:
    """Plain text of all text-bearing blocks joined by separator."""
    return separator.join(text for text in (block_text(b) for b in blocks) if text)
