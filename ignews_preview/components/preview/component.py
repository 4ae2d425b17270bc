"""
Preview component - truncate a document into a public teaser.

Invariants:
- Excluded block types (code samples) are filtered out before truncation
- At most max_blocks qualifying blocks are rendered, in document order
- The excerpt is the first paragraph of the unfiltered document
- Pure: identical documents yield identical previews
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime

from babel import Locale, UnknownLocaleError
from babel.dates import format_date, get_date_format

from ignews_preview.components.content_fetch import Block, ContentDocument, block_type_name

from ._richtext import DEFAULT_CONFIG, RichTextConfig, block_text, render_html, render_text
from .models import DEFAULT_PREVIEW_CONFIG, Preview, PreviewConfig, TransformInput, TransformOutput

logger = logging.getLogger(__name__)


# --- Block Selection ---


def select_preview_blocks(
    blocks: tuple[Block, ...],
    config: PreviewConfig = DEFAULT_PREVIEW_CONFIG,
) -> tuple[Block, ...]:
    """Drop excluded block types, then keep the first max_blocks."""
    qualifying = [b for b in blocks if block_type_name(b) not in config.excluded_block_types]
    return tuple(qualifying[: max(0, config.max_blocks)])


def extract_excerpt(
    blocks: tuple[Block, ...],
    config: PreviewConfig = DEFAULT_PREVIEW_CONFIG,
) -> str:
    """Plain text of the first excerpt-type block anywhere in the document."""
    for block in blocks:
        if block_type_name(block) == config.excerpt_block_type:
            return block_text(block)
    return ""


# --- Dates ---


def parse_timestamp(value: str) -> datetime | None:
    """Parse a backend timestamp such as 2023-03-03T18:24:51+0000."""
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        try:
            parsed = datetime.strptime(value, "%Y-%m-%dT%H:%M:%S%z")
        except ValueError:
            return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


def resolve_locale(tag: str, default: str = DEFAULT_PREVIEW_CONFIG.default_locale) -> Locale:
    """Map a backend locale tag (pt-br, en-us) to a Babel Locale."""
    for candidate in (tag, default):
        if not candidate:
            continue
        try:
            return Locale.parse(candidate.replace("-", "_"))
        except (ValueError, UnknownLocaleError):
            logger.debug("Unknown locale tag %r", candidate)
    return Locale.parse("en_US")


def _two_digit_day(pattern: str) -> str:
    """Widen a lone 'd' field to 'dd', leaving quoted literals alone."""
    out: list[str] = []
    in_quote = False
    i = 0
    while i < len(pattern):
        ch = pattern[i]
        if ch == "'":
            in_quote = not in_quote
            out.append(ch)
            i += 1
            continue

        if ch == "d" and not in_quote:
            run_end = i
            while run_end < len(pattern) and pattern[run_end] == "d":
                run_end += 1
            out.append("dd" if run_end - i == 1 else pattern[i:run_end])
            i = run_end
            continue

        out.append(ch)
        i += 1
    return "".join(out)


def format_display_date(
    value: str,
    locale_tag: str,
    default_locale: str = DEFAULT_PREVIEW_CONFIG.default_locale,
) -> str:
    """
    Format a timestamp as day / long month / year for a locale.

    "2023-03-03T10:00:00+0000", "pt-br" -> "03 de março de 2023"
    """
    parsed = parse_timestamp(value)
    if parsed is None:
        return ""

    locale = resolve_locale(locale_tag, default_locale)
    pattern = _two_digit_day(get_date_format("long", locale=locale).pattern)
    return format_date(parsed.date(), format=pattern, locale=locale)


# --- Transformation ---


def transform(
    document: ContentDocument,
    config: PreviewConfig = DEFAULT_PREVIEW_CONFIG,
    rich_text_config: RichTextConfig = DEFAULT_CONFIG,
) -> Preview:
    """Build the Preview for a document."""
    shown = select_preview_blocks(document.content, config)

    return Preview(
        slug=document.slug,
        title=render_text(document.title),
        content=render_html(shown, rich_text_config),
        excerpt=extract_excerpt(document.content, config),
        updated_at=format_display_date(
            document.last_publication_date,
            document.lang,
            config.default_locale,
        ),
        date_published=document.first_publication_date,
        date_modified=document.last_publication_date,
        lang=document.lang,
    )


class PreviewTransformer:
    """Holds preview configuration and builds previews."""

    def __init__(
        self,
        config: PreviewConfig | None = None,
        rich_text_config: RichTextConfig | None = None,
    ) -> None:
        self._config = config or DEFAULT_PREVIEW_CONFIG
        self._rich_text_config = rich_text_config or DEFAULT_CONFIG

    @property
    def config(self) -> PreviewConfig:
        return self._config

    def transform(self, document: ContentDocument) -> Preview:
        return transform(document, self._config, self._rich_text_config)


# --- Component Entry Point ---


def run(
    inp: TransformInput,
    *,
    config: PreviewConfig | None = None,
) -> TransformOutput:
    """Transform a document and report how much of it the preview shows."""
    config = config or DEFAULT_PREVIEW_CONFIG
    shown = select_preview_blocks(inp.document.content, config)

    return TransformOutput(
        preview=transform(inp.document, config),
        blocks_shown=len(shown),
        blocks_total=len(inp.document.content),
    )
