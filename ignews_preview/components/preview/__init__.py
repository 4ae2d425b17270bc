"""
Preview component.

Public API for turning a content document into a bounded public teaser.
"""

from ._richtext import RichTextConfig, is_safe_url, render_html, render_spans, render_text
from .component import (
    PreviewTransformer,
    extract_excerpt,
    format_display_date,
    parse_timestamp,
    resolve_locale,
    run,
    select_preview_blocks,
    transform,
)
from .models import (
    DEFAULT_PREVIEW_CONFIG,
    Preview,
    PreviewConfig,
    TransformInput,
    TransformOutput,
)

__all__ = [
    # Entry points
    "run",
    "transform",
    "PreviewTransformer",
    # Helpers
    "extract_excerpt",
    "format_display_date",
    "parse_timestamp",
    "resolve_locale",
    "select_preview_blocks",
    # Rich text
    "RichTextConfig",
    "is_safe_url",
    "render_html",
    "render_spans",
    "render_text",
    # Models
    "DEFAULT_PREVIEW_CONFIG",
    "Preview",
    "PreviewConfig",
    "TransformInput",
    "TransformOutput",
]
