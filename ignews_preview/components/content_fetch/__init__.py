"""
Content fetch component.

Public API for retrieving structured documents from the content backend.
"""

from .component import ContentFetcher, parse_block, parse_blocks, parse_document, run
from .models import (
    Block,
    ContentBackendError,
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
    block_type_name,
)
from .ports import ContentBackendPort

__all__ = [
    # Entry points
    "ContentFetcher",
    "run",
    "parse_block",
    "parse_blocks",
    "parse_document",
    # Models
    "Block",
    "ContentDocument",
    "EmbedBlock",
    "FetchContentInput",
    "FetchContentOutput",
    "HeadingBlock",
    "ImageBlock",
    "ListItemBlock",
    "ParagraphBlock",
    "PreformattedBlock",
    "Span",
    "block_type_name",
    # Errors
    "ContentBackendError",
    # Ports
    "ContentBackendPort",
]
