"""
Tests for the content fetch component.

- Raw blocks convert to the closed set of variants
- Missing documents are None, not errors
- Backend failures propagate
"""

from __future__ import annotations

import pytest

from ignews_preview.components.content_fetch import (
    ContentBackendError,
    ContentFetcher,
    EmbedBlock,
    FetchContentInput,
    HeadingBlock,
    ImageBlock,
    ListItemBlock,
    ParagraphBlock,
    PreformattedBlock,
    parse_block,
    parse_blocks,
    parse_document,
    run,
)
from tests.fakes import InMemoryContentBackend, make_raw_post


class TestParseBlock:
    """Raw JSON blocks map to variants."""

    def test_headings(self) -> None:
        block = parse_block({"type": "heading3", "text": "Title", "spans": []})
        assert block == HeadingBlock(level=3, text="Title")

    def test_paragraph_with_spans(self) -> None:
        block = parse_block(
            {
                "type": "paragraph",
                "text": "Hello world",
                "spans": [{"start": 0, "end": 5, "type": "strong"}],
            }
        )
        assert isinstance(block, ParagraphBlock)
        assert block.spans[0].type == "strong"
        assert (block.spans[0].start, block.spans[0].end) == (0, 5)

    def test_hyperlink_span_keeps_url(self) -> None:
        block = parse_block(
            {
                "type": "paragraph",
                "text": "docs",
                "spans": [
                    {"start": 0, "end": 4, "type": "hyperlink", "data": {"url": "https://x.dev"}}
                ],
            }
        )
        assert isinstance(block, ParagraphBlock)
        assert block.spans[0].url == "https://x.dev"

    def test_preformatted(self) -> None:
        assert isinstance(parse_block({"type": "preformatted", "text": "x = 1"}), PreformattedBlock)

    def test_list_items(self) -> None:
        bullet = parse_block({"type": "list-item", "text": "a"})
        ordered = parse_block({"type": "o-list-item", "text": "b"})
        assert bullet == ListItemBlock(text="a", ordered=False)
        assert ordered == ListItemBlock(text="b", ordered=True)

    def test_image_and_embed(self) -> None:
        image = parse_block({"type": "image", "url": "https://img/x.png", "alt": "x"})
        embed = parse_block(
            {"type": "embed", "oembed": {"html": "<iframe></iframe>", "embed_url": "https://yt"}}
        )
        assert image == ImageBlock(url="https://img/x.png", alt="x")
        assert embed == EmbedBlock(html="<iframe></iframe>", embed_url="https://yt")

    def test_unknown_type_dropped(self) -> None:
        assert parse_block({"type": "table", "text": "x"}) is None

    def test_unknown_and_malformed_spans_ignored(self) -> None:
        block = parse_block(
            {
                "type": "paragraph",
                "text": "abc",
                "spans": [
                    {"start": 0, "end": 1, "type": "sparkle"},
                    {"start": 2, "end": 1, "type": "em"},
                    "junk",
                ],
            }
        )
        assert isinstance(block, ParagraphBlock)
        assert block.spans == ()

    def test_parse_blocks_preserves_order_and_skips_junk(self) -> None:
        blocks = parse_blocks(
            [
                {"type": "paragraph", "text": "1"},
                None,
                {"type": "mystery"},
                {"type": "heading2", "text": "2"},
            ]
        )
        assert [b.text for b in blocks] == ["1", "2"]

    def test_parse_blocks_non_list(self) -> None:
        assert parse_blocks(None) == ()


class TestParseDocument:
    def test_fields_copied(self) -> None:
        doc = parse_document(make_raw_post(uid="p1", lang="en-us"), "p1")

        assert doc.slug == "p1"
        assert doc.lang == "en-us"
        assert doc.first_publication_date == "2023-03-01T12:00:00+0000"
        assert doc.last_publication_date == "2023-03-03T18:24:51+0000"
        assert len(doc.content) == 5

    def test_missing_fields_degrade(self) -> None:
        doc = parse_document({"data": {}}, "bare")

        assert doc.title == ()
        assert doc.content == ()
        assert doc.first_publication_date == ""
        assert doc.lang == ""


class TestContentFetcher:
    def test_fetch_found(self, backend: InMemoryContentBackend) -> None:
        doc = ContentFetcher(backend).fetch("hello-world")

        assert doc is not None
        assert doc.slug == "hello-world"
        assert backend.calls == [("post", "hello-world")]

    def test_fetch_unknown_slug_is_none(self, backend: InMemoryContentBackend) -> None:
        assert ContentFetcher(backend).fetch("nope") is None

    def test_document_without_data_is_none(self) -> None:
        repo = InMemoryContentBackend()
        raw = make_raw_post(uid="empty")
        raw["data"] = None
        repo.add(raw)

        assert ContentFetcher(repo).fetch("empty") is None

    def test_empty_slug_rejected(self, backend: InMemoryContentBackend) -> None:
        with pytest.raises(ValueError):
            ContentFetcher(backend).fetch("")

    def test_backend_error_propagates(
        self,
        backend: InMemoryContentBackend,
        backend_error: ContentBackendError,
    ) -> None:
        backend.fail_with = backend_error

        with pytest.raises(ContentBackendError):
            ContentFetcher(backend).fetch("hello-world")

    def test_run_entry_point(self, backend: InMemoryContentBackend) -> None:
        out = run(FetchContentInput(slug="hello-world"), backend=backend)
        missing = run(FetchContentInput(slug="nope"), backend=backend)

        assert out.found is True
        assert missing.found is False
