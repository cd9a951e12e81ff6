#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Unit tests for the markdown to AST parser."""

import logging

import pytest

pytest.importorskip("mistune")

from mdview.exceptions import ParsingError  # noqa: E402
from mdview.options import ParserOptions  # noqa: E402
from mdview.parsers.markdown import (  # noqa: E402
    INPUT_TOO_LARGE_MESSAGE,
    MarkdownParser,
    markdown_nodes,
    markdown_to_ast,
    parse_markdown,
)


def blocks(markdown, **options):
    return markdown_to_ast(markdown, ParserOptions(**options) if options else None).children


@pytest.mark.unit
class TestMarkdownBasics:
    """Test basic block parsing."""

    def test_single_document_root(self):
        result = parse_markdown("Hello")
        assert result.success
        assert len(result.nodes) == 1
        assert result.nodes[0].type == "document"

    def test_empty_input(self):
        doc = markdown_to_ast("")
        assert doc.type == "document"
        assert doc.children == []

    def test_simple_paragraph(self):
        (para,) = blocks("This is a paragraph.")
        assert para.type == "paragraph"
        assert [(c.type, c.content) for c in para.children] == [("text", "This is a paragraph.")]

    def test_heading_levels(self):
        nodes = blocks("# H1\n## H2\n### H3\n#### H4\n##### H5\n###### H6")
        assert [n.level for n in nodes] == [1, 2, 3, 4, 5, 6]
        assert all(n.type == "heading" for n in nodes)
        assert nodes[2].children[0].content == "H3"

    def test_fenced_code_block(self):
        (code,) = blocks("```python extra\nprint('hi')\n```")
        assert code.type == "code_block"
        assert code.language == "python"
        assert code.content == "print('hi')\n"

    def test_indented_code_block_has_no_language(self):
        (code,) = blocks("    x = 1\n")
        assert code.type == "code_block"
        assert code.language is None

    def test_blockquote(self):
        (quote,) = blocks("> quoted")
        assert quote.type == "blockquote"
        assert quote.children[0].type == "paragraph"

    def test_thematic_break(self):
        assert [n.type for n in blocks("a\n\n---\n\nb")] == ["paragraph", "thematic_break", "paragraph"]

    def test_html_block(self):
        (html,) = blocks("<div>raw</div>\n")
        assert html.type == "html_block"
        assert "<div>raw</div>" in html.content


@pytest.mark.unit
class TestInlineFormatting:
    """Test inline parsing."""

    def test_strong_and_emphasis(self):
        (para,) = blocks("a **b** _c_")
        assert [c.type for c in para.children] == ["text", "strong", "text", "emphasis"]
        assert para.children[1].children[0].content == "b"

    def test_code_inline_carries_content(self):
        (para,) = blocks("use `x = 1` here")
        code = para.children[1]
        assert code.type == "code_inline"
        assert code.content == "x = 1"
        assert code.children is None

    def test_link(self):
        (para,) = blocks('[docs](https://example.com "Docs")')
        link = para.children[0]
        assert link.type == "link"
        assert link.href == "https://example.com"
        assert link.title == "Docs"
        assert link.children[0].content == "docs"

    def test_image_alt_from_text(self):
        (para,) = blocks("![a cat](cat.png)")
        img = para.children[0]
        assert img.type == "image"
        assert img.src == "cat.png"
        assert img.alt == "a cat"
        assert img.children is None

    def test_breaks(self):
        (para,) = blocks("one\ntwo  \nthree")
        types = [c.type for c in para.children]
        assert "softbreak" in types
        assert "hardbreak" in types

    def test_adjacent_text_merged(self):
        (para,) = blocks("a & b")
        assert len(para.children) == 1
        assert para.children[0].content == "a & b"

    def test_inline_html(self):
        (para,) = blocks("a <b>bold</b>")
        assert "html_inline" in [c.type for c in para.children]


@pytest.mark.unit
class TestLists:
    """Test list and task list parsing."""

    def test_bullet_list(self):
        (lst,) = blocks("- one\n- two")
        assert lst.type == "list"
        assert lst.ordered is False
        assert lst.start is None
        assert [item.type for item in lst.children] == ["list_item", "list_item"]

    def test_tight_items_hold_inlines(self):
        (lst,) = blocks("- one\n- two")
        assert lst.children[0].children[0].type == "text"
        assert lst.children[0].children[0].content == "one"

    def test_loose_items_hold_paragraphs(self):
        (lst,) = blocks("- one\n\n- two")
        assert lst.children[0].children[0].type == "paragraph"

    def test_ordered_list_start(self):
        (lst,) = blocks("3. three\n4. four")
        assert lst.ordered is True
        assert lst.start == 3

    def test_task_list_items(self):
        (lst,) = blocks("- [ ] open\n- [x] done")
        assert [(item.type, item.checked) for item in lst.children] == [
            ("task_list_item", False),
            ("task_list_item", True),
        ]

    def test_task_lists_disabled(self):
        (lst,) = blocks("- [ ] open", gfm=False, enable_task_lists=False)
        assert lst.children[0].type == "list_item"


@pytest.mark.unit
class TestGfmExtensions:
    """Test GFM extensions and their option flags."""

    def test_table_structure(self):
        (table,) = blocks("| A | B |\n|:--|--:|\n| 1 | 2 |")
        assert table.type == "table"
        head, body = table.children
        assert head.type == "table_head"
        assert body.type == "table_body"
        header_row = head.children[0]
        assert header_row.type == "table_row"
        assert [(c.is_header, c.align) for c in header_row.children] == [(True, "left"), (True, "right")]
        assert [(c.is_header, c.children[0].content) for c in body.children[0].children] == [(False, "1"), (False, "2")]

    def test_default_alignment(self):
        (table,) = blocks("| A |\n|---|\n| 1 |")
        assert table.children[0].children[0].children[0].align == "default"

    def test_tables_disabled(self):
        nodes = blocks("| A |\n|---|\n| 1 |", gfm=False, enable_tables=False)
        assert all(n.type != "table" for n in nodes)

    def test_strikethrough(self):
        (para,) = blocks("~~gone~~")
        assert para.children[0].type == "strikethrough"

    def test_strikethrough_disabled(self):
        (para,) = blocks("~~gone~~", gfm=False, enable_strikethrough=False)
        assert para.children[0].type == "text"

    def test_autolink(self):
        (para,) = blocks("see https://example.com now")
        assert any(c.type == "link" and c.href == "https://example.com" for c in para.children)


@pytest.mark.unit
class TestOptionalSyntax:
    """Test math and wiki links."""

    def test_math(self):
        nodes = blocks("inline $x^2$\n\n$$\na+b\n$$\n", math=True)
        assert nodes[0].children[1].type == "math_inline"
        assert nodes[0].children[1].content == "x^2"
        assert nodes[1].type == "math_block"
        assert "a+b" in nodes[1].content

    def test_math_disabled_by_default(self):
        (para,) = blocks("inline $x^2$")
        assert all(c.type != "math_inline" for c in para.children)

    def test_wiki_links(self):
        (para,) = blocks("See [[Home]] and [[Other Page|the other]]", wiki=True)
        wiki = [c for c in para.children if c.type == "wiki_link"]
        assert [(w.href, w.children[0].content) for w in wiki] == [("Home", "Home"), ("Other Page", "the other")]

    def test_wiki_links_disabled_by_default(self):
        (para,) = blocks("See [[Home]]")
        assert all(c.type != "wiki_link" for c in para.children)


@pytest.mark.unit
class TestFailures:
    """Test size limits and failure envelopes."""

    def test_input_too_large_raises(self):
        parser = MarkdownParser(ParserOptions(max_input_size=10))
        with pytest.raises(ParsingError, match=INPUT_TOO_LARGE_MESSAGE):
            parser.parse("x" * 11)

    def test_size_counts_utf8_bytes(self):
        parser = MarkdownParser(ParserOptions(max_input_size=4))
        with pytest.raises(ParsingError):
            parser.parse("ééé")

    def test_input_at_limit_accepted(self):
        assert parse_markdown("abcd", ParserOptions(max_input_size=4)).success

    def test_parse_markdown_returns_failure(self, caplog):
        with caplog.at_level(logging.WARNING, logger="mdview.parsers.markdown"):
            result = parse_markdown("x" * 11, ParserOptions(max_input_size=10))
        assert not result.success
        assert result.nodes == []
        assert result.error.message == INPUT_TOO_LARGE_MESSAGE
        assert any("parsing failed" in record.message for record in caplog.records)

    def test_markdown_nodes_empty_on_failure(self):
        assert markdown_nodes("x" * 11, ParserOptions(max_input_size=10)) == []
        assert markdown_nodes("# hi")[0].type == "document"

    def test_deterministic(self, sample_markdown):
        assert parse_markdown(sample_markdown) == parse_markdown(sample_markdown)
