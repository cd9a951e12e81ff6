#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdview/parsers/markdown.py
"""Markdown to AST parser.

This module turns markdown text into the ``MarkdownNode`` tree consumed by the
renderers, using mistune 3 as the grammar engine. The mistune token stream is
reshaped into a single ``document`` root whose structure mirrors a classic
CommonMark event parser:

- tight list items hold their inline content directly (no paragraph)
- task list items become ``task_list_item`` nodes with ``checked``
- tables are ``table > table_head|table_body > table_row > table_cell``
- code, math and html nodes carry their source in ``content``
- adjacent text runs are merged

Parser options are honoured as passed: each GFM extension is active when
``gfm`` or its own flag is on.
"""

from __future__ import annotations

import logging
import re
import time
from typing import Any, Callable, Iterable, Optional

from mdview.ast.nodes import TABLE_CELL_ALIGNMENTS, MarkdownNode, ParseResult
from mdview.constants import DEPS_MARKDOWN
from mdview.exceptions import MdViewError, ParsingError
from mdview.options.parser import ParserOptions
from mdview.utils.decorators import debug_timer, requires_dependencies

logger = logging.getLogger(__name__)

INPUT_TOO_LARGE_MESSAGE = "Input exceeds maximum size limit"
PARSE_FAILED_MESSAGE = "Failed to parse markdown"
PARSE_TIMEOUT_MESSAGE = "Parsing exceeded time limit"

# [[Target]] or [[Target|label]]
WIKI_LINK_PATTERN = r"\[\[(?P<wiki_target>[^\]\|\n]+)(?:\|(?P<wiki_label>[^\]\n]+))?\]\]"


def _parse_wiki_link(inline: Any, m: re.Match, state: Any) -> int:
    target = m.group("wiki_target").strip()
    label = m.group("wiki_label")
    state.append_token(
        {
            "type": "wiki_link",
            "children": [{"type": "text", "raw": (label or target).strip()}],
            "attrs": {"target": target},
        }
    )
    return m.end()


def wiki_links(md: Any) -> None:
    """Mistune plugin recognising ``[[Target]]`` and ``[[Target|label]]``."""
    md.inline.register("wiki_link", WIKI_LINK_PATTERN, _parse_wiki_link, before="link")


def _text(content: str) -> MarkdownNode:
    return MarkdownNode(type="text", content=content)


def _append_inline(nodes: list[MarkdownNode], node: MarkdownNode) -> None:
    """Append ``node``, merging it into a preceding text run."""
    if node.type == "text" and nodes and nodes[-1].type == "text" and nodes[-1].children is None:
        nodes[-1].content = (nodes[-1].content or "") + (node.content or "")
        return
    nodes.append(node)


class MarkdownParser:
    """Parse markdown text into a ``document`` rooted ``MarkdownNode`` tree.

    Parameters
    ----------
    options : ParserOptions or None, default None
        Parser configuration

    Examples
    --------
        >>> parser = MarkdownParser()
        >>> [node.type for node in parser.parse("# Hi\\n\\ntext")[0].children]
        ['heading', 'paragraph']

    """

    def __init__(self, options: Optional[ParserOptions] = None):
        """Initialize the parser; the mistune instance is built on first use."""
        self.options = options or ParserOptions()
        self._markdown: Any = None

    def _plugins(self) -> list[Any]:
        plugins: list[Any] = []
        if self.options.strikethrough_enabled:
            plugins.append("strikethrough")
        if self.options.tables_enabled:
            plugins.append("table")
        if self.options.task_lists_enabled:
            plugins.append("task_lists")
        if self.options.autolink_enabled:
            plugins.append("url")
        if self.options.math:
            plugins.append("math")
        if self.options.wiki:
            plugins.append(wiki_links)
        return plugins

    def _get_markdown(self) -> Any:
        if self._markdown is None:
            import mistune

            # renderer=None makes mistune return the token stream
            self._markdown = mistune.create_markdown(plugins=self._plugins(), renderer=None)
        return self._markdown

    @requires_dependencies("markdown", DEPS_MARKDOWN)
    def parse(self, content: str) -> list[MarkdownNode]:
        """Parse markdown text.

        Parameters
        ----------
        content : str
            Markdown source

        Returns
        -------
        list of MarkdownNode
            A single ``document`` node

        Raises
        ------
        ParsingError
            If the input is too large, parsing fails or takes longer than the
            configured timeout
        DependencyError
            If mistune is not installed

        """
        if len(content.encode("utf-8")) > self.options.max_input_size:
            raise ParsingError(INPUT_TOO_LARGE_MESSAGE)

        if not content:
            return [MarkdownNode(type="document", children=[])]

        start = time.perf_counter()
        with debug_timer(logger, "Parsing markdown"):
            try:
                tokens, _state = self._get_markdown().parse(content)
            except Exception as e:
                raise ParsingError(f"{PARSE_FAILED_MESSAGE}: {e}", original_error=e) from e
            children = self._process_blocks(tokens if isinstance(tokens, list) else [])

        elapsed_ms = (time.perf_counter() - start) * 1000
        if elapsed_ms > self.options.timeout:
            raise ParsingError(f"{PARSE_TIMEOUT_MESSAGE} ({elapsed_ms:.0f}ms > {self.options.timeout}ms)")

        return [MarkdownNode(type="document", children=children)]

    # Block tokens

    def _process_blocks(self, tokens: Iterable[dict[str, Any]]) -> list[MarkdownNode]:
        nodes: list[MarkdownNode] = []
        for token in tokens:
            if not isinstance(token, dict):
                continue
            node = self._process_block(token)
            if node is not None:
                nodes.append(node)
        return nodes

    def _process_block(self, token: dict[str, Any]) -> Optional[MarkdownNode]:
        token_type = token.get("type", "")
        handler = self._block_handlers().get(token_type)
        if handler is not None:
            return handler(token)
        if token_type != "blank_line":
            logger.debug("Skipping unsupported block token '%s'", token_type)
        return None

    def _block_handlers(self) -> dict[str, Callable[[dict[str, Any]], Optional[MarkdownNode]]]:
        return {
            "heading": self._process_heading,
            "paragraph": self._process_paragraph,
            "block_text": self._process_paragraph,
            "block_code": self._process_code_block,
            "block_quote": self._process_block_quote,
            "list": self._process_list,
            "table": self._process_table,
            "thematic_break": lambda token: MarkdownNode(type="thematic_break"),
            "block_html": self._process_html_block,
            "block_math": self._process_math_block,
        }

    def _process_heading(self, token: dict[str, Any]) -> MarkdownNode:
        attrs = token.get("attrs") or {}
        level = attrs.get("level", 1)
        if not isinstance(level, int) or not 1 <= level <= 6:
            level = 1
        return MarkdownNode(type="heading", level=level, children=self._process_inlines(token.get("children", [])))

    def _process_paragraph(self, token: dict[str, Any]) -> MarkdownNode:
        return MarkdownNode(type="paragraph", children=self._process_inlines(token.get("children", [])))

    def _process_code_block(self, token: dict[str, Any]) -> MarkdownNode:
        attrs = token.get("attrs") or {}
        info = (attrs.get("info") or "").strip()
        language = info.split(maxsplit=1)[0] if info else None
        return MarkdownNode(type="code_block", content=token.get("raw", ""), language=language)

    def _process_block_quote(self, token: dict[str, Any]) -> MarkdownNode:
        return MarkdownNode(type="blockquote", children=self._process_blocks(token.get("children", [])))

    def _process_list(self, token: dict[str, Any]) -> MarkdownNode:
        attrs = token.get("attrs") or {}
        ordered = bool(attrs.get("ordered", False))
        items = [self._process_list_item(child) for child in token.get("children", []) if isinstance(child, dict)]
        return MarkdownNode(
            type="list",
            ordered=ordered,
            start=attrs.get("start", 1) if ordered else None,
            children=items,
        )

    def _process_list_item(self, token: dict[str, Any]) -> MarkdownNode:
        children: list[MarkdownNode] = []
        for child in token.get("children", []):
            if not isinstance(child, dict):
                continue
            if child.get("type") == "block_text":
                # Tight items hold their inline content directly
                for inline in self._process_inlines(child.get("children", [])):
                    _append_inline(children, inline)
                continue
            node = self._process_block(child)
            if node is not None:
                children.append(node)

        if token.get("type") == "task_list_item":
            attrs = token.get("attrs") or {}
            return MarkdownNode(type="task_list_item", checked=bool(attrs.get("checked", False)), children=children)
        return MarkdownNode(type="list_item", children=children)

    def _process_table(self, token: dict[str, Any]) -> MarkdownNode:
        sections: list[MarkdownNode] = []
        for section in token.get("children", []):
            section_type = section.get("type")
            if section_type == "table_head":
                # Header cells are direct children of table_head
                cells = [self._process_table_cell(cell, is_header=True) for cell in section.get("children", [])]
                row = MarkdownNode(type="table_row", children=cells)
                sections.append(MarkdownNode(type="table_head", children=[row]))
            elif section_type == "table_body":
                rows = [
                    MarkdownNode(
                        type="table_row",
                        children=[self._process_table_cell(cell, is_header=False) for cell in row.get("children", [])],
                    )
                    for row in section.get("children", [])
                ]
                sections.append(MarkdownNode(type="table_body", children=rows))
        return MarkdownNode(type="table", children=sections)

    def _process_table_cell(self, token: dict[str, Any], is_header: bool) -> MarkdownNode:
        attrs = token.get("attrs") or {}
        align = attrs.get("align") or "default"
        if align not in TABLE_CELL_ALIGNMENTS:
            align = "default"
        return MarkdownNode(
            type="table_cell",
            is_header=is_header,
            align=align,
            children=self._process_inlines(token.get("children", [])),
        )

    def _process_html_block(self, token: dict[str, Any]) -> MarkdownNode:
        return MarkdownNode(type="html_block", content=token.get("raw", ""))

    def _process_math_block(self, token: dict[str, Any]) -> MarkdownNode:
        return MarkdownNode(type="math_block", content=token.get("raw", ""))

    # Inline tokens

    def _process_inlines(self, tokens: Iterable[dict[str, Any]]) -> list[MarkdownNode]:
        nodes: list[MarkdownNode] = []
        for token in tokens:
            if not isinstance(token, dict):
                continue
            node = self._process_inline(token)
            if node is not None:
                _append_inline(nodes, node)
        return nodes

    def _process_inline(self, token: dict[str, Any]) -> Optional[MarkdownNode]:
        token_type = token.get("type", "")
        attrs = token.get("attrs") or {}

        if token_type == "text":
            return _text(token.get("raw", ""))
        if token_type in ("strong", "emphasis", "strikethrough"):
            return MarkdownNode(type=token_type, children=self._process_inlines(token.get("children", [])))
        if token_type == "codespan":
            return MarkdownNode(type="code_inline", content=token.get("raw", ""))
        if token_type == "link":
            return MarkdownNode(
                type="link",
                href=attrs.get("url") or None,
                title=attrs.get("title") or None,
                children=self._process_inlines(token.get("children", [])),
            )
        if token_type == "image":
            return self._process_image(token)
        if token_type == "softbreak":
            return MarkdownNode(type="softbreak")
        if token_type == "linebreak":
            return MarkdownNode(type="softbreak" if attrs.get("soft") else "hardbreak")
        if token_type == "inline_html":
            return MarkdownNode(type="html_inline", content=token.get("raw", ""))
        if token_type == "inline_math":
            return MarkdownNode(type="math_inline", content=token.get("raw", ""))
        if token_type == "wiki_link":
            return MarkdownNode(
                type="wiki_link",
                href=attrs.get("target") or None,
                children=self._process_inlines(token.get("children", [])),
            )

        logger.debug("Skipping unsupported inline token '%s'", token_type)
        return None

    def _process_image(self, token: dict[str, Any]) -> MarkdownNode:
        attrs = token.get("attrs") or {}
        children = self._process_inlines(token.get("children", []))
        alt = "".join(child.content or "" for child in children if child.type == "text")
        return MarkdownNode(
            type="image",
            src=attrs.get("url") or None,
            title=attrs.get("title") or None,
            alt=alt or None,
            children=None if alt else (children or None),
        )


def parse_markdown(content: str, options: Optional[ParserOptions] = None) -> ParseResult:
    """Parse markdown into a ``ParseResult`` without raising.

    Parameters
    ----------
    content : str
        Markdown source
    options : ParserOptions or None, default None
        Parser configuration

    Returns
    -------
    ParseResult
        ``ok`` with a single ``document`` node, or ``failure`` describing why
        parsing did not succeed (input too large, timeout, missing mistune)

    Examples
    --------
        >>> parse_markdown("").nodes[0].type
        'document'

    """
    parser = MarkdownParser(options)
    try:
        return ParseResult.ok(parser.parse(content))
    except ParsingError as e:
        logger.warning("Markdown parsing failed: %s", e.message)
        return ParseResult.failure(e.message, e.line, e.column)
    except MdViewError as e:
        logger.warning("Markdown parsing unavailable: %s", e.message)
        return ParseResult.failure(e.message)


def markdown_to_ast(content: str, options: Optional[ParserOptions] = None) -> MarkdownNode:
    """Parse markdown and return the ``document`` node.

    Raises
    ------
    ParsingError
        If parsing fails

    """
    return MarkdownParser(options).parse(content)[0]


def markdown_nodes(content: str, options: Optional[ParserOptions] = None) -> list[MarkdownNode]:
    """Parse markdown and return the root nodes, or an empty list on failure."""
    result = parse_markdown(content, options)
    return result.nodes if result.success else []
