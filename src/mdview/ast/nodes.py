#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdview/ast/nodes.py
"""AST node model for markdown rendering.

The tree consumed by mdview is a single tagged node type, ``MarkdownNode``,
whose ``type`` string names its semantic role. Attributes are only meaningful
for particular kinds (``level`` for headings, ``href`` for links and so on) and
stay ``None`` elsewhere.

Node kinds
----------
Block-level:
    document, paragraph, heading, code_block, blockquote, list, list_item,
    task_list_item, table, table_head, table_body, table_row, table_cell,
    thematic_break, math_block, html_block

Inline:
    text, strong, emphasis, strikethrough, underline, link, wiki_link, image,
    code_inline, math_inline, html_inline, softbreak, hardbreak

The ``type`` field is an open string: trees may carry kinds unknown to the
built-in renderers, which then fall back to the generic renderer.

Children are owned exclusively by their parent. The tree is acyclic and no node
appears under two parents.

"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Literal, Optional, Sequence, get_args

NodeType = Literal[
    "document",
    "paragraph",
    "heading",
    "text",
    "strong",
    "emphasis",
    "strikethrough",
    "link",
    "image",
    "code_block",
    "code_inline",
    "blockquote",
    "list",
    "list_item",
    "task_list_item",
    "table",
    "table_head",
    "table_body",
    "table_row",
    "table_cell",
    "math_inline",
    "math_block",
    "thematic_break",
    "softbreak",
    "hardbreak",
    "wiki_link",
    "html_block",
    "html_inline",
    "underline",
]

NODE_TYPES: frozenset[str] = frozenset(get_args(NodeType))

TableCellAlign = Literal["left", "center", "right", "default"]
TABLE_CELL_ALIGNMENTS: frozenset[str] = frozenset(get_args(TableCellAlign))


@dataclass
class MarkdownNode:
    """A single node of the markdown AST.

    Parameters
    ----------
    type : str
        Node kind, e.g. ``"paragraph"`` or ``"heading"``
    content : str or None, default = None
        Text content for leaf nodes (text, code, html, math)
    children : list of MarkdownNode or None, default = None
        Ordered child nodes for container kinds
    level : int or None, default = None
        Heading level (1-6)
    href : str or None, default = None
        Link target (links and wiki links)
    src : str or None, default = None
        Image source
    alt : str or None, default = None
        Image alternative text
    title : str or None, default = None
        Link or image title
    language : str or None, default = None
        Code block language
    ordered : bool or None, default = None
        Whether a list is ordered
    start : int or None, default = None
        First number of an ordered list
    checked : bool or None, default = None
        Task list item state
    align : str or None, default = None
        Table cell alignment ("left", "center", "right", "default")
    is_header : bool or None, default = None
        Whether a table cell belongs to the header row

    """

    type: str
    content: Optional[str] = None
    children: Optional[list[MarkdownNode]] = None
    level: Optional[int] = None
    href: Optional[str] = None
    src: Optional[str] = None
    alt: Optional[str] = None
    title: Optional[str] = None
    language: Optional[str] = None
    ordered: Optional[bool] = None
    start: Optional[int] = None
    checked: Optional[bool] = None
    align: Optional[str] = None
    is_header: Optional[bool] = None

    @property
    def has_children(self) -> bool:
        """Whether the node has at least one child."""
        return bool(self.children)

    def walk(self) -> Iterator[MarkdownNode]:
        """Iterate over this node and all descendants in document order.

        Yields
        ------
        MarkdownNode
            This node first, then each descendant depth-first

        """
        stack: list[MarkdownNode] = [self]
        while stack:
            node = stack.pop()
            yield node
            if node.children:
                stack.extend(reversed(node.children))

    def text_content(self) -> str:
        """Concatenate the ``content`` of this node and every descendant."""
        return "".join(node.content or "" for node in self.walk())


@dataclass(frozen=True)
class ParseError:
    """Failure descriptor reported by the parser.

    Parameters
    ----------
    message : str
        Human-readable description of the failure
    line : int or None, default = None
        1-based line of the failure, when known
    column : int or None, default = None
        1-based column of the failure, when known

    """

    message: str
    line: Optional[int] = None
    column: Optional[int] = None

    def describe(self) -> str:
        """Return the message with the location appended when available."""
        if self.line is None:
            return self.message
        if self.column is None:
            return f"{self.message} (line {self.line})"
        return f"{self.message} (line {self.line}, column {self.column})"


@dataclass(frozen=True)
class ParseResult:
    """Envelope returned by the parser: either nodes or an error.

    Parameters
    ----------
    success : bool
        Whether parsing succeeded
    nodes : list of MarkdownNode
        Parsed root nodes (empty on failure)
    error : ParseError or None
        Failure descriptor when ``success`` is False

    """

    success: bool
    nodes: list[MarkdownNode] = field(default_factory=list)
    error: Optional[ParseError] = None

    @classmethod
    def ok(cls, nodes: Sequence[MarkdownNode]) -> ParseResult:
        """Build a successful result."""
        return cls(success=True, nodes=list(nodes))

    @classmethod
    def failure(cls, message: str, line: int | None = None, column: int | None = None) -> ParseResult:
        """Build a failed result with an error descriptor."""
        return cls(success=False, nodes=[], error=ParseError(message=message, line=line, column=column))
