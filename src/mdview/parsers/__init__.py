#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Markdown parser adapter and debounced parsing."""

from mdview.parsers.debounce import DebouncedParser, DebounceScheduler
from mdview.parsers.markdown import (
    MarkdownParser,
    markdown_nodes,
    markdown_to_ast,
    parse_markdown,
    wiki_links,
)

__all__ = [
    "DebounceScheduler",
    "DebouncedParser",
    "MarkdownParser",
    "markdown_nodes",
    "markdown_to_ast",
    "parse_markdown",
    "wiki_links",
]
