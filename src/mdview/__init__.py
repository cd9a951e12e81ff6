"""mdview - Render markdown into themed UI fragment trees.

mdview parses markdown text into a small AST and renders it, node by node,
into a tree of host UI primitives (views, text runs, images, pressables and
scroll views). Every render is themed, every node kind can be overridden with
a custom renderer, and fenced code blocks are syntax highlighted when the
optional highlighting backend is installed.

Key Features
------------
- CommonMark parsing with GitHub Flavored Markdown extensions via mistune
- Optional LaTeX math and ``[[wiki links]]``
- Light and dark built-in themes with deep-merged partial overrides
- Theme files in TOML, YAML, JSON or ``pyproject.toml``
- Per node-type renderer overrides, isolated per view
- Code highlighting from hljs or prism style stylesheets, or any pygments style
- Debounced re-parsing for live editors

Requirements
------------
- Python 3.10+
- mistune for parsing; Pygments (optional) for highlighting; rich (optional)
  for the CLI tree printer

Examples
--------
Render markdown text:

    >>> from mdview import render_markdown
    >>> root = render_markdown("# Hello\\n\\nSome **bold** text.")
    >>> root.children[0].key
    'root-0'

Customize a view:

    >>> from mdview import DARK_THEME, MarkdownView
    >>> view = MarkdownView(
    ...     theme=DARK_THEME.merged({"colors": {"link": "#ff79c6"}}),
    ...     on_link_press=lambda href, title: print(href),
    ... )
    >>> root = view.render("[docs](https://example.com)")

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import sys

if sys.version_info < (3, 10):
    raise ImportError(
        "mdview requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "1.0.0"

from mdview.ast import MarkdownNode, ParseError, ParseResult, nodes_from_json, nodes_to_json
from mdview.exceptions import (
    DependencyError,
    MdViewError,
    ParsingError,
    RenderingError,
    StyleTransformError,
    ThemeError,
    ValidationError,
)
from mdview.fragments import Fragment, fragment_to_dict, plain_text
from mdview.highlight import SyntaxHighlighter, stylesheet_from_pygments
from mdview.options import ParserOptions
from mdview.parsers import DebouncedParser, markdown_nodes, markdown_to_ast, parse_markdown
from mdview.renderers import RenderContext, RendererRegistry, default_registry
from mdview.themes import (
    DARK_THEME,
    LIGHT_THEME,
    MarkdownTheme,
    SyntaxHighlightingOptions,
    ThemeScope,
    theme_from_file,
)
from mdview.view import MarkdownView, render_markdown

__all__ = [
    "__version__",
    "DARK_THEME",
    "LIGHT_THEME",
    "DebouncedParser",
    "DependencyError",
    "Fragment",
    "MarkdownNode",
    "MarkdownTheme",
    "MarkdownView",
    "MdViewError",
    "ParseError",
    "ParseResult",
    "ParserOptions",
    "ParsingError",
    "RenderContext",
    "RendererRegistry",
    "RenderingError",
    "StyleTransformError",
    "SyntaxHighlighter",
    "SyntaxHighlightingOptions",
    "ThemeError",
    "ThemeScope",
    "ValidationError",
    "default_registry",
    "fragment_to_dict",
    "markdown_nodes",
    "markdown_to_ast",
    "nodes_from_json",
    "nodes_to_json",
    "parse_markdown",
    "plain_text",
    "render_markdown",
    "stylesheet_from_pygments",
    "theme_from_file",
]
