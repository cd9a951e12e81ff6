#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Syntax highlighting for code blocks.

The highlighting backend (pygments) is optional. Without it, code blocks render
as plain monospaced text.
"""

from mdview.highlight.availability import HighlighterProbe
from mdview.highlight.highlighter import SyntaxHighlighter, get_default_highlighter, plain_code
from mdview.highlight.styles import stylesheet_from_pygments
from mdview.highlight.stylesheet import (
    StyleCache,
    TransformedStylesheet,
    create_native_element,
    create_style_object,
    css_name_to_camel,
    generate_native_stylesheet,
    render_token_rows,
    transform_value,
)
from mdview.highlight.tokens import ElementToken, TextToken, Token, tokenize, tokens_from_hast

__all__ = [
    "ElementToken",
    "HighlighterProbe",
    "StyleCache",
    "SyntaxHighlighter",
    "TextToken",
    "Token",
    "TransformedStylesheet",
    "create_native_element",
    "create_style_object",
    "css_name_to_camel",
    "generate_native_stylesheet",
    "get_default_highlighter",
    "plain_code",
    "render_token_rows",
    "stylesheet_from_pygments",
    "tokenize",
    "tokens_from_hast",
    "transform_value",
]
