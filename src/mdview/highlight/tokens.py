#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdview/highlight/tokens.py
"""Highlighted token trees.

A highlighted code block is a sequence of tokens: plain ``TextToken`` leaves
and ``ElementToken`` branches carrying CSS class names (``hljs-keyword`` for
the hljs convention, ``token keyword`` for prism). Tokens come either from
pygments (``tokenize``) or from an external hast-like tree
(``tokens_from_hast``).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any, Iterable, Mapping, Union

from mdview.constants import DEFAULT_CODE_LANGUAGE, DEPS_HIGHLIGHT, HighlighterBackend
from mdview.exceptions import StyleTransformError
from mdview.utils.decorators import requires_dependencies

logger = logging.getLogger(__name__)


@dataclass
class TextToken:
    """Unstyled run of code text."""

    value: str


@dataclass
class ElementToken:
    """Styled branch; ``class_names`` select entries of the stylesheet."""

    class_names: list[str] = field(default_factory=list)
    children: list[Token] = field(default_factory=list)
    tag_name: str = "span"


Token = Union[TextToken, ElementToken]

# Pygments token type (dotted, without the "Token." root) -> class names.
# Lookups walk up the token hierarchy, so only the most specific mapped
# ancestor needs an entry.
HLJS_CLASSES: dict[str, tuple[str, ...]] = {
    "Keyword": ("hljs-keyword",),
    "Keyword.Constant": ("hljs-literal",),
    "Keyword.Type": ("hljs-type",),
    "Name.Builtin": ("hljs-built_in",),
    "Name.Builtin.Pseudo": ("hljs-variable", "language_"),
    "Name.Function": ("hljs-title", "function_"),
    "Name.Function.Magic": ("hljs-title", "function_"),
    "Name.Class": ("hljs-title", "class_"),
    "Name.Decorator": ("hljs-meta",),
    "Name.Tag": ("hljs-name",),
    "Name.Attribute": ("hljs-attr",),
    "Name.Variable": ("hljs-variable",),
    "Name.Constant": ("hljs-variable", "constant_"),
    "Name.Exception": ("hljs-title", "class_"),
    "Name.Namespace": ("hljs-title", "class_"),
    "Literal.String": ("hljs-string",),
    "Literal.String.Regex": ("hljs-regexp",),
    "Literal.String.Escape": ("hljs-char", "escape_"),
    "Literal.String.Symbol": ("hljs-symbol",),
    "Literal.Number": ("hljs-number",),
    "Comment": ("hljs-comment",),
    "Comment.Preproc": ("hljs-meta",),
    "Operator": ("hljs-operator",),
    "Operator.Word": ("hljs-keyword",),
    "Punctuation": ("hljs-punctuation",),
    "Generic.Heading": ("hljs-section",),
    "Generic.Subheading": ("hljs-section",),
    "Generic.Deleted": ("hljs-deletion",),
    "Generic.Inserted": ("hljs-addition",),
    "Generic.Emph": ("hljs-emphasis",),
    "Generic.Strong": ("hljs-strong",),
}

PRISM_CLASSES: dict[str, tuple[str, ...]] = {
    "Keyword": ("token", "keyword"),
    "Keyword.Constant": ("token", "boolean"),
    "Keyword.Type": ("token", "class-name"),
    "Name.Builtin": ("token", "builtin"),
    "Name.Function": ("token", "function"),
    "Name.Function.Magic": ("token", "function"),
    "Name.Class": ("token", "class-name"),
    "Name.Decorator": ("token", "decorator"),
    "Name.Tag": ("token", "tag"),
    "Name.Attribute": ("token", "attr-name"),
    "Name.Variable": ("token", "variable"),
    "Name.Constant": ("token", "constant"),
    "Name.Exception": ("token", "class-name"),
    "Name.Namespace": ("token", "namespace"),
    "Literal.String": ("token", "string"),
    "Literal.String.Regex": ("token", "regex"),
    "Literal.String.Symbol": ("token", "symbol"),
    "Literal.Number": ("token", "number"),
    "Comment": ("token", "comment"),
    "Comment.Preproc": ("token", "directive"),
    "Operator": ("token", "operator"),
    "Operator.Word": ("token", "keyword"),
    "Punctuation": ("token", "punctuation"),
    "Generic.Heading": ("token", "title"),
    "Generic.Deleted": ("token", "deleted"),
    "Generic.Inserted": ("token", "inserted"),
    "Generic.Emph": ("token", "italic"),
    "Generic.Strong": ("token", "bold"),
}

BACKEND_CLASSES: dict[str, dict[str, tuple[str, ...]]] = {"hljs": HLJS_CLASSES, "prism": PRISM_CLASSES}


def classes_for_token_type(token_type: Any, backend: HighlighterBackend = "hljs") -> tuple[str, ...]:
    """Class names of a pygments token type, walking up to the nearest mapped ancestor.

    Returns an empty tuple for plain text.
    """
    mapping = BACKEND_CLASSES[backend]
    current = token_type
    while current is not None and len(current) > 0:
        names = mapping.get(".".join(current))
        if names is not None:
            return names
        current = current.parent
    return ()


def _append_text(tokens: list[Token], value: str) -> None:
    if tokens and isinstance(tokens[-1], TextToken):
        tokens[-1].value += value
    else:
        tokens.append(TextToken(value))


@lru_cache(maxsize=1)
@requires_dependencies("highlight", DEPS_HIGHLIGHT)
def check_pygments() -> bool:
    """Verify pygments is installed at a supported version; the result is cached after the first success."""
    return True


def tokenize(code: str, language: str = DEFAULT_CODE_LANGUAGE, backend: HighlighterBackend = "hljs") -> list[Token]:
    """Lex ``code`` with pygments into highlighted tokens.

    Unknown languages are lexed as plain text.

    Parameters
    ----------
    code : str
        Source code
    language : str, default "text"
        Language name or alias understood by pygments
    backend : {"hljs", "prism"}, default "hljs"
        Class-name convention of the produced tokens

    Returns
    -------
    list of Token
        Top-level tokens, one per styled run

    """
    check_pygments()
    from pygments.lexers import TextLexer, get_lexer_by_name
    from pygments.util import ClassNotFound

    try:
        lexer = get_lexer_by_name(language or DEFAULT_CODE_LANGUAGE, stripnl=False, ensurenl=False)
    except ClassNotFound:
        logger.debug(f"No lexer for language '{language}', using plain text")
        lexer = TextLexer(stripnl=False, ensurenl=False)

    tokens: list[Token] = []
    for token_type, value in lexer.get_tokens(code):
        if not value:
            continue
        class_names = classes_for_token_type(token_type, backend)
        if class_names:
            tokens.append(ElementToken(class_names=list(class_names), children=[TextToken(value)]))
        else:
            _append_text(tokens, value)
    return tokens


def _class_list(properties: Mapping[str, Any]) -> list[str]:
    class_names = properties.get("className") or []
    if isinstance(class_names, str):
        return class_names.split()
    return [str(name) for name in class_names]


def token_from_hast(node: Mapping[str, Any]) -> Token:
    """Convert one hast-like node (``type``/``value`` or ``tagName``/``properties``/``children``).

    Raises
    ------
    StyleTransformError
        If the node is neither a text node nor an element
    """
    if not isinstance(node, Mapping):
        raise StyleTransformError(f"Token node must be a mapping, got {type(node).__name__}")
    if node.get("type") == "text":
        return TextToken(str(node.get("value", "")))
    if node.get("tagName"):
        properties = node.get("properties") or {}
        return ElementToken(
            class_names=_class_list(properties),
            children=tokens_from_hast(node.get("children") or []),
            tag_name=str(node["tagName"]),
        )
    raise StyleTransformError(f"Unsupported token node type: {node.get('type')!r}")


def tokens_from_hast(nodes: Iterable[Mapping[str, Any]]) -> list[Token]:
    """Convert a sequence of hast-like nodes into tokens."""
    return [token_from_hast(node) for node in nodes]


def token_text(tokens: Iterable[Token]) -> str:
    """Concatenated source text of a token sequence."""
    parts: list[str] = []
    for token in tokens:
        if isinstance(token, TextToken):
            parts.append(token.value)
        else:
            parts.append(token_text(token.children))
    return "".join(parts)
