#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdview/highlight/highlighter.py
"""Syntax highlighter used by the code block renderer.

``SyntaxHighlighter`` ties together the availability probe, the tokenizer and
the stylesheet cache. It never raises while rendering: when the backend is
missing or anything goes wrong while tokenizing or transforming, it renders the
code as a single plain monospaced run inside a horizontal scroll view.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Optional

from mdview.constants import DEFAULT_CODE_COLOR, DEFAULT_CODE_LANGUAGE, PRISM_CODE_SELECTOR
from mdview.fragments import Fragment, scroll_view, text, view
from mdview.highlight.availability import HighlighterProbe
from mdview.highlight.stylesheet import (
    EMPTY_STYLESHEET,
    StyleCache,
    TransformedStylesheet,
    render_token_rows,
    root_selector,
)
from mdview.highlight.tokens import Token, tokenize
from mdview.themes.base import SyntaxHighlightingOptions

logger = logging.getLogger(__name__)

Tokenizer = Callable[[str, str, str], list[Token]]


class SyntaxHighlighter:
    """Render code blocks as highlighted text fragments.

    Parameters
    ----------
    probe : HighlighterProbe, optional
        Backend availability check; a fresh probe by default
    cache : StyleCache, optional
        Transformed stylesheet cache; a fresh cache by default
    tokenizer : callable, optional
        ``tokenizer(code, language, backend) -> list[Token]``; pygments by default

    """

    def __init__(
        self,
        probe: Optional[HighlighterProbe] = None,
        cache: Optional[StyleCache] = None,
        tokenizer: Optional[Tokenizer] = None,
    ):
        self.probe = probe or HighlighterProbe()
        self.cache = cache or StyleCache()
        self._tokenize: Tokenizer = tokenizer or tokenize

    def is_available(self) -> bool:
        """Whether the highlighting backend can be used."""
        return self.probe.is_available()

    def transformed_stylesheet(self, options: SyntaxHighlightingOptions) -> TransformedStylesheet:
        if options.stylesheet is None:
            return EMPTY_STYLESHEET
        return self.cache.transform(options.stylesheet, options.highlighter)

    def render(
        self,
        code: str,
        language: str = DEFAULT_CODE_LANGUAGE,
        options: Optional[SyntaxHighlightingOptions] = None,
        key: str = "code",
    ) -> Fragment:
        """Render ``code`` highlighted, or as plain text when that is not possible.

        Parameters
        ----------
        code : str
            Source code
        language : str, default "text"
            Language name
        options : SyntaxHighlightingOptions, optional
            Stylesheet, backend and font settings
        key : str, default "code"
            Key of the returned fragment

        Returns
        -------
        Fragment
            A horizontal scroll view holding the code rows

        """
        options = options or SyntaxHighlightingOptions()
        if not self.is_available():
            return plain_code(code, options, key)

        try:
            return self._render_highlighted(code, language or DEFAULT_CODE_LANGUAGE, options, key)
        except Exception as e:
            logger.debug(f"Highlighting failed for language '{language}', rendering plain code: {e!r}")
            return plain_code(code, options, key)

    def _render_highlighted(self, code: str, language: str, options: SyntaxHighlightingOptions, key: str) -> Fragment:
        transformed = self.transformed_stylesheet(options)
        tokens = self._tokenize(code, language, options.highlighter)
        rows = render_token_rows(tokens, transformed, options.font_family, options.font_size)
        code_style: Any = transformed.get(PRISM_CODE_SELECTOR) if options.highlighter == "prism" else None
        return scroll_view(
            view(rows, key=f"{key}-rows", style=code_style),
            key=key,
            style=transformed.get(root_selector(options.highlighter)),
            horizontal=True,
        )


def plain_code(code: str, options: SyntaxHighlightingOptions, key: str = "code") -> Fragment:
    """Unhighlighted code: one monospaced run in a horizontal scroll view."""
    return scroll_view(
        text(
            code,
            key=f"{key}-text",
            style={"fontFamily": options.font_family, "fontSize": options.font_size, "color": DEFAULT_CODE_COLOR},
        ),
        key=key,
        horizontal=True,
    )


_default_highlighter: Optional[SyntaxHighlighter] = None
_default_lock = threading.Lock()


def get_default_highlighter() -> SyntaxHighlighter:
    """Process-wide highlighter shared by renders that do not inject their own."""
    global _default_highlighter
    if _default_highlighter is None:
        with _default_lock:
            if _default_highlighter is None:
                _default_highlighter = SyntaxHighlighter()
    return _default_highlighter
