#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdview/view.py
"""Top-level markdown rendering.

``MarkdownView`` turns raw markdown text, or a pre-parsed AST, into a single
root ``Fragment``:

1. parse the content (skipped when an AST is supplied)
2. resolve the effective theme
3. build a fresh ``RenderContext`` bound to the caller's renderer overrides
4. render the root nodes, unwrapping a root ``document`` node so its children
   become root children

Parse failures never raise. Depending on ``show_errors`` they render either an
empty themed container or a red error message.

Examples
--------
    >>> from mdview import render_markdown
    >>> root = render_markdown("# Title\\n\\nSome *text*.")
    >>> [child.key for child in root.children]
    ['root-0', 'root-1']

"""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Optional

from mdview.ast.nodes import MarkdownNode, ParseResult
from mdview.ast.serialization import AstInput, coerce_nodes
from mdview.constants import ERROR_TEXT_COLOR, PARSE_ERROR_PREFIX, ROOT_KEY_PREFIX
from mdview.exceptions import ValidationError
from mdview.fragments import Fragment, text, view
from mdview.highlight.highlighter import SyntaxHighlighter, get_default_highlighter
from mdview.options.base import UNSET
from mdview.options.parser import ParserOptions
from mdview.parsers.markdown import parse_markdown
from mdview.renderers.context import OnCheckboxToggle, OnImagePress, OnLinkPress
from mdview.renderers.registry import RendererRegistry, default_registry
from mdview.themes.base import MarkdownTheme
from mdview.themes.context import ThemeScope, resolve_theme

logger = logging.getLogger(__name__)

ParseFunction = Callable[[str, Optional[ParserOptions]], ParseResult]


def root_nodes(nodes: list[MarkdownNode]) -> list[MarkdownNode]:
    """Splice the children of root ``document`` nodes into the root sequence."""
    spliced: list[MarkdownNode] = []
    for node in nodes:
        if node.type == "document":
            spliced.extend(node.children or [])
        else:
            spliced.append(node)
    return spliced


def format_parse_error(result: ParseResult) -> str:
    """Message shown for a failed parse."""
    detail = result.error.describe() if result.error is not None else "Unknown error"
    return f"{PARSE_ERROR_PREFIX}{detail}"


class MarkdownView:
    """Render markdown into a fragment tree.

    Parameters
    ----------
    parser_options : ParserOptions or Mapping, optional
        Options forwarded to the parser; mappings may use camelCase keys
    theme : MarkdownTheme, optional
        Theme of every render; takes precedence over ``theme_scope``
    theme_scope : ThemeScope, optional
        Shared base theme plus overrides
    style : Mapping, optional
        Style merged over the document container style of the root
    renderers : Mapping[str, RendererFn], optional
        Per-node-type renderer overrides; any string key is accepted
    on_link_press : callable, optional
        ``on_link_press(href, title)``
    on_image_press : callable, optional
        ``on_image_press(src, alt, title)``
    on_checkbox_toggle : callable, optional
        ``on_checkbox_toggle(proposed_checked, node)``
    show_errors : bool, default False
        Render parse failures as a red message instead of an empty container
    highlighter : SyntaxHighlighter or None, optional
        Code highlighter; defaults to the process-wide highlighter, ``None``
        disables highlighting
    registry : RendererRegistry, optional
        Built-in renderer table; defaults to ``default_registry``
    parse : callable, optional
        Parser collaborator ``parse(content, options) -> ParseResult``

    """

    def __init__(
        self,
        parser_options: ParserOptions | Mapping[str, Any] | None = None,
        theme: Optional[MarkdownTheme] = None,
        theme_scope: Optional[ThemeScope] = None,
        style: Optional[Mapping[str, Any]] = None,
        renderers: Optional[Mapping[str, Any]] = None,
        on_link_press: Optional[OnLinkPress] = None,
        on_image_press: Optional[OnImagePress] = None,
        on_checkbox_toggle: Optional[OnCheckboxToggle] = None,
        show_errors: bool = False,
        highlighter: Any = UNSET,
        registry: Optional[RendererRegistry] = None,
        parse: Optional[ParseFunction] = None,
    ):
        if isinstance(parser_options, Mapping):
            parser_options = ParserOptions.from_mapping(parser_options)
        self.parser_options: Optional[ParserOptions] = parser_options
        self.theme = theme
        self.theme_scope = theme_scope
        self.style = dict(style) if style else None
        self.renderers = dict(renderers) if renderers else None
        self.on_link_press = on_link_press
        self.on_image_press = on_image_press
        self.on_checkbox_toggle = on_checkbox_toggle
        self.show_errors = show_errors
        self._highlighter = highlighter
        self.registry = registry or default_registry
        self._parse: ParseFunction = parse or parse_markdown

    @property
    def highlighter(self) -> Optional[SyntaxHighlighter]:
        if self._highlighter is UNSET:
            return get_default_highlighter()
        return self._highlighter

    @property
    def effective_theme(self) -> MarkdownTheme:
        return resolve_theme(self.theme, self.theme_scope)

    def parse(self, content: str) -> ParseResult:
        """Parse ``content`` with the configured parser collaborator.

        Raises
        ------
        ValidationError
            If ``content`` is not a string

        """
        if not isinstance(content, str):
            raise ValidationError(
                f"content must be a string, got {type(content).__name__}",
                parameter_name="content",
                parameter_value=content,
            )
        return self._parse(content, self.parser_options)

    def render(self, content: Optional[str] = None, ast: Optional[AstInput] = None) -> Fragment:
        """Render markdown text or a pre-parsed AST.

        Parameters
        ----------
        content : str, optional
            Markdown source; ignored when ``ast`` is given
        ast : AST input, optional
            Nodes, dicts, a single node or a ``ParseResult``; skips parsing

        Returns
        -------
        Fragment
            Root view styled with the document container style

        """
        if ast is not None:
            result = ast if isinstance(ast, ParseResult) else ParseResult.ok(coerce_nodes(ast))
        else:
            result = self.parse(content or "")

        theme = self.effective_theme
        root_style = [theme.container_style("document"), self.style]

        if not result.success:
            message = format_parse_error(result)
            logger.debug(f"Rendering parse failure (show_errors={self.show_errors}): {message}")
            if self.show_errors:
                return view(text(message, key="error", style={"color": ERROR_TEXT_COLOR}), style=root_style)
            return view(style=root_style)

        ctx = self.registry.make_context(
            theme,
            overrides=self.renderers,
            highlighter=self.highlighter,
            on_link_press=self.on_link_press,
            on_image_press=self.on_image_press,
            on_checkbox_toggle=self.on_checkbox_toggle,
        )
        children = [
            ctx.render_node(node, f"{ROOT_KEY_PREFIX}-{i}") for i, node in enumerate(root_nodes(result.nodes))
        ]
        return view(children, style=root_style)


def render_markdown(content: Optional[str] = None, *, ast: Optional[AstInput] = None, **kwargs: Any) -> Fragment:
    """Render markdown in one call; keyword arguments configure a ``MarkdownView``."""
    return MarkdownView(**kwargs).render(content, ast=ast)
