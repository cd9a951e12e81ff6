#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdview/renderers/context.py
"""Render context threaded through every renderer call.

A ``RenderContext`` is created fresh for each top-level render. It carries the
resolved theme, the optional interaction callbacks, the injected syntax
highlighter, and ``render_node``, which dispatches a child node through the
same override map the render started with. Renderers recurse only through the
context, so replacing the renderer of one node type never requires
re-implementing the renderers of its descendants.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Optional, Protocol

from mdview.ast.nodes import MarkdownNode
from mdview.fragments import UIFragment
from mdview.themes.base import MarkdownTheme

if TYPE_CHECKING:
    from mdview.highlight.highlighter import SyntaxHighlighter

logger = logging.getLogger(__name__)

OnLinkPress = Callable[[str, Optional[str]], None]
OnImagePress = Callable[[str, Optional[str], Optional[str]], None]
OnCheckboxToggle = Callable[[bool, MarkdownNode], None]


class RendererFn(Protocol):
    """Signature shared by built-in and custom renderers."""

    def __call__(self, node: MarkdownNode, key: str, ctx: RenderContext) -> UIFragment: ...


def child_key(parent_key: str, index: int) -> str:
    """Key of the ``index``-th child under ``parent_key``."""
    return f"{parent_key}-{index}"


@dataclass
class RenderContext:
    """Per-render state shared by all renderers.

    Parameters
    ----------
    theme : MarkdownTheme
        Effective theme of this render
    resolve : callable
        ``resolve(node_type) -> RendererFn`` bound to the render's override map
    highlighter : SyntaxHighlighter, optional
        Code block highlighter; ``None`` renders code as plain text
    on_link_press : callable, optional
        ``on_link_press(href, title)``
    on_image_press : callable, optional
        ``on_image_press(src, alt, title)``
    on_checkbox_toggle : callable, optional
        ``on_checkbox_toggle(proposed_checked, node)``

    """

    theme: MarkdownTheme
    resolve: Callable[[str], Any]
    highlighter: Optional[SyntaxHighlighter] = None
    on_link_press: Optional[OnLinkPress] = None
    on_image_press: Optional[OnImagePress] = None
    on_checkbox_toggle: Optional[OnCheckboxToggle] = None
    _ancestors: list[MarkdownNode] = field(default_factory=list, repr=False)

    def render_node(self, node: MarkdownNode, key: str) -> UIFragment:
        """Render ``node`` with the renderer resolved for its type."""
        renderer = self.resolve(node.type)
        self._ancestors.append(node)
        try:
            return renderer(node, key, self)
        finally:
            self._ancestors.pop()

    def render_children(self, node: MarkdownNode, key: str) -> list[UIFragment]:
        """Render every child of ``node`` with keys ``{key}-{i}``."""
        return [self.render_node(child, child_key(key, i)) for i, child in enumerate(node.children or [])]

    @property
    def parent(self) -> Optional[MarkdownNode]:
        """Parent of the node currently being rendered, when it was rendered through this context."""
        if len(self._ancestors) < 2:
            return None
        return self._ancestors[-2]

    def sibling_index(self, node: MarkdownNode) -> Optional[int]:
        """Position of ``node`` among its parent's children, by identity."""
        parent = self.parent
        if parent is None or not parent.children:
            return None
        for i, child in enumerate(parent.children):
            if child is node:
                return i
        return None
