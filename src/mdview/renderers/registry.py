#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdview/renderers/registry.py
"""Renderer lookup for node types.

Dispatch is a table lookup with a default arm. For every node the renderer is
resolved in this order:

1. the caller's override map for the current render (any string key)
2. the registry's built-in renderer for the node type
3. the generic fallback renderer

Examples
--------
Override the heading renderer for a single render:

    >>> from mdview.fragments import text
    >>> def shout(node, key, ctx):
    ...     return text(ctx.render_children(node, key), key=key, style={"color": "red"})
    >>> from mdview.themes import LIGHT_THEME
    >>> ctx = default_registry.make_context(LIGHT_THEME, overrides={"heading": shout})
    >>> ctx.resolve("heading") is shout
    True

"""

from __future__ import annotations

import logging
from functools import partial
from typing import Any, Callable, Mapping, Optional

from mdview.renderers.context import RenderContext, RendererFn
from mdview.renderers.defaults import DEFAULT_RENDERERS, render_default
from mdview.themes.base import MarkdownTheme

logger = logging.getLogger(__name__)


class RendererRegistry:
    """Built-in renderer table plus a fallback.

    Parameters
    ----------
    renderers : Mapping[str, RendererFn], optional
        Initial table; defaults to ``DEFAULT_RENDERERS``
    fallback : RendererFn, optional
        Renderer for types missing from the table; defaults to ``render_default``

    """

    def __init__(
        self,
        renderers: Optional[Mapping[str, Any]] = None,
        fallback: Optional[Callable[..., Any]] = None,
    ):
        self._renderers: dict[str, Any] = dict(DEFAULT_RENDERERS if renderers is None else renderers)
        self._fallback = fallback or render_default

    def register(self, node_type: str, renderer: RendererFn) -> None:
        """Install ``renderer`` as the built-in renderer of ``node_type``."""
        if node_type in self._renderers:
            logger.debug(f"Replacing built-in renderer for '{node_type}'")
        self._renderers[node_type] = renderer

    def unregister(self, node_type: str) -> bool:
        """Remove the built-in renderer of ``node_type``; returns whether one existed."""
        return self._renderers.pop(node_type, None) is not None

    def get(self, node_type: str) -> RendererFn:
        """Built-in renderer of ``node_type``, or the fallback."""
        return self._renderers.get(node_type, self._fallback)

    def resolve(self, node_type: str, overrides: Optional[Mapping[str, Any]] = None) -> RendererFn:
        """Renderer for ``node_type``, honouring a caller override map."""
        if overrides:
            custom = overrides.get(node_type)
            if custom is not None:
                return custom
        return self.get(node_type)

    def node_types(self) -> list[str]:
        """Node types with a built-in renderer."""
        return sorted(self._renderers)

    def __contains__(self, node_type: object) -> bool:
        return node_type in self._renderers

    def copy(self) -> RendererRegistry:
        return RendererRegistry(self._renderers, self._fallback)

    def make_context(
        self,
        theme: MarkdownTheme,
        overrides: Optional[Mapping[str, Any]] = None,
        highlighter: Any = None,
        on_link_press: Any = None,
        on_image_press: Any = None,
        on_checkbox_toggle: Any = None,
    ) -> RenderContext:
        """Create the context of one top-level render.

        ``overrides`` is copied, so later changes to the caller's mapping do not
        affect a render in progress.
        """
        bound = dict(overrides) if overrides else None
        return RenderContext(
            theme=theme,
            resolve=partial(self.resolve, overrides=bound),
            highlighter=highlighter,
            on_link_press=on_link_press,
            on_image_press=on_image_press,
            on_checkbox_toggle=on_checkbox_toggle,
        )


default_registry = RendererRegistry()


def resolve_renderer(node_type: str, overrides: Optional[Mapping[str, Any]] = None) -> RendererFn:
    """Resolve a renderer against the default registry."""
    return default_registry.resolve(node_type, overrides)
