#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Node renderers, render context and renderer registry."""

from mdview.renderers.context import RenderContext, RendererFn, child_key
from mdview.renderers.defaults import DEFAULT_RENDERERS, render_default
from mdview.renderers.registry import RendererRegistry, default_registry, resolve_renderer

__all__ = [
    "DEFAULT_RENDERERS",
    "RenderContext",
    "RendererFn",
    "RendererRegistry",
    "child_key",
    "default_registry",
    "render_default",
    "resolve_renderer",
]
