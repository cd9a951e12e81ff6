#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Theme model, built-in themes, scopes and theme files."""

from mdview.themes.base import (
    CONTAINER_STYLE_NAMES,
    TEXT_STYLE_NAMES,
    MarkdownTheme,
    SyntaxHighlightingOptions,
    ThemeColors,
    ThemeSpacing,
)
from mdview.themes.builtin import BUILTIN_THEMES, DARK_THEME, LIGHT_THEME, get_builtin_theme
from mdview.themes.context import ThemeScope, resolve_theme
from mdview.themes.loader import discover_theme_file, load_theme_file, theme_from_file, theme_from_mapping
from mdview.themes.merge import deep_merge

__all__ = [
    "BUILTIN_THEMES",
    "CONTAINER_STYLE_NAMES",
    "DARK_THEME",
    "LIGHT_THEME",
    "TEXT_STYLE_NAMES",
    "MarkdownTheme",
    "SyntaxHighlightingOptions",
    "ThemeColors",
    "ThemeScope",
    "ThemeSpacing",
    "deep_merge",
    "discover_theme_file",
    "get_builtin_theme",
    "load_theme_file",
    "resolve_theme",
    "theme_from_file",
    "theme_from_mapping",
]
