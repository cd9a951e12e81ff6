#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdview/themes/context.py
"""Explicit theme scopes and effective-theme resolution.

Instead of an ambient provider, a caller that wants a shared theme for several
renders creates a ``ThemeScope`` and passes it along. The effective theme for a
render is chosen in this order:

1. a theme passed explicitly to the render call
2. the theme of the ``ThemeScope`` passed to the render call
3. ``LIGHT_THEME``
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from mdview.themes.base import MarkdownTheme
from mdview.themes.builtin import LIGHT_THEME

logger = logging.getLogger(__name__)


class ThemeScope:
    """A base theme plus partial overrides, merged once on first use.

    Parameters
    ----------
    theme : MarkdownTheme, optional
        Base theme; defaults to ``LIGHT_THEME``
    overrides : Mapping, optional
        Partial theme deep-merged over ``theme``

    Examples
    --------
    >>> from mdview.themes import DARK_THEME
    >>> scope = ThemeScope(DARK_THEME, {"colors": {"link": "#ff79c6"}})
    >>> scope.theme.colors.link
    '#ff79c6'

    """

    def __init__(self, theme: Optional[MarkdownTheme] = None, overrides: Optional[Mapping[str, Any]] = None):
        self._base = theme if theme is not None else LIGHT_THEME
        self._overrides = dict(overrides) if overrides else None
        self._resolved: Optional[MarkdownTheme] = None

    @property
    def base(self) -> MarkdownTheme:
        return self._base

    @property
    def theme(self) -> MarkdownTheme:
        """The effective theme of this scope."""
        if self._resolved is None:
            self._resolved = self._base.merged(self._overrides)
            logger.debug("Resolved theme scope over base theme '%s'", self._base.name)
        return self._resolved

    def __repr__(self) -> str:
        return f"ThemeScope(base={self._base.name!r}, overrides={self._overrides!r})"


def resolve_theme(explicit: Optional[MarkdownTheme] = None, scope: Optional[ThemeScope] = None) -> MarkdownTheme:
    """Return the effective theme for a render."""
    if explicit is not None:
        return explicit
    if scope is not None:
        return scope.theme
    return LIGHT_THEME
