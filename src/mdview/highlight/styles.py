#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdview/highlight/styles.py
"""Build highlighting stylesheets from pygments styles.

``stylesheet_from_pygments`` produces a CSS-class-keyed stylesheet in the hljs
or prism convention, so any pygments style can be used as a theme's
``syntax_highlighting.stylesheet``. The result goes through the same transform
as externally supplied stylesheets.
"""

from __future__ import annotations

import logging
from typing import Any

from mdview.constants import DEFAULT_CODE_COLOR, DEPS_HIGHLIGHT, PRISM_CODE_SELECTOR, HighlighterBackend
from mdview.exceptions import ValidationError
from mdview.highlight.stylesheet import root_selector
from mdview.highlight.tokens import BACKEND_CLASSES
from mdview.utils.decorators import requires_dependencies

logger = logging.getLogger(__name__)

DEFAULT_PYGMENTS_STYLE = "monokai"


def _hex(color: str | None) -> str | None:
    if not color:
        return None
    return color if color.startswith("#") else f"#{color}"


def _declarations(token_style: dict[str, Any]) -> dict[str, Any]:
    declarations: dict[str, Any] = {}
    color = _hex(token_style.get("color"))
    if color:
        declarations["color"] = color
    background = _hex(token_style.get("bgcolor"))
    if background:
        declarations["background"] = background
    if token_style.get("bold"):
        declarations["font-weight"] = "bold"
    if token_style.get("italic"):
        declarations["font-style"] = "italic"
    if token_style.get("underline"):
        declarations["text-decoration-line"] = "underline"
    return declarations


@requires_dependencies("highlight", DEPS_HIGHLIGHT)
def stylesheet_from_pygments(
    style_name: str = DEFAULT_PYGMENTS_STYLE, backend: HighlighterBackend = "hljs"
) -> dict[str, dict[str, Any]]:
    """Derive a highlighting stylesheet from a pygments style.

    Parameters
    ----------
    style_name : str, default "monokai"
        Name of an installed pygments style
    backend : {"hljs", "prism"}, default "hljs"
        Selector convention of the result

    Returns
    -------
    dict
        Selector -> CSS declarations (kebab-case names, as in web stylesheets)

    Raises
    ------
    ValidationError
        If no pygments style has that name

    Examples
    --------
        >>> sheet = stylesheet_from_pygments("monokai")
        >>> sheet["hljs"]["background"]
        '#272822'

    """
    from pygments.styles import get_style_by_name
    from pygments.token import Text, string_to_tokentype
    from pygments.util import ClassNotFound

    try:
        style = get_style_by_name(style_name)
    except ClassNotFound as e:
        raise ValidationError(
            f"Unknown pygments style: {style_name}", parameter_name="style_name", parameter_value=style_name
        ) from e

    root: dict[str, Any] = {
        "display": "block",
        "overflow-x": "auto",
        "padding": "0.5em",
        "color": _hex(style.style_for_token(Text).get("color")) or DEFAULT_CODE_COLOR,
    }
    if style.background_color:
        root["background"] = style.background_color

    sheet: dict[str, dict[str, Any]] = {root_selector(backend): root}
    if backend == "prism":
        sheet[PRISM_CODE_SELECTOR] = {"color": root["color"], "font-family": "monospace"}

    for token_name, class_names in BACKEND_CLASSES[backend].items():
        # hljs selectors carry the prefix; prism selectors are the bare token kind
        selector = class_names[0] if backend == "hljs" else class_names[-1]
        if selector in sheet:
            continue
        declarations = _declarations(style.style_for_token(string_to_tokentype(token_name)))
        if declarations:
            sheet[selector] = declarations

    logger.debug(f"Built {backend} stylesheet from pygments style '{style_name}' ({len(sheet)} selectors)")
    return sheet
