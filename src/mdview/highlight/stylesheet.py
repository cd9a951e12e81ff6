#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdview/highlight/stylesheet.py
"""Conversion of CSS-class-keyed highlighting stylesheets into text styles.

Highlighting stylesheets (hljs or prism convention) map selectors to CSS
declarations and rely on cascading. The text primitive does not cascade, so
every token must carry a fully resolved style. This module:

- transforms a stylesheet once into primitive-compatible declarations
  (``generate_native_stylesheet``), memoized per stylesheet object in a
  ``StyleCache``
- resolves the style of a token from its class names (``create_style_object``)
- walks a token tree into nested text fragments, threading the inherited
  color down explicitly (``create_native_element``)
"""

from __future__ import annotations

import logging
import re
import threading
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Sequence

from mdview.constants import (
    DEFAULT_CODE_COLOR,
    EM_TO_PX,
    HLJS_CLASS_PREFIX,
    HLJS_ROOT_SELECTOR,
    PRISM_CODE_SELECTOR,
    PRISM_ROOT_SELECTOR,
    TOP_LEVEL_PROPERTIES_TO_REMOVE,
    HighlighterBackend,
)
from mdview.exceptions import StyleTransformError
from mdview.fragments import Fragment, text
from mdview.highlight.tokens import ElementToken, TextToken, Token

logger = logging.getLogger(__name__)

_EM_VALUE = re.compile(r"\s*(-?(?:\d+(?:\.\d*)?|\.\d+))em\s*")
_KEBAB_PART = re.compile(r"-([a-zA-Z])")

StyleMap = dict[str, dict[str, Any]]


@dataclass(frozen=True)
class TransformedStylesheet:
    """Result of transforming a highlighting stylesheet.

    Parameters
    ----------
    styles : dict
        Selector -> primitive-compatible declarations
    default_color : str
        Text color of unstyled tokens (the root selector's color)

    """

    styles: StyleMap = field(default_factory=dict)
    default_color: str = DEFAULT_CODE_COLOR

    def get(self, selector: str) -> dict[str, Any]:
        return self.styles.get(selector, {})


EMPTY_STYLESHEET = TransformedStylesheet()


def css_name_to_camel(name: str) -> str:
    """Convert ``background-color`` to ``backgroundColor``; camelCase passes through.

    Vendor prefixes are capitalized except ``ms``: ``-moz-tab-size`` becomes
    ``MozTabSize`` and ``-ms-hyphens`` becomes ``msHyphens``.
    """
    if "-" not in name:
        return name
    camel = _KEBAB_PART.sub(lambda m: m.group(1).upper(), name.lstrip("-"))
    if name.startswith("-") and not name.startswith("-ms-"):
        camel = camel[:1].upper() + camel[1:]
    return camel


def transform_value(key: str, value: Any) -> Any:
    """Convert ``"<number>em"`` string values to pixels; other values pass through.

    Examples
    --------
    >>> transform_value("fontSize", "1.5em")
    24
    >>> transform_value("color", "#fff")
    '#fff'

    """
    if not isinstance(value, str):
        return value
    match = _EM_VALUE.fullmatch(value)
    if match is None:
        return value
    pixels = float(match.group(1)) * EM_TO_PX
    return int(pixels) if pixels.is_integer() else pixels


def _transform_declarations(declarations: Mapping[str, Any]) -> dict[str, Any]:
    result: dict[str, Any] = {}
    for raw_key, value in declarations.items():
        key = css_name_to_camel(str(raw_key))
        if key in ("overflowX", "overflow"):
            result["overflow"] = "scroll" if value == "auto" else value
        elif key == "background":
            result["backgroundColor"] = value
        elif key == "display":
            continue
        else:
            result[key] = transform_value(key, value)
    return result


def _strip_unsupported(style: dict[str, Any]) -> None:
    for name in TOP_LEVEL_PROPERTIES_TO_REMOVE:
        style.pop(name, None)
    if style.get("backgroundColor") == "none":
        del style["backgroundColor"]


def root_selector(backend: HighlighterBackend) -> str:
    """Selector holding the container-level style of a backend's stylesheets."""
    return PRISM_ROOT_SELECTOR if backend == "prism" else HLJS_ROOT_SELECTOR


def generate_native_stylesheet(stylesheet: Any, backend: HighlighterBackend = "hljs") -> TransformedStylesheet:
    """Transform a highlighting stylesheet without caching.

    Parameters
    ----------
    stylesheet : Mapping or sequence of Mapping
        Selector -> CSS declarations; a sequence is unwrapped to its first entry
    backend : {"hljs", "prism"}, default "hljs"
        Selector convention of the stylesheet

    Returns
    -------
    TransformedStylesheet
        Primitive-compatible styles and the default text color

    Raises
    ------
    StyleTransformError
        If the stylesheet is not a mapping (after unwrapping)

    Examples
    --------
    >>> sheet = {"hljs": {"color": "#abc", "textAlign": "center", "lineHeight": "1.5em"}}
    >>> generate_native_stylesheet(sheet).styles["hljs"]
    {'color': '#abc'}

    """
    normalized = stylesheet
    if isinstance(stylesheet, (list, tuple)):
        if not stylesheet:
            raise StyleTransformError("Highlighting stylesheet sequence is empty")
        normalized = stylesheet[0]
    if not isinstance(normalized, Mapping):
        raise StyleTransformError(f"Highlighting stylesheet must be a mapping, got {type(normalized).__name__}")

    styles: StyleMap = {}
    for selector, declarations in normalized.items():
        if not isinstance(declarations, Mapping):
            logger.debug(f"Skipping malformed stylesheet entry '{selector}': {type(declarations).__name__}")
            continue
        styles[str(selector)] = _transform_declarations(declarations)

    top_level = styles.get(root_selector(backend))
    default_color = DEFAULT_CODE_COLOR
    if top_level is not None:
        default_color = top_level.get("color") or DEFAULT_CODE_COLOR
        _strip_unsupported(top_level)

    if backend == "prism" and PRISM_CODE_SELECTOR in styles:
        _strip_unsupported(styles[PRISM_CODE_SELECTOR])

    return TransformedStylesheet(styles=styles, default_color=str(default_color))


class StyleCache:
    """Memo of transformed stylesheets keyed by input object identity.

    Entries are never invalidated: a stylesheet object is assumed not to be
    mutated after its first use. The cache holds a reference to every input so
    identities cannot be reused while an entry exists.
    """

    def __init__(self) -> None:
        self._entries: dict[tuple[int, str], tuple[Any, TransformedStylesheet]] = {}
        self._lock = threading.Lock()
        self.misses = 0

    def transform(self, stylesheet: Any, backend: HighlighterBackend = "hljs") -> TransformedStylesheet:
        """Return the cached transform of ``stylesheet``, computing it on first use."""
        cache_key = (id(stylesheet), backend)
        with self._lock:
            entry = self._entries.get(cache_key)
            if entry is not None and entry[0] is stylesheet:
                return entry[1]

        result = generate_native_stylesheet(stylesheet, backend)
        with self._lock:
            entry = self._entries.get(cache_key)
            if entry is not None and entry[0] is stylesheet:
                return entry[1]
            self._entries[cache_key] = (stylesheet, result)
            self.misses += 1
        logger.debug(f"Transformed {backend} stylesheet with {len(result.styles)} selectors")
        return result

    def __len__(self) -> int:
        return len(self._entries)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()


def _lookup_class(class_name: str, stylesheet: Mapping[str, Mapping[str, Any]]) -> Optional[Mapping[str, Any]]:
    style = stylesheet.get(class_name)
    if style is None and class_name.startswith(HLJS_CLASS_PREFIX):
        style = stylesheet.get(class_name[len(HLJS_CLASS_PREFIX) :])
    if style is None:
        style = stylesheet.get(f".{class_name}")
    if style is None:
        # first occurrence only
        style = stylesheet.get(class_name.replace(HLJS_CLASS_PREFIX, "", 1))
    return style


def create_style_object(
    class_names: Optional[Sequence[str]],
    base_style: Mapping[str, Any],
    stylesheet: Mapping[str, Mapping[str, Any]],
) -> dict[str, Any]:
    """Resolve the style of a token from its class names.

    Each class is looked up as: the exact name, the name without a leading
    ``hljs-``, the name with a ``.`` prefix, then the name with its first
    ``hljs-`` removed wherever it occurs. The first variant present in the
    stylesheet wins, even when its declarations are empty. Matches are merged over ``base_style`` in class order,
    so later classes win; unmatched classes contribute nothing.
    """
    result = dict(base_style)
    for class_name in class_names or ():
        style = _lookup_class(class_name, stylesheet)
        if style:
            result.update(style)
    return result


def create_native_element(
    token: Token,
    stylesheet: Mapping[str, Mapping[str, Any]],
    key: str,
    default_color: str,
    font_family: str,
    font_size: float,
) -> Fragment:
    """Render one token as a text fragment.

    Leaves get the inherited color over the starting font style. Branches
    resolve their own style and pass their resolved color down as the
    children's inherited color.
    """
    starting_style = {"fontFamily": font_family, "fontSize": font_size, "lineHeight": font_size + 5}

    if isinstance(token, TextToken):
        return text(token.value, key=key, style=[{"color": default_color}, starting_style])

    if isinstance(token, ElementToken):
        style = create_style_object(token.class_names, {"color": default_color, **starting_style}, stylesheet)
        node_color = style.get("color") or default_color
        children = [
            create_native_element(child, stylesheet, f"{key}-{i}", node_color, font_family, font_size)
            for i, child in enumerate(token.children)
        ]
        return text(children, key=key, style=style)

    raise StyleTransformError(f"Cannot render token of type {type(token).__name__}")


def render_token_rows(
    tokens: Sequence[Token],
    transformed: TransformedStylesheet,
    font_family: str,
    font_size: float,
) -> list[Fragment]:
    """Render top-level tokens with keys ``code-segment-{i}``."""
    return [
        create_native_element(
            token, transformed.styles, f"code-segment-{i}", transformed.default_color, font_family, font_size
        )
        for i, token in enumerate(tokens)
    ]
