#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdview/themes/base.py
"""Theme data model.

A ``MarkdownTheme`` bundles the style configuration consumed by the renderers:

- ``text_styles``: per node kind text styles (``heading1`` .. ``heading6``,
  ``link``, ``code_block`` ...)
- ``container_styles``: styles of block containers (``paragraph``,
  ``code_block_container``, ``checkbox`` ...)
- ``image_styles``: styles of image primitives
- ``colors`` and ``spacing``: fixed palette and spacing scalars
- ``syntax_highlighting``: optional code highlighting configuration

Structure keys are snake_case; the style mappings themselves use the host
primitive's camelCase property names (``fontSize``, ``backgroundColor``).

Themes are created once and treated as immutable. Customization goes through
``MarkdownTheme.merged``, which deep-merges a partial override mapping and
returns a new theme.

"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from types import MappingProxyType
from typing import Any, Literal, Mapping, Optional

from mdview.constants import DEFAULT_CODE_FONT_FAMILY, DEFAULT_CODE_FONT_SIZE, HIGHLIGHTER_BACKENDS
from mdview.exceptions import ThemeError
from mdview.options.base import CloneFrozenMixin
from mdview.themes.merge import deep_merge

Style = Mapping[str, Any]

TEXT_STYLE_NAMES: tuple[str, ...] = (
    "text",
    "heading1",
    "heading2",
    "heading3",
    "heading4",
    "heading5",
    "heading6",
    "strong",
    "emphasis",
    "strikethrough",
    "link",
    "code_inline",
    "code_block",
    "blockquote",
    "list_item",
    "table_cell",
    "table_header",
)

CONTAINER_STYLE_NAMES: tuple[str, ...] = (
    "document",
    "paragraph",
    "blockquote_container",
    "code_block_container",
    "list",
    "list_item_container",
    "table",
    "table_row",
    "table_cell_container",
    "image_container",
    "thematic_break",
    "checkbox",
    "checkbox_checked",
)

# The external highlighting stylesheet is an opaque object; merging never recurses into it
_OPAQUE_KEYS = frozenset({"stylesheet"})

_EMPTY_STYLE: Style = MappingProxyType({})


def _freeze_styles(styles: Mapping[str, Any], section: str) -> Mapping[str, Style]:
    if not isinstance(styles, Mapping):
        raise ThemeError(f"Theme section '{section}' must be a mapping, got {type(styles).__name__}")
    frozen: dict[str, Style] = {}
    for name, style in styles.items():
        if not isinstance(style, Mapping):
            raise ThemeError(f"Style '{section}.{name}' must be a mapping, got {type(style).__name__}")
        frozen[name] = MappingProxyType(dict(style))
    return MappingProxyType(frozen)


@dataclass(frozen=True)
class ThemeColors(CloneFrozenMixin):
    """Fixed color palette of a theme."""

    text: str
    background: str
    link: str
    code_background: str
    blockquote_border: str
    table_border: str
    hr: str


@dataclass(frozen=True)
class ThemeSpacing(CloneFrozenMixin):
    """Spacing scalars of a theme."""

    paragraph: float = 16
    list_indent: float = 24
    code_block_padding: float = 16
    blockquote_padding: float = 16
    table_cell_padding: float = 8


@dataclass(frozen=True)
class SyntaxHighlightingOptions(CloneFrozenMixin):
    """Code block highlighting configuration.

    Parameters
    ----------
    enabled : bool, default True
        Highlight code blocks when the highlighting backend is installed
    stylesheet : Any, default None
        CSS-class-keyed stylesheet (hljs or prism convention); kept by identity
    highlighter : {"hljs", "prism"}, default "hljs"
        Selector convention of ``stylesheet``
    font_size : float, default 14
        Code font size in pixels
    font_family : str, default "monospace"
        Code font family

    """

    enabled: bool = True
    stylesheet: Any = field(default=None, compare=False)
    highlighter: Literal["hljs", "prism"] = "hljs"
    font_size: float = DEFAULT_CODE_FONT_SIZE
    font_family: str = DEFAULT_CODE_FONT_FAMILY

    def __post_init__(self) -> None:
        """Validate the backend name and font size.

        Raises
        ------
        ValueError
            If ``highlighter`` is unknown or ``font_size`` is not positive.

        """
        if self.highlighter not in HIGHLIGHTER_BACKENDS:
            raise ValueError(f"highlighter must be one of {HIGHLIGHTER_BACKENDS}, got {self.highlighter!r}")
        if self.font_size <= 0:
            raise ValueError(f"font_size must be positive, got {self.font_size}")


@dataclass(frozen=True)
class MarkdownTheme(CloneFrozenMixin):
    """Complete style configuration used while rendering.

    Parameters
    ----------
    text_styles : Mapping[str, Mapping]
        Text styles keyed by name (see ``TEXT_STYLE_NAMES``)
    container_styles : Mapping[str, Mapping]
        Container styles keyed by name (see ``CONTAINER_STYLE_NAMES``)
    image_styles : Mapping[str, Mapping]
        Image styles (``image``)
    colors : ThemeColors
        Color palette
    spacing : ThemeSpacing
        Spacing scalars
    syntax_highlighting : SyntaxHighlightingOptions or None
        Code highlighting configuration; ``None`` uses the default options, so
        code is highlighted whenever a highlighter is available
    name : str, default "custom"
        Display name

    """

    text_styles: Mapping[str, Style]
    container_styles: Mapping[str, Style]
    image_styles: Mapping[str, Style]
    colors: ThemeColors
    spacing: ThemeSpacing = field(default_factory=ThemeSpacing)
    syntax_highlighting: Optional[SyntaxHighlightingOptions] = None
    name: str = "custom"

    def __post_init__(self) -> None:
        """Freeze the style sections so the theme cannot be mutated in place."""
        object.__setattr__(self, "text_styles", _freeze_styles(self.text_styles, "text_styles"))
        object.__setattr__(self, "container_styles", _freeze_styles(self.container_styles, "container_styles"))
        object.__setattr__(self, "image_styles", _freeze_styles(self.image_styles, "image_styles"))

    def text_style(self, name: str) -> Style:
        """Return the named text style, or an empty style."""
        return self.text_styles.get(name, _EMPTY_STYLE)

    def container_style(self, name: str) -> Style:
        """Return the named container style, or an empty style."""
        return self.container_styles.get(name, _EMPTY_STYLE)

    def image_style(self, name: str = "image") -> Style:
        """Return the named image style, or an empty style."""
        return self.image_styles.get(name, _EMPTY_STYLE)

    def to_dict(self) -> dict[str, Any]:
        """Return the theme as nested plain data.

        The highlighting stylesheet is returned by reference, not copied.
        """
        data: dict[str, Any] = {
            "name": self.name,
            "text_styles": {name: dict(style) for name, style in self.text_styles.items()},
            "container_styles": {name: dict(style) for name, style in self.container_styles.items()},
            "image_styles": {name: dict(style) for name, style in self.image_styles.items()},
            "colors": asdict(self.colors),
            "spacing": asdict(self.spacing),
        }
        if self.syntax_highlighting is not None:
            options = self.syntax_highlighting
            data["syntax_highlighting"] = {name: getattr(options, name) for name in options.field_names()}
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> MarkdownTheme:
        """Build a complete theme from nested plain data.

        Raises
        ------
        ThemeError
            If a section is missing, has unknown keys, or holds invalid values

        """
        if not isinstance(data, Mapping):
            raise ThemeError(f"Theme must be a mapping, got {type(data).__name__}")

        allowed = set(cls.field_names())
        unknown = set(data) - allowed
        if unknown:
            raise ThemeError(f"Unknown theme keys: {', '.join(sorted(unknown))}")

        try:
            colors = ThemeColors(**data["colors"])
            spacing = ThemeSpacing(**data.get("spacing", {}))
            highlighting_data = data.get("syntax_highlighting")
            highlighting = (
                SyntaxHighlightingOptions(**highlighting_data) if highlighting_data is not None else None
            )
            return cls(
                text_styles=data.get("text_styles", {}),
                container_styles=data.get("container_styles", {}),
                image_styles=data.get("image_styles", {}),
                colors=colors,
                spacing=spacing,
                syntax_highlighting=highlighting,
                name=data.get("name", "custom"),
            )
        except KeyError as e:
            raise ThemeError(f"Theme is missing required section {e}", original_error=e) from e
        except (TypeError, ValueError) as e:
            raise ThemeError(f"Invalid theme definition: {e}", original_error=e) from e

    def merged(self, overrides: Mapping[str, Any] | None) -> MarkdownTheme:
        """Return a new theme with a partial override deep-merged over this one.

        Parameters
        ----------
        overrides : Mapping or None
            Partial theme, e.g. ``{"colors": {"link": "#f0f"}}``

        Returns
        -------
        MarkdownTheme
            The merged theme, or ``self`` when there is nothing to merge

        """
        if not overrides:
            return self
        return MarkdownTheme.from_dict(deep_merge(self.to_dict(), overrides, leaf_keys=_OPAQUE_KEYS))
