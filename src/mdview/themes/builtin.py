#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdview/themes/builtin.py
"""Built-in light and dark themes."""

from __future__ import annotations

from typing import Any

from mdview.exceptions import ThemeError
from mdview.themes.base import MarkdownTheme, ThemeColors, ThemeSpacing

_HEADING_SIZES = ((32, 40, 16), (28, 36, 14), (24, 32, 12), (20, 28, 10), (18, 26, 8), (16, 24, 6))


def _make_theme(
    name: str,
    colors: ThemeColors,
    muted_text: str,
    inline_code_background: str,
    document_background: str | None,
) -> MarkdownTheme:
    headings = {
        f"heading{level}": {
            "fontSize": size,
            "fontWeight": "bold",
            "lineHeight": line_height,
            "color": colors.text,
            "marginBottom": margin,
        }
        for level, (size, line_height, margin) in enumerate(_HEADING_SIZES, start=1)
    }

    code_inline: dict[str, Any] = {
        "fontFamily": "monospace",
        "backgroundColor": inline_code_background,
        "paddingHorizontal": 6,
        "paddingVertical": 2,
        "borderRadius": 4,
        "fontSize": 14,
    }
    document: dict[str, Any] = {"padding": 16}
    if document_background is not None:
        code_inline["color"] = colors.text
        document["backgroundColor"] = document_background

    text_styles = {
        "text": {"fontSize": 16, "lineHeight": 24, "color": colors.text},
        **headings,
        "strong": {"fontWeight": "bold"},
        "emphasis": {"fontStyle": "italic"},
        "strikethrough": {"textDecorationLine": "line-through"},
        "link": {"color": colors.link, "textDecorationLine": "underline"},
        "code_inline": code_inline,
        "code_block": {"fontFamily": "monospace", "fontSize": 14, "lineHeight": 20, "color": colors.text},
        "blockquote": {"color": muted_text, "fontStyle": "italic"},
        "list_item": {"fontSize": 16, "lineHeight": 24, "color": colors.text},
        "table_cell": {"fontSize": 14, "color": colors.text},
        "table_header": {"fontSize": 14, "fontWeight": "bold", "color": colors.text},
    }

    border = colors.table_border
    container_styles = {
        "document": document,
        "paragraph": {"marginBottom": 16},
        "blockquote_container": {
            "borderLeftWidth": 4,
            "borderLeftColor": colors.blockquote_border,
            "paddingLeft": 16,
            "marginBottom": 16,
        },
        "code_block_container": {
            "backgroundColor": colors.code_background,
            "padding": 16,
            "borderRadius": 6,
            "marginBottom": 16,
            "overflow": "hidden",
        },
        "list": {"marginBottom": 16},
        "list_item_container": {"flexDirection": "row", "marginBottom": 4},
        "table": {"borderWidth": 1, "borderColor": border, "borderRadius": 6, "marginBottom": 16, "overflow": "hidden"},
        "table_row": {"flexDirection": "row", "borderBottomWidth": 1, "borderBottomColor": border},
        "table_cell_container": {"padding": 8, "borderRightWidth": 1, "borderRightColor": border, "flex": 1},
        "image_container": {"marginBottom": 16},
        "thematic_break": {"height": 1, "backgroundColor": colors.hr, "marginVertical": 24},
        "checkbox": {
            "width": 16,
            "height": 16,
            "borderWidth": 1,
            "borderColor": border,
            "borderRadius": 3,
            "marginRight": 8,
            "justifyContent": "center",
            "alignItems": "center",
        },
        "checkbox_checked": {"backgroundColor": colors.link, "borderColor": colors.link},
    }

    return MarkdownTheme(
        name=name,
        text_styles=text_styles,
        container_styles=container_styles,
        image_styles={"image": {"maxWidth": "100%", "height": "auto"}},
        colors=colors,
        spacing=ThemeSpacing(),
    )


LIGHT_THEME = _make_theme(
    "light",
    ThemeColors(
        text="#1a1a1a",
        background="#ffffff",
        link="#0969da",
        code_background="#f6f8fa",
        blockquote_border="#d0d7de",
        table_border="#d0d7de",
        hr="#d0d7de",
    ),
    muted_text="#656d76",
    inline_code_background="#f6f8fa",
    document_background=None,
)

DARK_THEME = _make_theme(
    "dark",
    ThemeColors(
        text="#e6edf3",
        background="#0d1117",
        link="#58a6ff",
        code_background="#161b22",
        blockquote_border="#3d444d",
        table_border="#3d444d",
        hr="#3d444d",
    ),
    muted_text="#8b949e",
    inline_code_background="#343942",
    document_background="#0d1117",
)

BUILTIN_THEMES: dict[str, MarkdownTheme] = {"light": LIGHT_THEME, "dark": DARK_THEME}


def get_builtin_theme(name: str) -> MarkdownTheme:
    """Return a built-in theme by name ("light" or "dark").

    Raises
    ------
    ThemeError
        If no built-in theme has that name

    """
    try:
        return BUILTIN_THEMES[name.lower()]
    except KeyError:
        raise ThemeError(f"Unknown built-in theme '{name}'. Available: {', '.join(sorted(BUILTIN_THEMES))}") from None
