#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdview/renderers/defaults.py
"""Built-in renderers, one per node type.

Every renderer has the signature ``renderer(node, key, ctx)`` and returns a
``Fragment``, a raw string, a list of those, or ``None`` to render nothing.
Children are always rendered through ``ctx.render_node`` (directly or via
``ctx.render_children``) so that caller overrides apply at every depth.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Optional

from mdview.ast.nodes import MarkdownNode
from mdview.constants import DEFAULT_CODE_LANGUAGE
from mdview.fragments import UIFragment, compose_styles, image, pressable, text, view
from mdview.renderers.context import RenderContext, child_key
from mdview.themes.base import SyntaxHighlightingOptions

logger = logging.getLogger(__name__)

_IMAGE_STYLE: Mapping[str, Any] = {"width": "100%", "height": 200, "resizeMode": "cover", "borderRadius": 8}
_CHECK_MARK_STYLE: Mapping[str, Any] = {"color": "#fff", "fontSize": 12}
_TEXT_ALIGNMENTS = frozenset({"left", "center", "right"})
_FLEX_FILL: Mapping[str, Any] = {"flex": 1}
DEFAULT_HIGHLIGHTING = SyntaxHighlightingOptions()


def render_text(node: MarkdownNode, key: str, ctx: RenderContext) -> UIFragment:
    return node.content or ""


def _styled_run(style_name: str) -> Callable[[MarkdownNode, str, RenderContext], UIFragment]:
    def render(node: MarkdownNode, key: str, ctx: RenderContext) -> UIFragment:
        return text(ctx.render_children(node, key), key=key, style=ctx.theme.text_style(style_name))

    render.__name__ = f"render_{style_name}"
    render.__doc__ = f"Text run with the ``{style_name}`` text style."
    return render


render_strong = _styled_run("strong")
render_emphasis = _styled_run("emphasis")
render_strikethrough = _styled_run("strikethrough")


def render_underline(node: MarkdownNode, key: str, ctx: RenderContext) -> UIFragment:
    style = compose_styles({"textDecorationLine": "underline"}, ctx.theme.text_style("underline"))
    return text(ctx.render_children(node, key), key=key, style=style)


def render_heading(node: MarkdownNode, key: str, ctx: RenderContext) -> UIFragment:
    level = node.level or 1
    style = ctx.theme.text_styles.get(f"heading{level}") or ctx.theme.text_style("heading1")
    return text(
        ctx.render_children(node, key),
        key=key,
        style=style,
        accessibility_role="header",
        accessibility_label=f"Heading level {level}",
    )


def render_paragraph(node: MarkdownNode, key: str, ctx: RenderContext) -> UIFragment:
    """Render a paragraph.

    A text primitive cannot hold an image, so a paragraph with an image child
    becomes a view: images are rendered directly and every other child gets its
    own text run.
    """
    theme = ctx.theme
    children = node.children or []

    if any(child.type == "image" for child in children):
        parts: list[UIFragment] = []
        for i, child in enumerate(children):
            item_key = child_key(key, i)
            if child.type == "image":
                parts.append(ctx.render_node(child, item_key))
            else:
                parts.append(
                    text(ctx.render_node(child, f"{item_key}-inner"), key=item_key, style=theme.text_style("text"))
                )
        return view(parts, key=key, style=theme.container_style("paragraph"))

    return text(
        ctx.render_children(node, key),
        key=key,
        style=[theme.text_style("text"), theme.container_style("paragraph")],
    )


def _press_link(ctx: RenderContext, href: Optional[str], title: Optional[str]) -> Callable[[], None]:
    def handle_press() -> None:
        if ctx.on_link_press is not None and href:
            ctx.on_link_press(href, title)

    return handle_press


def render_link(node: MarkdownNode, key: str, ctx: RenderContext) -> UIFragment:
    return text(
        ctx.render_children(node, key),
        key=key,
        style=ctx.theme.text_style("link"),
        on_press=_press_link(ctx, node.href, node.title),
        accessibility_role="link",
        accessibility_label=f"Link to {node.href}",
        accessibility_hint="Double tap to open",
    )


def render_wiki_link(node: MarkdownNode, key: str, ctx: RenderContext) -> UIFragment:
    """Wiki links behave like links targeting ``href``; a bare link shows its target."""
    children: Any = ctx.render_children(node, key) if node.children else (node.href or "")
    return text(
        children,
        key=key,
        style=ctx.theme.text_style("link"),
        on_press=_press_link(ctx, node.href, node.title),
        accessibility_role="link",
        accessibility_label=f"Link to {node.href}",
    )


def render_image(node: MarkdownNode, key: str, ctx: RenderContext) -> UIFragment:
    """Render an image with an optional caption; images without ``src`` render nothing."""
    src = node.src
    if not src:
        return None

    theme = ctx.theme
    on_press = None
    if ctx.on_image_press is not None:
        callback = ctx.on_image_press

        def on_press() -> None:
            callback(src, node.alt, node.title)

    caption = None
    if node.alt:
        caption = text(
            node.alt,
            key=f"{key}-caption",
            style={"fontSize": 12, "color": theme.colors.text, "opacity": 0.7, "textAlign": "center", "marginTop": 4},
        )

    return view(
        pressable(
            image(
                source=src,
                key=f"{key}-image",
                style=[_IMAGE_STYLE, theme.image_style()],
                accessibility_label=node.alt,
            ),
            key=f"{key}-pressable",
            on_press=on_press,
            accessibility_role="image",
            accessibility_label=node.alt or "Image",
        ),
        caption,
        key=key,
        style=theme.container_style("image_container"),
    )


def render_code_inline(node: MarkdownNode, key: str, ctx: RenderContext) -> UIFragment:
    content: Any = node.content if node.content is not None else ctx.render_children(node, key)
    return text(content, key=key, style=ctx.theme.text_style("code_inline"), accessibility_label="Code")


def code_block_source(node: MarkdownNode) -> str:
    """Code of a code block: ``content``, else the concatenated child contents."""
    if node.content is not None:
        return node.content
    return "".join(child.content or "" for child in node.children or [])


def render_code_block(node: MarkdownNode, key: str, ctx: RenderContext) -> UIFragment:
    """Render a fenced or indented code block.

    Highlighting is on unless the theme's highlighting configuration sets
    ``enabled=False``; a theme without one uses the default options. It also
    needs an injected highlighter that reports its backend as available;
    otherwise the code is a single monospaced text run.
    """
    theme = ctx.theme
    code = code_block_source(node)
    options = theme.syntax_highlighting or DEFAULT_HIGHLIGHTING
    highlighter = ctx.highlighter

    if options.enabled and highlighter is not None and highlighter.is_available():
        body = highlighter.render(
            code,
            language=node.language or DEFAULT_CODE_LANGUAGE,
            options=options,
            key=f"{key}-code",
        )
    else:
        body = text(code, key=f"{key}-code", style=theme.text_style("code_block"))

    return view(body, key=key, style=theme.container_style("code_block_container"), accessibility_label="Code block")


def render_blockquote(node: MarkdownNode, key: str, ctx: RenderContext) -> UIFragment:
    theme = ctx.theme
    return view(
        text(ctx.render_children(node, key), key=f"{key}-text", style=theme.text_style("blockquote")),
        key=key,
        style=theme.container_style("blockquote_container"),
        accessibility_label="Quote",
    )


def render_list(node: MarkdownNode, key: str, ctx: RenderContext) -> UIFragment:
    return view(
        ctx.render_children(node, key),
        key=key,
        style=ctx.theme.container_style("list"),
        accessibility_label="Numbered list" if node.ordered else "Bullet list",
    )


def list_item_marker(node: MarkdownNode, ctx: RenderContext) -> str:
    """Bullet of a list item: ``"• "``, or ``"{n}. "`` inside an ordered list."""
    parent = ctx.parent
    if parent is not None and parent.type == "list" and parent.ordered:
        index = ctx.sibling_index(node) or 0
        start = parent.start if parent.start is not None else 1
        return f"{start + index}. "
    return "• "


def render_list_item(node: MarkdownNode, key: str, ctx: RenderContext) -> UIFragment:
    theme = ctx.theme
    item_style = theme.text_style("list_item")
    return view(
        text(list_item_marker(node, ctx), key=f"{key}-marker", style=item_style),
        text(ctx.render_children(node, key), key=f"{key}-content", style=[item_style, _FLEX_FILL]),
        key=key,
        style=theme.container_style("list_item_container"),
    )


def render_task_list_item(node: MarkdownNode, key: str, ctx: RenderContext) -> UIFragment:
    """Render a task list item; pressing proposes the opposite state and never mutates the node."""
    theme = ctx.theme
    checked = bool(node.checked)

    def handle_toggle() -> None:
        if ctx.on_checkbox_toggle is not None:
            ctx.on_checkbox_toggle(not checked, node)

    checkbox = pressable(
        text("✓", key=f"{key}-check", style=_CHECK_MARK_STYLE) if checked else None,
        key=f"{key}-checkbox",
        style=[theme.container_style("checkbox"), checked and theme.container_style("checkbox_checked")],
        on_press=handle_toggle,
        accessibility_role="checkbox",
        accessibility_state={"checked": checked},
    )
    return view(
        checkbox,
        text(ctx.render_children(node, key), key=f"{key}-content", style=[theme.text_style("list_item"), _FLEX_FILL]),
        key=key,
        style=theme.container_style("list_item_container"),
    )


def render_table(node: MarkdownNode, key: str, ctx: RenderContext) -> UIFragment:
    return view(
        ctx.render_children(node, key), key=key, style=ctx.theme.container_style("table"), accessibility_label="Table"
    )


def render_table_row(node: MarkdownNode, key: str, ctx: RenderContext) -> UIFragment:
    return view(ctx.render_children(node, key), key=key, style=ctx.theme.container_style("table_row"))


def render_table_cell(node: MarkdownNode, key: str, ctx: RenderContext) -> UIFragment:
    theme = ctx.theme
    text_style = theme.text_style("table_header" if node.is_header else "table_cell")
    align_style = {"textAlign": node.align} if node.align in _TEXT_ALIGNMENTS else None
    return view(
        text(ctx.render_children(node, key), key=f"{key}-text", style=[text_style, align_style]),
        key=key,
        style=theme.container_style("table_cell_container"),
    )


def render_thematic_break(node: MarkdownNode, key: str, ctx: RenderContext) -> UIFragment:
    return view(key=key, style=ctx.theme.container_style("thematic_break"))


def render_softbreak(node: MarkdownNode, key: str, ctx: RenderContext) -> UIFragment:
    return text(" ", key=key)


def render_hardbreak(node: MarkdownNode, key: str, ctx: RenderContext) -> UIFragment:
    return text("\n", key=key)


def render_math_inline(node: MarkdownNode, key: str, ctx: RenderContext) -> UIFragment:
    content: Any = node.content if node.content is not None else ctx.render_children(node, key)
    return text(content, key=key, style=ctx.theme.text_style("code_inline"), accessibility_label="Math")


def render_math_block(node: MarkdownNode, key: str, ctx: RenderContext) -> UIFragment:
    theme = ctx.theme
    return view(
        text(code_block_source(node), key=f"{key}-math", style=theme.text_style("code_block")),
        key=key,
        style=theme.container_style("code_block_container"),
        accessibility_label="Math block",
    )


def render_html_block(node: MarkdownNode, key: str, ctx: RenderContext) -> UIFragment:
    theme = ctx.theme
    return text(node.content or "", key=key, style=[theme.text_style("text"), theme.container_style("paragraph")])


def render_html_inline(node: MarkdownNode, key: str, ctx: RenderContext) -> UIFragment:
    return text(node.content or "", key=key)


def render_default(node: MarkdownNode, key: str, ctx: RenderContext) -> UIFragment:
    """Fallback for node types without a renderer.

    Renders the children as one text run, else the ``content`` as a text run,
    else nothing.
    """
    if node.children:
        return text(ctx.render_children(node, key), key=key)
    if node.content:
        return text(node.content, key=key)
    return None


DEFAULT_RENDERERS: dict[str, Callable[[MarkdownNode, str, RenderContext], UIFragment]] = {
    "text": render_text,
    "strong": render_strong,
    "emphasis": render_emphasis,
    "strikethrough": render_strikethrough,
    "underline": render_underline,
    "heading": render_heading,
    "paragraph": render_paragraph,
    "link": render_link,
    "wiki_link": render_wiki_link,
    "image": render_image,
    "code_inline": render_code_inline,
    "code_block": render_code_block,
    "blockquote": render_blockquote,
    "list": render_list,
    "list_item": render_list_item,
    "task_list_item": render_task_list_item,
    "table": render_table,
    "table_row": render_table_row,
    "table_cell": render_table_cell,
    "thematic_break": render_thematic_break,
    "softbreak": render_softbreak,
    "hardbreak": render_hardbreak,
    "math_inline": render_math_inline,
    "math_block": render_math_block,
    "html_block": render_html_block,
    "html_inline": render_html_inline,
}
