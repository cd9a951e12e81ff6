#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdview/fragments.py
"""UI fragment model produced by the renderers.

Renderers do not talk to a widget toolkit directly. They produce a tree of
``Fragment`` records that name a host primitive (``view``, ``text``,
``image``, ``pressable`` or ``scroll_view``) together with a stable key, a
flattened style mapping, props and ordered children. A host adapter maps the
records onto real widgets; the text primitive is non-cascading, so every text
fragment carries the style it should be drawn with.

Children are either fragments or plain strings (raw text runs). Renderers may
also return ``None`` (render nothing) or a list of fragments; the constructors
in this module drop ``None`` children and splice nested lists.

Examples
--------
    >>> from mdview.fragments import text, view
    >>> tree = view(text("Hello", key="t"), key="root", style={"padding": 16})
    >>> plain_text(tree)
    'Hello'

"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Iterator, Literal, Mapping, Optional, Union

FragmentKind = Literal["view", "text", "image", "pressable", "scroll_view"]

VIEW = "view"
TEXT = "text"
IMAGE = "image"
PRESSABLE = "pressable"
SCROLL_VIEW = "scroll_view"

StyleInput = Union[Mapping[str, Any], None, bool]


@dataclass
class Fragment:
    """One host UI primitive in the rendered tree.

    Parameters
    ----------
    kind : str
        Host primitive name
    key : str or None
        Stable reconciliation key
    style : dict
        Flattened style declarations (camelCase property names)
    children : list
        Child fragments and raw text strings
    props : dict
        Other primitive properties (``on_press``, ``source``, accessibility)

    """

    kind: str
    key: Optional[str] = None
    style: dict[str, Any] = field(default_factory=dict)
    children: list[Union[Fragment, str]] = field(default_factory=list)
    props: dict[str, Any] = field(default_factory=dict)

    @property
    def on_press(self) -> Optional[Callable[[], None]]:
        """The press handler attached to this fragment, if any."""
        return self.props.get("on_press")

    def press(self) -> bool:
        """Invoke the press handler, as the host would on activation.

        Returns
        -------
        bool
            True if a handler was attached and called

        """
        handler = self.on_press
        if handler is None:
            return False
        handler()
        return True


UIFragment = Union[Fragment, str, None, list]


def compose_styles(*styles: StyleInput) -> dict[str, Any]:
    """Flatten several style mappings into one; later mappings win.

    ``None``, ``False`` and empty entries are skipped, so conditional styles
    can be written as ``checked and checked_style``.
    """
    result: dict[str, Any] = {}
    for style in styles:
        if style:
            result.update(style)  # type: ignore[arg-type]
    return result


def _flatten_children(children: Iterable[Any]) -> list[Union[Fragment, str]]:
    flat: list[Union[Fragment, str]] = []
    for child in children:
        if child is None or child is False:
            continue
        if isinstance(child, (list, tuple)):
            flat.extend(_flatten_children(child))
        elif isinstance(child, (Fragment, str)):
            flat.append(child)
        else:
            flat.append(str(child))
    return flat


def make_fragment(
    kind: str,
    *children: Any,
    key: str | None = None,
    style: StyleInput | Iterable[StyleInput] = None,
    **props: Any,
) -> Fragment:
    """Create a fragment, flattening styles and children.

    ``style`` may be a single mapping or a list of mappings (flattened with
    ``compose_styles``). Props whose value is ``None`` are dropped.
    """
    if isinstance(style, (list, tuple)):
        flat_style = compose_styles(*style)
    else:
        flat_style = compose_styles(style)  # type: ignore[arg-type]
    clean_props = {name: value for name, value in props.items() if value is not None}
    return Fragment(kind=kind, key=key, style=flat_style, children=_flatten_children(children), props=clean_props)


def view(*children: Any, key: str | None = None, style: Any = None, **props: Any) -> Fragment:
    """Block container primitive."""
    return make_fragment(VIEW, *children, key=key, style=style, **props)


def text(*children: Any, key: str | None = None, style: Any = None, **props: Any) -> Fragment:
    """Inline text run primitive; may only hold text runs and strings."""
    return make_fragment(TEXT, *children, key=key, style=style, **props)


def image(*, source: str, key: str | None = None, style: Any = None, **props: Any) -> Fragment:
    """Image primitive loading ``source``."""
    return make_fragment(IMAGE, key=key, style=style, source=source, **props)


def pressable(*children: Any, key: str | None = None, style: Any = None, **props: Any) -> Fragment:
    """Touchable wrapper primitive; carries ``on_press``."""
    return make_fragment(PRESSABLE, *children, key=key, style=style, **props)


def scroll_view(*children: Any, key: str | None = None, style: Any = None, **props: Any) -> Fragment:
    """Scrollable container primitive."""
    return make_fragment(SCROLL_VIEW, *children, key=key, style=style, **props)


def iter_fragments(root: Union[Fragment, str, None]) -> Iterator[Fragment]:
    """Iterate depth-first over every fragment in a tree (strings skipped)."""
    if not isinstance(root, Fragment):
        return
    stack: list[Fragment] = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(child for child in reversed(node.children) if isinstance(child, Fragment))


def find_all(root: Union[Fragment, str, None], kind: str) -> list[Fragment]:
    """Return every fragment of ``kind`` in document order."""
    return [node for node in iter_fragments(root) if node.kind == kind]


def find_by_key(root: Union[Fragment, str, None], key: str) -> Optional[Fragment]:
    """Return the first fragment whose key equals ``key``."""
    for node in iter_fragments(root):
        if node.key == key:
            return node
    return None


def plain_text(root: Union[Fragment, str, None]) -> str:
    """Concatenate every string in the tree, in order."""
    if root is None:
        return ""
    if isinstance(root, str):
        return root
    return "".join(plain_text(child) for child in root.children)


def fragment_to_dict(root: Union[Fragment, str]) -> Union[dict[str, Any], str]:
    """Convert a fragment tree into plain data for dumping or comparison.

    Callable props (press handlers) are replaced by ``True`` so two renders of
    the same input compare equal.
    """
    if isinstance(root, str):
        return root
    props = {name: (True if callable(value) else value) for name, value in sorted(root.props.items())}
    result: dict[str, Any] = {"kind": root.kind}
    if root.key is not None:
        result["key"] = root.key
    if root.style:
        result["style"] = dict(root.style)
    if props:
        result["props"] = props
    if root.children:
        result["children"] = [fragment_to_dict(child) for child in root.children]
    return result
