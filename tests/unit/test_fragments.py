#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Unit tests for the UI fragment model."""

import pytest

from mdview.fragments import (
    compose_styles,
    find_all,
    find_by_key,
    fragment_to_dict,
    image,
    plain_text,
    pressable,
    text,
    view,
)


@pytest.mark.unit
class TestComposeStyles:
    """Test style flattening."""

    def test_later_styles_win(self):
        assert compose_styles({"color": "red", "fontSize": 12}, {"color": "blue"}) == {"color": "blue", "fontSize": 12}

    def test_falsy_entries_skipped(self):
        assert compose_styles(None, False, {}, {"flex": 1}) == {"flex": 1}


@pytest.mark.unit
class TestConstructors:
    """Test fragment constructors."""

    def test_children_flattened_and_none_dropped(self):
        frag = view([text("a", key="a"), None, [text("b", key="b")]], None, key="root")
        assert [child.key for child in frag.children] == ["a", "b"]

    def test_style_list_flattened(self):
        frag = text("x", style=[{"color": "red"}, None, {"fontSize": 10}])
        assert frag.style == {"color": "red", "fontSize": 10}

    def test_none_props_dropped(self):
        frag = pressable(key="p", on_press=None, accessibility_role="button")
        assert frag.props == {"accessibility_role": "button"}
        assert frag.press() is False

    def test_press_invokes_handler(self):
        calls = []
        frag = pressable(key="p", on_press=lambda: calls.append(1))
        assert frag.press() is True
        assert calls == [1]

    def test_image_source_prop(self):
        assert image(source="a.png", key="i").props["source"] == "a.png"


@pytest.mark.unit
class TestTreeHelpers:
    """Test tree traversal helpers."""

    def test_plain_text(self):
        tree = view(text("Hello ", text("world", key="w"), key="t"), key="root")
        assert plain_text(tree) == "Hello world"

    def test_find_helpers(self):
        tree = view(text("a", key="t1"), view(text("b", key="t2"), key="inner"), key="root")
        assert [f.key for f in find_all(tree, "text")] == ["t1", "t2"]
        assert find_by_key(tree, "inner").kind == "view"
        assert find_by_key(tree, "missing") is None

    def test_fragment_to_dict_replaces_callables(self):
        data = fragment_to_dict(pressable("x", key="p", on_press=lambda: None))
        assert data == {"kind": "pressable", "key": "p", "props": {"on_press": True}, "children": ["x"]}
