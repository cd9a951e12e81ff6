#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Unit tests for the AST node model and JSON ingestion."""

import json

import pytest
from utils import node, txt

from mdview.ast import (
    NODE_TYPES,
    MarkdownNode,
    ParseError,
    ParseResult,
    coerce_nodes,
    node_from_dict,
    node_to_dict,
    nodes_from_json,
    nodes_to_json,
)
from mdview.exceptions import ValidationError


@pytest.mark.unit
class TestMarkdownNode:
    """Test the node record."""

    def test_node_types_cover_builtin_kinds(self):
        for kind in ("document", "heading", "task_list_item", "wiki_link", "underline", "table_cell"):
            assert kind in NODE_TYPES

    def test_unknown_type_is_allowed(self):
        custom = MarkdownNode(type="callout", content="note")
        assert custom.type == "callout"
        assert not custom.has_children

    def test_walk_is_document_order(self):
        tree = node("paragraph", txt("a"), node("strong", txt("b")), txt("c"))
        assert [n.type for n in tree.walk()] == ["paragraph", "text", "strong", "text", "text"]

    def test_text_content(self):
        tree = node("paragraph", txt("Hello "), node("emphasis", txt("world")))
        assert tree.text_content() == "Hello world"


@pytest.mark.unit
class TestParseResult:
    """Test the parse envelope."""

    def test_ok(self):
        result = ParseResult.ok([MarkdownNode(type="document", children=[])])
        assert result.success
        assert result.error is None
        assert result.nodes[0].type == "document"

    def test_failure_has_no_nodes(self):
        result = ParseResult.failure("boom", line=3)
        assert not result.success
        assert result.nodes == []
        assert result.error == ParseError("boom", 3, None)

    def test_describe(self):
        assert ParseError("bad").describe() == "bad"
        assert ParseError("bad", 2).describe() == "bad (line 2)"
        assert ParseError("bad", 2, 7).describe() == "bad (line 2, column 7)"


@pytest.mark.unit
class TestSerialization:
    """Test JSON ingestion and emission."""

    def test_node_from_dict_nested(self):
        data = {
            "type": "table_cell",
            "isHeader": True,
            "align": "center",
            "children": [{"type": "text", "content": "H"}],
        }
        cell = node_from_dict(data)
        assert cell.is_header is True
        assert cell.align == "center"
        assert cell.children[0].content == "H"

    def test_snake_case_header_flag_accepted(self):
        assert node_from_dict({"type": "table_cell", "is_header": False}).is_header is False

    def test_integral_floats_become_ints(self):
        assert node_from_dict({"type": "heading", "level": 2.0}).level == 2

    def test_missing_type_rejected(self):
        with pytest.raises(ValidationError):
            node_from_dict({"content": "x"})

    def test_wrong_attribute_type_rejected(self):
        with pytest.raises(ValidationError):
            node_from_dict({"type": "heading", "level": "2"})

    def test_bool_is_not_an_int(self):
        with pytest.raises(ValidationError):
            node_from_dict({"type": "list", "start": True})

    def test_children_must_be_a_list(self):
        with pytest.raises(ValidationError):
            node_from_dict({"type": "paragraph", "children": "text"})

    def test_node_to_dict_omits_none(self):
        data = node_to_dict(node("link", txt("x"), href="https://example.com"))
        assert data == {"type": "link", "href": "https://example.com", "children": [{"type": "text", "content": "x"}]}

    def test_nodes_from_json_object_or_array(self):
        assert len(nodes_from_json('{"type": "document", "children": []}')) == 1
        assert len(nodes_from_json('[{"type": "text"}, {"type": "text"}]')) == 2

    def test_nodes_from_json_invalid(self):
        with pytest.raises(ValidationError):
            nodes_from_json("{not json")
        with pytest.raises(ValidationError):
            nodes_from_json("42")

    def test_nodes_to_json_uses_camel_case_header(self):
        payload = json.loads(nodes_to_json([MarkdownNode(type="table_cell", is_header=True)]))
        assert payload == [{"type": "table_cell", "isHeader": True}]


@pytest.mark.unit
class TestCoerceNodes:
    """Test normalization of the accepted AST inputs."""

    def test_single_node(self):
        n = txt("x")
        assert coerce_nodes(n) == [n]

    def test_parse_result(self):
        doc = MarkdownNode(type="document", children=[])
        assert coerce_nodes(ParseResult.ok([doc])) == [doc]

    def test_mixed_iterable(self):
        nodes = coerce_nodes([txt("a"), {"type": "text", "content": "b"}])
        assert [n.content for n in nodes] == ["a", "b"]

    def test_text_rejected(self):
        with pytest.raises(ValidationError):
            coerce_nodes("# markdown")
