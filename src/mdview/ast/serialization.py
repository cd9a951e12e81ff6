#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdview/ast/serialization.py
"""JSON ingestion and emission for AST nodes.

External parsers hand over the tree as JSON-shaped data: one object per node
with a ``type`` key and optional attributes. This module converts between that
shape and ``MarkdownNode`` instances. The JSON shape uses ``isHeader`` for the
table-cell header flag; ``is_header`` is accepted as well when reading.

Examples
--------
    >>> from mdview.ast.serialization import nodes_from_json, node_to_dict
    >>> nodes = nodes_from_json('[{"type": "document", "children": []}]')
    >>> node_to_dict(nodes[0])
    {'type': 'document', 'children': []}

"""

from __future__ import annotations

import json
from typing import Any, Iterable, Mapping, Union

from mdview.ast.nodes import MarkdownNode, ParseResult
from mdview.exceptions import ValidationError

# (attribute name, JSON key, expected python types)
_SCALAR_FIELDS: tuple[tuple[str, str, tuple[type, ...]], ...] = (
    ("content", "content", (str,)),
    ("level", "level", (int,)),
    ("href", "href", (str,)),
    ("src", "src", (str,)),
    ("alt", "alt", (str,)),
    ("title", "title", (str,)),
    ("language", "language", (str,)),
    ("ordered", "ordered", (bool,)),
    ("start", "start", (int,)),
    ("checked", "checked", (bool,)),
    ("align", "align", (str,)),
    ("is_header", "isHeader", (bool,)),
)

AstInput = Union[MarkdownNode, Mapping[str, Any], ParseResult, Iterable[Union[MarkdownNode, Mapping[str, Any]]]]


def _coerce_scalar(attr: str, value: Any, expected: tuple[type, ...]) -> Any:
    if value is None:
        return None
    # JSON numbers arrive as floats from some producers
    if int in expected and isinstance(value, float) and value.is_integer():
        return int(value)
    if bool not in expected and isinstance(value, bool):
        raise ValidationError(
            f"Invalid value for node attribute '{attr}': {value!r}", parameter_name=attr, parameter_value=value
        )
    if not isinstance(value, expected):
        raise ValidationError(
            f"Invalid value for node attribute '{attr}': {value!r}", parameter_name=attr, parameter_value=value
        )
    return value


def node_from_dict(data: Mapping[str, Any]) -> MarkdownNode:
    """Build a ``MarkdownNode`` tree from a JSON-shaped mapping.

    Parameters
    ----------
    data : Mapping
        Node object with a ``type`` key, optional attributes and ``children``

    Returns
    -------
    MarkdownNode
        Freshly built node; children are converted recursively

    Raises
    ------
    ValidationError
        If the mapping has no string ``type`` or an attribute has the wrong type

    """
    if not isinstance(data, Mapping):
        raise ValidationError(
            f"AST node must be a mapping, got {type(data).__name__}", parameter_name="node", parameter_value=data
        )

    node_type = data.get("type")
    if not isinstance(node_type, str) or not node_type:
        raise ValidationError("AST node is missing a 'type' string", parameter_name="type", parameter_value=node_type)

    kwargs: dict[str, Any] = {}
    for attr, key, expected in _SCALAR_FIELDS:
        value = data.get(key)
        if value is None and key != attr:
            value = data.get(attr)
        kwargs[attr] = _coerce_scalar(attr, value, expected)

    raw_children = data.get("children")
    children: list[MarkdownNode] | None = None
    if raw_children is not None:
        if isinstance(raw_children, (str, bytes)) or not isinstance(raw_children, Iterable):
            raise ValidationError(
                "AST node 'children' must be a list", parameter_name="children", parameter_value=raw_children
            )
        children = [node_from_dict(child) for child in raw_children]

    return MarkdownNode(type=node_type, children=children, **kwargs)


def node_to_dict(node: MarkdownNode) -> dict[str, Any]:
    """Convert a node tree into its JSON-shaped mapping.

    Attributes that are ``None`` are omitted, matching what parsers emit.
    """
    result: dict[str, Any] = {"type": node.type}
    for attr, key, _expected in _SCALAR_FIELDS:
        value = getattr(node, attr)
        if value is not None:
            result[key] = value
    if node.children is not None:
        result["children"] = [node_to_dict(child) for child in node.children]
    return result


def nodes_from_json(payload: str | bytes) -> list[MarkdownNode]:
    """Parse a JSON document holding one node or a list of nodes.

    Raises
    ------
    ValidationError
        If the payload is not valid JSON or does not describe nodes

    """
    try:
        data = json.loads(payload)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Invalid AST JSON: {e}", parameter_name="payload", original_error=e) from e

    if isinstance(data, Mapping):
        return [node_from_dict(data)]
    if isinstance(data, list):
        return [node_from_dict(item) for item in data]
    raise ValidationError("AST JSON must be an object or an array", parameter_name="payload", parameter_value=data)


def nodes_to_json(nodes: Iterable[MarkdownNode], indent: int | None = None) -> str:
    """Serialize nodes to a JSON array string."""
    return json.dumps([node_to_dict(node) for node in nodes], indent=indent, ensure_ascii=False)


def coerce_nodes(ast: AstInput) -> list[MarkdownNode]:
    """Normalize the accepted AST inputs to a list of root nodes.

    Accepts a single node, a single mapping, a ``ParseResult`` (its nodes), or
    an iterable mixing nodes and mappings.
    """
    if isinstance(ast, MarkdownNode):
        return [ast]
    if isinstance(ast, ParseResult):
        return list(ast.nodes)
    if isinstance(ast, Mapping):
        return [node_from_dict(ast)]
    if isinstance(ast, (str, bytes)):
        raise ValidationError("AST must be nodes or mappings, not text", parameter_name="ast", parameter_value=ast)

    nodes: list[MarkdownNode] = []
    for item in ast:
        nodes.append(item if isinstance(item, MarkdownNode) else node_from_dict(item))
    return nodes
