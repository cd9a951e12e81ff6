#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdview/ast/__init__.py
"""Markdown AST node model and JSON ingestion."""

from mdview.ast.nodes import (
    NODE_TYPES,
    TABLE_CELL_ALIGNMENTS,
    MarkdownNode,
    NodeType,
    ParseError,
    ParseResult,
    TableCellAlign,
)
from mdview.ast.serialization import (
    coerce_nodes,
    node_from_dict,
    node_to_dict,
    nodes_from_json,
    nodes_to_json,
)

__all__ = [
    "NODE_TYPES",
    "TABLE_CELL_ALIGNMENTS",
    "MarkdownNode",
    "NodeType",
    "ParseError",
    "ParseResult",
    "TableCellAlign",
    "coerce_nodes",
    "node_from_dict",
    "node_to_dict",
    "nodes_from_json",
    "nodes_to_json",
]
