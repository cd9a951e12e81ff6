"""Output helpers for the mdview command line."""

#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/mdview/cli/output.py
from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Optional, TextIO, Union

from mdview.constants import DEPS_RICH
from mdview.exceptions import DependencyError
from mdview.fragments import Fragment, fragment_to_dict
from mdview.utils.packages import is_module_available

_, RICH_IMPORT_NAME, _ = DEPS_RICH[0]


def check_rich_available() -> bool:
    """Check if the Rich library is importable."""
    return is_module_available(RICH_IMPORT_NAME)


def should_use_rich_output(
    args: argparse.Namespace, raise_on_missing: bool = False, stream: Optional[TextIO] = None
) -> bool:
    """Decide whether to print with Rich.

    Rich is used when ``--rich`` is set, Rich is installed, and the output
    stream is a terminal (or ``--force-rich`` is set).

    Raises
    ------
    DependencyError
        If ``--rich`` is set, Rich is missing and ``raise_on_missing`` is True

    """
    if not getattr(args, "rich", False):
        return False

    if not check_rich_available():
        if raise_on_missing:
            raise DependencyError(
                feature_name="rich-output",
                missing_packages=[("rich", "")],
                message="Rich output requires the optional 'rich' dependency. Install with: pip install mdview[rich]",
            )
        return False

    if getattr(args, "force_rich", False):
        return True

    target = stream or sys.stdout
    isatty = getattr(target, "isatty", None)
    return bool(callable(isatty) and isatty())


def _describe(fragment: Fragment) -> str:
    label = fragment.kind
    if fragment.key is not None:
        label += f" [{fragment.key}]"
    props = {name: value for name, value in fragment.props.items() if not callable(value)}
    if props:
        label += " " + json.dumps(props, ensure_ascii=False, sort_keys=True, default=str)
    if fragment.style:
        label += f" style={json.dumps(fragment.style, ensure_ascii=False, sort_keys=True, default=str)}"
    if fragment.on_press is not None:
        label += " (pressable)"
    return label


def format_tree(root: Union[Fragment, str], indent: str = "  ") -> str:
    """Indented text outline of a fragment tree, one primitive per line."""
    lines: list[str] = []

    def visit(node: Union[Fragment, str], depth: int) -> None:
        prefix = indent * depth
        if isinstance(node, str):
            lines.append(f"{prefix}{json.dumps(node, ensure_ascii=False)}")
            return
        lines.append(prefix + _describe(node))
        for child in node.children:
            visit(child, depth + 1)

    visit(root, 0)
    return "\n".join(lines)


def format_json(root: Union[Fragment, str], indent: Optional[int] = 2) -> str:
    """JSON dump of a fragment tree; press handlers appear as ``true``."""
    return json.dumps(fragment_to_dict(root), indent=indent, ensure_ascii=False, default=str)


def print_rich_tree(root: Fragment, console: Any = None) -> None:
    """Print a fragment tree with Rich."""
    from rich.console import Console
    from rich.markup import escape
    from rich.tree import Tree

    def build(branch: Any, node: Union[Fragment, str]) -> None:
        if isinstance(node, str):
            branch.add(f"[green]{escape(repr(node))}[/green]")
            return
        child_branch = branch.add(f"[bold cyan]{escape(_describe(node))}[/bold cyan]")
        for child in node.children:
            build(child_branch, child)

    tree = Tree(f"[bold cyan]{escape(_describe(root))}[/bold cyan]")
    for child in root.children:
        build(tree, child)
    (console or Console()).print(tree)
