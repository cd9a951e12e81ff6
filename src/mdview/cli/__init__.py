#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Command line interface for mdview.

Renders a markdown file (or stdin) to a dump of the fragment tree:

.. code-block:: bash

    mdview README.md --format tree
    mdview notes.md --theme dark --highlight monokai --format json
    cat draft.md | mdview - --format ast

A theme file named ``.mdview.toml``, ``.mdview.yaml``, ``.mdview.yml`` or
``.mdview.json`` in the working directory is applied automatically unless
``--theme-file`` or ``--no-config`` is given.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from mdview.ast.serialization import nodes_to_json
from mdview.cli.output import format_json, format_tree, print_rich_tree, should_use_rich_output
from mdview.constants import HIGHLIGHTER_BACKENDS
from mdview.exceptions import DependencyError, MdViewError, ParsingError, RenderingError, ValidationError
from mdview.logging_utils import LOG_LEVELS, configure_logging
from mdview.options.parser import ParserOptions
from mdview.themes.base import MarkdownTheme, SyntaxHighlightingOptions
from mdview.themes.builtin import BUILTIN_THEMES, LIGHT_THEME, get_builtin_theme
from mdview.themes.loader import discover_theme_file, theme_from_file
from mdview.view import MarkdownView

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_DEPENDENCY_ERROR = 2
EXIT_VALIDATION_ERROR = 3
EXIT_FILE_ERROR = 4
EXIT_PARSING_ERROR = 5
EXIT_RENDERING_ERROR = 6

OUTPUT_FORMATS = ("tree", "json", "ast")


def get_exit_code_for_exception(exception: Exception) -> int:
    """Map an exception to a CLI exit code."""
    if isinstance(exception, (DependencyError, ImportError)):
        return EXIT_DEPENDENCY_ERROR
    if isinstance(exception, (ValidationError, ValueError)):
        return EXIT_VALIDATION_ERROR
    if isinstance(exception, OSError):
        return EXIT_FILE_ERROR
    if isinstance(exception, ParsingError):
        return EXIT_PARSING_ERROR
    if isinstance(exception, RenderingError):
        return EXIT_RENDERING_ERROR
    return EXIT_ERROR


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    from mdview import __version__

    parser = argparse.ArgumentParser(
        prog="mdview",
        description="Render markdown into a tree of UI fragments.",
    )
    parser.add_argument("input", nargs="?", default="-", help="Markdown file to render, or '-' for stdin (default)")
    parser.add_argument("-o", "--output", help="Write output to this file instead of stdout")
    parser.add_argument(
        "-f", "--format", choices=OUTPUT_FORMATS, default="tree", help="Output format (default: tree)"
    )
    parser.add_argument("--version", action="version", version=f"mdview {__version__}")

    theme_group = parser.add_argument_group("theme")
    theme_group.add_argument("--theme", choices=sorted(BUILTIN_THEMES), help="Built-in base theme (default: light)")
    theme_group.add_argument("--theme-file", help="Theme file (.toml, .yaml, .yml, .json or pyproject.toml)")
    theme_group.add_argument("--no-config", action="store_true", help="Do not discover a theme file automatically")
    theme_group.add_argument("--highlight", metavar="STYLE", help="Highlight code blocks with this pygments style")
    theme_group.add_argument(
        "--highlighter", choices=HIGHLIGHTER_BACKENDS, default="hljs", help="Stylesheet convention (default: hljs)"
    )

    parser_group = parser.add_argument_group("parsing")
    parser_group.add_argument("--no-gfm", action="store_true", help="Disable GitHub Flavored Markdown extensions")
    parser_group.add_argument("--math", action="store_true", help="Enable $math$ and $$math$$")
    parser_group.add_argument("--wiki", action="store_true", help="Enable [[wiki links]]")
    parser_group.add_argument("--max-input-size", type=int, help="Maximum input size in bytes")
    parser_group.add_argument("--show-errors", action="store_true", help="Render parse failures as an error message")

    output_group = parser.add_argument_group("output")
    output_group.add_argument("--rich", action="store_true", help="Pretty-print the tree with Rich")
    output_group.add_argument("--force-rich", action="store_true", help="Use Rich even when not writing to a terminal")
    output_group.add_argument(
        "--log-level", choices=LOG_LEVELS, default="WARNING", help="Logging level (default: WARNING)"
    )
    output_group.add_argument("--log-file", help="Also write log records to this file")
    output_group.add_argument("--trace", action="store_true", help="Debug logging with timestamps and logger names")
    return parser


def build_parser_options(args: argparse.Namespace) -> ParserOptions:
    """Parser options from command line arguments."""
    options = ParserOptions(math=args.math, wiki=args.wiki)
    if args.no_gfm:
        options = options.create_updated(
            gfm=False,
            enable_tables=False,
            enable_task_lists=False,
            enable_strikethrough=False,
            enable_autolink=False,
        )
    if args.max_input_size is not None:
        options = options.create_updated(max_input_size=args.max_input_size)
    return options


def build_theme(args: argparse.Namespace) -> MarkdownTheme:
    """Resolve the theme from ``--theme``, a theme file and ``--highlight``."""
    theme = get_builtin_theme(args.theme) if args.theme else LIGHT_THEME

    theme_path: Optional[Path] = Path(args.theme_file) if args.theme_file else None
    if theme_path is None and not args.no_config:
        theme_path = discover_theme_file()
        if theme_path is not None:
            logger.info(f"Using theme file {theme_path}")
    if theme_path is not None:
        theme = theme_from_file(theme_path, default_base=theme)

    if args.highlight:
        from mdview.highlight.styles import stylesheet_from_pygments

        stylesheet = stylesheet_from_pygments(args.highlight, args.highlighter)
        current = theme.syntax_highlighting or SyntaxHighlightingOptions()
        theme = theme.create_updated(
            syntax_highlighting=current.create_updated(
                enabled=True, stylesheet=stylesheet, highlighter=args.highlighter
            )
        )
    return theme


def _read_input(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def _write_output(text: str, destination: Optional[str]) -> None:
    if destination:
        Path(destination).write_text(text + "\n", encoding="utf-8")
    else:
        print(text)


def _setup_logging_level(args: argparse.Namespace) -> None:
    log_level = logging.DEBUG if args.trace else args.log_level
    configure_logging(log_level, log_file=args.log_file, trace_mode=args.trace)


def run(args: argparse.Namespace) -> int:
    """Render according to parsed arguments and return the exit code."""
    content = _read_input(args.input)
    view = MarkdownView(parser_options=build_parser_options(args), theme=build_theme(args), show_errors=args.show_errors)

    if args.format == "ast":
        result = view.parse(content)
        if not result.success:
            message = result.error.describe() if result.error is not None else "Unknown error"
            print(f"Error parsing markdown: {message}", file=sys.stderr)
            return EXIT_PARSING_ERROR
        _write_output(nodes_to_json(result.nodes, indent=2), args.output)
        return EXIT_SUCCESS

    root = view.render(content)
    if args.format == "json":
        _write_output(format_json(root), args.output)
    elif not args.output and should_use_rich_output(args, raise_on_missing=True):
        print_rich_tree(root)
    else:
        _write_output(format_tree(root), args.output)
    return EXIT_SUCCESS


def main(args: list[str] | None = None) -> int:
    """Execute the mdview command line."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)
    _setup_logging_level(parsed_args)

    try:
        return run(parsed_args)
    except (MdViewError, OSError, ValueError) as e:
        logger.debug("mdview failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return get_exit_code_for_exception(e)


__all__ = ["create_parser", "get_exit_code_for_exception", "main", "run"]
