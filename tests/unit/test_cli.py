#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Unit tests for the mdview command line interface."""

import argparse
import io
import json
import logging
import sys
from unittest.mock import patch

import pytest

from mdview.cli import (
    EXIT_DEPENDENCY_ERROR,
    EXIT_ERROR,
    EXIT_FILE_ERROR,
    EXIT_PARSING_ERROR,
    EXIT_RENDERING_ERROR,
    EXIT_SUCCESS,
    EXIT_VALIDATION_ERROR,
    build_parser_options,
    build_theme,
    create_parser,
    get_exit_code_for_exception,
    main,
)
from mdview.cli.output import format_json, format_tree, should_use_rich_output
from mdview.exceptions import (
    DependencyError,
    MdViewError,
    ParsingError,
    StyleTransformError,
    ThemeError,
    ValidationError,
)
from mdview.fragments import pressable, text, view
from mdview.logging_utils import configure_logging, resolve_log_level
from mdview.themes import DARK_THEME, LIGHT_THEME


@pytest.fixture(autouse=True)
def _restore_root_logging():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def parse_args(*argv):
    return create_parser().parse_args(list(argv))


@pytest.mark.unit
@pytest.mark.cli
class TestExitCodes:
    """Test exception to exit code mapping."""

    @pytest.mark.parametrize(
        "exception,code",
        [
            (DependencyError("x", [("pkg", "")]), EXIT_DEPENDENCY_ERROR),
            (ImportError("x"), EXIT_DEPENDENCY_ERROR),
            (ValidationError("x"), EXIT_VALIDATION_ERROR),
            (ThemeError("x"), EXIT_VALIDATION_ERROR),
            (ValueError("x"), EXIT_VALIDATION_ERROR),
            (FileNotFoundError("x"), EXIT_FILE_ERROR),
            (ParsingError("x"), EXIT_PARSING_ERROR),
            (StyleTransformError("x"), EXIT_RENDERING_ERROR),
            (MdViewError("x"), EXIT_ERROR),
            (RuntimeError("x"), EXIT_ERROR),
        ],
    )
    def test_mapping(self, exception, code):
        assert get_exit_code_for_exception(exception) == code


@pytest.mark.unit
@pytest.mark.cli
class TestArgumentParsing:
    """Test argument parsing and option building."""

    def test_defaults(self):
        args = parse_args()
        assert args.input == "-"
        assert args.format == "tree"
        assert args.highlighter == "hljs"
        assert args.log_level == "WARNING"

    def test_invalid_format_rejected(self):
        with pytest.raises(SystemExit):
            parse_args("--format", "html")

    def test_no_gfm_disables_every_extension(self):
        options = build_parser_options(parse_args("--no-gfm"))
        assert not options.tables_enabled
        assert not options.task_lists_enabled
        assert not options.strikethrough_enabled
        assert not options.autolink_enabled

    def test_math_wiki_and_size(self):
        options = build_parser_options(parse_args("--math", "--wiki", "--max-input-size", "100"))
        assert options.math and options.wiki
        assert options.max_input_size == 100

    def test_builtin_theme(self):
        assert build_theme(parse_args("--theme", "dark", "--no-config")) is DARK_THEME
        assert build_theme(parse_args("--no-config")) is LIGHT_THEME

    def test_theme_file_over_builtin(self, tmp_path):
        path = tmp_path / "theme.json"
        path.write_text(json.dumps({"colors": {"link": "#ff79c6"}}), encoding="utf-8")
        theme = build_theme(parse_args("--theme", "dark", "--theme-file", str(path)))
        assert theme.colors.link == "#ff79c6"
        assert theme.colors.background == DARK_THEME.colors.background

    def test_discovered_theme_file(self, tmp_path, monkeypatch):
        (tmp_path / ".mdview.toml").write_text('[colors]\nlink = "#123456"\n', encoding="utf-8")
        monkeypatch.chdir(tmp_path)
        assert build_theme(parse_args()).colors.link == "#123456"
        assert build_theme(parse_args("--no-config")) is LIGHT_THEME

    def test_highlight_style(self):
        pytest.importorskip("pygments")
        theme = build_theme(parse_args("--no-config", "--highlight", "monokai", "--highlighter", "prism"))
        options = theme.syntax_highlighting
        assert options.enabled
        assert options.highlighter == "prism"
        assert 'pre[class*="language-"]' in options.stylesheet


@pytest.mark.unit
@pytest.mark.cli
class TestMain:
    """Test running the command line end to end."""

    @pytest.fixture(autouse=True)
    def _require_mistune(self):
        pytest.importorskip("mistune")

    def test_tree_output(self, tmp_path, capsys):
        source = tmp_path / "doc.md"
        source.write_text("# Hello\n\nWorld", encoding="utf-8")
        assert main([str(source), "--no-config"]) == EXIT_SUCCESS
        out = capsys.readouterr().out
        assert "text [root-0]" in out
        assert '"Hello"' in out

    def test_json_output_to_file(self, tmp_path):
        source = tmp_path / "doc.md"
        source.write_text("Hello", encoding="utf-8")
        target = tmp_path / "out.json"
        assert main([str(source), "--no-config", "--format", "json", "-o", str(target)]) == EXIT_SUCCESS
        data = json.loads(target.read_text(encoding="utf-8"))
        assert data["kind"] == "view"
        assert data["children"][0]["key"] == "root-0"

    def test_ast_output_from_stdin(self, capsys):
        with patch.object(sys, "stdin", io.StringIO("- [x] done")):
            assert main(["-", "--no-config", "--format", "ast"]) == EXIT_SUCCESS
        data = json.loads(capsys.readouterr().out)
        assert data[0]["type"] == "document"
        item = data[0]["children"][0]["children"][0]
        assert item["type"] == "task_list_item"
        assert item["checked"] is True

    def test_ast_output_parse_failure(self, tmp_path, capsys):
        source = tmp_path / "doc.md"
        source.write_text("x" * 50, encoding="utf-8")
        code = main([str(source), "--no-config", "--format", "ast", "--max-input-size", "10"])
        assert code == EXIT_PARSING_ERROR
        assert "Input exceeds maximum size limit" in capsys.readouterr().err

    def test_show_errors(self, tmp_path, capsys):
        source = tmp_path / "doc.md"
        source.write_text("x" * 50, encoding="utf-8")
        assert main([str(source), "--no-config", "--show-errors", "--max-input-size", "10"]) == EXIT_SUCCESS
        assert "Error parsing markdown" in capsys.readouterr().out

    def test_missing_file(self, tmp_path, capsys):
        assert main([str(tmp_path / "missing.md"), "--no-config"]) == EXIT_FILE_ERROR
        assert "Error:" in capsys.readouterr().err

    def test_bad_theme_file(self, tmp_path):
        source = tmp_path / "doc.md"
        source.write_text("x", encoding="utf-8")
        theme = tmp_path / "theme.ini"
        theme.write_text("", encoding="utf-8")
        assert main([str(source), "--theme-file", str(theme)]) == EXIT_VALIDATION_ERROR

    def test_invalid_max_input_size(self, tmp_path):
        source = tmp_path / "doc.md"
        source.write_text("x", encoding="utf-8")
        assert main([str(source), "--no-config", "--max-input-size", "0"]) == EXIT_VALIDATION_ERROR

    def test_help_exits_cleanly(self):
        with pytest.raises(SystemExit) as exc_info:
            main(["--help"])
        assert exc_info.value.code == 0

    def test_main_module_importable(self):
        import mdview.__main__  # noqa: F401


@pytest.mark.unit
@pytest.mark.cli
class TestOutputHelpers:
    """Test fragment tree formatting."""

    def test_format_tree(self):
        root = view(text("Hi", key="t", style={"color": "red"}), key="root")
        lines = format_tree(root).splitlines()
        assert lines[0] == "view [root]"
        assert lines[1] == '  text [t] style={"color": "red"}'
        assert lines[2] == '    "Hi"'

    def test_format_tree_marks_pressables(self):
        assert "(pressable)" in format_tree(pressable(key="p", on_press=lambda: None))

    def test_format_json(self):
        data = json.loads(format_json(pressable("x", key="p", on_press=lambda: None)))
        assert data["props"] == {"on_press": True}

    def test_rich_not_requested(self):
        assert should_use_rich_output(argparse.Namespace(rich=False)) is False

    def test_rich_requires_terminal(self):
        pytest.importorskip("rich")
        args = argparse.Namespace(rich=True, force_rich=False)
        assert should_use_rich_output(args, stream=io.StringIO()) is False
        args.force_rich = True
        assert should_use_rich_output(args, stream=io.StringIO()) is True

    def test_rich_missing(self):
        args = argparse.Namespace(rich=True, force_rich=True)
        with patch("mdview.cli.output.check_rich_available", return_value=False):
            assert should_use_rich_output(args) is False
            with pytest.raises(DependencyError):
                should_use_rich_output(args, raise_on_missing=True)

    def test_print_rich_tree(self):
        pytest.importorskip("rich")
        from rich.console import Console

        from mdview.cli.output import print_rich_tree

        console = Console(file=io.StringIO(), width=120)
        print_rich_tree(view(text("Hello", key="t"), key="root"), console=console)
        assert "Hello" in console.file.getvalue()


@pytest.mark.unit
class TestLoggingSetup:
    """Test logging configuration."""

    def test_resolve_log_level(self):
        assert resolve_log_level("debug") == logging.DEBUG
        assert resolve_log_level(logging.ERROR) == logging.ERROR
        assert resolve_log_level("bogus") == logging.INFO

    def test_configure_logging(self, tmp_path):
        log_file = tmp_path / "mdview.log"
        root = configure_logging("INFO", log_file=str(log_file), trace_mode=True)
        assert root.level == logging.INFO
        assert len(root.handlers) == 2
        logging.getLogger("mdview.test").info("hello log")
        for handler in root.handlers:
            handler.flush()
        assert "hello log" in log_file.read_text(encoding="utf-8")
        for handler in root.handlers:
            handler.close()
