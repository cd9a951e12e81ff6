#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdview/constants.py
"""Constants and defaults shared across mdview modules."""

from __future__ import annotations

from typing import Literal

# Dependency specs as (install_name, import_name, version_spec)
DEPS_MARKDOWN = [("mistune", "mistune", ">=3.0.0")]
DEPS_HIGHLIGHT = [("Pygments", "pygments", ">=2.15.0")]
DEPS_YAML = [("PyYAML", "yaml", ">=6.0")]
DEPS_RICH = [("rich", "rich", "")]

HighlighterBackend = Literal["hljs", "prism"]
HIGHLIGHTER_BACKENDS: tuple[str, ...] = ("hljs", "prism")

# Parser defaults
DEFAULT_MAX_INPUT_SIZE = 10 * 1024 * 1024
DEFAULT_PARSE_TIMEOUT_MS = 5000
DEFAULT_DEBOUNCE_DELAY = 0.3

# Code rendering defaults
DEFAULT_CODE_FONT_SIZE = 14
DEFAULT_CODE_FONT_FAMILY = "monospace"
DEFAULT_CODE_COLOR = "#abb2bf"
DEFAULT_HIGHLIGHTER: HighlighterBackend = "hljs"
DEFAULT_CODE_LANGUAGE = "text"

# Stylesheet selectors per backend
HLJS_ROOT_SELECTOR = "hljs"
HLJS_CLASS_PREFIX = "hljs-"
PRISM_ROOT_SELECTOR = 'pre[class*="language-"]'
PRISM_CODE_SELECTOR = 'code[class*="language-"]'

# Pixels per em when converting stylesheet lengths
EM_TO_PX = 16

# Properties the text primitive cannot honour on the code container
TOP_LEVEL_PROPERTIES_TO_REMOVE: tuple[str, ...] = (
    "textShadow",
    "textAlign",
    "whiteSpace",
    "wordSpacing",
    "wordBreak",
    "wordWrap",
    "lineHeight",
    "MozTabSize",
    "OTabSize",
    "tabSize",
    "WebkitHyphens",
    "MozHyphens",
    "msHyphens",
    "hyphens",
    "fontFamily",
)

# Orchestrator
ROOT_KEY_PREFIX = "root"
ERROR_TEXT_COLOR = "#ff0000"
PARSE_ERROR_PREFIX = "Error parsing markdown: "

# Theme files
THEME_FILENAMES = [".mdview.toml", ".mdview.yaml", ".mdview.yml", ".mdview.json"]
