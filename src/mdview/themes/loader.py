#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Theme file discovery and loading.

Theme files hold a partial theme in JSON, TOML or YAML format, or in the
``[tool.mdview.theme]`` table of a ``pyproject.toml``. A file may name the
built-in theme it extends with a top-level ``base`` key:

.. code-block:: toml

    base = "dark"

    [colors]
    link = "#ff79c6"

    [text_styles.heading1]
    fontSize = 36

Everything except ``base`` is deep-merged over the base theme.
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]
from typing import Any, Dict, Optional

import yaml

from mdview.constants import THEME_FILENAMES
from mdview.exceptions import ThemeError
from mdview.themes.base import MarkdownTheme
from mdview.themes.builtin import LIGHT_THEME, get_builtin_theme

logger = logging.getLogger(__name__)


def _load_pyproject_theme_section(pyproject_path: Path) -> Dict[str, Any]:
    """Load the [tool.mdview.theme] table of a pyproject.toml, or an empty dict."""
    try:
        with open(pyproject_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ThemeError(f"Invalid TOML in {pyproject_path}: {e}", str(pyproject_path), e) from e

    section = data.get("tool", {}).get("mdview", {}).get("theme", {})
    if not isinstance(section, dict):
        raise ThemeError(
            f"[tool.mdview.theme] in {pyproject_path} must be a table, got {type(section).__name__}",
            str(pyproject_path),
        )
    return section


def _load_toml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ThemeError(f"Invalid TOML in theme file {path}: {e}", str(path), e) from e


def _load_json(path: Path) -> Any:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise ThemeError(f"Invalid JSON in theme file {path}: {e}", str(path), e) from e


def _load_yaml(path: Path) -> Any:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ThemeError(f"Invalid YAML in theme file {path}: {e}", str(path), e) from e
    # An empty YAML document loads as None
    return {} if data is None else data


def load_theme_file(path: Path | str) -> Dict[str, Any]:
    """Load a partial theme mapping from a file.

    The format is chosen from the file name: ``pyproject.toml`` yields its
    ``[tool.mdview.theme]`` table; ``.toml``, ``.json``, ``.yaml`` and ``.yml``
    files are loaded whole.

    Parameters
    ----------
    path : Path or str
        Theme file path

    Returns
    -------
    dict
        The raw theme mapping, including any ``base`` key

    Raises
    ------
    ThemeError
        If the file is missing, has an unsupported extension, cannot be parsed
        or does not hold a mapping

    """
    path = Path(path)
    if not path.is_file():
        raise ThemeError(f"Theme file does not exist: {path}", str(path))

    name = path.name.lower()
    ext = path.suffix.lower()
    try:
        if name == "pyproject.toml":
            data: Any = _load_pyproject_theme_section(path)
        elif ext == ".toml":
            data = _load_toml(path)
        elif ext in (".yaml", ".yml"):
            data = _load_yaml(path)
        elif ext == ".json":
            data = _load_json(path)
        else:
            raise ThemeError(f"Unsupported theme file format: {ext}. Use .json, .toml, or .yaml", str(path))
    except OSError as e:
        raise ThemeError(f"Error reading theme file {path}: {e}", str(path), e) from e

    if not isinstance(data, dict):
        raise ThemeError(f"Theme file must contain a mapping, got {type(data).__name__}", str(path))

    logger.debug("Loaded theme file %s (%d top-level keys)", path, len(data))
    return data


def theme_from_mapping(data: Dict[str, Any], default_base: Optional[MarkdownTheme] = None) -> MarkdownTheme:
    """Build a theme from a partial mapping with an optional ``base`` key."""
    overrides = dict(data)
    base_name = overrides.pop("base", None)
    if base_name is not None:
        if not isinstance(base_name, str):
            raise ThemeError(f"Theme 'base' must be a string, got {type(base_name).__name__}")
        base = get_builtin_theme(base_name)
    else:
        base = default_base if default_base is not None else LIGHT_THEME
    return base.merged(overrides)


def theme_from_file(path: Path | str, default_base: Optional[MarkdownTheme] = None) -> MarkdownTheme:
    """Load a theme file and merge it over its base theme.

    Raises
    ------
    ThemeError
        If the file cannot be loaded or describes an invalid theme

    """
    data = load_theme_file(path)
    try:
        return theme_from_mapping(data, default_base)
    except ThemeError as e:
        if e.theme_path is None:
            raise ThemeError(f"{e.message} (in {path})", str(path), e.original_error) from e
        raise


def discover_theme_file(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find a theme file in ``start_dir`` (default: the working directory).

    Checks ``.mdview.toml``, ``.mdview.yaml``, ``.mdview.yml`` and
    ``.mdview.json`` in that order, then a ``pyproject.toml`` holding a
    ``[tool.mdview.theme]`` table.

    Returns
    -------
    Path or None
        The first theme file found

    """
    directory = start_dir if start_dir is not None else Path.cwd()

    for filename in THEME_FILENAMES:
        candidate = directory / filename
        if candidate.is_file():
            return candidate

    pyproject_path = directory / "pyproject.toml"
    if pyproject_path.is_file():
        try:
            if _load_pyproject_theme_section(pyproject_path):
                return pyproject_path
        except ThemeError:
            logger.debug("Skipping unreadable %s during theme discovery", pyproject_path)

    return None
