#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdview/options/parser.py
"""Configuration options for markdown parsing.

The options are forwarded verbatim to the parser collaborator; the rendering
core never interprets them. A GFM extension is active when ``gfm`` is on or
when its own flag is on.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Mapping

from mdview.constants import DEFAULT_MAX_INPUT_SIZE, DEFAULT_PARSE_TIMEOUT_MS
from mdview.exceptions import ValidationError
from mdview.options.base import CloneFrozenMixin

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def _to_snake(name: str) -> str:
    return _CAMEL_BOUNDARY.sub("_", name).lower()


def _to_camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


@dataclass(frozen=True)
class ParserOptions(CloneFrozenMixin):
    """Options passed through to the markdown parser.

    Parameters
    ----------
    gfm : bool, default True
        Enable all GitHub Flavored Markdown extensions
    enable_tables : bool, default True
        Enable pipe tables
    enable_task_lists : bool, default True
        Enable ``- [ ]`` task list items
    enable_strikethrough : bool, default True
        Enable ``~~strike~~``
    enable_autolink : bool, default True
        Turn bare URLs into links
    math : bool, default False
        Enable ``$inline$`` and ``$$block$$`` math
    wiki : bool, default False
        Enable ``[[Target|label]]`` wiki links
    max_input_size : int, default 10 MiB
        Maximum input size in UTF-8 bytes
    timeout : int, default 5000
        Parse time budget in milliseconds

    Examples
    --------
        >>> ParserOptions.from_mapping({"enableTables": False, "gfm": False}).tables_enabled
        False

    """

    gfm: bool = field(default=True, metadata={"help": "Enable all GFM extensions"})
    enable_tables: bool = field(default=True, metadata={"help": "Enable tables"})
    enable_task_lists: bool = field(default=True, metadata={"help": "Enable task lists"})
    enable_strikethrough: bool = field(default=True, metadata={"help": "Enable strikethrough"})
    enable_autolink: bool = field(default=True, metadata={"help": "Enable autolinks"})
    math: bool = field(default=False, metadata={"help": "Enable LaTeX math"})
    wiki: bool = field(default=False, metadata={"help": "Enable wiki links"})
    max_input_size: int = field(default=DEFAULT_MAX_INPUT_SIZE, metadata={"help": "Maximum input size in bytes"})
    timeout: int = field(default=DEFAULT_PARSE_TIMEOUT_MS, metadata={"help": "Parse timeout in milliseconds"})

    def __post_init__(self) -> None:
        """Validate numeric ranges.

        Raises
        ------
        ValueError
            If ``max_input_size`` or ``timeout`` is not positive.

        """
        if self.max_input_size <= 0:
            raise ValueError(f"max_input_size must be positive, got {self.max_input_size}")
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")

    @property
    def tables_enabled(self) -> bool:
        return self.gfm or self.enable_tables

    @property
    def task_lists_enabled(self) -> bool:
        return self.gfm or self.enable_task_lists

    @property
    def strikethrough_enabled(self) -> bool:
        return self.gfm or self.enable_strikethrough

    @property
    def autolink_enabled(self) -> bool:
        return self.gfm or self.enable_autolink

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> ParserOptions:
        """Build options from a mapping with snake_case or camelCase keys.

        Keys whose value is ``None`` are ignored.

        Raises
        ------
        ValidationError
            If a key is not a known option

        """
        known = set(cls.field_names())
        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            name = _to_snake(key)
            if name not in known:
                raise ValidationError(f"Unknown parser option: {key}", parameter_name=key, parameter_value=value)
            if value is not None:
                kwargs[name] = value
        return cls(**kwargs)

    def to_dict(self, camel_case: bool = False) -> dict[str, Any]:
        """Return the options as a mapping, optionally with camelCase keys."""
        data = {name: getattr(self, name) for name in self.field_names()}
        if camel_case:
            return {_to_camel(name): value for name, value in data.items()}
        return data
