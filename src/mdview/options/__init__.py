#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Option dataclasses for mdview."""

from mdview.options.base import UNSET, CloneFrozenMixin, is_unset
from mdview.options.parser import ParserOptions

__all__ = ["UNSET", "CloneFrozenMixin", "ParserOptions", "is_unset"]
