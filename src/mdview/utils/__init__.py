#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Shared helpers for dependency checks and timing."""

from mdview.utils.decorators import debug_timer, requires_dependencies
from mdview.utils.packages import check_version_requirement, get_package_version, is_module_available

__all__ = [
    "check_version_requirement",
    "debug_timer",
    "get_package_version",
    "is_module_available",
    "requires_dependencies",
]
