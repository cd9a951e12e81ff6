"""Immutable option plumbing shared by parser options and theme parts.

Option and theme objects are frozen dataclasses; callers derive variants with
``create_updated`` instead of mutating. ``UNSET`` marks a value the caller did
not supply, so it can be told apart from an explicit ``None``.
"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

from __future__ import annotations

import sys
from dataclasses import dataclass, fields, replace
from typing import Any

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

UNSET = object()


def is_unset(value: Any) -> bool:
    """Return True for ``None`` and the ``UNSET`` sentinel."""
    return value is None or value is UNSET


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Frozen dataclass that derives modified copies instead of mutating.

    Themes and parser options are shared between renders, so no instance is
    ever changed after construction.
    """

    def create_updated(self, **kwargs: Any) -> Self:
        """Return a copy with the given fields replaced.

        ``__post_init__`` runs again on the copy, so the new values are
        validated the same way as at construction.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        Raises
        ------
        TypeError
            If a keyword does not name a field

        """
        return replace(self, **kwargs)

    @classmethod
    def field_names(cls) -> tuple[str, ...]:
        """Names of the dataclass fields, in declaration order."""
        return tuple(f.name for f in fields(cls))
