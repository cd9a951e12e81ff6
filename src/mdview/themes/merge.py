#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdview/themes/merge.py
"""Deep merging of partial theme overrides."""

from __future__ import annotations

from typing import Any, Collection, Mapping

from mdview.options.base import is_unset


def _is_plain_mapping(value: Any) -> bool:
    return isinstance(value, Mapping)


def deep_merge(
    base: Mapping[str, Any],
    override: Mapping[str, Any] | None,
    leaf_keys: Collection[str] = (),
) -> dict[str, Any]:
    """Merge ``override`` over ``base`` recursively and return a new dict.

    For each key in the override: when both values are mappings they are merged
    recursively; otherwise the override value replaces the base value. Lists and
    other sequences are always replaced wholesale. An override value of ``None``
    or ``UNSET`` leaves the base value untouched. Neither input is modified.

    Parameters
    ----------
    base : Mapping
        Base configuration
    override : Mapping or None
        Partial configuration with higher priority
    leaf_keys : collection of str, optional
        Keys whose values are always replaced, never merged, at any depth

    Returns
    -------
    dict
        Merged configuration

    Examples
    --------
    >>> deep_merge({"colors": {"text": "#000", "background": "#fff"}}, {"colors": {"text": "#111"}})
    {'colors': {'text': '#111', 'background': '#fff'}}

    """
    result = dict(base)
    if not override:
        return result

    for key, value in override.items():
        if is_unset(value):
            continue
        current = result.get(key)
        if key not in leaf_keys and _is_plain_mapping(current) and _is_plain_mapping(value):
            result[key] = deep_merge(current, value, leaf_keys)
        else:
            result[key] = value

    return result
