"""Deep merge of partial entities.

A logical request may return the same page or revision across many
responses, each carrying only part of its data (one batch of links,
another of categories, ...). ``merge_entity`` folds each newly observed
partial entity into an accumulator:

- attributes missing from the accumulator are copied in
- nested objects (dicts) are merged recursively
- arrays (lists) are concatenated, accumulator first
- equal values are left alone
- anything else is handed to a conflict resolver (``merge_values``)

The accumulator is mutated in place; the incremental entity is only read.
"""

from __future__ import annotations

import copy
from collections.abc import Callable
from decimal import Decimal
from typing import Any

from ..core.exceptions import MergeConflictError

MergeValues = Callable[[Any, Any, str, dict[str, Any], Any], Any]


def merge_entity(
    base: dict[str, Any],
    incremental: dict[str, Any],
    merge_values: MergeValues,
    path_prefix: str = "",
) -> dict[str, Any]:
    """Merge ``incremental`` into ``base``.

    Args:
        base: Accumulator entity, modified in place
        incremental: Newly observed partial entity
        merge_values: Resolver called as ``merge_values(base_value,
            incremental_value, path, base, key)``; its return value is stored
            under ``key``. It may also modify ``base`` itself.
        path_prefix: Dotted path of ``base`` within the top-level entity

    Returns:
        ``base``, for convenience
    """
    for key, incremental_value in incremental.items():
        path = f"{path_prefix}.{key}" if path_prefix else str(key)
        if key not in base:
            base[key] = copy.deepcopy(incremental_value)
            continue

        base_value = base[key]
        if isinstance(base_value, dict) and isinstance(incremental_value, dict):
            merge_entity(base_value, incremental_value, merge_values, path)
        elif isinstance(base_value, list) and isinstance(incremental_value, list):
            base[key] = base_value + copy.deepcopy(incremental_value)
        elif _same_value(base_value, incremental_value):
            continue
        else:
            base[key] = merge_values(base_value, incremental_value, path, base, key)
    return base


def default_merge_values(
    base_value: Any,
    incremental_value: Any,
    path: str,
    base: dict[str, Any],
    key: Any,
) -> Any:
    """Default conflict resolver.

    Two strings, or two numbers, may legitimately differ between responses
    (e.g. a page touched while the request was being continued); such values
    may be unstable between responses, so arbitrarily pick the earlier one.
    Every other combination is a genuine conflict.

    Raises:
        MergeConflictError: If the values are not of the same primitive kind
    """
    base_kind = _kind(base_value)
    if base_kind in ("string", "number") and base_kind == _kind(incremental_value):
        return base_value
    raise MergeConflictError(path, describe_value(base_value), describe_value(incremental_value))


def describe_value(value: Any) -> str:
    """Describe the shape of a value for error messages."""
    if value is None:
        return "null"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return f"{_kind(value)} ({value!r})"


def _kind(value: Any) -> str:
    # bool is an int subclass, check it first
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float, Decimal)):
        return "number"
    if isinstance(value, str):
        return "string"
    if value is None:
        return "null"
    return type(value).__name__


def _same_value(a: Any, b: Any) -> bool:
    return _kind(a) == _kind(b) and a == b
