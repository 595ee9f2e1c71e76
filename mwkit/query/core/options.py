"""Immutable query configuration.

Every aggregation operation receives one ``QueryOptions`` value. Defaults
live in the ``DEFAULT_OPTIONS`` constant and per-call overrides are merged
onto it at the call boundary, so concurrently running logical requests
never observe each other's configuration.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field, fields, replace
from types import MappingProxyType
from typing import Any

from ..merge.engine import MergeValues, default_merge_values

PageComparator = Callable[[dict[str, Any], dict[str, Any]], int]
RevisionComparator = Callable[[dict[str, Any], dict[str, Any]], int]


@dataclass(frozen=True)
class QueryOptions:
    """Configuration consumed by the aggregation engine.

    Attributes:
        merge_values: Conflict resolver called for attribute values that
            cannot be merged structurally
        compare_pages: cmp-style comparison applied to each batch of pages
            (None = keep first-occurrence order)
        compare_revisions: cmp-style comparison applied to each batch of
            revisions (None = keep response order)
        max_empty_responses: Maximum number of consecutive responses without
            the requested data (None = unbounded)
        request_options: Options forwarded verbatim to the transport
    """

    merge_values: MergeValues = default_merge_values
    compare_pages: PageComparator | None = None
    compare_revisions: RevisionComparator | None = None
    max_empty_responses: int | None = None
    request_options: Mapping[str, Any] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def __post_init__(self) -> None:
        if self.max_empty_responses is not None and self.max_empty_responses < 0:
            raise ValueError("max_empty_responses must be non-negative or None")
        if not isinstance(self.request_options, MappingProxyType):
            object.__setattr__(
                self, "request_options", MappingProxyType(dict(self.request_options))
            )

    def with_overrides(self, overrides: Mapping[str, Any]) -> QueryOptions:
        """Return a copy with the given fields replaced."""
        known = {f.name for f in fields(self)}
        unknown = set(overrides) - known
        if unknown:
            raise TypeError(f"Unknown query options: {', '.join(sorted(unknown))}")
        return replace(self, **overrides)


DEFAULT_OPTIONS = QueryOptions()


def resolve_options(
    options: QueryOptions | Mapping[str, Any] | None = None,
) -> QueryOptions:
    """Turn per-call options into a complete ``QueryOptions`` value.

    A mapping is one options object for the whole call: keys naming
    ``QueryOptions`` fields override the defaults, and every other key
    (e.g. ``method``) is a request option for the transport, merged over
    any explicit ``request_options``.

    Args:
        options: None for the defaults, a complete ``QueryOptions``, or a
            mapping of overrides applied to ``DEFAULT_OPTIONS``

    Returns:
        QueryOptions for one logical request
    """
    if options is None:
        return DEFAULT_OPTIONS
    if isinstance(options, QueryOptions):
        return options
    known = {f.name for f in fields(QueryOptions)}
    overrides = {key: value for key, value in options.items() if key in known}
    request_options = {key: value for key, value in options.items() if key not in known}
    if request_options:
        overrides["request_options"] = {
            **overrides.get("request_options", {}),
            **request_options,
        }
    return DEFAULT_OPTIONS.with_overrides(overrides)
