"""Shaping of request parameters for the aggregation operations.

Each builder returns a new parameter dict (the caller's dict is never
modified) with ``action=query`` and the requested entity added to the
matching selector parameter. Multi-value parameters are returned as lists;
the transport joins them with ``|``.

The builders also guard the request shapes the aggregation engine relies
on: a single-entity request is identified by exactly one kind of selector
and is never combined with a generator.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from ..core.exceptions import InvalidRequestShapeError
from ..resolution.ids import same_id

SELECTORS = ("titles", "pageids", "revids")


def title_params(params: Mapping[str, Any] | None, title: str) -> dict[str, Any]:
    """Parameters for a request about the page with the given title."""
    shaped = _single_entity_params(params, "titles")
    shaped["titles"] = _add_value(shaped.get("titles"), title, lambda a, b: a == b)
    return shaped


def page_id_params(params: Mapping[str, Any] | None, page_id: int | str) -> dict[str, Any]:
    """Parameters for a request about the page with the given ID."""
    shaped = _single_entity_params(params, "pageids")
    shaped["pageids"] = _add_value(shaped.get("pageids"), page_id, same_id)
    return shaped


def revision_id_params(params: Mapping[str, Any] | None, revision_id: int | str) -> dict[str, Any]:
    """Parameters for a request about the revision with the given ID."""
    shaped = _single_entity_params(params, "revids")
    shaped["revids"] = _add_value(shaped.get("revids"), revision_id, same_id)
    shaped["prop"] = _add_value(shaped.get("prop"), "revisions", lambda a, b: a == b)
    return shaped


def generator_params(params: Mapping[str, Any] | None, *, revisions: bool = False) -> dict[str, Any]:
    """Parameters for a one-to-many request (generator or list of selectors).

    Args:
        params: Caller parameters, usually including ``generator``
        revisions: Whether revisions are requested (adds ``prop=revisions``)
    """
    shaped = _query_params(params)
    if revisions:
        shaped["prop"] = _add_value(shaped.get("prop"), "revisions", lambda a, b: a == b)
    return shaped


def _query_params(params: Mapping[str, Any] | None) -> dict[str, Any]:
    shaped = dict(params or {})
    action = shaped.get("action", "query")
    if action != "query":
        raise InvalidRequestShapeError(f"Only action=query is supported, got action={action}")
    shaped["action"] = "query"
    return shaped


def _single_entity_params(params: Mapping[str, Any] | None, selector: str) -> dict[str, Any]:
    shaped = _query_params(params)
    if shaped.get("generator") is not None:
        raise InvalidRequestShapeError(
            f"A request identified by {selector} cannot use a generator, "
            "use the one-to-many operations instead"
        )
    for other in SELECTORS:
        if other != selector and shaped.get(other) not in (None, "", [], (), set()):
            raise InvalidRequestShapeError(
                f"A request identified by {selector} cannot also specify {other}"
            )
    return shaped


def _add_value(existing: Any, value: Any, same: Callable[[Any, Any], bool]) -> list[Any]:
    if existing is None:
        values: list[Any] = []
    elif isinstance(existing, (set, frozenset)):
        values = sorted(existing, key=str)
    elif isinstance(existing, (list, tuple)):
        values = list(existing)
    else:
        values = [existing]
    if not any(same(item, value) for item in values):
        values.append(value)
    return values
