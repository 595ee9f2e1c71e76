"""Query operations.

High-level entry points combining parameter shaping, entity location and
continuation handling. Every operation takes a transport (``session``),
the entity to look for, optional extra request parameters, and optional
options (a ``QueryOptions`` value or a mapping of overrides).

- ``query_partial_*``: the entity as found in the first response
- ``query_incremental_*``: the entity as found in each response
- ``query_full_*``: the entity merged over all responses of the request
- ``query_potential_revision_by_revision_id``: None per response until
  the revision shows up
- ``query_full_pages`` / ``query_full_revisions``: complete entities of a
  one-to-many request, batch by batch

Parameters are validated when the operation is called, before any
response is requested.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Mapping
from typing import Any

from .core.options import QueryOptions, resolve_options
from .models import Revision
from .resolution.locator import (
    get_response_page_by_page_id,
    get_response_page_by_title,
    get_response_revision_by_revision_id,
)
from .runtime.continuation import BatchAggregator, ContinuationDriver
from .runtime.params import generator_params, page_id_params, revision_id_params, title_params
from .runtime.transport import Transport

Params = Mapping[str, Any] | None
Options = QueryOptions | Mapping[str, Any] | None

# Expected when a request for few revisions is answered in several responses
REVISION_DROPPED_WARNINGS = frozenset({"truncatedresult"})


def _title_driver(session: Transport, title: str, options: Options, operation: str) -> ContinuationDriver:
    return ContinuationDriver(
        session,
        lambda envelope: get_response_page_by_title(envelope, title),
        options=resolve_options(options),
        operation=operation,
    )


def _page_id_driver(
    session: Transport, page_id: int | str, options: Options, operation: str
) -> ContinuationDriver:
    return ContinuationDriver(
        session,
        lambda envelope: get_response_page_by_page_id(envelope, page_id),
        options=resolve_options(options),
        operation=operation,
    )


def _revision_driver(
    session: Transport, revision_id: int | str, options: Options, operation: str
) -> ContinuationDriver:
    return ContinuationDriver(
        session,
        lambda envelope: get_response_revision_by_revision_id(envelope, revision_id),
        options=resolve_options(options),
        operation=operation,
        dropped_warnings=REVISION_DROPPED_WARNINGS,
    )


async def query_partial_page_by_title(
    session: Transport, title: str, params: Params = None, options: Options = None
) -> dict[str, Any] | None:
    """Get the page with the given title from the first response.

    Only useful if the requested props are known to fit in one response;
    otherwise use ``query_full_page_by_title``.
    """
    shaped = title_params(params, title)
    return await _title_driver(session, title, options, "query_partial_page_by_title").partial(shaped)


def query_incremental_page_by_title(
    session: Transport, title: str, params: Params = None, options: Options = None
) -> AsyncIterator[dict[str, Any]]:
    """Yield the page with the given title from each response."""
    shaped = title_params(params, title)
    return _title_driver(session, title, options, "query_incremental_page_by_title").incremental(shaped)


async def query_full_page_by_title(
    session: Transport, title: str, params: Params = None, options: Options = None
) -> dict[str, Any] | None:
    """Get the page with the given title, merged over all responses.

    Normalization and redirects are followed (the latter only if the request
    asks the API to resolve them), so the returned title may differ.

    Returns:
        The full page, or None if the page was not part of the responses
        (e.g. because the title leads into a redirect loop)
    """
    shaped = title_params(params, title)
    return await _title_driver(session, title, options, "query_full_page_by_title").full(shaped)


async def query_partial_page_by_page_id(
    session: Transport, page_id: int | str, params: Params = None, options: Options = None
) -> dict[str, Any] | None:
    """Get the page with the given ID from the first response."""
    shaped = page_id_params(params, page_id)
    return await _page_id_driver(session, page_id, options, "query_partial_page_by_page_id").partial(shaped)


def query_incremental_page_by_page_id(
    session: Transport, page_id: int | str, params: Params = None, options: Options = None
) -> AsyncIterator[dict[str, Any]]:
    """Yield the page with the given ID from each response."""
    shaped = page_id_params(params, page_id)
    return _page_id_driver(
        session, page_id, options, "query_incremental_page_by_page_id"
    ).incremental(shaped)


async def query_full_page_by_page_id(
    session: Transport, page_id: int | str, params: Params = None, options: Options = None
) -> dict[str, Any] | None:
    """Get the page with the given ID, merged over all responses."""
    shaped = page_id_params(params, page_id)
    return await _page_id_driver(session, page_id, options, "query_full_page_by_page_id").full(shaped)


def query_potential_revision_by_revision_id(
    session: Transport, revision_id: int | str, params: Params = None, options: Options = None
) -> AsyncIterator[Revision | None]:
    """Yield None for each response until the revision is found, then the revision.

    A request for a few revisions by ID can need several continuations
    before a given revision appears (other props, or other revisions, may
    use up the response). Once it appears it is complete, and no further
    continuation is requested.
    """
    shaped = revision_id_params(params, revision_id)
    return _revision_driver(
        session, revision_id, options, "query_potential_revision_by_revision_id"
    ).potential(shaped)


async def query_full_revision_by_revision_id(
    session: Transport, revision_id: int | str, params: Params = None, options: Options = None
) -> Revision:
    """Get the revision with the given ID.

    The returned revision carries its page (see ``page_of_revision``),
    unless it is missing.

    Raises:
        ProtocolExhaustionError: If the responses ran out without the revision
    """
    shaped = revision_id_params(params, revision_id)
    return await _revision_driver(
        session, revision_id, options, "query_full_revision_by_revision_id"
    ).first(shaped)


def query_full_pages(
    session: Transport, params: Params = None, options: Options = None
) -> AsyncIterator[dict[str, Any]]:
    """Yield full pages of a one-to-many request (usually a generator).

    Pages are yielded once their batch is complete, ordered by
    ``compare_pages`` if configured.
    """
    shaped = generator_params(params)
    aggregator = BatchAggregator(
        session,
        options=resolve_options(options),
        operation="query_full_pages",
    )
    return aggregator.pages(shaped)


def query_full_revisions(
    session: Transport, params: Params = None, options: Options = None
) -> AsyncIterator[Revision]:
    """Yield revisions of a one-to-many request, with their pages attached.

    Revisions are yielded once their batch is complete, ordered by
    ``compare_revisions`` if configured.
    """
    shaped = generator_params(params, revisions=True)
    aggregator = BatchAggregator(
        session,
        options=resolve_options(options),
        operation="query_full_revisions",
        dropped_warnings=REVISION_DROPPED_WARNINGS,
    )
    return aggregator.revisions(shaped)
