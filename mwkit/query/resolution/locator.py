"""Locating pages and revisions inside a response.

Responses store pages either as a map from page ID to page
(formatversion=1) or as a list (formatversion=2). Both shapes are unified
into a list in document order as soon as they are read, so nothing past
``iter_response_pages`` needs to care about the format version.

Pages are returned as the very objects found in the response. Revisions
are returned as ``Revision`` copies carrying their page (without its
``revisions``) as a side channel.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any

from ..models import ResponseEnvelope, Revision, page_without_revisions
from .ids import canonical_id
from .titles import resolve_title


def iter_response_pages(response: Mapping[str, Any] | ResponseEnvelope) -> list[dict[str, Any]]:
    """Return the pages of a response in document order."""
    envelope = _envelope(response)
    if envelope.query is None or not envelope.query.pages:
        return []
    pages = envelope.query.pages
    if isinstance(pages, dict):
        return list(pages.values())
    return list(pages)


def get_response_page_by_title(
    response: Mapping[str, Any] | ResponseEnvelope, title: str
) -> dict[str, Any] | None:
    """Get the page with the given title out of a response.

    Accounts for normalized titles and redirects, so the title of the
    returned page may differ from ``title``. Redirects are only resolved by
    the API if the request asked for it; otherwise the returned page
    describes the redirect itself.

    Returns:
        The page, or None if it is not part of the response (this includes
        titles that lead into a redirect loop)
    """
    envelope = _envelope(response)
    resolved = resolve_title(envelope, title)
    if resolved is None:
        return None
    for page in iter_response_pages(envelope):
        if page.get("title") == resolved:
            return page
    return None


def get_response_page_by_page_id(
    response: Mapping[str, Any] | ResponseEnvelope, page_id: int | str
) -> dict[str, Any] | None:
    """Get the page with the given page ID out of a response."""
    envelope = _envelope(response)
    wanted = canonical_id(page_id)
    if envelope.query is None or not envelope.query.pages:
        return None

    pages = envelope.query.pages
    if isinstance(pages, dict) and wanted in pages:
        return pages[wanted]
    for page in iter_response_pages(envelope):
        if "pageid" in page and _id_matches(page["pageid"], wanted):
            return page
    return None


def get_response_revision_by_revision_id(
    response: Mapping[str, Any] | ResponseEnvelope, revision_id: int | str
) -> Revision | None:
    """Get the revision with the given revision ID out of a response.

    Missing revisions are taken from ``query.badrevids`` and always carry a
    ``missing`` member. Found revisions carry their page.
    """
    envelope = _envelope(response)
    wanted = canonical_id(revision_id)
    if envelope.query is None:
        return None

    badrevids = envelope.query.badrevids
    if isinstance(badrevids, dict):
        if wanted in badrevids:
            return _missing_revision(envelope, badrevids[wanted])
        for bad_revision in badrevids.values():
            if "revid" in bad_revision and _id_matches(bad_revision["revid"], wanted):
                return _missing_revision(envelope, bad_revision)

    for page in iter_response_pages(envelope):
        for revision in page.get("revisions") or []:
            if "revid" in revision and _id_matches(revision["revid"], wanted):
                return Revision(revision, page=page_without_revisions(page))
    return None


def iter_response_revisions(response: Mapping[str, Any] | ResponseEnvelope) -> Iterator[Revision]:
    """Yield every revision of a response.

    Missing revisions come first (in ``badrevids`` order), followed by the
    revisions of each page in document order.
    """
    envelope = _envelope(response)
    if envelope.query is None:
        return
    if isinstance(envelope.query.badrevids, dict):
        for bad_revision in envelope.query.badrevids.values():
            yield _missing_revision(envelope, bad_revision)
    for page in iter_response_pages(envelope):
        revisions = page.get("revisions")
        if not revisions:
            continue
        owner = page_without_revisions(page)
        for revision in revisions:
            yield Revision(revision, page=owner)


def _envelope(response: Mapping[str, Any] | ResponseEnvelope) -> ResponseEnvelope:
    if isinstance(response, ResponseEnvelope):
        return response
    return ResponseEnvelope.parse(response)


def _id_matches(candidate: Any, wanted: str) -> bool:
    try:
        return canonical_id(candidate) == wanted
    except ValueError:
        return False


def _missing_revision(envelope: ResponseEnvelope, bad_revision: dict[str, Any]) -> Revision:
    revision = Revision(bad_revision)
    if "missing" not in revision:
        # formatversion=1 marks booleans with an empty string
        revision["missing"] = "" if envelope.legacy_format else True
    return revision
