"""Resolution of input titles to the titles present in a response."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..models import ResponseEnvelope


def resolve_title(response: Mapping[str, Any] | ResponseEnvelope, title: str) -> str | None:
    """Resolve a title through the normalizations and redirects of a response.

    Normalization is applied at most once. Redirects are then followed
    until no redirect starts at the current title; the redirect list is
    rescanned from the start after every hop, since it is not necessarily
    in chain order (e.g. for ``titles=Redirect 2|Redirect``).

    Args:
        response: Raw response or its envelope
        title: Title as given in the request

    Returns:
        The title to look for among the pages, or None on a redirect loop
        (including loops the input title only leads into)
    """
    envelope = response if isinstance(response, ResponseEnvelope) else ResponseEnvelope.parse(response)
    if envelope.query is None:
        return title

    for normalized in envelope.query.normalized:
        if normalized.from_ == title:
            title = normalized.to
            break

    visited: set[str] = set()
    while title not in visited:
        for redirect in envelope.query.redirects:
            if redirect.from_ == title:
                visited.add(redirect.from_)
                title = redirect.to
                break
        else:
            return title
    return None
