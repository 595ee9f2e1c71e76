"""Revision entity with a side-channel reference to its page."""

from __future__ import annotations

from typing import Any


class Revision(dict):
    """A revision property bag.

    Behaves exactly like the ``dict`` returned by the API (equality,
    iteration, JSON serialization). When the revision was located inside a
    page, ``page`` holds that page without its ``revisions`` list; it is an
    attribute, not a key, so it never shows up among the revision's own
    properties. Missing revisions have no page.
    """

    __slots__ = ("page",)

    def __init__(self, *args: Any, page: dict[str, Any] | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        if page is not None:
            self.page = page


def page_of_revision(revision: dict[str, Any]) -> dict[str, Any] | None:
    """Return the page a revision was found in, or None."""
    return getattr(revision, "page", None)


def page_without_revisions(page: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in page.items() if key != "revisions"}
