"""Title resolution and entity location within responses."""

from .ids import canonical_id, same_id
from .locator import (
    get_response_page_by_page_id,
    get_response_page_by_title,
    get_response_revision_by_revision_id,
    iter_response_pages,
    iter_response_revisions,
)
from .titles import resolve_title

__all__ = [
    "canonical_id",
    "same_id",
    "resolve_title",
    "iter_response_pages",
    "iter_response_revisions",
    "get_response_page_by_title",
    "get_response_page_by_page_id",
    "get_response_revision_by_revision_id",
]
