"""mwkit query - incremental aggregation of MediaWiki query responses."""

from .core import (
    ApiError,
    InvalidRequestShapeError,
    MergeConflictError,
    ProtocolExhaustionError,
    QueryError,
    TooManyEmptyResponsesError,
)
from .core.options import DEFAULT_OPTIONS, QueryOptions, resolve_options
from .api import (
    query_full_page_by_page_id,
    query_full_page_by_title,
    query_full_pages,
    query_full_revision_by_revision_id,
    query_full_revisions,
    query_incremental_page_by_page_id,
    query_incremental_page_by_title,
    query_partial_page_by_page_id,
    query_partial_page_by_title,
    query_potential_revision_by_revision_id,
)
from .io import ApiSession
from .merge import default_merge_values, merge_entity
from .models import Revision, page_of_revision
from .resolution import (
    get_response_page_by_page_id,
    get_response_page_by_title,
    get_response_revision_by_revision_id,
    resolve_title,
)

__version__ = "0.1.0"

__all__ = [
    # Operations
    "query_partial_page_by_title",
    "query_incremental_page_by_title",
    "query_full_page_by_title",
    "query_partial_page_by_page_id",
    "query_incremental_page_by_page_id",
    "query_full_page_by_page_id",
    "query_potential_revision_by_revision_id",
    "query_full_revision_by_revision_id",
    "query_full_pages",
    "query_full_revisions",
    # Response helpers
    "resolve_title",
    "get_response_page_by_title",
    "get_response_page_by_page_id",
    "get_response_revision_by_revision_id",
    "Revision",
    "page_of_revision",
    # Merging
    "merge_entity",
    "default_merge_values",
    # Configuration
    "QueryOptions",
    "DEFAULT_OPTIONS",
    "resolve_options",
    # Transport
    "ApiSession",
    # Exceptions
    "QueryError",
    "MergeConflictError",
    "TooManyEmptyResponsesError",
    "ProtocolExhaustionError",
    "InvalidRequestShapeError",
    "ApiError",
]
