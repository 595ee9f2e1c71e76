"""Core components.

``QueryOptions`` lives in ``core.options`` and is re-exported from the
package root; it depends on the merge engine, which in turn raises the
exceptions defined here.
"""

from .exceptions import (
    ApiError,
    InvalidRequestShapeError,
    MergeConflictError,
    ProtocolExhaustionError,
    QueryError,
    TooManyEmptyResponsesError,
)

__all__ = [
    "QueryError",
    "MergeConflictError",
    "TooManyEmptyResponsesError",
    "ProtocolExhaustionError",
    "InvalidRequestShapeError",
    "ApiError",
]
