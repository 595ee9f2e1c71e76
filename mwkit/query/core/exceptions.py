"""Custom exception hierarchy."""

from __future__ import annotations


class QueryError(Exception):
    """Base exception for all library errors."""

    pass


class MergeConflictError(QueryError):
    """Two partial entities disagree on a value that cannot be reconciled.

    Raised by the default merge resolver when the same attribute holds
    values of different shapes (or different values of a kind that cannot
    be picked arbitrarily) in two responses of the same logical request.
    """

    def __init__(self, path: str, base_shape: str, incremental_shape: str) -> None:
        super().__init__(
            f"Cannot merge {base_shape} and {incremental_shape} at {path}"
        )
        self.path = path
        self.base_shape = base_shape
        self.incremental_shape = incremental_shape


class TooManyEmptyResponsesError(QueryError):
    """Too many consecutive responses did not contain the requested data.

    The logical request is abandoned and holds no recoverable state;
    callers may restart it, typically with adjusted parameters.
    """

    def __init__(self, limit: int, request_id: str | None = None) -> None:
        super().__init__(
            f"Received more than {limit} consecutive empty responses, giving up"
        )
        self.limit = limit
        self.request_id = request_id


class ProtocolExhaustionError(QueryError):
    """Continuation ended before the requested data was complete."""

    pass


class InvalidRequestShapeError(QueryError, ValueError):
    """Request parameters cannot identify the requested entity set."""

    pass


class ApiError(QueryError):
    """Error member returned by the API instead of a result."""

    def __init__(self, code: str, info: str | None = None) -> None:
        super().__init__(f"{code}: {info}" if info else code)
        self.code = code
        self.info = info
