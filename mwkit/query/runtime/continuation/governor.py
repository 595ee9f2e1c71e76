"""Bound on consecutive unproductive responses."""

from __future__ import annotations

from ...core.exceptions import TooManyEmptyResponsesError


class EmptyResponseGovernor:
    """Counts consecutive responses that produced no entities.

    Some continuations can run for a long time without returning anything
    useful (e.g. a generator over a huge, mostly filtered list). Once more
    than ``limit`` consecutive responses were empty, the logical request
    fails with ``TooManyEmptyResponsesError``. Any productive response
    resets the count. Without a limit, the governor only counts.
    """

    def __init__(self, limit: int | None = None, request_id: str | None = None) -> None:
        """Initialize governor.

        Args:
            limit: Maximum number of consecutive empty responses (None = unbounded)
            request_id: Identifier of the owning request, reported on failure
        """
        if limit is not None and limit < 0:
            raise ValueError("limit must be non-negative or None")
        self.limit = limit
        self.request_id = request_id
        self.consecutive_empty = 0

    def record_empty(self) -> None:
        """Record a response without entities.

        Raises:
            TooManyEmptyResponsesError: If the limit is now exceeded
        """
        self.consecutive_empty += 1
        if self.limit is not None and self.consecutive_empty > self.limit:
            raise TooManyEmptyResponsesError(self.limit, self.request_id)

    def record_productive(self) -> None:
        """Record a response with at least one entity."""
        self.consecutive_empty = 0
