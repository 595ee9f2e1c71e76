"""Transport protocol consumed by the aggregation runtime."""

from __future__ import annotations

from collections.abc import AsyncGenerator, Mapping
from typing import Any, Protocol


class Transport(Protocol):
    """Anything that can run a query and follow its continuation.

    ``ApiSession`` implements this over HTTP; tests use in-memory fakes.

    Architecture:
        One response is produced per continuation step, and the iterator
        ends once a response carries no continuation. The aggregation
        runtime pulls responses one at a time and may stop pulling early;
        it never asks the transport to retry.
    """

    def request_and_continue(
        self,
        params: Mapping[str, Any],
        options: Mapping[str, Any],
    ) -> AsyncGenerator[Mapping[str, Any], None]:
        """Issue a request and yield its responses, following continuation.

        Must return an async generator (or anything with ``aclose``), since
        callers close the stream when they stop pulling early.

        Args:
            params: Request parameters (already shaped for the query)
            options: Transport options (e.g. ``{"method": "POST"}``)
        """
        ...
