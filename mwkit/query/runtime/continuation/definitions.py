"""Continuation state definitions.

This module defines the per-request state shared by the continuation
driver and the batch aggregator.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from enum import Enum

from .governor import EmptyResponseGovernor


class RequestState(str, Enum):
    """Lifecycle of one logical request."""

    REQUESTING = "requesting"  # no entity located yet
    ACCUMULATING = "accumulating"  # entity located, completion not yet signaled
    COMPLETE = "complete"
    FAILED = "failed"


@dataclass
class RequestContext:
    """State of one logical request (its request identity).

    A fresh context is created for every call to an aggregation operation,
    so two requests never share a governor, even with identical parameters.

    Attributes:
        operation: Name of the operation driving the request (for logs)
        governor: Consecutive empty response tracker of this request
        request_id: Unique identifier used in log records
        state: Current lifecycle state
        responses_seen: Number of responses pulled so far
    """

    operation: str
    governor: EmptyResponseGovernor
    request_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    state: RequestState = RequestState.REQUESTING
    responses_seen: int = 0

    @classmethod
    def start(cls, operation: str, max_empty_responses: int | None) -> RequestContext:
        request_id = uuid.uuid4().hex
        return cls(
            operation=operation,
            governor=EmptyResponseGovernor(max_empty_responses, request_id),
            request_id=request_id,
        )
