"""Continuation layer for incremental response aggregation.

This package drives the responses of one logical request through entity
location and deep merging, and bounds unproductive continuation.

Architecture:
    The continuation layer consists of:
    - definitions.py: Request lifecycle structures (RequestState, RequestContext)
    - governor.py: Consecutive empty response bound (EmptyResponseGovernor)
    - executors.py: Single-entity execution (ContinuationDriver)
    - batching.py: One-to-many execution (BatchAggregator)
    - telemetry.py: Structured logging

Usage:
    Executors are created per operation with an immutable QueryOptions
    value; every call starts its own RequestContext, so concurrently running
    requests never share state.
"""

from __future__ import annotations

from .batching import BatchAggregator, page_key
from .definitions import RequestContext, RequestState
from .executors import ContinuationDriver, ContinuationExecutor
from .governor import EmptyResponseGovernor

__all__ = [
    "RequestState",
    "RequestContext",
    "EmptyResponseGovernor",
    "ContinuationExecutor",
    "ContinuationDriver",
    "BatchAggregator",
    "page_key",
]
