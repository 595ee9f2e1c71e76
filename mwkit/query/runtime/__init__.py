"""Runtime orchestration components."""

from .continuation import (
    BatchAggregator,
    ContinuationDriver,
    EmptyResponseGovernor,
    RequestContext,
    RequestState,
)
from .params import generator_params, page_id_params, revision_id_params, title_params
from .transport import Transport

__all__ = [
    "Transport",
    "ContinuationDriver",
    "BatchAggregator",
    "EmptyResponseGovernor",
    "RequestContext",
    "RequestState",
    "title_params",
    "page_id_params",
    "revision_id_params",
    "generator_params",
]
