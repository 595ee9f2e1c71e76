"""Structured logging for continuation runs.

This module provides telemetry hooks for logical requests, emitting
structured log records that carry the request identity.
"""

from __future__ import annotations

import logging

from .definitions import RequestContext, RequestState

logger = logging.getLogger(__name__)


def log_request_started(*, context: RequestContext) -> None:
    """Log the start of a logical request."""
    logger.debug(
        "query_request_started",
        extra={
            "request_id": context.request_id,
            "operation": context.operation,
            "max_empty_responses": context.governor.limit,
        },
    )


def log_state_transition(
    *,
    context: RequestContext,
    previous: RequestState,
    current: RequestState,
) -> None:
    """Log a lifecycle transition of a logical request."""
    logger.debug(
        "query_state_transition",
        extra={
            "request_id": context.request_id,
            "operation": context.operation,
            "previous_state": previous.value,
            "state": current.value,
            "responses_seen": context.responses_seen,
        },
    )


def log_empty_response(*, context: RequestContext) -> None:
    """Log a response that produced no entities."""
    logger.debug(
        "query_empty_response",
        extra={
            "request_id": context.request_id,
            "operation": context.operation,
            "consecutive_empty": context.governor.consecutive_empty,
            "limit": context.governor.limit,
        },
    )


def log_batch_flushed(*, context: RequestContext, entities: int, final: bool) -> None:
    """Log a batch handed to the caller.

    Args:
        context: Request context
        entities: Number of entities in the batch
        final: Whether the batch was flushed because the responses ran out
            rather than on a batch completion marker
    """
    logger.debug(
        "query_batch_flushed",
        extra={
            "request_id": context.request_id,
            "operation": context.operation,
            "entities": entities,
            "final": final,
        },
    )


def log_request_complete(*, context: RequestContext, found: bool) -> None:
    """Log completion of a logical request."""
    logger.info(
        "query_request_complete",
        extra={
            "request_id": context.request_id,
            "operation": context.operation,
            "responses_seen": context.responses_seen,
            "found": found,
        },
    )


def log_request_failed(*, context: RequestContext, error_type: str, error_message: str) -> None:
    """Log a logical request that failed.

    Args:
        context: Request context
        error_type: Exception class name
        error_message: Exception message
    """
    logger.error(
        "query_request_failed",
        extra={
            "request_id": context.request_id,
            "operation": context.operation,
            "responses_seen": context.responses_seen,
            "error_type": error_type,
            "error_message": error_message,
        },
    )


def log_incomplete_continuation(*, context: RequestContext) -> None:
    """Log responses that ran out before a batch completion marker."""
    logger.warning(
        "query_continuation_incomplete",
        extra={
            "request_id": context.request_id,
            "operation": context.operation,
            "responses_seen": context.responses_seen,
        },
    )


def log_api_warning(
    *,
    context: RequestContext,
    code: str | None,
    module: str | None,
    text: str | None,
) -> None:
    """Log a warning returned by the API.

    Args:
        context: Request context
        code: Warning code (None for the legacy bc error format)
        module: API module that raised the warning
        text: Warning text
    """
    logger.warning(
        "query_api_warning",
        extra={
            "request_id": context.request_id,
            "operation": context.operation,
            "code": code,
            "api_module": module,
            "text": text,
        },
    )
