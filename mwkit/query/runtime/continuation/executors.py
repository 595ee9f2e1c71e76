"""Continuation execution for single-entity requests.

This module provides the ContinuationDriver, which pulls the responses of
one logical request from a transport, locates the requested page or
revision in each of them, and merges the partial views into one entity.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable, Mapping
from contextlib import aclosing
from typing import Any

from ...core.exceptions import ProtocolExhaustionError
from ...core.options import QueryOptions
from ...merge.engine import merge_entity
from ...models import ResponseEnvelope
from ..transport import Transport
from .definitions import RequestContext, RequestState
from .telemetry import (
    log_api_warning,
    log_empty_response,
    log_incomplete_continuation,
    log_request_complete,
    log_request_failed,
    log_request_started,
    log_state_transition,
)

Locate = Callable[[ResponseEnvelope], dict[str, Any] | None]


class ContinuationExecutor:
    """Shared response handling for continuation-driven operations.

    Every public operation of a subclass starts a fresh RequestContext, so
    one executor can serve any number of concurrent logical requests.
    """

    def __init__(
        self,
        transport: Transport,
        *,
        options: QueryOptions,
        operation: str,
        dropped_warnings: frozenset[str] = frozenset(),
    ) -> None:
        """Initialize executor.

        Args:
            transport: Source of response documents
            options: Configuration for every request run by this executor
            operation: Operation name used in log records
            dropped_warnings: API warning codes that are expected for this
                kind of request and not logged
        """
        self._transport = transport
        self._options = options
        self._operation = operation
        self._dropped_warnings = dropped_warnings

    def _start(self) -> RequestContext:
        context = RequestContext.start(self._operation, self._options.max_empty_responses)
        log_request_started(context=context)
        return context

    async def _responses(
        self, context: RequestContext, params: Mapping[str, Any]
    ) -> AsyncIterator[ResponseEnvelope]:
        stream = self._transport.request_and_continue(params, self._options.request_options)
        async with aclosing(stream) as responses:
            async for response in responses:
                context.responses_seen += 1
                envelope = ResponseEnvelope.parse(response)
                for warning in envelope.api_warnings:
                    if warning.code not in self._dropped_warnings:
                        log_api_warning(
                            context=context,
                            code=warning.code,
                            module=warning.module,
                            text=warning.text,
                        )
                yield envelope

    def _transition(self, context: RequestContext, state: RequestState) -> None:
        if context.state == state:
            return
        previous = context.state
        context.state = state
        log_state_transition(context=context, previous=previous, current=state)

    def _record(self, context: RequestContext, productive: bool) -> None:
        if productive:
            context.governor.record_productive()
            return
        context.governor.record_empty()
        log_empty_response(context=context)

    def _fail(self, context: RequestContext, exc: Exception) -> None:
        self._transition(context, RequestState.FAILED)
        log_request_failed(
            context=context,
            error_type=type(exc).__name__,
            error_message=str(exc),
        )

    def _complete(self, context: RequestContext, found: bool) -> None:
        self._transition(context, RequestState.COMPLETE)
        log_request_complete(context=context, found=found)


class ContinuationDriver(ContinuationExecutor):
    """Drives single-entity requests (one page or one revision).

    The entity is located in each response with ``locate``. Depending on
    the operation, the driver returns the first view of it, yields every
    view, merges all views until the batch is complete, or stops as soon
    as the entity shows up at all.
    """

    def __init__(
        self,
        transport: Transport,
        locate: Locate,
        *,
        options: QueryOptions,
        operation: str,
        dropped_warnings: frozenset[str] = frozenset(),
    ) -> None:
        super().__init__(
            transport,
            options=options,
            operation=operation,
            dropped_warnings=dropped_warnings,
        )
        self._locate = locate

    async def partial(self, params: Mapping[str, Any]) -> dict[str, Any] | None:
        """Return the entity as found in the first response only.

        Further continuation is not followed.
        """
        context = self._start()
        try:
            async with aclosing(self._responses(context, params)) as responses:
                async for envelope in responses:
                    entity = self._locate(envelope)
                    self._complete(context, found=entity is not None)
                    return entity
            raise ProtocolExhaustionError("Transport produced no response")
        except Exception as exc:
            self._fail(context, exc)
            raise

    async def incremental(self, params: Mapping[str, Any]) -> AsyncIterator[dict[str, Any]]:
        """Yield the entity as found in each response.

        Responses that do not contain it yield nothing and count towards
        the empty response limit.
        """
        context = self._start()
        found = False
        try:
            async with aclosing(self._responses(context, params)) as responses:
                async for envelope in responses:
                    entity = self._locate(envelope)
                    self._record(context, entity is not None)
                    if entity is not None:
                        found = True
                        self._transition(context, RequestState.ACCUMULATING)
                        yield entity
        except Exception as exc:
            self._fail(context, exc)
            raise
        self._complete(context, found=found)

    async def full(self, params: Mapping[str, Any]) -> dict[str, Any] | None:
        """Merge every view of the entity until the batch is complete.

        Returns:
            The merged entity, or None if the batch completed without the
            entity ever being found

        Raises:
            ProtocolExhaustionError: If the responses ran out before batch
                completion without the entity ever being found
        """
        context = self._start()
        accumulator: dict[str, Any] | None = None
        try:
            async with aclosing(self._responses(context, params)) as responses:
                async for envelope in responses:
                    entity = self._locate(envelope)
                    self._record(context, entity is not None)
                    if entity is not None:
                        if accumulator is None:
                            accumulator = {}
                            self._transition(context, RequestState.ACCUMULATING)
                        merge_entity(accumulator, entity, self._options.merge_values)
                    if envelope.batch_complete:
                        self._complete(context, found=accumulator is not None)
                        return accumulator
            if accumulator is None:
                raise ProtocolExhaustionError(
                    "Continuation ended before the batch was complete"
                )
        except Exception as exc:
            self._fail(context, exc)
            raise
        log_incomplete_continuation(context=context)
        self._complete(context, found=True)
        return accumulator

    async def potential(self, params: Mapping[str, Any]) -> AsyncIterator[dict[str, Any] | None]:
        """Yield None for every response without the entity, then the entity.

        Once the entity is found, no further continuation is requested and
        the iterator ends; this suits entities (revisions) that are complete
        as soon as they appear.
        """
        context = self._start()
        try:
            async with aclosing(self._responses(context, params)) as responses:
                async for envelope in responses:
                    entity = self._locate(envelope)
                    self._record(context, entity is not None)
                    if entity is not None:
                        self._complete(context, found=True)
                        yield entity
                        return
                    yield None
        except Exception as exc:
            self._fail(context, exc)
            raise
        log_incomplete_continuation(context=context)
        self._complete(context, found=False)

    async def first(self, params: Mapping[str, Any]) -> dict[str, Any]:
        """Return the entity from the first response that contains it.

        Raises:
            ProtocolExhaustionError: If the responses ran out first
        """
        async with aclosing(self.potential(params)) as views:
            async for entity in views:
                if entity is not None:
                    return entity
        raise ProtocolExhaustionError(
            "Continuation ended without returning the requested entity"
        )
