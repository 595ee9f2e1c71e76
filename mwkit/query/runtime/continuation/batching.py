"""Batch aggregation for one-to-many requests.

Generator-style requests return many entities, each of them potentially
spread over several responses. The API guarantees that every entity of a
batch is complete once a response carries ``batchcomplete``, so entities
are collected per batch, merged by identity, and handed out when the
batch completes. Entities are never merged across batches: a later batch
may legitimately return a different version under the same identity.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Mapping
from contextlib import aclosing
from functools import cmp_to_key
from typing import Any

from ...merge.engine import merge_entity
from ...models import Revision
from ...resolution.ids import canonical_id
from ...resolution.locator import iter_response_pages, iter_response_revisions
from .definitions import RequestContext, RequestState
from .executors import ContinuationExecutor
from .telemetry import log_batch_flushed, log_incomplete_continuation


def page_key(page: Mapping[str, Any]) -> tuple[str, str]:
    """Identity of a page within a batch.

    Missing pages all share a degenerate page ID (0 or none at all), so
    they, and any other page without an ID, are keyed by title instead.
    """
    if "missing" in page or "pageid" not in page:
        return ("title", str(page.get("title")))
    return ("pageid", canonical_id(page["pageid"]))


class BatchAggregator(ContinuationExecutor):
    """Collects complete entities batch by batch."""

    async def pages(self, params: Mapping[str, Any]) -> AsyncIterator[dict[str, Any]]:
        """Yield complete pages, one batch at a time.

        Within a batch, pages come out in order of first occurrence unless
        ``compare_pages`` is configured.
        """
        context = self._start()
        batch: dict[tuple[str, str], dict[str, Any]] = {}
        try:
            async with aclosing(self._responses(context, params)) as responses:
                async for envelope in responses:
                    pages = iter_response_pages(envelope)
                    self._record(context, bool(pages))
                    for page in pages:
                        key = page_key(page)
                        if key not in batch:
                            batch[key] = {}
                        merge_entity(batch[key], page, self._options.merge_values)
                    if batch:
                        self._transition(context, RequestState.ACCUMULATING)
                    if envelope.batch_complete:
                        for page in self._flush_pages(context, batch, final=False):
                            yield page
                        batch = {}
            if batch:
                log_incomplete_continuation(context=context)
                for page in self._flush_pages(context, batch, final=True):
                    yield page
        except Exception as exc:
            self._fail(context, exc)
            raise
        self._complete(context, found=context.responses_seen > 0)

    async def revisions(self, params: Mapping[str, Any]) -> AsyncIterator[Revision]:
        """Yield revisions, one batch at a time.

        Revisions need no merging; each batch is a flat list of the
        revisions seen in its responses, missing revisions first within
        each response. Found revisions carry their page.
        """
        context = self._start()
        batch: list[Revision] = []
        try:
            async with aclosing(self._responses(context, params)) as responses:
                async for envelope in responses:
                    revisions = list(iter_response_revisions(envelope))
                    self._record(context, bool(revisions))
                    batch.extend(revisions)
                    if batch:
                        self._transition(context, RequestState.ACCUMULATING)
                    if envelope.batch_complete:
                        for revision in self._flush_revisions(context, batch, final=False):
                            yield revision
                        batch = []
            if batch:
                log_incomplete_continuation(context=context)
                for revision in self._flush_revisions(context, batch, final=True):
                    yield revision
        except Exception as exc:
            self._fail(context, exc)
            raise
        self._complete(context, found=context.responses_seen > 0)

    def _flush_pages(
        self,
        context: RequestContext,
        batch: dict[tuple[str, str], dict[str, Any]],
        *,
        final: bool,
    ) -> list[dict[str, Any]]:
        pages = list(batch.values())
        if self._options.compare_pages is not None:
            pages.sort(key=cmp_to_key(self._options.compare_pages))
        log_batch_flushed(context=context, entities=len(pages), final=final)
        return pages

    def _flush_revisions(
        self,
        context: RequestContext,
        batch: list[Revision],
        *,
        final: bool,
    ) -> list[Revision]:
        revisions = list(batch)
        if self._options.compare_revisions is not None:
            revisions.sort(key=cmp_to_key(self._options.compare_revisions))
        log_batch_flushed(context=context, entities=len(revisions), final=final)
        return revisions
