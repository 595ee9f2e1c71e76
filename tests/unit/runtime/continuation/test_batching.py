"""Unit tests for batch aggregation of one-to-many requests."""

from __future__ import annotations

import logging

import pytest

from mwkit.query import (
    InvalidRequestShapeError,
    TooManyEmptyResponsesError,
    page_of_revision,
    query_full_pages,
    query_full_revisions,
)
from mwkit.query.runtime.continuation import page_key

GENERATOR_PARAMS = {"action": "query", "generator": "allpages"}
REVISION_PARAMS = {"action": "query", "generator": "allpages", "prop": ["revisions"]}


async def collect(iterator):
    return [item async for item in iterator]


class TestPageKey:
    def test_keyed_by_page_id(self):
        assert page_key({"pageid": 123, "title": "A"}) == ("pageid", "123")
        assert page_key({"pageid": "123", "title": "A"}) == page_key({"pageid": 123, "title": "B"})

    def test_missing_page_keyed_by_title(self):
        assert page_key({"pageid": 0, "title": "A", "missing": True}) == ("title", "A")
        assert page_key({"ns": 0, "title": "A", "missing": ""}) == ("title", "A")

    def test_page_without_id_keyed_by_title(self):
        assert page_key({"title": "Special:X", "invalid": True}) == ("title", "Special:X")


class TestFullPages:
    @pytest.mark.asyncio
    async def test_merges_pages_within_batch(self, sequential_transport):
        session = sequential_transport(
            [
                (
                    GENERATOR_PARAMS,
                    {
                        "query": {
                            "pages": [
                                {"pageid": 1, "title": "A", "links": [{"title": "L1"}]},
                                {"pageid": 2, "title": "B"},
                            ]
                        },
                        "continue": {"plcontinue": "1|2"},
                    },
                ),
                (
                    {**GENERATOR_PARAMS, "plcontinue": "1|2"},
                    {
                        "query": {
                            "pages": [
                                {"pageid": 1, "title": "A", "links": [{"title": "L2"}]},
                                {"pageid": 2, "title": "B", "links": [{"title": "L3"}]},
                            ]
                        },
                        "batchcomplete": True,
                    },
                ),
            ]
        )
        pages = await collect(query_full_pages(session, {"generator": "allpages"}))
        assert pages == [
            {"pageid": 1, "title": "A", "links": [{"title": "L1"}, {"title": "L2"}]},
            {"pageid": 2, "title": "B", "links": [{"title": "L3"}]},
        ]

    @pytest.mark.asyncio
    async def test_does_not_merge_across_batches(self, sequential_transport):
        session = sequential_transport(
            [
                (
                    GENERATOR_PARAMS,
                    {
                        "query": {"pages": [{"pageid": 1, "title": "A", "touched": "1"}]},
                        "batchcomplete": True,
                        "continue": {"gapcontinue": "A"},
                    },
                ),
                (
                    {**GENERATOR_PARAMS, "gapcontinue": "A"},
                    {
                        "query": {"pages": [{"pageid": 1, "title": "A", "touched": "2"}]},
                        "batchcomplete": True,
                    },
                ),
            ]
        )
        pages = await collect(query_full_pages(session, {"generator": "allpages"}))
        assert pages == [
            {"pageid": 1, "title": "A", "touched": "1"},
            {"pageid": 1, "title": "A", "touched": "2"},
        ]

    @pytest.mark.asyncio
    async def test_missing_pages_keyed_by_title(self, scripted_transport):
        session = scripted_transport(
            [
                {
                    "query": {
                        "pages": {
                            "-1": {"ns": 0, "title": "Missing 1", "missing": ""},
                            "-2": {"ns": 0, "title": "Missing 2", "missing": ""},
                        }
                    },
                    "batchcomplete": "",
                }
            ]
        )
        pages = await collect(query_full_pages(session, {"titles": "Missing 1|Missing 2"}))
        assert [page["title"] for page in pages] == ["Missing 1", "Missing 2"]

    @pytest.mark.asyncio
    async def test_pages_sorted_by_comparator(self, scripted_transport):
        session = scripted_transport(
            [
                {
                    "query": {"pages": [{"pageid": 3, "index": 2}, {"pageid": 1, "index": 3}]},
                    "continue": {"c": "1"},
                },
                {"query": {"pages": [{"pageid": 2, "index": 1}]}, "batchcomplete": True},
            ]
        )

        def compare_pages(a, b):
            return a["index"] - b["index"]

        pages = await collect(
            query_full_pages(session, {"generator": "search"}, {"compare_pages": compare_pages})
        )
        assert [page["pageid"] for page in pages] == [2, 3, 1]

    @pytest.mark.asyncio
    async def test_flushes_remainder_when_responses_run_out(self, scripted_transport, caplog):
        session = scripted_transport(
            [
                {"query": {"pages": [{"pageid": 1, "title": "A"}]}, "batchcomplete": True},
                {"query": {"pages": [{"pageid": 2, "title": "B"}]}},
            ]
        )
        with caplog.at_level(logging.WARNING):
            pages = await collect(query_full_pages(session, {"generator": "allpages"}))
        assert pages == [{"pageid": 1, "title": "A"}, {"pageid": 2, "title": "B"}]
        assert any(record.message == "query_continuation_incomplete" for record in caplog.records)

    @pytest.mark.asyncio
    async def test_accumulated_pages_are_copies(self, scripted_transport):
        page = {"pageid": 1, "title": "A", "links": [{"title": "L1"}]}
        response = {"query": {"pages": [page]}, "batchcomplete": True}
        session = scripted_transport([response])
        pages = await collect(query_full_pages(session, {"generator": "allpages"}))
        pages[0]["links"].append({"title": "L2"})
        assert page["links"] == [{"title": "L1"}]

    @pytest.mark.asyncio
    async def test_empty_response_limit(self, scripted_transport):
        session = scripted_transport([{"query": {"pages": []}}] * 3 + [{"batchcomplete": True}])
        with pytest.raises(TooManyEmptyResponsesError):
            await collect(query_full_pages(session, {"generator": "allpages"}, {"max_empty_responses": 2}))

    @pytest.mark.asyncio
    async def test_comparator_error_in_final_flush_fails_request(self, scripted_transport, caplog):
        session = scripted_transport([{"query": {"pages": [{"pageid": 1}, {"pageid": 2}]}}])

        def compare_pages(a, b):
            raise RuntimeError("cannot compare")

        with caplog.at_level(logging.ERROR):
            with pytest.raises(RuntimeError, match="cannot compare"):
                await collect(
                    query_full_pages(session, {"generator": "allpages"}, {"compare_pages": compare_pages})
                )
        failures = [r for r in caplog.records if r.message == "query_request_failed"]
        assert len(failures) == 1
        assert failures[0].error_type == "RuntimeError"

    def test_rejects_other_action_on_call(self, scripted_transport):
        with pytest.raises(InvalidRequestShapeError):
            query_full_pages(scripted_transport([]), {"action": "parse"})


class TestFullRevisions:
    @pytest.mark.asyncio
    async def test_revisions_carry_their_page(self, sequential_transport):
        session = sequential_transport(
            [
                (
                    REVISION_PARAMS,
                    {
                        "query": {
                            "pages": [
                                {"pageid": 1, "title": "A", "revisions": [{"revid": 10}, {"revid": 11}]},
                                {"pageid": 2, "title": "B", "revisions": [{"revid": 20}]},
                            ]
                        },
                        "batchcomplete": True,
                    },
                )
            ]
        )
        revisions = await collect(query_full_revisions(session, {"generator": "allpages"}))
        assert revisions == [{"revid": 10}, {"revid": 11}, {"revid": 20}]
        assert page_of_revision(revisions[0]) == {"pageid": 1, "title": "A"}
        assert page_of_revision(revisions[2]) == {"pageid": 2, "title": "B"}

    @pytest.mark.asyncio
    async def test_missing_revisions_first(self, scripted_transport):
        session = scripted_transport(
            [
                {
                    "query": {
                        "badrevids": {"123": {"revid": 123}},
                        "pages": {"1": {"pageid": 1, "title": "A", "revisions": [{"revid": 456}]}},
                    },
                    "batchcomplete": "",
                }
            ]
        )
        revisions = await collect(query_full_revisions(session, {"revids": "456|123"}))
        assert revisions == [{"revid": 123, "missing": ""}, {"revid": 456}]
        assert page_of_revision(revisions[0]) is None

    @pytest.mark.asyncio
    async def test_batches_span_responses(self, scripted_transport):
        session = scripted_transport(
            [
                {"query": {"pages": [{"pageid": 1, "revisions": [{"revid": 1}]}]}, "continue": {"c": "1"}},
                {"query": {"pages": [{"pageid": 2, "revisions": [{"revid": 2}]}]}, "batchcomplete": True},
            ]
        )
        revisions = await collect(query_full_revisions(session, {"generator": "allpages"}))
        assert [revision["revid"] for revision in revisions] == [1, 2]

    @pytest.mark.asyncio
    async def test_revisions_sorted_by_comparator(self, scripted_transport):
        session = scripted_transport(
            [
                {
                    "query": {
                        "pages": [
                            {"pageid": 1, "revisions": [{"revid": 3}]},
                            {"pageid": 2, "revisions": [{"revid": 1}, {"revid": 2}]},
                        ]
                    },
                    "batchcomplete": True,
                }
            ]
        )

        def compare_revisions(a, b):
            return a["revid"] - b["revid"]

        revisions = await collect(
            query_full_revisions(session, {"generator": "allpages"}, {"compare_revisions": compare_revisions})
        )
        assert [revision["revid"] for revision in revisions] == [1, 2, 3]
        assert page_of_revision(revisions[0])["pageid"] == 2

    @pytest.mark.asyncio
    async def test_drops_truncated_result_warning(self, scripted_transport, caplog):
        session = scripted_transport(
            [
                {
                    "query": {"pages": [{"pageid": 1, "revisions": [{"revid": 1}]}]},
                    "warnings": [{"module": "main", "code": "truncatedresult", "text": "Truncated"}],
                    "batchcomplete": True,
                }
            ]
        )
        with caplog.at_level(logging.WARNING):
            await collect(query_full_revisions(session, {"generator": "allpages"}))
        assert not any(record.message == "query_api_warning" for record in caplog.records)

    @pytest.mark.asyncio
    async def test_comparator_error_in_final_flush_fails_request(self, scripted_transport, caplog):
        session = scripted_transport(
            [{"query": {"pages": [{"pageid": 1, "revisions": [{"revid": 1}, {"revid": 2}]}]}}]
        )

        def compare_revisions(a, b):
            raise RuntimeError("cannot compare")

        with caplog.at_level(logging.ERROR):
            with pytest.raises(RuntimeError, match="cannot compare"):
                await collect(
                    query_full_revisions(
                        session, {"generator": "allpages"}, {"compare_revisions": compare_revisions}
                    )
                )
        failures = [r for r in caplog.records if r.message == "query_request_failed"]
        assert len(failures) == 1
        assert failures[0].operation == "query_full_revisions"
