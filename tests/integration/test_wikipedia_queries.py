"""Integration tests against live Wikipedia."""

import os

import pytest

from mwkit.query import (
    page_of_revision,
    query_full_page_by_title,
    query_full_pages,
    query_full_revision_by_revision_id,
)

pytestmark = [
    pytest.mark.integration,
    pytest.mark.skipif(
        os.environ.get("RUN_MWKIT_NETWORK_TESTS") != "1",
        reason="Requires network access to query Wikipedia",
    ),
]


class TestWikipediaIntegration:
    """Run query operations against live wikis."""

    @pytest.mark.asyncio
    async def test_title_conversion_and_redirect(self, wikipedia_sr):
        """belgrad is converted to Belgrad, which redirects to Београд."""
        page = await query_full_page_by_title(
            wikipedia_sr,
            "belgrad",
            {"converttitles": True, "redirects": True},
        )
        assert page is not None
        assert page["title"] == "Београд"

    @pytest.mark.asyncio
    async def test_full_page_with_many_links(self, wikipedia_en):
        """Links spread over several responses are merged into one page."""
        page = await query_full_page_by_title(
            wikipedia_en,
            "Main Page",
            {"prop": "links", "pllimit": 5},
            {"max_empty_responses": 10},
        )
        assert page is not None
        assert len(page["links"]) > 5

    @pytest.mark.asyncio
    async def test_full_pages_of_generator(self, wikipedia_en):
        """Every page of a generator batch comes out once."""
        titles = []
        async for page in query_full_pages(
            wikipedia_en,
            {"generator": "allpages", "gaplimit": 5, "gapfrom": "Zeb"},
        ):
            titles.append(page["title"])
            if len(titles) >= 10:
                break
        assert len(titles) == len(set(titles))

    @pytest.mark.asyncio
    async def test_revision_carries_page(self, wikipedia_en):
        """A revision of the Main Page knows its page."""
        page = await query_full_page_by_title(wikipedia_en, "Main Page", {"prop": "info"})
        revision = await query_full_revision_by_revision_id(wikipedia_en, page["lastrevid"])
        assert revision["revid"] == page["lastrevid"]
        assert page_of_revision(revision)["title"] == "Main Page"
