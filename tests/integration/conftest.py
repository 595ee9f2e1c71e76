"""Shared fixtures for integration tests."""

import os

import pytest
import pytest_asyncio

from mwkit.query import ApiSession

# Skip all integration tests unless RUN_MWKIT_NETWORK_TESTS=1
pytestmark = pytest.mark.skipif(
    os.environ.get("RUN_MWKIT_NETWORK_TESTS") != "1",
    reason="Requires network access. Set RUN_MWKIT_NETWORK_TESTS=1 to run",
)

USER_AGENT = "mwkit-query-integration-tests/0.1.0 (https://github.com/mwkit/mwkit-query)"


@pytest_asyncio.fixture
async def wikipedia_sr():
    async with ApiSession("https://sr.wikipedia.org/w/api.php", user_agent=USER_AGENT) as session:
        yield session


@pytest_asyncio.fixture
async def wikipedia_en():
    async with ApiSession("https://en.wikipedia.org/w/api.php", user_agent=USER_AGENT) as session:
        yield session
