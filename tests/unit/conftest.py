"""Shared fakes for unit tests."""

from __future__ import annotations

from collections.abc import AsyncGenerator, Mapping
from typing import Any

import pytest


class SequentialTransport:
    """Fake transport answering an expected sequence of requests.

    Each call is ``(expected_params, response)``. Continuation is followed
    the way the HTTP session does it: the ``continue`` object of a response
    is merged into the parameters of the next request, and the stream ends
    after a response without one.
    """

    def __init__(self, calls: list[tuple[dict[str, Any], dict[str, Any]]]) -> None:
        self._calls = list(calls)
        self.requests: list[dict[str, Any]] = []
        self.options: list[Mapping[str, Any]] = []
        self.closed = 0

    @property
    def remaining(self) -> int:
        return len(self._calls)

    async def request_and_continue(
        self,
        params: Mapping[str, Any],
        options: Mapping[str, Any],
    ) -> AsyncGenerator[dict[str, Any], None]:
        continuation: dict[str, Any] = {}
        try:
            while True:
                assert self._calls, "unexpected request"
                expected_params, response = self._calls.pop(0)
                actual = {**params, **continuation}
                self.requests.append(actual)
                self.options.append(options)
                assert actual == expected_params
                yield response
                if "continue" not in response:
                    return
                continuation = dict(response["continue"])
        finally:
            self.closed += 1


class ScriptedTransport:
    """Fake transport replaying responses without checking parameters."""

    def __init__(self, responses: list[dict[str, Any]]) -> None:
        self._responses = list(responses)
        self.pulled = 0

    async def request_and_continue(
        self,
        params: Mapping[str, Any],
        options: Mapping[str, Any],
    ) -> AsyncGenerator[dict[str, Any], None]:
        for response in self._responses:
            self.pulled += 1
            yield response


@pytest.fixture
def sequential_transport():
    return SequentialTransport


@pytest.fixture
def scripted_transport():
    return ScriptedTransport
