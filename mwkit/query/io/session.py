"""HTTP transport for the MediaWiki action API."""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator, Mapping
from typing import Any

import aiohttp

from ..core.exceptions import ApiError

logger = logging.getLogger(__name__)

# errorformat=plaintext gives warnings and errors as lists with codes
DEFAULT_PARAMS = {"format": "json", "formatversion": 2, "errorformat": "plaintext"}


class ApiSession:
    """Async session against one wiki's ``api.php``.

    Implements the ``Transport`` protocol: ``request_and_continue`` issues
    one request per continuation step and ends when no continuation is left.
    Failed requests are not retried.
    """

    def __init__(
        self,
        api_url: str,
        default_params: Mapping[str, Any] | None = None,
        *,
        user_agent: str | None = None,
        timeout: float = 30.0,
    ) -> None:
        """Initialize session.

        Args:
            api_url: Full URL of the wiki's api.php
            default_params: Parameters added to every request
            user_agent: User-Agent header value (strongly recommended by Wikimedia)
            timeout: Total timeout per request in seconds
        """
        self.api_url = api_url
        self.default_params = {**DEFAULT_PARAMS, **(default_params or {})}
        self.user_agent = user_agent
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self._session: aiohttp.ClientSession | None = None

    @property
    def session(self) -> aiohttp.ClientSession:
        """Get or create session."""
        if self._session is None or self._session.closed:
            headers = {"User-Agent": self.user_agent} if self.user_agent else None
            self._session = aiohttp.ClientSession(timeout=self.timeout, headers=headers)
        return self._session

    async def request(
        self,
        params: Mapping[str, Any],
        options: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Make one API request.

        Args:
            params: API parameters; lists, tuples and sets are joined with ``|``
            options: ``method`` ("GET" or "POST", default "GET")

        Raises:
            ApiError: If the response contains an ``error`` member (legacy bc
                error format) or an ``errors`` list (any other error format)
            aiohttp.ClientResponseError: On HTTP error status
        """
        method = str((options or {}).get("method", "GET")).upper()
        encoded = encode_params({**self.default_params, **params})

        if method == "GET":
            request = self.session.get(self.api_url, params=encoded)
        else:
            request = self.session.post(self.api_url, data=encoded)
        async with request as response:
            response.raise_for_status()
            body = await response.json()

        error = body.get("error")
        if error is None and body.get("errors"):
            error = body["errors"][0]
        if error is not None:
            raise ApiError(error.get("code", "unknown"), error.get("info") or error.get("text"))
        return body

    async def request_and_continue(
        self,
        params: Mapping[str, Any],
        options: Mapping[str, Any],
    ) -> AsyncGenerator[dict[str, Any], None]:
        """Make a request and follow its continuation.

        Each response's ``continue`` object is merged into the parameters of
        the next request; the generator ends after the first response
        without one.
        """
        continuation: dict[str, Any] = {}
        while True:
            response = await self.request({**params, **continuation}, options)
            yield response
            if "continue" not in response:
                return
            continuation = dict(response["continue"])
            logger.debug("Following continuation", extra={"continue": continuation})

    async def close(self) -> None:
        """Close session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> ApiSession:
        """Context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        await self.close()


def encode_params(params: Mapping[str, Any]) -> dict[str, str]:
    """Encode parameters the way the action API expects them.

    Multi-values are joined with ``|`` (or with ``\\x1f`` if any value
    contains a ``|``), ``True`` becomes an empty string, and ``False`` or
    ``None`` drop the parameter.
    """
    encoded: dict[str, str] = {}
    for key, value in params.items():
        if value is None or value is False:
            continue
        if value is True:
            encoded[key] = ""
        elif isinstance(value, (list, tuple, set, frozenset)):
            if isinstance(value, (set, frozenset)):
                value = sorted(value, key=str)
            items = [str(item) for item in value]
            if any("|" in item for item in items):
                encoded[key] = "\x1f" + "\x1f".join(items)
            else:
                encoded[key] = "|".join(items)
        else:
            encoded[key] = str(value)
    return encoded
