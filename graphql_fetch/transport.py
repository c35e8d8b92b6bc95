"""
Transport adapter for GraphQL requests.

A transport is any fetch-compatible callable ``fetch(url, init)`` returning
(or resolving to) an object with ``status``, ``headers``, ``text()`` and
``json()``. ``AiohttpTransport`` is the default implementation.
"""

from __future__ import annotations

import inspect
import json
import logging
from types import TracebackType
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional, Protocol, Union

import aiohttp
from multidict import CIMultiDictProxy

from .models import freeze_headers

logger = logging.getLogger(__name__)

# Browser fetch() options with no aiohttp counterpart.
BROWSER_ONLY_OPTIONS = frozenset(
    {
        "credentials",
        "mode",
        "cache",
        "redirect",
        "referrer",
        "referrerPolicy",
        "integrity",
        "keepalive",
        "signal",
        "window",
    }
)


class FetchResponse(Protocol):
    """Response object returned by a fetch-compatible transport."""

    status: int
    headers: Mapping[str, Any]

    def text(self) -> Union[str, Awaitable[str]]:
        ...

    def json(self) -> Union[Any, Awaitable[Any]]:
        ...


Fetch = Callable[[str, Dict[str, Any]], Awaitable[FetchResponse]]


async def resolve(value: Any) -> Any:
    """Await ``value`` if it is awaitable, otherwise return it as is."""
    if inspect.isawaitable(value):
        return await value
    return value


class BufferedResponse:
    """A fully read HTTP response detached from its connection."""

    def __init__(self, status: int, headers: Mapping[str, Any], body: str, url: str = "") -> None:
        self.status = status
        self.headers: CIMultiDictProxy[str] = freeze_headers(headers)
        self.url = url
        self._body = body

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    async def text(self) -> str:
        return self._body

    async def json(self) -> Any:
        return json.loads(self._body)

    def __repr__(self) -> str:
        return f"<BufferedResponse status={self.status} url={self.url!r}>"


class AiohttpTransport:
    """
    Fetch-compatible transport backed by aiohttp.

    When no session is supplied a short-lived ``aiohttp.ClientSession`` is
    opened for every call. Sessions opened through ``async with`` are owned
    and closed by the transport; supplied sessions are left to the caller.

    Examples:
        ```python
        async with AiohttpTransport() as transport:
            client = GraphQLClient(url, fetch=transport)
            data = await client.request("{ me { id } }")
        ```
    """

    def __init__(self, session: Optional[aiohttp.ClientSession] = None) -> None:
        self._session = session
        self._owns_session = False

    @property
    def session(self) -> Optional[aiohttp.ClientSession]:
        return self._session

    async def __aenter__(self) -> "AiohttpTransport":
        if self._session is None:
            self._session = aiohttp.ClientSession(raise_for_status=False)
            self._owns_session = True
        return self

    async def __aexit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the session if this transport opened it."""
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()
        if self._owns_session:
            self._session = None
            self._owns_session = False

    async def __call__(self, url: str, init: Dict[str, Any]) -> BufferedResponse:
        options = dict(init)
        method = options.pop("method", "POST")
        headers = options.pop("headers", None)
        body = options.pop("body", None)

        dropped = BROWSER_ONLY_OPTIONS.intersection(options)
        for key in dropped:
            options.pop(key)
        if dropped:
            logger.debug("Ignoring browser-only fetch options: %s", ", ".join(sorted(dropped)))

        if self._session is not None and not self._session.closed:
            return await self._send(self._session, method, url, headers, body, options)

        async with aiohttp.ClientSession(raise_for_status=False) as session:
            return await self._send(session, method, url, headers, body, options)

    @staticmethod
    async def _send(
        session: aiohttp.ClientSession,
        method: str,
        url: str,
        headers: Optional[Mapping[str, str]],
        body: Optional[str],
        options: Dict[str, Any],
    ) -> BufferedResponse:
        async with session.request(method, url, headers=headers, data=body, **options) as response:
            text = await response.text(errors="replace")
            return BufferedResponse(response.status, response.headers, text, url=str(response.url))
