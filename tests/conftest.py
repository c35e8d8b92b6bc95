"""
Shared test fixtures and helpers for the graphql_fetch test suite.
"""

import json
from typing import Any, Dict, List, Optional

import pytest
from aioresponses import aioresponses

GRAPHQL_URL = "https://api.example.com/graphql"


class StubResponse:
    """Minimal response object for custom fetch callables."""

    def __init__(self, body: Any, headers: Optional[Dict[str, str]] = None, status: int = 200):
        self.body = body
        self.headers = headers if headers is not None else {"Content-Type": "application/json"}
        self.status = status

    def text(self) -> str:
        if isinstance(self.body, str):
            return self.body
        return json.dumps(self.body)

    def json(self) -> Any:
        return self.body


class StubFetch:
    """Fetch-compatible callable that records calls and returns a canned response."""

    def __init__(self, response: StubResponse):
        self.response = response
        self.calls: List[Dict[str, Any]] = []

    async def __call__(self, url: str, init: Dict[str, Any]) -> StubResponse:
        self.calls.append({"url": url, "init": init})
        return self.response


def sent_calls(mocked: aioresponses) -> List[Any]:
    """Return every request aioresponses intercepted, in order."""
    return [call for calls in mocked.requests.values() for call in calls]


def sent_bodies(mocked: aioresponses) -> List[Any]:
    """Return the decoded JSON bodies of every intercepted request."""
    return [json.loads(call.kwargs["data"]) for call in sent_calls(mocked)]


@pytest.fixture
def graphql_url() -> str:
    return GRAPHQL_URL


@pytest.fixture
def mocked():
    """Intercept aiohttp requests."""
    with aioresponses() as m:
        yield m


@pytest.fixture
def stub_fetch():
    """Factory for StubFetch instances."""

    def _factory(body: Any, headers: Optional[Dict[str, str]] = None, status: int = 200) -> StubFetch:
        return StubFetch(StubResponse(body, headers=headers, status=status))

    return _factory


@pytest.fixture
def request_calls(mocked):
    """Callable returning the requests intercepted so far."""
    return lambda: sent_calls(mocked)


@pytest.fixture
def request_bodies(mocked):
    """Callable returning the JSON bodies sent so far."""
    return lambda: sent_bodies(mocked)
