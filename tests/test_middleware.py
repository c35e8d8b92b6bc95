"""
Tests for request and response middleware chains.
"""

import dataclasses
from unittest.mock import AsyncMock, Mock

import pytest

from graphql_fetch import ConfigurationError, GraphQLResponse, RequestInit
from graphql_fetch.middleware import apply_request_middleware, notify_response_middleware


@pytest.fixture
def request_init():
    return RequestInit(
        url="https://api.example.com/graphql",
        method="POST",
        headers={"Content-Type": "application/json"},
        body='{"query":"{ a }"}',
    )


class TestApplyRequestMiddleware:
    @pytest.mark.asyncio
    async def test_no_middleware_returns_request(self, request_init):
        assert await apply_request_middleware((), request_init) is request_init

    @pytest.mark.asyncio
    async def test_runs_in_order(self, request_init):
        def add_token(req):
            return dataclasses.replace(req, headers={**req.headers, "Authorization": "Bearer a"})

        async def move(req):
            return dataclasses.replace(req, url=req.url + "?v=2")

        result = await apply_request_middleware((add_token, move), request_init)

        assert result.url == "https://api.example.com/graphql?v=2"
        assert result.headers["Authorization"] == "Bearer a"
        assert request_init.headers == {"Content-Type": "application/json"}

    @pytest.mark.asyncio
    async def test_each_middleware_sees_previous_result(self, request_init):
        first = Mock(side_effect=lambda req: dataclasses.replace(req, method="GET"))
        second = Mock(side_effect=lambda req: req)

        await apply_request_middleware((first, second), request_init)

        assert second.call_args.args[0].method == "GET"

    @pytest.mark.asyncio
    async def test_rejects_non_request_result(self, request_init):
        def forgot_return(req):
            req.headers["X"] = "1"

        with pytest.raises(ConfigurationError, match="forgot_return"):
            await apply_request_middleware((forgot_return,), request_init)

    @pytest.mark.asyncio
    async def test_errors_propagate(self, request_init):
        failing = AsyncMock(side_effect=RuntimeError("token refresh failed"))

        with pytest.raises(RuntimeError, match="token refresh failed"):
            await apply_request_middleware((failing,), request_init)


class TestNotifyResponseMiddleware:
    @pytest.mark.asyncio
    async def test_sync_and_async_receive_outcome(self):
        response = GraphQLResponse(status=200, data={"a": 1})
        sync_middleware = Mock(return_value="ignored")
        async_middleware = AsyncMock()

        await notify_response_middleware((sync_middleware, async_middleware), response)

        sync_middleware.assert_called_once_with(response)
        async_middleware.assert_awaited_once_with(response)

    @pytest.mark.asyncio
    async def test_receives_exceptions(self):
        error = RuntimeError("boom")
        middleware = Mock()

        await notify_response_middleware((middleware,), error)

        middleware.assert_called_once_with(error)
