"""
Request and response middleware.

Request middleware receives the outgoing ``RequestInit`` and returns the
one to send; it may be a plain function or a coroutine function. Response
middleware observes the outcome of a call, either a ``GraphQLResponse``
or the exception about to be raised, and its return value is ignored.
"""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Sequence, Union

from .exceptions import ConfigurationError
from .models import GraphQLResponse, RequestInit
from .transport import resolve

logger = logging.getLogger(__name__)

RequestMiddleware = Callable[[RequestInit], Union[RequestInit, Awaitable[RequestInit]]]
ResponseMiddleware = Callable[[Union[GraphQLResponse, BaseException]], Any]


async def apply_request_middleware(
    middleware: Sequence[RequestMiddleware],
    request: RequestInit,
) -> RequestInit:
    """
    Run request middleware in order, awaiting asynchronous ones.

    Raises:
        ConfigurationError: If a middleware returns something other than a RequestInit
    """
    for func in middleware:
        result = await resolve(func(request))
        if not isinstance(result, RequestInit):
            raise ConfigurationError(
                f"Request middleware {getattr(func, '__name__', func)!r} must return "
                f"a RequestInit, got {type(result).__name__}"
            )
        if result.url != request.url:
            logger.debug("Request middleware redirected %s to %s", request.url, result.url)
        request = result
    return request


async def notify_response_middleware(
    middleware: Sequence[ResponseMiddleware],
    outcome: Union[GraphQLResponse, BaseException],
) -> None:
    """Pass ``outcome`` to each response middleware in order."""
    for func in middleware:
        await resolve(func(outcome))
