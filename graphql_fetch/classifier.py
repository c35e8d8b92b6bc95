"""
Response parsing and classification.

Decides how a response body is parsed from its ``Content-Type`` and
whether the outcome is a success or a ``ClientError``.
"""

from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional

from .config.models import ErrorPolicy
from .exceptions import ClientError
from .models import GraphQLRequestContext, GraphQLResponse, freeze_headers
from .transport import FetchResponse, resolve

logger = logging.getLogger(__name__)

JSON_MIME_TYPES = frozenset(
    {
        "application/json",
        "application/graphql+json",
        "application/graphql-response+json",
    }
)


def get_content_type(headers: Optional[Mapping[str, Any]]) -> Optional[str]:
    """Look up ``Content-Type`` regardless of the header key's case."""
    if not headers:
        return None
    return freeze_headers(headers).get("Content-Type")


def is_json_content_type(content_type: Optional[str]) -> bool:
    """
    Check whether a content type denotes a JSON GraphQL response.

    Parameters such as ``charset`` are ignored and the comparison is
    case-insensitive.
    """
    if not content_type:
        return False
    mime_type = content_type.split(";", 1)[0].strip().lower()
    return mime_type in JSON_MIME_TYPES


async def parse_response_body(response: FetchResponse, serializer: Any) -> Any:
    """
    Read and parse a response body.

    JSON content types are parsed as JSON. Missing or unrecognized content
    types are parsed as JSON too when possible. A body that cannot be
    parsed is returned as its raw text.
    """
    content_type = get_content_type(response.headers)
    text = await resolve(response.text())
    if not is_json_content_type(content_type):
        logger.debug("Unrecognized content type %r, attempting JSON parse", content_type)

    try:
        return serializer.loads(text)
    except (TypeError, ValueError):
        logger.debug("Response body is not JSON (status %s)", response.status)
        return text


def _envelope(body: Any, status: int, headers: Any) -> GraphQLResponse:
    if isinstance(body, Mapping):
        return GraphQLResponse(
            status=status,
            headers=headers,
            data=body.get("data"),
            errors=body.get("errors"),
            extensions=body.get("extensions"),
        )
    # Raw text or an unexpected JSON value stands in for the error detail.
    return GraphQLResponse(status=status, headers=headers, errors=body)


def classify_response(
    body: Any,
    status: int,
    headers: Optional[Mapping[str, Any]],
    request: GraphQLRequestContext,
    error_policy: ErrorPolicy = ErrorPolicy.NONE,
    url: Optional[str] = None,
) -> GraphQLResponse:
    """
    Classify the parsed body of a single operation.

    Returns:
        The response envelope

    Raises:
        ClientError: On a non-2xx status, a body without ``data``, or
            GraphQL ``errors`` under ``ErrorPolicy.NONE``
    """
    envelope = _envelope(body, status, freeze_headers(headers))
    # An explicit `"data": null` counts as received, so a fully failed
    # operation is returned under the ALL and IGNORE policies.
    received_data = isinstance(body, Mapping) and "data" in body
    errors_allowed = not envelope.has_errors or error_policy != ErrorPolicy.NONE

    if not (envelope.is_success_status and received_data and errors_allowed):
        logger.debug("GraphQL request failed with status %s", status)
        raise ClientError(envelope, request, url=url)

    if error_policy == ErrorPolicy.IGNORE:
        envelope.errors = None
    return envelope


def classify_batch_response(
    body: Any,
    status: int,
    headers: Optional[Mapping[str, Any]],
    request: GraphQLRequestContext,
    error_policy: ErrorPolicy = ErrorPolicy.NONE,
    url: Optional[str] = None,
    expected: Optional[int] = None,
) -> List[GraphQLResponse]:
    """
    Classify the parsed body of a batched request.

    Item-level GraphQL errors are kept on each envelope; only a non-2xx
    status, a body that is not a JSON array, or an array whose length is
    not ``expected`` raises.

    Raises:
        ClientError: If the batch as a whole failed
    """
    frozen = freeze_headers(headers)
    if not (200 <= status < 300 and isinstance(body, list)):
        logger.debug("GraphQL batch request failed with status %s", status)
        raise ClientError(_envelope(body, status, frozen), request, url=url)

    if expected is not None and len(body) != expected:
        logger.debug("GraphQL batch returned %d results for %d operations", len(body), expected)
        mismatch = GraphQLResponse(
            status=status,
            headers=frozen,
            data=body,
            errors=[{"message": f"Expected {expected} batch results, received {len(body)}"}],
        )
        raise ClientError(mismatch, request, url=url)

    results = [_envelope(item, status, frozen) for item in body]
    if error_policy == ErrorPolicy.IGNORE:
        for result in results:
            result.errors = None
    return results
