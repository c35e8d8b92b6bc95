"""
Request assembly for GraphQL operations.

Builds the wire payload for single and batched operations and the
``RequestInit`` handed to request middleware and then to the transport.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Sequence
from urllib.parse import urlencode, urlsplit, urlunsplit

from multidict import CIMultiDict

from .config.models import HTTPMethod
from .models import RequestInit

DEFAULT_ACCEPT = "application/graphql-response+json, application/json"
JSON_CONTENT_TYPE = "application/json"


def build_payload(
    query: str,
    variables: Optional[Mapping[str, Any]] = None,
    operation_name: Optional[str] = None,
) -> Dict[str, Any]:
    """Build the ``{query, variables?, operationName?}`` body of one operation."""
    payload: Dict[str, Any] = {"query": query}
    if variables is not None:
        payload["variables"] = dict(variables)
    if operation_name:
        payload["operationName"] = operation_name
    return payload


def merge_headers(*sources: Optional[Mapping[str, Any]]) -> Dict[str, str]:
    """
    Merge header mappings case-insensitively.

    Later sources take precedence.
    """
    merged: CIMultiDict[str] = CIMultiDict()
    for source in sources:
        if not source:
            continue
        for key, value in source.items():
            merged[str(key)] = str(value)
    return dict(merged.items())


def default_headers(method: HTTPMethod) -> Dict[str, str]:
    headers = {"Accept": DEFAULT_ACCEPT}
    if method == HTTPMethod.POST:
        headers["Content-Type"] = JSON_CONTENT_TYPE
    return headers


def _with_query_params(url: str, params: Mapping[str, str]) -> str:
    parts = urlsplit(url)
    query = urlencode(params)
    if parts.query:
        query = f"{parts.query}&{query}"
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


def build_get_params(payload: Any, serializer: Any) -> Dict[str, str]:
    """
    Encode a payload as URL parameters.

    A batched payload encodes each field as a JSON array.
    """
    if isinstance(payload, list):
        params = {"query": serializer.dumps([item["query"] for item in payload])}
        if any("variables" in item for item in payload):
            params["variables"] = serializer.dumps([item.get("variables") for item in payload])
        return params

    params = {"query": payload["query"]}
    if "variables" in payload:
        params["variables"] = serializer.dumps(payload["variables"])
    if "operationName" in payload:
        params["operationName"] = payload["operationName"]
    return params


def build_request_init(
    url: str,
    payload: Any,
    *,
    method: HTTPMethod = HTTPMethod.POST,
    headers: Optional[Sequence[Optional[Mapping[str, Any]]]] = None,
    serializer: Any,
    fetch_options: Optional[Mapping[str, Any]] = None,
) -> RequestInit:
    """
    Assemble the outgoing request for a single payload or a batch.

    Args:
        url: Target endpoint
        payload: One payload dict, or a list of them for a batch
        method: POST sends a JSON body; GET encodes the payload in the URL
        headers: Header mappings merged after the defaults, lowest precedence first
        serializer: Object providing ``dumps()``
        fetch_options: Extra transport options

    Returns:
        RequestInit ready for request middleware
    """
    merged = merge_headers(default_headers(method), *(headers or ()))

    if isinstance(payload, list):
        operation_name: Any = [item.get("operationName") for item in payload]
        variables: Any = [item.get("variables") for item in payload]
    else:
        operation_name = payload.get("operationName")
        variables = payload.get("variables")

    body: Optional[str] = None
    if method == HTTPMethod.GET:
        url = _with_query_params(url, build_get_params(payload, serializer))
    else:
        body = serializer.dumps(payload)

    return RequestInit(
        url=url,
        method=method.value,
        headers=merged,
        body=body,
        operation_name=operation_name,
        variables=variables,
        fetch_options=dict(fetch_options or {}),
    )

