"""
Convenience functions for one-off GraphQL calls.

Each function builds an ephemeral ``GraphQLClient`` for a single call, so
no client instance or session has to be managed by the caller.
"""

from __future__ import annotations

from typing import Any, Iterable, List, Mapping, Optional

from .client import BatchItemInput, GraphQLClient
from .models import GraphQLDocument, GraphQLResponse, Variables


async def request(
    url: str,
    document: GraphQLDocument,
    variables: Optional[Variables] = None,
    *,
    headers: Optional[Mapping[str, str]] = None,
    **options: Any,
) -> Any:
    """
    Send one operation to ``url`` and return its ``data``.

    Args:
        url: GraphQL endpoint URL
        document: Query string or parsed document
        variables: Operation variables
        headers: Request headers
        **options: ClientConfig fields or pass-through transport options

    Raises:
        ClientError: If the response carries errors or a non-2xx status

    Example:
        ```python
        data = await request("https://api.example.com/graphql", "{ me { id } }")
        ```
    """
    client = GraphQLClient(url, **options)
    return await client.request(document, variables, headers=headers)


async def raw_request(
    url: str,
    document: GraphQLDocument,
    variables: Optional[Variables] = None,
    *,
    headers: Optional[Mapping[str, str]] = None,
    **options: Any,
) -> GraphQLResponse:
    """Send one operation to ``url`` and return the full response envelope."""
    client = GraphQLClient(url, **options)
    return await client.raw_request(document, variables, headers=headers)


async def batch_requests(
    url: str,
    items: Iterable[BatchItemInput],
    *,
    headers: Optional[Mapping[str, str]] = None,
    **options: Any,
) -> List[GraphQLResponse]:
    """Send a batch of operations to ``url`` in a single HTTP request."""
    client = GraphQLClient(url, **options)
    return await client.batch_requests(items, headers=headers)
