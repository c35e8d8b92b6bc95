"""
GraphQL request and response data structures.

This module defines the dataclasses passed between the request builder,
the middleware chain, the transport adapter and the response classifier.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Union

from graphql.language import DocumentNode
from multidict import CIMultiDict, CIMultiDictProxy

GraphQLDocument = Union[str, DocumentNode]
Variables = Mapping[str, Any]


def freeze_headers(headers: Optional[Mapping[str, Any]]) -> CIMultiDictProxy[str]:
    """
    Return a read-only case-insensitive view over ``headers``.

    Header objects that only support ``get()`` contribute their
    ``Content-Type``; nothing else can be enumerated from them.
    """
    if isinstance(headers, CIMultiDictProxy):
        return headers
    merged: CIMultiDict[str] = CIMultiDict()
    if headers is not None and hasattr(headers, "items"):
        for key, value in headers.items():
            merged.add(str(key), str(value))
    elif headers is not None:
        content_type = headers.get("Content-Type") or headers.get("content-type")
        if content_type is not None:
            merged.add("Content-Type", str(content_type))
    return CIMultiDictProxy(merged)


@dataclass
class BatchRequestItem:
    """One operation in a batched request."""

    document: GraphQLDocument
    variables: Optional[Dict[str, Any]] = None


@dataclass
class GraphQLRequestContext:
    """
    The original request attached to a ``ClientError``.

    For batched requests ``query`` and ``variables`` are lists holding one
    entry per batched operation.
    """

    query: Union[str, List[str]]
    variables: Optional[Any] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result: Dict[str, Any] = {"query": self.query}
        if self.variables is not None:
            result["variables"] = self.variables
        return result


@dataclass
class RequestInit:
    """
    Description of an outgoing HTTP request.

    This is the object request middleware receives and returns. Changing
    ``url`` redirects the transport call; ``fetch_options`` is forwarded to
    the transport untouched.
    """

    url: str
    method: str
    headers: Dict[str, str]
    body: Optional[str] = None
    operation_name: Optional[Union[str, List[Optional[str]]]] = None
    variables: Optional[Any] = None
    fetch_options: Dict[str, Any] = field(default_factory=dict)

    def to_fetch_init(self) -> Dict[str, Any]:
        """Build the ``init`` mapping handed to a fetch-compatible transport."""
        init: Dict[str, Any] = dict(self.fetch_options)
        init["method"] = self.method
        init["headers"] = dict(self.headers)
        if self.body is not None:
            init["body"] = self.body
        return init


@dataclass
class GraphQLResponse:
    """
    Envelope of a GraphQL HTTP response.

    ``headers`` is always a case-insensitive mapping. For batched requests
    the client returns one envelope per operation, each sharing the status
    and headers of the single HTTP response.
    """

    status: int
    headers: CIMultiDictProxy[str] = field(default_factory=lambda: freeze_headers(None))
    data: Any = None
    errors: Any = None
    extensions: Any = None

    @property
    def has_errors(self) -> bool:
        """Check if the envelope carries errors."""
        return bool(self.errors)

    @property
    def is_success_status(self) -> bool:
        return 200 <= self.status < 300

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result: Dict[str, Any] = {}
        if self.data is not None:
            result["data"] = self.data
        if self.errors is not None:
            result["errors"] = self.errors
        if self.extensions is not None:
            result["extensions"] = self.extensions
        result["status"] = self.status
        result["headers"] = dict(self.headers.items())
        return result
