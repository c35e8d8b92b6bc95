"""
Exception hierarchy for graphql_fetch.

Transport failures raised by aiohttp or by a custom fetch callable are not
wrapped; they reach the caller unmodified. Only GraphQL-level failures and
client misconfiguration are expressed with the classes below.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, Dict, Optional

if TYPE_CHECKING:
    from .models import GraphQLRequestContext, GraphQLResponse


class GraphQLFetchError(Exception):
    """
    Base exception for all graphql_fetch errors.

    Attributes:
        message: Human-readable error message
        url: Endpoint that caused the error (if applicable)
        details: Additional error details as keyword arguments
    """

    def __init__(self, message: str, url: Optional[str] = None, **kwargs: Any) -> None:
        super().__init__(message)
        self.message = message
        self.url = url
        self.details = kwargs


class ConfigurationError(GraphQLFetchError):
    """Raised when client options or request arguments are invalid."""

    pass


class ClientError(GraphQLFetchError):
    """
    Raised when the server answers with GraphQL errors, a non-2xx status
    or a body that is not a GraphQL response.

    The full response and the original request are kept so callers can
    inspect partial ``data`` alongside ``errors``.

    Attributes:
        response: The classified response envelope
        request: The query and variables that were sent
    """

    def __init__(
        self,
        response: GraphQLResponse,
        request: GraphQLRequestContext,
        url: Optional[str] = None,
    ) -> None:
        self.response = response
        self.request = request
        message = f"{self.extract_message(response)}: {self._dump()}"
        super().__init__(message, url)

    @staticmethod
    def extract_message(response: GraphQLResponse) -> str:
        return f"GraphQL Error (Code: {response.status})"

    @property
    def status(self) -> int:
        return self.response.status

    def to_dict(self) -> Dict[str, Any]:
        return {
            "response": self.response.to_dict(),
            "request": self.request.to_dict(),
        }

    def _dump(self) -> str:
        return json.dumps(self.to_dict(), default=str, ensure_ascii=False)
