"""
Lightweight async GraphQL client over HTTP with AIOHTTP.

Features:
- ``request`` / ``raw_request`` / ``batch_requests`` on a client or as one-off functions
- Content-type aware response parsing (``application/json``,
  ``application/graphql+json``, ``application/graphql-response+json``)
- Structured ``ClientError`` carrying the response and the original request
- Request and response middleware, synchronous or asynchronous
- Pluggable fetch-compatible transport with an aiohttp default
- Operation name extraction from strings or graphql-core documents
"""

from .client import GraphQLClient
from .config import ClientConfig, ErrorPolicy, HTTPMethod, LoggingConfig, LogLevel
from .convenience import batch_requests, raw_request, request
from .documents import gql, resolve_request_document
from .exceptions import ClientError, ConfigurationError, GraphQLFetchError
from .models import (
    BatchRequestItem,
    GraphQLRequestContext,
    GraphQLResponse,
    RequestInit,
)
from .transport import AiohttpTransport, BufferedResponse

__all__ = [
    # Client
    "GraphQLClient",
    "request",
    "raw_request",
    "batch_requests",
    # Documents
    "gql",
    "resolve_request_document",
    # Models
    "BatchRequestItem",
    "GraphQLRequestContext",
    "GraphQLResponse",
    "RequestInit",
    # Configuration
    "ClientConfig",
    "ErrorPolicy",
    "HTTPMethod",
    "LoggingConfig",
    "LogLevel",
    # Transport
    "AiohttpTransport",
    "BufferedResponse",
    # Exceptions
    "GraphQLFetchError",
    "ClientError",
    "ConfigurationError",
]

__version__ = "0.1.0"
