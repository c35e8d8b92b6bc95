"""
GraphQL client implementation.

This module provides the stateful client that ties the request builder,
middleware chain, transport adapter and response classifier together.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from .builder import build_payload, build_request_init
from .classifier import classify_batch_response, classify_response, parse_response_body
from .config.models import ClientConfig
from .documents import resolve_request_document
from .exceptions import ConfigurationError
from .middleware import apply_request_middleware, notify_response_middleware
from .models import (
    BatchRequestItem,
    GraphQLDocument,
    GraphQLRequestContext,
    GraphQLResponse,
    Variables,
    freeze_headers,
)
from .transport import AiohttpTransport, Fetch, resolve

logger = logging.getLogger(__name__)

BatchItemInput = Union[BatchRequestItem, Mapping[str, Any], GraphQLDocument]


def split_options(options: Mapping[str, Any]) -> Tuple[Dict[str, Any], Dict[str, Any]]:
    """Separate ``ClientConfig`` fields from pass-through transport options."""
    config_fields: Dict[str, Any] = {}
    fetch_options: Dict[str, Any] = {}
    for key, value in options.items():
        if key in ClientConfig.model_fields:
            config_fields[key] = value
        else:
            fetch_options[key] = value
    return config_fields, fetch_options


def _to_batch_item(item: BatchItemInput) -> BatchRequestItem:
    if isinstance(item, BatchRequestItem):
        return item
    if isinstance(item, Mapping):
        if "document" not in item:
            raise ConfigurationError("Batch item mappings require a 'document' key")
        variables = item.get("variables")
        return BatchRequestItem(
            document=item["document"],
            variables=dict(variables) if variables is not None else None,
        )
    return BatchRequestItem(document=item)


class GraphQLClient:
    """
    Asynchronous GraphQL client.

    The client holds an immutable ``ClientConfig``; the ``set_*`` methods
    swap in an updated copy, so calls already in flight are unaffected.
    Options that are not ``ClientConfig`` fields (``timeout``, ``ssl``,
    ``credentials``, ...) are passed through to the transport.

    Examples:
        Basic query:
        ```python
        client = GraphQLClient("https://api.example.com/graphql")
        data = await client.request("{ me { id } }")
        ```

        Full envelope with response headers:
        ```python
        response = await client.raw_request(
            "query GetUser($id: ID!) { user(id: $id) { name } }",
            {"id": "123"},
        )
        print(response.status, response.headers.get("X-Request-Id"))
        ```

        Reusing one aiohttp session:
        ```python
        async with GraphQLClient(url, headers={"Authorization": "Bearer ..."}) as client:
            results = await client.batch_requests([
                {"document": "{ a }"},
                {"document": "query B($n: Int) { b(n: $n) }", "variables": {"n": 1}},
            ])
        ```
    """

    def __init__(self, url: str, config: Optional[ClientConfig] = None, **options: Any) -> None:
        """
        Initialize GraphQL client.

        Args:
            url: GraphQL endpoint URL
            config: Optional base configuration; ``url`` and ``options`` override it
            **options: ClientConfig fields or pass-through transport options
        """
        config_fields, fetch_options = split_options(options)
        if config is None:
            config = ClientConfig(endpoint=url, **config_fields)
        else:
            config = config.with_updates(endpoint=url, **config_fields)
        if fetch_options:
            config = config.with_updates(
                fetch_options={**config.fetch_options, **fetch_options}
            )
        self.config = config
        self._transport: Optional[AiohttpTransport] = None

    async def __aenter__(self) -> "GraphQLClient":
        if self.config.fetch is None and self._transport is None:
            self._transport = AiohttpTransport()
            await self._transport.__aenter__()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the aiohttp session opened by ``async with``, if any."""
        if self._transport is not None:
            await self._transport.close()
            self._transport = None

    @property
    def endpoint(self) -> str:
        return self.config.endpoint

    def set_endpoint(self, url: str) -> "GraphQLClient":
        """Change the endpoint for subsequent calls."""
        self.config = self.config.with_updates(endpoint=url)
        return self

    def set_headers(self, headers: Union[Mapping[str, str], Any]) -> "GraphQLClient":
        """Replace the client headers (a mapping or a callable returning one)."""
        self.config = self.config.with_updates(headers=headers)
        return self

    def set_header(self, key: str, value: str) -> "GraphQLClient":
        """
        Set a single client header.

        Raises:
            ConfigurationError: If the client headers are provided by a callable
        """
        if callable(self.config.headers):
            raise ConfigurationError("Cannot set a header when headers are provided by a callable")
        headers = dict(self.config.headers)
        for existing in [name for name in headers if name.lower() == key.lower()]:
            del headers[existing]
        headers[key] = value
        self.config = self.config.with_updates(headers=headers)
        return self

    async def request(
        self,
        document: GraphQLDocument,
        variables: Optional[Variables] = None,
        *,
        headers: Optional[Mapping[str, str]] = None,
    ) -> Any:
        """
        Execute an operation and return its ``data``.

        Args:
            document: Query string or parsed document
            variables: Operation variables
            headers: Per-call headers merged over the client headers

        Returns:
            The ``data`` member of the response

        Raises:
            ClientError: If the response carries errors or a non-2xx status
        """
        response = await self.raw_request(document, variables, headers=headers)
        return response.data

    async def raw_request(
        self,
        document: GraphQLDocument,
        variables: Optional[Variables] = None,
        *,
        headers: Optional[Mapping[str, str]] = None,
    ) -> GraphQLResponse:
        """
        Execute an operation and return the full response envelope.

        Returns:
            GraphQLResponse with data, errors, extensions, status and headers

        Raises:
            ClientError: If the response carries errors or a non-2xx status
        """
        config = self.config
        query, operation_name = resolve_request_document(document)
        variables = dict(variables) if variables is not None else None
        payload = build_payload(query, variables, operation_name)
        context = GraphQLRequestContext(query=query, variables=variables)
        outcome = await self._execute(config, payload, context, headers, batch=False)
        return outcome  # type: ignore[return-value]

    async def batch_requests(
        self,
        items: Iterable[BatchItemInput],
        *,
        headers: Optional[Mapping[str, str]] = None,
    ) -> List[GraphQLResponse]:
        """
        Send several operations in one HTTP request.

        Args:
            items: BatchRequestItem objects, ``{"document", "variables"}``
                mappings or bare documents
            headers: Per-call headers merged over the client headers

        Returns:
            One GraphQLResponse per item, in input order. GraphQL errors of
            individual items are kept on their envelope.

        Raises:
            ConfigurationError: If ``items`` is empty or malformed
            ClientError: If the batch as a whole failed
        """
        config = self.config
        batch = [_to_batch_item(item) for item in items]
        if not batch:
            raise ConfigurationError("batch_requests requires at least one item")

        payload: List[Dict[str, Any]] = []
        queries: List[str] = []
        for item in batch:
            query, operation_name = resolve_request_document(item.document)
            queries.append(query)
            payload.append(build_payload(query, item.variables, operation_name))

        variables = [item.variables for item in batch]
        context = GraphQLRequestContext(
            query=queries,
            variables=variables if any(v is not None for v in variables) else None,
        )
        outcome = await self._execute(config, payload, context, headers, batch=True)
        return outcome  # type: ignore[return-value]

    def _fetch(self, config: ClientConfig) -> Fetch:
        if config.fetch is not None:
            return config.fetch
        if self._transport is not None:
            return self._transport
        return AiohttpTransport()

    async def _resolve_client_headers(self, config: ClientConfig) -> Mapping[str, Any]:
        if callable(config.headers):
            return await resolve(config.headers()) or {}
        return config.headers

    async def _execute(
        self,
        config: ClientConfig,
        payload: Any,
        context: GraphQLRequestContext,
        headers: Optional[Mapping[str, str]],
        *,
        batch: bool,
    ) -> Union[GraphQLResponse, List[GraphQLResponse]]:
        try:
            client_headers = await self._resolve_client_headers(config)
            init = build_request_init(
                config.endpoint,
                payload,
                method=config.method,
                headers=(client_headers, headers),
                serializer=config.json_serializer,
                fetch_options=config.fetch_options,
            )
            init = await apply_request_middleware(config.request_middleware, init)

            logger.debug(
                "Sending GraphQL %s %s (operation: %s)",
                init.method,
                init.url,
                init.operation_name,
            )
            response = await resolve(self._fetch(config)(init.url, init.to_fetch_init()))
            body = await parse_response_body(response, config.json_serializer)

            result: Union[GraphQLResponse, List[GraphQLResponse]]
            if batch:
                result = classify_batch_response(
                    body,
                    response.status,
                    response.headers,
                    context,
                    config.error_policy,
                    url=init.url,
                    expected=len(payload),
                )
                observed = GraphQLResponse(
                    status=response.status,
                    headers=freeze_headers(response.headers),
                    data=body,
                )
            else:
                result = classify_response(
                    body, response.status, response.headers, context, config.error_policy, url=init.url
                )
                observed = result
        except Exception as exc:
            logger.debug("GraphQL call to %s failed: %s", config.endpoint, type(exc).__name__)
            try:
                await notify_response_middleware(config.response_middleware, exc)
            except Exception:
                logger.exception("Response middleware failed while handling %s", type(exc).__name__)
            raise exc

        await notify_response_middleware(config.response_middleware, observed)
        return result
