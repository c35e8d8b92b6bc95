#!/usr/bin/env python3
"""
Basic usage examples for the graphql_fetch library.

This script runs queries against the public countries API using the
one-off helpers, a long-lived client, middleware and batching.
"""

import asyncio
import json
import time

from graphql_fetch import (
    ClientError,
    ErrorPolicy,
    GraphQLClient,
    LoggingConfig,
    LogLevel,
    gql,
    request,
)
from graphql_fetch.logging import setup_logging

ENDPOINT = "https://countries.trevorblades.com/graphql"

COUNTRY_QUERY = gql(
    """
    query GetCountry($code: ID!) {
      country(code: $code) {
        name
        capital
        currency
      }
    }
    """
)


async def example_one_off_request() -> None:
    """Example: Send a single query without keeping a client around."""
    print("=== One-off Request ===\n")

    data = await request(ENDPOINT, COUNTRY_QUERY, {"code": "NO"})
    print(json.dumps(data, indent=2))
    print()


async def example_client_with_middleware() -> None:
    """Example: Reuse a client and time every call with middleware."""
    print("=== Client With Middleware ===\n")

    started = {}

    def stamp(req):
        started[req.operation_name] = time.perf_counter()
        return req

    def report(outcome):
        if isinstance(outcome, Exception):
            print(f"  failed: {outcome!r}")
        else:
            print(f"  status {outcome.status}")

    async with GraphQLClient(
        ENDPOINT,
        headers={"X-Example": "basic-usage"},
        request_middleware=[stamp],
        response_middleware=[report],
    ) as client:
        for code in ("SE", "FI"):
            data = await client.request(COUNTRY_QUERY, {"code": code})
            elapsed = time.perf_counter() - started["GetCountry"]
            print(f"{code}: {data['country']['name']} ({elapsed:.2f}s)")
    print()


async def example_error_handling() -> None:
    """Example: Inspect a ClientError and relax the error policy."""
    print("=== Error Handling ===\n")

    broken = "{ country(code: \"NO\") { name population } }"
    try:
        await request(ENDPOINT, broken)
    except ClientError as e:
        print(f"HTTP status: {e.status}")
        print(f"First error: {e.response.errors[0]['message']}")

    # Non-2xx responses raise under every policy
    client = GraphQLClient(ENDPOINT, error_policy=ErrorPolicy.ALL)
    try:
        response = await client.raw_request(broken)
        print(f"With error policy 'all': data={response.data} errors={len(response.errors or [])}")
    except ClientError as e:
        print(f"Still rejected with status {e.status}")
    print()


async def example_batch() -> None:
    """Example: Send several operations in one HTTP request."""
    print("=== Batch Requests ===\n")

    client = GraphQLClient(ENDPOINT)
    try:
        results = await client.batch_requests(
            [
                {"document": COUNTRY_QUERY, "variables": {"code": "DK"}},
                {"document": "{ continents { code } }"},
            ]
        )
    except ClientError as e:
        # Not every server accepts batched operations
        print(f"Batching rejected with status {e.status}")
        return

    for result in results:
        print(f"data={result.data} errors={result.errors}")
    print()


async def main() -> None:
    """Run all examples."""
    print("GraphQL Fetch Library - Usage Examples")
    print("=" * 50)
    print()

    setup_logging(LoggingConfig(level=LogLevel.INFO))

    try:
        await example_one_off_request()
        await example_client_with_middleware()
        await example_error_handling()
        await example_batch()

        print("All examples completed successfully!")

    except Exception as e:
        print(f"Error running examples: {e}")


if __name__ == "__main__":
    asyncio.run(main())
