"""
Tests for payload and request assembly.
"""

import json
from urllib.parse import parse_qs, urlsplit

from graphql_fetch.builder import (
    DEFAULT_ACCEPT,
    build_get_params,
    build_payload,
    build_request_init,
    merge_headers,
)
from graphql_fetch.config.models import HTTPMethod


class TestBuildPayload:
    def test_minimal(self):
        assert build_payload("{ a }") == {"query": "{ a }"}

    def test_full(self):
        assert build_payload("query A { a }", {"x": 1}, "A") == {
            "query": "query A { a }",
            "variables": {"x": 1},
            "operationName": "A",
        }

    def test_empty_variables_are_kept(self):
        assert build_payload("{ a }", {}) == {"query": "{ a }", "variables": {}}


class TestMergeHeaders:
    def test_later_sources_win_case_insensitively(self):
        merged = merge_headers({"Content-Type": "application/json"}, {"content-type": "text/plain"})

        assert len(merged) == 1
        assert list(merged.values()) == ["text/plain"]

    def test_skips_empty_sources(self):
        assert merge_headers(None, {}, {"A": "1"}) == {"A": "1"}

    def test_values_are_strings(self):
        assert merge_headers({"X-Count": 3}) == {"X-Count": "3"}


class TestBuildRequestInit:
    def test_post(self):
        init = build_request_init(
            "https://api.example.com/graphql",
            build_payload("query A { a }", {"x": 1}, "A"),
            headers=({"X-Client": "1"}, None),
            serializer=json,
            fetch_options={"timeout": 5},
        )

        assert init.method == "POST"
        assert init.url == "https://api.example.com/graphql"
        assert json.loads(init.body) == {"query": "query A { a }", "variables": {"x": 1}, "operationName": "A"}
        assert init.headers == {
            "Accept": DEFAULT_ACCEPT,
            "Content-Type": "application/json",
            "X-Client": "1",
        }
        assert init.operation_name == "A"
        assert init.variables == {"x": 1}
        assert init.to_fetch_init() == {
            "timeout": 5,
            "method": "POST",
            "headers": init.headers,
            "body": init.body,
        }

    def test_batch_body_is_array(self):
        payload = [build_payload("query A { a }", None, "A"), build_payload("{ b }", {"y": 2})]

        init = build_request_init("https://api.example.com/graphql", payload, serializer=json)

        assert json.loads(init.body) == payload
        assert init.operation_name == ["A", None]
        assert init.variables == [None, {"y": 2}]

    def test_get_keeps_existing_query_string(self):
        init = build_request_init(
            "https://api.example.com/graphql?tenant=acme",
            build_payload("{ a }"),
            method=HTTPMethod.GET,
            serializer=json,
        )

        params = parse_qs(urlsplit(init.url).query)
        assert params == {"tenant": ["acme"], "query": ["{ a }"]}
        assert init.body is None
        assert "body" not in init.to_fetch_init()


class TestBuildGetParams:
    def test_batch_params_are_json_arrays(self):
        payload = [build_payload("{ a }", {"x": 1}), build_payload("{ b }")]

        params = build_get_params(payload, json)

        assert json.loads(params["query"]) == ["{ a }", "{ b }"]
        assert json.loads(params["variables"]) == [{"x": 1}, None]
