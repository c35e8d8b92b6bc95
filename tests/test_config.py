"""
Tests for configuration models.
"""

import json

import pytest
from pydantic import ValidationError

from graphql_fetch import ClientConfig, ErrorPolicy, GraphQLClient, HTTPMethod
from graphql_fetch.client import split_options


class TestClientConfig:
    def test_defaults(self):
        config = ClientConfig(endpoint="https://api.example.com/graphql")

        assert config.headers == {}
        assert config.method == HTTPMethod.POST
        assert config.error_policy == ErrorPolicy.NONE
        assert config.request_middleware == ()
        assert config.response_middleware == ()
        assert config.fetch is None
        assert config.json_serializer is json

    def test_is_frozen(self):
        config = ClientConfig(endpoint="https://api.example.com/graphql")

        with pytest.raises(ValidationError):
            config.endpoint = "https://other.example.com"

    @pytest.mark.parametrize("endpoint", ["", "   "])
    def test_rejects_blank_endpoint(self, endpoint):
        with pytest.raises(ValidationError):
            ClientConfig(endpoint=endpoint)

    def test_rejects_unknown_fields(self):
        with pytest.raises(ValidationError):
            ClientConfig(endpoint="https://api.example.com/graphql", retries=3)

    def test_single_middleware_becomes_tuple(self):
        def middleware(req):
            return req

        config = ClientConfig(endpoint="https://x", request_middleware=middleware)

        assert config.request_middleware == (middleware,)

    def test_rejects_serializer_without_codec(self):
        with pytest.raises(ValidationError):
            ClientConfig(endpoint="https://x", json_serializer=object())

    def test_with_updates_returns_validated_copy(self):
        config = ClientConfig(endpoint="https://x", headers={"A": "1"})

        updated = config.with_updates(headers={"B": "2"})

        assert config.headers == {"A": "1"}
        assert updated.headers == {"B": "2"}
        with pytest.raises(ValidationError):
            config.with_updates(endpoint="")


class TestClientOptions:
    def test_split_options(self):
        config_fields, fetch_options = split_options(
            {"headers": {"A": "1"}, "credentials": "include", "timeout": 10}
        )

        assert config_fields == {"headers": {"A": "1"}}
        assert fetch_options == {"credentials": "include", "timeout": 10}

    def test_client_merges_base_config(self):
        base = ClientConfig(endpoint="https://base", headers={"A": "1"}, fetch_options={"ssl": False})

        client = GraphQLClient("https://override", config=base, cache="reload")

        assert client.endpoint == "https://override"
        assert client.config.headers == {"A": "1"}
        assert client.config.fetch_options == {"ssl": False, "cache": "reload"}
