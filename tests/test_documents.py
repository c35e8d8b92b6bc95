"""
Tests for document resolution and operation name extraction.
"""

import pytest
from graphql import GraphQLSyntaxError
from graphql.language import DocumentNode

from graphql_fetch import ConfigurationError, gql, resolve_request_document
from graphql_fetch.documents import extract_operation_name, get_operation_name


class TestExtractOperationName:
    """Operation names from source strings."""

    @pytest.mark.parametrize(
        "source, expected",
        [
            ("query myGqlOperation { users }", "myGqlOperation"),
            ("mutation CreateUser($input: UserInput!) { createUser(input: $input) { id } }", "CreateUser"),
            ("subscription OnComment { commentAdded { id } }", "OnComment"),
            ("{ users }", None),
            ("query { users }", None),
            ("x", None),
        ],
    )
    def test_names(self, source, expected):
        assert extract_operation_name(source) == expected

    def test_first_operation_wins(self):
        source = """
            fragment UserFields on User { id }
            query First { me { ...UserFields } }
            query Second { me { id } }
        """
        assert extract_operation_name(source) == "First"

    def test_invalid_source_uses_keyword_scan(self):
        # Missing closing brace: graphql-core refuses it.
        assert extract_operation_name("query Broken { users") == "Broken"

    def test_keyword_scan_ignores_comments_and_strings(self):
        source = '# query Commented { a }\nquery Real { search(text: "query Fake") '
        assert extract_operation_name(source) == "Real"


class TestResolveRequestDocument:
    """Reduction of documents to wire query and name."""

    def test_string_document_is_sent_verbatim(self):
        source = "\n  query Named { users }\n"
        assert resolve_request_document(source) == (source, "Named")

    def test_parsed_document(self):
        document = gql("query myGqlOperation { users }")

        query, operation_name = resolve_request_document(document)

        assert isinstance(document, DocumentNode)
        assert operation_name == "myGqlOperation"
        assert "query myGqlOperation" in query
        assert "users" in query

    def test_parsed_document_without_operation(self):
        document = gql("fragment F on User { id }")
        assert get_operation_name(document) is None

    def test_unsupported_type(self):
        with pytest.raises(ConfigurationError):
            resolve_request_document(42)

    def test_gql_rejects_invalid_source(self):
        with pytest.raises(GraphQLSyntaxError):
            gql("query {")
