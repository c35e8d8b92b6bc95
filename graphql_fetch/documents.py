"""
GraphQL document handling.

Documents are accepted either as source strings or as ``DocumentNode``
trees produced by graphql-core. Both forms are reduced to the query string
sent on the wire plus the name of the first operation, if it has one.
"""

from __future__ import annotations

import re
from typing import Optional, Tuple

from graphql import GraphQLSyntaxError, parse, print_ast
from graphql.language import DocumentNode, OperationDefinitionNode

from .exceptions import ConfigurationError
from .models import GraphQLDocument

_COMMENT_RE = re.compile(r"#[^\n\r]*")
_STRING_RE = re.compile(r'"""(?:[^"\\]|\\.|"(?!""))*"""|"(?:[^"\\\n]|\\.)*"', re.DOTALL)
_OPERATION_RE = re.compile(r"(?:^|})\s*(query|mutation|subscription)\b\s*([_A-Za-z][_0-9A-Za-z]*)?")


def gql(source: str) -> DocumentNode:
    """
    Parse a GraphQL source string into a document.

    Raises:
        GraphQLSyntaxError: If ``source`` is not valid GraphQL
    """
    return parse(source)


def get_operation_name(document: DocumentNode) -> Optional[str]:
    """Return the name of the first operation definition in ``document``."""
    for definition in document.definitions:
        if isinstance(definition, OperationDefinitionNode):
            return definition.name.value if definition.name else None
    return None


def _scan_operation_name(source: str) -> Optional[str]:
    # Fallback for sources graphql-core refuses to parse.
    stripped = _STRING_RE.sub('""', source)
    stripped = _COMMENT_RE.sub("", stripped)
    match = _OPERATION_RE.search(stripped)
    if match is None:
        return None
    return match.group(2)


def extract_operation_name(source: str) -> Optional[str]:
    """Find the name of the first top-level operation in a source string."""
    try:
        document = parse(source, no_location=True)
    except GraphQLSyntaxError:
        return _scan_operation_name(source)
    return get_operation_name(document)


def resolve_request_document(document: GraphQLDocument) -> Tuple[str, Optional[str]]:
    """
    Reduce a document to ``(query, operation_name)``.

    Raises:
        ConfigurationError: If ``document`` is neither a string nor a DocumentNode
    """
    if isinstance(document, str):
        return document, extract_operation_name(document)
    if isinstance(document, DocumentNode):
        return print_ast(document), get_operation_name(document)
    raise ConfigurationError(
        f"Unsupported GraphQL document type: {type(document).__name__}"
    )
