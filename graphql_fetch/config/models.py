"""
Configuration models for graphql_fetch.

This module defines the client and logging configuration models with
validation and defaults.
"""

from __future__ import annotations

import json
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class HTTPMethod(str, Enum):
    """HTTP methods a GraphQL operation can be sent with."""

    POST = "POST"
    GET = "GET"


class ErrorPolicy(str, Enum):
    """
    How GraphQL ``errors`` in a successful HTTP response are treated.

    NONE raises ``ClientError``; IGNORE returns data and drops the errors;
    ALL returns data and keeps the errors on the envelope.
    """

    NONE = "none"
    IGNORE = "ignore"
    ALL = "all"


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(default=LogLevel.INFO, description="Default logging level")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log message format",
    )
    file_path: Optional[Path] = Field(default=None, description="Log file path")
    max_file_size: int = Field(
        default=10 * 1024 * 1024, description="Max log file size in bytes"
    )
    backup_count: int = Field(default=5, description="Number of backup log files")
    enable_console: bool = Field(default=True, description="Enable console logging")
    enable_file: bool = Field(default=False, description="Enable file logging")
    enable_structured: bool = Field(
        default=False, description="Enable structured JSON logging"
    )
    mask_sensitive_data: bool = Field(
        default=True, description="Mask tokens and credentials in log messages"
    )

    # Component-specific log levels
    component_levels: Dict[str, LogLevel] = Field(
        default_factory=dict, description="Per-component log levels"
    )


HeadersInit = Union[Dict[str, str], Callable[[], Any]]


class ClientConfig(BaseModel):
    """
    Configuration for a GraphQL client.

    Instances are frozen; ``GraphQLClient`` setters replace the whole
    config with an updated copy so in-flight calls keep the config they
    started with.
    """

    endpoint: str = Field(description="GraphQL endpoint URL")
    headers: HeadersInit = Field(
        default_factory=dict,
        description="Default headers, or a callable returning them per request",
    )
    method: HTTPMethod = Field(default=HTTPMethod.POST, description="HTTP method")
    error_policy: ErrorPolicy = Field(
        default=ErrorPolicy.NONE, description="Handling of GraphQL errors"
    )

    # Middleware
    request_middleware: Tuple[Callable[..., Any], ...] = Field(
        default=(), description="Callables applied to each outgoing request"
    )
    response_middleware: Tuple[Callable[..., Any], ...] = Field(
        default=(), description="Callables notified with each result or error"
    )

    # Transport
    fetch: Optional[Callable[..., Any]] = Field(
        default=None, description="Custom fetch-compatible transport"
    )
    fetch_options: Dict[str, Any] = Field(
        default_factory=dict, description="Options passed through to the transport"
    )
    json_serializer: Any = Field(
        default=json, description="Object providing dumps() and loads()"
    )

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        arbitrary_types_allowed=True,
    )

    @field_validator("endpoint")
    @classmethod
    def endpoint_not_empty(cls, v: str) -> str:
        """Reject blank endpoints."""
        if not v or not v.strip():
            raise ValueError("endpoint must not be empty")
        return v.strip()

    @field_validator("headers", mode="before")
    @classmethod
    def normalize_headers(cls, v: Any) -> Any:
        """Copy header mappings into a plain dict."""
        if v is None:
            return {}
        if isinstance(v, Mapping):
            return {str(key): str(value) for key, value in v.items()}
        return v

    @field_validator("request_middleware", "response_middleware", mode="before")
    @classmethod
    def normalize_middleware(cls, v: Any) -> Tuple[Callable[..., Any], ...]:
        """Accept a single callable or a sequence of callables."""
        if v is None:
            return ()
        if callable(v):
            return (v,)
        return tuple(v)

    @field_validator("json_serializer")
    @classmethod
    def serializer_has_codec(cls, v: Any) -> Any:
        """Ensure the serializer exposes dumps() and loads()."""
        if not (callable(getattr(v, "dumps", None)) and callable(getattr(v, "loads", None))):
            raise ValueError("json_serializer must provide dumps() and loads()")
        return v

    def with_updates(self, **changes: Any) -> "ClientConfig":
        """Return a validated copy with ``changes`` applied."""
        values = dict(self)
        values.update(changes)
        return type(self)(**values)
