"""
Configuration for graphql_fetch.

This module exposes the pydantic models used to configure clients and the
logging layer.
"""

from .models import (
    ClientConfig,
    ErrorPolicy,
    HTTPMethod,
    LoggingConfig,
    LogLevel,
)

__all__ = [
    "ClientConfig",
    "ErrorPolicy",
    "HTTPMethod",
    "LoggingConfig",
    "LogLevel",
]
