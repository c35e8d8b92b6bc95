"""
Custom logging filters for graphql_fetch.

This module provides filters for masking credentials that can end up in
request logs (tokens in headers or URLs, secrets in GET query strings)
and for component-specific filtering.
"""

import logging
import re
from typing import List, Optional, Pattern, Set, Tuple

MASK = "***MASKED***"


class SensitiveDataFilter(logging.Filter):
    """Filter to mask sensitive data in log messages."""

    def __init__(self) -> None:
        """Initialize sensitive data filter."""
        super().__init__()

        self.rules: List[Tuple[Pattern[str], str]] = [
            # Bearer and basic credentials
            (re.compile(r"\b(bearer|basic)(\s+)[A-Za-z0-9._~+/=-]{8,}", re.IGNORECASE), rf"\1\2{MASK}"),
            # Header-style key/value pairs, quoted or not
            (
                re.compile(
                    r"""(["']?(?:authorization|x-api-key|api[_-]?key|token|secret|password)["']?\s*[:=]\s*["']?)"""
                    r"""(?!(?:bearer|basic)\s)([^"'\s,&}]+)""",
                    re.IGNORECASE,
                ),
                rf"\1{MASK}",
            ),
            # URLs with credentials
            (re.compile(r"(https?://[^:/\s]+):([^@/\s]+)@", re.IGNORECASE), rf"\1:{MASK}@"),
        ]

    def mask(self, message: str) -> str:
        """Return ``message`` with every sensitive value replaced."""
        for pattern, replacement in self.rules:
            message = pattern.sub(replacement, message)
        return message

    def filter(self, record: logging.LogRecord) -> bool:
        """Filter log record to mask sensitive data."""
        record.msg = self.mask(record.getMessage())
        record.args = ()
        return True


class ComponentFilter(logging.Filter):
    """Filter for component-specific logging."""

    def __init__(self, component: str, allowed_levels: Optional[Set[str]] = None) -> None:
        """
        Initialize component filter.

        Args:
            component: Logger name prefix to accept
            allowed_levels: Set of allowed log levels
        """
        super().__init__()
        self.component = component
        self.allowed_levels = allowed_levels or {
            "DEBUG",
            "INFO",
            "WARNING",
            "ERROR",
            "CRITICAL",
        }

    def filter(self, record: logging.LogRecord) -> bool:
        """Filter based on component and level."""
        if not record.name.startswith(self.component):
            return False
        return record.levelname in self.allowed_levels
