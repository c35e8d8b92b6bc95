"""
Logging manager for graphql_fetch.

Configures handlers on the ``graphql_fetch`` logger only, so applications
embedding the client keep control of the root logger.
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Dict, Optional

from ..config.models import LoggingConfig, LogLevel
from .filters import ComponentFilter, SensitiveDataFilter
from .formatters import ColoredFormatter, StructuredFormatter

PACKAGE_LOGGER = "graphql_fetch"


class LoggingManager:
    """Centralized logging manager."""

    def __init__(self, logger_name: str = PACKAGE_LOGGER) -> None:
        """
        Initialize logging manager.

        Args:
            logger_name: Logger the handlers are attached to
        """
        self.logger_name = logger_name
        self._configured = False
        self._handlers: Dict[str, logging.Handler] = {}

    @property
    def logger(self) -> logging.Logger:
        return logging.getLogger(self.logger_name)

    def setup_logging(self, config: LoggingConfig) -> None:
        """
        Setup logging based on configuration.

        Args:
            config: Logging configuration
        """
        if self._configured:
            self.cleanup()

        self.logger.setLevel(getattr(logging, config.level.value))

        if config.enable_console:
            self._setup_console_handler(config)

        if config.enable_file and config.file_path:
            self._setup_file_handler(config)

        self._setup_component_loggers(config)

        self._configured = True
        self.logger.debug("Logging configured for %s", self.logger_name)

    def _formatter(self, config: LoggingConfig, colored: bool) -> logging.Formatter:
        if config.enable_structured:
            return StructuredFormatter()
        if colored:
            return ColoredFormatter(config.format)
        return logging.Formatter(config.format)

    def _add_handler(self, name: str, handler: logging.Handler, config: LoggingConfig) -> None:
        handler.setLevel(getattr(logging, config.level.value))
        if config.mask_sensitive_data:
            handler.addFilter(SensitiveDataFilter())
        self.logger.addHandler(handler)
        self._handlers[name] = handler

    def _setup_console_handler(self, config: LoggingConfig) -> None:
        """Setup console logging handler."""
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(self._formatter(config, colored=True))
        self._add_handler("console", handler, config)

    def _setup_file_handler(self, config: LoggingConfig) -> None:
        """Setup rotating file logging handler."""
        log_path = Path(str(config.file_path))
        log_path.parent.mkdir(parents=True, exist_ok=True)

        handler = logging.handlers.RotatingFileHandler(
            filename=str(log_path),
            maxBytes=config.max_file_size,
            backupCount=config.backup_count,
            encoding="utf-8",
        )
        handler.setFormatter(self._formatter(config, colored=False))
        self._add_handler("file", handler, config)

    def _setup_component_loggers(self, config: LoggingConfig) -> None:
        """Apply per-component levels, e.g. ``{"graphql_fetch.transport": DEBUG}``."""
        for component, level in config.component_levels.items():
            logging.getLogger(component).setLevel(getattr(logging, level.value))

    def add_component_filter(self, component: str) -> None:
        """Only let records from ``component`` through the managed handlers."""
        component_filter = ComponentFilter(component)
        for handler in self._handlers.values():
            handler.addFilter(component_filter)

    def set_level(self, level: LogLevel, component: Optional[str] = None) -> None:
        """
        Set logging level.

        Args:
            level: New logging level
            component: Specific component (None for the package logger)
        """
        log_level = getattr(logging, level.value)

        if component:
            logging.getLogger(component).setLevel(log_level)
            return

        self.logger.setLevel(log_level)
        for handler in self._handlers.values():
            handler.setLevel(log_level)

    def cleanup(self) -> None:
        """Remove and close the handlers this manager installed."""
        for handler in self._handlers.values():
            self.logger.removeHandler(handler)
            handler.close()
        self._handlers.clear()
        self._configured = False

    @property
    def handlers(self) -> Dict[str, logging.Handler]:
        return dict(self._handlers)

    def is_configured(self) -> bool:
        """Check if logging is configured."""
        return self._configured


# Global logging manager instance
_logging_manager = LoggingManager()


def setup_logging(config: Optional[LoggingConfig] = None) -> LoggingManager:
    """
    Setup logging for graphql_fetch.

    Args:
        config: Logging configuration (defaults apply when None)

    Returns:
        The global LoggingManager
    """
    _logging_manager.setup_logging(config or LoggingConfig())
    return _logging_manager


def get_logger(name: str) -> logging.Logger:
    """Get logger for a graphql_fetch component."""
    return logging.getLogger(name)
