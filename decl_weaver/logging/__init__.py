"""Logging infrastructure for decl-weaver.

@public

Key components:
    get_weaver_logger: Factory function for creating package loggers
    setup_logging: Initialize logging configuration from YAML
    LoggingConfig: Configuration class for logging settings

Example:
    >>> from decl_weaver.logging import get_weaver_logger
    >>>
    >>> logger = get_weaver_logger(__name__)
    >>> logger.info("Tree built")

Note:
    Never import Python's logging module directly. Always use
    get_weaver_logger() for consistent Prefect integration.
"""

from .logging_config import LoggingConfig, get_weaver_logger, setup_logging

__all__ = [
    "LoggingConfig",
    "setup_logging",
    "get_weaver_logger",
]
