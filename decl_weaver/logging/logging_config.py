"""Centralized logging configuration for decl-weaver.

@public

Loggers are obtained from Prefect's ``get_logger`` and therefore live under
the ``prefect`` logger hierarchy: ``get_weaver_logger("decl_weaver.tree.merge")``
returns the ``prefect.decl_weaver.tree.merge`` logger. The default
configuration and any YAML file address them by those full names.

Usage:
    >>> from decl_weaver.logging import get_weaver_logger
    >>> logger = get_weaver_logger(__name__)
    >>> logger.debug("Merging namespace Foo")

Environment variables:
    DECL_WEAVER_LOGGING_CONFIG: Path to custom logging.yml
    DECL_WEAVER_LOG_LEVEL: Level of every decl_weaver logger in the default configuration
    PREFECT_LOGGING_SETTINGS_PATH: Alternative config path
"""

import logging.config
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from prefect.logging import get_logger

from decl_weaver.exceptions import LoggingConfigError

# Package loggers and their default levels
DEFAULT_LOG_LEVELS = {
    "decl_weaver": "INFO",
    "decl_weaver.tree": "INFO",
    "decl_weaver.render": "INFO",
}


def prefect_logger_name(name: str) -> str:
    """Full logger name Prefect's get_logger() registers ``name`` under."""
    return name if name == "prefect" or name.startswith("prefect.") else f"prefect.{name}"


class LoggingConfig:
    """Loads and applies a dictConfig for decl-weaver's loggers.

    @public

    Configuration precedence:
        1. Explicit config_path parameter
        2. DECL_WEAVER_LOGGING_CONFIG environment variable
        3. PREFECT_LOGGING_SETTINGS_PATH environment variable
        4. Default configuration (console handler on stderr)

    A path that does not exist falls back to the default configuration.
    The loaded configuration is cached on the instance.
    """

    def __init__(self, config_path: Optional[Path] = None):
        self.config_path = config_path or self._path_from_env()
        self._config: Optional[Dict[str, Any]] = None

    @staticmethod
    def _path_from_env() -> Optional[Path]:
        for variable in ("DECL_WEAVER_LOGGING_CONFIG", "PREFECT_LOGGING_SETTINGS_PATH"):
            if value := os.environ.get(variable):
                return Path(value)
        return None

    def load_config(self) -> Dict[str, Any]:
        """Return the dictConfig mapping, reading the YAML file on first use.

        Raises:
            LoggingConfigError: The file does not hold a mapping with a
                ``version`` key.
        """
        if self._config is None:
            if self.config_path and self.config_path.exists():
                self._config = self._read_file(self.config_path)
            else:
                self._config = self.default_config()
        return self._config

    @staticmethod
    def _read_file(path: Path) -> Dict[str, Any]:
        with open(path, "r") as f:
            loaded = yaml.safe_load(f)
        if not isinstance(loaded, dict) or "version" not in loaded:
            raise LoggingConfigError(f"Logging config {path} must be a mapping with a 'version' key")
        return loaded

    @staticmethod
    def default_config() -> Dict[str, Any]:
        """Console logging for the decl_weaver loggers only.

        Format: "HH:MM:SS.mmm | LEVEL | logger.name - message". Every
        package logger gets DECL_WEAVER_LOG_LEVEL when set, else its entry
        in DEFAULT_LOG_LEVELS.
        """
        override = os.environ.get("DECL_WEAVER_LOG_LEVEL")
        package = prefect_logger_name("decl_weaver")
        loggers: Dict[str, Any] = {
            prefect_logger_name(name): {"level": override or level} for name, level in DEFAULT_LOG_LEVELS.items()
        }
        loggers[package] |= {"handlers": ["console"], "propagate": False}
        return {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "standard": {
                    "format": "%(asctime)s.%(msecs)03d | %(levelname)-7s | %(name)s - %(message)s",
                    "datefmt": "%H:%M:%S",
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "standard",
                    "stream": "ext://sys.stderr",
                },
            },
            "loggers": loggers,
        }

    def apply(self) -> None:
        logging.config.dictConfig(self.load_config())


_logging_config: Optional[LoggingConfig] = None


def setup_logging(config_path: Optional[Path] = None, level: Optional[str] = None) -> None:
    """Configure decl-weaver logging.

    @public

    Args:
        config_path: Optional YAML dictConfig file. If None, environment
                     variables or the default configuration are used.
        level: Optional level applied to every package logger afterwards.

    Example:
        >>> setup_logging(level="DEBUG")
    """
    global _logging_config

    _logging_config = LoggingConfig(config_path)
    _logging_config.apply()

    if level:
        for name in DEFAULT_LOG_LEVELS:
            get_logger(name).setLevel(level)


def get_weaver_logger(name: str):
    """Return the Prefect logger for ``name``, configuring logging on first use.

    @public

    Example:
        >>> logger = get_weaver_logger(__name__)
        >>> logger.info("Rendering started")
    """
    if _logging_config is None:
        setup_logging()

    return get_logger(name)
