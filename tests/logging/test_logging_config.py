"""Tests for logging configuration."""

import os
from pathlib import Path
from unittest.mock import MagicMock, Mock, patch

import pytest

from decl_weaver import LoggingConfigError
from decl_weaver.logging import get_weaver_logger, setup_logging
from decl_weaver.logging.logging_config import DEFAULT_LOG_LEVELS, LoggingConfig, prefect_logger_name


class TestLoggingConfig:
    """Test LoggingConfig class."""

    def test_default_config_path_from_env(self):
        """Test getting config path from environment."""
        with patch.dict(os.environ, {"DECL_WEAVER_LOGGING_CONFIG": "/path/to/config.yml"}):
            config = LoggingConfig()
            assert config.config_path == Path("/path/to/config.yml")

    def test_default_config_path_from_prefect_env(self):
        """Test getting config path from Prefect environment."""
        with patch.dict(os.environ, {"PREFECT_LOGGING_SETTINGS_PATH": "/prefect/config.yml"}, clear=True):
            config = LoggingConfig()
            assert config.config_path == Path("/prefect/config.yml")

    def test_own_variable_wins_over_prefect(self):
        env = {"DECL_WEAVER_LOGGING_CONFIG": "/ours.yml", "PREFECT_LOGGING_SETTINGS_PATH": "/prefect.yml"}
        with patch.dict(os.environ, env):
            assert LoggingConfig().config_path == Path("/ours.yml")

    def test_no_config_path_returns_none(self):
        """Test that no env vars results in None config path."""
        with patch.dict(os.environ, clear=True):
            config = LoggingConfig()
            assert config.config_path is None

    def test_load_config_from_file(self, tmp_path: Path) -> None:
        """Test loading config from YAML file."""
        config_file = tmp_path / "logging.yml"
        config_file.write_text("""
version: 1
disable_existing_loggers: false
handlers:
  console:
    class: logging.StreamHandler
loggers:
  decl_weaver.render:
    level: DEBUG
""")

        config = LoggingConfig(config_path=config_file)
        loaded = config.load_config()

        assert loaded["version"] == 1
        assert loaded["disable_existing_loggers"] is False
        assert loaded["loggers"]["decl_weaver.render"]["level"] == "DEBUG"

    def test_missing_file_falls_back_to_default(self, tmp_path: Path) -> None:
        config = LoggingConfig(config_path=tmp_path / "missing.yml")
        assert "prefect.decl_weaver" in config.load_config()["loggers"]

    def test_load_default_config_when_no_file(self):
        """Test loading default config when no file exists."""
        with patch.dict(os.environ, clear=True):
            loaded = LoggingConfig().load_config()

        assert loaded["version"] == 1
        assert loaded["handlers"]["console"]["stream"] == "ext://sys.stderr"
        assert loaded["loggers"]["prefect.decl_weaver"]["level"] == "INFO"
        assert loaded["loggers"]["prefect.decl_weaver"]["handlers"] == ["console"]
        assert "root" not in loaded

    def test_default_level_from_env(self):
        with patch.dict(os.environ, {"DECL_WEAVER_LOG_LEVEL": "DEBUG"}):
            loaded = LoggingConfig().load_config()
        assert {name: entry["level"] for name, entry in loaded["loggers"].items()} == {
            "prefect.decl_weaver": "DEBUG",
            "prefect.decl_weaver.tree": "DEBUG",
            "prefect.decl_weaver.render": "DEBUG",
        }

    def test_config_is_cached(self):
        config = LoggingConfig()
        assert config.load_config() is config.load_config()

    @patch("logging.config.dictConfig")
    def test_apply_config(self, mock_dict_config: Mock) -> None:
        """Test applying logging configuration."""
        config = LoggingConfig()
        config.apply()

        mock_dict_config.assert_called_once()
        call_args = mock_dict_config.call_args[0][0]
        assert call_args["version"] == 1

    def test_non_mapping_file_rejected(self, tmp_path: Path) -> None:
        config_file = tmp_path / "logging.yml"
        config_file.write_text("- just\n- a list\n")

        with pytest.raises(LoggingConfigError, match="version"):
            LoggingConfig(config_path=config_file).load_config()

    def test_file_without_version_rejected(self, tmp_path: Path) -> None:
        config_file = tmp_path / "logging.yml"
        config_file.write_text("loggers: {}\n")

        with pytest.raises(LoggingConfigError):
            LoggingConfig(config_path=config_file).load_config()

    @patch("logging.config.dictConfig")
    def test_apply_leaves_prefect_environment_alone(self, mock_dict_config: Mock) -> None:
        custom_config = {"version": 1, "loggers": {"prefect": {"level": "DEBUG"}}}
        with patch.dict(os.environ, clear=True):
            with patch.object(LoggingConfig, "load_config", return_value=custom_config):
                LoggingConfig().apply()

            assert "PREFECT_LOGGING_LEVEL" not in os.environ
        mock_dict_config.assert_called_once_with(custom_config)


class TestSetupLogging:
    """Test setup_logging function."""

    @patch("decl_weaver.logging.logging_config.LoggingConfig.apply")
    def test_setup_logging_basic(self, mock_apply: Mock) -> None:
        """Test basic setup_logging call."""
        setup_logging()
        mock_apply.assert_called_once()

    @patch("decl_weaver.logging.logging_config.get_logger")
    @patch("decl_weaver.logging.logging_config.LoggingConfig.apply")
    def test_setup_logging_with_level(self, mock_apply: Mock, mock_get_logger: Mock) -> None:
        """Test setup_logging with custom level."""
        mock_logger = MagicMock()
        mock_get_logger.return_value = mock_logger

        with patch.dict(os.environ, clear=True):
            setup_logging(level="DEBUG")

            assert "PREFECT_LOGGING_LEVEL" not in os.environ
        assert mock_get_logger.call_count == len(DEFAULT_LOG_LEVELS)
        mock_logger.setLevel.assert_called_with("DEBUG")

    @patch("decl_weaver.logging.logging_config.LoggingConfig")
    def test_setup_logging_with_config_path(self, mock_config_class: Mock, tmp_path: Path) -> None:
        """Test setup_logging with custom config path."""
        config_file = tmp_path / "custom.yml"
        mock_instance = MagicMock()
        mock_config_class.return_value = mock_instance

        setup_logging(config_path=config_file)

        mock_config_class.assert_called_once_with(config_file)
        mock_instance.apply.assert_called_once()


class TestGetWeaverLogger:
    """Test get_weaver_logger function."""

    @patch("decl_weaver.logging.logging_config.setup_logging")
    @patch("decl_weaver.logging.logging_config.get_logger")
    def test_get_weaver_logger_ensures_setup(self, mock_get_logger: Mock, mock_setup: Mock) -> None:
        """Test that get_weaver_logger ensures logging is setup."""
        mock_logger = MagicMock()
        mock_get_logger.return_value = mock_logger

        with patch("decl_weaver.logging.logging_config._logging_config", None):
            logger = get_weaver_logger("decl_weaver.tree.merge")

        mock_setup.assert_called_once()
        mock_get_logger.assert_called_with("decl_weaver.tree.merge")
        assert logger == mock_logger

    @patch("decl_weaver.logging.logging_config.setup_logging")
    @patch("decl_weaver.logging.logging_config.get_logger")
    def test_get_weaver_logger_reuses_config(self, mock_get_logger: Mock, mock_setup: Mock) -> None:
        """Test that subsequent calls don't re-setup logging."""
        with patch("decl_weaver.logging.logging_config._logging_config", MagicMock()):
            get_weaver_logger("decl_weaver.render")

        mock_setup.assert_not_called()
        mock_get_logger.assert_called_once_with("decl_weaver.render")


def test_prefect_logger_name() -> None:
    assert prefect_logger_name("decl_weaver.tree") == "prefect.decl_weaver.tree"
    assert prefect_logger_name("prefect.decl_weaver") == "prefect.decl_weaver"
    assert prefect_logger_name("prefect") == "prefect"
