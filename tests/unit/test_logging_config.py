"""Tests for logging setup."""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

import pytest

from focus_timer.config import LogRotationConfig, StoreConfig
from focus_timer.constants import ENV_DEBUG, ENV_LOG_LEVEL
from focus_timer.logging_config import configure_logging, configure_logging_from_config

pytestmark = pytest.mark.usefixtures("restore_package_logger")


class TestConfigureLogging:
    """Verify handler selection and level."""

    def test_stream_handler_without_file(self):
        package_logger = configure_logging("WARNING")

        assert package_logger.level == logging.WARNING
        assert package_logger.propagate is False
        assert len(package_logger.handlers) == 1
        assert type(package_logger.handlers[0]) is logging.StreamHandler

    def test_rotating_file_handler(self, tmp_path: Path):
        log_file = tmp_path / "logs" / "store.log"

        package_logger = configure_logging("INFO", log_file=log_file)

        assert len(package_logger.handlers) == 1
        assert isinstance(package_logger.handlers[0], RotatingFileHandler)
        logging.getLogger("focus_timer.store.core").info("hello from the store")
        package_logger.handlers[0].flush()
        assert "hello from the store" in log_file.read_text(encoding="utf-8")

    def test_plain_file_handler_when_rotation_disabled(self, tmp_path: Path):
        package_logger = configure_logging(
            "INFO",
            log_file=tmp_path / "store.log",
            log_rotation=LogRotationConfig(enabled=False),
        )

        handler = package_logger.handlers[0]
        assert isinstance(handler, logging.FileHandler)
        assert not isinstance(handler, RotatingFileHandler)

    def test_reconfigure_does_not_stack_handlers(self):
        configure_logging("INFO")
        package_logger = configure_logging("DEBUG")

        assert len(package_logger.handlers) == 1
        assert package_logger.level == logging.DEBUG

    def test_unknown_level_falls_back_to_info(self):
        assert configure_logging("CHATTY").level == logging.INFO


class TestConfigureLoggingFromConfig:
    """Verify StoreConfig wiring."""

    def test_env_debug_override(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.delenv(ENV_LOG_LEVEL, raising=False)
        monkeypatch.setenv(ENV_DEBUG, "true")

        package_logger = configure_logging_from_config(StoreConfig(log_level="ERROR"))

        assert package_logger.level == logging.DEBUG

    def test_log_file_from_config(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.delenv(ENV_DEBUG, raising=False)
        monkeypatch.delenv(ENV_LOG_LEVEL, raising=False)
        log_file = tmp_path / "store.log"

        package_logger = configure_logging_from_config(StoreConfig(log_file=str(log_file)))

        assert isinstance(package_logger.handlers[0], RotatingFileHandler)
