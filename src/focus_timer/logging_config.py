"""Logging setup for the focus timer store.

The host application calls configure_logging_from_config at startup, or asks
get_activity_store(..., setup_logging=True) to do it on first use.
"""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from focus_timer.config import LogRotationConfig, StoreConfig
from focus_timer.constants import PACKAGE_LOGGER_NAME


def configure_logging(
    log_level: str,
    log_file: Path | None = None,
    log_rotation: LogRotationConfig | None = None,
) -> logging.Logger:
    """Configure the focus_timer package logger.

    Args:
        log_level: Log level (DEBUG, INFO, WARNING, ERROR).
        log_file: Optional log file path.
        log_rotation: Optional log rotation configuration.

    Returns:
        The configured package logger.
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    package_logger.setLevel(level)
    # The host application owns the root logger
    package_logger.propagate = False
    # Reconfiguring must not stack handlers
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    if level == logging.DEBUG:
        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d - %(message)s",
            datefmt="%H:%M:%S",
        )
    else:
        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] %(message)s",
            datefmt="%H:%M:%S",
        )

    if log_file:
        try:
            rotation = log_rotation or LogRotationConfig()
            log_file.parent.mkdir(parents=True, exist_ok=True)

            file_handler: logging.Handler
            if rotation.enabled:
                file_handler = RotatingFileHandler(
                    log_file,
                    mode="a",
                    maxBytes=rotation.get_max_bytes(),
                    backupCount=rotation.backup_count,
                    encoding="utf-8",
                )
            else:
                file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")

            file_handler.setFormatter(formatter)
            package_logger.addHandler(file_handler)
            return package_logger
        except OSError as e:
            package_logger.warning(f"Could not set up file logging to {log_file}: {e}")

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    package_logger.addHandler(stream_handler)
    return package_logger


def configure_logging_from_config(config: StoreConfig) -> logging.Logger:
    """Configure logging from a StoreConfig, honouring environment overrides."""
    return configure_logging(
        config.get_effective_log_level(),
        log_file=Path(config.log_file) if config.log_file else None,
        log_rotation=config.log_rotation,
    )
