"""Configuration management for the focus timer store.

Configuration follows a priority hierarchy:
1. Environment variables (FOCUS_TIMER_*)
2. Project config (.focus/config.yaml, under the 'activity_store' key)
3. Hardcoded defaults in this module
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from focus_timer.constants import (
    CONFIG_DIR,
    CONFIG_FILENAME,
    CONFIG_KEY_STORE,
    DEFAULT_DB_PATH,
    DEFAULT_LOG_BACKUP_COUNT,
    DEFAULT_LOG_LEVEL,
    DEFAULT_LOG_MAX_SIZE_MB,
    DEFAULT_LOG_ROTATION_ENABLED,
    ENV_DB_PATH,
    ENV_DEBUG,
    ENV_LOG_LEVEL,
    ENV_TRUTHY_VALUES,
    IN_MEMORY_DB,
    LOG_LEVEL_DEBUG,
    LOG_LEVEL_INFO,
    MAX_LOG_BACKUP_COUNT,
    MAX_LOG_MAX_SIZE_MB,
    MIN_LOG_MAX_SIZE_MB,
    VALID_LOG_LEVELS,
)
from focus_timer.exceptions import ConfigurationError, ValidationError

logger = logging.getLogger(__name__)


@dataclass
class LogRotationConfig:
    """Configuration for log file rotation.

    Attributes:
        enabled: Whether to rotate the log file.
        max_size_mb: Maximum log file size in megabytes before rotation.
        backup_count: Number of rotated files to keep (store.log.1, .2, ...).
    """

    enabled: bool = DEFAULT_LOG_ROTATION_ENABLED
    max_size_mb: int = DEFAULT_LOG_MAX_SIZE_MB
    backup_count: int = DEFAULT_LOG_BACKUP_COUNT

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Validate configuration values.

        Raises:
            ValidationError: If any configuration value is invalid.
        """
        if not isinstance(self.enabled, bool):
            raise ValidationError(
                "enabled must be a boolean",
                field="enabled",
                value=self.enabled,
                expected="true or false",
            )
        for name in ("max_size_mb", "backup_count"):
            value = getattr(self, name)
            # bool is an int subclass
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValidationError(
                    f"{name} must be an integer",
                    field=name,
                    value=value,
                    expected="an integer",
                )
        if self.max_size_mb < MIN_LOG_MAX_SIZE_MB:
            raise ValidationError(
                f"max_size_mb must be at least {MIN_LOG_MAX_SIZE_MB}",
                field="max_size_mb",
                value=self.max_size_mb,
                expected=f">= {MIN_LOG_MAX_SIZE_MB}",
            )
        if self.max_size_mb > MAX_LOG_MAX_SIZE_MB:
            raise ValidationError(
                f"max_size_mb must be at most {MAX_LOG_MAX_SIZE_MB}",
                field="max_size_mb",
                value=self.max_size_mb,
                expected=f"<= {MAX_LOG_MAX_SIZE_MB}",
            )
        if self.backup_count < 0:
            raise ValidationError(
                "backup_count cannot be negative",
                field="backup_count",
                value=self.backup_count,
                expected=">= 0",
            )
        if self.backup_count > MAX_LOG_BACKUP_COUNT:
            raise ValidationError(
                f"backup_count must be at most {MAX_LOG_BACKUP_COUNT}",
                field="backup_count",
                value=self.backup_count,
                expected=f"<= {MAX_LOG_BACKUP_COUNT}",
            )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LogRotationConfig":
        """Create config from dictionary.

        Raises:
            ValidationError: If data is not a mapping or holds invalid values.
        """
        if not isinstance(data, dict):
            raise ValidationError(
                "log_rotation must be a mapping",
                field="log_rotation",
                value=data,
                expected="a mapping",
            )
        return cls(
            enabled=data.get("enabled", DEFAULT_LOG_ROTATION_ENABLED),
            max_size_mb=data.get("max_size_mb", DEFAULT_LOG_MAX_SIZE_MB),
            backup_count=data.get("backup_count", DEFAULT_LOG_BACKUP_COUNT),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "enabled": self.enabled,
            "max_size_mb": self.max_size_mb,
            "backup_count": self.backup_count,
        }

    def get_max_bytes(self) -> int:
        """Get maximum log file size in bytes."""
        return self.max_size_mb * 1024 * 1024


@dataclass
class StoreConfig:
    """Top-level configuration for the activity store.

    Attributes:
        db_path: SQLite database location, or ':memory:' for a process-local database.
        log_level: Logging level for the focus_timer logger.
        log_file: Optional log file path; logs go to stderr when unset.
        log_rotation: Rotation settings for log_file.
    """

    db_path: str = DEFAULT_DB_PATH
    log_level: str = DEFAULT_LOG_LEVEL
    log_file: str | None = None
    log_rotation: LogRotationConfig = field(default_factory=LogRotationConfig)

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Validate configuration values.

        Raises:
            ValidationError: If any configuration value is invalid.
        """
        if not isinstance(self.db_path, str) or not self.db_path.strip():
            raise ValidationError(
                "db_path must be a non-empty string",
                field="db_path",
                value=self.db_path,
                expected=f"a file path or '{IN_MEMORY_DB}'",
            )
        if not isinstance(self.log_level, str) or self.log_level.upper() not in VALID_LOG_LEVELS:
            raise ValidationError(
                f"Invalid log level: {self.log_level}",
                field="log_level",
                value=self.log_level,
                expected=f"one of {VALID_LOG_LEVELS}",
            )
        if self.log_file is not None and not isinstance(self.log_file, str):
            raise ValidationError(
                "log_file must be a path string",
                field="log_file",
                value=self.log_file,
                expected="a file path",
            )
        if not isinstance(self.log_rotation, LogRotationConfig):
            raise ValidationError(
                "log_rotation must be a LogRotationConfig",
                field="log_rotation",
                value=self.log_rotation,
            )

    @property
    def is_in_memory(self) -> bool:
        """Whether the database lives only for the lifetime of the process."""
        return self.db_path == IN_MEMORY_DB

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "StoreConfig":
        """Create config from dictionary.

        Args:
            data: The 'activity_store' section of the config file.

        Returns:
            StoreConfig instance.

        Raises:
            ValidationError: If any value has the wrong type or is out of range.
        """
        # A key present with a null value means "not set"
        return cls(
            db_path=data.get("db_path") or DEFAULT_DB_PATH,
            log_level=data.get("log_level") or DEFAULT_LOG_LEVEL,
            log_file=data.get("log_file"),
            log_rotation=LogRotationConfig.from_dict(data.get("log_rotation") or {}),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        data: dict[str, Any] = {
            "db_path": self.db_path,
            "log_level": self.log_level,
            "log_rotation": self.log_rotation.to_dict(),
        }
        if self.log_file:
            data["log_file"] = self.log_file
        return data

    def get_effective_log_level(self) -> str:
        """Get effective log level, considering environment variable overrides.

        Priority (highest to lowest):
        1. FOCUS_TIMER_DEBUG=1 -> DEBUG
        2. FOCUS_TIMER_LOG_LEVEL environment variable
        3. Config file log_level setting
        4. Default: INFO
        """
        if os.environ.get(ENV_DEBUG, "").lower() in ENV_TRUTHY_VALUES:
            return LOG_LEVEL_DEBUG

        env_level = os.environ.get(ENV_LOG_LEVEL, "").upper()
        if env_level in VALID_LOG_LEVELS:
            return env_level

        if self.log_level.upper() in VALID_LOG_LEVELS:
            return self.log_level.upper()

        return LOG_LEVEL_INFO

    def get_effective_db_path(self) -> str:
        """Get the database path, honouring FOCUS_TIMER_DB_PATH."""
        env_path = os.environ.get(ENV_DB_PATH, "").strip()
        return env_path or self.db_path


def get_config_path(project_root: Path) -> Path:
    """Location of the project config file."""
    return project_root / CONFIG_DIR / CONFIG_FILENAME


def load_store_config(project_root: Path) -> StoreConfig:
    """Load activity store configuration from a project.

    Reads .focus/config.yaml under the 'activity_store' key.

    Args:
        project_root: Project root directory.

    Returns:
        StoreConfig with settings (defaults if not configured).

    Note:
        Returns defaults on error rather than raising, so the timer can start
        even with a broken config file.
    """
    config_file = get_config_path(project_root)

    if not config_file.exists():
        logger.debug(f"No config file at {config_file}, using defaults")
        return StoreConfig()

    try:
        with open(config_file, encoding="utf-8") as f:
            config_data = yaml.safe_load(f) or {}

        if not isinstance(config_data, dict):
            raise ConfigurationError(
                "Config file must contain a mapping at the top level",
                config_file=config_file,
            )
        store_data = config_data.get(CONFIG_KEY_STORE) or {}
        if not isinstance(store_data, dict):
            raise ConfigurationError(
                f"'{CONFIG_KEY_STORE}' section must be a mapping",
                config_file=config_file,
                key=CONFIG_KEY_STORE,
            )
        config = StoreConfig.from_dict(store_data)
        logger.debug(f"Loaded store config: db_path={config.db_path}, log_level={config.log_level}")
        return config

    except ConfigurationError as e:
        logger.warning(f"Invalid store config in {config_file}: {e}")
        logger.info("Using default configuration")
        return StoreConfig()

    except yaml.YAMLError as e:
        logger.warning(f"Failed to parse config YAML from {config_file}: {e}")
        return StoreConfig()

    except OSError as e:
        logger.warning(f"Failed to read config from {config_file}: {e}")
        return StoreConfig()


def save_store_config(project_root: Path, config: StoreConfig) -> None:
    """Save activity store configuration, preserving other top-level keys.

    Args:
        project_root: Project root directory.
        config: Configuration to write under the 'activity_store' key.
    """
    config_file = get_config_path(project_root)
    config_file.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, Any] = {}
    if config_file.exists():
        with open(config_file, encoding="utf-8") as f:
            existing = yaml.safe_load(f) or {}

    existing[CONFIG_KEY_STORE] = config.to_dict()

    with open(config_file, "w", encoding="utf-8") as f:
        yaml.safe_dump(existing, f, default_flow_style=False, sort_keys=False)

    logger.debug(f"Saved store config to {config_file}")
