"""Custom exceptions for the focus timer store.

All exceptions inherit from FocusTimerError, so callers can catch every
store-related error with a single except clause if desired.

Exception hierarchy:
    FocusTimerError (base)
    ├── ConfigurationError
    │   └── ValidationError
    └── StorageError
        ├── SchemaViolationError
        └── DatabaseConnectionError

Engine errors that are not translated here (e.g. malformed SQL) propagate
as sqlite3.Error unchanged.
"""

from pathlib import Path
from typing import Any


class FocusTimerError(Exception):
    """Base exception for all focus timer store errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary with additional context.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        """Initialize the error.

        Args:
            message: Error description.
            details: Optional dictionary with additional context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return string representation."""
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({detail_str})"
        return self.message


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(FocusTimerError):
    """Raised when configuration is invalid or cannot be loaded.

    Examples:
        - Invalid YAML syntax in config file
        - Unknown log level
    """

    def __init__(
        self,
        message: str,
        config_file: Path | None = None,
        key: str | None = None,
    ):
        """Initialize configuration error.

        Args:
            message: Error description.
            config_file: Path to the problematic config file.
            key: The configuration key that caused the error.
        """
        details = {}
        if config_file:
            details["config_file"] = str(config_file)
        if key:
            details["key"] = key
        super().__init__(message, details)
        self.config_file = config_file
        self.key = key


class ValidationError(ConfigurationError):
    """Raised when configuration values fail validation."""

    def __init__(
        self,
        message: str,
        field: str,
        value: Any = None,
        expected: str | None = None,
    ):
        """Initialize validation error.

        Args:
            message: Error description.
            field: The field that failed validation.
            value: The invalid value (truncated if too long).
            expected: Description of expected value format.
        """
        # ConfigurationError builds its own details; add ours on top
        super().__init__(message)
        self.details["field"] = field
        self.field = field
        self.value = value
        self.expected = expected
        if value is not None:
            value_str = str(value)
            self.details["value"] = value_str[:100] + "..." if len(value_str) > 100 else value_str
        if expected:
            self.details["expected"] = expected


# =============================================================================
# Storage Errors
# =============================================================================


class StorageError(FocusTimerError):
    """Raised when database operations fail.

    Base class for storage-related errors.
    """

    def __init__(self, message: str, table: str | None = None):
        """Initialize storage error.

        Args:
            message: Error description.
            table: The table involved, when known.
        """
        details = {}
        if table:
            details["table"] = table
        super().__init__(message, details)
        self.table = table


class SchemaViolationError(StorageError):
    """Raised when a write violates a CHECK, UNIQUE or FOREIGN KEY constraint.

    Examples:
        - Timer session kind other than 'work' or 'break'
        - Completed cycle referencing a session that does not exist
        - Plain insert of a duplicate daily_stats date
    """

    def __init__(
        self,
        message: str,
        table: str | None = None,
        constraint: str | None = None,
    ):
        """Initialize schema violation error.

        Args:
            message: Error description.
            table: The table the write targeted.
            constraint: Engine message describing the failed constraint.
        """
        super().__init__(message, table=table)
        self.constraint = constraint
        if constraint:
            self.details["constraint"] = constraint


class DatabaseConnectionError(StorageError):
    """Raised when the database cannot be opened or the store is closed.

    Examples:
        - Database path points at a directory
        - Operation attempted after close()
    """

    def __init__(self, message: str, db_path: str | None = None):
        """Initialize connection error.

        Args:
            message: Error description.
            db_path: The database location that failed.
        """
        super().__init__(message)
        self.db_path = db_path
        if db_path:
            self.details["db_path"] = db_path
