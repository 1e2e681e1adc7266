"""Typed exception hierarchy for CLI-related errors.

This module defines all custom exceptions used by the CLI and its
configuration loading. All exceptions inherit from CLIError, which is itself
a GitProviderError, so the entry point can catch any application error in
one place.
"""

from typing import Optional

from src.gitlab_client.errors import GitProviderError


class CLIError(GitProviderError):
    """Base exception for all CLI-related errors."""
    pass


class ConfigError(CLIError):
    """Raised when configuration validation fails."""

    def __init__(self, message: str, config_field: Optional[str] = None):
        if config_field:
            full_message = f"Configuration error in field '{config_field}': {message}"
        else:
            full_message = f"Configuration error: {message}"
        super().__init__(full_message)
        self.config_field = config_field
        self.original_message = message


class FilesystemError(CLIError):
    """Raised when reading the configuration file fails."""

    def __init__(self, file_path: str, operation: str, reason: Optional[str] = None):
        message = f"Filesystem operation '{operation}' failed for {file_path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.file_path = file_path
        self.operation = operation
        self.reason = reason


class InvalidInputError(CLIError):
    """Raised when a command-line argument cannot be used (e.g. malformed JSON)."""

    def __init__(self, option: str, reason: str):
        super().__init__(f"Invalid value for {option}: {reason}")
        self.option = option
        self.reason = reason
