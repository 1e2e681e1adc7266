"""Command-line interface for the GitLab entity provider.

This package provides the `git-entities` CLI tool that lists, reads and
edits entities stored as JSON files in a GitLab repository, plus the
read-only pipeline, branch and commit collections.
"""

from .config import ConfigLoader
from .models import ExitCode
from .errors import (
    CLIError,
    ConfigError,
    FilesystemError,
    InvalidInputError,
)

__all__ = [
    'ConfigLoader',
    'ExitCode',
    'CLIError',
    'ConfigError',
    'FilesystemError',
    'InvalidInputError',
]
