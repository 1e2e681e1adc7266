"""Data models for the CLI."""

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit codes for CLI operations.

    - SUCCESS (0): Operation completed successfully
    - GENERAL_ERROR (1): Config issues, invalid input, undecodable entities
    - REMOTE_ERROR (2): GitLab rejected the request
    - AUTH_ERROR (3): Missing or rejected access token
    - NETWORK_ERROR (4): GitLab unreachable or timed out
    - NOT_FOUND (5): Entity or record does not exist

    Example:
        >>> exit_code = ExitCode.SUCCESS
        >>> sys.exit(exit_code)
    """
    SUCCESS = 0
    GENERAL_ERROR = 1
    REMOTE_ERROR = 2
    AUTH_ERROR = 3
    NETWORK_ERROR = 4
    NOT_FOUND = 5
