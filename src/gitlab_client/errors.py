"""Typed exception hierarchy for GitLab store errors.

This module defines all custom exceptions raised while talking to the
GitLab repository that backs the entity collections. All exceptions inherit
from GitProviderError so callers can catch any application-level error in
one place.
"""

from typing import Optional


class GitProviderError(Exception):
    """Base exception for all git-entity-provider errors."""
    pass


class RemoteError(GitProviderError):
    """Raised when the GitLab API answers with a non-2xx status."""

    def __init__(self, status_code: int, body: str = "", message: Optional[str] = None):
        super().__init__(
            message or f"GitLab API returned HTTP {status_code}: {body[:200]}"
        )
        self.status_code = status_code
        self.body = body


class NotFoundError(RemoteError):
    """Raised when a requested file, ref or record does not exist."""

    def __init__(self, path: str, body: str = ""):
        super().__init__(404, body, f"{path} not found")
        self.path = path


class InvalidCredentialsError(RemoteError):
    """Raised when the bearer token is missing, expired or rejected."""

    def __init__(self, endpoint: str, body: str = ""):
        super().__init__(
            401,
            body,
            f"Access token is invalid or missing (endpoint: {endpoint})",
        )
        self.endpoint = endpoint


class APIUnreachableError(GitProviderError):
    """Raised when the GitLab API cannot be reached or times out."""

    def __init__(self, endpoint: str):
        super().__init__(f"API is not available at {endpoint}")
        self.endpoint = endpoint


class DecodeError(GitProviderError):
    """Raised when stored file content is not valid encoded JSON."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Cannot decode {path}: {reason}")
        self.path = path
        self.reason = reason


class UnsupportedOperationError(GitProviderError):
    """Raised when a resource does not support the requested operation."""

    def __init__(self, resource: str, operation: str):
        super().__init__(
            f"Operation '{operation}' is not supported for resource '{resource}'"
        )
        self.resource = resource
        self.operation = operation
