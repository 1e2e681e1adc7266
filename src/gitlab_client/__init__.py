"""GitLab client library for the entity provider.

This package provides Python abstractions over the GitLab REST API v4
repository endpoints: tree listings, file reads and multi-action commits,
plus the pipeline, branch and commit-log collections.
"""

from .errors import (
    GitProviderError,
    RemoteError,
    NotFoundError,
    InvalidCredentialsError,
    APIUnreachableError,
    DecodeError,
    UnsupportedOperationError,
)

__all__ = [
    "GitProviderError",
    "RemoteError",
    "NotFoundError",
    "InvalidCredentialsError",
    "APIUnreachableError",
    "DecodeError",
    "UnsupportedOperationError",
]
