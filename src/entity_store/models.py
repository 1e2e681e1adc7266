"""Data models for the entity store.

This module defines the values passed between the entity providers, the
commit batcher and the resource dispatcher. All models use dataclasses.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

Entity = Dict[str, Any]

CREATE = "create"
UPDATE = "update"
DELETE = "delete"

FILES = "files"
PIPELINES = "pipelines"
BRANCHES = "branches"
COMMITS = "commits"


@dataclass(frozen=True)
class ProviderConfig:
    """Process-wide configuration, fixed at startup.

    Attributes:
        project_id: GitLab project id or "namespace/project" path
        ref: Branch (or tag) that reads and commits are scoped to
        host: GitLab host, e.g. https://gitlab.com
        api_version: REST API version segment
        data_base_path: Directory holding one subdirectory per file resource
        tree_per_page: Page size used for tree listings
        timeout: Per-request timeout in seconds
        oauth_client_id: OAuth application id used by the login flow
        oauth_base_url: OAuth provider base URL used by the login flow
    """
    project_id: str
    ref: str = "master"
    host: str = "https://gitlab.com"
    api_version: str = "v4"
    data_base_path: str = "data"
    tree_per_page: int = 10
    timeout: int = 30
    oauth_client_id: Optional[str] = None
    oauth_base_url: Optional[str] = None


@dataclass(frozen=True)
class CollectionDescriptor:
    """How one named resource is backed.

    Attributes:
        resource: Resource name as used by the UI
        kind: FILES, PIPELINES, BRANCHES or COMMITS
        base_path: Directory of the collection (FILES only)
    """
    resource: str
    kind: str
    base_path: Optional[str] = None


@dataclass
class MutationIntent:
    """A pending write, applied as one action of a commit.

    Attributes:
        kind: CREATE, UPDATE or DELETE
        path: Repository path of the entity file
        content: Entity to store (None for DELETE)
    """
    kind: str
    path: str
    content: Optional[Entity] = None


@dataclass
class ListResult:
    """One window of a collection plus the size of the whole collection."""
    items: List[Entity] = field(default_factory=list)
    total: int = 0


def create_intent(path: str, entity: Entity) -> MutationIntent:
    return MutationIntent(kind=CREATE, path=path, content=entity)


def update_intent(path: str, entity: Entity) -> MutationIntent:
    return MutationIntent(kind=UPDATE, path=path, content=entity)


def delete_intent(path: str) -> MutationIntent:
    return MutationIntent(kind=DELETE, path=path)
