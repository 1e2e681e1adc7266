"""Data models for GitLab repository records.

All models use dataclasses and live only for the duration of one provider
call.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class TreeEntry:
    """One row of a repository tree listing.

    Attributes:
        path: Full repository path of the entry (unique within a listing)
        type: "blob" for files, "tree" for directories
        mode: Git file mode (e.g. "100644")
        id: Object sha
        name: Last path segment
    """
    path: str
    type: str
    mode: str = ""
    id: str = ""
    name: str = ""

    @property
    def is_blob(self) -> bool:
        return self.type == "blob"

    @classmethod
    def from_api(cls, record: Dict[str, Any]) -> "TreeEntry":
        return cls(
            path=record["path"],
            type=record.get("type", "blob"),
            mode=record.get("mode", ""),
            id=record.get("id", ""),
            name=record.get("name", ""),
        )


@dataclass
class TreePage:
    """One page of a tree listing plus the page count from response metadata."""
    entries: List[TreeEntry]
    total_pages: int


@dataclass
class FileRecord:
    """Raw file as returned by the repository files endpoint.

    Attributes:
        path: Full repository path of the file
        content: Content in its transfer encoding (usually base64 text)
        encoding: Transfer encoding tag ("base64", "text")
        blob_id: Blob sha the content was read from
        commit_id: Commit the file was read at
    """
    path: str
    content: str
    encoding: str = "base64"
    blob_id: Optional[str] = None
    commit_id: Optional[str] = None


@dataclass
class CommitAction:
    """A single file action inside a commit request.

    Attributes:
        action: One of "create", "update", "delete"
        path: Repository path the action applies to
        content: Text content for create/update, None for delete
    """
    action: str
    path: str
    content: Optional[str] = None

    def to_api(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"action": self.action, "file_path": self.path}
        if self.content is not None:
            body["content"] = self.content
        return body


@dataclass
class Page:
    """One page of a server-paginated collection (pipelines, branches, commits)."""
    items: List[Dict[str, Any]] = field(default_factory=list)
    total: int = 0
