"""Read-only providers over GitLab collections that are not stored as files.

Pipelines, branches and the commit log are paginated by GitLab itself, so
these providers pass the requested window straight through instead of
aggregating a tree. Records are reshaped for the UI: keys are camelCased and
every record carries an "id".
"""

import logging
import re
from typing import TYPE_CHECKING, Any, Dict, List

from src.gitlab_client.models import Page

from .base import BaseProvider
from .fan_out import fan_out
from .models import Entity, ListResult, ProviderConfig

if TYPE_CHECKING:
    from src.gitlab_client.api_wrapper import GitLabClient

logger = logging.getLogger(__name__)

# GitLab rejects per_page above this value
MAX_PER_PAGE = 100

_SNAKE_SEGMENT = re.compile(r'_([a-z0-9])')


def camelize(key: str) -> str:
    """Convert a snake_case key to camelCase ("web_url" -> "webUrl")."""
    return _SNAKE_SEGMENT.sub(lambda match: match.group(1).upper(), key)


def camelize_keys(value: Any) -> Any:
    """Recursively camelCase the keys of dicts, including dicts inside lists."""
    if isinstance(value, dict):
        return {camelize(str(k)): camelize_keys(v) for k, v in value.items()}
    if isinstance(value, list):
        return [camelize_keys(item) for item in value]
    return value


class ReadOnlyProvider(BaseProvider):
    """Base for server-paginated, read-only collections.

    Subclasses implement _fetch_page and _fetch_one against the client;
    this class handles windowing, reshaping and multi-get.
    """

    def __init__(self, client: "GitLabClient", config: ProviderConfig, resource: str):
        super().__init__(resource)
        self.client = client
        self.config = config

    def _fetch_page(self, page: int, per_page: int) -> Page:
        raise NotImplementedError

    def _fetch_one(self, id: str) -> Dict[str, Any]:
        raise NotImplementedError

    def _to_entity(self, record: Dict[str, Any]) -> Entity:
        return camelize_keys(record)

    def list(self, page: int, per_page: int) -> ListResult:
        if page < 1 or per_page < 1:
            return ListResult(items=[], total=0)
        result = self._fetch_page(page, min(per_page, MAX_PER_PAGE))
        logger.info(f"Listing {self.resource}: page {page} ({len(result.items)} of {result.total})")
        return ListResult(
            items=[self._to_entity(record) for record in result.items],
            total=result.total,
        )

    def get_one(self, id: str) -> Entity:
        return self._to_entity(self._fetch_one(id))

    def get_many(self, ids: List[str]) -> List[Entity]:
        return fan_out(self.get_one, ids)


class PipelineProvider(ReadOnlyProvider):
    """CI pipelines of the configured ref."""

    def __init__(self, client: "GitLabClient", config: ProviderConfig, resource: str = "pipelines"):
        super().__init__(client, config, resource)

    def _fetch_page(self, page: int, per_page: int) -> Page:
        return self.client.list_pipelines(self.config.project_id, self.config.ref, page, per_page)

    def _fetch_one(self, id: str) -> Dict[str, Any]:
        return self.client.get_pipeline(self.config.project_id, id)


class BranchProvider(ReadOnlyProvider):
    """Repository branches, identified by name."""

    def __init__(self, client: "GitLabClient", config: ProviderConfig, resource: str = "branches"):
        super().__init__(client, config, resource)

    def _fetch_page(self, page: int, per_page: int) -> Page:
        return self.client.list_branches(self.config.project_id, page, per_page)

    def _fetch_one(self, id: str) -> Dict[str, Any]:
        return self.client.get_branch(self.config.project_id, id)

    def _to_entity(self, record: Dict[str, Any]) -> Entity:
        return {**camelize_keys(record), 'id': record['name']}


class CommitProvider(ReadOnlyProvider):
    """Commit log of the configured ref, identified by full sha."""

    def __init__(self, client: "GitLabClient", config: ProviderConfig, resource: str = "commits"):
        super().__init__(client, config, resource)

    def _fetch_page(self, page: int, per_page: int) -> Page:
        return self.client.list_commits(self.config.project_id, self.config.ref, page, per_page)

    def _fetch_one(self, id: str) -> Dict[str, Any]:
        return self.client.get_commit(self.config.project_id, id)
