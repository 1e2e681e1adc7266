"""CRUD provider for entities stored as JSON files in a GitLab repository.

Each entity is one file under the collection's base path; the file path is
the entity id. Reads go through the tree aggregator and the files endpoint,
writes go through the commit batcher, one commit per call.

Known properties of this provider:
    - Listing reads the entire tree and paginates client-side, because GitLab
      only paginates the listing, not arbitrary windows of decoded entities.
    - Ids are "<base_path>/<uuid4>"; there is no existence check before
      create, so a colliding id would overwrite an existing file.
    - Updates and deletes carry no revision check: last writer wins.
"""

import logging
import uuid
from typing import TYPE_CHECKING, Any, Dict, List

from src.gitlab_client.models import TreeEntry

from .base import BaseProvider, page_window
from .codec import EntityCodec
from .commit_batcher import CommitBatcher
from .fan_out import fan_out
from .models import (
    Entity,
    ListResult,
    ProviderConfig,
    create_intent,
    delete_intent,
    update_intent,
)
from .tree_aggregator import TreeAggregator

if TYPE_CHECKING:
    from src.gitlab_client.api_wrapper import GitLabClient

logger = logging.getLogger(__name__)


class EntityProvider(BaseProvider):
    """List/get/create/update/delete over a directory of JSON files.

    Example:
        >>> provider = EntityProvider(client, config, "data/users")
        >>> result = provider.list(page=1, per_page=10)
        >>> user = provider.create({"name": "Ada", "active": True})
    """

    def __init__(
        self,
        client: "GitLabClient",
        config: ProviderConfig,
        base_path: str,
        resource: str = "",
    ):
        super().__init__(resource or base_path.rsplit('/', 1)[-1])
        self.client = client
        self.config = config
        self.base_path = base_path.rstrip('/')
        self.tree = TreeAggregator(client)
        self.batcher = CommitBatcher(client, config.project_id, config.ref)

    def _create_id(self) -> str:
        return f"{self.base_path}/{uuid.uuid4()}"

    def _fetch_entity(self, path: str) -> Entity:
        record = self.client.read_file(self.config.project_id, self.config.ref, path)
        return EntityCodec.decode(record)

    def _list_files(self) -> List[TreeEntry]:
        entries = self.tree.aggregate(
            self.config.project_id,
            self.config.ref,
            self.base_path,
            self.config.tree_per_page,
        )
        return [entry for entry in entries if entry.is_blob]

    def list(self, page: int, per_page: int) -> ListResult:
        """Return one page of decoded entities and the collection size.

        Args:
            page: 1-based page number
            per_page: Entities per page

        Returns:
            ListResult; a page past the end has no items but the same total

        Raises:
            RemoteError: If the listing or any file read fails
            DecodeError: If any file in the window cannot be decoded
        """
        files = self._list_files()
        window = files[page_window(page, per_page, len(files))]
        logger.info(
            f"Listing {self.base_path}: page {page} ({len(window)} of {len(files)} entities)"
        )
        items = fan_out(self._fetch_entity, [entry.path for entry in window])
        return ListResult(items=items, total=len(files))

    def get_one(self, id: str) -> Entity:
        """Read and decode one entity.

        Raises:
            NotFoundError: If no file exists at id
        """
        return self._fetch_entity(id)

    def get_many(self, ids: List[str]) -> List[Entity]:
        """Read entities concurrently, returned in the order of ids."""
        return fan_out(self._fetch_entity, ids)

    def create(self, data: Dict[str, Any]) -> Entity:
        """Store a new entity under a freshly generated id."""
        entity = {**data, 'id': self._create_id()}
        self.batcher.commit("Create", [create_intent(entity['id'], entity)])
        logger.info(f"Created {entity['id']}")
        return entity

    def update(self, id: str, data: Dict[str, Any]) -> Entity:
        """Overwrite the entity file at id with data."""
        self.batcher.commit("Update", [update_intent(id, data)])
        logger.info(f"Updated {id}")
        return data

    def update_many(self, ids: List[str], data: Dict[str, Any]) -> List[str]:
        """Overwrite every listed entity with data in a single commit."""
        intents = [update_intent(id, {**data, 'id': id}) for id in ids]
        self.batcher.commit("Update many", intents)
        logger.info(f"Updated {len(ids)} entities in {self.base_path}")
        return list(ids)

    def delete(self, id: str, previous_data: Dict[str, Any]) -> Entity:
        """Delete the entity file at id.

        The provider does not re-read the file; previous_data is returned as
        the deleted representation.
        """
        self.batcher.commit("Delete", [delete_intent(id)])
        logger.info(f"Deleted {id}")
        return previous_data

    def delete_many(self, ids: List[str]) -> List[str]:
        """Delete every listed entity in a single commit."""
        self.batcher.commit("Delete many", [delete_intent(id) for id in ids])
        logger.info(f"Deleted {len(ids)} entities from {self.base_path}")
        return list(ids)
