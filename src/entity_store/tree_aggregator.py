"""Tree aggregation across paginated GitLab tree listings.

GitLab pages tree listings. The aggregator reads page 1, learns the page
count from the response metadata, fetches the remaining pages concurrently
and stitches them back together in page order so that offset-based
pagination downstream sees a stable absolute ordering.
"""

import logging
from typing import TYPE_CHECKING, List

from src.gitlab_client.models import TreeEntry, TreePage

from .fan_out import MAX_WORKERS, fan_out

if TYPE_CHECKING:
    from src.gitlab_client.api_wrapper import GitLabClient

logger = logging.getLogger(__name__)


class TreeAggregator:
    """Flattens a paginated tree listing into one ordered list.

    Example:
        >>> aggregator = TreeAggregator(client)
        >>> entries = aggregator.aggregate("group/project", "master", "data/users", 20)
    """

    def __init__(self, client: "GitLabClient", max_workers: int = MAX_WORKERS):
        self.client = client
        self.max_workers = max_workers

    def aggregate(self, project_id: str, ref: str, path: str, per_page: int) -> List[TreeEntry]:
        """Fetch every page of the tree under path.

        Args:
            project_id: GitLab project id
            ref: Branch or tag name
            path: Directory to list
            per_page: Entries per page

        Returns:
            All entries, page 1 first, in the order GitLab lists them

        Raises:
            RemoteError: If any page request fails (no partial listing)
        """
        first = self.client.list_tree_page(project_id, ref, path, 1, per_page)
        entries = list(first.entries)

        if first.total_pages <= 1:
            logger.debug(f"Tree {path}: single page, {len(entries)} entries")
            return entries

        def _fetch(page: int) -> TreePage:
            return self.client.list_tree_page(project_id, ref, path, page, per_page)

        remaining = fan_out(_fetch, range(2, first.total_pages + 1), self.max_workers)
        for tree_page in remaining:
            entries.extend(tree_page.entries)

        logger.debug(
            f"Tree {path}: {first.total_pages} pages, {len(entries)} entries"
        )
        return entries
