"""Commit batching for entity mutations.

Every logical mutation (create, update, delete, or a bulk variant) becomes
exactly one GitLab commit. GitLab applies multi-action commits atomically,
so a bulk delete either removes every file or none.
"""

import logging
from typing import TYPE_CHECKING, Any, Dict, List

from src.gitlab_client.models import CommitAction

from .codec import EntityCodec
from .models import DELETE, MutationIntent

if TYPE_CHECKING:
    from src.gitlab_client.api_wrapper import GitLabClient

logger = logging.getLogger(__name__)


class CommitBatcher:
    """Turns mutation intents into one multi-action commit on the configured ref.

    Example:
        >>> batcher = CommitBatcher(client, "group/project", "master")
        >>> batcher.commit("Delete many", [delete_intent("data/users/a")])
    """

    def __init__(self, client: "GitLabClient", project_id: str, ref: str):
        self.client = client
        self.project_id = project_id
        self.ref = ref

    def to_actions(self, intents: List[MutationIntent]) -> List[CommitAction]:
        """Build ordered commit actions; deletes carry no content."""
        actions = []
        for intent in intents:
            if intent.kind == DELETE:
                actions.append(CommitAction(action=DELETE, path=intent.path))
            else:
                actions.append(CommitAction(
                    action=intent.kind,
                    path=intent.path,
                    content=EntityCodec.encode(intent.content or {}),
                ))
        return actions

    def commit(self, message: str, intents: List[MutationIntent]) -> Dict[str, Any]:
        """Apply all intents as a single commit.

        Args:
            message: Commit message
            intents: Mutations to apply, in order

        Returns:
            Commit record returned by GitLab

        Raises:
            ValueError: If intents is empty
            RemoteError: If GitLab rejects the commit (nothing is applied)
        """
        if not intents:
            raise ValueError("Cannot commit an empty list of mutations")

        actions = self.to_actions(intents)
        logger.info(f"Committing '{message}' to {self.ref} ({len(actions)} action(s))")
        return self.client.write_commit(self.project_id, self.ref, message, actions)
