"""Unit tests for entity_store.commit_batcher module."""

import json
from unittest.mock import Mock

import pytest

from src.entity_store.commit_batcher import CommitBatcher
from src.entity_store.models import create_intent, delete_intent, update_intent
from src.gitlab_client.errors import RemoteError
from src.gitlab_client.models import CommitAction


@pytest.fixture
def client():
    client = Mock()
    client.write_commit.return_value = {"id": "abc"}
    return client


class TestCommitBatcher:
    """Test cases for CommitBatcher."""

    def test_single_intent_is_one_commit(self, client):
        batcher = CommitBatcher(client, "42", "master")

        result = batcher.commit("Create", [create_intent("data/users/a", {"id": "data/users/a", "name": "Ada"})])

        assert result == {"id": "abc"}
        client.write_commit.assert_called_once()
        project_id, ref, message, actions = client.write_commit.call_args.args
        assert (project_id, ref, message) == ("42", "master", "Create")
        assert len(actions) == 1
        assert actions[0].action == "create"
        assert json.loads(actions[0].content) == {"id": "data/users/a", "name": "Ada"}

    def test_many_intents_are_one_commit_in_order(self, client):
        batcher = CommitBatcher(client, "42", "master")
        intents = [delete_intent("data/users/a"), delete_intent("data/users/b"), delete_intent("data/users/c")]

        batcher.commit("Delete many", intents)

        client.write_commit.assert_called_once()
        actions = client.write_commit.call_args.args[3]
        assert actions == [
            CommitAction(action="delete", path="data/users/a"),
            CommitAction(action="delete", path="data/users/b"),
            CommitAction(action="delete", path="data/users/c"),
        ]

    def test_delete_actions_carry_no_content(self, client):
        actions = CommitBatcher(client, "42", "master").to_actions([delete_intent("data/users/a")])

        assert actions[0].content is None
        assert "content" not in actions[0].to_api()

    def test_update_content_is_pretty_printed(self, client):
        actions = CommitBatcher(client, "42", "master").to_actions(
            [update_intent("data/users/a", {"name": "Ada"})]
        )

        assert actions[0].content == '{\n  "name": "Ada"\n}'

    def test_mixed_intents_keep_order(self, client):
        actions = CommitBatcher(client, "42", "master").to_actions([
            update_intent("data/users/a", {"v": 1}),
            delete_intent("data/users/b"),
            create_intent("data/users/c", {"v": 2}),
        ])

        assert [(a.action, a.path) for a in actions] == [
            ("update", "data/users/a"),
            ("delete", "data/users/b"),
            ("create", "data/users/c"),
        ]

    def test_empty_intents_rejected(self, client):
        with pytest.raises(ValueError):
            CommitBatcher(client, "42", "master").commit("Delete many", [])

        client.write_commit.assert_not_called()

    def test_remote_error_propagates(self, client):
        client.write_commit.side_effect = RemoteError(400, "file does not exist")

        with pytest.raises(RemoteError):
            CommitBatcher(client, "42", "master").commit("Delete", [delete_intent("data/users/a")])
