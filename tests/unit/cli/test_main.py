"""Unit tests for main CLI entry point (main.py).

Tests the Typer CLI application using CliRunner.
"""

import json
import logging
from unittest.mock import MagicMock, Mock, patch

import pytest
from typer.testing import CliRunner

from src.cli.main import _configure_logging, _parse_data, app
from src.cli.errors import InvalidInputError
from src.cli.models import ExitCode
from src.entity_store.models import ProviderConfig
from src.gitlab_client.errors import (
    APIUnreachableError,
    DecodeError,
    InvalidCredentialsError,
    NotFoundError,
    RemoteError,
)

runner = CliRunner()


@pytest.fixture(autouse=True)
def reset_app_logger():
    """Drop handlers bound to CliRunner streams after each test."""
    yield
    logging.getLogger("src").handlers.clear()


@pytest.fixture
def data_provider():
    with patch('src.cli.main.build_data_provider') as mock_build:
        provider = Mock()
        mock_build.return_value = provider
        yield provider


class TestConfigureLogging:
    """Test cases for _configure_logging function."""

    @pytest.mark.parametrize("verbosity,level", [
        (0, logging.WARNING),
        (1, logging.INFO),
        (2, logging.DEBUG),
        (5, logging.DEBUG),
    ])
    def test_verbosity_sets_level(self, verbosity, level):
        with patch('logging.getLogger') as mock_get_logger:
            mock_logger = MagicMock()
            mock_get_logger.return_value = mock_logger

            _configure_logging(verbosity)

            mock_logger.setLevel.assert_called_with(level)

    def test_logdir_creates_log_file(self, tmp_path):
        _configure_logging(1, str(tmp_path / "logs"))

        log_files = list((tmp_path / "logs").glob("git-entities_*.log"))
        assert len(log_files) == 1
        for handler in logging.getLogger("src").handlers:
            handler.close()


class TestParseData:
    """Test cases for _parse_data."""

    def test_valid_object(self):
        assert _parse_data('{"name": "Ada"}') == {"name": "Ada"}

    def test_invalid_json(self):
        with pytest.raises(InvalidInputError):
            _parse_data('{name')

    def test_non_object(self):
        with pytest.raises(InvalidInputError):
            _parse_data('[1, 2]')


class TestCommands:
    """Test cases for command to request mapping."""

    def test_list(self, data_provider):
        data_provider.return_value = {"data": [{"id": "data/users/u1.json"}], "total": 1}

        result = runner.invoke(app, ["--no-color", "list", "users", "--page", "2", "--per-page", "5"])

        assert result.exit_code == ExitCode.SUCCESS
        data_provider.assert_called_once_with("GET_LIST", "users", {"pagination": {"page": 2, "perPage": 5}})
        assert json.loads(result.stdout) == {"data": [{"id": "data/users/u1.json"}], "total": 1}

    def test_list_defaults(self, data_provider):
        data_provider.return_value = {"data": [], "total": 0}

        result = runner.invoke(app, ["list", "users"])

        assert result.exit_code == ExitCode.SUCCESS
        data_provider.assert_called_once_with("GET_LIST", "users", {"pagination": {"page": 1, "perPage": 10}})

    def test_get_single_id(self, data_provider):
        data_provider.return_value = {"data": {"id": "data/users/u1.json"}}

        result = runner.invoke(app, ["get", "users", "data/users/u1.json"])

        assert result.exit_code == ExitCode.SUCCESS
        data_provider.assert_called_once_with("GET_ONE", "users", {"id": "data/users/u1.json"})

    def test_get_many_ids(self, data_provider):
        data_provider.return_value = {"data": []}

        result = runner.invoke(app, ["get", "users", "a", "b"])

        assert result.exit_code == ExitCode.SUCCESS
        data_provider.assert_called_once_with("GET_MANY", "users", {"ids": ["a", "b"]})

    def test_create(self, data_provider):
        data_provider.return_value = {"data": {"id": "data/users/x", "name": "Ada"}}

        result = runner.invoke(app, ["create", "users", "--data", '{"name": "Ada"}'])

        assert result.exit_code == ExitCode.SUCCESS
        data_provider.assert_called_once_with("CREATE", "users", {"data": {"name": "Ada"}})

    def test_create_with_invalid_json_fails_without_request(self, data_provider):
        result = runner.invoke(app, ["create", "users", "--data", "{oops"])

        assert result.exit_code == ExitCode.GENERAL_ERROR
        data_provider.assert_not_called()
        assert "--data" in result.output

    def test_update(self, data_provider):
        data_provider.return_value = {"data": {"name": "B"}}

        result = runner.invoke(app, ["update", "users", "data/users/a", "-d", '{"name": "B"}'])

        assert result.exit_code == ExitCode.SUCCESS
        data_provider.assert_called_once_with("UPDATE", "users", {"id": "data/users/a", "data": {"name": "B"}})

    def test_update_many(self, data_provider):
        data_provider.return_value = {"data": ["a", "b"]}

        result = runner.invoke(app, ["update-many", "users", "a", "b", "--data", '{"active": true}'])

        assert result.exit_code == ExitCode.SUCCESS
        data_provider.assert_called_once_with("UPDATE_MANY", "users", {"ids": ["a", "b"], "data": {"active": True}})

    def test_delete_single(self, data_provider):
        data_provider.return_value = {"data": {"id": "a"}}

        result = runner.invoke(app, ["delete", "users", "a"])

        assert result.exit_code == ExitCode.SUCCESS
        data_provider.assert_called_once_with("DELETE", "users", {"id": "a", "previousData": {"id": "a"}})

    def test_delete_single_with_previous_data(self, data_provider):
        data_provider.return_value = {"data": {"id": "a", "name": "old"}}

        result = runner.invoke(app, ["delete", "users", "a", "--previous-data", '{"id": "a", "name": "old"}'])

        assert result.exit_code == ExitCode.SUCCESS
        data_provider.assert_called_once_with(
            "DELETE", "users", {"id": "a", "previousData": {"id": "a", "name": "old"}}
        )

    def test_delete_many(self, data_provider):
        data_provider.return_value = {"data": ["a", "b", "c"]}

        result = runner.invoke(app, ["delete", "users", "a", "b", "c"])

        assert result.exit_code == ExitCode.SUCCESS
        data_provider.assert_called_once_with("DELETE_MANY", "users", {"ids": ["a", "b", "c"]})

    def test_config_option_is_passed_to_builder(self):
        with patch('src.cli.main.build_data_provider') as mock_build:
            mock_build.return_value = Mock(return_value={"data": [], "total": 0})

            result = runner.invoke(app, ["--config", "custom.yaml", "list", "users"])

        assert result.exit_code == ExitCode.SUCCESS
        mock_build.assert_called_once_with("custom.yaml")


class TestExitCodes:
    """Errors map to distinct exit codes."""

    @pytest.mark.parametrize("error,exit_code", [
        (NotFoundError("data/users/a"), ExitCode.NOT_FOUND),
        (InvalidCredentialsError("https://gl.test"), ExitCode.AUTH_ERROR),
        (RemoteError(500, "boom"), ExitCode.REMOTE_ERROR),
        (APIUnreachableError("https://gl.test"), ExitCode.NETWORK_ERROR),
        (DecodeError("data/users/a", "invalid JSON"), ExitCode.GENERAL_ERROR),
        (ValueError("Invalid resource name: ''"), ExitCode.GENERAL_ERROR),
    ])
    def test_error_exit_code(self, data_provider, error, exit_code):
        data_provider.side_effect = error

        result = runner.invoke(app, ["get", "users", "data/users/a"])

        assert result.exit_code == exit_code
        assert str(error) in result.output


class TestGlobalOptions:
    """Test cases for version, help and show-config."""

    def test_version(self):
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert "git-entities version" in result.output

    def test_no_command_shows_help(self):
        result = runner.invoke(app, [])

        assert result.exit_code == 0
        assert "list" in result.output

    @patch('src.cli.main.Authenticator')
    @patch('src.cli.main.ConfigLoader')
    def test_show_config_redacts_token(self, mock_loader, mock_auth):
        mock_loader.load.return_value = ProviderConfig(project_id="group/project")
        mock_auth.return_value.get_credentials.return_value = Mock(token="glpat-supersecret123")

        result = runner.invoke(app, ["--no-color", "show-config"])

        assert result.exit_code == 0
        shown = json.loads(result.stdout)
        assert shown["project_id"] == "group/project"
        assert shown["token"] == "***REDACTED***"
        assert "supersecret" not in result.output

    @patch('src.cli.main.Authenticator')
    @patch('src.cli.main.ConfigLoader')
    def test_show_config_missing_token(self, mock_loader, mock_auth):
        mock_loader.load.return_value = ProviderConfig(project_id="group/project")
        mock_auth.return_value.get_credentials.side_effect = InvalidCredentialsError("https://gitlab.com")

        result = runner.invoke(app, ["--no-color", "show-config"])

        assert result.exit_code == 0
        assert json.loads(result.stdout)["token"] is None
