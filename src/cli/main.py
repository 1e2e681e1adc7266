"""Main CLI entry point for the git-entities command.

This module provides the Typer application that exposes the entity data
provider on the command line. Every command maps to one data provider
request and prints the result as JSON.
"""

import json
import logging
import sys
from dataclasses import asdict, dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

import typer

from src.entity_store.data_provider import (
    CREATE,
    DELETE,
    DELETE_MANY,
    GET_LIST,
    GET_MANY,
    GET_ONE,
    UPDATE,
    UPDATE_MANY,
    DataProvider,
)
from src.entity_store.dispatcher import ResourceDispatcher
from src.gitlab_client.api_wrapper import GitLabClient
from src.gitlab_client.auth import Authenticator
from src.gitlab_client.errors import (
    APIUnreachableError,
    GitProviderError,
    InvalidCredentialsError,
    NotFoundError,
    RemoteError,
)
from src.cli.config import ConfigLoader
from src.cli.errors import InvalidInputError
from src.cli.models import ExitCode
from src.cli.output import OutputHandler

__version__ = "0.1.0"

app = typer.Typer(
    name="git-entities",
    help="""Browse and edit JSON entities stored in a GitLab repository.

QUICK START:
  git-entities list users                          # First page of data/users
  git-entities get users data/users/<id>           # One entity
  git-entities create users --data '{"name": "Ada"}'
  git-entities delete users data/users/<id> data/users/<id2>   # One commit
  git-entities list pipelines                      # CI pipelines of the ref""",
    add_completion=False,
    rich_markup_mode=None,
    no_args_is_help=False,
)

logger = logging.getLogger(__name__)


@dataclass
class CLIState:
    """Global options shared by all commands."""
    config_path: Optional[str] = None
    verbosity: int = 0
    no_color: bool = False


def _configure_logging(verbosity: int, logdir: Optional[str] = None) -> None:
    """Configure logging based on verbosity level.

    Configures only the 'src' namespace logger to avoid affecting third-party
    libraries (requests, urllib3). The root logger is left unchanged.

    Args:
        verbosity: Verbosity level (0=WARNING, 1=INFO, 2=DEBUG)
        logdir: Optional directory for log files (creates timestamped log file)
    """
    if verbosity == 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG

    app_logger = logging.getLogger("src")
    app_logger.setLevel(level)
    app_logger.handlers.clear()

    date_format = "%Y-%m-%d %H:%M:%S"
    formatter = logging.Formatter("%(asctime)s [%(levelname)8s] %(message)s", datefmt=date_format)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    app_logger.addHandler(console_handler)

    if logdir:
        log_path = Path(logdir)
        log_path.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = log_path / f"git-entities_{timestamp}.log"

        file_formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt=date_format,
        )
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(file_formatter)
        app_logger.addHandler(file_handler)

        logger.info(f"Logging to file: {log_file}")


def build_data_provider(config_path: Optional[str]) -> DataProvider:
    """Wire configuration, credentials, client and dispatcher together."""
    config = ConfigLoader.load(config_path)
    auth = Authenticator()
    client = GitLabClient(
        host=config.host,
        token_provider=auth.get_token,
        api_version=config.api_version,
        timeout=config.timeout,
    )
    return DataProvider(ResourceDispatcher(client, config))


def _parse_data(value: str, option: str = "--data") -> Dict[str, Any]:
    try:
        data = json.loads(value)
    except json.JSONDecodeError as e:
        raise InvalidInputError(option, f"not valid JSON ({e})")
    if not isinstance(data, dict):
        raise InvalidInputError(option, "expected a JSON object")
    return data


def _exit_code_for(error: Exception) -> ExitCode:
    if isinstance(error, NotFoundError):
        return ExitCode.NOT_FOUND
    if isinstance(error, InvalidCredentialsError):
        return ExitCode.AUTH_ERROR
    if isinstance(error, RemoteError):
        return ExitCode.REMOTE_ERROR
    if isinstance(error, APIUnreachableError):
        return ExitCode.NETWORK_ERROR
    return ExitCode.GENERAL_ERROR


def _run(ctx: typer.Context, request_type: str, resource: str, build_params) -> None:
    """Run one data provider request and print its result.

    Args:
        ctx: Typer context holding CLIState
        request_type: Data provider request type (GET_LIST, CREATE, ...)
        resource: Resource name
        build_params: Callable returning the request params; called inside
            the error handler so input errors map to exit codes too
    """
    state: CLIState = ctx.obj or CLIState()
    output = OutputHandler(verbosity=state.verbosity, no_color=state.no_color)

    try:
        params = build_params()
        data_provider = build_data_provider(state.config_path)
        with output.spinner(f"{request_type} {resource}..."):
            result = data_provider(request_type, resource, params)
    except (GitProviderError, ValueError) as e:
        exit_code = _exit_code_for(e)
        logger.error(f"{request_type} {resource} failed: {e}")
        output.error(str(e))
        raise typer.Exit(exit_code)

    output.print_json(result)


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    config: Optional[str] = typer.Option(
        None,
        "--config",
        "-c",
        help="YAML config file (default: .git-entities.yaml if present)",
        metavar="FILE",
    ),
    verbosity: int = typer.Option(
        0,
        "--verbosity",
        "-v",
        help="Verbosity level: 0=errors only, 1=info, 2=debug",
    ),
    logdir: Optional[str] = typer.Option(
        None,
        "--logdir",
        help="Directory for log files (creates timestamped log file)",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit",
    ),
) -> None:
    if version:
        typer.echo(f"git-entities version {__version__}")
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()

    _configure_logging(verbosity, logdir)
    ctx.obj = CLIState(config_path=config, verbosity=verbosity, no_color=no_color)


@app.command("list")
def list_command(
    ctx: typer.Context,
    resource: str = typer.Argument(..., help="Resource name (e.g. users, pipelines)"),
    page: int = typer.Option(1, "--page", "-p", help="1-based page number"),
    per_page: int = typer.Option(10, "--per-page", "-n", help="Entities per page"),
) -> None:
    """List one page of a resource."""
    _run(ctx, GET_LIST, resource, lambda: {"pagination": {"page": page, "perPage": per_page}})


@app.command("get")
def get_command(
    ctx: typer.Context,
    resource: str = typer.Argument(..., help="Resource name"),
    ids: List[str] = typer.Argument(..., help="Entity id(s)"),
) -> None:
    """Fetch one or more entities by id."""
    if len(ids) == 1:
        _run(ctx, GET_ONE, resource, lambda: {"id": ids[0]})
    else:
        _run(ctx, GET_MANY, resource, lambda: {"ids": ids})


@app.command("create")
def create_command(
    ctx: typer.Context,
    resource: str = typer.Argument(..., help="Resource name"),
    data: str = typer.Option(..., "--data", "-d", help="Entity fields as a JSON object"),
) -> None:
    """Create an entity (one commit)."""
    _run(ctx, CREATE, resource, lambda: {"data": _parse_data(data)})


@app.command("update")
def update_command(
    ctx: typer.Context,
    resource: str = typer.Argument(..., help="Resource name"),
    id: str = typer.Argument(..., help="Entity id"),
    data: str = typer.Option(..., "--data", "-d", help="Replacement fields as a JSON object"),
) -> None:
    """Overwrite an entity (one commit, last writer wins)."""
    _run(ctx, UPDATE, resource, lambda: {"id": id, "data": _parse_data(data)})


@app.command("update-many")
def update_many_command(
    ctx: typer.Context,
    resource: str = typer.Argument(..., help="Resource name"),
    ids: List[str] = typer.Argument(..., help="Entity ids"),
    data: str = typer.Option(..., "--data", "-d", help="Fields written to every entity"),
) -> None:
    """Overwrite several entities in a single commit."""
    _run(ctx, UPDATE_MANY, resource, lambda: {"ids": ids, "data": _parse_data(data)})


@app.command("delete")
def delete_command(
    ctx: typer.Context,
    resource: str = typer.Argument(..., help="Resource name"),
    ids: List[str] = typer.Argument(..., help="Entity id(s)"),
    previous_data: Optional[str] = typer.Option(
        None,
        "--previous-data",
        help="JSON echoed back as the deleted entity (single id only)",
    ),
) -> None:
    """Delete one or more entities in a single commit."""
    if len(ids) == 1:
        def _params() -> Dict[str, Any]:
            previous = _parse_data(previous_data, "--previous-data") if previous_data else {"id": ids[0]}
            return {"id": ids[0], "previousData": previous}
        _run(ctx, DELETE, resource, _params)
    else:
        _run(ctx, DELETE_MANY, resource, lambda: {"ids": ids})


@app.command("show-config")
def show_config_command(ctx: typer.Context) -> None:
    """Print the effective configuration (token redacted)."""
    state: CLIState = ctx.obj or CLIState()
    output = OutputHandler(verbosity=state.verbosity, no_color=state.no_color)
    try:
        config = ConfigLoader.load(state.config_path)
    except GitProviderError as e:
        output.error(str(e))
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    try:
        Authenticator().get_credentials()
        token_status = "***REDACTED***"
    except InvalidCredentialsError:
        token_status = None

    output.print_json({**asdict(config), "token": token_status})


def main() -> None:
    """Main entry point for the CLI application."""
    app()


# Allow running as: python -m src.cli.main
if __name__ == "__main__":
    main()
