"""Command line interface for slack-cmd."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, Union

import typer

from .config import load_settings
from .errors import SlackCmdError
from .service import SlackCmdService
from .store import find_workspace, list_names, resolve_current

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="Send messages and upload files to Slack channels from the terminal.",
)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# Builds the service each command runs against.
make_service = SlackCmdService


@contextmanager
def _reporting_errors() -> Iterator[None]:
    try:
        yield
    except SlackCmdError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc


def _configure_logging(level_name: str, verbose: bool) -> None:
    level = logging.getLevelName(level_name)
    if verbose:
        level = logging.DEBUG
    elif not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=[logging.StreamHandler()])


@app.callback()
def main(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(
        None, "--config", help="Credential store to use instead of ~/.slack_uploader.toml."
    ),
    env_file: Optional[Path] = typer.Option(None, "--env-file", help="Read settings from this .env file."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log HTTP calls and decisions."),
) -> None:
    with _reporting_errors():
        settings = load_settings(str(env_file) if env_file else None)
    if config is not None:
        settings.store_path = config.expanduser()
    _configure_logging(settings.log_level, verbose)
    ctx.obj = make_service(settings)


@app.command("add-token")
def add_token(
    ctx: typer.Context,
    token: str = typer.Argument(..., help="Slack API token to register."),
    yes: bool = typer.Option(False, "--yes", "-y", help="Register without asking for confirmation."),
) -> None:
    """Validate TOKEN and store its workspace in the credential store."""

    service: SlackCmdService = ctx.obj
    if not token.strip():
        typer.echo("Usage: add-token token\nPlease provide a valid token.", err=True)
        raise typer.Exit(code=1)

    with _reporting_errors():
        workspace = service.fetch_workspace(token)
        registered = find_workspace(service.load(), workspace.id) is not None

    action = "overwrite" if registered else "add"
    if not yes and not typer.confirm(f"Are you sure to {action} workspace {workspace.name}?"):
        typer.echo("Operation cancelled.")
        return

    with _reporting_errors():
        service.register(workspace)
    typer.echo(f"Workspace {workspace.name} registered.")


@app.command()
def switch(
    ctx: typer.Context,
    workspace: Optional[str] = typer.Argument(
        None, help="Workspace id or name. Prompts for a choice when omitted."
    ),
) -> None:
    """Change the workspace later commands act on."""

    service: SlackCmdService = ctx.obj
    with _reporting_errors():
        store = service.load()
    if not store.workspaces:
        typer.echo("No workspace is registered.")
        return

    selection: Union[int, str]
    if workspace is None:
        current_name, _ = resolve_current(store)
        typer.echo(f'Current workspace is "{current_name}".')
        for number, name in enumerate(list_names(store), start=1):
            typer.echo(f"  {number}) {name}")
        choice = typer.prompt("Select workspace", type=int)
        while not 1 <= choice <= len(store.workspaces):
            typer.echo(f"Choose a number between 1 and {len(store.workspaces)}.", err=True)
            choice = typer.prompt("Select workspace", type=int)
        selection = choice - 1
    else:
        selection = workspace

    with _reporting_errors():
        chosen = service.switch(selection)
    typer.echo(f"Switched to {chosen.name}")


@app.command("workspaces")
def list_workspaces(ctx: typer.Context) -> None:
    """Show registered workspaces, marking the current one."""

    service: SlackCmdService = ctx.obj
    with _reporting_errors():
        store = service.load()
    if not store.workspaces:
        typer.echo("No workspace is registered.")
        return
    for workspace in store.workspaces:
        marker = "*" if workspace.token == store.current_workspace_token else " "
        typer.echo(f"{marker} {workspace.name} ({workspace.domain})")


@app.command("list")
def list_channels(ctx: typer.Context) -> None:
    """List channels you can post into in the current workspace."""

    service: SlackCmdService = ctx.obj
    with _reporting_errors():
        workspace_name, channels = service.list_channels()

    typer.echo(f"Channels you join in workspace {workspace_name} are,")
    for channel in channels:
        if channel.is_direct_message:
            description = f"Direct message to {channel.name}."
        else:
            description = channel.purpose
        typer.echo(f"{channel.name}:  {description}")


@app.command()
def message(
    ctx: typer.Context,
    channel: str = typer.Argument(..., help="Channel id or name."),
    text: str = typer.Argument(..., help="Message content."),
) -> None:
    """Send TEXT to CHANNEL."""

    service: SlackCmdService = ctx.obj
    with _reporting_errors():
        target = service.send_message(channel, text)
    typer.echo(f"Message successfully sent to {target.name}")


@app.command()
def upload(
    ctx: typer.Context,
    channel: str = typer.Argument(..., help="Channel id or name."),
    path: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True, help="File to upload."),
    title: Optional[str] = typer.Option(None, "-t", "--title", help="Title for the uploaded file."),
    comment: Optional[str] = typer.Option(None, "-m", "--comment", help="Initial comment for the file."),
) -> None:
    """Upload the file at PATH to CHANNEL."""

    service: SlackCmdService = ctx.obj
    with _reporting_errors():
        target = service.upload_file(channel, path, title=title, comment=comment)
    typer.echo(f"Uploaded {path} to {target.name}.")


__all__ = ["app"]
