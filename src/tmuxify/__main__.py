"""CLI entry point for tmuxify."""

import os
from pathlib import Path
from typing import Annotated

import click
import typer
from rich.console import Console
from rich.markup import escape
from typer.core import TyperGroup

from tmuxify import __version__
from tmuxify.client import TmuxClient, is_inside_tmux
from tmuxify.config import display_config_warnings, load_config
from tmuxify.document import load_document
from tmuxify.errors import TmuxifyError
from tmuxify.interpreter import SessionOutcome, provision
from tmuxify.projects import create_project, delete_project, edit_project, list_projects, validate_project_name
from tmuxify.xdg_paths import get_project_path, resolve_document_path

DEFAULT_COMMAND = "open"


class _DefaultCommandGroup(TyperGroup):
    """Route `tmuxify [PROJECT] [OPTIONS]` to the default command."""

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        if not args or (args[0] not in self.commands and args[0] not in ("--help", "--version")):
            args = [DEFAULT_COMMAND, *args]
        return super().parse_args(ctx, args)


app = typer.Typer(
    name="tmuxify",
    help="Provision tmux sessions from YAML layout documents.",
    cls=_DefaultCommandGroup,
    no_args_is_help=False,
)

console = Console()
err_console = Console(stderr=True)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"tmuxify {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option("--version", callback=version_callback, is_eager=True, help="Show version."),
    ] = None,
) -> None:
    """Provision tmux sessions from YAML layout documents."""


def _resolve_editor(config_editor: str | None) -> str:
    return config_editor or os.environ.get("EDITOR", "vi")


def _check_project_name(name: str) -> None:
    try:
        validate_project_name(name)
    except ValueError as e:
        err_console.print(f"[red]Error:[/] {escape(str(e))}")
        raise typer.Exit(1) from None


def _open_in_editor(name: str, config_path: Path | None) -> None:
    config, _warnings = load_config(config_path)
    try:
        edit_project(name, _resolve_editor(config.editor))
    except TmuxifyError as e:
        err_console.print(f"[red]Error:[/] {escape(str(e))}")
        raise typer.Exit(1) from None


@app.command(DEFAULT_COMMAND)
def open_project(
    project: Annotated[
        str | None,
        typer.Argument(help="Project name (loads ~/.config/tmuxify/<project>.yml)."),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", "-n", help="Preview commands without executing."),
    ] = False,
    strict: Annotated[
        bool,
        typer.Option("--strict", help="Abort on the first tmux operation that fails."),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show what is being loaded and any failed tmux operations."),
    ] = False,
    config_path: Annotated[
        Path | None,
        typer.Option("--config", "-C", help="Config file path."),
    ] = None,
) -> None:
    """Create the project's tmux session (or attach if it is running)."""
    config, config_warnings = load_config(config_path)
    if config_warnings:
        display_config_warnings(config_warnings, err_console)

    if project:
        _check_project_name(project)
    document_path = resolve_document_path(project, config.default_document)
    if verbose:
        if project:
            console.print(f"[dim]Project: {escape(project)}[/]")
        console.print(f"[dim]Document: {document_path}[/]")

    try:
        document = load_document(document_path)
    except TmuxifyError as e:
        err_console.print(f"[red]Error:[/] {escape(str(e))}")
        raise typer.Exit(1) from None

    if verbose:
        console.print(f"[dim]Session: {escape(document.name)} ({len(document.windows)} windows)[/]")

    if is_inside_tmux() and not dry_run:
        err_console.print("[red]Error:[/] Already inside a tmux session.")
        err_console.print("[dim]Detach first, or use --dry-run to preview.[/]")
        raise typer.Exit(1)

    client = TmuxClient(config.tmux_binary, dry_run=dry_run)
    try:
        outcome = provision(client, document, strict=strict or config.strict, verbose=verbose)
    except TmuxifyError as e:
        err_console.print(f"[red]Error:[/] {escape(str(e))}")
        raise typer.Exit(1) from None

    if dry_run:
        if outcome == SessionOutcome.ATTACHED:
            console.print(f"[blue]Session already running:[/] {escape(document.name)}")
        else:
            console.print(f"[green]Would create session:[/] {escape(document.name)}")
        console.print("[yellow]Commands that would be executed:[/]")
        for cmd in client.commands:
            console.print(f"  {cmd}", markup=False, highlight=False)


@app.command("new")
def new_project(
    name: Annotated[str, typer.Argument(help="Name for the new project.")],
    edit: Annotated[
        bool,
        typer.Option("--edit/--no-edit", "-e/-E", help="Open the new document in the editor."),
    ] = True,
    config_path: Annotated[
        Path | None,
        typer.Option("--config", "-C", help="Config file path."),
    ] = None,
) -> None:
    """Create a starter layout document for a project."""
    try:
        path = create_project(name)
    except (ValueError, FileExistsError) as e:
        err_console.print(f"[red]Error:[/] {escape(str(e))}")
        raise typer.Exit(1) from None

    console.print(f"[green]✓[/] Created project document: {path}")
    if edit:
        _open_in_editor(name, config_path)


@app.command("edit")
def edit_existing_project(
    name: Annotated[str, typer.Argument(help="Name of the project to edit.")],
    config_path: Annotated[
        Path | None,
        typer.Option("--config", "-C", help="Config file path."),
    ] = None,
) -> None:
    """Open a project's layout document in the editor."""
    _check_project_name(name)
    if not get_project_path(name).exists():
        err_console.print(f"[red]Error:[/] Project '{escape(name)}' not found.")
        err_console.print(f"[dim]Use 'tmuxify new {escape(name)}' to create it.[/]")
        raise typer.Exit(1)

    _open_in_editor(name, config_path)


@app.command("delete")
def delete_existing_project(
    name: Annotated[str, typer.Argument(help="Name of the project to delete.")],
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Delete without asking for confirmation."),
    ] = False,
) -> None:
    """Delete a project's layout document."""
    _check_project_name(name)
    path = get_project_path(name)
    if not path.exists():
        err_console.print(f"[red]Error:[/] Project '{escape(name)}' not found.")
        raise typer.Exit(1)

    if not yes and not typer.confirm(f"Delete {path}?"):
        console.print("[yellow]Cancelled.[/]")
        return

    delete_project(name)
    console.print(f"[green]✓[/] Project '{escape(name)}' deleted.")


@app.command("list")
def list_existing_projects() -> None:
    """List projects with a layout document."""
    from rich.table import Table

    names = list_projects()
    if not names:
        console.print("[yellow]No projects found.[/]")
        console.print("[dim]Use 'tmuxify new <name>' to create one.[/]")
        return

    table = Table(title="Projects")
    table.add_column("Name", style="cyan")
    table.add_column("Document", style="dim")
    for name in names:
        table.add_row(name, str(get_project_path(name)))
    console.print(table)


if __name__ == "__main__":
    app()
