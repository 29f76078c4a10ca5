"""CLI interface for tasklist."""

from __future__ import annotations

import locale
import logging

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from tasklist import __version__
from tasklist.app import TaskManager
from tasklist.config import TasklistConfig
from tasklist.logging_setup import setup_logging
from tasklist.models import PRIORITIES, SORT_KEYS
from tasklist.render import render_notice, render_screen, render_tasks
from tasklist.storage import JsonFileStorage

logger = logging.getLogger(__name__)

console = Console()

SHELL_HELP = """\
[bold]Type a title and press Enter to add a task.[/bold]

  [cyan]/priority low|medium|high[/cyan]   Priority for new tasks
  [cyan]/search TEXT[/cyan]                Filter by title ([cyan]/search[/cyan] alone clears)
  [cyan]/sort date|title|priority|status[/cyan]
  [cyan]/toggle ID[/cyan]                  Mark complete / incomplete
  [cyan]/rm ID[/cyan]                      Delete a task
  [cyan]/help[/cyan]  [cyan]/quit[/cyan]"""


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="tasklist")
@click.option(
    "--file",
    "-f",
    "tasks_file",
    type=click.Path(dir_okay=False),
    help="Task storage file (overrides config)",
)
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
@click.option("--log-file", type=click.Path(dir_okay=False), help="Also write logs to a file")
@click.pass_context
def main(ctx: click.Context, tasks_file: str | None, verbose: bool, log_file: str | None) -> None:
    """tasklist - a small task manager for the terminal.

    Add, complete, delete, search, and sort tasks with a priority tag.

    \b
    Examples:
      tasklist add Write report -p high
      tasklist list --sort priority
      tasklist list -s email
      tasklist shell
    """
    setup_logging(verbose=verbose, log_file=log_file)

    try:
        locale.setlocale(locale.LC_COLLATE, "")
    except locale.Error:
        logger.debug("Could not set collation locale from the environment")

    ctx.ensure_object(dict)
    config = TasklistConfig.load()
    if tasks_file:
        config.storage.path = tasks_file
    ctx.obj["config"] = config

    # If no subcommand, show help
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


def _open_manager(ctx: click.Context) -> TaskManager:
    config: TasklistConfig = ctx.obj["config"]
    storage = JsonFileStorage(config.storage.path, key=config.storage.key)
    return TaskManager(storage, config=config)


def _save_failed(manager: TaskManager) -> bool:
    notice = manager.state.notice
    if notice is not None and notice.kind == "error":
        console.print(render_notice(notice))
        return True
    return False


@main.command()
@click.argument("title", nargs=-1)
@click.option(
    "--priority",
    "-p",
    type=click.Choice(PRIORITIES),
    help="Task priority (default from config)",
)
@click.pass_context
def add(ctx: click.Context, title: tuple[str, ...], priority: str | None) -> None:
    """Add a task.

    \b
    Examples:
      tasklist add Buy milk
      tasklist add "Email team" -p low
    """
    manager = _open_manager(ctx)
    try:
        task = manager.add(" ".join(title), priority)
        if task is None:
            return

        if _save_failed(manager):
            ctx.exit(1)

        if manager.state.notice is not None:
            console.print(render_notice(manager.state.notice))
        console.print(f"[dim]{task.id}[/dim]  {task.priority}")
    finally:
        manager.close()


@main.command("list")
@click.option("--search", "-s", default="", help="Only show titles containing this text")
@click.option("--sort", "sort_key", type=click.Choice(SORT_KEYS), help="Sort order")
@click.pass_context
def list_tasks(ctx: click.Context, search: str, sort_key: str | None) -> None:
    """List tasks, filtered and sorted."""
    manager = _open_manager(ctx)
    try:
        manager.search(search)
        if sort_key:
            manager.sort_by(sort_key)
        console.print(render_tasks(manager.visible_tasks()))
    finally:
        manager.close()


@main.command()
@click.argument("task_id")
@click.pass_context
def toggle(ctx: click.Context, task_id: str) -> None:
    """Mark a task complete, or incomplete again."""
    manager = _open_manager(ctx)
    try:
        if not manager.toggle(task_id):
            return

        if _save_failed(manager):
            ctx.exit(1)

        for task in manager.tasks:
            if task.id == task_id:
                if task.completed:
                    console.print(f"[green]Completed:[/green] {escape(task.title)}", highlight=False)
                else:
                    console.print(f"[yellow]Reopened:[/yellow] {escape(task.title)}", highlight=False)
                break
    finally:
        manager.close()


@main.command("rm")
@click.argument("task_id")
@click.pass_context
def remove(ctx: click.Context, task_id: str) -> None:
    """Delete a task."""
    manager = _open_manager(ctx)
    try:
        if not manager.remove(task_id):
            return

        if _save_failed(manager):
            ctx.exit(1)

        console.print(f"[green]Deleted:[/green] {task_id}")
    finally:
        manager.close()


@main.command()
@click.pass_context
def shell(ctx: click.Context) -> None:
    """Interactive task list.

    Type a title to add it; commands start with a slash. Try /help.
    """
    manager = _open_manager(ctx)
    try:
        while True:
            console.print(render_screen(manager.state, manager.visible_tasks()))
            try:
                line = console.input("[bold]> [/bold]")
            except (EOFError, KeyboardInterrupt):
                console.print()
                break
            if not run_shell_command(manager, line):
                break
    finally:
        manager.close()


def run_shell_command(manager: TaskManager, line: str) -> bool:
    """Handle one line of shell input. Returns False when the user quits."""
    text = line.strip()

    if not text.startswith("/"):
        # Plain input is the new task title
        manager.set_draft(line)
        manager.add()
        return True

    name, _, arg = text[1:].partition(" ")
    name = name.lower()
    arg = arg.strip()

    try:
        if name in ("quit", "q", "exit"):
            return False
        elif name in ("help", "h", "?"):
            console.print(SHELL_HELP)
        elif name in ("priority", "p"):
            manager.select_priority(arg)
        elif name in ("search", "s"):
            manager.search(arg)
        elif name == "sort":
            manager.sort_by(arg)
        elif name in ("toggle", "t"):
            manager.toggle(arg)
        elif name in ("rm", "d", "delete"):
            manager.remove(arg)
        else:
            console.print(f"[red]Unknown command:[/red] /{escape(name)}. Try [cyan]/help[/cyan]")
    except ValueError as e:
        console.print(f"[red]{escape(str(e))}[/red]", highlight=False)

    return True


@main.command("config")
@click.pass_context
def show_config(ctx: click.Context) -> None:
    """Show the effective configuration."""
    config: TasklistConfig = ctx.obj["config"]

    table = Table(title="Configuration", show_header=True)
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="white")
    table.add_row("Storage file", config.storage.path)
    table.add_row("Storage key", config.storage.key)
    table.add_row("Notice duration", f"{config.notice_seconds:g} seconds")
    table.add_row("Default sort", config.default_sort)
    table.add_row("Default priority", config.default_priority)

    console.print(table)
