"""Rich renderables for the task list screen."""

from __future__ import annotations

from collections.abc import Sequence

from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from tasklist.models import Task
from tasklist.store import AppState, Notice

EMPTY_MESSAGE = "No tasks found. Add some tasks to get started!"

PRIORITY_STYLES: dict[str, str] = {
    "high": "bold red",
    "medium": "bold blue",
    "low": "bold green",
}

SORT_LABELS: dict[str, str] = {
    "date": "Sort by Date",
    "title": "Sort by Title",
    "priority": "Sort by Priority",
    "status": "Sort by Status",
}


def render_header() -> RenderableType:
    return Panel.fit(
        "[bold]Task Manager[/bold]\n[dim]Organize your tasks efficiently[/dim]",
        title="tasklist",
    )


def render_notice(notice: Notice) -> RenderableType:
    style = "green" if notice.kind == "success" else "red"
    return Panel(Text(notice.message, style=style), border_style=style, expand=False)


def render_tasks(tasks: Sequence[Task]) -> RenderableType:
    """Table of tasks, or the empty-state message."""
    if not tasks:
        return Panel(Text(EMPTY_MESSAGE, style="dim"), border_style="dim", expand=False)

    table = Table(show_header=True, header_style="bold")
    table.add_column("", width=1)
    table.add_column("Title", style="white", overflow="fold")
    table.add_column("Priority")
    table.add_column("ID", style="cyan", no_wrap=True)

    for task in tasks:
        if task.completed:
            mark = Text("✓", style="green")
            title = Text(task.title, style="dim strike")
        else:
            mark = Text("✗", style="dim")
            title = Text(task.title)
        table.add_row(
            mark,
            title,
            Text(task.priority, style=PRIORITY_STYLES[task.priority]),
            task.id,
        )

    return table


def render_controls(state: AppState) -> RenderableType:
    """One line summarising the selector, search and sort settings."""
    line = Text()
    line.append("Priority: ", style="dim")
    line.append(state.priority, style=PRIORITY_STYLES[state.priority])
    line.append("  Search: ", style="dim")
    line.append(state.query or "(none)")
    line.append("  ", style="dim")
    line.append(SORT_LABELS[state.sort_key], style="cyan")
    return line


def render_screen(state: AppState, visible: Sequence[Task]) -> RenderableType:
    """The full interactive screen for ``state``."""
    parts: list[RenderableType] = [render_header()]
    if state.notice is not None:
        parts.append(render_notice(state.notice))
    parts.append(render_controls(state))
    parts.append(render_tasks(visible))
    return Group(*parts)
