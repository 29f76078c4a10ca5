"""Application state and the pure transitions that change it.

Every user intent is an action. ``reduce`` takes the current state and an
action and returns the next state without touching storage, timers or the
terminal. When an action leaves the task collection alone, the returned
state carries the very same ``tasks`` tuple, so callers can tell whether
the collection changed with an identity check.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Literal, Union

from tasklist.models import PRIORITIES, SORT_KEYS, Priority, SortKey, Task

ADDED_MESSAGE = "Task added successfully!"

NoticeKind = Literal["success", "error"]


@dataclass(frozen=True)
class Notice:
    """A transient message shown above the task list."""

    message: str
    kind: NoticeKind = "success"
    seq: int = 0


@dataclass(frozen=True)
class AppState:
    """Everything the task list screen needs to render."""

    tasks: tuple[Task, ...] = ()
    draft: str = ""
    query: str = ""
    sort_key: SortKey = "date"
    priority: Priority = "medium"
    notice: Notice | None = None
    notice_seq: int = 0

    @property
    def notice_visible(self) -> bool:
        return self.notice is not None


@dataclass(frozen=True)
class AddTask:
    """Append a task. Title and priority fall back to the draft and selector."""

    task_id: str
    created_at: datetime
    title: str | None = None
    priority: Priority | None = None


@dataclass(frozen=True)
class RemoveTask:
    task_id: str


@dataclass(frozen=True)
class ToggleTask:
    task_id: str


@dataclass(frozen=True)
class SetDraft:
    text: str


@dataclass(frozen=True)
class SetQuery:
    query: str


@dataclass(frozen=True)
class SetSort:
    sort_key: str


@dataclass(frozen=True)
class SetPriority:
    priority: str


@dataclass(frozen=True)
class ShowNotice:
    message: str
    kind: NoticeKind = "success"


@dataclass(frozen=True)
class DismissNotice:
    """Clear the notice with this sequence number, if it is still showing."""

    seq: int


Action = Union[
    AddTask,
    RemoveTask,
    ToggleTask,
    SetDraft,
    SetQuery,
    SetSort,
    SetPriority,
    ShowNotice,
    DismissNotice,
]


def initial_state(
    tasks: tuple[Task, ...] = (),
    sort_key: SortKey = "date",
    priority: Priority = "medium",
) -> AppState:
    """Build the starting state from a loaded collection."""
    return AppState(tasks=tuple(tasks), sort_key=sort_key, priority=priority)


def reduce(state: AppState, action: Action) -> AppState:
    """Apply ``action`` to ``state`` and return the resulting state."""
    if isinstance(action, AddTask):
        return _add_task(state, action)
    elif isinstance(action, RemoveTask):
        return _remove_task(state, action.task_id)
    elif isinstance(action, ToggleTask):
        return _toggle_task(state, action.task_id)
    elif isinstance(action, SetDraft):
        return replace(state, draft=action.text)
    elif isinstance(action, SetQuery):
        return replace(state, query=action.query)
    elif isinstance(action, SetSort):
        return replace(state, sort_key=_check_sort_key(action.sort_key))
    elif isinstance(action, SetPriority):
        return replace(state, priority=_check_priority(action.priority))
    elif isinstance(action, ShowNotice):
        return _show_notice(state, action.message, action.kind)
    elif isinstance(action, DismissNotice):
        if state.notice is not None and state.notice.seq == action.seq:
            return replace(state, notice=None)
        return state
    else:
        raise TypeError(f"Unknown action: {action!r}")


def _add_task(state: AppState, action: AddTask) -> AppState:
    raw_title = state.draft if action.title is None else action.title
    title = raw_title.strip()
    if not title:
        return state

    priority = _check_priority(action.priority or state.priority)
    task = Task(
        id=action.task_id,
        title=title,
        completed=False,
        priority=priority,
        created_at=action.created_at,
    )
    state = replace(state, tasks=state.tasks + (task,), draft="")
    return _show_notice(state, ADDED_MESSAGE, "success")


def _remove_task(state: AppState, task_id: str) -> AppState:
    remaining = tuple(task for task in state.tasks if task.id != task_id)
    if len(remaining) == len(state.tasks):
        return state
    return replace(state, tasks=remaining)


def _toggle_task(state: AppState, task_id: str) -> AppState:
    if not any(task.id == task_id for task in state.tasks):
        return state
    tasks = tuple(task.toggled() if task.id == task_id else task for task in state.tasks)
    return replace(state, tasks=tasks)


def _show_notice(state: AppState, message: str, kind: NoticeKind) -> AppState:
    seq = state.notice_seq + 1
    return replace(state, notice=Notice(message=message, kind=kind, seq=seq), notice_seq=seq)


def _check_sort_key(value: str) -> SortKey:
    if value not in SORT_KEYS:
        raise ValueError(f"Unknown sort key: {value!r} (expected one of {', '.join(SORT_KEYS)})")
    return value  # type: ignore[return-value]


def _check_priority(value: str) -> Priority:
    if value not in PRIORITIES:
        raise ValueError(f"Unknown priority: {value!r} (expected one of {', '.join(PRIORITIES)})")
    return value  # type: ignore[return-value]
