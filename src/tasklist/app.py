"""The task manager: owns state, storage and the notice timer."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from datetime import datetime

from tasklist.config import TasklistConfig
from tasklist.models import Task, generate_task_id, utc_now
from tasklist.notifier import NoticeTimer, TimerFactory
from tasklist.storage import TaskStorage
from tasklist.store import (
    Action,
    AddTask,
    AppState,
    DismissNotice,
    RemoveTask,
    SetDraft,
    SetPriority,
    SetQuery,
    SetSort,
    ShowNotice,
    ToggleTask,
    initial_state,
    reduce,
)
from tasklist.view import derive_view

logger = logging.getLogger(__name__)


class TaskManager:
    """Single owner of the application state.

    All changes go through ``dispatch``. When an action changes the task
    collection, the whole collection is written back to storage. Whenever a
    new notice appears, the notice timer restarts so the notice hides after
    ``config.notice_seconds``.
    """

    def __init__(
        self,
        storage: TaskStorage,
        *,
        config: TasklistConfig | None = None,
        timer_factory: TimerFactory = threading.Timer,
        id_factory: Callable[[], str] = generate_task_id,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.config = config or TasklistConfig()
        self._storage = storage
        self._id_factory = id_factory
        self._clock = clock
        # Re-entrant: a failed save dispatches an error notice while locked
        self._lock = threading.RLock()
        self._timer = NoticeTimer(
            self.config.notice_seconds,
            self._dismiss_notice,
            timer_factory=timer_factory,
        )
        self._state = initial_state(
            storage.load(),
            sort_key=self.config.default_sort,
            priority=self.config.default_priority,
        )

    @property
    def state(self) -> AppState:
        return self._state

    @property
    def tasks(self) -> tuple[Task, ...]:
        return self._state.tasks

    @property
    def notice_visible(self) -> bool:
        return self._state.notice_visible

    def dispatch(self, action: Action) -> AppState:
        """Apply an action, persisting and scheduling as needed."""
        with self._lock:
            old = self._state
            new = reduce(old, action)
            self._state = new
            logger.debug("Dispatched %s", type(action).__name__)

            if new.notice is not None and new.notice is not old.notice:
                self._timer.start(new.notice.seq)

            if new.tasks is not old.tasks:
                result = self._storage.save(new.tasks)
                if not result.ok:
                    self.dispatch(ShowNotice(f"Could not save tasks: {result.error}", "error"))

            return self._state

    def add(self, title: str | None = None, priority: str | None = None) -> Task | None:
        """Add a task; returns it, or None when the title was blank."""
        before = self._state.tasks
        state = self.dispatch(
            AddTask(
                task_id=self._id_factory(),
                created_at=self._clock(),
                title=title,
                priority=priority,  # type: ignore[arg-type]
            )
        )
        if state.tasks is before:
            return None
        return state.tasks[len(before)]

    def remove(self, task_id: str) -> bool:
        """Delete a task. Returns True if one was removed."""
        before = self._state.tasks
        return self.dispatch(RemoveTask(task_id)).tasks is not before

    def toggle(self, task_id: str) -> bool:
        """Flip a task's completion. Returns True if one was found."""
        before = self._state.tasks
        return self.dispatch(ToggleTask(task_id)).tasks is not before

    def set_draft(self, text: str) -> None:
        self.dispatch(SetDraft(text))

    def search(self, query: str) -> None:
        self.dispatch(SetQuery(query))

    def sort_by(self, sort_key: str) -> None:
        self.dispatch(SetSort(sort_key))

    def select_priority(self, priority: str) -> None:
        self.dispatch(SetPriority(priority))

    def visible_tasks(self) -> list[Task]:
        """Filtered and sorted tasks for display."""
        return derive_view(self._state)

    def close(self) -> None:
        """Cancel any pending notice timer."""
        self._timer.cancel()

    def _dismiss_notice(self, seq: int) -> None:
        self.dispatch(DismissNotice(seq))
