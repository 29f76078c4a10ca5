"""Derived views of the task list.

Nothing here is stored. The visible list is recomputed from the current
state on every render: filter first, then sort.
"""

from __future__ import annotations

import locale
import unicodedata
from collections.abc import Iterable

from tasklist.models import PRIORITY_RANK, SORT_KEYS, Task
from tasklist.store import AppState


def filter_tasks(tasks: Iterable[Task], query: str) -> list[Task]:
    """Return tasks whose title contains ``query``, ignoring case.

    An empty query matches everything and keeps the original order.
    """
    needle = query.casefold()
    if not needle:
        return list(tasks)
    return [task for task in tasks if needle in task.title.casefold()]


def sort_tasks(tasks: Iterable[Task], key: str) -> list[Task]:
    """Return a sorted copy of ``tasks``.

    - ``date``: newest first
    - ``title``: alphabetical, accents and case only breaking ties, then
      ordered by the current locale's collation
    - ``priority``: high, medium, low
    - ``status``: open tasks before completed ones
    """
    items = list(tasks)
    if key == "date":
        items.sort(key=lambda t: t.created_at, reverse=True)
    elif key == "title":
        items.sort(key=_title_key)
    elif key == "priority":
        items.sort(key=lambda t: PRIORITY_RANK[t.priority])
    elif key == "status":
        items.sort(key=lambda t: t.completed)
    else:
        raise ValueError(f"Unknown sort key: {key!r} (expected one of {', '.join(SORT_KEYS)})")
    return items


def _title_key(task: Task) -> tuple[str, str, str]:
    # Base letters first, then accents, then case, as a collator compares them
    folded = task.title.casefold()
    decomposed = unicodedata.normalize("NFKD", folded)
    base = "".join(c for c in decomposed if not unicodedata.combining(c))
    return (locale.strxfrm(base), locale.strxfrm(folded), task.title)


def derive_view(state: AppState) -> list[Task]:
    """The list as it should be displayed for ``state``."""
    return sort_tasks(filter_tasks(state.tasks, state.query), state.sort_key)
