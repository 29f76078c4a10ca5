"""Persistence for the task collection.

The core only talks to the ``TaskStorage`` port. Adapters decide where the
collection lives: a JSON file on disk, or a dict in memory. Both behave like
a key-value store with one slot holding the whole task array; every save
overwrites that slot.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol

from pydantic import ValidationError

from tasklist.config import TASKS_FILE
from tasklist.models import Task, dump_tasks, parse_tasks

logger = logging.getLogger(__name__)

DEFAULT_KEY = "tasks"


@dataclass(frozen=True)
class SaveResult:
    """Outcome of a save. ``error`` is set when ``ok`` is False."""

    ok: bool
    error: str | None = None


class TaskStorage(Protocol):
    """Port used by the task manager to load and persist the collection."""

    def load(self) -> tuple[Task, ...]: ...

    def save(self, tasks: Iterable[Task]) -> SaveResult: ...


def _decode_slot(raw: Any, source: str) -> tuple[Task, ...]:
    """Validate a slot's contents, falling back to an empty collection."""
    if raw is None:
        return ()
    try:
        return parse_tasks(raw)
    except ValidationError as e:
        logger.warning("Ignoring malformed tasks in %s: %d error(s)", source, e.error_count())
        return ()


class JsonFileStorage:
    """Store the task array under ``key`` in a JSON object on disk.

    Other keys in the same file are left untouched.
    """

    def __init__(self, path: Path | str = TASKS_FILE, key: str = DEFAULT_KEY) -> None:
        self.path = Path(path)
        self.key = key

    def _read_document(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Could not read %s: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring %s: expected a JSON object", self.path)
            return {}
        return data

    def load(self) -> tuple[Task, ...]:
        """Load the collection; absent or unreadable data gives an empty one."""
        tasks = _decode_slot(self._read_document().get(self.key), str(self.path))
        logger.debug("Loaded %d task(s) from %s", len(tasks), self.path)
        return tasks

    def save(self, tasks: Iterable[Task]) -> SaveResult:
        """Overwrite the slot with the full collection."""
        document = self._read_document()
        document[self.key] = dump_tasks(tasks)

        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(document, f, indent=2, ensure_ascii=False)
            os.replace(tmp_path, self.path)
        except OSError as e:
            tmp_path.unlink(missing_ok=True)
            logger.error("Could not save tasks to %s: %s", self.path, e)
            return SaveResult(ok=False, error=str(e))

        logger.debug("Saved %d task(s) to %s", len(document[self.key]), self.path)
        return SaveResult(ok=True)


class MemoryStorage:
    """Keep serialised slots in a dict, like browser local storage."""

    def __init__(self, key: str = DEFAULT_KEY, slots: dict[str, str] | None = None) -> None:
        self.key = key
        self.slots: dict[str, str] = {} if slots is None else slots

    def load(self) -> tuple[Task, ...]:
        raw = self.slots.get(self.key)
        if raw is None:
            return ()
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning("Could not parse memory slot %r: %s", self.key, e)
            return ()
        return _decode_slot(data, f"memory slot {self.key!r}")

    def save(self, tasks: Iterable[Task]) -> SaveResult:
        self.slots[self.key] = json.dumps(dump_tasks(tasks))
        return SaveResult(ok=True)
