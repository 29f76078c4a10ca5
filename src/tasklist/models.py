"""Task model and serialisation helpers."""

from __future__ import annotations

import random
import string
from collections.abc import Iterable
from datetime import datetime, timezone
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator

Priority = Literal["low", "medium", "high"]
SortKey = Literal["date", "title", "priority", "status"]

PRIORITIES: tuple[str, ...] = ("low", "medium", "high")
SORT_KEYS: tuple[str, ...] = ("date", "title", "priority", "status")

# Lower rank sorts first
PRIORITY_RANK: dict[str, int] = {"high": 0, "medium": 1, "low": 2}

ID_ALPHABET = string.digits + string.ascii_lowercase
ID_LENGTH = 9


class Task(BaseModel):
    """A single task.

    camelCase keys (``createdAt``) match the stored layout.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    title: str
    completed: bool = False
    priority: Priority = "medium"
    created_at: datetime = Field(alias="createdAt")

    @field_validator("created_at")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    def toggled(self) -> Task:
        """Return a copy with ``completed`` flipped."""
        return self.model_copy(update={"completed": not self.completed})


_TASK_LIST = TypeAdapter(list[Task])


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def generate_task_id() -> str:
    """Generate a short pseudo-random base-36 id.

    Collisions are possible and not checked.
    """
    return "".join(random.choices(ID_ALPHABET, k=ID_LENGTH))


def dump_tasks(tasks: Iterable[Task]) -> list[dict[str, Any]]:
    """Convert tasks to JSON-ready dicts using the stored key names."""
    return [task.model_dump(mode="json", by_alias=True) for task in tasks]


def parse_tasks(raw: Any) -> tuple[Task, ...]:
    """Validate a stored task array.

    Raises:
        pydantic.ValidationError: If ``raw`` is not a list of valid task records.
    """
    return tuple(_TASK_LIST.validate_python(raw))
