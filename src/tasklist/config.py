"""Configuration models for tasklist."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field

# Default config directory
TASKLIST_DIR = Path(".tasklist")
CONFIG_FILE = TASKLIST_DIR / "config.json"
TASKS_FILE = TASKLIST_DIR / "tasks.json"


class StorageConfig(BaseModel):
    """Configuration for the task storage slot."""

    path: str = str(TASKS_FILE)
    key: str = "tasks"


class TasklistConfig(BaseModel):
    """Main configuration for tasklist."""

    storage: StorageConfig = Field(default_factory=StorageConfig)
    notice_seconds: float = Field(default=2.0, gt=0)
    default_sort: Literal["date", "title", "priority", "status"] = "date"
    default_priority: Literal["low", "medium", "high"] = "medium"

    @classmethod
    def load(cls, path: Path | None = None) -> TasklistConfig:
        """Load configuration from file or return defaults."""
        if path is None:
            path = CONFIG_FILE

        if not path.exists():
            return cls()

        with open(path) as f:
            data = json.load(f)

        return cls.model_validate(data)

    def save(self, path: Path | None = None) -> None:
        """Save configuration to file."""
        if path is None:
            path = CONFIG_FILE

        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w") as f:
            json.dump(self.model_dump(), f, indent=2)
